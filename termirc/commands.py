"""User-command dispatch.

``CommandDispatcher`` is the one place user input turns into protocol lines
and session changes. Server lines are forwarded to ``IRCDispatcher``.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from .constants import COMMAND_MARKER, DEFAULT_IRC_PORT, DEFAULT_QUIT_REASON
from .errors import (
    ClientError,
    ConnectFailure,
    NotConnectedError,
    TransportFailure,
    UsageError,
    log_error,
)
from .events import ErrorEvent, EventSink, OwnMessage, StatusEvent
from .irc.connection import ConnectionManager
from .irc.dispatcher import IRCDispatcher
from .irc.models import Session

HELP_LINES = (
    "Commands:",
    " /server host [port]      - Connect to an IRC server (default port 6667)",
    " /nick <nick>             - Change your nickname",
    " /join #channel           - Join a channel",
    " /part #channel [reason]  - Part a channel",
    " /msg <target> <message>  - Send a PRIVMSG to a target (nick or #channel)",
    " /topic #channel <topic>  - Set channel topic",
    " /names #channel          - Request NAMES for a channel",
    " /list                    - Request channel list",
    " /whois <nick>            - WHOIS a nick",
    " /raw <raw line...>       - Send a raw IRC protocol line",
    " /current                 - Show current message target",
    " /serverinfo              - Show connected server info",
    " /quit [message]          - Quit and disconnect",
    "Plain text lines (not starting with /) send PRIVMSG to the current target.",
)

NOT_CONNECTED = "Not connected. Use /server to connect first."

CommandHandler = Callable[[str], Awaitable[bool]]


def split_args(line: str, maxsplit: int = -1) -> list[str]:
    """Split a command line on whitespace; the last piece keeps inner spacing."""
    return line.split(maxsplit=maxsplit)


class CommandDispatcher:
    """Maps typed commands to connection actions and session updates.

    Every command checks its argument count before anything else; a usage
    error sends nothing and changes nothing. Handlers return False only when
    the shell should stop reading input.
    """

    def __init__(
        self,
        session: Session,
        connection: ConnectionManager,
        sink: EventSink,
        default_port: int = DEFAULT_IRC_PORT,
    ) -> None:
        self.session = session
        self.connection = connection
        self.sink = sink
        self.default_port = default_port
        self.server = IRCDispatcher(session, connection, sink)
        connection.set_line_handler(self.handle_server_line)
        self._commands: dict[str, CommandHandler] = {
            "/help": self.cmd_help,
            "/server": self.cmd_server,
            "/nick": self.cmd_nick,
            "/join": self.cmd_join,
            "/part": self.cmd_part,
            "/msg": self.cmd_msg,
            "/quit": self.cmd_quit,
            "/topic": self.cmd_topic,
            "/names": self.cmd_names,
            "/list": self.cmd_list,
            "/whois": self.cmd_whois,
            "/raw": self.cmd_raw,
            "/current": self.cmd_current,
            "/serverinfo": self.cmd_serverinfo,
        }

    async def handle_server_line(self, raw_line: str) -> None:
        await self.server.handle_line(raw_line)

    async def handle_input(self, line: str) -> bool:
        """Handle one line of user input.

        Returns:
            False when the user quit, True otherwise.
        """
        line = line.strip()
        if not line:
            return True
        try:
            if line.startswith(COMMAND_MARKER):
                return await self._run_command(line)
            await self.send_plain_text(line)
        except ClientError as e:
            self.report_error(e)
        return True

    async def _run_command(self, line: str) -> bool:
        name = split_args(line, 1)[0].lower()
        handler = self._commands.get(name)
        if handler is None:
            raise UsageError(f"Unknown command: {name}. Type /help for commands.")
        return await handler(line)

    def report_error(self, error: ClientError) -> None:
        if isinstance(error, ConnectFailure | TransportFailure):
            log_error("Command failed", error, level=logging.WARNING)
        else:
            logging.debug(f"🙅 {type(error).__name__}: {error}")
        self.sink.emit(ErrorEvent(str(error)))

    def _require_connected(self) -> None:
        if not self.session.connected:
            raise NotConnectedError(NOT_CONNECTED)

    async def send_plain_text(self, text: str) -> None:
        if not self.session.connected:
            raise NotConnectedError("Not connected. Use /server host [port] to connect.")
        if not self.session.current_target:
            raise UsageError(
                "No current target. Join a channel (/join #chan) or /msg nick message"
            )
        await self.send_privmsg(self.session.current_target, text)

    async def send_privmsg(self, target: str, text: str) -> None:
        await self.connection.send(f"PRIVMSG {target} :{text}")
        self.sink.emit(OwnMessage(self.session.nickname, target, text))

    async def cmd_help(self, line: str) -> bool:
        for help_line in HELP_LINES:
            self.sink.emit(StatusEvent(help_line))
        return True

    async def cmd_server(self, line: str) -> bool:
        parts = split_args(line)
        if len(parts) < 2:
            raise UsageError("Usage: /server host [port]")
        host = parts[1]
        port = self.default_port
        if len(parts) >= 3:
            try:
                port = int(parts[2])
            except ValueError as e:
                raise UsageError("Invalid number format.") from e
            if not 0 < port < 65536:
                raise UsageError(f"Invalid port: {port}")
        await self.connection.connect(host, port)
        return True

    async def cmd_nick(self, line: str) -> bool:
        parts = split_args(line)
        if len(parts) < 2:
            raise UsageError("Usage: /nick <newnick>")
        new_nick = parts[1]
        if self.session.connected:
            await self.connection.send(f"NICK {new_nick}")
            # applied without waiting for the server to confirm
            self.session.nickname = new_nick
        else:
            self.session.nickname = new_nick
            self.sink.emit(
                StatusEvent(f"Nick set to {new_nick}. It will be used when connecting.")
            )
        return True

    async def cmd_join(self, line: str) -> bool:
        parts = split_args(line)
        if len(parts) < 2:
            raise UsageError("Usage: /join #channel")
        self._require_connected()
        channel = parts[1]
        await self.connection.send(f"JOIN {channel}")
        self.session.current_target = channel
        return True

    async def cmd_part(self, line: str) -> bool:
        parts = split_args(line, 2)
        if len(parts) < 2:
            raise UsageError("Usage: /part #channel [reason]")
        self._require_connected()
        channel = parts[1]
        reason = parts[2] if len(parts) > 2 else ""
        if reason:
            await self.connection.send(f"PART {channel} :{reason}")
        else:
            await self.connection.send(f"PART {channel}")
        self.session.clear_target_if(channel)
        return True

    async def cmd_msg(self, line: str) -> bool:
        parts = split_args(line, 2)
        if len(parts) < 3:
            raise UsageError("Usage: /msg <nick|#channel> <message...>")
        self._require_connected()
        target, text = parts[1], parts[2]
        await self.send_privmsg(target, text)
        self.session.current_target = target
        return True

    async def cmd_quit(self, line: str) -> bool:
        parts = split_args(line, 1)
        reason = parts[1] if len(parts) > 1 else DEFAULT_QUIT_REASON
        if not self.session.connected:
            self.sink.emit(StatusEvent("Not connected."))
            await self.connection.close()
            return False
        try:
            await self.connection.send(f"QUIT :{reason}")
        except ClientError as e:
            self.report_error(e)
        await self.connection.close()
        return False

    async def cmd_topic(self, line: str) -> bool:
        parts = split_args(line, 2)
        if len(parts) < 3:
            raise UsageError("Usage: /topic <#channel> <topic...>")
        self._require_connected()
        await self.connection.send(f"TOPIC {parts[1]} :{parts[2]}")
        return True

    async def cmd_names(self, line: str) -> bool:
        parts = split_args(line)
        if len(parts) < 2:
            raise UsageError("Usage: /names #channel")
        self._require_connected()
        await self.connection.send(f"NAMES {parts[1]}")
        return True

    async def cmd_list(self, line: str) -> bool:
        self._require_connected()
        await self.connection.send("LIST")
        return True

    async def cmd_whois(self, line: str) -> bool:
        parts = split_args(line)
        if len(parts) < 2:
            raise UsageError("Usage: /whois <nick>")
        self._require_connected()
        await self.connection.send(f"WHOIS {parts[1]}")
        return True

    async def cmd_raw(self, line: str) -> bool:
        parts = split_args(line, 1)
        if len(parts) < 2:
            raise UsageError("Usage: /raw <raw IRC line...>")
        self._require_connected()
        await self.connection.send(parts[1])
        return True

    async def cmd_current(self, line: str) -> bool:
        target = self.session.current_target or "(none)"
        self.sink.emit(StatusEvent(f"Current target: {target}"))
        return True

    async def cmd_serverinfo(self, line: str) -> bool:
        if self.session.connected:
            self.sink.emit(
                StatusEvent(
                    f"Connected to {self.session.server_host}:{self.session.server_port}"
                    f" as {self.session.nickname}"
                )
            )
        else:
            self.sink.emit(StatusEvent("Not connected."))
        return True
