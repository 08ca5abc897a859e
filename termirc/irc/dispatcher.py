"""Server-message dispatch: turns parsed lines into render events."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from ..errors import ClientError, log_error
from ..events import (
    ActionMessage,
    ChatMessage,
    CtcpMessage,
    ErrorEvent,
    EventSink,
    JoinEvent,
    NickEvent,
    Notification,
    NoticeEvent,
    PartEvent,
    QuitEvent,
    ServerLine,
)
from .parser import (
    IncomingMessage,
    action_text,
    ctcp_body,
    is_ctcp,
    parse_irc_message,
    pong_token,
)

if TYPE_CHECKING:  # pragma: no cover
    from .connection import ConnectionManager
    from .models import Session

UNKNOWN_NICK = "?"


class IRCDispatcher:
    """Handles lines coming from the server, one at a time.

    Only PING touches the transport (the PONG reply). Membership and nick
    changes are rendered but do not change session state.
    """

    def __init__(
        self, session: Session, connection: ConnectionManager, sink: EventSink
    ) -> None:
        self.session = session
        self.connection = connection
        self.sink = sink
        self._handlers: dict[str, Callable[[IncomingMessage], bool]] = {
            "PRIVMSG": self._handle_privmsg,
            "JOIN": self._handle_join,
            "PART": self._handle_part,
            "QUIT": self._handle_quit,
            "NICK": self._handle_nick,
            "NOTICE": self._handle_notice,
        }

    async def handle_line(self, raw_line: str) -> None:
        token = pong_token(raw_line)
        if token is not None:
            await self._handle_ping(token)
            return
        logging.debug(f"⬅️ Received raw={raw_line!r}")
        self.handle_message(parse_irc_message(raw_line))

    def handle_message(self, message: IncomingMessage) -> None:
        if message.malformed:
            logging.debug(f"🧩 Malformed line recovered raw={message.raw!r}")
        handler = self._handlers.get(message.command.upper())
        if handler is None or not handler(message):
            self.sink.emit(ServerLine(message.raw))

    async def _handle_ping(self, token: str) -> None:
        try:
            await self.connection.send(f"PONG {token}")
        except ClientError as e:
            log_error("PONG reply failed", e, level=logging.WARNING)
            self.sink.emit(ErrorEvent(str(e)))
            return
        logging.debug(f"🏓 PING -> PONG token={token!r}")

    def _handle_privmsg(self, message: IncomingMessage) -> bool:
        if len(message.params) < 2:
            return False
        target, text = message.params[0], message.params[-1]
        nick = message.nick or UNKNOWN_NICK
        if is_ctcp(text):
            body = ctcp_body(text)
            emote = action_text(body)
            if emote is not None:
                self.sink.emit(ActionMessage(nick, target, emote))
            else:
                self.sink.emit(CtcpMessage(nick, target, body))
            return True
        self.sink.emit(ChatMessage(nick, target, text))
        self.sink.emit(Notification(target, f"<{nick}> {text}"))
        return True

    def _handle_join(self, message: IncomingMessage) -> bool:
        if not message.params:
            return False
        self.sink.emit(JoinEvent(message.nick or UNKNOWN_NICK, message.params[0]))
        return True

    def _handle_part(self, message: IncomingMessage) -> bool:
        if not message.params:
            return False
        reason = message.params[1] if len(message.params) > 1 else None
        self.sink.emit(
            PartEvent(message.nick or UNKNOWN_NICK, message.params[0], reason or None)
        )
        return True

    def _handle_quit(self, message: IncomingMessage) -> bool:
        reason = message.params[0] if message.params else None
        self.sink.emit(QuitEvent(message.nick or UNKNOWN_NICK, reason or None))
        return True

    def _handle_nick(self, message: IncomingMessage) -> bool:
        if not message.params:
            return False
        self.sink.emit(NickEvent(message.nick or UNKNOWN_NICK, message.params[0]))
        return True

    def _handle_notice(self, message: IncomingMessage) -> bool:
        if len(message.params) < 2:
            return False
        self.sink.emit(NoticeEvent(message.nick or "server", message.params[-1]))
        return True
