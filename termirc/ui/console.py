"""Console rendering of client events."""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable
from datetime import datetime
from typing import TextIO

from ..color_utils import nick_color_index
from ..events import (
    ActionMessage,
    ChatMessage,
    CtcpMessage,
    ErrorEvent,
    Event,
    JoinEvent,
    NickEvent,
    Notification,
    NoticeEvent,
    OwnMessage,
    PartEvent,
    QuitEvent,
    ServerLine,
    StatusEvent,
)
from .colors import BELL, NICK_PALETTE, bcolors


class ConsoleRenderer:
    """EventSink that prints one line per event.

    Output from the reader loop and the command loop goes through one lock
    so lines never interleave.
    """

    def __init__(
        self,
        out: TextIO | None = None,
        err: TextIO | None = None,
        colors: bool = True,
        bell: bool = False,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.out = out or sys.stdout
        self.err = err or sys.stderr
        self.colors = colors
        self.bell = bell
        self.clock = clock
        self._lock = threading.Lock()

    def emit(self, event: Event) -> None:
        if isinstance(event, Notification):
            if self.bell:
                self._write(self.out, BELL, newline=False)
            return
        if isinstance(event, ErrorEvent):
            self._write(self.err, self._paint(event.text, bcolors.RED, bcolors.BOLD))
            return
        self._write(self.out, self.format(event))

    def format(self, event: Event) -> str:  # noqa: C901 - one branch per event
        if isinstance(event, ChatMessage):
            target = (
                self._paint(event.target, bcolors.BLUE)
                if event.target.startswith("#")
                else event.target
            )
            return f"{self._stamp()} <{self.nick(event.nick)}@{target}> {event.text}"
        if isinstance(event, OwnMessage):
            return f"{self._stamp()} <{self.nick(event.nick)}> {event.text}"
        if isinstance(event, ActionMessage):
            return f"{self._stamp()} * {self.nick(event.nick)} {event.text}"
        if isinstance(event, CtcpMessage):
            return self._paint(f"[CTCP from {event.nick}] {event.body}", bcolors.MAGENTA)
        if isinstance(event, JoinEvent):
            return self._paint(f"*** {self.nick(event.nick)} joined {event.channel}", bcolors.GREEN)
        if isinstance(event, PartEvent):
            reason = f" ({event.reason})" if event.reason else ""
            return self._paint(
                f"*** {self.nick(event.nick)} left {event.channel}{reason}", bcolors.RED
            )
        if isinstance(event, QuitEvent):
            reason = f" ({event.reason})" if event.reason else ""
            return self._paint(f"*** {self.nick(event.nick)} quit{reason}", bcolors.RED)
        if isinstance(event, NickEvent):
            return self._paint(
                f"*** {self.nick(event.old_nick)} is now known as {event.new_nick}",
                bcolors.YELLOW,
            )
        if isinstance(event, NoticeEvent):
            return self._paint(f"-{event.source}- {event.text}", bcolors.GRAY)
        if isinstance(event, ServerLine):
            return self._paint(f"[server] {event.raw}", bcolors.DIM, bcolors.GRAY)
        if isinstance(event, StatusEvent):
            return event.text
        return str(event)

    def nick(self, nick: str) -> str:
        if not self.colors:
            return nick
        color = NICK_PALETTE[nick_color_index(nick, len(NICK_PALETTE))]
        return f"{color}{nick}{bcolors.RESET}"

    def _stamp(self) -> str:
        return self._paint(f"[{self.clock().strftime('%H:%M')}]", bcolors.GRAY)

    def _paint(self, text: str, *codes: str) -> str:
        if not self.colors:
            return text
        return f"{''.join(codes)}{text}{bcolors.RESET}"

    def _write(self, stream: TextIO, text: str, newline: bool = True) -> None:
        with self._lock:
            stream.write(f"{text}\n" if newline else text)
            stream.flush()
