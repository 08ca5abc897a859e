"""Structured render events produced by the client core.

The core never prints. It hands these records to an ``EventSink`` and the
console renderer (or a test double) decides how they look.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class ChatMessage:
    nick: str
    target: str
    text: str


@dataclass(frozen=True, slots=True)
class OwnMessage:
    """Outgoing PRIVMSG echoed locally as if spoken by the local user."""

    nick: str
    target: str
    text: str


@dataclass(frozen=True, slots=True)
class ActionMessage:
    nick: str
    target: str
    text: str


@dataclass(frozen=True, slots=True)
class CtcpMessage:
    nick: str
    target: str
    body: str


@dataclass(frozen=True, slots=True)
class JoinEvent:
    nick: str
    channel: str


@dataclass(frozen=True, slots=True)
class PartEvent:
    nick: str
    channel: str
    reason: str | None = None


@dataclass(frozen=True, slots=True)
class QuitEvent:
    nick: str
    reason: str | None = None


@dataclass(frozen=True, slots=True)
class NickEvent:
    old_nick: str
    new_nick: str


@dataclass(frozen=True, slots=True)
class NoticeEvent:
    source: str
    text: str


@dataclass(frozen=True, slots=True)
class ServerLine:
    """Fallback for numerics and anything without a dedicated event."""

    raw: str


@dataclass(frozen=True, slots=True)
class Notification:
    channel: str
    message: str


@dataclass(frozen=True, slots=True)
class StatusEvent:
    text: str


@dataclass(frozen=True, slots=True)
class ErrorEvent:
    text: str


Event = (
    ChatMessage
    | OwnMessage
    | ActionMessage
    | CtcpMessage
    | JoinEvent
    | PartEvent
    | QuitEvent
    | NickEvent
    | NoticeEvent
    | ServerLine
    | Notification
    | StatusEvent
    | ErrorEvent
)


class EventSink(Protocol):
    """Anything that can render client events."""

    def emit(self, event: Event) -> None:
        """Render or record one event."""
        ...


class RecordingSink:
    """EventSink that keeps every event in order; used by tests and tools."""

    def __init__(self) -> None:
        self.events: list[Event] = []

    def emit(self, event: Event) -> None:
        self.events.append(event)

    def of_type(self, kind: type) -> list[Event]:
        return [e for e in self.events if isinstance(e, kind)]

    def clear(self) -> None:
        self.events.clear()
