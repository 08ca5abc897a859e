"""Centralized client error hierarchy.

These exceptions give semantic categories to the failures the command layer
reports back to the user. Only raise these at the connection/command
boundary: raw ``OSError`` / ``TimeoutError`` from asyncio streams are wrapped
before they reach the dispatcher.

Classes:
  ClientError            – Base for all client errors.
  AlreadyConnectedError  – Connect attempted while a session is active.
  NotConnectedError      – Operation needs a transport that does not exist.
  ConnectFailure         – Timeout or refusal while opening the transport.
  TransportFailure       – Read or write failed mid-session.
  UsageError             – Malformed user command arguments.

Malformed server lines are never raised; the parser marks them on the
returned message instead.
"""

from __future__ import annotations

from collections.abc import Mapping


class ClientError(Exception):
    """Base class for all client errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message, shown to the user as-is.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class AlreadyConnectedError(ClientError):
    """Raised when connect is attempted while a session is already active.

    No state changes; the existing connection is left untouched.
    """


class NotConnectedError(ClientError):
    """Raised when an operation requiring a transport runs without one."""


class ConnectFailure(ClientError):
    """Raised when the transport cannot be established.

    Covers connect timeouts, refusals and name resolution failures. The
    session is guaranteed to be in the not-connected state when this is raised.
    """


class TransportFailure(ClientError):
    """Raised when a write fails mid-session.

    The connection has already been torn down by the time this propagates.
    """


class UsageError(ClientError):
    """Raised for malformed user command arguments.

    Nothing is sent to the server and no state changes.
    """


__all__ = [
    "ClientError",
    "AlreadyConnectedError",
    "NotConnectedError",
    "ConnectFailure",
    "TransportFailure",
    "UsageError",
]
