"""IRC subsystem package.

Contains parsing, session state, the connection manager, the reader loop
and server-message dispatch.
"""

from .connection import ConnectionManager  # noqa: F401
from .dispatcher import IRCDispatcher  # noqa: F401
from .models import AtomicFlag, Session  # noqa: F401
from .parser import IncomingMessage, parse_irc_message, pong_token  # noqa: F401
from .reader import ReaderLoop  # noqa: F401

__all__ = [
    "AtomicFlag",
    "ConnectionManager",
    "IRCDispatcher",
    "IncomingMessage",
    "ReaderLoop",
    "Session",
    "parse_irc_message",
    "pong_token",
]
