"""Error hierarchy and error logging helpers."""

from .handling import log_error  # noqa: F401
from .internal import (  # noqa: F401
    AlreadyConnectedError,
    ClientError,
    ConnectFailure,
    NotConnectedError,
    TransportFailure,
    UsageError,
)

__all__ = [
    "ClientError",
    "AlreadyConnectedError",
    "NotConnectedError",
    "ConnectFailure",
    "TransportFailure",
    "UsageError",
    "log_error",
]
