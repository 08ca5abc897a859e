from __future__ import annotations

import logging

from ..logging_config import log_structured_error
from .internal import (
    AlreadyConnectedError,
    ClientError,
    ConnectFailure,
    NotConnectedError,
    TransportFailure,
    UsageError,
)


def error_type_for(error: Exception) -> str:
    """Map an exception to the structured logging category it is counted under."""
    if isinstance(error, ConnectFailure | TransportFailure | OSError | ConnectionError):
        return "network"
    if isinstance(error, AlreadyConnectedError | NotConnectedError):
        return "state"
    if isinstance(error, UsageError):
        return "usage"
    if isinstance(error, ClientError):
        return "internal"
    return "unknown"


def log_error(
    message: str,
    error: Exception,
    context: dict | None = None,
    level: int = logging.ERROR,
) -> None:
    """Logs an error message with the associated exception details.

    This function formats and logs an error message along with the string
    representation of the exception using structured logging for better
    error tracking and aggregation.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
        level: Logging level for the record.

    Returns:
        None
    """
    merged = dict(getattr(error, "data", None) or {})
    if context:
        merged.update(context)
    log_structured_error(
        error_type=error_type_for(error),
        message=f"{message}: {str(error)}",
        exception=error,
        context=merged or None,
        level=level,
    )
