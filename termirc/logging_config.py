r"""
Logging configuration module for the terminal IRC client.

Provides a configurable logging setup using the colorlog library with
structured error logging and aggregation. Diagnostic logging goes to stderr;
chat output is rendered separately and never passes through here.
"""

import atexit
import logging
import os
import sys
import threading
import time
from collections import defaultdict
from typing import Any

import colorlog

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


class ErrorAggregator:
    """Aggregates error occurrences per category for an end-of-session summary."""

    def __init__(self):
        self.errors: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self.lock = threading.Lock()
        self.start_time = time.time()

    def record_error(self, error_type: str, message: str, context: dict[str, Any] = None) -> None:
        """Record an error occurrence with context."""
        with self.lock:
            error_entry = {
                "timestamp": time.time(),
                "message": message,
                "context": context or {},
            }
            self.errors[error_type].append(error_entry)

            # Keep only recent errors (last 100 per type)
            if len(self.errors[error_type]) > 100:
                self.errors[error_type] = self.errors[error_type][-100:]

    def get_error_summary(self) -> dict[str, Any]:
        """Get a summary of error counts per category."""
        with self.lock:
            return {
                error_type: {
                    "total_count": len(occurrences),
                    "last_occurrence": occurrences[-1] if occurrences else None,
                }
                for error_type, occurrences in self.errors.items()
            }

    def clear(self) -> None:
        with self.lock:
            self.errors.clear()

    def log_summary_report(self) -> None:
        """Log a summary report of error patterns, if any were recorded."""
        summary = self.get_error_summary()
        if not summary:
            return

        logging.info("📊 Error summary for this session")
        for error_type, stats in summary.items():
            logging.info(f"  {error_type}: {stats['total_count']} total")
            if stats["last_occurrence"]:
                logging.info(f"    Last: {stats['last_occurrence']['message']}")


# Global error aggregator instance
error_aggregator = ErrorAggregator()


def log_structured_error(
    error_type: str,
    message: str,
    exception: Exception = None,
    context: dict[str, Any] = None,
    level: int = logging.ERROR
) -> None:
    """Log an error with structured context and aggregation.

    Args:
        error_type: Category of the error (e.g., 'network', 'state', 'usage')
        message: Descriptive error message
        exception: The exception that occurred (optional)
        context: Additional context data for debugging
        level: Logging level (default: ERROR)
    """
    structured_message = f"[{error_type.upper()}] {message}"

    if exception:
        structured_message += f" | Exception: {type(exception).__name__}"

    if context:
        context_str = " | ".join(f"{k}={v}" for k, v in context.items())
        structured_message += f" | Context: {context_str}"

    logging.log(level, structured_message)

    error_aggregator.record_error(error_type, message, context)


def resolve_log_level(name: str | None = None) -> int:
    """Return the numeric level for ``name``; the DEBUG env var forces DEBUG."""
    debug_env = os.environ.get("DEBUG", "").lower()
    if debug_env in ("true", "1", "yes"):
        return logging.DEBUG
    if not name:
        return logging.WARNING
    return LOG_LEVELS.get(name.upper(), logging.WARNING)


class LoggerConfigurator:
    """Handles logging configuration cleanly using colorlog.

    Supports environment variable configuration for log levels.
    """

    def __init__(self, level: str | None = None, use_color: bool = True):
        """Initialize the configurator.

        Args:
            level: Level name from configuration; ``DEBUG`` env var overrides it.
            use_color: Whether the formatter emits ANSI color codes.
        """
        self.level = level
        self.use_color = use_color
        self._exit_hook_registered = False

    def build_formatter(self) -> logging.Formatter:
        return colorlog.ColoredFormatter(
            "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s %(message_log_color)s%(message)s",
            datefmt="%H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "magenta",
            },
            secondary_log_colors={
                "message": {
                    "ERROR": "red",
                    "CRITICAL": "magenta",
                }
            },
            reset=True,
            no_color=not self.use_color,
        )

    def configure(self) -> int:
        """Configure the root logger with a colored stderr handler.

        Returns:
            The numeric level that was applied.
        """
        log_level = resolve_log_level(self.level)

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(self.build_formatter())

        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.addHandler(handler)
        root_logger.setLevel(log_level)

        # asyncio reports "socket.send() raised exception" noise after teardown
        logging.getLogger("asyncio").setLevel(max(log_level, logging.WARNING))

        if not self._exit_hook_registered:
            atexit.register(self._log_final_error_summary)
            self._exit_hook_registered = True
        return log_level

    def _log_final_error_summary(self):
        """Log final error summary on application exit."""
        try:
            error_aggregator.log_summary_report()
        except Exception as e:  # noqa: BLE001
            logging.error(f"Failed to log final error summary: {e}")
