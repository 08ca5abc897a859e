"""Terminal rendering for client events."""

from .console import ConsoleRenderer  # noqa: F401

__all__ = ["ConsoleRenderer"]
