"""Reader loop: pulls lines off the transport and hands them to the dispatcher."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from ..constants import WIRE_ENCODING
from ..errors import log_error
from ..events import ErrorEvent, EventSink
from .models import Session

if TYPE_CHECKING:  # pragma: no cover
    from .connection import ConnectionManager


class ReaderLoop:
    """Reads one line at a time and handles it fully before reading the next.

    Every exit path closes the connection, so a dropped transport is never
    left half-open.
    """

    def __init__(
        self,
        session: Session,
        reader: asyncio.StreamReader,
        connection: ConnectionManager,
        sink: EventSink,
        handler: Callable[[str], Awaitable[None]] | None,
        generation: int | None = None,
    ) -> None:
        self.session = session
        self.reader = reader
        self.connection = connection
        self.sink = sink
        self.handler = handler
        self.generation = generation
        self.lines_read = 0

    def is_current(self) -> bool:
        """True while connected and no newer connection has replaced ours."""
        if not self.session.connected:
            return False
        return self.generation is None or self.generation == self.connection.generation

    async def run(self) -> None:
        logging.debug("👂 Reader loop started")
        try:
            while self.is_current():
                try:
                    data = await self.reader.readline()
                except (OSError, ValueError) as e:
                    self._report_read_failure(e)
                    break
                if not data:
                    logging.debug("📭 Server closed the stream")
                    break
                self.lines_read += 1
                await self._dispatch(decode_line(data))
        finally:
            logging.debug(f"👂 Reader loop stopped lines={self.lines_read}")
            await self.connection.close(self.generation)

    def _report_read_failure(self, error: Exception) -> None:
        if not self.is_current():
            # expected while a deliberate close is in progress
            logging.debug(f"📭 Read ended during shutdown: {type(error).__name__}")
            return
        log_error("Connection lost", error, level=logging.WARNING)
        self.sink.emit(ErrorEvent(f"Connection lost: {error}"))

    async def _dispatch(self, line: str) -> None:
        if self.handler is None:
            logging.debug(f"⬅️ Unhandled line={line!r}")
            return
        try:
            await self.handler(line)
        except Exception as e:  # noqa: BLE001
            log_error("Failed to handle server line", e, context={"line": line[:120]})


def decode_line(data: bytes) -> str:
    """Decode one received line and strip its terminator."""
    return data.decode(WIRE_ENCODING, errors="replace").rstrip("\r\n")
