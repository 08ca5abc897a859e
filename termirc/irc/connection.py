"""Transport ownership: connect, registration, serialized writes and teardown."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from ..constants import (
    CONNECT_TIMEOUT_SECONDS,
    LINE_TERMINATOR,
    QUIT_NOTIFY_TIMEOUT_SECONDS,
    READ_LINE_LIMIT_BYTES,
    WIRE_ENCODING,
)
from ..errors import (
    AlreadyConnectedError,
    ConnectFailure,
    NotConnectedError,
    TransportFailure,
)
from ..events import EventSink, StatusEvent
from .models import Session
from .reader import ReaderLoop

LineHandler = Callable[[str], Awaitable[None]]


class ConnectionManager:
    """Owns the stream pair of the single server connection.

    ``send`` may be called from the command loop and from the reader loop
    (PING replies); the write and flush of one line happen under one lock.
    ``close`` is idempotent: the ``connected`` check-and-clear decides which
    caller performs teardown.
    """

    def __init__(
        self,
        session: Session,
        sink: EventSink,
        connect_timeout: float = CONNECT_TIMEOUT_SECONDS,
    ) -> None:
        self.session = session
        self.sink = sink
        self.connect_timeout = connect_timeout
        self.reader: asyncio.StreamReader | None = None
        self.writer: asyncio.StreamWriter | None = None
        self.reader_task: asyncio.Task[None] | None = None
        self.line_handler: LineHandler | None = None
        self._write_lock = asyncio.Lock()
        self.generation = 0

    def set_line_handler(self, handler: LineHandler) -> None:
        self.line_handler = handler

    async def connect(self, host: str, port: int) -> None:
        """Open the transport, register and start reading.

        Raises:
            AlreadyConnectedError: A session is already active.
            ConnectFailure: The transport could not be opened or registration
                could not be written; the session is left disconnected.
        """
        if self.session.connected:
            raise AlreadyConnectedError(
                "Already connected. Please /quit first if you want to connect elsewhere.",
                data={"host": self.session.server_host, "port": self.session.server_port},
            )

        self.sink.emit(StatusEvent(f"Connecting to {host}:{port} ..."))
        logging.debug(f"🔌 Opening connection host={host} port={port} timeout={self.connect_timeout}")
        try:
            reader, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port, limit=READ_LINE_LIMIT_BYTES),
                timeout=self.connect_timeout,
            )
        except TimeoutError as e:
            raise ConnectFailure(
                f"Connection failed: timed out after {self.connect_timeout:g}s",
                data={"host": host, "port": port},
            ) from e
        except (OSError, UnicodeError) as e:
            # UnicodeError: host name the IDNA codec rejects (empty or >63-char label)
            raise ConnectFailure(
                f"Connection failed: {e}", data={"host": host, "port": port}
            ) from e

        self.reader = reader
        self.writer = writer
        self.session.server_host = host
        self.session.server_port = port
        self.generation += 1
        self.session.connected_flag.set()
        self._start_reader(reader)

        nickname = self.session.nickname
        try:
            await self.send(f"NICK {nickname}")
            await self.send(f"USER {self.session.user} 0 * :{self.session.realname}")
        except (TransportFailure, NotConnectedError) as e:
            raise ConnectFailure(
                f"Connection failed during registration: {e}",
                data={"host": host, "port": port},
            ) from e

        logging.info(f"✅ Connected host={host} port={port} nick={nickname}")
        self.sink.emit(
            StatusEvent(f"Connected. Registered as {nickname}. Use /join to enter channels.")
        )

    def _start_reader(self, reader: asyncio.StreamReader) -> None:
        loop = ReaderLoop(
            self.session,
            reader,
            self,
            self.sink,
            self.line_handler,
            generation=self.generation,
        )
        self.reader_task = asyncio.create_task(loop.run(), name="irc-reader")

    async def send(self, line: str) -> None:
        """Write one protocol line plus CRLF and flush it.

        Raises:
            NotConnectedError: No active session.
            TransportFailure: The write failed; the connection is already closed.
        """
        if not self.session.connected:
            raise NotConnectedError(f"Not connected. Can't send: {line}")

        failure: Exception | None = None
        async with self._write_lock:
            writer = self.writer
            if writer is None or not self.session.connected:
                raise NotConnectedError(f"Not connected. Can't send: {line}")
            try:
                writer.write(f"{line}{LINE_TERMINATOR}".encode(WIRE_ENCODING))
                await writer.drain()
            except (OSError, RuntimeError) as e:
                failure = e
            else:
                logging.debug(f"➡️ Sent line={line!r}")

        if failure is not None:
            logging.warning(f"💥 Write failed error={type(failure).__name__}: {failure}")
            await self.close()
            raise TransportFailure(f"Failed to send: {failure}") from failure

    async def close(self, generation: int | None = None) -> bool:
        """Tear the connection down once.

        Args:
            generation: Connection the caller belongs to. A reader from an
                earlier connection passes its own number and is ignored.

        Returns:
            True for the call that performed teardown, False for every later call.
        """
        if generation is not None and generation != self.generation:
            logging.debug(f"🧹 Stale close ignored generation={generation} current={self.generation}")
            return False
        if not self.session.connected_flag.clear_if_set():
            return False

        writer = self.writer
        self.writer = None
        self.reader = None
        if writer is not None:
            try:
                writer.close()
                await asyncio.wait_for(
                    writer.wait_closed(), timeout=QUIT_NOTIFY_TIMEOUT_SECONDS
                )
            except (OSError, RuntimeError, TimeoutError) as e:
                logging.debug(f"🧹 Ignored error while closing transport: {type(e).__name__}: {e}")

        logging.info(
            f"🔌 Disconnected host={self.session.server_host} port={self.session.server_port}"
        )
        self.sink.emit(StatusEvent("Disconnected."))
        return True

    async def quit(self, reason: str, timeout: float = QUIT_NOTIFY_TIMEOUT_SECONDS) -> None:
        """Best-effort ``QUIT`` followed by close; never blocks past ``timeout``."""
        if self.session.connected:
            try:
                await asyncio.wait_for(self.send(f"QUIT :{reason}"), timeout=timeout)
            except TimeoutError:
                logging.warning(f"⏱️ QUIT not flushed within {timeout:g}s, closing anyway")
            except (NotConnectedError, TransportFailure) as e:
                logging.debug(f"🚪 QUIT skipped: {e}")
        await self.close()

    async def wait_reader_stopped(self, timeout: float | None = None) -> None:
        task = self.reader_task
        if task is None or task.done():
            return
        try:
            await asyncio.wait_for(asyncio.shield(task), timeout=timeout)
        except TimeoutError:
            logging.warning("⏱️ Reader did not stop in time, cancelling")
            task.cancel()
