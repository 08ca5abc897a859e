"""Foreground command loop."""

from __future__ import annotations

import asyncio
import logging
import sys
import threading
from collections.abc import Awaitable, Callable
from typing import TextIO

from .commands import CommandDispatcher
from .constants import DEFAULT_SHUTDOWN_QUIT_MESSAGE, QUIT_NOTIFY_TIMEOUT_SECONDS
from .events import EventSink, StatusEvent
from .irc.connection import ConnectionManager

BANNER = (
    "Terminal IRC client - commands: /server, /nick, /join, /part, /msg, /quit,"
    " /topic, /names, /list, /whois, /raw"
)


class StdinLineReader:
    """Feeds stdin lines to the event loop from a daemon thread.

    A daemon thread (rather than the default executor) keeps a blocked
    ``readline`` from holding up interpreter exit.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream or sys.stdin
        self._queue: asyncio.Queue[str | None] | None = None
        self._thread: threading.Thread | None = None

    def _start(self) -> asyncio.Queue[str | None]:
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue[str | None] = asyncio.Queue()

        def pump() -> None:
            try:
                for line in self.stream:
                    loop.call_soon_threadsafe(queue.put_nowait, line)
            except (OSError, ValueError) as e:
                logging.debug(f"⌨️ Input stream error: {e}")
            finally:
                try:
                    loop.call_soon_threadsafe(queue.put_nowait, None)
                except RuntimeError:
                    pass  # loop already closed

        self._thread = threading.Thread(target=pump, name="stdin-reader", daemon=True)
        self._thread.start()
        return queue

    async def __call__(self) -> str | None:
        if self._queue is None:
            self._queue = self._start()
        return await self._queue.get()


class InteractiveShell:
    """Reads user lines until EOF or ``/quit`` and always shuts down cleanly."""

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        connection: ConnectionManager,
        sink: EventSink,
        read_line: Callable[[], Awaitable[str | None]] | None = None,
        shutdown_quit_message: str = DEFAULT_SHUTDOWN_QUIT_MESSAGE,
    ) -> None:
        self.dispatcher = dispatcher
        self.connection = connection
        self.sink = sink
        self.read_line = read_line or StdinLineReader()
        self.shutdown_quit_message = shutdown_quit_message

    async def run(self) -> None:
        self.sink.emit(StatusEvent(BANNER))
        self.sink.emit(StatusEvent("Type /help for more info."))
        try:
            while True:
                line = await self.read_line()
                if line is None:
                    logging.debug("⌨️ End of input")
                    break
                if not await self.dispatcher.handle_input(line):
                    break
        finally:
            await self.shutdown()
        self.sink.emit(StatusEvent("Bye."))

    async def shutdown(self) -> None:
        """Send a best-effort QUIT if still connected, close, and let the reader finish."""
        await self.connection.quit(self.shutdown_quit_message)
        await self.connection.wait_reader_stopped(timeout=QUIT_NOTIFY_TIMEOUT_SECONDS)
