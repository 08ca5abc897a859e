"""
Fake transport and a wired-up client for connection-level tests.
"""

import asyncio
from unittest.mock import AsyncMock, patch

from termirc.commands import CommandDispatcher
from termirc.events import RecordingSink
from termirc.irc.connection import ConnectionManager
from termirc.irc.models import Session


class FakeWriter:
    """Stands in for asyncio.StreamWriter and records every byte written.

    Closing it feeds EOF to the paired reader, the way closing a real
    transport unblocks a pending readline.
    """

    def __init__(self, reader: asyncio.StreamReader | None = None):
        self.reader = reader
        self.buffer = bytearray()
        self.close_calls = 0
        self.fail_with: Exception | None = None

    def write(self, data: bytes) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.buffer.extend(data)

    async def drain(self) -> None:
        return None

    def close(self) -> None:
        self.close_calls += 1
        if self.reader is not None and not self.reader.at_eof():
            self.reader.feed_eof()

    async def wait_closed(self) -> None:
        return None

    @property
    def lines(self) -> list[str]:
        text = self.buffer.decode("utf-8")
        return [line for line in text.split("\r\n") if line]


async def settle(rounds: int = 10) -> None:
    """Let background tasks (the reader loop) run until they block again."""
    for _ in range(rounds):
        await asyncio.sleep(0)


class Client:
    """Session, sink, connection and dispatcher wired over a fake transport."""

    def __init__(self, nickname: str = "tester"):
        self.session = Session(nickname=nickname)
        self.sink = RecordingSink()
        self.connection = ConnectionManager(self.session, self.sink, connect_timeout=1)
        self.dispatcher = CommandDispatcher(self.session, self.connection, self.sink)
        self.reader: asyncio.StreamReader | None = None
        self.writer: FakeWriter | None = None

    async def connect(self, host: str = "irc.example.org", port: int = 6667) -> None:
        self.reader = asyncio.StreamReader()
        self.writer = FakeWriter(self.reader)
        with patch(
            "termirc.irc.connection.asyncio.open_connection",
            AsyncMock(return_value=(self.reader, self.writer)),
        ):
            await self.connection.connect(host, port)
        await settle()

    async def server_says(self, *lines: str) -> None:
        assert self.reader is not None
        for line in lines:
            self.reader.feed_data(f"{line}\r\n".encode("utf-8"))
        await settle()

    def sent_after_registration(self) -> list[str]:
        assert self.writer is not None
        return self.writer.lines[2:]

    async def shutdown(self) -> None:
        await self.connection.close()
        await self.connection.wait_reader_stopped(timeout=1)
