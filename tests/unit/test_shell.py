"""
Unit tests for InteractiveShell.
"""

import asyncio
import io

import pytest

from termirc.events import StatusEvent
from termirc.shell import BANNER, InteractiveShell, StdinLineReader
from tests.fixtures.irc_fixtures import settle


def scripted(*lines):
    """Return a line reader that yields ``lines`` and then EOF."""
    queue = list(lines)

    async def read_line():
        await asyncio.sleep(0)
        return queue.pop(0) if queue else None

    return read_line


def make_shell(client, *lines):
    return InteractiveShell(
        client.dispatcher, client.connection, client.sink, read_line=scripted(*lines)
    )


class TestInteractiveShell:
    """Test class for the foreground loop."""

    @pytest.mark.asyncio
    async def test_banner_and_bye(self, client):
        await make_shell(client).run()
        texts = [e.text for e in client.sink.of_type(StatusEvent)]
        assert texts[0] == BANNER
        assert texts[1] == "Type /help for more info."
        assert texts[-1] == "Bye."

    @pytest.mark.asyncio
    async def test_eof_sends_shutdown_quit(self, connected_client):
        c = connected_client
        await make_shell(c, "/join #py").run()
        assert c.sent_after_registration() == ["JOIN #py", "QUIT :Client Disconnected"]
        assert c.session.connected is False
        assert c.connection.reader_task.done()
        assert c.writer.close_calls == 1

    @pytest.mark.asyncio
    async def test_quit_command_stops_reading(self, connected_client):
        c = connected_client
        await make_shell(c, "/quit bye now", "/join #never").run()
        assert c.sent_after_registration() == ["QUIT :bye now"]
        assert c.session.connected is False

    @pytest.mark.asyncio
    async def test_custom_shutdown_message(self, connected_client):
        c = connected_client
        shell = InteractiveShell(
            c.dispatcher,
            c.connection,
            c.sink,
            read_line=scripted(),
            shutdown_quit_message="gone fishing",
        )
        await shell.run()
        assert c.sent_after_registration() == ["QUIT :gone fishing"]

    @pytest.mark.asyncio
    async def test_errors_do_not_stop_the_loop(self, client):
        await make_shell(client, "/bogus", "/current").run()
        texts = [e.text for e in client.sink.of_type(StatusEvent)]
        assert "Current target: (none)" in texts

    @pytest.mark.asyncio
    async def test_shutdown_when_never_connected(self, client):
        await make_shell(client).run()
        assert client.session.connected is False
        assert StatusEvent("Disconnected.") not in client.sink.events

    @pytest.mark.asyncio
    async def test_server_drop_mid_session(self, connected_client):
        c = connected_client
        c.reader.feed_eof()
        await settle()
        await make_shell(c, "/current").run()
        assert c.sent_after_registration() == []
        assert c.sink.events.count(StatusEvent("Disconnected.")) == 1


class TestStdinLineReader:
    """Test class for the threaded stdin reader."""

    @pytest.mark.asyncio
    async def test_reads_lines_then_eof(self):
        read_line = StdinLineReader(io.StringIO("first\nsecond\n"))
        assert await read_line() == "first\n"
        assert await read_line() == "second\n"
        assert await read_line() is None
