"""Tests for the console renderer."""

import io
from datetime import datetime

import pytest

from termirc.events import (
    ActionMessage,
    ChatMessage,
    CtcpMessage,
    ErrorEvent,
    JoinEvent,
    NickEvent,
    Notification,
    NoticeEvent,
    OwnMessage,
    PartEvent,
    QuitEvent,
    ServerLine,
    StatusEvent,
)
from termirc.ui import ConsoleRenderer
from termirc.ui.colors import BELL, NICK_PALETTE, bcolors


def fixed_clock():
    return datetime(2024, 5, 1, 9, 5)


@pytest.fixture
def plain():
    return ConsoleRenderer(io.StringIO(), io.StringIO(), colors=False, clock=fixed_clock)


@pytest.mark.parametrize(
    "event, expected",
    [
        (ChatMessage("alice", "#py", "hi"), "[09:05] <alice@#py> hi"),
        (ChatMessage("alice", "tester", "psst"), "[09:05] <alice@tester> psst"),
        (OwnMessage("tester", "#py", "hello"), "[09:05] <tester> hello"),
        (ActionMessage("alice", "#py", "waves"), "[09:05] * alice waves"),
        (CtcpMessage("bob", "tester", "VERSION"), "[CTCP from bob] VERSION"),
        (JoinEvent("alice", "#py"), "*** alice joined #py"),
        (PartEvent("alice", "#py", "bye"), "*** alice left #py (bye)"),
        (PartEvent("alice", "#py"), "*** alice left #py"),
        (QuitEvent("alice", "Ping timeout"), "*** alice quit (Ping timeout)"),
        (QuitEvent("alice"), "*** alice quit"),
        (NickEvent("alice", "alicia"), "*** alice is now known as alicia"),
        (NoticeEvent("server", "hello"), "-server- hello"),
        (ServerLine(":irc 001 tester :Welcome"), "[server] :irc 001 tester :Welcome"),
        (StatusEvent("Disconnected."), "Disconnected."),
    ],
)
def test_plain_formatting(plain, event, expected):
    assert plain.format(event) == expected


def test_emit_writes_line_to_out(plain):
    plain.emit(StatusEvent("Bye."))
    assert plain.out.getvalue() == "Bye.\n"
    assert plain.err.getvalue() == ""


def test_errors_go_to_err(plain):
    plain.emit(ErrorEvent("Not connected."))
    assert plain.err.getvalue() == "Not connected.\n"
    assert plain.out.getvalue() == ""


def test_notification_is_silent_without_bell(plain):
    plain.emit(Notification("#py", "<alice> hi"))
    assert plain.out.getvalue() == ""


def test_notification_rings_bell():
    out = io.StringIO()
    renderer = ConsoleRenderer(out, io.StringIO(), colors=False, bell=True)
    renderer.emit(Notification("#py", "<alice> hi"))
    assert out.getvalue() == BELL


def test_colored_nick_uses_palette():
    renderer = ConsoleRenderer(io.StringIO(), io.StringIO(), colors=True, clock=fixed_clock)
    colored = renderer.nick("alice")
    assert colored.endswith(f"alice{bcolors.RESET}")
    assert colored[: -len(f"alice{bcolors.RESET}")] in NICK_PALETTE
    assert renderer.nick("alice") == colored


def test_colored_error_is_red():
    err = io.StringIO()
    ConsoleRenderer(io.StringIO(), err, colors=True).emit(ErrorEvent("boom"))
    assert err.getvalue().startswith(bcolors.RED)
