from __future__ import annotations

import pytest

from termirc.irc.parser import (
    action_text,
    ctcp_body,
    is_ctcp,
    nick_from_prefix,
    parse_irc_message,
    pong_token,
)


def test_parse_prefixed_privmsg_with_trailing():  # type: ignore[no-untyped-def]
    msg = parse_irc_message(":nick!user@host PRIVMSG #chan :hello world")
    assert msg.prefix == "nick!user@host"
    assert msg.command == "PRIVMSG"
    assert list(msg.params) == ["#chan", "hello world"]
    assert msg.nick == "nick"
    assert msg.malformed is False


def test_parse_bare_command():  # type: ignore[no-untyped-def]
    msg = parse_irc_message("LIST")
    assert msg.prefix is None
    assert msg.command == "LIST"
    assert msg.params == ()
    assert msg.trailing is None


def test_parse_numeric_with_middle_params():  # type: ignore[no-untyped-def]
    raw = ":irc.example.org 001 tester :Welcome to the network tester"
    msg = parse_irc_message(raw)
    assert msg.prefix == "irc.example.org"
    assert msg.command == "001"
    assert msg.params == ("tester", "Welcome to the network tester")
    assert msg.nick == "irc.example.org"
    assert msg.raw == raw


def test_trailing_keeps_colons_and_spacing():  # type: ignore[no-untyped-def]
    msg = parse_irc_message(":a!b@c PRIVMSG #x :see: this  ::  thing")
    assert msg.params[-1] == "see: this  ::  thing"


def test_empty_trailing_parameter():  # type: ignore[no-untyped-def]
    msg = parse_irc_message(":a!b@c TOPIC #x :")
    assert msg.params == ("#x", "")


def test_params_without_trailing():  # type: ignore[no-untyped-def]
    msg = parse_irc_message(":a!b@c MODE #chan +o bob")
    assert msg.params == ("#chan", "+o", "bob")


def test_repeated_spaces_do_not_create_empty_params():  # type: ignore[no-untyped-def]
    msg = parse_irc_message("JOIN   #chan   :hi there")
    assert msg.command == "JOIN"
    assert msg.params == ("#chan", "hi there")


def test_prefix_without_command_is_recovered():  # type: ignore[no-untyped-def]
    msg = parse_irc_message(":only.a.prefix")
    assert msg.prefix == "only.a.prefix"
    assert msg.command == ""
    assert msg.params == ()
    assert msg.malformed is True


def test_parse_malformed_missing_spaces():  # type: ignore[no-untyped-def]
    raw = ":nick!user@hostPRIVMSG#chan:hello"
    msg = parse_irc_message(raw)
    # No space at all: whole remainder becomes the prefix, nothing raises
    assert msg.raw == raw
    assert msg.malformed is True


def test_empty_line_is_malformed_not_an_error():  # type: ignore[no-untyped-def]
    msg = parse_irc_message("")
    assert msg.command == ""
    assert msg.malformed is True


@pytest.mark.parametrize(
    "raw, token",
    [
        ("PING :irc.example.org", ":irc.example.org"),
        ("PING 12345", "12345"),
        ("PING :token with  spaces", ":token with  spaces"),
    ],
)
def test_pong_token_is_verbatim(raw, token):  # type: ignore[no-untyped-def]
    assert pong_token(raw) == token


def test_pong_token_ignores_other_lines():  # type: ignore[no-untyped-def]
    assert pong_token(":server PONG :x") is None
    assert pong_token("PINGX") is None


def test_nick_from_prefix():  # type: ignore[no-untyped-def]
    assert nick_from_prefix("alice!a@host") == "alice"
    assert nick_from_prefix("irc.server") == "irc.server"
    assert nick_from_prefix(None) is None


def test_ctcp_helpers():  # type: ignore[no-untyped-def]
    assert is_ctcp("\x01ACTION waves\x01")
    assert not is_ctcp("\x01")
    assert not is_ctcp("plain text")
    assert ctcp_body("\x01VERSION\x01") == "VERSION"
    assert ctcp_body("plain") == "plain"


@pytest.mark.parametrize(
    "body, expected",
    [
        ("ACTION waves hello", "waves hello"),
        ("ACTION ", ""),
        ("ACTION", None),
        ("action waves", None),
        ("VERSION", None),
    ],
)
def test_action_text_requires_exact_verb(body, expected):  # type: ignore[no-untyped-def]
    assert action_text(body) == expected
