"""IRC message parsing utilities."""

from __future__ import annotations

from dataclasses import dataclass

from ..constants import CTCP_DELIMITER

PING_PREFIX = "PING "
CTCP_ACTION_PREFIX = "ACTION "


@dataclass(frozen=True, slots=True)
class IncomingMessage:
    """One received protocol line, decoded best-effort.

    ``malformed`` is set when the line could not be fully decoded (for example
    a prefix with nothing after it). Such messages are still dispatched and
    end up in the pass-through rendering.
    """

    raw: str
    prefix: str | None
    command: str
    params: tuple[str, ...] = ()
    malformed: bool = False

    @property
    def nick(self) -> str | None:
        return nick_from_prefix(self.prefix)

    @property
    def trailing(self) -> str | None:
        return self.params[-1] if self.params else None


def parse_irc_message(raw_line: str) -> IncomingMessage:
    """Parse ``[:prefix] command [params...] [:trailing]``; never raises."""
    prefix: str | None = None
    malformed = False
    remainder = raw_line

    if raw_line.startswith(":"):
        space = raw_line.find(" ")
        if space == -1:
            # prefix with no command; keep it and leave the rest empty
            prefix = raw_line[1:]
            remainder = ""
            malformed = True
        else:
            prefix = raw_line[1:space]
            remainder = raw_line[space + 1 :]

    space = remainder.find(" ")
    if space == -1:
        command = remainder
        rest = ""
    else:
        command = remainder[:space]
        rest = remainder[space + 1 :]
    if not command:
        malformed = True

    return IncomingMessage(
        raw=raw_line,
        prefix=prefix,
        command=command,
        params=tuple(_split_params(rest)),
        malformed=malformed,
    )


def _split_params(rest: str) -> list[str]:
    params: list[str] = []
    rest = rest.lstrip(" ")
    while rest:
        if rest.startswith(":"):
            params.append(rest[1:])
            break
        space = rest.find(" ")
        if space == -1:
            params.append(rest)
            break
        params.append(rest[:space])
        rest = rest[space + 1 :].lstrip(" ")
    return params


def pong_token(raw_line: str) -> str | None:
    """Return the verbatim token of a ``PING <token>`` line, else None."""
    if raw_line.startswith(PING_PREFIX):
        return raw_line[len(PING_PREFIX) :]
    return None


def nick_from_prefix(prefix: str | None) -> str | None:
    if prefix is None:
        return None
    return prefix.split("!", 1)[0]


def is_ctcp(text: str) -> bool:
    return (
        len(text) >= 2
        and text.startswith(CTCP_DELIMITER)
        and text.endswith(CTCP_DELIMITER)
    )


def ctcp_body(text: str) -> str:
    """Strip the CTCP delimiters from ``text`` if it is wrapped in them."""
    return text[1:-1] if is_ctcp(text) else text


def action_text(body: str) -> str | None:
    """Return the emote text of an ``ACTION <text>`` CTCP body, else None.

    The verb match is case-sensitive and needs the separating space; any
    other body (``action x``, a bare ``ACTION``) is a generic CTCP.
    """
    if body.startswith(CTCP_ACTION_PREFIX):
        return body[len(CTCP_ACTION_PREFIX) :]
    return None
