"""Session state shared by the command loop and the reader loop."""

from __future__ import annotations

import secrets
import threading
from dataclasses import dataclass, field

from ..constants import (
    DEFAULT_REALNAME,
    DEFAULT_USER,
    GENERATED_NICK_PREFIX,
    GENERATED_NICK_RANGE,
)


class AtomicFlag:
    """Boolean guarded by a lock so check-and-set is a single step."""

    __slots__ = ("_lock", "_value")

    def __init__(self, value: bool = False) -> None:
        self._lock = threading.Lock()
        self._value = value

    def is_set(self) -> bool:
        return self._value

    def set(self) -> None:
        with self._lock:
            self._value = True

    def clear_if_set(self) -> bool:
        """Clear the flag and return True only for the caller that cleared it."""
        with self._lock:
            if not self._value:
                return False
            self._value = False
            return True

    def __bool__(self) -> bool:
        return self._value

    def __repr__(self) -> str:
        return f"AtomicFlag({self._value})"


def generate_nickname() -> str:
    return f"{GENERATED_NICK_PREFIX}{secrets.randbelow(GENERATED_NICK_RANGE)}"


@dataclass
class Session:
    """Process-lifetime client state.

    Attributes:
        nickname: Current nickname; changed optimistically by ``/nick``.
        user: Username sent once at registration.
        realname: Real name sent once at registration.
        current_target: Channel or nick plain text goes to, if any.
        server_host: Host of the last successful connect (kept after disconnect).
        server_port: Port of the last successful connect.
    """

    nickname: str = field(default_factory=generate_nickname)
    user: str = DEFAULT_USER
    realname: str = DEFAULT_REALNAME
    current_target: str | None = None
    server_host: str | None = None
    server_port: int | None = None
    connected_flag: AtomicFlag = field(default_factory=AtomicFlag, repr=False)

    @property
    def connected(self) -> bool:
        return self.connected_flag.is_set()

    def clear_target_if(self, name: str) -> bool:
        """Clear the current target when it case-insensitively equals ``name``."""
        if self.current_target is not None and self.current_target.lower() == name.lower():
            self.current_target = None
            return True
        return False
