"""Nick color bucketing."""

from __future__ import annotations

import zlib

from .constants import NICK_PALETTE_SIZE

__all__ = ["nick_color_index"]


def nick_color_index(nick: str, palette_size: int = NICK_PALETTE_SIZE) -> int:
    """Return a stable palette bucket for ``nick``.

    Uses CRC32 rather than ``hash()`` so the bucket does not change between
    runs. Different nicks sharing a bucket is expected.
    """
    if palette_size <= 0:
        raise ValueError("palette_size must be positive")
    return zlib.crc32(nick.encode("utf-8")) % palette_size
