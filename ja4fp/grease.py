"""
GREASE (RFC 8701) detection.

Clients sprinkle reserved 0x?a?a codepoints into cipher, extension and
version lists; they carry no information about the client and are dropped
before anything is counted, sorted or hashed.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final

GREASE_VALUES: Final[frozenset[int]] = frozenset((n << 12) | 0x0A00 | (n << 4) | 0x0A for n in range(16))


def is_grease(value: int) -> bool:
    # 0xXaXa with both high nibbles equal
    return (value & 0x0F0F) == 0x0A0A and ((value >> 4) & 0x0F) == (value >> 12)


def remove_grease(values: Iterable[int]) -> list[int]:
    """Return a new list without GREASE values, preserving order."""
    return [v for v in values if not is_grease(v)]
