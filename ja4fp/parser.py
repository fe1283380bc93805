"""
Fail-soft Client Hello field extraction.

Input is a TLS record as captured off the wire: a 5-byte record header,
a 4-byte handshake header and the Client Hello body. Captures are bounded
by the upstream probe and routinely cut short, so every extractor returns
whatever it managed to collect instead of raising.
"""

from __future__ import annotations

import logging
import struct
from collections.abc import Iterator
from typing import Final

logger = logging.getLogger(__name__)

RECORD_HEADER_LEN: Final[int] = 5
HANDSHAKE_HEADER_LEN: Final[int] = 4
VERSION_AND_RANDOM_LEN: Final[int] = 34
MIN_CLIENT_HELLO_LEN: Final[int] = RECORD_HEADER_LEN + HANDSHAKE_HEADER_LEN + VERSION_AND_RANDOM_LEN
# Largest record the capture probe delivers whole.
MAX_CAPTURE_HANDSHAKE_LEN: Final[int] = 896

EXT_SERVER_NAME: Final[int] = 0x0000
EXT_SIGNATURE_ALGORITHMS: Final[int] = 0x000D
EXT_ALPN: Final[int] = 0x0010
EXT_SUPPORTED_VERSIONS: Final[int] = 0x002B


class ByteCursor:
    """
    Big-endian reader over ``buffer[position:end]``.

    Reads never go past ``end``: a read that does not fit returns None
    (or False for skips) and leaves the position untouched.
    """

    __slots__ = ("buffer", "position", "end")

    def __init__(self, buffer: bytes, position: int = 0, end: int | None = None) -> None:
        self.buffer = buffer
        self.position = position
        self.end = len(buffer) if end is None else min(end, len(buffer))

    @property
    def remaining(self) -> int:
        return max(self.end - self.position, 0)

    def read_u8(self) -> int | None:
        if self.remaining < 1:
            return None
        value = self.buffer[self.position]
        self.position += 1
        return value

    def read_u16(self) -> int | None:
        if self.remaining < 2:
            return None
        (value,) = struct.unpack_from("!H", self.buffer, self.position)
        self.position += 2
        return value

    def read_bytes(self, length: int) -> bytes | None:
        if self.remaining < length:
            return None
        data = bytes(self.buffer[self.position : self.position + length])
        self.position += length
        return data

    def skip(self, length: int) -> bool:
        if self.remaining < length:
            return False
        self.position += length
        return True

    def limit(self, length: int) -> ByteCursor:
        """Cursor over the next ``length`` bytes, clamped to this cursor's end."""
        return ByteCursor(self.buffer, self.position, min(self.position + length, self.end))

    def __repr__(self) -> str:
        return f"<ByteCursor position={self.position} end={self.end}>"


def _truncated(what: str, cursor: ByteCursor) -> None:
    logger.debug("client hello truncated reading %s at offset %d", what, cursor.position)


def _skip_vector(cursor: ByteCursor, width: int, what: str) -> bool:
    """Skip a length-prefixed vector whose length field is ``width`` bytes."""
    length = cursor.read_u8() if width == 1 else cursor.read_u16()
    if length is None or not cursor.skip(length):
        _truncated(what, cursor)
        return False
    return True


def _seek_cipher_suites(data: bytes) -> ByteCursor | None:
    """Position a cursor on the cipher-suites length field."""
    if len(data) < MIN_CLIENT_HELLO_LEN:
        return None
    cursor = ByteCursor(data, MIN_CLIENT_HELLO_LEN)
    if not _skip_vector(cursor, 1, "session id"):
        return None
    return cursor


def _extensions_block(data: bytes) -> ByteCursor | None:
    """Cursor spanning the extensions block, clamped to the capture."""
    cursor = _seek_cipher_suites(data)
    if cursor is None:
        return None
    if not _skip_vector(cursor, 2, "cipher suites"):
        return None
    if not _skip_vector(cursor, 1, "compression methods"):
        return None
    length = cursor.read_u16()
    if length is None:
        _truncated("extensions length", cursor)
        return None
    return cursor.limit(length)


def _iter_extensions(block: ByteCursor) -> Iterator[tuple[int, int]]:
    """
    Yield ``(type, length)`` for each extension header in ``block``.

    While the consumer holds a yielded entry the cursor sits on its payload.
    An entry whose payload runs past the block is still yielded; the walk
    ends after it.
    """
    while block.remaining >= 4:
        ext_type = block.read_u16()
        ext_len = block.read_u16()
        start = block.position
        yield ext_type, ext_len
        block.position = start
        if not block.skip(ext_len):
            _truncated(f"extension 0x{ext_type:04x} payload", block)
            return


def _read_u16_list(cursor: ByteCursor) -> list[int]:
    values: list[int] = []
    while (value := cursor.read_u16()) is not None:
        values.append(value)
    return values


def read_handshake_type(data: bytes) -> int | None:
    """Handshake message type following the record header, or None if absent."""
    if len(data) <= RECORD_HEADER_LEN:
        return None
    return data[RECORD_HEADER_LEN]


def read_legacy_version(data: bytes) -> int:
    """The legacy ``client_version`` field; 0 when the capture is too short."""
    cursor = ByteCursor(data, RECORD_HEADER_LEN + HANDSHAKE_HEADER_LEN)
    return cursor.read_u16() or 0


def extract_extensions(data: bytes) -> list[int]:
    """Extension type codes in wire order, GREASE included."""
    declared = ByteCursor(data, 3).read_u16()
    if declared is not None and declared > MAX_CAPTURE_HANDSHAKE_LEN:
        logger.debug("declared length %d exceeds capture ceiling, skipping extensions", declared)
        return []
    block = _extensions_block(data)
    if block is None:
        return []
    return [ext_type for ext_type, _ in _iter_extensions(block)]


def extract_signature_algorithms(data: bytes) -> list[int]:
    """Signature scheme codes from the first signature_algorithms extension."""
    block = _extensions_block(data)
    if block is None:
        return []
    for ext_type, _ in _iter_extensions(block):
        if ext_type != EXT_SIGNATURE_ALGORITHMS:
            continue
        length = block.read_u16()
        if length is None:
            continue
        return _read_u16_list(block.limit(length))
    return []


def extract_alpn(data: bytes) -> list[str]:
    """Protocol names from the first ALPN extension, in offered order."""
    block = _extensions_block(data)
    if block is None:
        return []
    for ext_type, _ in _iter_extensions(block):
        if ext_type != EXT_ALPN:
            continue
        length = block.read_u16()
        if length is None:
            continue
        names = block.limit(length)
        protocols: list[str] = []
        while (name_len := names.read_u8()) is not None:
            name = names.read_bytes(name_len)
            if name is None:
                _truncated("alpn protocol name", names)
                break
            # one character per byte
            protocols.append(name.decode("latin-1"))
        return protocols
    return []


def extract_cipher_suites(data: bytes) -> list[int]:
    """Cipher suite codes in wire order; a trailing partial code is dropped."""
    cursor = _seek_cipher_suites(data)
    if cursor is None:
        return []
    length = cursor.read_u16()
    if length is None:
        _truncated("cipher suites length", cursor)
        return []
    return _read_u16_list(cursor.limit(length))


def extract_server_name(data: bytes) -> str:
    """First host_name entry of the server_name extension, or ''."""
    block = _extensions_block(data)
    if block is None:
        return ""
    for ext_type, ext_len in _iter_extensions(block):
        if ext_type != EXT_SERVER_NAME:
            continue
        payload = block.limit(ext_len)
        length = payload.read_u16()
        if length is None:
            return ""
        entries = payload.limit(length)
        while (name_type := entries.read_u8()) is not None:
            name_len = entries.read_u16()
            if name_len is None:
                break
            name = entries.read_bytes(name_len)
            if name is None:
                _truncated("server name", entries)
                break
            if name_type == 0:
                return name.decode("ascii", errors="replace")
        return ""
    return ""


def extract_supported_versions(data: bytes) -> list[int]:
    """Versions offered in the supported_versions extension, GREASE included."""
    block = _extensions_block(data)
    if block is None:
        return []
    for ext_type, ext_len in _iter_extensions(block):
        if ext_type != EXT_SUPPORTED_VERSIONS:
            continue
        payload = block.limit(ext_len)
        length = payload.read_u8()
        if length is None:
            return []
        return _read_u16_list(payload.limit(length))
    return []
