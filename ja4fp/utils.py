from __future__ import annotations

from ja4fp.errors import InvalidHexError


def parse_hex(text: str) -> bytes:
    """
    Decode a hex dump of a captured record.

    Whitespace and ``:`` separators are ignored, as is a leading ``0x``.
    """
    cleaned = "".join(text.split()).replace(":", "")
    if cleaned[:2].lower() == "0x":
        cleaned = cleaned[2:]
    if not cleaned:
        raise InvalidHexError("No hex input given")
    try:
        return bytes.fromhex(cleaned)
    except ValueError as exc:
        raise InvalidHexError(f"Invalid hex input: {exc}") from exc
