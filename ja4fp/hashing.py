"""
Canonical list rendering and the truncated SHA-256 used for the JA4 b and c
segments.
"""

from __future__ import annotations

from collections.abc import Iterable
from hashlib import sha256
from typing import Final

from ja4fp.grease import remove_grease
from ja4fp.parser import EXT_ALPN, EXT_SERVER_NAME

HASH_LEN: Final[int] = 12
# Stands in for the hash of an empty (or all-GREASE) list.
EMPTY_HASH: Final[str] = "0" * HASH_LEN

# Already carried by the plaintext segment.
HASH_EXCLUDED_EXTENSIONS: Final[frozenset[int]] = frozenset({EXT_SERVER_NAME, EXT_ALPN})


def sha256_truncated(value: str) -> str:
    return sha256(value.encode("utf-8")).hexdigest()[:HASH_LEN]


def format_hex_list(values: Iterable[int]) -> str:
    """Render codes as comma-joined 4-digit lowercase hex, in the given order."""
    return ",".join(f"{v:04x}" for v in values)


def sorted_ciphers(cipher_suites: Iterable[int]) -> list[int]:
    return sorted(remove_grease(cipher_suites))


def sorted_extensions(extensions: Iterable[int]) -> list[int]:
    return sorted(remove_grease(extensions))


def cipher_string(cipher_suites: Iterable[int]) -> str:
    return format_hex_list(sorted_ciphers(cipher_suites))


def extension_string(extensions: Iterable[int], signature_algorithms: Iterable[int] = ()) -> str:
    """
    The pre-image of the extension hash.

    Non-GREASE extensions sorted ascending with server_name and ALPN left
    out, followed by ``_`` and the signature algorithms in wire order when
    there are any.
    """
    rendered = format_hex_list(e for e in sorted_extensions(extensions) if e not in HASH_EXCLUDED_EXTENSIONS)
    sigs = format_hex_list(signature_algorithms)
    if sigs:
        return f"{rendered}_{sigs}"
    return rendered


def cipher_hash(cipher_suites: Iterable[int]) -> str:
    ciphers = sorted_ciphers(cipher_suites)
    if not ciphers:
        return EMPTY_HASH
    return sha256_truncated(format_hex_list(ciphers))


def extension_hash(extensions: Iterable[int], signature_algorithms: Iterable[int] = ()) -> str:
    extensions = list(extensions)
    if not remove_grease(extensions):
        return EMPTY_HASH
    return sha256_truncated(extension_string(extensions, signature_algorithms))
