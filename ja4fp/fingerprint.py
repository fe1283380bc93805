"""
JA4 Client Hello fingerprint assembly.

A fingerprint has three ``_``-separated parts, for example
``t13d1516h2_8daaf6152771_e5627efa2ab1``. The first is plaintext:

- ``t`` for TCP or ``q`` for QUIC
- two-character TLS version code (``13``)
- ``d`` when the SNI names a domain, ``i`` otherwise
- non-GREASE cipher count (``15``), then extension count (``16``)
- two-character ALPN code (``h2``)

The second and third are truncated hashes of the sorted cipher suites and
of the sorted extensions plus signature algorithms.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Final

from ja4fp.grease import remove_grease
from ja4fp.hashing import cipher_hash, cipher_string, extension_hash, extension_string
from ja4fp.models import CLIENT_HELLO, PROTOCOL_TCP, ClientHelloRecord

logger = logging.getLogger(__name__)

TLS_VERSIONS: Final[dict[int, str]] = {
    0x0100: "s1",
    0x0200: "s2",
    0x0300: "s3",
    0x0301: "10",
    0x0302: "11",
    0x0303: "12",
    0x0304: "13",
    0xFEFF: "d1",
    0xFEFD: "d2",
    0xFEFC: "d3",
}
UNKNOWN_VERSION: Final[str] = "00"
NO_ALPN: Final[str] = "00"
ZERO_COUNT: Final[str] = "00"


def tls_version_code(version: int) -> str:
    return TLS_VERSIONS.get(version, UNKNOWN_VERSION)


def negotiated_version(legacy_version: int, supported_versions: Iterable[int]) -> int:
    """Highest non-GREASE supported_versions entry, else the legacy field."""
    offered = remove_grease(supported_versions)
    if offered:
        return max(offered)
    return legacy_version


def transport_indicator(protocol_number: int, is_quic: bool) -> str:
    if protocol_number == PROTOCOL_TCP:
        return "t"
    if is_quic:
        return "q"
    return ""


def sni_indicator(sni: str) -> str:
    if sni and len(sni.split(".")) >= 2:
        return "d"
    return "i"


def count_code(values: Iterable[int]) -> str:
    """Decimal count of non-GREASE values, ``00`` when there are none."""
    count = len(remove_grease(values))
    if count == 0:
        return ZERO_COUNT
    return str(count)


def format_alpn(alpn_values: Sequence[str]) -> str:
    """
    Two-character ALPN code taken from the first offered protocol.

    Non-printable protocol names are not hex-encoded; their first and last
    characters are used as-is.
    """
    if not alpn_values or not alpn_values[0]:
        return NO_ALPN
    first = alpn_values[0]
    if len(first) == 2:
        return first
    return first[0] + first[-1]


def ja4_a(record: ClientHelloRecord) -> str:
    """The plaintext segment, without the eligibility checks ``ja4`` applies."""
    version = negotiated_version(record.legacy_version, record.supported_versions)
    return (
        transport_indicator(record.protocol_number, record.is_quic)
        + tls_version_code(version)
        + sni_indicator(record.sni)
        + count_code(record.cipher_suites)
        + count_code(record.extensions)
        + format_alpn(record.alpn_values)
    )


def _eligible(record: ClientHelloRecord) -> bool:
    if record.handshake_type != CLIENT_HELLO:
        logger.debug("handshake type 0x%02x is not a client hello", record.handshake_type)
        return False
    if count_code(record.extensions) == ZERO_COUNT:
        logger.debug("client hello has no non-GREASE extensions")
        return False
    return True


def ja4(record: ClientHelloRecord) -> str:
    """
    JA4 fingerprint of ``record``.

    Returns an empty string for anything other than a Client Hello and for
    Client Hellos without a single non-GREASE extension.
    """
    if not _eligible(record):
        return ""
    return "_".join(
        (
            ja4_a(record),
            cipher_hash(record.cipher_suites),
            extension_hash(record.extensions, record.signature_algorithms),
        )
    )


def ja4_raw(record: ClientHelloRecord) -> str:
    """Unhashed (JA4_r) rendering: the hash pre-images in place of the hashes."""
    if not _eligible(record):
        return ""
    return "_".join(
        (
            ja4_a(record),
            cipher_string(record.cipher_suites),
            extension_string(record.extensions, record.signature_algorithms),
        )
    )
