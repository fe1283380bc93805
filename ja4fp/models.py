from __future__ import annotations

from collections.abc import Iterable
from typing import Final

from ja4fp import parser
from ja4fp.errors import RecordError

CLIENT_HELLO: Final[int] = 0x01
PROTOCOL_TCP: Final[int] = 6


def _u16_tuple(name: str, values: Iterable[int]) -> tuple[int, ...]:
    out = tuple(values)
    for v in out:
        if not 0 <= v <= 0xFFFF:
            raise RecordError(f"{name} value {v!r} does not fit in 16 bits")
    return out


class ClientHelloRecord:
    """
    One captured Client Hello, as handed over by the capture pipeline.

    Scalar and list fields are normally pre-extracted upstream; use
    ``from_bytes`` to derive all of them from the raw record instead.
    List fields are stored as tuples and hold raw wire values (GREASE and
    duplicates included).
    """

    def __init__(
        self,
        handshake_type: int,
        protocol_number: int = PROTOCOL_TCP,
        is_quic: bool = False,
        legacy_version: int = 0,
        supported_versions: Iterable[int] = (),
        sni: str = "",
        alpn_values: Iterable[str] = (),
        cipher_suites: Iterable[int] = (),
        extensions: Iterable[int] = (),
        signature_algorithms: Iterable[int] = (),
        raw_handshake_bytes: bytes = b"",
    ) -> None:
        if not 0 <= handshake_type <= 0xFF:
            raise RecordError(f"handshake type {handshake_type!r} does not fit in a byte")
        self.handshake_type = handshake_type
        self.protocol_number = protocol_number
        self.is_quic = is_quic
        self.legacy_version = _u16_tuple("legacy_version", (legacy_version,))[0]
        self.supported_versions = _u16_tuple("supported_versions", supported_versions)
        self.sni = sni
        self.alpn_values = tuple(alpn_values)
        self.cipher_suites = _u16_tuple("cipher_suites", cipher_suites)
        self.extensions = _u16_tuple("extensions", extensions)
        self.signature_algorithms = _u16_tuple("signature_algorithms", signature_algorithms)
        self.raw_handshake_bytes = bytes(raw_handshake_bytes)

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        protocol_number: int = PROTOCOL_TCP,
        is_quic: bool = False,
    ) -> ClientHelloRecord:
        """Build a record with every field extracted from a captured TLS record."""
        handshake_type = parser.read_handshake_type(data)
        return cls(
            handshake_type=0 if handshake_type is None else handshake_type,
            protocol_number=protocol_number,
            is_quic=is_quic,
            legacy_version=parser.read_legacy_version(data),
            supported_versions=parser.extract_supported_versions(data),
            sni=parser.extract_server_name(data),
            alpn_values=parser.extract_alpn(data),
            cipher_suites=parser.extract_cipher_suites(data),
            extensions=parser.extract_extensions(data),
            signature_algorithms=parser.extract_signature_algorithms(data),
            raw_handshake_bytes=data,
        )

    def __repr__(self) -> str:
        return (
            f"<ClientHelloRecord type=0x{self.handshake_type:02x} "
            f"ciphers={len(self.cipher_suites)} extensions={len(self.extensions)}>"
        )
