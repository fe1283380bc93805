"""Pytest configuration and fixtures."""

import struct

import pytest
from ja4fp.models import ClientHelloRecord

CHROME_CIPHERS = [
    0x1A1A,  # GREASE
    0x1301, 0x1302, 0x1303,
    0xC02B, 0xC02F, 0xC02C, 0xC030,
    0xCCA9, 0xCCA8, 0xC013, 0xC014,
    0x009C, 0x009D, 0x002F, 0x0035,
]
CHROME_SIG_ALGS = [0x0403, 0x0804, 0x0401, 0x0503, 0x0805, 0x0501, 0x0806, 0x0601]
CHROME_EXTENSIONS = [
    0x2A2A,  # GREASE
    0x0000, 0x0017, 0xFF01, 0x000A, 0x000B, 0x0023, 0x0010, 0x0005,
    0x000D, 0x0012, 0x0033, 0x002D, 0x002B, 0x001B, 0x4469, 0x0015,
    0x3A3A,  # GREASE
]
CHROME_JA4 = "t13d1516h2_8daaf6152771_e5627efa2ab1"


class HelloBytes:
    """Builders for TLS records carrying a Client Hello."""

    @staticmethod
    def extension(ext_type, payload=b""):
        return struct.pack("!HH", ext_type, len(payload)) + payload

    @staticmethod
    def server_name(host):
        name = host.encode("ascii")
        entry = b"\x00" + struct.pack("!H", len(name)) + name
        return HelloBytes.extension(0x0000, struct.pack("!H", len(entry)) + entry)

    @staticmethod
    def alpn(*protocols):
        names = b"".join(bytes([len(p)]) + p for p in protocols)
        return HelloBytes.extension(0x0010, struct.pack("!H", len(names)) + names)

    @staticmethod
    def signature_algorithms(*codes):
        body = b"".join(struct.pack("!H", c) for c in codes)
        return HelloBytes.extension(0x000D, struct.pack("!H", len(body)) + body)

    @staticmethod
    def supported_versions(*versions):
        body = b"".join(struct.pack("!H", v) for v in versions)
        return HelloBytes.extension(0x002B, bytes([len(body)]) + body)

    @staticmethod
    def record(
        ciphers=(0x1301,),
        extensions=(),
        session_id=b"\x11" * 32,
        version=0x0303,
        handshake_type=0x01,
        extensions_length=None,
        record_length=None,
    ):
        cipher_block = b"".join(struct.pack("!H", c) for c in ciphers)
        ext_block = b"".join(extensions)
        body = (
            struct.pack("!H", version)
            + b"\x22" * 32
            + bytes([len(session_id)])
            + session_id
            + struct.pack("!H", len(cipher_block))
            + cipher_block
            + b"\x01\x00"
            + struct.pack("!H", len(ext_block) if extensions_length is None else extensions_length)
            + ext_block
        )
        handshake = bytes([handshake_type]) + len(body).to_bytes(3, "big") + body
        length = len(handshake) if record_length is None else record_length
        return b"\x16\x03\x01" + struct.pack("!H", length) + handshake


@pytest.fixture
def hello():
    """Client Hello byte builders."""
    return HelloBytes


@pytest.fixture
def chrome_hello():
    """A Chrome-like TLS 1.3 Client Hello record with GREASE values."""
    h = HelloBytes
    extensions = []
    for ext_type in CHROME_EXTENSIONS:
        if ext_type == 0x0000:
            extensions.append(h.server_name("www.example.com"))
        elif ext_type == 0x0010:
            extensions.append(h.alpn(b"h2", b"http/1.1"))
        elif ext_type == 0x000D:
            extensions.append(h.signature_algorithms(*CHROME_SIG_ALGS))
        elif ext_type == 0x002B:
            extensions.append(h.supported_versions(0x4A4A, 0x0304, 0x0303))
        elif ext_type == 0x0015:
            extensions.append(h.extension(ext_type, b"\x00" * 16))
        else:
            extensions.append(h.extension(ext_type))
    return h.record(ciphers=CHROME_CIPHERS, extensions=extensions)


@pytest.fixture
def chrome_record(chrome_hello):
    """The Chrome hello as pre-extracted fields."""
    return ClientHelloRecord(
        handshake_type=0x01,
        protocol_number=6,
        legacy_version=0x0303,
        supported_versions=[0x4A4A, 0x0304, 0x0303],
        sni="www.example.com",
        alpn_values=["h2", "http/1.1"],
        cipher_suites=CHROME_CIPHERS,
        extensions=CHROME_EXTENSIONS,
        signature_algorithms=CHROME_SIG_ALGS,
        raw_handshake_bytes=chrome_hello,
    )
