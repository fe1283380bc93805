from ja4fp.errors import InvalidHexError, Ja4Error, RecordError
from ja4fp.fingerprint import format_alpn, ja4, ja4_a, ja4_raw, tls_version_code
from ja4fp.grease import is_grease, remove_grease
from ja4fp.hashing import EMPTY_HASH, cipher_hash, extension_hash
from ja4fp.models import ClientHelloRecord
from ja4fp.parser import (
    extract_alpn,
    extract_cipher_suites,
    extract_extensions,
    extract_server_name,
    extract_signature_algorithms,
    extract_supported_versions,
)
from ja4fp.utils import parse_hex

__all__ = [
    "ClientHelloRecord",
    "ja4",
    "ja4_a",
    "ja4_raw",
    "format_alpn",
    "tls_version_code",
    "is_grease",
    "remove_grease",
    "cipher_hash",
    "extension_hash",
    "EMPTY_HASH",
    "extract_extensions",
    "extract_signature_algorithms",
    "extract_alpn",
    "extract_cipher_suites",
    "extract_server_name",
    "extract_supported_versions",
    "parse_hex",
    "Ja4Error",
    "InvalidHexError",
    "RecordError",
]
