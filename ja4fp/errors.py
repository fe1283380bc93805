class Ja4Error(Exception):
    """Base error for ja4fp."""


class InvalidHexError(Ja4Error):
    """Raised when a Client Hello dump is not valid hexadecimal."""


class RecordError(Ja4Error):
    """Raised when a ClientHelloRecord field is outside its wire width."""
