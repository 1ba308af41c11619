from __future__ import annotations


class PartsRLEError(Exception):
    """Base de los errores del encoder"""


class DecodeError(PartsRLEError):
    """An input file could not be decoded into pixels."""

    def __init__(self, path, reason: str = ""):
        self.path = path
        msg = f"Cannot decode image {path}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class CapacityExceeded(PartsRLEError, ValueError):
    """A value does not fit in the one-byte fields of the encoded format."""

    def __init__(self, what: str, value: int, limit: int = 255):
        self.what = what
        self.value = value
        self.limit = limit
        super().__init__(f"{what}={value} does not fit in one byte (max {limit})")
