"""
Exception hierarchy for bencode decoding and encoding errors.
"""
from typing import Any, Dict, Optional


class BencodeError(Exception):
    """Base exception for all bencode errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            extra = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({extra})"
        return self.message


class BencodeDecodeError(BencodeError):
    """Raised when bencoded input cannot be decoded."""

    @property
    def offset(self) -> Optional[int]:
        return self.details.get("offset")

    @property
    def path(self) -> Optional[str]:
        return self.details.get("path")


class InvalidToken(BencodeDecodeError):
    """A byte that cannot start any bencode token."""


class MalformedLiteral(BencodeDecodeError):
    """An integer literal or string length prefix that does not parse."""


class TruncatedInput(BencodeDecodeError):
    """The input ended in the middle of a literal or string payload."""


class UnexpectedTermination(BencodeDecodeError):
    """An end marker or end of input where a value was expected."""


class InvalidDictionaryKey(BencodeDecodeError):
    """A dictionary key that is not a byte string."""


class DuplicateDictionaryKey(InvalidDictionaryKey):
    """A dictionary key seen twice (strict decoding only)."""


class UnsortedDictionaryKeys(InvalidDictionaryKey):
    """Dictionary keys out of ascending byte order (strict decoding only)."""


class TrailingData(BencodeDecodeError):
    """Bytes left over after a complete value (strict decoding only)."""


class NestingTooDeep(BencodeDecodeError):
    """Containers nested deeper than the configured limit."""


class BencodeEncodeError(BencodeError, TypeError):
    """Raised when an object has no bencode representation."""
