"""
Bencode encoder for Bencode value trees and plain Python objects.
"""
from .config import DEFAULT_ENCODING
from .structure import BencodeInt, BencodeString, BencodeType, from_python


def encode(obj, encoding: str = DEFAULT_ENCODING) -> bytes:
    """
    Encodes a BencodeType or a plain Python object into canonical bencoded
    bytes. ``str`` values and keys are written using ``encoding``.
    """
    if isinstance(obj, BencodeType):
        return obj.encode()
    return from_python(obj, encoding).encode()


# ------------------------------------------------------------
#   Encoding primitives
# ------------------------------------------------------------

def encode_int(n: int) -> bytes:
    """Encodes an integer to bencoded bytes (e.g., i123e)."""
    return BencodeInt(n).encode()


def encode_bytes(b: bytes) -> bytes:
    """Encodes bytes to bencoded bytes (e.g., 4:spam)."""
    return BencodeString(b).encode()


def encode_str(s: str, encoding: str = DEFAULT_ENCODING) -> bytes:
    """Encodes a string to bencoded bytes (e.g., 4:spam)."""
    return encode_bytes(s.encode(encoding))
