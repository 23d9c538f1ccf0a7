"""
Data structures for representing Bencoded types.

Every value kind knows how to write its own canonical encoding through
``encode()``. Containers own their children; a tree built from these classes
is always acyclic.
"""
import sys

from .config import DEFAULT_ENCODING
from .exceptions import BencodeEncodeError

__all__ = [
    "BencodeType",
    "BencodeInt",
    "BencodeString",
    "BencodeList",
    "BencodeDict",
    "from_python",
]

DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def int_digit_limit() -> int:
    """The interpreter's int/str conversion limit in decimal digits, 0 if none."""
    getter = getattr(sys, "get_int_max_str_digits", None)
    return getter() if getter else 0


class BencodeType:
    """Base class for all Bencode data types."""
    __slots__ = ("value",)

    def encode(self) -> bytes:
        raise NotImplementedError

    def to_python(self):
        raise NotImplementedError

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.value == other.value

    __hash__ = None


class BencodeInt(BencodeType):
    """Represents a Bencoded integer of any magnitude."""
    __slots__ = ()

    def __init__(self, value: int):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("BencodeInt requires an integer.")
        limit = int_digit_limit()
        # a decimal digit holds more than 3 bits, so shorter values always fit
        if limit and value.bit_length() > 3 * limit:
            try:
                str(value)
            except ValueError as exc:
                raise ValueError(
                    f"BencodeInt magnitude exceeds the {limit} digit limit"
                ) from exc
        self.value = value

    @classmethod
    def from_string(cls, text: str, base: int = 10) -> "BencodeInt":
        """Parses a signed integer written in ``base``."""
        if not 2 <= base <= 36:
            raise ValueError(f"Unsupported base: {base}")
        digits = text[1:] if text[:1] in ("+", "-") else text
        allowed = DIGITS[:base]
        if not digits or any(c not in allowed for c in digits.lower()):
            raise ValueError(f"Invalid integer literal: {text!r}")
        return cls(int(text, base))

    def encode(self) -> bytes:
        return b"i%de" % self.value

    def to_python(self) -> int:
        return self.value

    def __int__(self):
        return self.value

    def __hash__(self):
        return hash((BencodeInt, self.value))

    def __str__(self):
        return str(self.value)

    def __repr__(self):
        return f"BencodeInt({self.value})"


class BencodeString(BencodeType):
    """Represents a Bencoded byte string. The payload is raw bytes, not text."""
    __slots__ = ()

    def __init__(self, value: bytes):
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError("BencodeString requires bytes.")
        self.value = bytes(value)

    @classmethod
    def from_text(cls, text: str, encoding: str = DEFAULT_ENCODING) -> "BencodeString":
        return cls(text.encode(encoding))

    def text(self, encoding: str = DEFAULT_ENCODING, errors: str = "strict") -> str:
        """Decodes the payload; raises UnicodeDecodeError for non-text data."""
        return self.value.decode(encoding, errors)

    def encode(self) -> bytes:
        return b"%d:%s" % (len(self.value), self.value)

    def to_python(self) -> bytes:
        return self.value

    def __bytes__(self):
        return self.value

    def __len__(self):
        return len(self.value)

    def __hash__(self):
        return hash((BencodeString, self.value))

    def __repr__(self):
        return f"BencodeString({self.value!r})"


class BencodeList(BencodeType):
    """Represents a Bencoded list."""
    __slots__ = ()

    def __init__(self, value: list = None):
        if value is None:
            value = []
        if not isinstance(value, list):
            raise TypeError("BencodeList requires a list.")
        for item in value:
            if not isinstance(item, BencodeType):
                raise TypeError(f"BencodeList items must be Bencode types, not {type(item).__name__}.")
        self.value = list(value)

    def encode(self) -> bytes:
        return b"l" + b"".join(item.encode() for item in self.value) + b"e"

    def to_python(self) -> list:
        return [item.to_python() for item in self.value]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def __getitem__(self, index):
        return self.value[index]

    def __str__(self):
        return self.encode().decode("latin-1")

    def __repr__(self):
        return f"BencodeList({self.value!r})"


class BencodeDict(BencodeType):
    """
    Represents a Bencoded dictionary.

    Keys are raw bytes. Insertion order is kept in memory but ``encode()``
    always emits keys sorted by byte value.
    """
    __slots__ = ()

    def __init__(self, value: dict = None):
        if value is None:
            value = {}
        if not isinstance(value, dict):
            raise TypeError("BencodeDict requires a dict.")
        normalized = {}
        for k, v in value.items():
            if isinstance(k, BencodeString):
                k = k.value
            # keys must be bytes (bencode requirement)
            if not isinstance(k, bytes):
                raise TypeError("BencodeDict keys must be bytes.")
            if not isinstance(v, BencodeType):
                raise TypeError(f"BencodeDict values must be Bencode types, not {type(v).__name__}.")
            normalized[k] = v
        self.value = normalized

    def encode(self) -> bytes:
        parts = [b"d"]
        for key in sorted(self.value):
            parts.append(b"%d:%s" % (len(key), key))
            parts.append(self.value[key].encode())
        parts.append(b"e")
        return b"".join(parts)

    def to_python(self) -> dict:
        return {k: v.to_python() for k, v in self.value.items()}

    def get(self, key, default=None):
        return self.value.get(key, default)

    def keys(self):
        return self.value.keys()

    def values(self):
        return self.value.values()

    def items(self):
        return self.value.items()

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def __contains__(self, key):
        return key in self.value

    def __getitem__(self, key):
        return self.value[key]

    def __str__(self):
        return self.encode().decode("latin-1")

    def __repr__(self):
        return f"BencodeDict({self.value!r})"


def from_python(obj, encoding: str = DEFAULT_ENCODING) -> BencodeType:
    """Builds a Bencode value tree from plain Python objects."""

    if isinstance(obj, BencodeType):
        return obj

    if isinstance(obj, bool):
        raise BencodeEncodeError(f"Cannot bencode object of type {type(obj)}")

    if isinstance(obj, int):
        return BencodeInt(obj)

    if isinstance(obj, (bytes, bytearray, memoryview)):
        return BencodeString(obj)

    if isinstance(obj, str):
        return BencodeString(obj.encode(encoding))

    if isinstance(obj, (list, tuple)):
        return BencodeList([from_python(x, encoding) for x in obj])

    if isinstance(obj, dict):
        items = {}
        for key, val in obj.items():
            if isinstance(key, str):
                key = key.encode(encoding)
            elif isinstance(key, memoryview):
                key = bytes(key)
            elif isinstance(key, BencodeString):
                key = key.value
            if not isinstance(key, bytes):
                raise BencodeEncodeError(
                    f"Dictionary keys must be bytes or str, not {type(key)}",
                    {"key": key},
                )
            items[key] = from_python(val, encoding)
        return BencodeDict(items)

    raise BencodeEncodeError(f"Cannot bencode object of type {type(obj)}")
