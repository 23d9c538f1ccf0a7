"""
Bencode decoder: a recursive descent parser over the lexer's tokens.
"""
import logging
from typing import Optional

from .config import DEFAULT_ENCODING, DecodeOptions
from .cursor import ByteCursor
from .exceptions import (
    BencodeDecodeError,
    DuplicateDictionaryKey,
    InvalidDictionaryKey,
    NestingTooDeep,
    TrailingData,
    UnexpectedTermination,
    UnsortedDictionaryKeys,
)
from .lexer import Lexer, TokenKind
from .structure import (
    BencodeDict,
    BencodeInt,
    BencodeList,
    BencodeString,
    BencodeType,
)

logger = logging.getLogger(__name__)

# Returned by _parse_value for an 'e' token. Never escapes the decoder.
_END = object()

# Marks a dictionary key position in the decoding path.
_KEY = object()


class BencodeDecoder:
    """
    Decodes one Bencoded value from bytes or a binary stream.

    By default trailing bytes after the value are ignored and a duplicated
    dictionary key keeps the last value seen. Pass ``DecodeOptions.strict()``
    to reject both.
    """
    def __init__(self, source, options: Optional[DecodeOptions] = None):
        self.options = options or DecodeOptions()
        self.cursor = source if isinstance(source, ByteCursor) else ByteCursor(source)
        self.lexer = Lexer(self.cursor, canonical=self.options.canonical_literals)
        self._path = []

    def decode(self) -> BencodeType:
        """Main decode entry point. Decodes exactly one value."""
        try:
            result = self._parse_value(0)

            if result is _END:
                raise UnexpectedTermination(
                    "Unexpected end marker with no enclosing container",
                    {"offset": self.cursor.offset - 1},
                )

            if self.options.reject_trailing_data and not self.cursor.at_end():
                raise TrailingData("Trailing data after value", {"offset": self.cursor.offset})

        except BencodeDecodeError as exc:
            if self._path:
                exc.details.setdefault("path", self._format_path())
            logger.debug("Decode failed: %s", exc)
            raise

        logger.debug("Decoded %s from %d bytes", type(result).__name__, self.cursor.offset)
        return result

    # --------------------------
    # Decoding path
    # --------------------------

    def _format_path(self) -> str:
        parts = []
        for seg in self._path:
            if seg is _KEY:
                parts.append("<key>")
            else:
                parts.append(f"[{seg!r}]")
        return "".join(parts)

    # --------------------------
    # Parsing functions
    # --------------------------

    def _parse_value(self, depth: int):
        tok = self.lexer.next_token()

        if tok.kind == TokenKind.DICT_OPEN:
            self._check_depth(depth + 1, tok.offset)
            return self._parse_dict(depth + 1)

        if tok.kind == TokenKind.LIST_OPEN:
            self._check_depth(depth + 1, tok.offset)
            return self._parse_list(depth + 1)

        if tok.kind == TokenKind.INTEGER:
            return BencodeInt(tok.value)

        if tok.kind == TokenKind.STRING:
            return BencodeString(tok.value)

        if tok.kind == TokenKind.END:
            return _END

        raise UnexpectedTermination("Unexpected end of input", {"offset": tok.offset})

    def _check_depth(self, depth: int, offset: int):
        max_depth = self.options.max_depth
        if max_depth is not None and depth > max_depth:
            raise NestingTooDeep(
                f"Nesting deeper than {max_depth} containers",
                {"offset": offset},
            )

    def _parse_list(self, depth: int) -> BencodeList:
        """Parses list items up to and including the closing 'e'."""
        items = []

        while True:
            self._path.append(len(items))
            item = self._parse_value(depth)
            self._path.pop()

            if item is _END:
                return BencodeList(items)
            items.append(item)

    def _parse_dict(self, depth: int) -> BencodeDict:
        """Parses key/value pairs up to and including the closing 'e'."""
        obj = {}
        last_key = None

        while True:
            key_offset = self.cursor.offset
            self._path.append(_KEY)
            key = self._parse_value(depth)
            self._path.pop()

            if key is _END:
                return BencodeDict(obj)

            # keys MUST be strings
            if not isinstance(key, BencodeString):
                raise InvalidDictionaryKey(
                    f"Dictionary key must be a byte string, not {type(key).__name__}",
                    {"offset": key_offset},
                )
            key = key.value

            if key in obj and self.options.reject_duplicate_keys:
                raise DuplicateDictionaryKey(
                    f"Duplicate dictionary key {key!r}",
                    {"offset": key_offset},
                )
            if (last_key is not None and key <= last_key
                    and self.options.reject_unsorted_keys):
                raise UnsortedDictionaryKeys(
                    f"Dictionary key {key!r} out of order after {last_key!r}",
                    {"offset": key_offset},
                )
            last_key = key

            self._path.append(key)
            value = self._parse_value(depth)
            if value is _END:
                raise UnexpectedTermination(
                    f"Missing value for dictionary key {key!r}",
                    {"offset": self.cursor.offset - 1},
                )
            self._path.pop()

            # last write wins for duplicated keys
            obj[key] = value


def decode_bytes(data, options: Optional[DecodeOptions] = None) -> BencodeType:
    """Decodes a bytes-like object."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"decode_bytes() requires a bytes-like object, not {type(data).__name__}")
    return BencodeDecoder(data, options).decode()


def decode_string(text: str, options: Optional[DecodeOptions] = None,
                  encoding: str = DEFAULT_ENCODING) -> BencodeType:
    """Decodes a str holding bencoded data."""
    if not isinstance(text, str):
        raise TypeError(f"decode_string() requires a str, not {type(text).__name__}")
    return BencodeDecoder(text.encode(encoding), options).decode()


def decode_stream(stream, options: Optional[DecodeOptions] = None) -> BencodeType:
    """
    Decodes one value from a binary stream. Read errors propagate unchanged.
    """
    if not hasattr(stream, "read"):
        raise TypeError(f"decode_stream() requires a readable stream, not {type(stream).__name__}")
    return BencodeDecoder(stream, options).decode()


def decode(source, *, options: Optional[DecodeOptions] = None, strict: bool = False) -> BencodeType:
    """
    Convenience function to decode Bencoded data from bytes, a str, or a
    binary stream.
    """
    if options is None and strict:
        options = DecodeOptions.strict()

    if isinstance(source, str):
        return decode_string(source, options)
    if isinstance(source, (bytes, bytearray, memoryview)):
        return decode_bytes(source, options)
    return decode_stream(source, options)
