"""
Tokenizer for bencoded input.
"""
import re
from enum import IntEnum
from typing import Any, Iterator, NamedTuple

from .cursor import ByteCursor
from .exceptions import InvalidToken, MalformedLiteral, TruncatedInput

# Lenient integers may carry a sign and leading zeros.
INT_LITERAL = re.compile(rb"[+-]?[0-9]+")
CANONICAL_INT_LITERAL = re.compile(rb"0|-?[1-9][0-9]*")

LENGTH_LITERAL = re.compile(rb"[0-9]+")
CANONICAL_LENGTH_LITERAL = re.compile(rb"0|[1-9][0-9]*")


class TokenKind(IntEnum):
    """Kinds of token produced by the lexer."""
    DICT_OPEN = 0
    LIST_OPEN = 1
    END = 2
    INTEGER = 3
    STRING = 4
    EOF = 5


class Token(NamedTuple):
    kind: TokenKind
    value: Any = None
    offset: int = 0


class Lexer:
    """
    Turns a byte cursor into tokens, one per next_token() call.

    Errors are terminal: after one is raised the lexer is left mid-token and
    must not be used again.
    """
    def __init__(self, cursor: ByteCursor, canonical: bool = False):
        self.cursor = cursor
        self.canonical = canonical

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            yield tok
            if tok.kind == TokenKind.EOF:
                return

    def next_token(self) -> Token:
        offset = self.cursor.offset
        b = self.cursor.read_byte()

        if b is None:
            return Token(TokenKind.EOF, None, offset)

        ch = bytes([b])

        if ch == b"d":
            return Token(TokenKind.DICT_OPEN, None, offset)

        if ch == b"l":
            return Token(TokenKind.LIST_OPEN, None, offset)

        if ch == b"e":
            return Token(TokenKind.END, None, offset)

        if ch == b"i":
            return Token(TokenKind.INTEGER, self._read_int(offset), offset)

        if ch.isdigit():  # Bencode strings start with length, which is a digit
            self.cursor.unread_byte()
            return Token(TokenKind.STRING, self._read_string(offset), offset)

        raise InvalidToken(
            f"Invalid token {ch!r}",
            {"byte": ch, "offset": offset},
        )

    # --------------------------
    # Literals
    # --------------------------

    def _read_int(self, offset: int) -> int:
        interior = self.cursor.read_until(b"e")
        if interior is None:
            raise TruncatedInput("Unterminated integer literal", {"offset": offset})

        pattern = CANONICAL_INT_LITERAL if self.canonical else INT_LITERAL
        if not pattern.fullmatch(interior):
            raise MalformedLiteral(
                f"Invalid integer literal {interior[:32]!r}",
                {"offset": offset},
            )

        try:
            return int(interior)
        except ValueError as exc:
            # only reachable past the interpreter's int/str digit limit
            raise MalformedLiteral(
                f"Integer literal too long ({len(interior)} digits)",
                {"offset": offset},
            ) from exc

    def _read_string(self, offset: int) -> bytes:
        prefix = self.cursor.read_until(b":")
        if prefix is None:
            raise TruncatedInput("Unterminated string length", {"offset": offset})

        pattern = CANONICAL_LENGTH_LITERAL if self.canonical else LENGTH_LITERAL
        if not pattern.fullmatch(prefix):
            raise MalformedLiteral(
                f"Invalid string length {prefix[:32]!r}",
                {"offset": offset},
            )

        try:
            length = int(prefix)
        except ValueError as exc:
            raise MalformedLiteral(
                f"String length too long ({len(prefix)} digits)",
                {"offset": offset},
            ) from exc

        payload = self.cursor.read_exact(length)
        if len(payload) != length:
            raise TruncatedInput(
                f"String truncated: expected {length} bytes, got {len(payload)}",
                {"offset": offset},
            )
        return payload
