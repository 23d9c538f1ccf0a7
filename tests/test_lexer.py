import io

import pytest

from bencoding.cursor import ByteCursor
from bencoding.exceptions import InvalidToken, MalformedLiteral, TruncatedInput
from bencoding.lexer import Lexer, Token, TokenKind


def lex(data: bytes, **kwargs):
    return list(Lexer(ByteCursor(data), **kwargs))


def test_token_sequence():
    tokens = lex(b"d4:spaml1:ai-3eee")
    print("Tokens:", tokens)
    assert [t.kind for t in tokens] == [
        TokenKind.DICT_OPEN,
        TokenKind.STRING,
        TokenKind.LIST_OPEN,
        TokenKind.STRING,
        TokenKind.INTEGER,
        TokenKind.END,
        TokenKind.END,
        TokenKind.EOF,
    ]
    assert tokens[1].value == b"spam"
    assert tokens[3].value == b"a"
    assert tokens[4].value == -3


def test_token_offsets():
    tokens = lex(b"li10e2:abe")
    assert [t.offset for t in tokens] == [0, 1, 5, 9, 10]


def test_empty_input_is_eof():
    assert lex(b"") == [Token(TokenKind.EOF, None, 0)]


def test_eof_is_repeatable():
    lexer = Lexer(ByteCursor(b"i1e"))
    assert lexer.next_token().kind == TokenKind.INTEGER
    assert lexer.next_token().kind == TokenKind.EOF
    assert lexer.next_token().kind == TokenKind.EOF


def test_lead_bytes():
    for lead in b"0123456789":
        assert lex(bytes([lead]) + b":" + b"x" * 9)[0].kind == TokenKind.STRING
    for lead in (b"a", b"D", b"L", b"E", b"I", b"\xd9", b"\xff"):
        with pytest.raises(InvalidToken):
            lex(lead)


def test_lexer_does_not_check_grammar():
    # unbalanced ends are the parser's problem
    kinds = [t.kind for t in lex(b"eee")]
    assert kinds == [TokenKind.END, TokenKind.END, TokenKind.END, TokenKind.EOF]


def test_invalid_lead_byte():
    with pytest.raises(InvalidToken) as exc_info:
        lex(b"i1e?")
    assert exc_info.value.details == {"byte": b"?", "offset": 3}


def test_malformed_integer():
    with pytest.raises(MalformedLiteral):
        lex(b"i12qe")


def test_huge_integer():
    digits = b"9" * 1000
    tokens = lex(b"i" + digits + b"e")
    assert tokens[0].value == int(digits)


def test_truncated_string():
    with pytest.raises(TruncatedInput):
        lex(b"10:abc")


def test_canonical_mode():
    assert lex(b"i0e", canonical=True)[0].value == 0
    assert lex(b"i-10e", canonical=True)[0].value == -10
    with pytest.raises(MalformedLiteral):
        lex(b"i00e", canonical=True)
    with pytest.raises(MalformedLiteral):
        lex(b"00:", canonical=True)


def test_stream_source_small_chunks():
    stream = io.BytesIO(b"l11:hello worldi123456789ee")
    tokens = list(Lexer(ByteCursor(stream, chunk_size=2)))
    assert tokens[1].value == b"hello world"
    assert tokens[2].value == 123456789
    assert tokens[-1].kind == TokenKind.EOF
