"""
Bencode package for encoding and decoding BitTorrent data.
"""
import logging

from .config import DEFAULT_MAX_DEPTH, DecodeOptions
from .decoder import BencodeDecoder, decode, decode_bytes, decode_stream, decode_string
from .encoder import encode, encode_bytes, encode_int, encode_str
from .exceptions import (
    BencodeDecodeError,
    BencodeEncodeError,
    BencodeError,
    DuplicateDictionaryKey,
    InvalidDictionaryKey,
    InvalidToken,
    MalformedLiteral,
    NestingTooDeep,
    TrailingData,
    TruncatedInput,
    UnexpectedTermination,
    UnsortedDictionaryKeys,
)
from .lexer import Lexer, Token, TokenKind
from .structure import (
    BencodeDict,
    BencodeInt,
    BencodeList,
    BencodeString,
    BencodeType,
    from_python,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'decode', 'decode_bytes', 'decode_string', 'decode_stream', 'BencodeDecoder',
    'encode', 'encode_int', 'encode_bytes', 'encode_str',
    'BencodeType', 'BencodeInt', 'BencodeString', 'BencodeList', 'BencodeDict', 'from_python',
    'Lexer', 'Token', 'TokenKind',
    'DecodeOptions', 'DEFAULT_MAX_DEPTH',
    'BencodeError', 'BencodeDecodeError', 'BencodeEncodeError',
    'InvalidToken', 'MalformedLiteral', 'TruncatedInput', 'UnexpectedTermination',
    'InvalidDictionaryKey', 'DuplicateDictionaryKey', 'UnsortedDictionaryKeys',
    'TrailingData', 'NestingTooDeep',
]
