import io
import logging

import pytest

from bencoding import (
    BencodeDict,
    BencodeInt,
    BencodeString,
    TruncatedInput,
    decode,
    decode_bytes,
    decode_stream,
    decode_string,
    encode,
)

TORRENT_LIKE = (
    b"d8:announce40:http://tracker.example.com:6969/announce"
    b"4:infod6:lengthi1024e4:name8:file.bin12:piece lengthi16384e6:pieces20:"
    + b"\x00\x01\x02:\xff" * 4
    + b"ee"
)


def test_decode_bytes():
    root = decode_bytes(TORRENT_LIKE)
    print("Decoded:", root)
    assert isinstance(root, BencodeDict)
    info = root[b"info"]
    assert info[b"length"] == BencodeInt(1024)
    assert info[b"name"].text() == "file.bin"
    assert len(info[b"pieces"]) == 20
    assert encode(root) == TORRENT_LIKE


def test_decode_bytearray_and_memoryview():
    assert decode_bytes(bytearray(b"i5e")) == BencodeInt(5)
    assert decode(memoryview(b"1:x")) == BencodeString(b"x")


def test_decode_string():
    assert decode_string("4:butt") == BencodeString(b"butt")
    # length counts encoded bytes, not characters
    assert decode_string("2:é") == BencodeString("é".encode())
    assert decode_string("1:\xe9", encoding="latin-1") == BencodeString(b"\xe9")


def test_decode_stream():
    stream = io.BytesIO(TORRENT_LIKE)
    root = decode_stream(stream)
    assert encode(root) == TORRENT_LIKE


def test_decode_file(tmp_path):
    path = tmp_path / "sample.torrent"
    path.write_bytes(TORRENT_LIKE)
    with path.open("rb") as f:
        root = decode(f)
    assert root[b"info"][b"piece length"].value == 16384


def test_decode_truncated_stream():
    with pytest.raises(TruncatedInput):
        decode(io.BytesIO(b"l10:abc"))


def test_entry_points_check_types():
    with pytest.raises(TypeError):
        decode_bytes("i1e")
    with pytest.raises(TypeError):
        decode_string(b"i1e")
    with pytest.raises(TypeError):
        decode_stream(b"i1e")


def test_decode_logs_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="bencoding"):
        decode(b"li1ee")
        with pytest.raises(TruncatedInput):
            decode(b"l10:abc")
    messages = [r.getMessage() for r in caplog.records]
    assert "Decoded BencodeList from 5 bytes" in messages
    assert any(m.startswith("Decode failed") for m in messages)
