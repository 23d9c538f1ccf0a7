"""
Forward-only byte cursor shared by every decode entry point.
"""
from typing import Optional

from .config import READ_CHUNK_SIZE


class ByteCursor:
    """
    Reads from an in-memory buffer or a binary stream.

    A bytes-like source is used in place. A stream source (anything with
    ``read(n)``) is pulled in chunks of ``chunk_size``, so up to one chunk
    past the decoded value may be consumed from it.
    """
    def __init__(self, source, chunk_size: int = READ_CHUNK_SIZE):
        if isinstance(source, (bytes, bytearray, memoryview)):
            self._buf = bytes(source)
            self._stream = None
        elif hasattr(source, "read"):
            self._buf = bytearray()
            self._stream = source
        else:
            raise TypeError(f"Cannot read bencode from {type(source).__name__}")

        self._chunk_size = chunk_size
        self._pos = 0       # index into _buf
        self._base = 0      # stream offset of _buf[0]

    @property
    def offset(self) -> int:
        """Number of bytes consumed so far."""
        return self._base + self._pos

    # --------------------------
    # Buffer management
    # --------------------------

    def _fill(self) -> bool:
        """Pulls one more chunk from the stream. Returns False at end of input."""
        if self._stream is None:
            return False

        chunk = self._stream.read(self._chunk_size)
        if not chunk:
            self._stream = None
            return False

        # drop what has already been consumed
        self._base += self._pos
        del self._buf[:self._pos]
        self._buf += chunk
        self._pos = 0
        return True

    def _available(self) -> int:
        return len(self._buf) - self._pos

    # --------------------------
    # Reading
    # --------------------------

    def read_byte(self) -> Optional[int]:
        if not self._available() and not self._fill():
            return None
        b = self._buf[self._pos]
        self._pos += 1
        return b

    def unread_byte(self):
        """Steps back over the byte returned by the last read_byte()."""
        if self._pos == 0:
            raise RuntimeError("Nothing to unread")
        self._pos -= 1

    def read_until(self, delimiter: bytes) -> Optional[bytes]:
        """
        Returns the bytes before ``delimiter`` and consumes the delimiter too.
        Returns None if the input ends first; the partial bytes are consumed.
        """
        searched = self._pos
        while True:
            idx = self._buf.find(delimiter, searched)
            if idx != -1:
                chunk = bytes(self._buf[self._pos:idx])
                self._pos = idx + len(delimiter)
                return chunk

            searched = len(self._buf)
            before = self._pos
            if not self._fill():
                self._pos = len(self._buf)
                return None
            # _fill() rebased the buffer
            searched -= before

    def read_exact(self, n: int) -> bytes:
        """Reads ``n`` bytes; fewer are returned only when the input ends."""
        while self._available() < n and self._fill():
            pass
        chunk = bytes(self._buf[self._pos:self._pos + n])
        self._pos += len(chunk)
        return chunk

    def at_end(self) -> bool:
        return not self._available() and not self._fill()
