"""A seekable little-endian byte reader for parsing database files."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager


class ParseError(ValueError):
    """Raised when binary data is truncated or malformed."""


class Reader:
    """Reads unsigned little-endian integers and raw bytes from a buffer."""

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data = bytes(data)
        self._pos = 0

    def __len__(self) -> int:
        return len(self._data)

    @property
    def pos(self) -> int:
        """The current read position."""
        return self._pos

    def seek(self, pos: int) -> None:
        """Move the read position to an absolute offset."""
        if not 0 <= pos <= len(self._data):
            raise ParseError(
                f"seek to {pos} outside buffer of {len(self._data)} bytes"
            )
        self._pos = pos

    def read_bytes(self, count: int) -> bytes:
        """Read exactly count bytes."""
        if count < 0:
            raise ParseError(f"negative read length {count}")
        end = self._pos + count
        if end > len(self._data):
            raise ParseError(
                f"requested {count} bytes at {self._pos}, "
                f"only {len(self._data) - self._pos} available"
            )
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def _read_uint(self, width: int) -> int:
        return int.from_bytes(self.read_bytes(width), "little")

    def read_u1(self) -> int:
        """Read one unsigned byte."""
        return self._read_uint(1)

    def read_u2le(self) -> int:
        """Read an unsigned 16-bit little-endian integer."""
        return self._read_uint(2)

    def read_u4le(self) -> int:
        """Read an unsigned 32-bit little-endian integer."""
        return self._read_uint(4)

    def peek_u2le(self, pos: int) -> int:
        """Read a 16-bit value at pos without moving the read position."""
        with self.at(pos):
            return self.read_u2le()

    @contextmanager
    def at(self, pos: int) -> Iterator[Reader]:
        """Temporarily seek to pos, restoring the position afterwards."""
        saved = self._pos
        self.seek(pos)
        try:
            yield self
        finally:
            self._pos = saved