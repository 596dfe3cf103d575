"""Variable-length strings as stored in rekordbox database rows."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from finyl.binary import ParseError, Reader

_LONG_ASCII_MARKER = 0x40
_LONG_UTF16LE_MARKER = 0x90
_LONG_HEADER_SIZE = 4


class StringKind(enum.Enum):
    """The encodings a device string can be stored in."""

    SHORT_ASCII = "short_ascii"
    LONG_ASCII = "long_ascii"
    LONG_UTF16LE = "long_utf16le"


@dataclass(frozen=True)
class DeviceSqlString:
    """A decoded device string together with the header byte that framed it."""

    kind: StringKind
    text: str
    length_and_kind: int

    def __str__(self) -> str:
        return self.text


def _decode(raw: bytes, encoding: str) -> str:
    try:
        return raw.decode(encoding)
    except UnicodeDecodeError as exc:
        raise ParseError(f"cannot decode string as {encoding}: {exc}") from exc


def _read_long(reader: Reader, encoding: str) -> str:
    length = reader.read_u2le()
    reader.read_u1()
    return _decode(reader.read_bytes(length - _LONG_HEADER_SIZE), encoding)


def read_device_sql_string(reader: Reader) -> DeviceSqlString:
    """Read one device string at the reader's current position.

    The first byte is either a marker for a long ASCII or UTF-16LE string,
    or the mangled length of a short ASCII string.
    """
    length_and_kind = reader.read_u1()
    if length_and_kind == _LONG_ASCII_MARKER:
        kind = StringKind.LONG_ASCII
        text = _read_long(reader, "ascii")
    elif length_and_kind == _LONG_UTF16LE_MARKER:
        kind = StringKind.LONG_UTF16LE
        text = _read_long(reader, "utf-16le")
    else:
        kind = StringKind.SHORT_ASCII
        length = length_and_kind >> 1
        text = _decode(reader.read_bytes(length - 1), "ascii")
    return DeviceSqlString(kind=kind, text=text, length_and_kind=length_and_kind)