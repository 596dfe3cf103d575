import struct

import pytest

from finyl.binary import ParseError, Reader
from finyl.rows import AlbumRow, ArtistRow, TrackRow, read_row
from finyl.simple_rows import GenreRow, PageType
from finyl.strings import StringKind

HEADER = struct.Struct("<HHIIIIIHH" + "I" * 12 + "HHHHHHBBHH")
OFFSETS = struct.Struct("<" + "H" * 21)


def short_ascii(text: str) -> bytes:
    raw = text.encode("ascii")
    return bytes([((len(raw) + 1) << 1) | 1]) + raw


def long_utf16(text: str) -> bytes:
    raw = text.encode("utf-16le")
    return bytes([0x90]) + struct.pack("<HB", len(raw) + 4, 0) + raw


def track_bytes(strings: dict[int, bytes], row_id: int = 42) -> bytes:
    header = HEADER.pack(
        0x24, 7, 0xABCD, 44100, 3, 123456, 0, 0, 0,
        5, 6, 8, 9, 10, 320, 2, 12800, 11, 12, 13, row_id,
        1, 4, 2001, 16, 240, 0, 3, 5, 0, 0,
    )
    heap = bytearray()
    start = HEADER.size + OFFSETS.size
    empty_offset = start
    heap += short_ascii("")
    offsets = [empty_offset] * 21
    for index, encoded in strings.items():
        offsets[index] = start + len(heap)
        heap += encoded
    return header + OFFSETS.pack(*offsets) + bytes(heap)


def test_track_fixed_fields():
    reader = Reader(track_bytes({}))
    row = TrackRow.read(reader, 0)
    assert row.id == 42
    assert row.sample_rate == 44100
    assert row.tempo == 12800
    assert row.year == 2001
    assert row.rating == 5
    assert row.duration == 240
    assert row.artist_id == 13
    assert len(row.ofs_strings) == 21


def test_track_strings_relative_to_row_base():
    prefix = b"\xff" * 17
    data = prefix + track_bytes(
        {17: short_ascii("Title"), 19: short_ascii("a.mp3"), 20: short_ascii("/music/a.mp3")}
    )
    row = TrackRow.read(Reader(data), len(prefix))
    assert str(row.title) == "Title"
    assert str(row.filename) == "a.mp3"
    assert str(row.file_path) == "/music/a.mp3"
    assert str(row.comment) == ""


def test_track_utf16_string():
    data = track_bytes({16: long_utf16("Grüße")})
    row = TrackRow.read(Reader(data), 0)
    assert row.comment.kind is StringKind.LONG_UTF16LE
    assert row.comment.text == "Grüße"


def test_track_read_keeps_reader_position():
    reader = Reader(track_bytes({17: short_ascii("x")}))
    reader.seek(3)
    row = TrackRow.read(reader, 0)
    assert str(row.title) == "x"
    assert reader.pos == 3


def test_track_truncated_raises():
    with pytest.raises(ParseError):
        TrackRow.read(Reader(track_bytes({})[:50]), 0)


def artist_near(name: str) -> bytes:
    return struct.pack("<HHIBB", 0x60, 1, 77, 3, 10) + short_ascii(name)


def test_artist_near_name():
    row = ArtistRow.read(Reader(artist_near("Near")), 0)
    assert row.id == 77
    assert row.ofs_name_far is None
    assert str(row.name) == "Near"


def test_artist_far_name():
    data = struct.pack("<HHIBBH", 100, 1, 78, 3, 0, 20) + b"\x00" * 8 + short_ascii("Far")
    row = ArtistRow.read(Reader(data), 0)
    assert row.ofs_name_far == 20
    assert str(row.name) == "Far"


def test_album_name_and_ids():
    data = struct.pack("<HHIIIIBB", 0x80, 2, 0, 55, 66, 0, 3, 22) + short_ascii("Album")
    row = AlbumRow.read(Reader(data), 0)
    assert row.artist_id == 55
    assert row.id == 66
    assert str(row.name) == "Album"


def test_read_row_dispatches_by_type():
    data = struct.pack("<I", 9) + short_ascii("House")
    row = read_row(PageType.GENRES, Reader(data), 0)
    assert isinstance(row, GenreRow)
    assert str(row.name) == "House"


def test_read_row_tracks():
    row = read_row(0, Reader(track_bytes({}, row_id=99)), 0)
    assert isinstance(row, TrackRow)
    assert row.id == 99


@pytest.mark.parametrize("page_type", [PageType.UNKNOWN_9, PageType.COLUMNS, PageType.HISTORY, 250])
def test_read_row_unknown_types_give_none(page_type):
    assert read_row(page_type, Reader(b"\x00" * 64), 0) is None