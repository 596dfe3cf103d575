"""Rows of the rekordbox database whose strings are located by offsets."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Union

from finyl.binary import Reader
from finyl.simple_rows import (
    ArtworkRow,
    ColorRow,
    GenreRow,
    HistoryEntryRow,
    HistoryPlaylistRow,
    KeyRow,
    LabelRow,
    PageType,
    PlaylistEntryRow,
    PlaylistTreeRow,
)
from finyl.strings import DeviceSqlString, read_device_sql_string

_ARTIST_FAR_SUBTYPE = 100
_ARTIST_FAR_OFFSET_POS = 10
_TRACK_STRING_COUNT = 21
_TRACK_HEADER = struct.Struct("<HHIIIIIHH" + "I" * 12 + "HHHHHHBBHH")


class _OffsetString:
    """A device string read lazily from row_base plus a stored offset."""

    def __init__(self, index: int) -> None:
        self.index = index
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, obj: TrackRow | None, objtype: type | None = None):
        if obj is None:
            return self
        cache = obj._strings
        if self.name not in cache:
            cache[self.name] = obj._string_at(obj.ofs_strings[self.index])
        return cache[self.name]


@dataclass(frozen=True)
class TrackRow:
    """A playable track with its metadata and links to other tables."""

    index_shift: int
    bitmask: int
    sample_rate: int
    composer_id: int
    file_size: int
    artwork_id: int
    key_id: int
    original_artist_id: int
    label_id: int
    remixer_id: int
    bitrate: int
    track_number: int
    tempo: int
    genre_id: int
    album_id: int
    artist_id: int
    id: int
    disc_number: int
    play_count: int
    year: int
    sample_depth: int
    duration: int
    color_id: int
    rating: int
    ofs_strings: tuple[int, ...]
    reader: Reader = field(repr=False, compare=False)
    row_base: int = field(repr=False, compare=False)
    _strings: dict = field(default_factory=dict, init=False, repr=False, compare=False)

    isrc = _OffsetString(0)
    texter = _OffsetString(1)
    unknown_string_2 = _OffsetString(2)
    unknown_string_3 = _OffsetString(3)
    unknown_string_4 = _OffsetString(4)
    message = _OffsetString(5)
    kuvo_public = _OffsetString(6)
    autoload_hotcues = _OffsetString(7)
    unknown_string_5 = _OffsetString(8)
    unknown_string_6 = _OffsetString(9)
    date_added = _OffsetString(10)
    release_date = _OffsetString(11)
    mix_name = _OffsetString(12)
    unknown_string_7 = _OffsetString(13)
    analyze_path = _OffsetString(14)
    analyze_date = _OffsetString(15)
    comment = _OffsetString(16)
    title = _OffsetString(17)
    unknown_string_8 = _OffsetString(18)
    filename = _OffsetString(19)
    file_path = _OffsetString(20)

    @classmethod
    def read(cls, reader: Reader, row_base: int) -> TrackRow:
        """Read the fixed part of the row starting at row_base."""
        with reader.at(row_base):
            values = _TRACK_HEADER.unpack(reader.read_bytes(_TRACK_HEADER.size))
            offsets = tuple(reader.read_u2le() for _ in range(_TRACK_STRING_COUNT))
        (
            _magic, index_shift, bitmask, sample_rate, composer_id, file_size,
            _unknown6, _unknown7, _unknown8,
            artwork_id, key_id, original_artist_id, label_id, remixer_id,
            bitrate, track_number, tempo, genre_id, album_id, artist_id, row_id,
            disc_number, play_count, year, sample_depth, duration, _unknown26,
            color_id, rating, _unknown29, _unknown30,
        ) = values
        return cls(
            index_shift=index_shift,
            bitmask=bitmask,
            sample_rate=sample_rate,
            composer_id=composer_id,
            file_size=file_size,
            artwork_id=artwork_id,
            key_id=key_id,
            original_artist_id=original_artist_id,
            label_id=label_id,
            remixer_id=remixer_id,
            bitrate=bitrate,
            track_number=track_number,
            tempo=tempo,
            genre_id=genre_id,
            album_id=album_id,
            artist_id=artist_id,
            id=row_id,
            disc_number=disc_number,
            play_count=play_count,
            year=year,
            sample_depth=sample_depth,
            duration=duration,
            color_id=color_id,
            rating=rating,
            ofs_strings=offsets,
            reader=reader,
            row_base=row_base,
        )

    def _string_at(self, offset: int) -> DeviceSqlString:
        with self.reader.at(self.row_base + offset):
            return read_device_sql_string(self.reader)


@dataclass(frozen=True)
class ArtistRow:
    """An artist name and its ID."""

    subtype: int
    index_shift: int
    id: int
    ofs_name_near: int
    reader: Reader = field(repr=False, compare=False)
    row_base: int = field(repr=False, compare=False)

    @classmethod
    def read(cls, reader: Reader, row_base: int) -> ArtistRow:
        """Read the fixed part of the row starting at row_base."""
        with reader.at(row_base):
            subtype = reader.read_u2le()
            index_shift = reader.read_u2le()
            row_id = reader.read_u4le()
            reader.read_u1()
            ofs_name_near = reader.read_u1()
        return cls(
            subtype=subtype,
            index_shift=index_shift,
            id=row_id,
            ofs_name_near=ofs_name_near,
            reader=reader,
            row_base=row_base,
        )

    @property
    def ofs_name_far(self) -> int | None:
        """The two-byte name offset, present only for the far subtype."""
        if self.subtype != _ARTIST_FAR_SUBTYPE:
            return None
        return self.reader.peek_u2le(self.row_base + _ARTIST_FAR_OFFSET_POS)

    @property
    def name(self) -> DeviceSqlString:
        """The artist's name."""
        far = self.ofs_name_far
        offset = far if far is not None else self.ofs_name_near
        with self.reader.at(self.row_base + offset):
            return read_device_sql_string(self.reader)


@dataclass(frozen=True)
class AlbumRow:
    """An album name, its ID and its artist."""

    index_shift: int
    artist_id: int
    id: int
    ofs_name: int
    reader: Reader = field(repr=False, compare=False)
    row_base: int = field(repr=False, compare=False)

    @classmethod
    def read(cls, reader: Reader, row_base: int) -> AlbumRow:
        """Read the fixed part of the row starting at row_base."""
        with reader.at(row_base):
            reader.read_u2le()
            index_shift = reader.read_u2le()
            reader.read_u4le()
            artist_id = reader.read_u4le()
            row_id = reader.read_u4le()
            reader.read_u4le()
            reader.read_u1()
            ofs_name = reader.read_u1()
        return cls(
            index_shift=index_shift,
            artist_id=artist_id,
            id=row_id,
            ofs_name=ofs_name,
            reader=reader,
            row_base=row_base,
        )

    @property
    def name(self) -> DeviceSqlString:
        """The album's name."""
        with self.reader.at(self.row_base + self.ofs_name):
            return read_device_sql_string(self.reader)


Row = Union[
    TrackRow, ArtistRow, AlbumRow, GenreRow, LabelRow, KeyRow, ColorRow,
    ArtworkRow, PlaylistTreeRow, PlaylistEntryRow, HistoryPlaylistRow,
    HistoryEntryRow,
]

_ROW_TYPES = {
    PageType.PLAYLIST_TREE: PlaylistTreeRow,
    PageType.KEYS: KeyRow,
    PageType.ARTISTS: ArtistRow,
    PageType.ALBUMS: AlbumRow,
    PageType.GENRES: GenreRow,
    PageType.HISTORY_PLAYLISTS: HistoryPlaylistRow,
    PageType.ARTWORK: ArtworkRow,
    PageType.PLAYLIST_ENTRIES: PlaylistEntryRow,
    PageType.LABELS: LabelRow,
    PageType.TRACKS: TrackRow,
    PageType.HISTORY_ENTRIES: HistoryEntryRow,
    PageType.COLORS: ColorRow,
}


def read_row(page_type: int, reader: Reader, row_base: int) -> Row | None:
    """Read the row of the given page type at row_base.

    Returns None for page types that carry no known row layout.
    """
    try:
        row_type = _ROW_TYPES.get(PageType(page_type))
    except ValueError:
        return None
    if row_type is None:
        return None
    return row_type.read(reader, row_base)