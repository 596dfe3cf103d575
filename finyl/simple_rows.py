"""Fixed-layout rows of the rekordbox database whose strings follow inline."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from finyl.binary import Reader
from finyl.strings import DeviceSqlString, read_device_sql_string


class PageType(enum.IntEnum):
    """The kind of rows stored in a table or page."""

    TRACKS = 0
    GENRES = 1
    ARTISTS = 2
    ALBUMS = 3
    LABELS = 4
    KEYS = 5
    COLORS = 6
    PLAYLIST_TREE = 7
    PLAYLIST_ENTRIES = 8
    UNKNOWN_9 = 9
    UNKNOWN_10 = 10
    HISTORY_PLAYLISTS = 11
    HISTORY_ENTRIES = 12
    ARTWORK = 13
    UNKNOWN_14 = 14
    UNKNOWN_15 = 15
    COLUMNS = 16
    UNKNOWN_17 = 17
    UNKNOWN_18 = 18
    HISTORY = 19


@dataclass(frozen=True)
class GenreRow:
    """A genre name and its ID."""

    id: int
    name: DeviceSqlString

    @classmethod
    def read(cls, reader: Reader, row_base: int) -> GenreRow:
        """Read the row starting at row_base."""
        with reader.at(row_base):
            row_id = reader.read_u4le()
            return cls(id=row_id, name=read_device_sql_string(reader))


@dataclass(frozen=True)
class LabelRow:
    """A record label name and its ID."""

    id: int
    name: DeviceSqlString

    @classmethod
    def read(cls, reader: Reader, row_base: int) -> LabelRow:
        """Read the row starting at row_base."""
        with reader.at(row_base):
            row_id = reader.read_u4le()
            return cls(id=row_id, name=read_device_sql_string(reader))


@dataclass(frozen=True)
class KeyRow:
    """A musical key name and its ID."""

    id: int
    id2: int
    name: DeviceSqlString

    @classmethod
    def read(cls, reader: Reader, row_base: int) -> KeyRow:
        """Read the row starting at row_base."""
        with reader.at(row_base):
            row_id = reader.read_u4le()
            id2 = reader.read_u4le()
            return cls(id=row_id, id2=id2, name=read_device_sql_string(reader))


@dataclass(frozen=True)
class ColorRow:
    """A color name and its ID."""

    id: int
    name: DeviceSqlString

    @classmethod
    def read(cls, reader: Reader, row_base: int) -> ColorRow:
        """Read the row starting at row_base."""
        with reader.at(row_base):
            reader.read_bytes(5)
            row_id = reader.read_u2le()
            reader.read_u1()
            return cls(id=row_id, name=read_device_sql_string(reader))


@dataclass(frozen=True)
class ArtworkRow:
    """The path of an album art image and its ID."""

    id: int
    path: DeviceSqlString

    @classmethod
    def read(cls, reader: Reader, row_base: int) -> ArtworkRow:
        """Read the row starting at row_base."""
        with reader.at(row_base):
            row_id = reader.read_u4le()
            return cls(id=row_id, path=read_device_sql_string(reader))


@dataclass(frozen=True)
class PlaylistTreeRow:
    """A playlist or folder: its name, ID, parent and sort order."""

    parent_id: int
    sort_order: int
    id: int
    raw_is_folder: int
    name: DeviceSqlString

    @classmethod
    def read(cls, reader: Reader, row_base: int) -> PlaylistTreeRow:
        """Read the row starting at row_base."""
        with reader.at(row_base):
            parent_id = reader.read_u4le()
            reader.read_bytes(4)
            sort_order = reader.read_u4le()
            row_id = reader.read_u4le()
            raw_is_folder = reader.read_u4le()
            return cls(
                parent_id=parent_id,
                sort_order=sort_order,
                id=row_id,
                raw_is_folder=raw_is_folder,
                name=read_device_sql_string(reader),
            )

    def is_folder(self) -> bool:
        """Return True when this entry is a folder rather than a playlist."""
        return self.raw_is_folder != 0


@dataclass(frozen=True)
class PlaylistEntryRow:
    """A track at a position in a playlist."""

    entry_index: int
    track_id: int
    playlist_id: int

    @classmethod
    def read(cls, reader: Reader, row_base: int) -> PlaylistEntryRow:
        """Read the row starting at row_base."""
        with reader.at(row_base):
            entry_index = reader.read_u4le()
            track_id = reader.read_u4le()
            playlist_id = reader.read_u4le()
        return cls(entry_index=entry_index, track_id=track_id, playlist_id=playlist_id)


@dataclass(frozen=True)
class HistoryPlaylistRow:
    """A history playlist name and its ID."""

    id: int
    name: DeviceSqlString

    @classmethod
    def read(cls, reader: Reader, row_base: int) -> HistoryPlaylistRow:
        """Read the row starting at row_base."""
        with reader.at(row_base):
            row_id = reader.read_u4le()
            return cls(id=row_id, name=read_device_sql_string(reader))


@dataclass(frozen=True)
class HistoryEntryRow:
    """A track at a position in a history playlist."""

    track_id: int
    playlist_id: int
    entry_index: int

    @classmethod
    def read(cls, reader: Reader, row_base: int) -> HistoryEntryRow:
        """Read the row starting at row_base."""
        with reader.at(row_base):
            track_id = reader.read_u4le()
            playlist_id = reader.read_u4le()
            entry_index = reader.read_u4le()
        return cls(track_id=track_id, playlist_id=playlist_id, entry_index=entry_index)