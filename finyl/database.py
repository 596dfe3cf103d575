"""Reading rekordbox export databases: header, tables, pages and row indexes."""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from finyl.binary import ParseError, Reader
from finyl.rows import Row, read_row
from finyl.simple_rows import PageType

_GAP = b"\x00\x00\x00\x00"
_ROWS_PER_GROUP = 16
_GROUP_SIZE = 36
_NUM_ROWS_LARGE_INVALID = 0x1FFF
_NON_DATA_PAGE_FLAG = 0x40


def _page_type(value: int) -> int:
    try:
        return PageType(value)
    except ValueError:
        return value


def _check_gap(gap: bytes, where: str) -> None:
    if gap != _GAP:
        raise ParseError(f"expected zero gap at {where}, got {gap.hex()}")


@dataclass(frozen=True)
class RowRef:
    """A slot in a page's row index, pointing at a row that may be deleted."""

    group: RowGroup
    row_index: int

    @property
    def ofs_row(self) -> int:
        """Offset of the row past the end of the page header."""
        reader = self.group.page.reader
        return reader.peek_u2le(self.group.base - (6 + 2 * self.row_index))

    @property
    def row_base(self) -> int:
        """Position of the row relative to the start of its page."""
        return self.ofs_row + self.group.page.heap_pos

    @property
    def present(self) -> bool:
        """True unless the row index marks this row as deleted."""
        return (self.group.row_present_flags >> self.row_index) & 1 != 0

    def body(self) -> Row | None:
        """Return the parsed row, or None when it is absent or of no known type."""
        if not self.present:
            return None
        page = self.group.page
        return read_row(page.type, page.reader, self.row_base)


@dataclass(frozen=True)
class RowGroup:
    """Up to sixteen row offsets and their presence flags, built from the page end."""

    page: Page
    group_index: int

    @property
    def base(self) -> int:
        """The position at which this group's index entries end."""
        return self.page.len_page - self.group_index * _GROUP_SIZE

    @property
    def row_present_flags(self) -> int:
        """A bit per row; the low bit belongs to the first row of the group."""
        return self.page.reader.peek_u2le(self.base - 4)

    def rows(self) -> list[RowRef]:
        """Return the row references held by this group."""
        if self.group_index < self.page.num_groups() - 1:
            count = _ROWS_PER_GROUP
        else:
            count = (self.page.num_rows() - 1) % _ROWS_PER_GROUP + 1
        return [RowRef(self, index) for index in range(count)]


@dataclass(frozen=True)
class Page:
    """A table page: a header, a heap of rows and a row index at its end."""

    page_index: int
    type: int
    next_page: int
    num_rows_small: int
    page_flags: int
    free_size: int
    used_size: int
    num_rows_large: int
    heap_pos: int
    len_page: int
    reader: Reader = field(repr=False, compare=False)

    def num_rows(self) -> int:
        """The number of row index entries on this page, deleted ones included."""
        if (
            self.num_rows_large > self.num_rows_small
            and self.num_rows_large != _NUM_ROWS_LARGE_INVALID
        ):
            return self.num_rows_large
        return self.num_rows_small

    def num_groups(self) -> int:
        """The number of row groups in the index."""
        rows = self.num_rows()
        # Division truncates towards zero, so an empty page still has one group.
        return (rows - 1) // _ROWS_PER_GROUP + 1 if rows > 0 else 1

    def is_data_page(self) -> bool:
        """True when the page holds actual rows."""
        return self.page_flags & _NON_DATA_PAGE_FLAG == 0

    def row_groups(self) -> list[RowGroup] | None:
        """Return the row groups, or None for pages that carry no rows."""
        if not self.is_data_page():
            return None
        return [RowGroup(self, index) for index in range(self.num_groups())]

    def rows(self) -> Iterator[Row]:
        """Yield every present row on the page in index order."""
        for group in self.row_groups() or ():
            for ref in group.rows():
                body = ref.body()
                if body is not None:
                    yield body


def _parse_page(data: bytes, len_page: int) -> Page:
    reader = Reader(data)
    _check_gap(reader.read_bytes(4), "page header")
    page_index = reader.read_u4le()
    page_type = _page_type(reader.read_u4le())
    next_page = reader.read_u4le()
    reader.read_u4le()
    reader.read_bytes(4)
    num_rows_small = reader.read_u1()
    reader.read_u1()
    reader.read_u1()
    page_flags = reader.read_u1()
    free_size = reader.read_u2le()
    used_size = reader.read_u2le()
    reader.read_u2le()
    num_rows_large = reader.read_u2le()
    reader.read_u2le()
    reader.read_u2le()
    return Page(
        page_index=page_index,
        type=page_type,
        next_page=next_page,
        num_rows_small=num_rows_small,
        page_flags=page_flags,
        free_size=free_size,
        used_size=used_size,
        num_rows_large=num_rows_large,
        heap_pos=reader.pos,
        len_page=len_page,
        reader=reader,
    )


@dataclass(frozen=True)
class Table:
    """A table header: its row type and the page indices of its linked pages."""

    type: int
    empty_candidate: int
    first_page: int
    last_page: int


@dataclass
class Database:
    """A rekordbox export database held in memory."""

    len_page: int
    num_tables: int
    next_unused_page: int
    sequence: int
    tables: tuple[Table, ...]
    reader: Reader = field(repr=False)
    _pages: dict[int, Page] = field(default_factory=dict, init=False, repr=False)

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> Database:
        """Parse the database header and table list from raw bytes."""
        reader = Reader(data)
        reader.read_u4le()
        len_page = reader.read_u4le()
        num_tables = reader.read_u4le()
        next_unused_page = reader.read_u4le()
        reader.read_u4le()
        sequence = reader.read_u4le()
        _check_gap(reader.read_bytes(4), "file header")
        tables = []
        for _ in range(num_tables):
            table_type = _page_type(reader.read_u4le())
            empty_candidate = reader.read_u4le()
            first_page = reader.read_u4le()
            last_page = reader.read_u4le()
            tables.append(Table(table_type, empty_candidate, first_page, last_page))
        return cls(
            len_page=len_page,
            num_tables=num_tables,
            next_unused_page=next_unused_page,
            sequence=sequence,
            tables=tuple(tables),
            reader=reader,
        )

    @classmethod
    def open(cls, path: str | os.PathLike[str]) -> Database:
        """Read and parse a database file."""
        return cls.from_bytes(Path(path).read_bytes())

    def page(self, index: int) -> Page:
        """Return the page with the given index."""
        cached = self._pages.get(index)
        if cached is not None:
            return cached
        with self.reader.at(self.len_page * index):
            data = self.reader.read_bytes(self.len_page)
        page = _parse_page(data, self.len_page)
        self._pages[index] = page
        return page

    def table(self, page_type: int) -> Table:
        """Return the first table holding rows of the given type."""
        for table in self.tables:
            if table.type == page_type:
                return table
        raise KeyError(f"no table of type {page_type!r}")

    def pages(self, table: Table) -> Iterator[Page]:
        """Follow a table's linked pages from its first page to its last."""
        index = table.first_page
        seen: set[int] = set()
        while index not in seen and (index + 1) * self.len_page <= len(self.reader):
            seen.add(index)
            page = self.page(index)
            if page.type != table.type:
                break
            yield page
            if index == table.last_page:
                break
            index = page.next_page

    def rows(self, page_type: int) -> Iterator[Row]:
        """Yield every present row of the table of the given type."""
        for page in self.pages(self.table(page_type)):
            if page.is_data_page():
                yield from page.rows()