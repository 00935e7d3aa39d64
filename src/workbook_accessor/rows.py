#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/workbook_accessor/rows.py
"""Row traversal and row shape conversion.

A :class:`Row` wraps the engine cells of one physical row and converts
them on demand into one of four shapes: a delimited line, a list of
strings, a fixed-size tuple of strings, or a header-keyed dict.
:class:`RowStream` is the lazy, restartable sequence returned by readers:
every ``iter()`` starts a fresh traversal from the first data row.

"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Iterator, Optional, Sequence, TypeVar

from workbook_accessor.cells import CellValue
from workbook_accessor.constants import DEFAULT_DELIMITER, DEFAULT_QUOTE_CHAR

logger = logging.getLogger(__name__)

T = TypeVar("T")


def iter_indexed_rows(sheet: Any) -> Iterator[tuple[int, list[Any]]]:
    """Yield ``(row_number, cells)`` for each physical row of an openpyxl worksheet.

    Only rows holding at least one cell are yielded. Each row spans from
    column 1 to its own last cell; gaps are ``None``.

    Parameters
    ----------
    sheet : Any
        Openpyxl worksheet

    Yields
    ------
    tuple[int, list[Any]]
        1-based row number and the row's cells

    """
    # openpyxl's iter_rows() creates the cells it visits; reading must leave the sheet unchanged
    store = sheet._cells
    widths: dict[int, int] = {}
    for row, column in list(store):
        if column > widths.get(row, 0):
            widths[row] = column

    for row in sorted(widths):
        yield row, [store.get((row, column)) for column in range(1, widths[row] + 1)]


def next_row_index(sheet: Any) -> int:
    """Return the 1-based number of the row following the last physical row."""
    return max((row for row, _ in sheet._cells), default=0) + 1


def quote_field(text: str, delimiter: str = DEFAULT_DELIMITER) -> str:
    """Wrap ``text`` in double quotes when it contains the delimiter.

    Embedded quote characters are left as they are.
    """
    if delimiter in text:
        return f"{DEFAULT_QUOTE_CHAR}{text}{DEFAULT_QUOTE_CHAR}"
    return text


class Row:
    """One physical row; shapes are computed on each call and never stored."""

    __slots__ = ("_cells",)

    def __init__(self, cells: Sequence[Any]):
        self._cells = cells

    def __len__(self) -> int:
        return len(self._cells)

    def __repr__(self) -> str:
        return f"Row({self.to_list()!r})"

    def values(self) -> list[CellValue]:
        return [CellValue.from_cell(cell) for cell in self._cells]

    def to_list(self) -> list[str]:
        """Canonical text of each cell in column order."""
        return [value.to_text() for value in self.values()]

    def to_array(self) -> tuple[str, ...]:
        """The same values as :meth:`to_list` as a fixed-size tuple."""
        return tuple(self.to_list())

    def to_line(self, delimiter: str = DEFAULT_DELIMITER) -> str:
        """Join the canonical texts with ``delimiter``, quoting texts that contain it."""
        return delimiter.join(quote_field(text, delimiter) for text in self.to_list())

    def to_map(self, header: Sequence[str]) -> dict[str, str]:
        """Pair ``header`` with the canonical texts, earlier columns first.

        Columns missing at the end of the row map to ``""``; cells beyond
        the header width are dropped.
        """
        texts = self.to_list()
        texts.extend([""] * (len(header) - len(texts)))
        return dict(zip(header, texts))


class RowStream(Generic[T]):
    """Lazy, restartable sequence of row shapes over one worksheet.

    Parameters
    ----------
    sheet : Any
        Openpyxl worksheet to traverse
    skip_header : bool
        Skip the first physical row
    shape : Callable[[Row], T]
        Conversion applied to each row
    guard : Callable[[], None], optional
        Called at the start of every traversal; raises to refuse it

    """

    def __init__(
        self,
        sheet: Any,
        skip_header: bool,
        shape: Callable[[Row], T],
        guard: Optional[Callable[[], None]] = None,
    ):
        self._sheet = sheet
        self._skip_header = skip_header
        self._shape = shape
        self._guard = guard

    def __iter__(self) -> Iterator[T]:
        if self._guard is not None:
            self._guard()
        rows = iter_indexed_rows(self._sheet)
        if self._skip_header:
            next(rows, None)
        for _, cells in rows:
            yield self._shape(Row(cells))

    def __repr__(self) -> str:
        return f"RowStream(sheet={self._sheet.title!r}, skip_header={self._skip_header})"
