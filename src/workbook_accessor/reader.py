#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/workbook_accessor/reader.py
"""Row-oriented reading of spreadsheet workbooks.

Examples
--------
Read a sheet whose first row holds column labels:

    >>> from workbook_accessor import WorkbookReader
    >>> with WorkbookReader.open("people.xls") as reader:
    ...     reader.header
    ...     for record in reader.to_maps():
    ...         print(record["Name"])

Read the same file without treating the first row as a header:

    >>> reader = WorkbookReader.open("people.xls").without_header()
    >>> next(iter(reader.to_csv()))
    'Name,Age'

"""

from __future__ import annotations

import logging
import sys
from typing import Callable, Optional, TypeVar

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from workbook_accessor.engine import WorkbookSource, open_document
from workbook_accessor.exceptions import HeaderNotFoundError, ValidationError
from workbook_accessor.navigator import SheetKey, SheetNavigator
from workbook_accessor.options import ReaderOptions
from workbook_accessor.rows import Row, RowStream, iter_indexed_rows
from workbook_accessor.utils.decorators import requires_open

logger = logging.getLogger(__name__)

T = TypeVar("T")


class WorkbookReader(SheetNavigator):
    """Read a workbook as a sequence of rows.

    Parameters
    ----------
    source : str, PathLike, bytes, binary stream, openpyxl.Workbook or WorkbookDocument
        Workbook to read. Sources given as paths, bytes or streams are
        opened and owned by the reader; in-memory workbooks are borrowed
        and left open on :meth:`close`.
    has_header : bool, optional
        Treat the first row of each sheet as a header. Overrides
        ``options.has_header`` when given.
    options : ReaderOptions, optional
        Loading and formatting options

    Raises
    ------
    WorkbookOpenError
        If the source is missing or cannot be parsed
    ValidationError
        If the source is None or of an unsupported type

    """

    def __init__(
        self,
        source: WorkbookSource,
        has_header: Optional[bool] = None,
        options: Optional[ReaderOptions] = None,
    ):
        """Open the source and derive the header of the first sheet."""
        options = options or ReaderOptions()
        if has_header is not None:
            options = options.create_updated(has_header=has_header)

        document, owned = open_document(source, options)
        super().__init__(document, owned)
        self._options = options
        self._has_header = options.has_header
        self._header: list[str] = []
        self._derive_header()

    @classmethod
    def open(cls, source: WorkbookSource, has_header: bool = True, options: Optional[ReaderOptions] = None) -> Self:
        """Open a workbook for reading."""
        return cls(source, has_header=has_header, options=options)

    def __repr__(self) -> str:
        if self.closed:
            return "WorkbookReader(<closed>)"
        return f"WorkbookReader(sheet={self._sheet.title!r}, has_header={self._has_header})"

    # --------------------------- Header ---------------------------
    @property
    @requires_open
    def has_header(self) -> bool:
        """Whether the first row of the current sheet is treated as a header."""
        return self._has_header

    @property
    @requires_open
    def header(self) -> list[str]:
        """Column names of the current sheet; empty when header mode is off."""
        return list(self._header)

    @requires_open
    def with_header(self) -> Self:
        """Treat the first row of the current sheet as a header."""
        return self._set_header_mode(True)

    @requires_open
    def without_header(self) -> Self:
        """Treat the first row of the current sheet as ordinary data."""
        return self._set_header_mode(False)

    @requires_open
    def turn_to_sheet(self, sheet: SheetKey, has_header: Optional[bool] = None) -> Self:
        """Make another sheet current and derive its header.

        Parameters
        ----------
        sheet : int or str
            Zero-based sheet index or exact sheet name
        has_header : bool, optional
            New header mode; keeps the current mode when omitted

        Raises
        ------
        SheetNotFoundError
            If the index is out of range or no sheet has the name

        """
        target = self._resolve_sheet(sheet)
        if has_header is not None:
            self._has_header = has_header
        self._sheet = target
        logger.debug("Turned to sheet %r (has_header=%s)", target.title, self._has_header)
        self._on_sheet_changed()
        return self

    def _set_header_mode(self, has_header: bool) -> Self:
        self._has_header = has_header
        self._derive_header()
        return self

    def _on_sheet_changed(self) -> None:
        self._derive_header()

    def _derive_header(self) -> None:
        self._header = []
        if not self._has_header:
            return
        first = next(iter_indexed_rows(self._sheet), None)
        if first is not None:
            self._header = Row(first[1]).to_list()
        logger.debug("Derived header for sheet %r: %r", self._sheet.title, self._header)

    # --------------------------- Row shapes ---------------------------
    @requires_open
    def to_csv(self, delimiter: Optional[str] = None) -> RowStream[str]:
        """Rows as delimited lines.

        Cells containing the delimiter are wrapped in double quotes; quote
        characters inside cells are not escaped.

        Parameters
        ----------
        delimiter : str, optional
            Field delimiter; defaults to ``options.delimiter``

        Raises
        ------
        ValidationError
            If the delimiter is not a non-empty string

        """
        delimiter = delimiter if delimiter is not None else self._options.delimiter
        if not isinstance(delimiter, str) or not delimiter:
            raise ValidationError(
                f"Delimiter must be a non-empty string, got {delimiter!r}",
                parameter_name="delimiter",
                parameter_value=delimiter,
            )
        return self._rows(lambda row: row.to_line(delimiter))

    @requires_open
    def to_lists(self) -> RowStream[list[str]]:
        """Rows as lists of canonical cell text."""
        return self._rows(Row.to_list)

    @requires_open
    def to_arrays(self) -> RowStream[tuple[str, ...]]:
        """Rows as fixed-size tuples of canonical cell text."""
        return self._rows(Row.to_array)

    @requires_open
    def to_maps(self) -> RowStream[dict[str, str]]:
        """Rows as dicts keyed by the header.

        Raises
        ------
        HeaderNotFoundError
            If header mode is off for the current sheet

        """
        if not self._has_header:
            raise HeaderNotFoundError()
        header = list(self._header)
        return self._rows(lambda row: row.to_map(header))

    as_delimited_lines = to_csv
    as_lists = to_lists
    as_arrays = to_arrays
    as_mappings = to_maps

    @requires_open
    def to_multimap(self) -> dict[str, list[list[str]]]:
        """Every sheet name mapped to its rows as lists, in the current header mode.

        The current sheet is left unchanged.
        """
        multimap: dict[str, list[list[str]]] = {}
        for sheet in self._document.sheets:
            rows = iter_indexed_rows(sheet)
            if self._has_header:
                next(rows, None)
            multimap[sheet.title] = [Row(cells).to_list() for _, cells in rows]
        return multimap

    def _rows(self, shape: Callable[[Row], T]) -> RowStream[T]:
        return RowStream(self._sheet, self._has_header, shape, guard=self._ensure_open)
