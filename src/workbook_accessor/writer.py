#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/workbook_accessor/writer.py
"""Row-oriented writing of spreadsheet workbooks.

Examples
--------
    >>> from workbook_accessor import WorkbookWriter
    >>> writer = WorkbookWriter.open_xlsx()
    >>> writer.add_row("Name", "Age").add_row("Alice", 30)
    >>> writer.create_and_turn_to_sheet("Archive").add_row("Bob", 41)
    >>> writer.save("people.xlsx")

"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Hashable, Optional, Union

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from openpyxl import Workbook

from workbook_accessor.cells import CellValue
from workbook_accessor.constants import FORMAT_EXTENSIONS
from workbook_accessor.engine import WorkbookDocument
from workbook_accessor.exceptions import ValidationError
from workbook_accessor.navigator import SheetNavigator
from workbook_accessor.options import WriterOptions
from workbook_accessor.reader import WorkbookReader
from workbook_accessor.rows import iter_indexed_rows, next_row_index
from workbook_accessor.utils.decorators import requires_open

logger = logging.getLogger(__name__)


class WorkbookWriter(SheetNavigator):
    """Build a workbook row by row.

    Parameters
    ----------
    document : openpyxl.Workbook or WorkbookDocument, optional
        Existing in-memory workbook to append to. It is borrowed, not owned:
        :meth:`close` leaves it to the caller. When omitted, a new workbook
        with a single empty sheet is created and owned by the writer.
    options : WriterOptions, optional
        Container format and default sheet name. The format applies to new
        workbooks and to openpyxl workbooks passed in.

    """

    def __init__(
        self,
        document: Optional[Union[Workbook, WorkbookDocument]] = None,
        options: Optional[WriterOptions] = None,
    ):
        """Create or wrap the workbook to write to."""
        options = options or WriterOptions()
        if document is None:
            doc = WorkbookDocument.new(options.workbook_format, options.sheet_name)
            owned = True
        elif isinstance(document, WorkbookDocument):
            doc, owned = document, False
        elif isinstance(document, Workbook):
            doc, owned = WorkbookDocument(document, options.workbook_format), False
        else:
            raise ValidationError(
                f"Unsupported workbook: {type(document).__name__}", parameter_name="document", parameter_value=document
            )

        if doc.sheet_count() == 0:
            doc.create_sheet(options.sheet_name)

        super().__init__(doc, owned)
        self._options = options

    @classmethod
    def open(cls, document: Union[Workbook, WorkbookDocument]) -> Self:
        """Wrap an existing in-memory workbook."""
        if document is None:
            raise ValidationError("Workbook must not be None", parameter_name="document", parameter_value=document)
        return cls(document)

    @classmethod
    def open_xls(cls) -> Self:
        """Create an empty workbook saved in the legacy ``.xls`` container."""
        return cls(options=WriterOptions(workbook_format="xls"))

    @classmethod
    def open_xlsx(cls) -> Self:
        """Create an empty workbook saved in the ``.xlsx`` container."""
        return cls(options=WriterOptions(workbook_format="xlsx"))

    @property
    @requires_open
    def workbook_format(self) -> str:
        return self._document.workbook_format

    # --------------------------- Building ---------------------------
    @requires_open
    def set_sheet_name(self, name: str) -> Self:
        """Rename the current sheet.

        Raises
        ------
        SheetExistsError
            If another sheet already has that name

        """
        self._document.rename_sheet(self._sheet, self._validate_name(name))
        return self

    @requires_open
    def add_row(self, *values: Any) -> Self:
        """Append one row to the current sheet.

        ``None`` becomes a blank cell; booleans, numbers, dates, times, rich
        text and openpyxl ``Hyperlink`` objects are stored natively; any other
        value is stored as its ``str()`` form. Either every value is stored
        or, when one of them is rejected, none is.

        Raises
        ------
        ValidationError
            If a value cannot be stored (timezone-aware datetimes, text with
            control characters)

        """
        encoded = [CellValue.of(value) for value in values]
        row = next_row_index(self._sheet)

        if not encoded:
            # an empty row still occupies its position
            self._sheet.cell(row=row, column=1)
        for column, value in enumerate(encoded, start=1):
            value.encode(self._sheet.cell(row=row, column=column))
        return self

    # --------------------------- Output ---------------------------
    @requires_open
    def save(self, path: Union[str, os.PathLike]) -> str:
        """Serialize the workbook to ``path`` in its container format.

        Returns
        -------
        str
            The path written

        Raises
        ------
        OutputWriteError
            If the workbook cannot be written

        """
        if path is None:
            raise ValidationError("Path must not be None", parameter_name="path", parameter_value=path)
        file_path = os.fspath(path)
        extension = os.path.splitext(file_path)[1].lower()
        if FORMAT_EXTENSIONS.get(extension, self.workbook_format) != self.workbook_format:
            logger.warning(
                "Saving %s workbook to %s; the extension suggests another format", self.workbook_format, file_path
            )

        self._document.write_to(file_path)
        logger.info("Saved workbook to %s", file_path)
        return file_path

    @requires_open
    def to_bytes(self) -> bytes:
        """Serialize the workbook in its container format."""
        return self._document.to_bytes()

    @requires_open
    def to_reader(self, has_header: bool = True) -> WorkbookReader:
        """Return a reader over this writer's workbook, starting at the first sheet."""
        return WorkbookReader(self._document, has_header=has_header)

    # --------------------------- Comparison ---------------------------
    @requires_open
    def _snapshot(self) -> Hashable:
        sheets = []
        for sheet in self._document.sheets:
            rows = tuple(
                (row, tuple((value.kind, value.to_text()) for value in map(CellValue.from_cell, cells)))
                for row, cells in iter_indexed_rows(sheet)
            )
            sheets.append((sheet.title, rows))
        return self.workbook_format, tuple(sheets)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WorkbookWriter):
            return NotImplemented
        return self._snapshot() == other._snapshot()

    def __hash__(self) -> int:
        return hash(self._snapshot())

    def __repr__(self) -> str:
        if self.closed:
            return "WorkbookWriter(<closed>)"
        return f"WorkbookWriter({self.to_reader(has_header=False).to_multimap()!r})"
