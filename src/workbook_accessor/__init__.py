#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/workbook_accessor/__init__.py
"""workbook_accessor - row-oriented access to spreadsheet workbooks.

Read a workbook as rows of canonical text, in four shapes (delimited
lines, lists, tuples and header-keyed dicts), move between its sheets,
and build new workbooks row by row. ``.xlsx`` files are handled by
openpyxl; legacy ``.xls`` files are read with xlrd and written with xlwt.

Examples
--------
Read every record of the second sheet:

    >>> from workbook_accessor import WorkbookReader
    >>> with WorkbookReader.open("report.xlsx") as reader:
    ...     reader.turn_to_sheet(1)
    ...     records = list(reader.to_maps())

Write a small legacy workbook:

    >>> from workbook_accessor import WorkbookWriter
    >>> with WorkbookWriter.open_xls() as writer:
    ...     writer.add_row("abc", "def").save("out.xls")

"""

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "workbook_accessor requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from workbook_accessor.cells import CellKind, CellValue, format_number, to_text
from workbook_accessor.constants import WorkbookFormat
from workbook_accessor.engine import WorkbookDocument, open_document
from workbook_accessor.exceptions import (
    DependencyError,
    FileError,
    FormatError,
    HeaderNotFoundError,
    OutputWriteError,
    SheetExistsError,
    SheetNotFoundError,
    ValidationError,
    WorkbookAccessorError,
    WorkbookClosedError,
    WorkbookOpenError,
)
from workbook_accessor.logging_utils import configure_logging
from workbook_accessor.options import ReaderOptions, WriterOptions
from workbook_accessor.reader import WorkbookReader
from workbook_accessor.rows import Row, RowStream
from workbook_accessor.writer import WorkbookWriter

__all__ = [
    "__version__",
    # Readers and writers
    "WorkbookReader",
    "WorkbookWriter",
    "WorkbookDocument",
    "open_document",
    # Rows and cells
    "Row",
    "RowStream",
    "CellKind",
    "CellValue",
    "format_number",
    "to_text",
    # Options
    "ReaderOptions",
    "WriterOptions",
    "WorkbookFormat",
    # Logging
    "configure_logging",
    # Exceptions
    "WorkbookAccessorError",
    "ValidationError",
    "SheetNotFoundError",
    "SheetExistsError",
    "FileError",
    "WorkbookOpenError",
    "OutputWriteError",
    "FormatError",
    "WorkbookClosedError",
    "HeaderNotFoundError",
    "DependencyError",
]
