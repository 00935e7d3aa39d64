#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/workbook_accessor/engine.py
"""Adapter around the spreadsheet engine.

The in-memory model of every workbook is an ``openpyxl.Workbook``. Files in
the modern ``.xlsx`` container are loaded and saved by openpyxl directly;
the legacy ``.xls`` container is converted on load and on save by
:mod:`workbook_accessor.legacy`. Readers and writers only talk to
:class:`WorkbookDocument` and the row helpers in this module.

"""

from __future__ import annotations

import logging
import os
from io import BytesIO
from typing import IO, Any, Optional, Union

from openpyxl import Workbook, load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from workbook_accessor.constants import (
    DEFAULT_SHEET_NAME,
    FORMAT_EXTENSIONS,
    MAGIC_BYTES,
    SUPPORTED_FORMATS,
    WorkbookFormat,
)
from workbook_accessor.exceptions import (
    DependencyError,
    FormatError,
    OutputWriteError,
    SheetExistsError,
    SheetNotFoundError,
    ValidationError,
    WorkbookOpenError,
)
from workbook_accessor.legacy import load_xls, save_xls
from workbook_accessor.options import ReaderOptions
from workbook_accessor.utils.decorators import debug_timer
from workbook_accessor.utils.inputs import InputType, validate_and_convert_input

logger = logging.getLogger(__name__)

WorkbookSource = Union[InputType, Workbook, "WorkbookDocument"]


class WorkbookDocument:
    """An in-memory workbook together with the container format it is saved in.

    Parameters
    ----------
    workbook : openpyxl.Workbook
        The engine document
    workbook_format : {"xls", "xlsx"}, default "xlsx"
        Container format used by :meth:`write_to` and :meth:`to_bytes`
    source_path : str, optional
        Path the workbook was loaded from, if any

    Raises
    ------
    ValidationError
        If ``workbook`` was opened ``read_only`` or created ``write_only``

    """

    def __init__(self, workbook: Workbook, workbook_format: WorkbookFormat = "xlsx", source_path: Optional[str] = None):
        """Initialize the document wrapper."""
        if workbook_format not in SUPPORTED_FORMATS:
            raise FormatError(format_type=workbook_format, supported_formats=SUPPORTED_FORMATS)
        if workbook.read_only or workbook.write_only:
            # streaming worksheets keep no cell store to read back or append to
            mode = "read-only" if workbook.read_only else "write-only"
            raise ValidationError(
                f"Streaming {mode} workbooks are not supported", parameter_name="workbook", parameter_value=workbook
            )
        self.workbook = workbook
        self.workbook_format: WorkbookFormat = workbook_format
        self.source_path = source_path

    @classmethod
    def new(cls, workbook_format: WorkbookFormat = "xlsx", sheet_name: str = DEFAULT_SHEET_NAME) -> WorkbookDocument:
        """Create an empty workbook holding a single sheet."""
        workbook = Workbook()
        workbook.active.title = sheet_name
        return cls(workbook, workbook_format)

    def __repr__(self) -> str:
        return f"WorkbookDocument(format={self.workbook_format!r}, sheets={self.sheet_names()!r})"

    # --------------------------- Sheet lookup ---------------------------
    @property
    def sheets(self) -> list[Worksheet]:
        """Worksheets in storage order (chartsheets are not navigable)."""
        return list(self.workbook.worksheets)

    def sheet_names(self) -> list[str]:
        return [sheet.title for sheet in self.workbook.worksheets]

    def sheet_count(self) -> int:
        return len(self.workbook.worksheets)

    def sheet_at(self, index: int) -> Worksheet:
        """Return the worksheet at ``index``.

        Raises
        ------
        SheetNotFoundError
            If ``index`` is outside ``[0, sheet_count())``

        """
        sheets = self.workbook.worksheets
        if not 0 <= index < len(sheets):
            raise SheetNotFoundError(index)
        return sheets[index]

    def sheet_by_name(self, name: str) -> Worksheet:
        """Return the worksheet titled exactly ``name``.

        Raises
        ------
        SheetNotFoundError
            If no worksheet has that title

        """
        for sheet in self.workbook.worksheets:
            if sheet.title == name:
                return sheet
        raise SheetNotFoundError(name)

    def has_sheet_named(self, name: str, exclude: Optional[Worksheet] = None) -> bool:
        """Check for a sheet title collision, ignoring case as the engine does."""
        folded = name.lower()
        return any(sheet.title.lower() == folded for sheet in self.workbook.worksheets if sheet is not exclude)

    # --------------------------- Sheet mutation ---------------------------
    def create_sheet(self, name: str) -> Worksheet:
        """Append a new empty worksheet titled ``name``.

        Raises
        ------
        SheetExistsError
            If a sheet with that title already exists
        ValidationError
            If the engine rejects the title

        """
        if self.has_sheet_named(name):
            raise SheetExistsError(name)
        try:
            sheet = self.workbook.create_sheet(title=name)
        except ValueError as e:
            raise ValidationError(
                f"Invalid sheet name: {name!r}", parameter_name="name", parameter_value=name, original_error=e
            ) from e
        logger.debug("Created sheet %r", name)
        return sheet

    def rename_sheet(self, sheet: Worksheet, name: str) -> None:
        """Rename ``sheet`` to ``name``.

        Raises
        ------
        SheetExistsError
            If another sheet already has that title
        ValidationError
            If the engine rejects the title

        """
        if sheet.title == name:
            return
        if self.has_sheet_named(name, exclude=sheet):
            raise SheetExistsError(name)
        if sheet.title.lower() == name.lower():
            # the engine counts the sheet's own title as a duplicate of a case variant
            sheet.title = self._unused_title()
        try:
            sheet.title = name
        except ValueError as e:
            raise ValidationError(
                f"Invalid sheet name: {name!r}", parameter_name="name", parameter_value=name, original_error=e
            ) from e
        logger.debug("Renamed sheet to %r", name)

    def _unused_title(self) -> str:
        counter = 0
        while self.has_sheet_named(f"~rename{counter}"):
            counter += 1
        return f"~rename{counter}"

    # --------------------------- Serialization ---------------------------
    def write_to(self, target: Union[str, os.PathLike, IO[bytes]]) -> None:
        """Serialize the workbook to a path or binary stream in its container format.

        Raises
        ------
        OutputWriteError
            If the engine fails to serialize or the target cannot be written
        DependencyError
            If the ``.xls`` writer is not installed

        """
        file_path = os.fspath(target) if isinstance(target, (str, os.PathLike)) else None
        try:
            with debug_timer(logger, f"Writing {self.workbook_format} workbook"):
                if self.workbook_format == "xls":
                    save_xls(self.workbook, target)
                else:
                    self.workbook.save(target)
        except DependencyError:
            raise
        except Exception as e:
            raise OutputWriteError(file_path=file_path, original_error=e) from e

    def to_bytes(self) -> bytes:
        buffer = BytesIO()
        self.write_to(buffer)
        return buffer.getvalue()

    def release(self) -> None:
        """Release engine resources held by the workbook."""
        self.workbook.close()


# --------------------------- Opening ---------------------------
def detect_format(data: bytes, file_path: Optional[str] = None) -> WorkbookFormat:
    """Detect the container format from leading bytes, falling back to the extension.

    Parameters
    ----------
    data : bytes
        At least the first eight bytes of the workbook
    file_path : str, optional
        Path used for the extension fallback

    Returns
    -------
    WorkbookFormat
        "xlsx" or "xls"

    Raises
    ------
    FormatError
        If neither the magic bytes nor the extension identify a format

    """
    for magic, workbook_format in MAGIC_BYTES:
        if data.startswith(magic):
            return workbook_format

    if file_path:
        extension = os.path.splitext(file_path)[1].lower()
        if extension in FORMAT_EXTENSIONS:
            return FORMAT_EXTENSIONS[extension]
        raise FormatError(format_type=extension or file_path, supported_formats=SUPPORTED_FORMATS)

    raise FormatError(message="Workbook format could not be detected from its content")


def _read_source_bytes(converted: Any, input_type: str) -> bytes:
    if input_type == "path":
        with open(converted, "rb") as handle:
            return handle.read()
    data = converted.read()
    if not isinstance(data, (bytes, bytearray)):
        raise ValidationError("File must be opened in binary mode", parameter_name="source", parameter_value=converted)
    return bytes(data)


def open_document(source: WorkbookSource, options: Optional[ReaderOptions] = None) -> tuple[WorkbookDocument, bool]:
    """Open a workbook from a path, bytes, stream or in-memory document.

    Parameters
    ----------
    source : str, PathLike, bytes, binary stream, openpyxl.Workbook or WorkbookDocument
        Where to read the workbook from
    options : ReaderOptions, optional
        Loading options (formula values, rich text)

    Returns
    -------
    tuple[WorkbookDocument, bool]
        The document and whether the caller owns it. In-memory documents
        passed in are never owned.

    Raises
    ------
    WorkbookOpenError
        If the source is missing or the engine cannot parse it
    ValidationError
        If the source is None or of an unsupported type
    DependencyError
        If an ``.xls`` source is given and xlrd is not installed

    """
    options = options or ReaderOptions()

    if isinstance(source, WorkbookDocument):
        return source, False
    if isinstance(source, Workbook):
        return WorkbookDocument(source, "xlsx"), False

    converted, input_type = validate_and_convert_input(source)
    if input_type == "object":
        raise ValidationError(
            f"Unsupported workbook source: {type(source).__name__}", parameter_name="source", parameter_value=source
        )

    file_path = converted if input_type == "path" else None
    description = file_path or f"<{input_type}>"
    try:
        with debug_timer(logger, f"Opening workbook {description}"):
            data = _read_source_bytes(converted, input_type)
            workbook_format = detect_format(data[:8], file_path)
            if workbook_format == "xls":
                workbook = load_xls(data)
            else:
                workbook = load_workbook(BytesIO(data), data_only=options.data_only, rich_text=options.rich_text)
    except (DependencyError, ValidationError):
        raise
    except Exception as e:
        raise WorkbookOpenError(
            f"Failed to open workbook: {description}: {e!r}", file_path=file_path, original_error=e
        ) from e

    if not workbook.worksheets:
        raise WorkbookOpenError(f"Workbook has no worksheets: {description}", file_path=file_path)

    logger.debug("Opened %s workbook %s with sheets %r", workbook_format, description, workbook.sheetnames)
    return WorkbookDocument(workbook, workbook_format, source_path=file_path), True
