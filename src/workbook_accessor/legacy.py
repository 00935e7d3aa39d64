#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/workbook_accessor/legacy.py
"""Conversion between the legacy ``.xls`` container and the in-memory model.

xlrd reads ``.xls`` files and xlwt writes them; neither can edit a
workbook in place, so ``.xls`` content is copied into an
``openpyxl.Workbook`` on load and copied back out on save.

Hyperlinks and rich text runs are written as their plain text.
"""

from __future__ import annotations

import datetime
import logging
from typing import IO, Any, Union

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from workbook_accessor.cells import CellKind, CellValue
from workbook_accessor.constants import (
    DEPS_XLS_READ,
    DEPS_XLS_WRITE,
    XLS_DATE_FORMAT,
    XLS_DATETIME_FORMAT,
    XLS_TIME_FORMAT,
)
from workbook_accessor.exceptions import ValidationError
from workbook_accessor.rows import iter_indexed_rows
from workbook_accessor.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)


def _xls_cell_value(cell: Any, datemode: int) -> Any:
    """Convert an xlrd cell to the Python value openpyxl would hold."""
    import xlrd

    ctype = cell.ctype
    if ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
        return None
    if ctype == xlrd.XL_CELL_BOOLEAN:
        return bool(cell.value)
    if ctype == xlrd.XL_CELL_ERROR:
        return xlrd.error_text_from_code.get(cell.value, "#ERR")
    if ctype == xlrd.XL_CELL_DATE:
        try:
            moment = xlrd.xldate.xldate_as_datetime(cell.value, datemode)
        except (OverflowError, ValueError) as e:
            logger.debug(f"Keeping serial number {cell.value!r} for unconvertible date: {e!r}")
            return cell.value
        return moment.time() if 0 <= cell.value < 1 else moment
    return cell.value


@requires_dependencies("xls", DEPS_XLS_READ)
def load_xls(data: bytes) -> Workbook:
    """Copy the content of an ``.xls`` file into a new openpyxl workbook.

    Parameters
    ----------
    data : bytes
        Raw ``.xls`` file content

    Returns
    -------
    openpyxl.Workbook
        Workbook holding one worksheet per ``.xls`` sheet, in order

    Raises
    ------
    ValueError
        If a text cell holds characters a worksheet cannot store

    """
    import xlrd

    book = xlrd.open_workbook(file_contents=data, ragged_rows=True)
    workbook = Workbook()
    workbook.remove(workbook.active)

    for source in book.sheets():
        target = workbook.create_sheet(title=source.name)
        for row_index in range(source.nrows):
            for column_index, cell in enumerate(source.row(row_index)):
                value = _xls_cell_value(cell, book.datemode)
                if value is None:
                    continue
                try:
                    cell_value = CellValue.of(value)
                except ValidationError as e:
                    coordinate = f"{get_column_letter(column_index + 1)}{row_index + 1}"
                    raise ValueError(f"Cell {source.name}!{coordinate} cannot be stored: {e.message}") from e
                cell_value.encode(target.cell(row=row_index + 1, column=column_index + 1))
        logger.debug("Loaded legacy sheet %r with %d rows", source.name, source.nrows)

    return workbook


@requires_dependencies("xls", DEPS_XLS_WRITE)
def save_xls(workbook: Workbook, target: Union[str, IO[bytes]]) -> None:
    """Write an openpyxl workbook to ``target`` in the ``.xls`` container.

    Parameters
    ----------
    workbook : openpyxl.Workbook
        Workbook to serialize
    target : str or binary stream
        Destination path or stream

    """
    import xlwt

    book = xlwt.Workbook(encoding="utf-8")
    date_styles = {
        datetime.datetime: xlwt.easyxf(num_format_str=XLS_DATETIME_FORMAT),
        datetime.date: xlwt.easyxf(num_format_str=XLS_DATE_FORMAT),
        datetime.time: xlwt.easyxf(num_format_str=XLS_TIME_FORMAT),
    }

    for sheet in workbook.worksheets:
        out = book.add_sheet(sheet.title, cell_overwrite_ok=True)
        for row_number, cells in iter_indexed_rows(sheet):
            for column_index, cell in enumerate(cells):
                value = CellValue.from_cell(cell)
                if value.kind is CellKind.BLANK:
                    continue
                if value.kind in (CellKind.BOOLEAN, CellKind.NUMERIC):
                    out.write(row_number - 1, column_index, value.value)
                elif value.kind is CellKind.DATE and type(value.value) in date_styles:
                    out.write(row_number - 1, column_index, value.value, date_styles[type(value.value)])
                else:
                    out.write(row_number - 1, column_index, value.to_text())

    book.save(target)
