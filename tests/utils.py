"""Test utilities for the workbook_accessor test suite.

This module builds the workbooks used across the tests with openpyxl and
xlwt directly, so fixtures never depend on the code under test.
"""

import datetime
import shutil
import tempfile
from io import BytesIO
from pathlib import Path
from typing import Any, Sequence, Union

import openpyxl
import xlwt

PII_SHEET_NAME = "PII_20130328154417"

PII_HEADER = [
    "編碼日期", "GUID", "MRN", "身份證字號", "姓氏", "名字", "出生月", "出生日", "出生年",
    "聯絡電話", "性別", "收案醫師", "收案醫院名稱",
]  # fmt: skip

# Birth month, day and year are stored as numbers; the phone cell holds the delimiter
PII_ROWS: list[list[Any]] = [
    ["2013/03/28", "BIS-KJ415MTP", "A123456", "A286640890", "黃", "小宜", 10, 19, 1979,
     "TEL0910,123,456", None, "李大華", "北榮"],
    ["2013/03/28", "BIS-QH5D2G7W", "A123457", "B120533471", "陳", "志明", 1, 5, 1965,
     "0922-555-101", "男", "李大華", "北榮"],
    ["2013/03/28", "BIS-ZX9C8V7B", "A123458", "C201188213", "林", "美玲", 7, 30, 1988,
     "0933-555-102", "女", "李大華", "北榮"],
    ["2013/03/28", "BIS-N4M3K2J1", "A123459", "D102937465", "王", "大同", 12, 1, 1950,
     "0944-555-103", "男", "張小芬", "北榮"],
    ["2013/03/28", "BIS-P0O9I8U7", "A123460", "E223344556", "張", "雅婷", 3, 14, 1992,
     "0955-555-104", "女", "張小芬", "台大"],
    ["2013/03/28", "BIS-Y6T5R4E3", "A123461", "F134455667", "李", "建國", 10, 10, 1971,
     "0966-555-105", "男", "張小芬", "台大"],
    ["2013/03/28", "BIS-W2Q1A9S8", "A123462", "G245566778", "吳", "淑芬", 5, 22, 1983,
     "0977-555-106", "女", "王志強", "台大"],
    ["2013/03/28", "BIS-D7F6G5H4", "A123463", "H156677889", "劉", "家豪", 9, 9, 1999,
     "0988-555-107", "男", "王志強", "長庚"],
    ["2013/03/28", "BIS-J3K2L1M0", "A123464", "I267788990", "蔡", "宗翰", 2, 28, 1975,
     "0999-555-108", "男", "王志強", "長庚"],
]  # fmt: skip

PII_FIRST_LINE = [
    "2013/03/28", "BIS-KJ415MTP", "A123456", "A286640890", "黃", "小宜", "10", "19", "1979",
    "TEL0910,123,456", "", "李大華", "北榮",
]  # fmt: skip


def create_pii_workbook() -> openpyxl.Workbook:
    """Create a one-sheet workbook with a header row and nine data rows."""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = PII_SHEET_NAME
    ws.append(PII_HEADER)
    for row in PII_ROWS:
        ws.append(row)
    return wb


def create_multi_sheet_workbook() -> openpyxl.Workbook:
    """Create a workbook with a ragged sheet, an empty sheet and a typed sheet.

    - "Ragged": header of three columns, rows of one, three and four cells
    - "Empty": no cells at all
    - "Typed": booleans, numbers and dates below a two-column header

    """
    wb = openpyxl.Workbook()
    ragged = wb.active
    ragged.title = "Ragged"
    ragged.append(["id", "name", "note"])
    ragged.append([1])
    ragged.append([2, "two", "b"])
    ragged.append([3, "three", "c", "extra"])

    wb.create_sheet("Empty")

    typed = wb.create_sheet("Typed")
    typed.append(["kind", "value"])
    typed.append(["flag", True])
    typed.append(["ratio", 2.14540])
    typed.append(["count", 10.0])
    typed.append(["day", datetime.datetime(2013, 3, 28)])
    return wb


def save_workbook_as_xlsx(wb: openpyxl.Workbook, path: Union[str, Path]) -> Path:
    """Save an openpyxl workbook to ``path``."""
    wb.save(path)
    return Path(path)


def workbook_to_xlsx_bytes(wb: openpyxl.Workbook) -> bytes:
    """Serialize an openpyxl workbook to ``.xlsx`` bytes."""
    output = BytesIO()
    wb.save(output)
    return output.getvalue()


def save_workbook_as_xls(wb: openpyxl.Workbook, path: Union[str, Path]) -> Path:
    """Write the cell values of an openpyxl workbook to a legacy ``.xls`` file with xlwt."""
    book = xlwt.Workbook(encoding="utf-8")
    date_style = xlwt.easyxf(num_format_str="YYYY-MM-DD")
    for sheet in wb.worksheets:
        out = book.add_sheet(sheet.title)
        for row_index, row in enumerate(sheet.iter_rows(values_only=True)):
            for column_index, value in enumerate(row):
                if value is None:
                    continue
                if isinstance(value, (datetime.date, datetime.datetime)):
                    out.write(row_index, column_index, value, date_style)
                else:
                    out.write(row_index, column_index, value)
    book.save(str(path))
    return Path(path)


def build_xlsx_bytes(rows: Sequence[Sequence[Any]], title: str = "Sheet1") -> bytes:
    """Build ``.xlsx`` bytes for a single sheet holding ``rows``."""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = title
    for row in rows:
        ws.append(list(row))
    return workbook_to_xlsx_bytes(wb)


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp())


def cleanup_test_dir(temp_dir: Path) -> None:
    """Clean up test directory and files."""
    if temp_dir.exists():
        shutil.rmtree(temp_dir)
