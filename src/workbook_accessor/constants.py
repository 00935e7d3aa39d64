#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/workbook_accessor/constants.py
"""Default values and format tables shared by readers and writers."""

from __future__ import annotations

from typing import Literal

WorkbookFormat = Literal["xls", "xlsx"]

# =============================================================================
# Reader / writer defaults
# =============================================================================

DEFAULT_HAS_HEADER = True
DEFAULT_DATA_ONLY = True
DEFAULT_RICH_TEXT = False
DEFAULT_DELIMITER = ","
DEFAULT_QUOTE_CHAR = '"'

DEFAULT_WORKBOOK_FORMAT: WorkbookFormat = "xls"
DEFAULT_SHEET_NAME = "Sheet0"

# =============================================================================
# Canonical text rendering
# =============================================================================

BOOLEAN_TRUE_TEXT = "TRUE"
BOOLEAN_FALSE_TEXT = "FALSE"

# Number formats applied when dates are written to the legacy container
XLS_DATETIME_FORMAT = "YYYY-MM-DD HH:MM:SS"
XLS_DATE_FORMAT = "YYYY-MM-DD"
XLS_TIME_FORMAT = "HH:MM:SS"

# =============================================================================
# Container formats
# =============================================================================

SUPPORTED_FORMATS: list[str] = ["xls", "xlsx"]

FORMAT_EXTENSIONS: dict[str, WorkbookFormat] = {
    ".xls": "xls",
    ".xlsx": "xlsx",
    ".xlsm": "xlsx",
}

ZIP_MAGIC = b"PK\x03\x04"
OLE2_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"

MAGIC_BYTES: list[tuple[bytes, WorkbookFormat]] = [
    (ZIP_MAGIC, "xlsx"),
    (OLE2_MAGIC, "xls"),
]

# =============================================================================
# Engine dependencies as (install_name, import_name, version_spec)
# =============================================================================

DEPS_XLS_READ = [("xlrd", "xlrd", ">=2.0")]
DEPS_XLS_WRITE = [("xlwt", "xlwt", "")]
