#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/workbook_accessor/options.py
"""Configuration options for workbook readers and writers.

Options are frozen dataclasses; use ``create_updated`` to derive a
modified copy.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from workbook_accessor.constants import (
    DEFAULT_DATA_ONLY,
    DEFAULT_DELIMITER,
    DEFAULT_HAS_HEADER,
    DEFAULT_RICH_TEXT,
    DEFAULT_SHEET_NAME,
    DEFAULT_WORKBOOK_FORMAT,
    SUPPORTED_FORMATS,
    WorkbookFormat,
)


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class ReaderOptions(CloneFrozenMixin):
    """Configuration options for opening a workbook for reading.

    Parameters
    ----------
    has_header : bool, default True
        Treat the first physical row of each sheet as column labels.
    data_only : bool, default True
        Read the cached results of formula cells instead of the formulas.
    rich_text : bool, default False
        Keep rich text runs when loading ``.xlsx`` workbooks.
    delimiter : str, default ","
        Default delimiter used by ``to_csv()``.

    """

    has_header: bool = field(
        default=DEFAULT_HAS_HEADER,
        metadata={"help": "Treat the first row of each sheet as a header", "importance": "core"},
    )
    data_only: bool = field(
        default=DEFAULT_DATA_ONLY,
        metadata={"help": "Read cached formula results (True) or formulas (False)", "importance": "advanced"},
    )
    rich_text: bool = field(
        default=DEFAULT_RICH_TEXT,
        metadata={"help": "Keep rich text runs when loading .xlsx files", "importance": "advanced"},
    )
    delimiter: str = field(
        default=DEFAULT_DELIMITER,
        metadata={"help": "Default delimiter for delimited-line output", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If the delimiter is empty.

        """
        if not isinstance(self.delimiter, str) or not self.delimiter:
            raise ValueError(f"delimiter must be a non-empty string, got {self.delimiter!r}")


@dataclass(frozen=True)
class WriterOptions(CloneFrozenMixin):
    """Configuration options for a new in-memory workbook.

    Parameters
    ----------
    workbook_format : {"xls", "xlsx"}, default "xls"
        Container format used by ``save()`` and ``to_bytes()``.
    sheet_name : str, default "Sheet0"
        Name of the sheet created in an empty workbook.

    """

    workbook_format: WorkbookFormat = field(
        default=DEFAULT_WORKBOOK_FORMAT,
        metadata={"help": "Container format: xls (legacy binary) or xlsx", "choices": SUPPORTED_FORMATS},
    )
    sheet_name: str = field(
        default=DEFAULT_SHEET_NAME,
        metadata={"help": "Name of the default sheet of an empty workbook"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If the format is unknown or the sheet name is empty.

        """
        if self.workbook_format not in SUPPORTED_FORMATS:
            raise ValueError(f"workbook_format must be one of {SUPPORTED_FORMATS}, got {self.workbook_format!r}")
        if not self.sheet_name:
            raise ValueError("sheet_name must be a non-empty string")
