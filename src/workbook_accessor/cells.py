#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/workbook_accessor/cells.py
"""Cell value model shared by readers and writers.

Every cell is classified into exactly one :class:`CellKind`. Readers
render the classified value to its canonical text form; writers use the
kind to pick the encoder that stores the native value in the engine's
cell (numbers stay numbers, dates stay dates).

Canonical text forms
--------------------
- blank: ``""``
- text: the string itself
- boolean: ``"TRUE"`` / ``"FALSE"``
- numeric: plain decimal notation with trailing zeros stripped
  (``2.14540`` -> ``"2.1454"``, ``10.0`` -> ``"10"``)
- date: ISO 8601; datetimes at midnight render as the date alone
- rich text: the concatenated plain text of all runs
- hyperlink: the displayed text, or the link target when nothing is displayed

"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Callable

from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.cell.rich_text import CellRichText
from openpyxl.worksheet.hyperlink import Hyperlink

from workbook_accessor.constants import BOOLEAN_FALSE_TEXT, BOOLEAN_TRUE_TEXT
from workbook_accessor.exceptions import ValidationError

NUMERIC_TYPES = (int, float, Decimal)
DATE_TYPES = (datetime.datetime, datetime.date, datetime.time, datetime.timedelta)


class CellKind(str, Enum):
    """Tag of a cell value."""

    BLANK = "blank"
    TEXT = "text"
    BOOLEAN = "boolean"
    NUMERIC = "numeric"
    DATE = "date"
    RICH_TEXT = "rich_text"
    HYPERLINK = "hyperlink"


def format_number(value: int | float | Decimal) -> str:
    """Render a number in plain notation with trailing zeros stripped.

    Parameters
    ----------
    value : int, float or Decimal
        Number to render

    Returns
    -------
    str
        Shortest plain decimal text that round-trips the value

    Examples
    --------
    >>> format_number(2.14540)
    '2.1454'
    >>> format_number(3.0)
    '3'
    >>> format_number(1e-7)
    '0.0000001'

    """
    if isinstance(value, int):
        return str(value)

    number = value if isinstance(value, Decimal) else Decimal(repr(value))
    if number.is_zero():
        return "0"
    return format(number.normalize(), "f")


def _format_date(value: Any) -> str:
    if isinstance(value, datetime.datetime):
        if value.time() == datetime.time.min and value.tzinfo is None:
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    return str(value)


def _hyperlink_text(link: Hyperlink) -> str:
    return link.display or link.target or link.location or ""


_TEXT_RENDERERS: dict[CellKind, Callable[[Any], str]] = {
    CellKind.BLANK: lambda value: "",
    CellKind.TEXT: str,
    CellKind.BOOLEAN: lambda value: BOOLEAN_TRUE_TEXT if value else BOOLEAN_FALSE_TEXT,
    CellKind.NUMERIC: format_number,
    CellKind.DATE: _format_date,
    CellKind.RICH_TEXT: str,
    CellKind.HYPERLINK: lambda value: value if isinstance(value, str) else _hyperlink_text(value),
}


def _classify(value: Any) -> CellKind:
    if value is None:
        return CellKind.BLANK
    # bool is a subclass of int and must be checked first
    if isinstance(value, bool):
        return CellKind.BOOLEAN
    if isinstance(value, NUMERIC_TYPES):
        return CellKind.NUMERIC
    if isinstance(value, DATE_TYPES):
        return CellKind.DATE
    if isinstance(value, CellRichText):
        return CellKind.RICH_TEXT
    if isinstance(value, Hyperlink):
        return CellKind.HYPERLINK
    return CellKind.TEXT


@dataclass(frozen=True)
class CellValue:
    """A single tagged cell value.

    Parameters
    ----------
    kind : CellKind
        The active tag
    value : Any
        Native value for the tag. For ``HYPERLINK`` values built by a writer
        this is the openpyxl ``Hyperlink``; for values read from a sheet it
        is the displayed text.
    target : str or None
        Link target of a hyperlink cell read from a sheet

    """

    kind: CellKind
    value: Any = None
    target: str | None = None

    @classmethod
    def of(cls, value: Any) -> CellValue:
        """Classify an arbitrary Python value for writing.

        Values of no supported type are stored as their ``str()`` form.

        Raises
        ------
        ValidationError
            If the value cannot be stored by the engine (timezone-aware
            datetimes, text with control characters).

        """
        kind = _classify(value)
        if kind is CellKind.TEXT:
            value = value if isinstance(value, str) else str(value)
            if ILLEGAL_CHARACTERS_RE.search(value):
                raise ValidationError(
                    "Text contains characters that cannot be stored in a worksheet",
                    parameter_name="values",
                    parameter_value=value,
                )
        elif kind is CellKind.DATE and getattr(value, "tzinfo", None) is not None:
            raise ValidationError(
                "Timezone-aware dates and times cannot be stored in a worksheet",
                parameter_name="values",
                parameter_value=value,
            )
        elif kind is CellKind.HYPERLINK:
            return cls(kind, value, value.target or value.location)
        return cls(kind, value)

    @classmethod
    def from_cell(cls, cell: Any) -> CellValue:
        """Classify the content of an openpyxl cell (``None`` for a missing cell)."""
        if cell is None:
            return cls(CellKind.BLANK)

        value = cell.value
        link = getattr(cell, "hyperlink", None)
        if link is not None:
            target = link.target or link.location
            text = _TEXT_RENDERERS[_classify(value)](value) if value is not None else (target or "")
            return cls(CellKind.HYPERLINK, text, target)

        return cls(_classify(value), value)

    def to_text(self) -> str:
        """Render the canonical text form of this value."""
        return _TEXT_RENDERERS[self.kind](self.value)

    def encode(self, cell: Any) -> None:
        """Store this value in an openpyxl cell using the encoder for its tag."""
        _ENCODERS[self.kind](cell, self)


def to_text(value: Any) -> str:
    """Render any Python value or openpyxl cell value to canonical text."""
    return CellValue(_classify(value), value).to_text()


def _encode_blank(cell: Any, cell_value: CellValue) -> None:
    cell.value = None


def _encode_text(cell: Any, cell_value: CellValue) -> None:
    cell.value = cell_value.value
    # keep leading "=" and error literals such as "#N/A" as plain strings
    cell.data_type = "s"


def _encode_native(cell: Any, cell_value: CellValue) -> None:
    cell.value = cell_value.value


def _encode_hyperlink(cell: Any, cell_value: CellValue) -> None:
    source = cell_value.value
    # one Hyperlink per cell; openpyxl rewrites its ref on assignment
    link = Hyperlink(
        ref="", location=source.location, tooltip=source.tooltip, display=source.display, target=source.target
    )
    cell.value = _hyperlink_text(link)
    cell.data_type = "s"
    cell.hyperlink = link


_ENCODERS: dict[CellKind, Callable[[Any, CellValue], None]] = {
    CellKind.BLANK: _encode_blank,
    CellKind.TEXT: _encode_text,
    CellKind.BOOLEAN: _encode_native,
    CellKind.NUMERIC: _encode_native,
    CellKind.DATE: _encode_native,
    CellKind.RICH_TEXT: _encode_native,
    CellKind.HYPERLINK: _encode_hyperlink,
}
