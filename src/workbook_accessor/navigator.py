#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/workbook_accessor/navigator.py
"""Sheet navigation and lifecycle shared by readers and writers.

A navigator owns a pointer to exactly one worksheet of its document, the
"current sheet". It starts at the first sheet and moves only through
:meth:`SheetNavigator.turn_to_sheet`. Once :meth:`SheetNavigator.close` has
been called every public method raises :class:`WorkbookClosedError`.

"""

from __future__ import annotations

import logging
import sys
from types import TracebackType
from typing import Optional, Union

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from workbook_accessor.engine import WorkbookDocument
from workbook_accessor.exceptions import ValidationError, WorkbookClosedError
from workbook_accessor.utils.decorators import requires_open

logger = logging.getLogger(__name__)

SheetKey = Union[int, str]


class SheetNavigator:
    """Base class tracking the current sheet and the open/closed state.

    Parameters
    ----------
    document : WorkbookDocument
        Document to navigate; must hold at least one worksheet
    owns_document : bool
        Release the document's engine resources on :meth:`close`

    """

    def __init__(self, document: WorkbookDocument, owns_document: bool):
        """Point the navigator at the first sheet of ``document``."""
        if document.sheet_count() == 0:
            raise ValidationError("Workbook has no worksheets", parameter_name="document", parameter_value=document)
        self._document = document
        self._owns_document = owns_document
        self._closed = False
        self._sheet: Worksheet = document.sheet_at(0)

    # --------------------------- Lifecycle ---------------------------
    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Release the workbook. Every later call on this instance raises ``WorkbookClosedError``."""
        if self._closed:
            return
        self._closed = True
        if self._owns_document:
            self._document.release()
        logger.debug("Closed %s", type(self).__name__)

    def _ensure_open(self) -> None:
        if self._closed:
            raise WorkbookClosedError()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()

    # --------------------------- Document access ---------------------------
    @property
    @requires_open
    def workbook(self) -> Workbook:
        """The engine's in-memory workbook."""
        return self._document.workbook

    @property
    @requires_open
    def document(self) -> WorkbookDocument:
        return self._document

    # --------------------------- Navigation ---------------------------
    @requires_open
    def all_sheet_names(self) -> list[str]:
        """Names of all worksheets in storage order."""
        return self._document.sheet_names()

    @requires_open
    def current_sheet_name(self) -> str:
        return self._sheet.title

    @requires_open
    def turn_to_sheet(self, sheet: SheetKey) -> Self:
        """Make the sheet at an index or with a name the current sheet.

        Parameters
        ----------
        sheet : int or str
            Zero-based sheet index or exact sheet name

        Returns
        -------
        Self
            This navigator, for chaining

        Raises
        ------
        SheetNotFoundError
            If the index is out of range or no sheet has the name
        ValidationError
            If ``sheet`` is neither an int nor a str

        """
        self._sheet = self._resolve_sheet(sheet)
        logger.debug("Turned to sheet %r", self._sheet.title)
        self._on_sheet_changed()
        return self

    @requires_open
    def create_sheet(self, name: str) -> Self:
        """Append a new empty sheet without changing the current sheet.

        Raises
        ------
        SheetExistsError
            If a sheet with that name already exists

        """
        self._document.create_sheet(self._validate_name(name))
        return self

    @requires_open
    def create_and_turn_to_sheet(self, name: str) -> Self:
        """Create a sheet and make it the current sheet."""
        return self.create_sheet(name).turn_to_sheet(name)

    # --------------------------- Internals ---------------------------
    def _on_sheet_changed(self) -> None:
        """Hook run after the current sheet changes."""

    def _resolve_sheet(self, sheet: SheetKey) -> Worksheet:
        if isinstance(sheet, bool) or not isinstance(sheet, (int, str)):
            raise ValidationError(
                f"Sheet must be an index or a name, got {type(sheet).__name__}",
                parameter_name="sheet",
                parameter_value=sheet,
            )
        if isinstance(sheet, int):
            return self._document.sheet_at(sheet)
        return self._document.sheet_by_name(sheet)

    @staticmethod
    def _validate_name(name: str) -> str:
        if not isinstance(name, str) or not name:
            raise ValidationError("Sheet name must be a non-empty string", parameter_name="name", parameter_value=name)
        return name
