#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/workbook_accessor/exceptions.py
"""Exceptions raised by workbook readers and writers.

Every error is reported at the call that triggers it and none is retried
internally. All of them derive from :class:`WorkbookAccessorError`, so a
single ``except`` clause can catch anything this library raises.

Exception Hierarchy
-------------------
- WorkbookAccessorError

  - ValidationError (bad arguments: None sources, empty names, bad keys)
    - SheetNotFoundError (unknown sheet name or index out of range)
    - SheetExistsError (sheet name collides with an existing sheet)

  - FileError
    - WorkbookOpenError (source missing, unreadable or malformed)
    - OutputWriteError (serialization to a path or stream failed)

  - FormatError (container format neither xls nor xlsx)

  - WorkbookClosedError (reader or writer used after ``close()``)

  - HeaderNotFoundError (mapping rows requested while header mode is off)

  - DependencyError (xlrd/xlwt missing or too old)

"""

from __future__ import annotations

from typing import Any


class WorkbookAccessorError(Exception):
    """Root of the workbook_accessor exceptions.

    Parameters
    ----------
    message : str
        Text shown by ``str(error)``
    original_error : Exception, optional
        Lower-level exception this error wraps (engine, I/O or import error)

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Store the message and the wrapped exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(WorkbookAccessorError):
    """An argument was rejected before the workbook was touched.

    Parameters
    ----------
    message : str
        What was wrong with the argument
    parameter_name : str, optional
        Name of the rejected argument (e.g. "sheet", "values")
    parameter_value : any, optional
        The rejected value
    original_error : Exception, optional
        Engine error that revealed the problem, if any

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Record which argument was rejected."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class SheetNotFoundError(ValidationError):
    """No sheet matches a name, or an index is outside ``[0, sheet_count)``.

    Parameters
    ----------
    sheet : str or int
        The name or index that was looked up
    message : str, optional
        Replaces the generated message

    """

    def __init__(self, sheet: str | int, message: str | None = None):
        """Describe the failed lookup."""
        if message is None:
            if isinstance(sheet, int):
                message = f"Sheet index is out of range: {sheet}"
            else:
                message = f"Sheet name is not found: {sheet}"
        super().__init__(message, parameter_name="sheet", parameter_value=sheet)
        self.sheet = sheet


class SheetExistsError(ValidationError):
    """Creating or renaming a sheet would give two sheets the same name.

    Parameters
    ----------
    sheet_name : str
        The name already in use
    message : str, optional
        Replaces the generated message

    """

    def __init__(self, sheet_name: str, message: str | None = None):
        """Describe the name collision."""
        if message is None:
            message = f"Sheet name is already existed: {sheet_name}"
        super().__init__(message, parameter_name="name", parameter_value=sheet_name)
        self.sheet_name = sheet_name


class FileError(WorkbookAccessorError):
    """Base for errors reading or writing workbook files and streams.

    Parameters
    ----------
    message : str
        What went wrong
    file_path : str, optional
        Path involved, or None for bytes and streams
    original_error : Exception, optional
        Underlying I/O or engine error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Record the path involved."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class WorkbookOpenError(FileError):
    """The source could not be located or parsed.

    Terminal for construction: a reader is never partially built and
    opening is never retried. ``original_error`` holds the I/O or parser
    error, e.g. a ``FileNotFoundError`` for a missing path.
    """


class OutputWriteError(FileError):
    """The workbook could not be serialized.

    Parameters
    ----------
    file_path : str, optional
        Destination path, or None when writing to a stream
    message : str, optional
        Replaces the generated message
    original_error : Exception, optional
        Error raised by the engine or the file system

    """

    def __init__(
        self, file_path: str | None = None, message: str | None = None, original_error: Exception | None = None
    ):
        """Describe the failed write."""
        if message is None:
            message = f"Failed to write workbook to: {file_path}" if file_path else "Failed to serialize workbook"
        super().__init__(message, file_path=file_path, original_error=original_error)


class FormatError(WorkbookAccessorError):
    """The container format is unknown or unsupported.

    Parameters
    ----------
    message : str, optional
        Replaces the generated message
    format_type : str, optional
        Offending format name or file extension
    supported_formats : list[str], optional
        Formats that would have been accepted
    original_error : Exception, optional
        Underlying error, if any

    """

    def __init__(
        self,
        message: str | None = None,
        format_type: str | None = None,
        supported_formats: list[str] | None = None,
        original_error: Exception | None = None,
    ):
        """Describe the rejected format."""
        if message is None:
            if not format_type:
                message = "Workbook format is not supported"
            elif supported_formats:
                supported = ", ".join(supported_formats)
                message = f"Unsupported workbook format: '{format_type}'. Supported formats: {supported}"
            else:
                message = f"Unsupported workbook format: '{format_type}'"
        super().__init__(message, original_error=original_error)
        self.format_type = format_type
        self.supported_formats = supported_formats


class WorkbookClosedError(WorkbookAccessorError):
    """A reader or writer was used after ``close()``.

    Closing is terminal: every later call on the same instance raises this
    error again.
    """

    def __init__(self, message: str = "Workbook has been closed."):
        """Use the fixed closed-workbook message unless one is given."""
        super().__init__(message)


class HeaderNotFoundError(WorkbookAccessorError):
    """Mapping rows were requested while header mode is off for the current sheet."""

    def __init__(self, message: str = "Header is not found."):
        """Use the fixed missing-header message unless one is given."""
        super().__init__(message)


def _requirement(name: str, spec: str) -> str:
    return f"{name}{spec}" if spec else name


class DependencyError(WorkbookAccessorError):
    """An engine library needed for a container format is missing or too old.

    Parameters
    ----------
    format_name : str
        Container format that needs the libraries (e.g. "xls")
    missing_packages : list[tuple[str, str]]
        ``(install_name, version_spec)`` of each library that failed to import
    version_mismatches : list[tuple[str, str, str]], optional
        ``(install_name, required, installed)`` of each library that is too old
    original_import_error : ImportError, optional
        First import error encountered

    Attributes
    ----------
    install_command : str
        ``pip install`` command that resolves every problem listed

    """

    def __init__(
        self,
        format_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Build a message listing each problem and the install command."""
        version_mismatches = version_mismatches or []
        label = format_name.upper()

        lines = []
        if missing_packages:
            names = ", ".join(f"'{_requirement(name, spec)}'" for name, spec in missing_packages)
            lines.append(f"{label} format requires the following packages: {names}")
        if version_mismatches:
            names = ", ".join(
                f"'{name}' (requires {required}, but {installed} is installed)"
                for name, required, installed in version_mismatches
            )
            lines.append(f"{label} format has version mismatches: {names}")

        wanted = missing_packages + [(name, required) for name, required, _ in version_mismatches]
        self.install_command = "pip install --upgrade " + " ".join(
            f'"{_requirement(name, spec)}"' if spec else name for name, spec in wanted
        )
        if wanted:
            lines.append(f"Install with: {self.install_command}")

        super().__init__("\n".join(lines), original_error=original_import_error)
        self.format_name = format_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.original_import_error = original_import_error
