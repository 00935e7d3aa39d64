"""Utilities for uniform input handling across workbook_accessor modules.

Readers accept workbooks as paths, raw bytes, binary file-like objects or
already-open in-memory documents. The functions here classify such inputs
and reject the ones the spreadsheet engine cannot consume.

Functions
---------
- validate_and_convert_input: Main input validation and conversion function
- is_path_like: Check if input is path-like (string or PathLike object)
- is_file_like: Check if input is a file-like object
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/workbook_accessor/utils/inputs.py
import errno
import os
from io import BytesIO
from pathlib import Path
from typing import Any, BinaryIO, Union

from workbook_accessor.exceptions import ValidationError, WorkbookOpenError

PathLike = Union[str, Path, os.PathLike]
FileLike = Union[BinaryIO, BytesIO]
InputType = Union[PathLike, FileLike, bytes, Any]


def is_path_like(obj: Any) -> bool:
    """Check if an object is path-like (string or os.PathLike).

    Examples
    --------
    >>> is_path_like("book.xls")
    True
    >>> is_path_like(Path("book.xlsx"))
    True
    >>> is_path_like(BytesIO(b"data"))
    False

    """
    return isinstance(obj, (str, os.PathLike))


def is_file_like(obj: Any) -> bool:
    """Check if an object is file-like (has a callable read method)."""
    return hasattr(obj, "read") and callable(obj.read)


def validate_and_convert_input(input_data: InputType) -> tuple[Any, str]:
    """Validate a workbook source and convert it for the spreadsheet engine.

    Parameters
    ----------
    input_data : InputType
        Path, bytes, binary file-like object or in-memory workbook

    Returns
    -------
    tuple[Any, str]
        Tuple of (converted_input, input_type_description) where
        input_type_description is one of: "path", "bytes", "file", "object"

    Raises
    ------
    WorkbookOpenError
        If a path does not exist or is not a regular file
    ValidationError
        If the input is None or a text-mode stream

    """
    if input_data is None:
        raise ValidationError(
            "Workbook source must not be None", parameter_name="source", parameter_value=input_data
        )

    if is_path_like(input_data):
        path_str = os.fspath(input_data)
        if not os.path.exists(path_str):
            missing = FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path_str)
            raise WorkbookOpenError(
                f"Failed to open workbook: {path_str}", file_path=path_str, original_error=missing
            ) from missing

        if not os.path.isfile(path_str):
            raise WorkbookOpenError(f"Path is not a file: {path_str}", file_path=path_str)

        return path_str, "path"

    elif isinstance(input_data, (bytes, bytearray)):
        return BytesIO(bytes(input_data)), "bytes"

    elif is_file_like(input_data):
        if hasattr(input_data, "mode") and "b" not in str(input_data.mode):
            raise ValidationError(
                f"File must be opened in binary mode, got mode: {input_data.mode}",
                parameter_name="source",
                parameter_value=input_data,
            )
        return input_data, "file"

    return input_data, "object"
