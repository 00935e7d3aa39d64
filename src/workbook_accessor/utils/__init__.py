#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/workbook_accessor/utils/__init__.py
"""Utility modules for workbook_accessor.

This package contains input validation, dependency checking and the
decorators shared by readers and writers.
"""

from workbook_accessor.utils.decorators import debug_timer, requires_dependencies, requires_open
from workbook_accessor.utils.inputs import is_file_like, is_path_like, validate_and_convert_input

__all__ = [
    "debug_timer",
    "requires_dependencies",
    "requires_open",
    "is_file_like",
    "is_path_like",
    "validate_and_convert_input",
]
