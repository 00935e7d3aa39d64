#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/workbook_accessor/utils/decorators.py
"""Utility decorators for workbook readers and writers.

This module centralizes two guards that would otherwise be repeated in
every public method: the optional-dependency check used before touching
the legacy ``.xls`` engine, and the lifecycle check that rejects calls on
a closed reader or writer.

"""

from __future__ import annotations

import importlib
import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, List, Tuple

from workbook_accessor.exceptions import DependencyError, WorkbookClosedError
from workbook_accessor.utils.packages import check_version_requirement


def requires_dependencies(format_name: str, packages: List[Tuple[str, str, str]]) -> Callable:
    """Check required dependencies and versions before function execution.

    Parameters
    ----------
    format_name : str
        Name of the container format (e.g., "xls"). This appears in error
        messages to help users identify which format needs dependencies.
    packages : list of tuple
        Required packages as (install_name, import_name, version_spec) tuples where:
        - install_name: Package name for pip install (e.g., "xlrd")
        - import_name: Module name for import statement (e.g., "xlrd")
        - version_spec: Version requirement (e.g., ">=2.0" or "" for any version)

    Returns
    -------
    Callable
        Decorated function that checks dependencies before execution

    Raises
    ------
    DependencyError
        If any required package is missing or has an incompatible version.

    Examples
    --------
        >>> @requires_dependencies("xls", [("xlrd", "xlrd", ">=2.0")])
        ... def load_xls(stream):
        ...     import xlrd
        ...     # loading logic here

    """

    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing = []
            version_mismatches = []
            original_error = None

            for install_name, import_name, version_spec in packages:
                try:
                    importlib.import_module(import_name)

                    if version_spec:
                        meets_requirement, installed_version = check_version_requirement(install_name, version_spec)
                        if not meets_requirement:
                            version_mismatches.append((install_name, version_spec, installed_version or "unknown"))

                except ImportError as e:
                    missing.append((install_name, version_spec))
                    if original_error is None:
                        original_error = e

            if missing or version_mismatches:
                raise DependencyError(
                    format_name=format_name,
                    missing_packages=missing,
                    version_mismatches=version_mismatches,
                    original_import_error=original_error,
                ) from original_error

            return method(*args, **kwargs)

        return wrapper

    return decorator


def requires_open(method: Callable) -> Callable:
    """Reject calls on a reader or writer whose workbook has been released.

    The decorated method's instance must expose a ``closed`` attribute. The
    check runs before any argument handling, so a closed instance raises
    :class:`WorkbookClosedError` even for calls with invalid arguments.

    Parameters
    ----------
    method : Callable
        Instance method to guard

    Returns
    -------
    Callable
        Guarded method

    Raises
    ------
    WorkbookClosedError
        If the instance has been closed

    """

    @wraps(method)
    def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        if self.closed:
            raise WorkbookClosedError()
        return method(self, *args, **kwargs)

    return wrapper


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Time a block with DEBUG-level logging.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance to use for DEBUG messages
    operation : str
        Description of the operation being timed (e.g., "Opening workbook")

    Yields
    ------
    None
        Control flow to the code block being timed

    Notes
    -----
    Only measures time when the logger has DEBUG enabled.

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug(f"{operation} completed in {elapsed:.2f}s")
    else:
        yield
