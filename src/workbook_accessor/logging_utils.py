#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/workbook_accessor/logging_utils.py
"""Logging setup for applications embedding workbook_accessor.

The library itself only creates module loggers; nothing here runs on import.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
PLAIN_FORMAT = "%(levelname)s: %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure root logging handlers for scripts reading or writing workbooks.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "DEBUG"). Unknown names
        fall back to INFO.
    log_file : str, optional
        Path of a file that receives the same records as stderr.
    trace_mode : bool, default False
        When true, emit timestamps and logger names; useful together with
        the DEBUG timings of open and save operations.

    Returns
    -------
    logging.Logger
        The configured root logger instance.

    Raises
    ------
    OSError
        If ``log_file`` cannot be opened for appending.

    """
    resolved_level = log_level if isinstance(log_level, int) else getattr(logging, str(log_level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(
        TRACE_FORMAT if trace_mode else PLAIN_FORMAT,
        datefmt=TRACE_DATE_FORMAT if trace_mode else None,
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(resolved_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        root_logger.debug("Logging to file: %s", log_file)

    return root_logger
