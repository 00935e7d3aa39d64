"""Pytest configuration and shared fixtures for the workbook_accessor test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

from pathlib import Path
from typing import Generator

import pytest
from utils import (
    PII_SHEET_NAME,
    cleanup_test_dir,
    create_multi_sheet_workbook,
    create_pii_workbook,
    create_test_temp_dir,
    save_workbook_as_xls,
    save_workbook_as_xlsx,
)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files.

    Yields
    ------
    Path
        Temporary directory path that will be cleaned up after test.

    """
    temp_path = create_test_temp_dir()
    try:
        yield temp_path
    finally:
        cleanup_test_dir(temp_path)


@pytest.fixture
def pii_xls_path(temp_dir: Path) -> Path:
    """Legacy ``.xls`` file holding the patient listing sheet."""
    path = temp_dir / f"{PII_SHEET_NAME}.xls"
    save_workbook_as_xls(create_pii_workbook(), path)
    return path


@pytest.fixture
def pii_xlsx_path(temp_dir: Path) -> Path:
    """``.xlsx`` file holding the patient listing sheet."""
    path = temp_dir / f"{PII_SHEET_NAME}.xlsx"
    save_workbook_as_xlsx(create_pii_workbook(), path)
    return path


@pytest.fixture(params=["xls", "xlsx"])
def pii_path(request, pii_xls_path: Path, pii_xlsx_path: Path) -> Path:
    """The patient listing in each supported container format."""
    return pii_xls_path if request.param == "xls" else pii_xlsx_path


@pytest.fixture
def multi_sheet_xlsx_path(temp_dir: Path) -> Path:
    """``.xlsx`` file with three sheets of differing shapes."""
    path = temp_dir / "multi.xlsx"
    save_workbook_as_xlsx(create_multi_sheet_workbook(), path)
    return path
