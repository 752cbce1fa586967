"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Make the package importable without installing it
sys.path.insert(0, str(Path(__file__).parent.parent))

from docpreview.core import DocumentRenderer
from tests.fixtures import (
    SAMPLE_CSV,
    NUMERIC_CSV,
    SAMPLE_SHEET_ROWS,
    build_docx,
    build_xlsx,
)


# ============================================================================
# Pytest Hooks
# ============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark as integration test")


# ============================================================================
# Base Fixtures
# ============================================================================


@pytest.fixture
def renderer():
    """Create a document renderer with default limits."""
    return DocumentRenderer()


@pytest.fixture
def small_renderer():
    """Create a renderer with tight limits for truncation tests."""
    return DocumentRenderer(max_rows=3, max_columns=2)


# ============================================================================
# Document Fixtures
# ============================================================================


@pytest.fixture
def sample_csv_bytes():
    """A CSV file with a header row, blank lines and quoted fields."""
    return SAMPLE_CSV.encode("utf-8")


@pytest.fixture
def numeric_csv_bytes():
    """A CSV file whose first row is all numbers."""
    return NUMERIC_CSV.encode("utf-8")


@pytest.fixture
def sample_xlsx_bytes():
    """A single-sheet workbook with strings, numbers, dates, booleans and a formula."""
    return build_xlsx({"Data": SAMPLE_SHEET_ROWS})


@pytest.fixture
def multi_sheet_xlsx_bytes():
    """A workbook with a data sheet and an empty sheet."""
    return build_xlsx({"Data": SAMPLE_SHEET_ROWS, "Notes": []})


@pytest.fixture
def sample_docx_bytes():
    """A Word document with headings, formatted runs and a table."""
    return build_docx()


# ============================================================================
# Temporary File Fixtures
# ============================================================================


@pytest.fixture
def temp_documents(tmp_path, sample_csv_bytes, sample_xlsx_bytes, sample_docx_bytes):
    """Write one document of each family into a temporary directory."""
    paths = {
        "csv": tmp_path / "contacts_list.csv",
        "xlsx": tmp_path / "budget-2024.xlsx",
        "docx": tmp_path / "meeting_minutes.docx",
    }
    paths["csv"].write_bytes(sample_csv_bytes)
    paths["xlsx"].write_bytes(sample_xlsx_bytes)
    paths["docx"].write_bytes(sample_docx_bytes)
    return paths
