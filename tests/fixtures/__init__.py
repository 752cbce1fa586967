# Test fixtures
from .sample_documents import (
    SAMPLE_CSV,
    NUMERIC_CSV,
    SAMPLE_SHEET_ROWS,
    build_csv,
    build_xlsx,
    build_docx,
    parse_html,
)

__all__ = [
    "SAMPLE_CSV",
    "NUMERIC_CSV",
    "SAMPLE_SHEET_ROWS",
    "build_csv",
    "build_xlsx",
    "build_docx",
    "parse_html",
]
