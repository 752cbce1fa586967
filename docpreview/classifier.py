"""
Semantic classification of cell text.

The category only drives CSS styling of the rendered cell; it never
changes the cell's value.
"""

import re
from dataclasses import dataclass
from enum import Enum


class CellCategory(Enum):
    """Semantic category of a cell, valued by its CSS class name."""
    NONE = "none"
    NUMBER = "number"
    DATE = "date"
    EMAIL = "email"
    URL = "url"
    BOOLEAN = "boolean"
    FORMULA = "formula"
    ERROR = "error"
    LARGE_TEXT = "large-text"

    @property
    def css_class(self) -> str:
        return "" if self is CellCategory.NONE else self.value


@dataclass(frozen=True)
class CellDescriptor:
    """Display text of a cell plus its category."""
    text: str
    category: CellCategory = CellCategory.NONE

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()


LARGE_TEXT_THRESHOLD = 100

PATTERNS = {
    "number": re.compile(r"-?\d+(\.\d+)?"),
    "email": re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}"),
    "url": re.compile(r"(https?://)?(www\.)?[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}(/.*)?"),
}

DATE_PATTERNS = (
    re.compile(r"\d{1,2}/\d{1,2}/\d{4}"),
    re.compile(r"\d{4}-\d{2}-\d{2}"),
    re.compile(r"\d{1,2}-\d{1,2}-\d{4}"),
)


def is_numeric(text) -> bool:
    """True if the trimmed text is a plain decimal literal."""
    if text is None:
        return False
    return PATTERNS["number"].fullmatch(text.strip()) is not None


def is_date_like(text: str) -> bool:
    return any(pattern.fullmatch(text) for pattern in DATE_PATTERNS)


def classify(text) -> CellCategory:
    """
    Classify cell text. Checks run in priority order, first match wins:
    number, email, url, date, large text.
    """
    if text is None or not text.strip():
        return CellCategory.NONE

    trimmed = text.strip()

    if PATTERNS["number"].fullmatch(trimmed):
        return CellCategory.NUMBER
    if PATTERNS["email"].fullmatch(trimmed):
        return CellCategory.EMAIL
    if PATTERNS["url"].fullmatch(trimmed):
        return CellCategory.URL
    if is_date_like(trimmed):
        return CellCategory.DATE
    if len(trimmed) > LARGE_TEXT_THRESHOLD:
        return CellCategory.LARGE_TEXT

    return CellCategory.NONE


def describe(text) -> CellDescriptor:
    """Build a CellDescriptor for plain text, classifying its content."""
    text = "" if text is None else text
    return CellDescriptor(text=text, category=classify(text))
