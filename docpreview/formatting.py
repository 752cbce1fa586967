"""
Escaping and formatting primitives shared by every renderer.

Everything here is a pure function of its arguments; the renderers call
these on every cell, so none of them touch shared state.
"""

import math
import os
from datetime import date, datetime, time, timedelta

# signed 64-bit bounds for "integral" numeric cells
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

DATE_FORMAT = "%b %d, %Y %H:%M"
TIME_FORMAT = "%H:%M"


def escape_html(text) -> str:
    """
    Escape text for inline HTML display.

    Converts the five HTML-significant characters and turns literal
    newlines into ``<br>``. This is one-shot: escaping already escaped
    text encodes the ampersands a second time.
    """
    if text is None:
        return ""
    return (
        str(text)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#x27;")
        .replace("\n", "<br>")
    )


def format_decimal(value: float) -> str:
    """Format a number with thousands separators and at most two decimals."""
    text = f"{value:,.2f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_numeric_cell(value: float) -> str:
    """
    Format a spreadsheet numeric value.

    Integral values that fit in a signed 64-bit integer print as a plain
    integer (no separators); anything else goes through format_decimal.
    """
    value = float(value)
    if not math.isfinite(value):
        return str(value)
    if value == math.floor(value) and INT64_MIN <= value <= INT64_MAX:
        return str(int(value))
    return format_decimal(value)


def format_date(value) -> str:
    """Format a date-like cell value as ``Mon DD, YYYY HH:MM``."""
    if isinstance(value, datetime):
        return value.strftime(DATE_FORMAT)
    if isinstance(value, date):
        return datetime.combine(value, time()).strftime(DATE_FORMAT)
    if isinstance(value, time):
        return value.strftime(TIME_FORMAT)
    if isinstance(value, timedelta):
        return str(value)
    return str(value)


def extract_document_name(filename: str) -> str:
    """
    Turn a filename into a display title.

    ``quarterly_sales-report.xlsx`` becomes ``Quarterly Sales Report``.
    """
    if not filename or not filename.strip():
        return "Document"

    basename = os.path.basename(filename)
    stem = basename
    last_dot = basename.rfind(".")
    if last_dot > 0:
        stem = basename[:last_dot]

    words = stem.replace("_", " ").replace("-", " ").split()
    return " ".join(word[0].upper() + word[1:].lower() for word in words)
