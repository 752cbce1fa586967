"""
Delimited-text (CSV) to HTML converter.

Parses comma-separated text with double-quote handling, guesses whether
the first row is a header, and renders the rows through the shared
table renderer.
"""

import logging
import os
import re

from ..classifier import describe, is_numeric
from ..formatting import extract_document_name
from ..templates import TABLE_SCRIPT, TABLE_STYLE, empty_state, render_page
from .table import MAX_COLUMNS, MAX_ROWS, TableModel, TableRow, is_empty_row, pad_cells, render_table

logger = logging.getLogger(__name__)

LINE_BREAK = re.compile(r"\r?\n")


def parse_delimited_text(text: str) -> list[list[str]]:
    """
    Split text into rows of raw field values.

    Lines are split on ``\\n`` / ``\\r\\n`` before quotes are looked at, so
    a quoted field cannot contain a newline. Blank lines are dropped.
    """
    rows = []
    if text is None or not text.strip():
        return rows

    for line in LINE_BREAK.split(text):
        if not line.strip():
            continue
        rows.append(parse_delimited_line(line))
    return rows


def parse_delimited_line(line: str) -> list[str]:
    """Split one line on commas that sit outside double quotes."""
    cells = []
    current = []
    in_quotes = False
    i = 0
    length = len(line)

    while i < length:
        char = line[i]
        if char == '"':
            if in_quotes:
                if i + 1 < length and line[i + 1] == '"':
                    current.append('"')
                    i += 1
                else:
                    in_quotes = False
            else:
                in_quotes = True
        elif char == "," and not in_quotes:
            cells.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1

    cells.append("".join(current))
    return cells


def has_header(rows: list[list[str]]) -> bool:
    """
    Guess whether the first row is a header.

    True when the first row has more non-numeric than numeric non-blank
    cells and there is at least one more row after it.
    """
    if not rows:
        return False

    text_count = 0
    number_count = 0
    for cell in rows[0]:
        if cell is None or not cell.strip():
            continue
        if is_numeric(cell):
            number_count += 1
        else:
            text_count += 1

    return text_count > number_count and len(rows) > 1


def decode_text(content: bytes) -> str:
    return content.decode("utf-8-sig", errors="replace")


def build_csv_table(rows: list[list[str]], filename: str,
                    max_rows: int = MAX_ROWS, max_columns: int = MAX_COLUMNS) -> TableModel:
    """Build the TableModel for parsed CSV rows."""
    source_columns = max((len(row) for row in rows), default=0)
    column_count = min(source_columns, max_columns)
    non_empty_rows = sum(1 for row in rows if not is_empty_row(row))

    header = has_header(rows)
    if header:
        first_row = rows[0]
        columns = []
        for col in range(column_count):
            value = first_row[col].strip() if col < len(first_row) and first_row[col] else ""
            columns.append(value or f"Column {col + 1}")
        data_rows = rows[1:]
    else:
        columns = [f"Column {col + 1}" for col in range(column_count)]
        data_rows = rows

    rendered = []
    truncated = False
    row_number = 1
    for row in data_rows:
        # empty rows never get a row number
        if is_empty_row(row):
            continue
        if len(rendered) >= max_rows:
            truncated = True
            break
        cells = pad_cells([describe(value) for value in row], column_count)
        rendered.append(TableRow(label=str(row_number), cells=cells))
        row_number += 1

    return TableModel(
        title="CSV Data",
        columns=tuple(columns),
        rows=tuple(rendered),
        non_empty_rows=non_empty_rows,
        physical_rows=sum(1 for row in data_rows if not is_empty_row(row)),
        max_rows=max_rows,
        truncated=truncated,
        columns_truncated=source_columns > column_count,
        source_columns=source_columns,
        summary=(("File", os.path.basename(filename)),),
    )


class CsvConverter:
    """Converts comma-separated text into a paginated HTML table."""

    SUPPORTED_EXTENSIONS = {".csv", ".txt"}

    @staticmethod
    def can_handle(filename: str) -> bool:
        _, ext = os.path.splitext(filename.lower())
        return ext in CsvConverter.SUPPORTED_EXTENSIONS

    @staticmethod
    def convert(content: bytes, filename: str, max_rows: int = MAX_ROWS,
                max_columns: int = MAX_COLUMNS) -> str:
        """Render CSV bytes as a complete HTML page."""
        logger.debug("Converting CSV %s (%d bytes)", filename, len(content))
        rows = parse_delimited_text(decode_text(content))

        if not rows:
            body = empty_state("📊", "This CSV is empty", "No data found in this file")
            script = ""
        else:
            model = build_csv_table(rows, filename, max_rows=max_rows, max_columns=max_columns)
            if model.truncated:
                logger.info("CSV %s truncated at %d rows", filename, max_rows)
            body = render_table(model)
            script = TABLE_SCRIPT

        return render_page(
            title="CSV Document",
            heading="CSV Document",
            document_name=extract_document_name(filename),
            body=body,
            style=TABLE_STYLE,
            script=script,
        )
