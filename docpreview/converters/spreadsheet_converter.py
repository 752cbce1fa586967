"""
Spreadsheet (.xlsx / .xls) to HTML converter.

Workbooks are read into a small tagged cell model (SheetCell), resolved
to display text, and rendered one tabbed section per sheet through the
shared table renderer. Columns are named A, B, ..., Z, AA, ... and rows
keep their sheet row numbers.
"""

import io
import logging
import os
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any, Optional

from ..classifier import CellCategory, CellDescriptor, describe
from ..formatting import escape_html, extract_document_name, format_date, format_numeric_cell
from ..result import MalformedDocument
from ..templates import SHEET_STYLE, SHEET_TAB_SCRIPT, TABLE_SCRIPT, TABLE_STYLE, empty_state, render_page
from .table import MAX_COLUMNS, MAX_ROWS, TableModel, TableRow, pad_cells, render_table

logger = logging.getLogger(__name__)

ERROR_SENTINEL = "#ERROR!"


class CellKind(Enum):
    """Kinds of spreadsheet cell."""
    BLANK = "blank"
    STRING = "string"
    NUMERIC = "numeric"
    DATE = "date"
    BOOLEAN = "boolean"
    FORMULA = "formula"
    ERROR = "error"


# cached formula results we can display; anything else shows the formula
DISPLAYABLE_RESULTS = {CellKind.STRING, CellKind.NUMERIC, CellKind.DATE, CellKind.BOOLEAN}


@dataclass(frozen=True)
class SheetCell:
    """
    A single spreadsheet cell.

    For FORMULA cells ``value`` is the formula text without the leading
    ``=`` and ``cached`` is the last computed result stored in the file.
    """
    kind: CellKind
    value: Any = None
    cached: Optional["SheetCell"] = None

    @property
    def is_blank(self) -> bool:
        if self.kind is CellKind.BLANK:
            return True
        if self.kind is CellKind.STRING:
            return not str(self.value).strip()
        return False


BLANK = SheetCell(CellKind.BLANK)


@dataclass
class SheetData:
    """Cells of one worksheet, row by row, with sheet row numbers."""
    name: str
    rows: list = field(default_factory=list)  # [(row_number, [SheetCell, ...]), ...]
    source_columns: int = 0
    physical_rows: int = 0

    @property
    def is_empty(self) -> bool:
        return all(all(cell.is_blank for cell in cells) for _, cells in self.rows)


def column_name(index: int) -> str:
    """Excel-style column name for a zero-based index: 0 -> A, 26 -> AA."""
    if index < 0:
        raise ValueError(f"Column index cannot be negative, got {index}")
    letters = []
    while index >= 0:
        letters.append(chr(ord("A") + index % 26))
        index = index // 26 - 1
    return "".join(reversed(letters))


def resolve_cell(cell: SheetCell) -> CellDescriptor:
    """Resolve a cell to display text. Never raises."""
    try:
        return _resolve(cell)
    except Exception as e:
        logger.warning("Error formatting cell value: %s", e)
        return CellDescriptor(ERROR_SENTINEL, CellCategory.ERROR)


def _resolve(cell: SheetCell) -> CellDescriptor:
    kind = cell.kind
    if kind is CellKind.BLANK:
        return CellDescriptor("")
    if kind is CellKind.STRING:
        return describe(str(cell.value).replace("\r", ""))
    if kind is CellKind.NUMERIC:
        return CellDescriptor(format_numeric_cell(cell.value), CellCategory.NUMBER)
    if kind is CellKind.DATE:
        return CellDescriptor(format_date(cell.value), CellCategory.DATE)
    if kind is CellKind.BOOLEAN:
        return CellDescriptor("TRUE" if cell.value else "FALSE", CellCategory.BOOLEAN)
    if kind is CellKind.FORMULA:
        return CellDescriptor(_resolve_formula(cell), CellCategory.FORMULA)
    return CellDescriptor(ERROR_SENTINEL, CellCategory.ERROR)


def _resolve_formula(cell: SheetCell) -> str:
    cached = cell.cached
    if cached is not None and cached.kind in DISPLAYABLE_RESULTS:
        try:
            return _resolve(cached).text
        except (TypeError, ValueError, OverflowError) as e:
            logger.debug("Unusable cached formula result %r: %s", cached.value, e)
    return f"={cell.value}"


# ──────────────────────────────────────────────────────────────
# Readers
# ──────────────────────────────────────────────────────────────

def _openpyxl_cell(cell, cached_cell=None) -> SheetCell:
    value = cell.value
    if value is None or (isinstance(value, str) and value == ""):
        return BLANK

    data_type = cell.data_type
    if data_type == "f":
        formula = value if isinstance(value, str) else getattr(value, "text", str(value))
        if formula.startswith("="):
            formula = formula[1:]
        cached = _openpyxl_cell(cached_cell) if cached_cell is not None else None
        return SheetCell(CellKind.FORMULA, formula, cached)
    if data_type == "e":
        return SheetCell(CellKind.ERROR, value)
    if isinstance(value, bool):
        return SheetCell(CellKind.BOOLEAN, value)
    if isinstance(value, (datetime, date, time, timedelta)) or cell.is_date:
        return SheetCell(CellKind.DATE, value)
    if isinstance(value, (int, float)):
        return SheetCell(CellKind.NUMERIC, value)
    return SheetCell(CellKind.STRING, str(value))


def read_xlsx(content: bytes, max_columns: int = MAX_COLUMNS) -> list[SheetData]:
    """
    Read an .xlsx workbook.

    The workbook is loaded twice: once for cell types and formula text,
    once (data_only) for the results Excel cached when it last saved.
    """
    try:
        from openpyxl import load_workbook
    except ImportError:
        raise RuntimeError("openpyxl is not installed. Run: pip install openpyxl")

    try:
        formulas = load_workbook(io.BytesIO(content), data_only=False)
        values = load_workbook(io.BytesIO(content), data_only=True)
    except Exception as e:
        raise MalformedDocument(f"Cannot open workbook: {e}") from e

    sheets = []
    try:
        for ws in formulas.worksheets:
            cached_ws = values[ws.title]
            source_columns = ws.max_column or 0
            width = min(source_columns, max_columns)
            sheet = SheetData(name=ws.title, source_columns=source_columns, physical_rows=ws.max_row or 0)

            if width:
                row_pairs = zip(
                    ws.iter_rows(min_row=1, max_row=ws.max_row, max_col=width),
                    cached_ws.iter_rows(min_row=1, max_row=ws.max_row, max_col=width),
                )
                for row_number, (row, cached_row) in enumerate(row_pairs, start=1):
                    cells = []
                    for cell, cached in zip(row, cached_row):
                        try:
                            cells.append(_openpyxl_cell(cell, cached))
                        except Exception as e:
                            logger.warning("Unreadable cell %s in %s: %s", cell.coordinate, ws.title, e)
                            cells.append(SheetCell(CellKind.ERROR))
                    sheet.rows.append((row_number, cells))

            sheets.append(sheet)
    finally:
        formulas.close()
        values.close()
    return sheets


def _xlrd_cell(cell, datemode: int) -> SheetCell:
    import xlrd

    ctype = cell.ctype
    if ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
        return BLANK
    if ctype == xlrd.XL_CELL_TEXT:
        return SheetCell(CellKind.STRING, cell.value) if cell.value != "" else BLANK
    if ctype == xlrd.XL_CELL_NUMBER:
        return SheetCell(CellKind.NUMERIC, cell.value)
    if ctype == xlrd.XL_CELL_DATE:
        return SheetCell(CellKind.DATE, xlrd.xldate_as_datetime(cell.value, datemode))
    if ctype == xlrd.XL_CELL_BOOLEAN:
        return SheetCell(CellKind.BOOLEAN, bool(cell.value))
    return SheetCell(CellKind.ERROR, cell.value)


def read_xls(content: bytes, max_columns: int = MAX_COLUMNS) -> list[SheetData]:
    """Read a legacy .xls workbook. Only cached formula results are available."""
    try:
        import xlrd
    except ImportError:
        raise RuntimeError("xlrd is not installed. Run: pip install xlrd")

    try:
        book = xlrd.open_workbook(file_contents=content)
    except Exception as e:
        raise MalformedDocument(f"Cannot open workbook: {e}") from e

    sheets = []
    try:
        for ws in book.sheets():
            width = min(ws.ncols, max_columns)
            sheet = SheetData(name=ws.name, source_columns=ws.ncols, physical_rows=ws.nrows)
            for row_index in range(ws.nrows):
                cells = []
                for col_index in range(min(width, ws.row_len(row_index))):
                    try:
                        cells.append(_xlrd_cell(ws.cell(row_index, col_index), book.datemode))
                    except Exception as e:
                        logger.warning("Unreadable cell (%d, %d) in %s: %s", row_index, col_index, ws.name, e)
                        cells.append(SheetCell(CellKind.ERROR))
                sheet.rows.append((row_index + 1, cells))
            sheets.append(sheet)
    finally:
        book.release_resources()
    return sheets


# ──────────────────────────────────────────────────────────────
# Rendering
# ──────────────────────────────────────────────────────────────

def build_sheet_table(sheet: SheetData, max_rows: int = MAX_ROWS,
                      max_columns: int = MAX_COLUMNS) -> TableModel:
    """
    Build the TableModel for one sheet.

    Empty rows are not rendered but keep their row number, so row labels
    always match the sheet.
    """
    width = min(sheet.source_columns, max_columns)
    rendered = []
    non_empty = 0
    truncated = False

    for row_number, cells in sheet.rows:
        if all(cell.is_blank for cell in cells):
            continue
        non_empty += 1
        if len(rendered) >= max_rows:
            truncated = True
            continue
        descriptors = [resolve_cell(cell) for cell in cells]
        rendered.append(TableRow(label=str(row_number), cells=pad_cells(descriptors, width)))

    return TableModel(
        title=sheet.name,
        columns=tuple(column_name(i) for i in range(width)),
        rows=tuple(rendered),
        non_empty_rows=non_empty,
        physical_rows=sheet.physical_rows,
        max_rows=max_rows,
        truncated=truncated,
        columns_truncated=sheet.source_columns > width,
        source_columns=sheet.source_columns,
        summary=(("Sheet", sheet.name),),
    )


def render_sheets(sheets: list[SheetData], max_rows: int = MAX_ROWS,
                  max_columns: int = MAX_COLUMNS) -> str:
    """Render every sheet as a tabbed section; the first is active."""
    if not sheets:
        return empty_state("📄", "This workbook is empty", "No worksheets found in this file")

    html = []
    if len(sheets) > 1:
        html.append("<div class='sheet-tabs-container'>")
        for index, sheet in enumerate(sheets):
            active = " active" if index == 0 else ""
            html.append(
                f"<button class='sheet-tab{active}' data-sheet-index='{index}'>"
                f"{escape_html(sheet.name)}</button>"
            )
        html.append("</div>")

    for index, sheet in enumerate(sheets):
        active = " active" if index == 0 else ""
        html.append(f"<div class='sheet-content{active}' data-sheet-index='{index}'>")
        if sheet.is_empty:
            html.append(empty_state("📄", "This sheet is empty", "No data found in this worksheet"))
        else:
            model = build_sheet_table(sheet, max_rows=max_rows, max_columns=max_columns)
            if model.truncated:
                logger.info("Sheet %s truncated at %d rows", sheet.name, max_rows)
            html.append(render_table(model, header_class="column-letter", corner_label=""))
        html.append("</div>")

    return "".join(html)


class SpreadsheetConverter:
    """Converts Excel workbooks (.xlsx, .xls) into tabbed HTML tables."""

    SUPPORTED_EXTENSIONS = {".xlsx", ".xls"}

    @staticmethod
    def can_handle(filename: str) -> bool:
        _, ext = os.path.splitext(filename.lower())
        return ext in SpreadsheetConverter.SUPPORTED_EXTENSIONS

    @staticmethod
    def read(content: bytes, filename: str, max_columns: int = MAX_COLUMNS) -> list[SheetData]:
        _, ext = os.path.splitext(filename.lower())
        if ext == ".xls":
            return read_xls(content, max_columns=max_columns)
        return read_xlsx(content, max_columns=max_columns)

    @staticmethod
    def convert(content: bytes, filename: str, max_rows: int = MAX_ROWS,
                max_columns: int = MAX_COLUMNS) -> str:
        """Render workbook bytes as a complete HTML page."""
        sheets = SpreadsheetConverter.read(content, filename, max_columns=max_columns)
        logger.debug("Read %d sheet(s) from %s", len(sheets), filename)

        script = TABLE_SCRIPT
        if len(sheets) > 1:
            script += SHEET_TAB_SCRIPT

        return render_page(
            title="Excel Document",
            heading="Excel Workbook",
            document_name=extract_document_name(filename),
            body=render_sheets(sheets, max_rows=max_rows, max_columns=max_columns),
            style=TABLE_STYLE + SHEET_STYLE,
            script=script,
        )
