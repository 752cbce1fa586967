"""
Document-to-Markdown converter.

The secondary representation of the fallback chain: when the HTML
preview cannot be built, the same document is transliterated into plain
Markdown through a simpler, more forgiving read path (values only, no
formula or run-level handling).
"""

import io
import logging
import os

from ..result import MalformedDocument
from .csv_converter import CsvConverter, decode_text
from .spreadsheet_converter import SpreadsheetConverter
from .word_converter import WordConverter

logger = logging.getLogger(__name__)


class MarkdownConverter:
    """Converts CSV, Word and Excel documents to clean Markdown."""

    SUPPORTED_EXTENSIONS = (
        CsvConverter.SUPPORTED_EXTENSIONS
        | SpreadsheetConverter.SUPPORTED_EXTENSIONS
        | WordConverter.SUPPORTED_EXTENSIONS
    )

    @staticmethod
    def can_handle(filename: str) -> bool:
        _, ext = os.path.splitext(filename.lower())
        return ext in MarkdownConverter.SUPPORTED_EXTENSIONS

    @staticmethod
    def convert(content: bytes, filename: str) -> str:
        """Convert a document to Markdown text."""
        _, ext = os.path.splitext(filename.lower())
        logger.debug("Transliterating %s to Markdown", filename)

        if ext in CsvConverter.SUPPORTED_EXTENSIONS:
            return _convert_text(content, filename)
        elif ext == ".xlsx":
            return _convert_xlsx(content, filename)
        elif ext == ".xls":
            return _convert_xls(content, filename)
        elif ext in WordConverter.SUPPORTED_EXTENSIONS:
            return _convert_docx(content, filename)
        else:
            raise ValueError(f"Unsupported format for Markdown: {ext}")


def _front_matter(source_type: str, filename: str, **extra) -> str:
    header = (
        f"---\n"
        f"source_type: {source_type}\n"
        f"source_file: {os.path.basename(filename)}\n"
    )
    for key, value in extra.items():
        header += f"{key}: {value}\n"
    return header + "---\n\n"


def _convert_text(content: bytes, filename: str) -> str:
    """Wrap delimited text in a fenced code block."""
    _, ext = os.path.splitext(filename.lower())
    text = decode_text(content)
    lang = "csv" if ext == ".csv" else ""
    return _front_matter("text", filename) + f"```{lang}\n{text.strip()}\n```\n"


def _convert_docx(content: bytes, filename: str) -> str:
    """Convert a Word document to Markdown."""
    try:
        from docx import Document
    except ImportError:
        raise RuntimeError("python-docx is not installed. Run: pip install python-docx")

    try:
        doc = Document(io.BytesIO(content))
    except Exception as e:
        raise MalformedDocument(f"Cannot open Word document: {e}") from e

    paragraphs = {p._element: p for p in doc.paragraphs}
    tables = {t._element: t for t in doc.tables}
    lines = []

    for element in doc.element.body:
        tag = element.tag.split("}")[-1] if "}" in element.tag else element.tag

        if tag == "p":
            para = paragraphs.get(element)
            if para is None:
                continue

            style_name = para.style.name if para.style else ""
            text = para.text.strip()

            if not text:
                continue

            # Map Word heading styles to Markdown headings
            if style_name.startswith("Heading"):
                try:
                    level = min(int(style_name.replace("Heading", "").strip()), 6)
                except ValueError:
                    level = 2
                lines.append(f"{'#' * level} {text}")
            elif style_name == "Title":
                lines.append(f"# {text}")
            elif style_name.startswith("List"):
                lines.append(f"1. {text}" if "Number" in style_name else f"- {text}")
                continue
            else:
                lines.append(text)
            lines.append("")

        elif tag == "tbl":
            table = tables.get(element)
            if table is not None:
                rows = [[cell.text.strip().replace("\n", " ") for cell in row.cells] for row in table.rows]
                lines.append(_table_to_markdown(rows))
                lines.append("")

    return _front_matter("docx", filename) + "\n".join(lines).strip() + "\n"


def _sheet_section(sheet_name: str, rows: list) -> str:
    data_rows = [
        ["" if cell is None else str(cell) for cell in row]
        for row in rows
        if any(cell is not None and str(cell).strip() for cell in row)
    ]
    if not data_rows:
        return f"## {sheet_name}\n\n[Empty sheet]\n"
    return f"## {sheet_name}\n\n" + _table_to_markdown(data_rows)


def _convert_xlsx(content: bytes, filename: str) -> str:
    """Convert an Excel workbook to Markdown tables (cached values only)."""
    try:
        from openpyxl import load_workbook
    except ImportError:
        raise RuntimeError("openpyxl is not installed. Run: pip install openpyxl")

    try:
        wb = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    except Exception as e:
        raise MalformedDocument(f"Cannot open workbook: {e}") from e

    sections = []
    sheet_names = list(wb.sheetnames)
    for sheet_name in sheet_names:
        rows = list(wb[sheet_name].iter_rows(values_only=True))
        sections.append(_sheet_section(sheet_name, rows))
    wb.close()

    header = _front_matter("xlsx", filename, sheets=", ".join(sheet_names))
    return header + "\n".join(sections).strip() + "\n"


def _convert_xls(content: bytes, filename: str) -> str:
    """Convert a legacy Excel workbook to Markdown tables."""
    try:
        import xlrd
    except ImportError:
        raise RuntimeError("xlrd is not installed. Run: pip install xlrd")

    try:
        book = xlrd.open_workbook(file_contents=content)
    except Exception as e:
        raise MalformedDocument(f"Cannot open workbook: {e}") from e

    sections = []
    for sheet in book.sheets():
        rows = [sheet.row_values(i) for i in range(sheet.nrows)]
        sections.append(_sheet_section(sheet.name, rows))

    header = _front_matter("xls", filename, sheets=", ".join(book.sheet_names()))
    book.release_resources()
    return header + "\n".join(sections).strip() + "\n"


def _table_to_markdown(rows: list) -> str:
    """Render rows as a Markdown table; the first row is the header."""
    if not rows:
        return ""

    col_count = max(len(r) for r in rows)
    padded = [
        [cell.replace("|", "\\|") for cell in row] + [""] * (col_count - len(row))
        for row in rows
    ]

    md = "| " + " | ".join(padded[0]) + " |\n"
    md += "| " + " | ".join(["---"] * col_count) + " |\n"
    for row in padded[1:]:
        md += "| " + " | ".join(row) + " |\n"
    return md
