"""
Word (.docx) to HTML converter.

Walks the document body in order, rendering paragraphs with their run
formatting (bold, italic, underline) and tables with the first row as
the header row.
"""

import io
import logging
import os

from ..formatting import escape_html, extract_document_name
from ..result import MalformedDocument
from ..templates import WORD_STYLE, render_page

logger = logging.getLogger(__name__)

# w:vMerge value on the lower cells of a vertical merge
VMERGE_CONTINUE = "continue"


def _local_tag(element) -> str:
    tag = element.tag
    return tag.split("}")[-1] if "}" in tag else tag


def _heading_level(style_name: str):
    """Heading level for Title/Heading N paragraph styles, else None."""
    if style_name == "Title":
        return 1
    if style_name.startswith("Heading"):
        try:
            return min(int(style_name.replace("Heading", "").strip()), 5)
        except ValueError:
            return 1
    return None


def apply_run_formatting(text: str, bold=False, italic=False, underline=False) -> str:
    """
    Wrap already-escaped run text in formatting tags.

    Bold is applied first and underline last, so a run with all three
    comes out as ``<u><em><strong>text</strong></em></u>``.
    """
    if bold:
        text = f"<strong>{text}</strong>"
    if italic:
        text = f"<em>{text}</em>"
    if underline:
        text = f"<u>{text}</u>"
    return text


def _is_underlined(run) -> bool:
    from docx.enum.text import WD_UNDERLINE

    underline = run.underline
    return underline not in (None, False, WD_UNDERLINE.NONE)


def render_run(run) -> str:
    text = run.text
    if not text:
        return ""
    return apply_run_formatting(
        escape_html(text),
        bold=bool(run.bold),
        italic=bool(run.italic),
        underline=_is_underlined(run),
    )


def _paragraph_runs(paragraph):
    from docx.text.hyperlink import Hyperlink

    # hyperlinks wrap their own runs
    for item in paragraph.iter_inner_content():
        if isinstance(item, Hyperlink):
            yield from item.runs
        else:
            yield item


def render_paragraph(paragraph) -> str:
    """Render one paragraph, or an empty string if it has no text."""
    if not paragraph.text.strip():
        return ""

    style_name = paragraph.style.name if paragraph.style is not None else ""
    content = "".join(render_run(run) for run in _paragraph_runs(paragraph))

    level = _heading_level(style_name)
    if level is not None:
        tag = f"h{level + 1}"
        return f"<{tag} class='heading'>{content}</{tag}>"
    return f"<p class='paragraph'>{content}</p>"


def cell_text(cell) -> str:
    """Non-empty paragraph texts of a table cell joined with single spaces."""
    parts = [p.text.strip() for p in cell.paragraphs]
    return " ".join(part for part in parts if part).strip()


def render_table(table) -> str:
    """
    Render a Word table; the first row is always the header row.

    Cells are taken from each row's own ``<w:tc>`` elements, so a
    horizontal merge renders once and the continuation rows of a
    vertical merge render as empty cells.
    """
    from docx.table import _Cell

    html = ["<table class='word-table'>"]
    for row_index, row in enumerate(table.rows):
        tag = "th" if row_index == 0 else "td"
        html.append("<tr>")
        for tc in row._tr.tc_lst:
            if tc.vMerge == VMERGE_CONTINUE:
                html.append(f"<{tag}></{tag}>")
                continue
            cell = _Cell(tc, table)
            html.append(f"<{tag}>{escape_html(cell_text(cell))}</{tag}>")
        html.append("</tr>")
    html.append("</table>")
    return "".join(html)


def render_body(document) -> str:
    """Render body paragraphs and tables in document order."""
    paragraphs = {p._element: p for p in document.paragraphs}
    tables = {t._element: t for t in document.tables}

    html = []
    for element in document.element.body:
        tag = _local_tag(element)
        if tag == "p":
            paragraph = paragraphs.get(element)
            if paragraph is not None:
                html.append(render_paragraph(paragraph))
        elif tag == "tbl":
            table = tables.get(element)
            if table is not None:
                html.append(render_table(table))
    return "".join(html)


def open_document(content: bytes):
    try:
        from docx import Document
    except ImportError:
        raise RuntimeError("python-docx is not installed. Run: pip install python-docx")

    try:
        return Document(io.BytesIO(content))
    except Exception as e:
        raise MalformedDocument(f"Cannot open Word document: {e}") from e


class WordConverter:
    """Converts Word documents into a single-column HTML page."""

    SUPPORTED_EXTENSIONS = {".docx", ".doc"}

    @staticmethod
    def can_handle(filename: str) -> bool:
        _, ext = os.path.splitext(filename.lower())
        return ext in WordConverter.SUPPORTED_EXTENSIONS

    @staticmethod
    def convert(content: bytes, filename: str) -> str:
        """
        Render Word document bytes as a complete HTML page.

        Legacy binary .doc files are not readable by python-docx and
        raise MalformedDocument like any other unreadable file.
        """
        document = open_document(content)
        body = render_body(document)
        logger.debug("Rendered %s (%d characters of HTML)", filename, len(body))

        return render_page(
            title="Document",
            heading="Word Document",
            document_name=extract_document_name(filename),
            body=f"<div class='word-body'>{body}</div>",
            style=WORD_STYLE,
        )
