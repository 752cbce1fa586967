"""
Tabular HTML renderer shared by the CSV and spreadsheet converters.

Each converter builds a TableModel from its own cell source and column
naming scheme; render_table turns the model into an HTML section with a
summary strip, search/pagination controls and a truncation banner.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..classifier import CellDescriptor
from ..formatting import escape_html

MAX_ROWS = 2000
MAX_COLUMNS = 100
ROWS_PER_PAGE_CHOICES = (50, 100, 250, 500)
DEFAULT_ROWS_PER_PAGE = 100


@dataclass(frozen=True)
class TableRow:
    """One rendered row: the row-header label and its cells."""
    label: str
    cells: tuple


@dataclass(frozen=True)
class TableModel:
    """
    A table ready to render.

    ``rows`` holds only the rows that will be emitted (at most the row
    cap). ``non_empty_rows`` and ``physical_rows`` describe the whole
    source so the summary and banner can report what was left out.
    """
    title: str
    columns: tuple
    rows: tuple
    non_empty_rows: int
    physical_rows: int
    max_rows: int = MAX_ROWS
    truncated: bool = False
    columns_truncated: bool = False
    source_columns: int = 0
    summary: tuple = field(default_factory=tuple)

    @property
    def column_count(self) -> int:
        return len(self.columns)


def is_empty_row(cells) -> bool:
    """A row is empty when every field is missing or blank."""
    if cells is None:
        return True
    for cell in cells:
        if isinstance(cell, CellDescriptor):
            if not cell.is_blank:
                return False
        elif cell is not None and str(cell).strip():
            return False
    return True


def pad_cells(cells, width: int) -> tuple:
    """Cut or pad a row of CellDescriptors to exactly ``width`` cells."""
    cells = tuple(cells[:width])
    if len(cells) < width:
        cells += (CellDescriptor(""),) * (width - len(cells))
    return cells


def render_cell(cell: CellDescriptor) -> str:
    css_class = cell.category.css_class
    attrs = f" class='{css_class}'" if css_class else ""
    if not cell.text:
        return f"<td{attrs}>&nbsp;</td>"
    return f"<td{attrs}>{escape_html(cell.text)}</td>"


def render_table(model: TableModel, header_class: Optional[str] = None,
                 corner_label: str = "#") -> str:
    """Render a TableModel as a self-contained table section."""
    html = ["<div class='table-section'>"]

    html.append("<div class='table-controls'>")
    html.append("<div class='control-group'>")
    html.append("<label class='control-label'>Search:</label>")
    html.append("<input type='text' class='control-input search-input' placeholder='Filter rows...'>")
    html.append("</div>")
    html.append("<div class='control-group'>")
    html.append("<label class='control-label'>Rows per page:</label>")
    html.append("<select class='control-input rows-per-page'>")
    for choice in ROWS_PER_PAGE_CHOICES:
        selected = " selected" if choice == DEFAULT_ROWS_PER_PAGE else ""
        html.append(f"<option value='{choice}'{selected}>{choice}</option>")
    html.append("</select>")
    html.append("</div>")
    html.append("</div>")

    html.append("<div class='table-summary'>")
    html.append(f"<div class='summary-item'><strong>Rows:</strong> {model.non_empty_rows}</div>")
    html.append(f"<div class='summary-item'><strong>Columns:</strong> {model.column_count}</div>")
    for label, value in model.summary:
        html.append(
            f"<div class='summary-item'><strong>{escape_html(label)}:</strong> {escape_html(value)}</div>"
        )
    html.append("</div>")

    html.append("<div class='pagination-container'><div class='pagination-info'></div></div>")

    html.append("<div class='table-container'>")
    html.append(f"<div class='table-header'>{escape_html(model.title)}</div>")
    if model.columns_truncated:
        html.append(
            f"<div class='column-notice'>Showing first {model.column_count} "
            f"of {model.source_columns} columns</div>"
        )
    html.append("<div class='table-wrapper'>")
    html.append("<table>")

    th_attrs = f" class='{header_class}'" if header_class else ""
    html.append("<thead><tr>")
    html.append(f"<th class='row-header'>{escape_html(corner_label)}</th>")
    for column in model.columns:
        html.append(f"<th{th_attrs}>{escape_html(column)}</th>")
    html.append("</tr></thead>")

    html.append("<tbody>")
    for row in model.rows:
        html.append("<tr>")
        html.append(f"<td class='row-header'>{escape_html(row.label)}</td>")
        for cell in row.cells:
            html.append(render_cell(cell))
        html.append("</tr>")
    html.append("</tbody>")

    if model.truncated:
        # kept out of tbody so pagination never pages over it
        html.append("<tfoot><tr class='truncation-notice'><td class='row-header'>...</td>")
        html.append(
            f"<td colspan='{max(model.column_count, 1)}'>"
            f"⚠️ Data truncated - Showing first {model.max_rows} rows "
            f"of {model.physical_rows} total rows</td></tr></tfoot>"
        )

    html.append("</table>")
    html.append("</div>")
    html.append("</div>")

    html.append("<div class='pagination-container'><div class='pagination-info'></div></div>")
    html.append("</div>")
    return "".join(html)
