"""
Inline CSS and JavaScript for rendered previews, plus the page shell.

Rendered pages are self-contained: no external stylesheet, font or
script is referenced, so the buffer can be served as-is.
"""

from .formatting import escape_html

ACCENT = "#A90C2B"
GRADIENT = "linear-gradient(135deg, #D0715B 0%, #8B0A23 100%)"

BASE_STYLE = (
    "* { box-sizing: border-box; }"
    "body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, 'Helvetica Neue', Arial, sans-serif; "
    "line-height: 1.6; color: #2c3e50; margin: 0; padding: 0; "
    "background: linear-gradient(135deg, #f5f7fa 0%, #e8eaed 100%); min-height: 100vh; }"
    ".document-container { max-width: 98%; margin: 10px auto; padding: 20px; "
    "background: rgba(255, 255, 255, 0.95); border-radius: 12px; "
    "box-shadow: 0 10px 30px rgba(0,0,0,0.08), 0 0 0 1px rgba(255,255,255,0.2); }"
    f".document-name-header {{ background: linear-gradient(135deg, #f8f9fa 0%, #e9ecef 100%); "
    f"padding: 15px 20px; border-radius: 8px; margin-bottom: 15px; border-left: 4px solid {ACCENT}; }}"
    ".document-name { font-size: 1.1em; font-weight: 600; color: #2c3e50; }"
    ".document-title { font-size: 2.2em; font-weight: 700; color: #8B0A23; text-align: center; margin-bottom: 25px; }"
    "@media (max-width: 768px) {"
    "  .document-container { margin: 5px; padding: 10px; }"
    "  .document-title { font-size: 1.8em; }"
    "  .document-name-header { padding: 10px 15px; }"
    "}"
)

TABLE_STYLE = (
    ".table-controls { margin: 20px 0 15px 0; display: flex; flex-wrap: wrap; gap: 15px; align-items: center; }"
    ".control-group { display: flex; align-items: center; gap: 8px; }"
    ".control-label { font-weight: 600; color: #495057; font-size: 0.9em; }"
    ".control-input { padding: 8px 12px; border: 2px solid #e1e5e9; border-radius: 6px; font-size: 0.9em; }"
    ".control-input:focus { outline: none; border-color: #D0715B; }"
    ".table-container { margin: 15px 0; background: white; border-radius: 8px; overflow: hidden; "
    "box-shadow: 0 4px 20px rgba(0,0,0,0.08); border: 1px solid #e1e5e9; }"
    f".table-header {{ background: {GRADIENT}; color: white; padding: 12px 15px; font-weight: 600; }}"
    ".table-wrapper { overflow: auto; max-height: 70vh; background: white; }"
    "table { border-collapse: separate; border-spacing: 0; width: auto; min-width: 100%; font-size: 0.85em; }"
    "th { background: linear-gradient(135deg, #f8f9fa 0%, #e9ecef 100%); font-weight: 600; padding: 8px 12px; "
    "text-align: left; border: 1px solid #d0d7de; position: sticky; top: 0; z-index: 10; white-space: nowrap; "
    "color: #495057; min-width: 60px; max-width: 300px; }"
    "th.row-header { text-align: center; color: #5f6368; min-width: 50px; position: sticky; left: 0; z-index: 11; }"
    "td { padding: 8px 12px; border: 1px solid #d0d7de; vertical-align: top; white-space: pre-wrap; "
    "word-wrap: break-word; min-width: 60px; max-width: 300px; background: white; }"
    "td.row-header { background: #f1f3f4; font-weight: 500; text-align: center; color: #5f6368; "
    "position: sticky; left: 0; z-index: 10; border-right: 2px solid #d0d7de; }"
    "tbody tr:nth-child(even) td:not(.row-header) { background-color: #fafbfc; }"
    "tbody tr:hover td:not(.row-header) { background-color: #e8f0fe; }"
    "td.number { text-align: right; font-family: 'Consolas', 'Monaco', monospace; color: #1565c0; }"
    "td.date { color: #1a73e8; }"
    "td.email { color: #7b1fa2; }"
    "td.url { color: #1976d2; text-decoration: underline; }"
    "td.boolean { text-align: center; color: #2e7d32; font-weight: 600; }"
    "td.formula { color: #6a1b9a; font-style: italic; }"
    "td.error { color: #c62828; font-weight: 600; }"
    "td.large-text { max-width: 400px; }"
    "tr.truncation-notice td { text-align: center; padding: 15px; background: #fff3cd; color: #856404; font-weight: bold; }"
    ".column-notice { padding: 8px 15px; background: #fff3cd; color: #856404; font-size: 0.85em; }"
    ".table-summary { background: #f8f9fa; padding: 12px 15px; border-radius: 6px; margin-bottom: 15px; "
    "font-size: 0.85em; color: #6c757d; display: flex; justify-content: space-between; flex-wrap: wrap; "
    "gap: 15px; border-left: 4px solid #D0715B; }"
    ".summary-item { display: flex; align-items: center; gap: 5px; }"
    ".summary-item strong { color: #D0715B; }"
    ".empty-state { text-align: center; padding: 50px 20px; color: #6c757d; }"
    ".pagination-container { margin: 15px 0; display: flex; justify-content: center; align-items: center; gap: 10px; }"
    ".pagination-button { background: #f8f9fa; border: 1px solid #d0d7de; padding: 8px 12px; border-radius: 6px; cursor: pointer; }"
    ".pagination-button:hover { background: #e9ecef; }"
    ".pagination-info { color: #6c757d; font-size: 0.9em; }"
    "@media (max-width: 768px) {"
    "  .table-controls { flex-direction: column; align-items: stretch; }"
    "  table { font-size: 0.75em; }"
    "  th, td { padding: 4px 8px; }"
    "  .table-wrapper { max-height: 50vh; }"
    "}"
)

SHEET_STYLE = (
    ".sheet-tabs-container { margin: 20px 0 15px 0; display: flex; flex-wrap: wrap; gap: 6px; }"
    f".sheet-tab {{ background: {GRADIENT}; color: white; padding: 10px 20px; border-radius: 20px; "
    "font-weight: 600; font-size: 0.9em; cursor: pointer; border: none; opacity: 0.7; }"
    ".sheet-tab.active { opacity: 1; box-shadow: 0 3px 12px rgba(169, 12, 43, 0.3); }"
    ".sheet-content { display: none; margin-top: 15px; }"
    ".sheet-content.active { display: block; }"
    "th.column-letter { text-align: center; }"
)

WORD_STYLE = (
    ".paragraph { margin: 12px 0; font-size: 1.05em; line-height: 1.8; }"
    ".heading { color: #2c3e50; margin: 24px 0 12px 0; }"
    ".word-table { border-collapse: collapse; margin: 20px 0; width: 100%; }"
    ".word-table th, .word-table td { border: 1px solid #d0d7de; padding: 8px 12px; text-align: left; vertical-align: top; }"
    ".word-table th { background: #f1f3f4; font-weight: 600; }"
    ".word-body { max-width: 800px; margin: 0 auto; }"
)

TABLE_SCRIPT = """
(function () {
  function initSection(section) {
    var body = section.querySelector('tbody');
    if (!body) return;
    var allRows = Array.prototype.slice.call(body.querySelectorAll('tr'));
    var filteredRows = allRows.slice();
    var currentPage = 0;
    var rowsPerPage = 100;
    var search = section.querySelector('.search-input');
    var select = section.querySelector('.rows-per-page');

    function render() {
      var totalPages = Math.max(1, Math.ceil(filteredRows.length / rowsPerPage));
      if (currentPage >= totalPages) currentPage = totalPages - 1;
      for (var i = 0; i < allRows.length; i++) allRows[i].style.display = 'none';
      var start = currentPage * rowsPerPage;
      var end = Math.min(start + rowsPerPage, filteredRows.length);
      for (var j = start; j < end; j++) filteredRows[j].style.display = '';
      var containers = section.querySelectorAll('.pagination-container');
      for (var k = 0; k < containers.length; k++) renderControls(containers[k], totalPages);
    }

    function renderControls(container, totalPages) {
      var old = container.querySelectorAll('.pagination-button');
      for (var i = 0; i < old.length; i++) old[i].parentNode.removeChild(old[i]);
      var info = container.querySelector('.pagination-info');
      if (info) {
        info.textContent = 'Page ' + (currentPage + 1) + ' of ' + totalPages +
          ' (' + filteredRows.length + ' rows)';
      }
      if (totalPages <= 1) return;
      if (currentPage > 0) {
        var prev = document.createElement('button');
        prev.className = 'pagination-button';
        prev.textContent = '\\u2190 Previous';
        prev.onclick = function () { currentPage -= 1; render(); };
        container.insertBefore(prev, info);
      }
      if (currentPage < totalPages - 1) {
        var next = document.createElement('button');
        next.className = 'pagination-button';
        next.textContent = 'Next \\u2192';
        next.onclick = function () { currentPage += 1; render(); };
        container.appendChild(next);
      }
    }

    if (search) {
      search.oninput = function () {
        var term = search.value.toLowerCase();
        filteredRows = allRows.filter(function (row) {
          return row.textContent.toLowerCase().indexOf(term) !== -1;
        });
        currentPage = 0;
        render();
      };
    }
    if (select) {
      select.onchange = function () {
        rowsPerPage = parseInt(select.value, 10) || 100;
        currentPage = 0;
        render();
      };
    }
    render();
  }

  var sections = document.querySelectorAll('.table-section');
  for (var i = 0; i < sections.length; i++) initSection(sections[i]);
})();
"""

SHEET_TAB_SCRIPT = """
(function () {
  var tabs = document.querySelectorAll('.sheet-tab');
  var contents = document.querySelectorAll('.sheet-content');
  function showSheet(index) {
    for (var i = 0; i < contents.length; i++) {
      contents[i].classList.toggle('active', i === index);
    }
    for (var j = 0; j < tabs.length; j++) {
      tabs[j].classList.toggle('active', j === index);
    }
  }
  for (var i = 0; i < tabs.length; i++) {
    tabs[i].onclick = function () {
      var index = parseInt(this.getAttribute('data-sheet-index'), 10);
      if (!isNaN(index)) showSheet(index);
    };
  }
})();
"""


def render_page(title: str, heading: str, document_name: str, body: str,
                style: str = "", script: str = "") -> str:
    """Wrap a rendered body in the shared page shell."""
    parts = [
        "<!DOCTYPE html><html><head><meta charset='UTF-8'>",
        "<meta name='viewport' content='width=device-width, initial-scale=1'>",
        f"<title>{escape_html(title)}</title>",
        f"<style>{BASE_STYLE}{style}</style>",
        "</head><body>",
        "<div class='document-container'>",
        f"<h1 class='document-title'>{escape_html(heading)}</h1>",
        "<div class='document-name-header'>",
        f"<div class='document-name'>{escape_html(document_name)}</div>",
        "</div>",
        body,
        "</div>",
    ]
    if script:
        parts.append(f"<script>{script}</script>")
    parts.append("</body></html>")
    return "".join(parts)


def empty_state(icon: str, heading: str, message: str) -> str:
    return (
        "<div class='empty-state'>"
        f"<div style='font-size: 3em; margin-bottom: 20px; opacity: 0.3;'>{icon}</div>"
        f"<h3>{escape_html(heading)}</h3>"
        f"<p>{escape_html(message)}</p>"
        "</div>"
    )
