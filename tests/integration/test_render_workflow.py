"""
Integration tests for the complete render workflow.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from docpreview import DocumentRenderer, Success
from tests.fixtures import build_xlsx, parse_html


@pytest.mark.integration
class TestFullRenderWorkflow:
    """
    End-to-end tests for the render workflow:
    1. Validate the request
    2. Pick the converter from the extension
    3. Render through the fallback chain
    4. Inspect the self-contained output
    """

    @pytest.fixture
    def documents(self, sample_csv_bytes, multi_sheet_xlsx_bytes, sample_docx_bytes):
        return {
            "contacts_list.csv": sample_csv_bytes,
            "budget-2024.xlsx": multi_sheet_xlsx_bytes,
            "meeting_minutes.docx": sample_docx_bytes,
        }

    def test_every_family_renders_html(self, renderer, documents):
        """Test each family produces a complete HTML page."""
        for filename, content in documents.items():
            result = renderer.render(content, filename)

            assert isinstance(result, Success), filename
            assert result.representation == "html"
            soup = parse_html(result.content)
            assert soup.select_one("h1.document-title") is not None
            assert soup.select_one(".document-name-header") is not None

    def test_output_is_self_contained(self, renderer, documents):
        """Test no external stylesheet, script or image is referenced."""
        for filename, content in documents.items():
            soup = parse_html(renderer.render(content, filename).content)

            assert soup.select("link") == []
            assert soup.select("img") == []
            assert all(not script.get("src") for script in soup.select("script"))
            assert soup.select_one("style") is not None

    def test_csv_page(self, renderer, documents):
        """Test the CSV preview contents."""
        soup = parse_html(renderer.render(documents["contacts_list.csv"], "contacts_list.csv").content)

        headers = [th.get_text() for th in soup.select("thead th")]
        assert headers == ["#", "Name", "Email", "Joined", "Score", "Website"]

        rows = soup.select("tbody tr")
        assert len(rows) == 3
        carol = [td.get_text() for td in rows[2].select("td")]
        assert carol == ["3", "Carol, PhD", "carol@example.net", "12-31-2022", "-4", 'She said "hi"']
        assert rows[0].select_one("td.email").get_text() == "alice@example.com"
        assert rows[1].select_one("td.url").get_text() == "www.bob.io"

    def test_workbook_page(self, renderer, documents):
        """Test the workbook preview contents."""
        soup = parse_html(renderer.render(documents["budget-2024.xlsx"], "budget-2024.xlsx").content)

        assert soup.select_one(".document-name").get_text() == "Budget 2024"
        data_panel, notes_panel = soup.select(".sheet-content")
        labels = [tr.select_one("td.row-header").get_text() for tr in data_panel.select("tbody tr")]
        assert labels == ["1", "2", "4", "5"]
        assert "This sheet is empty" in notes_panel.get_text()

    def test_word_page(self, renderer, documents):
        """Test the Word preview contents."""
        soup = parse_html(renderer.render(documents["meeting_minutes.docx"], "meeting_minutes.docx").content)

        body = soup.select_one(".word-body")
        assert body.select_one("h2").get_text() == "Quarterly Review"
        assert body.select_one("u em strong").get_text() == "all"
        assert body.select_one("table.word-table") is not None

    def test_degradation_order(self, renderer):
        """Test each broken family lands on the raw representation."""
        for filename in ["broken.xlsx", "broken.xls", "broken.docx", "broken.doc"]:
            result = renderer.render(b"\x00\x01\x02 corrupt", filename)
            assert result.representation == "raw", filename
            assert result.content == b"\x00\x01\x02 corrupt"

    def test_concurrent_renders(self, renderer, documents):
        """Test one renderer serves concurrent requests with identical output."""
        jobs = [(name, content) for name, content in documents.items()] * 4

        with ThreadPoolExecutor(max_workers=6) as pool:
            results = list(pool.map(lambda job: renderer.render(job[1], job[0]), jobs))

        expected = {name: renderer.render(content, name).content for name, content in documents.items()}
        for (name, _), result in zip(jobs, results):
            assert result.content == expected[name]

    @pytest.mark.slow
    def test_large_workbook_truncated(self):
        """Test a large sheet renders the row cap plus the banner."""
        content = build_xlsx({"Log": [["event", i] for i in range(2500)]})
        result = DocumentRenderer().render(content, "events.xlsx")

        soup = parse_html(result.content)
        assert len(soup.select("tbody tr")) == 2000
        assert len(soup.select("tfoot tr.truncation-notice")) == 1
