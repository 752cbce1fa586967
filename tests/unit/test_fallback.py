"""
Unit tests for the fallback chain and its strategies.
"""

import logging

import pytest

from docpreview.fallback import (
    DEFAULT_CONTENT_TYPE,
    HTML_CONTENT_TYPE,
    MARKDOWN_CONTENT_TYPE,
    HtmlStrategy,
    MarkdownStrategy,
    RawPassthroughStrategy,
    RenderStrategy,
    content_type_for,
    run_chain,
)
from docpreview.result import (
    Failure,
    FailureKind,
    MalformedDocument,
    RawDocument,
    Retry,
    Success,
)


class StaticStrategy(RenderStrategy):
    """Strategy returning a fixed outcome, recording whether it ran."""

    def __init__(self, name, outcome):
        self.name = name
        self.outcome = outcome
        self.calls = 0

    def attempt(self, document):
        self.calls += 1
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


class TestContentTypes:
    """Tests for extension-based content types."""

    @pytest.mark.parametrize("filename,expected", [
        ("a.csv", "text/csv"),
        ("a.TXT", "text/plain"),
        ("a.xlsx", "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"),
        ("a.xls", "application/vnd.ms-excel"),
        ("a.docx", "application/vnd.openxmlformats-officedocument.wordprocessingml.document"),
        ("a.doc", "application/msword"),
        ("a.pdf", "application/pdf"),
        ("a.unknown", DEFAULT_CONTENT_TYPE),
        ("noext", DEFAULT_CONTENT_TYPE),
        (None, DEFAULT_CONTENT_TYPE),
    ])
    def test_content_type_for(self, filename, expected):
        """Test content types are looked up by extension."""
        assert content_type_for(filename) == expected


class TestRunChain:
    """Tests for run_chain."""

    @pytest.fixture
    def document(self):
        return RawDocument(b"data", "sample.csv")

    def test_first_success_wins(self, document):
        """Test later strategies are not run after a success."""
        first = StaticStrategy("first", Success(b"1", "text/plain", "first"))
        second = StaticStrategy("second", Success(b"2", "text/plain", "second"))

        result = run_chain(document, [first, second])

        assert result.content == b"1"
        assert second.calls == 0

    def test_retry_moves_on(self, document):
        """Test a Retry hands over to the next strategy."""
        first = StaticStrategy("first", Retry(FailureKind.MALFORMED_DOCUMENT, "bad"))
        second = StaticStrategy("second", Success(b"2", "text/plain", "second"))

        result = run_chain(document, [first, second])

        assert result.representation == "second"
        assert first.calls == 1

    def test_render_error_becomes_retry(self, document):
        """Test typed render errors do not escape the chain."""
        first = StaticStrategy("first", MalformedDocument("cannot parse"))
        second = StaticStrategy("second", Success(b"2", "text/plain", "second"))

        assert run_chain(document, [first, second]).representation == "second"

    def test_unexpected_error_becomes_retry(self, document, caplog):
        """Test any exception degrades to the next strategy and is logged."""
        first = StaticStrategy("first", KeyError("boom"))
        second = StaticStrategy("second", Success(b"2", "text/plain", "second"))

        with caplog.at_level(logging.ERROR, logger="docpreview.fallback"):
            result = run_chain(document, [first, second])

        assert result.representation == "second"
        assert "Unexpected error in first strategy" in caplog.text

    def test_all_retry_is_failure(self, document):
        """Test exhausting the chain yields the last failure kind."""
        strategies = [
            StaticStrategy("a", MalformedDocument("a failed")),
            StaticStrategy("b", Retry(FailureKind.UNSUPPORTED_EXTENSION, "b failed")),
        ]

        result = run_chain(document, strategies)

        assert isinstance(result, Failure)
        assert result.kind == FailureKind.UNSUPPORTED_EXTENSION
        assert result.message == "b failed"
        assert not result.ok

    def test_empty_chain(self, document):
        """Test no strategies is a failure."""
        result = run_chain(document, [])
        assert isinstance(result, Failure)
        assert result.kind == FailureKind.MALFORMED_DOCUMENT


class TestStrategies:
    """Tests for the built-in strategies."""

    def test_html_strategy(self):
        """Test CSV renders to HTML bytes."""
        result = HtmlStrategy().attempt(RawDocument(b"a,b\n1,2\n", "t.csv"))
        assert result.content_type == HTML_CONTENT_TYPE
        assert result.representation == "html"
        assert result.content.startswith(b"<!DOCTYPE html>")

    def test_html_strategy_limits(self):
        """Test the configured row cap is passed to the converter."""
        content = "\n".join(["h"] + [f"r{i}" for i in range(10)]).encode()
        result = HtmlStrategy(max_rows=3).attempt(RawDocument(content, "t.csv"))
        assert b"Showing first 3 rows of 10 total rows" in result.content

    def test_html_strategy_unknown_extension(self):
        """Test unknown extensions are a Retry."""
        result = HtmlStrategy().attempt(RawDocument(b"x", "t.pdf"))
        assert isinstance(result, Retry)
        assert result.kind == FailureKind.UNSUPPORTED_EXTENSION

    def test_html_strategy_malformed(self):
        """Test corrupt documents raise for the chain to catch."""
        with pytest.raises(MalformedDocument):
            HtmlStrategy().attempt(RawDocument(b"garbage", "t.xlsx"))

    def test_markdown_strategy(self):
        """Test Markdown output and content type."""
        result = MarkdownStrategy().attempt(RawDocument(b"a,b", "t.csv"))
        assert result.content_type == MARKDOWN_CONTENT_TYPE
        assert result.representation == "markdown"
        assert b"```csv" in result.content

    def test_raw_strategy(self):
        """Test raw passthrough returns the original bytes."""
        content = b"\x00\x01 original"
        result = RawPassthroughStrategy().attempt(RawDocument(content, "t.xlsx"))
        assert result.content == content
        assert result.representation == "raw"
        assert result.content_type == content_type_for("t.xlsx")
