"""
Rendering strategies for the fallback chain.

Each strategy either renders the document (Success) or steps aside
(Retry). The chain runs them in order: HTML preview, Markdown
transliteration, then the original bytes, which always succeeds.
"""

import logging
import os

from .converters.csv_converter import CsvConverter
from .converters.markdown_converter import MarkdownConverter
from .converters.spreadsheet_converter import SpreadsheetConverter
from .converters.table import MAX_COLUMNS, MAX_ROWS
from .converters.word_converter import WordConverter
from .result import Failure, FailureKind, RawDocument, RenderError, Retry, Success

logger = logging.getLogger(__name__)

HTML_CONTENT_TYPE = "text/html; charset=UTF-8"
MARKDOWN_CONTENT_TYPE = "text/markdown; charset=UTF-8"
DEFAULT_CONTENT_TYPE = "application/octet-stream"

CONTENT_TYPES = {
    ".pdf": "application/pdf",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".xls": "application/vnd.ms-excel",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".ppt": "application/vnd.ms-powerpoint",
    ".pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    ".txt": "text/plain",
    ".rtf": "application/rtf",
    ".msg": "application/vnd.ms-outlook",
    ".eml": "message/rfc822",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".bmp": "image/bmp",
    ".svg": "image/svg+xml",
    ".mp4": "video/mp4",
    ".avi": "video/avi",
    ".mov": "video/quicktime",
    ".wmv": "video/x-ms-wmv",
    ".csv": "text/csv",
    ".json": "application/json",
    ".xml": "application/xml",
    ".zip": "application/zip",
}


def content_type_for(filename: str) -> str:
    """Best-guess content type from the file extension alone."""
    _, ext = os.path.splitext((filename or "").lower())
    return CONTENT_TYPES.get(ext, DEFAULT_CONTENT_TYPE)


class RenderStrategy:
    """One step of the fallback chain."""

    name = "strategy"

    def attempt(self, document: RawDocument):
        """Return Success, or Retry to hand over to the next strategy."""
        raise NotImplementedError


class HtmlStrategy(RenderStrategy):
    """Primary: a paginated HTML preview from the matching converter."""

    name = "html"

    def __init__(self, max_rows: int = MAX_ROWS, max_columns: int = MAX_COLUMNS):
        self.max_rows = max_rows
        self.max_columns = max_columns

    def attempt(self, document: RawDocument):
        filename = document.filename
        if CsvConverter.can_handle(filename):
            html = CsvConverter.convert(
                document.content, filename, max_rows=self.max_rows, max_columns=self.max_columns
            )
        elif SpreadsheetConverter.can_handle(filename):
            html = SpreadsheetConverter.convert(
                document.content, filename, max_rows=self.max_rows, max_columns=self.max_columns
            )
        elif WordConverter.can_handle(filename):
            html = WordConverter.convert(document.content, filename)
        else:
            return Retry(FailureKind.UNSUPPORTED_EXTENSION, f"No HTML converter for {document.extension}")
        return Success(html.encode("utf-8"), HTML_CONTENT_TYPE, self.name)


class MarkdownStrategy(RenderStrategy):
    """Secondary: a plain Markdown transliteration of the same document."""

    name = "markdown"

    def attempt(self, document: RawDocument):
        if not MarkdownConverter.can_handle(document.filename):
            return Retry(FailureKind.UNSUPPORTED_EXTENSION, f"No Markdown converter for {document.extension}")
        text = MarkdownConverter.convert(document.content, document.filename)
        return Success(text.encode("utf-8"), MARKDOWN_CONTENT_TYPE, self.name)


class RawPassthroughStrategy(RenderStrategy):
    """Last resort: the original bytes. Has no parsing step, so it cannot fail."""

    name = "raw"

    def attempt(self, document: RawDocument):
        return Success(document.content, content_type_for(document.filename), self.name)


def run_chain(document: RawDocument, strategies) -> Success | Failure:
    """
    Run strategies in order until one succeeds.

    Errors raised inside a strategy are turned into Retry so that a
    broken document degrades to the next representation instead of
    surfacing to the caller.
    """
    last = Retry(FailureKind.MALFORMED_DOCUMENT, "No rendering strategy configured")

    for strategy in strategies:
        try:
            outcome = strategy.attempt(document)
        except RenderError as e:
            outcome = Retry(e.kind, e.message)
        except Exception as e:
            logger.exception("Unexpected error in %s strategy for %s", strategy.name, document.filename)
            outcome = Retry(FailureKind.MALFORMED_DOCUMENT, f"{type(e).__name__}: {e}")

        if isinstance(outcome, Success):
            logger.info("Rendered %s as %s", document.filename, strategy.name)
            return outcome

        logger.warning("%s strategy failed for %s: %s", strategy.name, document.filename, outcome.reason)
        last = outcome

    return Failure(kind=last.kind, message=last.reason)
