"""
Document Renderer Core Engine

The main entry point: validates a render request, picks the converter
family from the file extension, and runs the fallback chain
(HTML preview -> Markdown -> original bytes).

Rendering is synchronous and stateless. A DocumentRenderer holds only
its immutable limits, so one instance can serve concurrent renders.
"""

import logging
import os

from .converters.csv_converter import CsvConverter
from .converters.spreadsheet_converter import SpreadsheetConverter
from .converters.table import MAX_COLUMNS, MAX_ROWS
from .converters.word_converter import WordConverter
from .fallback import HtmlStrategy, MarkdownStrategy, RawPassthroughStrategy, run_chain
from .result import (
    EmptyInput,
    Failure,
    RawDocument,
    RenderError,
    RenderResult,
    UnsupportedExtension,
    UnsupportedTarget,
    error_for,
)

logger = logging.getLogger(__name__)

SUPPORTED_TARGETS = frozenset({"html"})

FAMILIES = {
    "delimited": frozenset(CsvConverter.SUPPORTED_EXTENSIONS),
    "spreadsheet": frozenset(SpreadsheetConverter.SUPPORTED_EXTENSIONS),
    "word": frozenset(WordConverter.SUPPORTED_EXTENSIONS),
}

SUPPORTED_EXTENSIONS = frozenset().union(*FAMILIES.values())


def extension_family(filename: str):
    """Return the family name for a filename's extension, or None."""
    _, ext = os.path.splitext((filename or "").lower())
    for family, extensions in FAMILIES.items():
        if ext in extensions:
            return family
    return None


class DocumentRenderer:
    """
    Renders uploaded documents into self-contained previews.

    Accepts raw bytes plus the filename they were uploaded under and
    returns the best representation it can produce.
    """

    DEFAULT_MAX_ROWS = MAX_ROWS
    DEFAULT_MAX_COLUMNS = MAX_COLUMNS

    def __init__(self, max_rows: int = DEFAULT_MAX_ROWS, max_columns: int = DEFAULT_MAX_COLUMNS):
        """
        Initialize the renderer.

        Args:
            max_rows: Rows rendered per table before the truncation banner.
            max_columns: Columns considered per table.
        """
        if max_rows < 1:
            raise ValueError(f"max_rows must be positive, got {max_rows}")
        if max_columns < 1:
            raise ValueError(f"max_columns must be positive, got {max_columns}")
        self.max_rows = max_rows
        self.max_columns = max_columns
        self.strategies = (
            HtmlStrategy(max_rows=max_rows, max_columns=max_columns),
            MarkdownStrategy(),
            RawPassthroughStrategy(),
        )

    def render(self, content: bytes, filename: str, target: str = "html") -> RenderResult:
        """
        Render a document.

        Args:
            content: The raw uploaded bytes.
            filename: Upload filename; its extension selects the converter.
            target: Requested representation. Only "html" is supported.

        Returns:
            Success with the rendered buffer, or Failure when the request
            itself is invalid.
        """
        try:
            document = self.validate(content, filename, target)
        except RenderError as e:
            logger.warning("Rejected render request for %r: %s", filename, e.message)
            return Failure.from_error(e)

        logger.info("Starting conversion of %s to %s", filename, target)
        return run_chain(document, self.strategies)

    def render_or_raise(self, content: bytes, filename: str, target: str = "html"):
        """Like render(), but raise the typed RenderError instead of returning Failure."""
        document = self.validate(content, filename, target)
        result = run_chain(document, self.strategies)
        if isinstance(result, Failure):
            raise error_for(result)
        return result

    @staticmethod
    def validate(content: bytes, filename: str, target: str) -> RawDocument:
        """
        Check a render request before any parsing happens.

        Raises:
            EmptyInput: If content is missing or empty.
            UnsupportedExtension: If the filename is missing or its extension
                is not one we render.
            UnsupportedTarget: If the target representation is not supported.
        """
        if not content:
            raise EmptyInput("File content cannot be null or empty")
        if filename is None or not filename.strip():
            raise UnsupportedExtension("File name cannot be null or empty")
        if target is None or target.lower() not in SUPPORTED_TARGETS:
            raise UnsupportedTarget(f"Unsupported target format: {target}")

        document = RawDocument(bytes(content), filename.strip())
        if document.extension not in SUPPORTED_EXTENSIONS:
            raise UnsupportedExtension(f"Unsupported file extension: {document.extension or '(none)'}")
        return document

    @staticmethod
    def supported_formats() -> dict:
        """Return the supported extensions per document family."""
        return {
            "Delimited Text": sorted(FAMILIES["delimited"]),
            "Spreadsheets": sorted(FAMILIES["spreadsheet"]),
            "Word Processing": sorted(FAMILIES["word"]),
        }


def render(content: bytes, filename: str, target: str = "html") -> RenderResult:
    """Render with default limits."""
    return DocumentRenderer().render(content, filename, target)
