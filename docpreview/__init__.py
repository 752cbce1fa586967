"""
docpreview - Inline Document Previews

Renders uploaded CSV, Excel and Word documents into self-contained,
paginated HTML that a browser can display inline, without any external
renderer service. When a document cannot be fully understood it
degrades to Markdown, and finally to the original bytes.
"""

__version__ = "1.0.0"

from .core import DocumentRenderer, render
from .result import FailureKind, Failure, RenderError, Success

__all__ = ["DocumentRenderer", "render", "FailureKind", "Failure", "RenderError", "Success"]
