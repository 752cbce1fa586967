"""
Result types and failure kinds for a render call.

A render either produces a Success (bytes plus content type) or a typed
Failure. Retry is only used inside the fallback chain to hand control to
the next strategy.
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .formatting import extract_document_name


class FailureKind(Enum):
    """Reasons a render can fail."""
    UNSUPPORTED_EXTENSION = "unsupported_extension"
    UNSUPPORTED_TARGET = "unsupported_target"
    EMPTY_INPUT = "empty_input"
    MALFORMED_DOCUMENT = "malformed_document"


class RenderError(Exception):
    """Base class for render failures. Carries a FailureKind."""
    kind = FailureKind.MALFORMED_DOCUMENT

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnsupportedExtension(RenderError):
    """Raised when the filename has no extension or one we cannot render."""
    kind = FailureKind.UNSUPPORTED_EXTENSION


class UnsupportedTarget(RenderError):
    """Raised when the requested target representation is not supported."""
    kind = FailureKind.UNSUPPORTED_TARGET


class EmptyInput(RenderError):
    """Raised when the content buffer is missing or empty."""
    kind = FailureKind.EMPTY_INPUT


class MalformedDocument(RenderError):
    """Raised when a converter cannot open or parse a document."""
    kind = FailureKind.MALFORMED_DOCUMENT


@dataclass(frozen=True)
class RawDocument:
    """An uploaded document: raw bytes plus the name it was uploaded under."""
    content: bytes
    filename: str

    @property
    def extension(self) -> str:
        _, ext = os.path.splitext(self.filename or "")
        return ext.lower()

    @property
    def document_name(self) -> str:
        return extract_document_name(self.filename)


@dataclass(frozen=True)
class Success:
    """A rendered buffer ready to be served as-is."""
    content: bytes
    content_type: str
    representation: str  # "html", "markdown" or "raw"

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Retry:
    """A strategy could not render the document; try the next one."""
    kind: FailureKind
    reason: str

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True)
class Failure:
    """A render that could not produce any output."""
    kind: FailureKind
    message: str

    @property
    def ok(self) -> bool:
        return False

    @classmethod
    def from_error(cls, error: RenderError) -> "Failure":
        return cls(kind=error.kind, message=error.message)


RenderResult = Union[Success, Failure]


ERRORS_BY_KIND = {
    FailureKind.UNSUPPORTED_EXTENSION: UnsupportedExtension,
    FailureKind.UNSUPPORTED_TARGET: UnsupportedTarget,
    FailureKind.EMPTY_INPUT: EmptyInput,
    FailureKind.MALFORMED_DOCUMENT: MalformedDocument,
}


def error_for(failure: Failure) -> RenderError:
    """The typed exception matching a Failure."""
    return ERRORS_BY_KIND[failure.kind](failure.message)
