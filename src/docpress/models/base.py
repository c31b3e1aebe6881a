"""Base models and common types for docpress."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class LineKind(str, Enum):
    """Role of a rendered text line on a page."""

    TITLE = "title"
    BODY = "body"
    FOOTER = "footer"


class PreviewKind(str, Enum):
    """How a stored file can be previewed."""

    IMAGE = "image"
    TEXT = "text"
    PDF = "pdf"
    DOCX = "docx"
    UNSUPPORTED = "unsupported"


class PreviewState(str, Enum):
    """Lifecycle of a document preview."""

    IDLE = "idle"
    EXTRACTING = "extracting"
    COMPILING = "compiling"
    READY = "ready"
    FAILED = "failed"


class FailureKind(str, Enum):
    """Which half of a conversion failed."""

    UNREADABLE = "unreadable"  # container or markup could not be read
    LAYOUT = "layout"  # text extracted, pagination failed


class FrozenModel(BaseModel):
    """Base class for immutable value models."""

    model_config = ConfigDict(frozen=True)
