"""Data models for docpress.

Everything flowing between the extractor, the layout compiler and the
preview layer is a pydantic model. The conversion is linear:

- SourceDocument → ExtractedContent (extractor)
- ExtractedContent → LayoutDocument → PDF bytes (compiler)
- ConversionResult wraps both outcomes for callers
"""

from .base import (
    FailureKind,
    FrozenModel,
    LineKind,
    PreviewKind,
    PreviewState,
)
from .document import (
    DOCX_MEDIA_TYPE,
    ConversionResult,
    ExtractedContent,
    SourceDocument,
    is_docx_file,
)
from .layout import (
    LayoutConfig,
    LayoutDocument,
    LayoutLine,
    LayoutPage,
)

__all__ = [
    # Base types
    "FailureKind",
    "FrozenModel",
    "LineKind",
    "PreviewKind",
    "PreviewState",
    # Document
    "DOCX_MEDIA_TYPE",
    "ConversionResult",
    "ExtractedContent",
    "SourceDocument",
    "is_docx_file",
    # Layout
    "LayoutConfig",
    "LayoutDocument",
    "LayoutLine",
    "LayoutPage",
]
