"""Source and extracted-content models."""

import hashlib
from typing import Optional

from pydantic import Field, computed_field

from .base import FrozenModel

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
DOCX_SUFFIX = ".docx"


def is_docx_file(media_type: str, file_name: str) -> bool:
    """Check media type or file name for a DOCX container."""
    return media_type == DOCX_MEDIA_TYPE or file_name.lower().endswith(DOCX_SUFFIX)


class SourceDocument(FrozenModel):
    """
    Uploaded file handed to the converter.

    Owned by the caller for the duration of one conversion; the core never
    keeps a reference after the call returns.
    """

    content: bytes = Field(..., repr=False)
    media_type: str = Field(default="application/octet-stream")
    file_name: str = Field(..., description="Original file name, used in titles and footers")

    @property
    def source_hash(self) -> str:
        """SHA-256 hash of the file bytes."""
        return hashlib.sha256(self.content).hexdigest()

    @property
    def is_docx(self) -> bool:
        return is_docx_file(self.media_type, self.file_name)

    @property
    def title(self) -> str:
        """File name without its ``.docx`` suffix."""
        if self.file_name.lower().endswith(DOCX_SUFFIX):
            return self.file_name[: -len(DOCX_SUFFIX)]
        return self.file_name

    @property
    def size_bytes(self) -> int:
        return len(self.content)


class ExtractedContent(FrozenModel):
    """
    Plain-text paragraphs pulled from a document container.

    Paragraphs are trimmed, non-empty and in document order. ``text`` is
    always derived from them.
    """

    paragraphs: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def text(self) -> str:
        """Paragraphs joined with a blank line."""
        return "\n\n".join(self.paragraphs)

    @property
    def is_empty(self) -> bool:
        return not self.paragraphs

    @property
    def paragraph_count(self) -> int:
        return len(self.paragraphs)


class ConversionResult(FrozenModel):
    """
    Outcome of one conversion.

    Extraction always succeeded if a result exists. Layout may have failed,
    in which case ``compiled_bytes`` is None and ``layout_error`` explains why.
    """

    source_file_name: str
    source_hash: str
    content: ExtractedContent
    compiled_bytes: Optional[bytes] = Field(None, repr=False)
    page_count: int = Field(default=0, ge=0)
    layout_error: Optional[str] = None

    @property
    def extracted_text(self) -> str:
        return self.content.text

    @property
    def has_layout(self) -> bool:
        """Check if a compiled PDF is available."""
        return self.compiled_bytes is not None
