"""Preview layer used by file-viewing callers.

Classifies stored files for preview, tracks the state of a DOCX preview and
memoizes conversions per source file. None of this is core conversion
state; it belongs to whoever is showing the preview.
"""

import logging
import threading
from collections import OrderedDict
from typing import Optional

from docpress.config import settings
from docpress.errors import ConversionError
from docpress.models import (
    ConversionResult,
    FailureKind,
    PreviewKind,
    PreviewState,
    SourceDocument,
    is_docx_file,
)
from docpress.pipeline.converter import DocumentConverter

logger = logging.getLogger(__name__)

TEXT_MEDIA_TYPES = frozenset({"application/json"})
TEXT_SUFFIXES = (
    ".md",
    ".txt",
    ".js",
    ".ts",
    ".jsx",
    ".tsx",
    ".css",
    ".html",
    ".xml",
    ".csv",
)

UNREADABLE_MESSAGE = (
    "This document could not be read. Download the original file to view it."
)
LAYOUT_MESSAGE = (
    "Formatting and pagination could not be produced. Showing the extracted text."
)


def classify_preview(media_type: str, file_name: str) -> PreviewKind:
    """Decide how a stored file should be previewed."""
    if media_type.startswith("image/"):
        return PreviewKind.IMAGE
    if is_docx_file(media_type, file_name):
        return PreviewKind.DOCX
    if media_type == "application/pdf":
        return PreviewKind.PDF
    if (
        media_type.startswith("text/")
        or media_type in TEXT_MEDIA_TYPES
        or file_name.endswith(TEXT_SUFFIXES)
    ):
        return PreviewKind.TEXT
    return PreviewKind.UNSUPPORTED


# Allowed state transitions for a preview session
_TRANSITIONS = {
    PreviewState.IDLE: {PreviewState.EXTRACTING},
    PreviewState.EXTRACTING: {PreviewState.COMPILING, PreviewState.FAILED},
    PreviewState.COMPILING: {PreviewState.READY, PreviewState.FAILED},
    PreviewState.READY: set(),
    PreviewState.FAILED: set(),
}


class PreviewSession:
    """State of one DOCX preview: idle, extracting, compiling, ready or failed.

    A failed session records which half failed. After a layout failure the
    extracted text is still available for a plain-text fallback view.
    """

    def __init__(self, file_name: str):
        self.file_name = file_name
        self.state = PreviewState.IDLE
        self.failure: Optional[FailureKind] = None
        self.error_message: Optional[str] = None
        self.result: Optional[ConversionResult] = None

    def _advance(self, state: PreviewState) -> None:
        if state not in _TRANSITIONS[self.state]:
            raise ValueError(
                f"Invalid preview transition: {self.state.value} -> {state.value}"
            )
        self.state = state

    def start(self) -> None:
        self._advance(PreviewState.EXTRACTING)

    def extracted(self) -> None:
        self._advance(PreviewState.COMPILING)

    def complete(self, result: ConversionResult) -> None:
        """Finish with a conversion result, failing if layout did not succeed."""
        self.result = result
        if result.has_layout:
            self._advance(PreviewState.READY)
        else:
            self.fail(FailureKind.LAYOUT, result.layout_error or "layout failed")

    def fail(self, kind: FailureKind, error: str) -> None:
        self._advance(PreviewState.FAILED)
        self.failure = kind
        self.error_message = error

    def reset(self) -> None:
        """Return to idle, dropping any result (preview closed)."""
        self.state = PreviewState.IDLE
        self.failure = None
        self.error_message = None
        self.result = None

    @property
    def is_ready(self) -> bool:
        return self.state == PreviewState.READY

    @property
    def extracted_text(self) -> Optional[str]:
        """Extracted text, if extraction got that far."""
        return self.result.extracted_text if self.result is not None else None

    @property
    def compiled_bytes(self) -> Optional[bytes]:
        return self.result.compiled_bytes if self.result is not None else None

    @property
    def message(self) -> Optional[str]:
        """User-facing notice for a failed preview."""
        if self.failure == FailureKind.UNREADABLE:
            return UNREADABLE_MESSAGE
        if self.failure == FailureKind.LAYOUT:
            return LAYOUT_MESSAGE
        return None


class ConversionCache:
    """Bounded LRU memo of conversion results keyed by source identity."""

    def __init__(self, max_entries: Optional[int] = None):
        self.max_entries = max_entries if max_entries is not None else settings.cache_size
        self._entries: OrderedDict[tuple[str, str], ConversionResult] = OrderedDict()
        self._lock = threading.Lock()

    @staticmethod
    def key_for(source: SourceDocument) -> tuple[str, str]:
        return source.source_hash, source.file_name

    def get(self, source: SourceDocument) -> Optional[ConversionResult]:
        key = self.key_for(source)
        with self._lock:
            result = self._entries.get(key)
            if result is not None:
                self._entries.move_to_end(key)
            return result

    def put(self, source: SourceDocument, result: ConversionResult) -> None:
        if self.max_entries <= 0:
            return
        key = self.key_for(source)
        with self._lock:
            self._entries[key] = result
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class PreviewService:
    """Opens DOCX previews, reusing earlier conversions of the same file."""

    def __init__(
        self,
        converter: Optional[DocumentConverter] = None,
        cache: Optional[ConversionCache] = None,
    ):
        self.converter = converter or DocumentConverter()
        self.cache = cache if cache is not None else ConversionCache()

    def open(
        self,
        source: SourceDocument,
        session: Optional[PreviewSession] = None,
    ) -> PreviewSession:
        """Convert a document, advancing the session as each stage runs.

        Conversion errors are captured on the session rather than raised.

        Args:
            source: Uploaded file
            session: Caller-owned session to drive (default: a new one)
        """
        session = session or PreviewSession(source.file_name)
        session.start()

        cached = self.cache.get(source)
        if cached is not None:
            logger.debug("Using cached conversion for %s", source.file_name)
            session.extracted()
            session.complete(cached)
            return session

        if not source.is_docx:
            session.fail(FailureKind.UNREADABLE, f"{source.file_name} is not a DOCX document")
            return session

        try:
            content = self.converter.extract(source)
        except ConversionError as exc:
            logger.warning("Could not read %s: %s", source.file_name, exc)
            session.fail(exc.kind, str(exc))
            return session

        session.extracted()
        result = self.converter.compile(source, content)
        self.cache.put(source, result)
        session.complete(result)
        return session
