"""Conversion Orchestrator - DOCX bytes to extracted text plus a PDF preview.

Extraction failures abort the conversion. Layout failures are recorded on the
result instead, so callers can still show the extracted text.
"""

import logging
from typing import Optional

from docpress.errors import LayoutRenderError
from docpress.models import ConversionResult, ExtractedContent, LayoutConfig, SourceDocument
from docpress.pipeline.stage_extract import DocxTextExtractor
from docpress.pipeline.stage_layout import LayoutPlanner
from docpress.pipeline.stage_render import PDFWriter

logger = logging.getLogger(__name__)


class DocumentConverter:
    """Runs extraction then layout for one source document at a time."""

    def __init__(
        self,
        extractor: Optional[DocxTextExtractor] = None,
        config: Optional[LayoutConfig] = None,
        writer: Optional[PDFWriter] = None,
    ):
        self.extractor = extractor or DocxTextExtractor()
        self.config = config or LayoutConfig()
        self.writer = writer or PDFWriter()

    def extract(self, source: SourceDocument) -> ExtractedContent:
        """Run the extraction stage.

        Raises:
            ContainerFormatError: Input is not a readable DOCX container
            MarkupParseError: Main content part is not well-formed XML
        """
        logger.info("Converting %s (%d bytes)", source.file_name, source.size_bytes)
        return self.extractor.extract(source.content)

    def compile(
        self,
        source: SourceDocument,
        content: ExtractedContent,
        title: Optional[str] = None,
    ) -> ConversionResult:
        """Run the layout and render stages on extracted content.

        Layout failures are recorded on the result instead of raised.
        """
        title = source.title if title is None else title
        compiled_bytes = None
        page_count = 0
        layout_error = None

        try:
            planner = LayoutPlanner(self.config)
            layout = planner.plan(title, content, source.file_name)
            compiled_bytes = self.writer.write(layout, title=title, font=planner.font)
            page_count = layout.page_count
        except LayoutRenderError as exc:
            logger.warning("Layout failed for %s: %s", source.file_name, exc)
            layout_error = str(exc)
        else:
            logger.info(
                "Converted %s: %d paragraphs, %d pages",
                source.file_name,
                content.paragraph_count,
                page_count,
            )

        return ConversionResult(
            source_file_name=source.file_name,
            source_hash=source.source_hash,
            content=content,
            compiled_bytes=compiled_bytes,
            page_count=page_count,
            layout_error=layout_error,
        )

    def convert(
        self,
        source: SourceDocument,
        title: Optional[str] = None,
    ) -> ConversionResult:
        """Convert a DOCX document.

        Args:
            source: Uploaded file bytes and name
            title: Heading override (default: file name without ``.docx``)

        Returns:
            ConversionResult; ``compiled_bytes`` is None if layout failed

        Raises:
            ContainerFormatError: Input is not a readable DOCX container
            MarkupParseError: Main content part is not well-formed XML
        """
        content = self.extract(source)
        return self.compile(source, content, title=title)
