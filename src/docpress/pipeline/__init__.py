"""Conversion pipeline stages for docpress.

Stages run strictly in order, each a pure function of its input:
1. stage_extract - DOCX container to ordered plain-text paragraphs
2. stage_layout - Word-wrap and paginate paragraphs onto fixed pages
3. stage_render - Serialize the layout to PDF bytes (PyMuPDF)

converter.DocumentConverter sequences them and keeps extraction and
layout failures separate.
"""

from .converter import DocumentConverter
from .stage_extract import DocxTextExtractor, extract_text
from .stage_layout import LayoutPlanner, format_footer, wrap_text
from .stage_render import PDFWriter, compile_layout

__all__ = [
    # Extract
    "DocxTextExtractor",
    "extract_text",
    # Layout
    "LayoutPlanner",
    "format_footer",
    "wrap_text",
    # Render
    "PDFWriter",
    "compile_layout",
    # Orchestration
    "DocumentConverter",
]
