"""PDF Rendering Stage - Serialize a LayoutDocument to PDF bytes.

Uses PyMuPDF (fitz) to create pages. Text is drawn through a TextWriter with
the same Font object the planner measured with, embedded as a Unicode font.
Layout coordinates use a bottom-left origin; PyMuPDF pages use top-left,
so every baseline is flipped against the page height.
"""

import logging
from typing import Optional

import fitz  # PyMuPDF

from docpress.errors import LayoutRenderError
from docpress.models import ExtractedContent, LayoutConfig, LayoutDocument, LayoutLine
from docpress.pipeline.stage_layout import LayoutPlanner, load_font

logger = logging.getLogger(__name__)

PRODUCER = "docpress"
BLACK = (0.0, 0.0, 0.0)


class PDFWriter:
    """Writes laid-out pages to a PDF byte stream.

    Either the whole document serializes or LayoutRenderError is raised;
    there is no partial output.
    """

    def __init__(self, garbage: int = 3, deflate: bool = True):
        """Initialize writer.

        Args:
            garbage: PyMuPDF garbage collection level used when saving
            deflate: Compress content streams
        """
        self.garbage = garbage
        self.deflate = deflate

    def write(
        self,
        layout: LayoutDocument,
        title: str = "",
        font: Optional[fitz.Font] = None,
    ) -> bytes:
        """Render all pages and footers to PDF bytes.

        Args:
            layout: Planned pages
            title: Stored in the PDF metadata
            font: Font the layout was measured with (default: loaded from
                the layout config)

        Returns:
            Serialized PDF
        """
        cfg = layout.config
        if font is None:
            font = load_font(cfg.font_name)
        footer_color = (cfg.footer_gray, cfg.footer_gray, cfg.footer_gray)

        try:
            pdf_doc = fitz.open()
            try:
                for page in layout.pages:
                    pdf_page = pdf_doc.new_page(width=cfg.page_width, height=cfg.page_height)
                    self._draw_lines(pdf_page, page.lines, font, cfg, BLACK)
                    if page.footer is not None:
                        self._draw_lines(pdf_page, [page.footer], font, cfg, footer_color)

                pdf_doc.set_metadata(
                    {
                        "title": title,
                        "creator": PRODUCER,
                        "producer": PRODUCER,
                    }
                )
                data = pdf_doc.tobytes(garbage=self.garbage, deflate=self.deflate)
            finally:
                pdf_doc.close()
        except Exception as exc:
            raise LayoutRenderError(f"could not render PDF: {exc}") from exc

        logger.debug("Rendered %d pages (%d bytes)", layout.page_count, len(data))
        return data

    @staticmethod
    def _draw_lines(
        pdf_page: fitz.Page,
        lines: list[LayoutLine],
        font: fitz.Font,
        cfg: LayoutConfig,
        color: tuple[float, float, float],
    ) -> None:
        """Draw lines at their baselines with the embedded measuring font."""
        if not lines:
            return
        writer = fitz.TextWriter(pdf_page.rect)
        for line in lines:
            point = fitz.Point(line.x, cfg.page_height - line.y)
            writer.append(point, line.text, font=font, fontsize=line.font_size)
        writer.write_text(pdf_page, color=color)


def compile_layout(
    title: str,
    content: ExtractedContent,
    source_file_name: str,
    config: Optional[LayoutConfig] = None,
) -> bytes:
    """Lay out extracted content and serialize it as a PDF.

    Args:
        title: Heading for the first page
        content: Extracted paragraphs
        source_file_name: Name shown in every page footer
        config: Page geometry and typography (default LayoutConfig())

    Returns:
        PDF bytes

    Raises:
        LayoutRenderError: Font, page or document primitives failed
    """
    planner = LayoutPlanner(config)
    layout = planner.plan(title, content, source_file_name)
    return PDFWriter().write(layout, title=title, font=planner.font)
