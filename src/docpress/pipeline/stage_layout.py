"""Layout Stage - Word-wrap and paginate extracted paragraphs.

Produces a LayoutDocument: positioned lines on fixed-size pages, with a
footer on every page. Widths are measured with the same PyMuPDF font and
size used to draw each line, so wrap decisions match the rendered output.
"""

import logging
from typing import Optional

import fitz  # PyMuPDF

from docpress.errors import LayoutRenderError
from docpress.models import (
    ExtractedContent,
    LayoutConfig,
    LayoutDocument,
    LayoutLine,
    LayoutPage,
    LineKind,
)

logger = logging.getLogger(__name__)

FOOTER_TEMPLATE = "Converted from {name} - Page {page} of {total}"


def load_font(font_name: str) -> fitz.Font:
    """Create the PyMuPDF font used for measuring and drawing."""
    try:
        return fitz.Font(font_name)
    except Exception as exc:
        raise LayoutRenderError(f"could not load font {font_name!r}: {exc}") from exc


def wrap_text(
    text: str,
    width: float,
    font_size: float,
    font: Optional[fitz.Font] = None,
) -> list[str]:
    """Greedily break text into lines no wider than ``width``.

    A single word wider than ``width`` is kept whole on its own line.

    Args:
        text: Text to wrap; split on any whitespace
        width: Maximum rendered line width in points
        font_size: Size the lines will be drawn at
        font: Font to measure with (default Times-Roman)

    Returns:
        Lines in order; empty list for blank text
    """
    if font is None:
        font = load_font(LayoutConfig().font_name)

    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if font.text_length(candidate, fontsize=font_size) <= width:
            current = candidate
        elif current:
            lines.append(current)
            current = word
        else:
            lines.append(word)

    if current:
        lines.append(current)
    return lines


def format_footer(source_file_name: str, page: int, total: int) -> str:
    """Footer text for page ``page`` (1-indexed) of ``total``."""
    return FOOTER_TEMPLATE.format(name=source_file_name, page=page, total=total)


class LayoutPlanner:
    """Lays out a title and paragraphs onto pages.

    The vertical cursor counts down from the top margin in PDF points with a
    bottom-left origin. A page break happens before any line that would fall
    below the bottom margin; a page with no lines is never left behind.
    """

    def __init__(self, config: Optional[LayoutConfig] = None):
        """Initialize the planner.

        Args:
            config: Page geometry and typography (default LayoutConfig())
        """
        self.config = config or LayoutConfig()
        self.font = load_font(self.config.font_name)

    def wrap(self, text: str, font_size: float) -> list[str]:
        """Wrap text against the content width at the given size."""
        return wrap_text(text, self.config.content_width, font_size, self.font)

    def plan(
        self,
        title: str,
        content: ExtractedContent,
        source_file_name: str,
    ) -> LayoutDocument:
        """Lay out the title, paragraphs and footers.

        Args:
            title: Heading drawn at the top of the first page
            content: Extracted paragraphs, in order
            source_file_name: Name shown in every footer

        Returns:
            LayoutDocument with at least one page
        """
        cfg = self.config
        pages = [LayoutPage(number=1)]
        y = cfg.top

        def ensure_room(needed: float) -> None:
            nonlocal y
            if y - needed < cfg.margin and not pages[-1].is_empty:
                pages.append(LayoutPage(number=len(pages) + 1))
                y = cfg.top

        def draw(text: str, size: float, kind: LineKind) -> None:
            pages[-1].lines.append(
                LayoutLine(text=text, x=cfg.margin, y=y, font_size=size, kind=kind)
            )

        for line in self.wrap(title, cfg.title_size):
            ensure_room(cfg.line_height * cfg.title_line_factor)
            draw(line, cfg.title_size, LineKind.TITLE)
            y -= cfg.line_height * cfg.title_advance_factor
        y -= cfg.line_height

        for paragraph in content.paragraphs:
            if not paragraph.strip():
                continue
            lines = self.wrap(paragraph, cfg.font_size)
            ensure_room(len(lines) * cfg.line_height + cfg.line_height)
            for line in lines:
                # Only breaks when the paragraph is taller than the room left
                ensure_room(cfg.line_height)
                draw(line, cfg.font_size, LineKind.BODY)
                y -= cfg.line_height
            y -= cfg.line_height * cfg.paragraph_spacing_factor

        total = len(pages)
        for page in pages:
            page.footer = LayoutLine(
                text=format_footer(source_file_name, page.number, total),
                x=cfg.margin,
                y=cfg.footer_offset,
                font_size=cfg.footer_size,
                kind=LineKind.FOOTER,
            )

        logger.debug(
            "Planned %d pages for %d paragraphs of %s",
            total,
            content.paragraph_count,
            source_file_name,
        )
        return LayoutDocument(pages=pages, config=cfg)
