"""Page layout models produced by the layout compiler."""

from typing import Optional

from pydantic import BaseModel, Field

from .base import FrozenModel, LineKind


class LayoutConfig(FrozenModel):
    """
    Fixed page geometry and typography.

    All values are in PDF points (1/72 inch). These are compiled-in defaults;
    callers are not expected to tune them.
    """

    font_name: str = Field(default="tiro", description="PyMuPDF base-14 font (Times-Roman)")
    font_size: float = Field(default=12, gt=0)
    title_size: float = Field(default=16, gt=0)
    line_height: float = Field(default=18, gt=0)
    margin: float = Field(default=50, ge=0)

    # US Letter
    page_width: float = Field(default=612, gt=0)
    page_height: float = Field(default=792, gt=0)

    footer_offset: float = Field(default=30, ge=0, description="Footer baseline above page bottom")
    footer_size: float = Field(default=8, gt=0)
    footer_gray: float = Field(default=0.5, ge=0.0, le=1.0)

    title_line_factor: float = 2.0
    title_advance_factor: float = 1.5
    paragraph_spacing_factor: float = 0.5

    @property
    def content_width(self) -> float:
        """Usable line width between the side margins."""
        return self.page_width - 2 * self.margin

    @property
    def top(self) -> float:
        """Baseline of the first line on a fresh page."""
        return self.page_height - self.margin


class LayoutLine(FrozenModel):
    """A single positioned line of text (bottom-left origin)."""

    text: str
    x: float
    y: float
    font_size: float = Field(..., gt=0)
    kind: LineKind = Field(default=LineKind.BODY)


class LayoutPage(BaseModel):
    """One page of laid-out lines plus its footer."""

    number: int = Field(..., ge=1, description="1-indexed page number")
    lines: list[LayoutLine] = Field(default_factory=list)
    footer: Optional[LayoutLine] = None

    @property
    def is_empty(self) -> bool:
        """Check if the page holds no content lines."""
        return not self.lines


class LayoutDocument(BaseModel):
    """
    Paginated layout of a converted document.

    Built and consumed within a single conversion; only its serialized form
    leaves the compiler.
    """

    pages: list[LayoutPage] = Field(default_factory=list)
    config: LayoutConfig = Field(default_factory=LayoutConfig)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def footers(self) -> list[str]:
        """Footer strings in page order."""
        return [page.footer.text for page in self.pages if page.footer is not None]

    def iter_lines(self):
        """Yield every content line across all pages, in order."""
        for page in self.pages:
            yield from page.lines
