"""Exception hierarchy for docpress."""

from docpress.models.base import FailureKind


class DocpressError(Exception):
    """Base exception for docpress."""


class ConversionError(DocpressError):
    """A document could not be converted."""

    kind: FailureKind = FailureKind.UNREADABLE


class ContainerFormatError(ConversionError):
    """Input is not a zip container, or lacks the main content part."""

    kind = FailureKind.UNREADABLE


class MarkupParseError(ConversionError):
    """The main content part is not well-formed XML."""

    kind = FailureKind.UNREADABLE


class LayoutRenderError(ConversionError):
    """PDF document, font or page primitives failed during compilation."""

    kind = FailureKind.LAYOUT
