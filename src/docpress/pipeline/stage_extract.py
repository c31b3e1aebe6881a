"""Text Extraction Stage - Pull plain-text paragraphs out of a DOCX container.

A DOCX file is a zip archive whose body lives in ``word/document.xml``.
Paragraphs are ``w:p`` elements; their visible text sits in ``w:t`` run
elements. Formatting, tables and images are discarded.
"""

import io
import logging
import zipfile
import zlib
from typing import Iterator, Optional
from xml.etree import ElementTree

from docpress.config import settings
from docpress.errors import ContainerFormatError, MarkupParseError
from docpress.models import ExtractedContent

logger = logging.getLogger(__name__)

# Transitional and strict WordprocessingML namespaces
WORDPROCESSING_NAMESPACES = (
    "http://schemas.openxmlformats.org/wordprocessingml/2006/main",
    "http://purl.oclc.org/ooxml/wordprocessingml/main",
)

PARAGRAPH_TAGS = frozenset(f"{{{ns}}}p" for ns in WORDPROCESSING_NAMESPACES)
TEXT_TAGS = frozenset(f"{{{ns}}}t" for ns in WORDPROCESSING_NAMESPACES)


def read_main_part(data: bytes, part_path: str) -> bytes:
    """Return the raw bytes of the main content part of a zip container.

    Raises:
        ContainerFormatError: If ``data`` is not a zip archive, the part is
            missing, or the entry cannot be decompressed.
    """
    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except (zipfile.BadZipFile, ValueError) as exc:
        raise ContainerFormatError(f"not a valid zip container: {exc}") from exc

    with archive:
        try:
            archive.getinfo(part_path)
        except KeyError as exc:
            raise ContainerFormatError(
                f"missing main content part: {part_path}"
            ) from exc

        try:
            return archive.read(part_path)
        except (
            zipfile.BadZipFile,
            zlib.error,
            NotImplementedError,
            RuntimeError,
            EOFError,
        ) as exc:
            raise ContainerFormatError(
                f"could not read {part_path} from container: {exc}"
            ) from exc


def parse_markup(markup: bytes) -> ElementTree.Element:
    """Parse the main content part into an element tree."""
    try:
        return ElementTree.fromstring(markup)
    except ElementTree.ParseError as exc:
        raise MarkupParseError(f"main content part is not well-formed XML: {exc}") from exc


def iter_paragraph_texts(root: ElementTree.Element) -> Iterator[str]:
    """Yield the concatenated run text of every paragraph, in document order.

    Paragraphs nested inside another paragraph (text boxes) are yielded on
    their own and also contribute to the enclosing paragraph's text.
    """
    for element in root.iter():
        if element.tag not in PARAGRAPH_TAGS:
            continue
        yield "".join(
            node.text or "" for node in element.iter() if node.tag in TEXT_TAGS
        )


class DocxTextExtractor:
    """Extracts ordered plain-text paragraphs from DOCX bytes.

    Stateless apart from the main part path, so one instance can be shared
    across threads.
    """

    def __init__(self, part_path: Optional[str] = None):
        """Initialize the extractor.

        Args:
            part_path: Archive path of the main content part
                (default from settings, ``word/document.xml``)
        """
        self.part_path = part_path or settings.main_part_path

    def extract(self, data: bytes) -> ExtractedContent:
        """Extract paragraphs from a DOCX container.

        Args:
            data: Raw bytes of the uploaded file

        Returns:
            ExtractedContent with trimmed, non-empty paragraphs

        Raises:
            ContainerFormatError: Not a zip, or no main content part
            MarkupParseError: Main content part is not well-formed XML
        """
        markup = read_main_part(data, self.part_path)
        root = parse_markup(markup)

        paragraphs = []
        skipped = 0
        for raw_text in iter_paragraph_texts(root):
            text = raw_text.strip()
            if text:
                paragraphs.append(text)
            else:
                skipped += 1

        logger.debug(
            "Extracted %d paragraphs (%d blank skipped) from %d bytes",
            len(paragraphs),
            skipped,
            len(data),
        )
        return ExtractedContent(paragraphs=paragraphs)


def extract_text(data: bytes) -> ExtractedContent:
    """Extract plain-text paragraphs from DOCX bytes."""
    return DocxTextExtractor().extract(data)
