"""Pytest configuration and fixtures."""

import io
import struct
import zipfile
from xml.sax.saxutils import escape

import pytest

from docpress.models import DOCX_MEDIA_TYPE, ExtractedContent, SourceDocument

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"

CONTENT_TYPES_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">
  <Default Extension="xml" ContentType="application/xml"/>
  <Override PartName="/word/document.xml"
    ContentType="application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"/>
</Types>"""


def paragraph_xml(runs) -> str:
    """Build a ``w:p`` element; ``runs`` is a string or a list of run strings."""
    if isinstance(runs, str):
        runs = [runs]
    body = "".join(
        f'<w:r><w:rPr><w:b/></w:rPr><w:t xml:space="preserve">{escape(text)}</w:t></w:r>'
        for text in runs
    )
    return f"<w:p><w:pPr><w:pStyle w:val=\"Normal\"/></w:pPr>{body}</w:p>"


def document_xml(paragraphs) -> str:
    body = "".join(paragraph_xml(p) for p in paragraphs)
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f'<w:document xmlns:w="{W_NS}"><w:body>{body}<w:sectPr/></w:body></w:document>'
    )


def build_container(parts: dict) -> bytes:
    """Zip the given ``{archive_path: text}`` parts into bytes."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for name, text in parts.items():
            archive.writestr(name, text)
    return buffer.getvalue()


def build_docx(paragraphs) -> bytes:
    """Build a minimal DOCX container holding the given paragraphs."""
    return build_container(
        {
            "[Content_Types].xml": CONTENT_TYPES_XML,
            "word/document.xml": document_xml(paragraphs),
        }
    )


@pytest.fixture
def container_factory():
    """Factory zipping arbitrary parts into container bytes."""
    return build_container


@pytest.fixture
def docx_factory():
    """Factory building DOCX bytes from a list of paragraphs."""
    return build_docx


def corrupt_entry(data: bytes, name: str, length: int = 18) -> bytes:
    """Flip bytes at the start of an entry's compressed data."""
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        info = archive.getinfo(name)
    name_len, extra_len = struct.unpack(
        "<HH", data[info.header_offset + 26 : info.header_offset + 30]
    )
    start = info.header_offset + 30 + name_len + extra_len
    damaged = bytearray(data)
    for offset in range(start, start + min(length, info.compress_size)):
        damaged[offset] ^= 0xFF
    return bytes(damaged)


@pytest.fixture
def corrupt_docx():
    """DOCX whose deflated main part has damaged bytes."""
    paragraphs = [f"Paragraph {i} about kinematics and dynamics." for i in range(50)]
    return corrupt_entry(build_docx(paragraphs), "word/document.xml")


@pytest.fixture
def physics_docx():
    """Two-paragraph physics notes document."""
    return build_docx(
        [
            ["Newton's ", "First Law."],
            "An object in motion stays in motion.",
        ]
    )


@pytest.fixture
def physics_source(physics_docx):
    """Uploaded physics notes file."""
    return SourceDocument(
        content=physics_docx,
        media_type=DOCX_MEDIA_TYPE,
        file_name="physics-notes.docx",
    )


@pytest.fixture
def physics_content():
    """Extracted content of the physics notes."""
    return ExtractedContent(
        paragraphs=["Newton's First Law.", "An object in motion stays in motion."]
    )


@pytest.fixture
def output_dir(tmp_path):
    """Create a temporary output directory."""
    out_dir = tmp_path / "output"
    out_dir.mkdir()
    return out_dir


TYPOGRAPHIC_PARAGRAPHS = [
    "Newton’s First Law — “inertia”",
    "Café notes: naïve Zürich façade, déjà vu",
]


@pytest.fixture
def typographic_docx():
    """DOCX using curly quotes, an em dash and accented Latin text."""
    return build_docx([["Newton’s First Law ", "— “inertia”"], TYPOGRAPHIC_PARAGRAPHS[1]])


@pytest.fixture
def typographic_content():
    """Extracted content with typographic punctuation and accents."""
    return ExtractedContent(paragraphs=list(TYPOGRAPHIC_PARAGRAPHS))
