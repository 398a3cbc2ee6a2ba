"""file_parsing.py
Helpers for building and checking test documents.
"""

import textwrap
from pathlib import Path
from typing import List

from docx import Document as DocxDocument
from reportlab.pdfgen import canvas

from resume_rag.models import DocumentChunk
from resume_rag.file_parser.file_parser import FileParser
from resume_rag.test_helpers.sample_resumes import SAMPLE_RESUME_TEXT


# DummyTxtParser to test with
class DummyTxtParser(FileParser):
    """Plain text FileParser used to test the shared validation logic."""
    SUPPORTED_EXTENSIONS = [".txt"]

    def extract_text(self) -> str:
        return Path(self.file_path).read_text(encoding="utf-8")


def write_pdf(path: Path, lines: List[str]) -> Path:
    """Write a single-page PDF with one text line per entry of `lines` (may be empty)."""
    c = canvas.Canvas(str(path))
    y = 800
    for line in lines:
        c.drawString(40, y, line)
        y -= 14
    # Always emit the page, even when it has no text
    c.showPage()
    c.save()
    return path


def write_resume_pdf(path: Path, text: str = SAMPLE_RESUME_TEXT, width: int = 80) -> Path:
    """Write `text` to a PDF, wrapping long lines so they stay on the page."""
    lines = []
    for line in text.splitlines():
        lines.extend(textwrap.wrap(line, width) or [""])
    return write_pdf(path, lines)


def write_docx(path: Path, paragraphs: List[str]) -> Path:
    """Write a DOCX with one paragraph per entry of `paragraphs`."""
    doc = DocxDocument()
    for paragraph in paragraphs:
        doc.add_paragraph(paragraph)
    doc.save(str(path))
    return path


def assert_chunks_are_readable(
    chunks: List[DocumentChunk],
    min_letter_ratio: float = 0.5,
    extra_allowed: str = "–—•◦·"
):
    """
    Assert that the text of `chunks` is printable and mostly letters.

    Raises:
        AssertionError: With a snippet of the offending text.
    """
    full_text = "".join(c.text for c in chunks)

    non_printable = [
        c for c in full_text
        if not (c.isprintable() or c.isspace() or c in extra_allowed)
    ]
    if non_printable:
        snippet = "".join(non_printable[:50])
        raise AssertionError(f"Parsed text contains unreadable characters: {snippet!r}")

    letters = sum(c.isalpha() for c in full_text)
    ratio = letters / max(len(full_text), 1)
    if ratio < min_letter_ratio:
        raise AssertionError(
            f"Parsed text seems gibberish (letter ratio {ratio:.2f} < {min_letter_ratio}): "
            f"{full_text[:100]!r}"
        )
