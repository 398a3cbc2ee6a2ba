"""test_word_document_parser.py
Run tests on WordDocumentParser using DOCX files generated on the fly.
"""
import pytest

from resume_rag.models import DocumentChunk
from resume_rag.exceptions import (
    FileEmptyError,
    FileNotSupportedError,
    FileOpenError,
)
from resume_rag.file_parser.word_document_parser import WordDocumentParser
from resume_rag.test_helpers.file_parsing import assert_chunks_are_readable, write_docx

DOCX_PARAGRAPHS = [
    "Jane Smith, Senior Software Engineer",
    "Senior software engineer with 7 years of experience building Python and JavaScript web services.",
    "Designed a microservice platform on Docker and Kubernetes that cut deployment time by 40%.",
    "AWS Certified Developer - Associate",
]


@pytest.fixture
def resume_docx(tmp_path):
    return write_docx(tmp_path / "resume.docx", DOCX_PARAGRAPHS)


class TestWordDocumentParser:
    def test_extract_text(self, resume_docx):
        text = WordDocumentParser(str(resume_docx)).extract_text()
        for paragraph in DOCX_PARAGRAPHS:
            assert paragraph in text
        assert text == text.strip()

    def test_parse_returns_readable_chunks(self, resume_docx):
        chunks = WordDocumentParser(str(resume_docx), chunk_size=120, chunk_overlap=30).parse()
        assert len(chunks) > 1
        assert all(isinstance(c, DocumentChunk) for c in chunks)
        assert all(len(c.text) <= 120 for c in chunks)
        assert_chunks_are_readable(chunks)

    def test_load_document(self, resume_docx):
        document = WordDocumentParser(resume_docx).load_document()
        assert document.source_type == ".docx"
        assert document.file_name == "resume.docx"

    def test_uppercase_extension(self, tmp_path):
        path = write_docx(tmp_path / "RESUME.DOCX", DOCX_PARAGRAPHS)
        assert WordDocumentParser(str(path)).extension == ".docx"

    def test_legacy_doc_not_supported(self, tmp_path):
        path = tmp_path / "resume.doc"
        path.write_bytes(b"\xd0\xcf\x11\xe0")
        with pytest.raises(FileNotSupportedError):
            WordDocumentParser(str(path))

    def test_empty_docx_raises(self, tmp_path):
        path = write_docx(tmp_path / "empty.docx", [])
        with pytest.raises(FileEmptyError):
            WordDocumentParser(str(path)).parse()

    def test_corrupted_docx_raises_file_open_error(self, tmp_path):
        path = tmp_path / "corrupt.docx"
        path.write_text("this is not a zip archive")
        with pytest.raises(FileOpenError):
            WordDocumentParser(str(path)).extract_text()
