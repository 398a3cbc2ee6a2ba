"""document_source.py
Maps an uploaded file to the parser able to read it.
"""
from enum import Enum
from typing import Type

from resume_rag.config import ANALYZER_DEFAULTS
from resume_rag.models import Document
from resume_rag.file_parser.file_parser import FileParser
from resume_rag.file_parser.pdf_parser import PDFParser
from resume_rag.file_parser.word_document_parser import WordDocumentParser
from resume_rag.file_parser.helpers.check_file_extension import check_file_extension


class DocumentSourceType(str, Enum):
    """Supported upload formats, valued by file extension."""
    PDF = ".pdf"
    DOCX = ".docx"

    @classmethod
    def from_file_path(cls, file_path: str) -> "DocumentSourceType":
        """
        Resolve the source type from a file name.

        Raises:
            FileNotSupportedError: If the extension is not a supported format.
        """
        extension = check_file_extension(file_path, [member.value for member in cls])
        return cls(extension)

    @property
    def parser_class(self) -> Type[FileParser]:
        return {
            DocumentSourceType.PDF: PDFParser,
            DocumentSourceType.DOCX: WordDocumentParser,
        }[self]


def get_parser(
    file_path: str,
    chunk_size: int = ANALYZER_DEFAULTS.CHUNK_SIZE,
    chunk_overlap: int = ANALYZER_DEFAULTS.CHUNK_OVERLAP,
    max_file_size_mb: float | None = ANALYZER_DEFAULTS.MAX_FILE_SIZE_MB,
) -> FileParser:
    """Build the concrete `FileParser` for `file_path`."""
    parser_class = DocumentSourceType.from_file_path(file_path).parser_class
    return parser_class(
        file_path=file_path,
        chunk_size=chunk_size,
        chunk_overlap=chunk_overlap,
        max_file_size_mb=max_file_size_mb,
    )


def load_document(
    file_path: str,
    max_file_size_mb: float | None = ANALYZER_DEFAULTS.MAX_FILE_SIZE_MB,
) -> Document:
    """
    Read a PDF or DOCX resume into a `Document`.

    Raises:
        FileNotSupportedError: For any other extension.
        FileNotFoundError: If the file does not exist.
        FileTooLargeError: If the file exceeds `max_file_size_mb`.
        FileOpenError: If the file cannot be read.
    """
    return get_parser(file_path, max_file_size_mb=max_file_size_mb).load_document()
