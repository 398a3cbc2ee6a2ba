"""file_parser.py

Holds the abstract FileParser class inherited by filetype-specific parsers.
"""

import os
from typing import List
from abc import ABC, abstractmethod

from resume_rag.config import ANALYZER_DEFAULTS
from resume_rag.models import Document, DocumentChunk
from resume_rag.exceptions import FileTooLargeError, FileEmptyError, NoFilePathError
from resume_rag.text_processing.chunk_text import chunk_text
from resume_rag.file_parser.helpers.check_file_extension import check_file_extension

class FileParser(ABC):
    """
    Abstract base class for reading the text out of an uploaded resume.

    Concrete parsers only implement `extract_text()`. Validation of the file
    (existence, size, extension) happens on construction so a bad upload is
    rejected before any parsing work starts.

    Args:
        file_path (str): Path to the file to parse.
        chunk_size (int): Maximum number of characters per chunk.
        chunk_overlap (int): Characters shared between consecutive chunks.
        max_file_size_mb (float | None, optional): Maximum allowed file size in
            megabytes. If None, no size limit is enforced.

    Attributes:
        file_path (str): Path to the file.
        chunk_size (int): Maximum characters per chunk.
        chunk_overlap (int): Overlap between chunks.
        max_file_size_mb (float | None): Maximum allowed file size.
        extension (str): Lowercase extension of `file_path`.
    """
    # Extensions supported by at least one concrete parser
    ALLOWED_EXTENSIONS = [".pdf", ".docx"]

    # Extensions supported by a specific concrete class (overwritten by children)
    SUPPORTED_EXTENSIONS = []

    def __init__(
        self,
        file_path: str,
        chunk_size: int = ANALYZER_DEFAULTS.CHUNK_SIZE,
        chunk_overlap: int = ANALYZER_DEFAULTS.CHUNK_OVERLAP,
        max_file_size_mb: float | None = ANALYZER_DEFAULTS.MAX_FILE_SIZE_MB
    ):
        self.file_path = file_path
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.max_file_size_mb = max_file_size_mb
        self._validate_file()
        self.extension = check_file_extension(self.file_path, self.SUPPORTED_EXTENSIONS)

    def _validate_file(self):
        """Validate whether the file can be parsed by this parser.

        Raises:
            NoFilePathError: Raised if file_path is empty
            FileNotFoundError: Raised if the file cannot be found at file_path
            FileTooLargeError: Raised if the file exceeds the max_file_size_mb
        """
        if not self.file_path:
            raise NoFilePathError()

        if not os.path.exists(self.file_path):
            raise FileNotFoundError(f"File not found: {self.file_path}")

        if self.max_file_size_mb is not None:
            # 1 MB = 1024 * 1024 bytes
            max_size_bytes = self.max_file_size_mb * 1024 * 1024
            actual_size_bytes = os.path.getsize(self.file_path)

            if actual_size_bytes > max_size_bytes:
                raise FileTooLargeError(
                    max_size=max_size_bytes,
                    actual_size=actual_size_bytes
                )

    @abstractmethod
    def extract_text(self) -> str:
        """
        Read the file at `self.file_path` and return its full raw text.

        Raises:
            FileOpenError: If the file cannot be opened or read.
        """
        pass

    def load_document(self) -> Document:
        """
        Extract the file's text and wrap it in a `Document`.

        Returns:
            Document: Text, source type and file name of the upload. The text
                may be empty; callers decide whether that is an error.
        """
        return Document(
            text=self.extract_text(),
            source_type=self.extension,
            file_name=os.path.basename(str(self.file_path)),
        )

    def parse(self) -> List[DocumentChunk]:
        """
        Extract the file's text and split it into `DocumentChunk` objects.

        Returns:
            List[DocumentChunk]: Sequentially numbered chunks of the file text.

        Raises:
            FileOpenError: If the file cannot be opened or read.
            FileEmptyError: If the file contains no readable text.
        """
        return self._check_and_chunk_final_text(self.extract_text())

    def _check_and_chunk_final_text(self, full_text: str) -> List[DocumentChunk]:
        """
        Raise `FileEmptyError` for blank text, otherwise chunk it with the
        parser's chunk settings.
        """
        if not full_text or not full_text.strip():
            raise FileEmptyError(str(self.file_path))

        return chunk_text(
            text=full_text,
            chunk_size=self.chunk_size,
            chunk_overlap=self.chunk_overlap,
        )
