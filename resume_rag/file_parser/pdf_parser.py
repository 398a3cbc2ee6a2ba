"""pdf_parser.py

Holds PDFParser class.
"""
import pymupdf

from resume_rag.exceptions import FileOpenError
from resume_rag.file_parser.file_parser import FileParser

class PDFParser(FileParser):
    """
    Concrete parser for PDF documents (.pdf).

    Uses PyMuPDF to read the text of every page. Pages are joined in order,
    each followed by a newline.

    Attributes:
        SUPPORTED_EXTENSIONS (List[str]): Only ``.pdf``.
    """
    SUPPORTED_EXTENSIONS = ['.pdf']

    def extract_text(self) -> str:
        """
        Open the PDF with PyMuPDF and return the text of all pages.

        Returns:
            str: Full text inside the PDF (empty for image-only PDFs).

        Raises:
            FileOpenError: If the PDF file cannot be opened.
        """
        try:
            doc = pymupdf.open(self.file_path)
        except Exception as e:
            raise FileOpenError(str(self.file_path), str(e))

        try:
            pages = [doc.load_page(n).get_text("text") for n in range(doc.page_count)]
        finally:
            doc.close()

        return "".join(page + "\n" for page in pages)
