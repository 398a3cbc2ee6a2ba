"""resume_analysis_framework.py
Holds the framework that takes a resume file all the way to a ResumeAnalysis:
FileParser -> chunk_text -> VectorService -> ResumeAnalyzer.
"""
import os
from typing import Any, Dict, List, Optional

from resume_rag.config import ANALYZER_DEFAULTS
from resume_rag.logging import LoggerFactory
from resume_rag.exceptions import (
    AnalysisError,
    ChunkingConfigError,
    FileEmptyError,
    ResumeAnalysisFrameworkConfigError,
)
from resume_rag.models import Document, ResumeAnalysis, ResumeFeatures, SearchResult
from resume_rag.text_processing.chunk_text import chunk_text, validate_chunking_settings
from resume_rag.vector_store.similarity_search import VectorService
from resume_rag.feature_extractor.feature_extractor import extract_features
from resume_rag.file_parser.document_source import get_parser
from resume_rag.resume_analyzer.resume_analyzer import ResumeAnalyzer

logger = LoggerFactory().get_logger(name="resume_analysis_framework", logger_type="analysis")


class ResumeAnalysisFramework:
    """
    Orchestrates the complete resume analysis, from raw file to ResumeAnalysis.

    Each call builds a new VectorService for its document, so concurrent
    requests never share an index.

    Testing hooks:
        * ``forced_document_text`` replaces the text read from the file (the
          file itself is still validated).
        * ``force_mock_llm_response`` / ``llm_dummy_responses`` are forwarded to
          every ResumeAnalyzer.

    Args:
        chunk_size (int): Maximum characters per chunk.
        chunk_overlap (int): Characters shared by consecutive chunks.
        max_file_size_mb (float | None): Maximum allowed upload size.
        top_k (int): Chunks retrieved per analysis.
        max_threads (int): Analyses run concurrently.
        llm_client (LLMClient | None): Pre-initialized client. Created on the
            first analysis when omitted.
        keyword_limit (int): Number of generic keywords in the features.

    Raises:
        ResumeAnalysisFrameworkConfigError: If the chunk settings or `top_k` are invalid.

    Example:
        >>> framework = ResumeAnalysisFramework()
        >>> analysis = framework.analyze_resume("path/to/resume.pdf")
        >>> analysis.rating.grade
        'Good (Minor Improvements Needed)'
    """

    def __init__(
        self,
        chunk_size: int = ANALYZER_DEFAULTS.CHUNK_SIZE,
        chunk_overlap: int = ANALYZER_DEFAULTS.CHUNK_OVERLAP,
        max_file_size_mb: Optional[float] = ANALYZER_DEFAULTS.MAX_FILE_SIZE_MB,
        top_k: int = ANALYZER_DEFAULTS.TOP_K,
        max_threads: int = ANALYZER_DEFAULTS.MAX_THREADS,
        llm_client: Optional["LLMClient"] = None,
        keyword_limit: int = ANALYZER_DEFAULTS.KEYWORD_LIMIT,
        force_mock_llm_response: bool = False,
        llm_dummy_responses: Optional[Dict[str, Any]] = None,
        forced_document_text: Optional[str] = None,
    ):
        try:
            validate_chunking_settings(
                chunk_size, chunk_overlap, ANALYZER_DEFAULTS.MIN_CHUNK_LENGTH, "window"
            )
        except ChunkingConfigError as e:
            raise ResumeAnalysisFrameworkConfigError(str(e)) from e
        if isinstance(top_k, bool) or not isinstance(top_k, int) or top_k <= 0:
            raise ResumeAnalysisFrameworkConfigError(f"top_k must be a positive integer (got {top_k!r}).")

        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.max_file_size_mb = max_file_size_mb
        self.top_k = top_k
        self.max_threads = max_threads
        self.keyword_limit = keyword_limit
        self.llm_client = llm_client

        self.force_mock_llm_response = force_mock_llm_response
        self.llm_dummy_responses = llm_dummy_responses
        self.forced_document_text = forced_document_text

    # ----------------------
    # DOCUMENT + INDEX
    # ----------------------
    def load_document(self, file_path: str) -> Document:
        """
        Validate the file and read its text.

        Raises:
            FileNotSupportedError, FileNotFoundError, FileTooLargeError, FileOpenError
        """
        parser = get_parser(
            file_path=file_path,
            chunk_size=self.chunk_size,
            chunk_overlap=self.chunk_overlap,
            max_file_size_mb=self.max_file_size_mb,
        )
        if self.forced_document_text is None:
            return parser.load_document()

        return Document(
            text=self.forced_document_text,
            source_type=parser.extension,
            file_name=os.path.basename(str(file_path)),
        )

    def build_vector_service(self, text: str) -> VectorService:
        """Chunk `text` and index the chunks in a new VectorService."""
        chunks = chunk_text(text, chunk_size=self.chunk_size, chunk_overlap=self.chunk_overlap)
        vector_service = VectorService()
        vector_service.build_index(
            chunks,
            metadata=[
                {"id": i, "chunk_index": c.chunk_index, "start_offset": c.start_offset}
                for i, c in enumerate(chunks)
            ],
        )
        return vector_service

    def search_text(self, text: str, query: str, k: Optional[int] = None) -> List[SearchResult]:
        """Index `text` on the fly and return its chunks most similar to `query`."""
        return self.build_vector_service(text).search(query, k=self.top_k if k is None else k)

    # ----------------------
    # PIPELINES
    # ----------------------
    def extract_features(self, file_path: str) -> ResumeFeatures:
        """Keyword features of a resume file. No LLM is involved."""
        document = self.load_document(file_path)
        return extract_features(document.text, keyword_limit=self.keyword_limit)

    def analyze_resume(self, file_path: str, job_title: Optional[str] = None) -> ResumeAnalysis:
        """
        Full pipeline: read file -> chunk + index -> LLM analyses -> ``ResumeAnalysis``.

        Args:
            file_path (str): Path to the resume file (.pdf or .docx).
            job_title (str | None): When given, the resume is also compared
                against this role.

        Raises:
            FileEmptyError: If the file contains no readable text.
        """
        document = self.load_document(file_path)
        if not document.text.strip():
            raise FileEmptyError(str(file_path))
        return self.analyze_text(document.text, job_title=job_title)

    def analyze_text(self, text: str, job_title: Optional[str] = None) -> ResumeAnalysis:
        """Run the analysis pipeline on already extracted resume text."""
        vector_service = self.build_vector_service(text)
        features = extract_features(text, keyword_limit=self.keyword_limit)

        analyzer = ResumeAnalyzer(
            vector_service=vector_service,
            llm_client=self.llm_client,
            top_k=self.top_k,
            max_threads=self.max_threads,
            force_mock_llm_response=self.force_mock_llm_response,
            llm_dummy_responses=self.llm_dummy_responses,
        )
        # Reuse the client created by the first analyzer
        if self.llm_client is None:
            self.llm_client = analyzer.llm_client

        analysis = analyzer.perform_complete_analysis(features=features)

        if job_title:
            try:
                analysis.job_comparison = analyzer.compare_with_job_title(job_title)
            except AnalysisError as e:
                logger.warning(f"Job comparison for '{job_title}' failed: {e.message}")

        return analysis
