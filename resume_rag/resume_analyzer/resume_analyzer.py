"""resume_analyzer.py
Runs the LLM-backed analyses of a resume, each fed by the chunks retrieved
from the resume's VectorService.
"""
import sys
import warnings
import multiprocessing
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from concurrent.futures import ThreadPoolExecutor, as_completed

from resume_rag.config import ANALYZER_DEFAULTS
from resume_rag.logging import LoggerFactory
from resume_rag.exceptions import AnalysisError, LLMError
from resume_rag.models import ResumeAnalysis, ResumeFeatures, ResumeRating
from resume_rag.vector_store.similarity_search import VectorService
from resume_rag.rating.rating_parser import parse_rating
from resume_rag.llm.llm_helpers import initialize_llm_if_needed
from resume_rag.llm.prompts import (
    PROMPT_BUILDERS,
    SYSTEM_PROMPTS,
    build_job_comparison_prompt,
)
from resume_rag.resume_analyzer.text_formatter import (
    format_analysis_text,
    format_job_titles,
    format_professional_summary,
)

logger_factory = LoggerFactory()
analysis_logger = logger_factory.get_logger(
    name="resume_analyzer",
    logger_type="analysis",
    console=False,
)

# Retrieval question used to pick the context chunks for each analysis
ANALYSIS_QUERIES: Dict[str, str] = {
    "summary": "professional background experience skills education achievements career",
    "strengths": "technical skills expertise leadership achievements accomplishments projects",
    "weaknesses": "experience skills education certifications gaps responsibilities",
    "job_titles": "job title role position experience skills industry",
    "professional_summary": "years experience expertise skills achievements",
    "rating": "experience skills achievements education certifications results",
}

# Analysis name -> method producing it. Names match the ResumeAnalysis fields.
ANALYSIS_METHODS: Dict[str, str] = {
    "summary": "generate_summary",
    "strengths": "analyze_strengths",
    "weaknesses": "analyze_weaknesses",
    "job_titles": "suggest_job_titles",
    "professional_summary": "generate_professional_summary",
    "rating": "rate_resume",
}


class ResumeAnalyzer:
    """
    Produces summaries, strengths, weaknesses, job titles, a professional
    summary and a rating for one resume.

    Every analysis first retrieves the `top_k` chunks most similar to its
    question in ANALYSIS_QUERIES, then sends them to the LLM with the matching
    prompt. The vector service is only read here; it is never re-indexed while
    analyses run, so the analyses may run in parallel threads.

    Attributes:
        vector_service (VectorService): Index over the resume's chunks.
        llm_client (LLMClient | None): Client used for live queries. None when
            `force_mock_llm_response` is True.
        top_k (int): Number of chunks retrieved per analysis.
        max_threads (int): Maximum number of analyses run at the same time.
        force_mock_llm_response (bool): Return `llm_dummy_responses[analysis]`
            instead of querying the LLM.
        llm_dummy_responses (Dict[str, Any]): Raw responses used when mocking.
    """

    def __init__(
        self,
        vector_service: VectorService,
        llm_client: Optional["LLMClient"] = None,
        top_k: int = ANALYZER_DEFAULTS.TOP_K,
        max_threads: int = ANALYZER_DEFAULTS.MAX_THREADS,
        force_mock_llm_response: bool = False,
        llm_dummy_responses: Optional[Dict[str, Any]] = None,
    ):
        """
        Raises:
            TypeError: If `vector_service` is not a VectorService.
            ValueError: If mock responses are forced but none are provided.
            LLMConfigError: If a live client is needed but cannot be configured.
        """
        if not isinstance(vector_service, VectorService):
            raise TypeError("vector_service must be an instance of VectorService.")
        if force_mock_llm_response and llm_dummy_responses is None:
            raise ValueError(
                "`llm_dummy_responses` must be provided when `force_mock_llm_response` is True."
            )

        self.vector_service = vector_service
        self.top_k = top_k
        self.force_mock_llm_response = force_mock_llm_response
        self.llm_dummy_responses = llm_dummy_responses or {}
        self.llm_client = initialize_llm_if_needed(
            llm_client=llm_client,
            force_mock_llm_response=force_mock_llm_response,
        )
        self._determine_max_threads(max_threads)

    def _determine_max_threads(self, max_threads: int) -> None:
        """
        Clamp `max_threads` to at least 1 and at most the available CPU cores
        and the number of analyses, warning whenever the request is changed.
        """
        available_cores = multiprocessing.cpu_count()
        num_analyses = len(ANALYSIS_METHODS)

        if max_threads <= 0:
            warnings.warn(f"Requested max_threads={max_threads} is invalid. Defaulting to 1 thread.")
            max_threads = 1

        if max_threads > available_cores:
            warnings.warn(
                f"Requested max_threads={max_threads} exceeds available cores "
                f"({available_cores}). Using {available_cores} instead."
            )
            max_threads = available_cores

        if max_threads > num_analyses:
            warnings.warn(
                f"Requested max_threads={max_threads} exceeds the number of analyses "
                f"({num_analyses}). Using {num_analyses} instead."
            )
            max_threads = num_analyses

        self.max_threads = max_threads

    # ----------------------
    # RETRIEVAL + QUERYING
    # ----------------------
    def retrieve_context(self, analysis_name: str, query: Optional[str] = None) -> List[str]:
        """
        Return the text of the chunks most relevant to an analysis.

        Args:
            analysis_name (str): Key of ANALYSIS_QUERIES.
            query (str | None): Retrieval question to use instead of the default.

        Raises:
            KeyError: If `analysis_name` is unknown and no `query` is given.
        """
        query = query or ANALYSIS_QUERIES[analysis_name]
        results = self.vector_service.search(query, k=self.top_k)
        return [result.content for result in results]

    def _run_llm(self, analysis_name: str, prompt: str, context_chunks: List[str]) -> str:
        """
        Send `prompt` for one analysis and return the raw response text.

        Raises:
            AnalysisError: If there is no context, no mock response is
                configured, or the LLM query fails.
        """
        if not context_chunks:
            raise AnalysisError(
                analysis_name=analysis_name,
                message="No resume context could be retrieved",
            )

        if self.force_mock_llm_response:
            response = self.llm_dummy_responses.get(analysis_name)
            if response is None:
                raise AnalysisError(
                    analysis_name=analysis_name,
                    message="No dummy LLM response configured",
                    context_chunks=context_chunks,
                )
            return str(response)

        try:
            response = self.llm_client.query(
                system_prompt=SYSTEM_PROMPTS.get(analysis_name),
                user_prompt=prompt,
                function_name=analysis_name,
            )
        except LLMError as e:
            raise AnalysisError(
                analysis_name=analysis_name,
                message=f"LLM query failed ({e})",
                context_chunks=context_chunks,
            ) from e

        return str(response)

    def _analyze(self, analysis_name: str) -> str:
        context_chunks = self.retrieve_context(analysis_name)
        prompt = PROMPT_BUILDERS[analysis_name](context_chunks)
        return self._run_llm(analysis_name, prompt, context_chunks)

    # ----------------------
    # INDIVIDUAL ANALYSES
    # ----------------------
    def generate_summary(self) -> str:
        return format_analysis_text(self._analyze("summary"))

    def analyze_strengths(self) -> str:
        return format_analysis_text(self._analyze("strengths"))

    def analyze_weaknesses(self) -> str:
        """Weaknesses together with improvement suggestions."""
        return format_analysis_text(self._analyze("weaknesses"))

    def suggest_job_titles(self) -> List[str]:
        return format_job_titles(self._analyze("job_titles"))

    def generate_professional_summary(self) -> str:
        return format_professional_summary(self._analyze("professional_summary"))

    def rate_resume(self) -> ResumeRating:
        """Rate the resume and parse the response into a `ResumeRating`."""
        return parse_rating(self._analyze("rating"))

    def compare_with_job_title(self, job_title: str) -> str:
        """
        Compare the resume against the requirements of `job_title`.

        Raises:
            ValueError: If `job_title` is empty.
            AnalysisError: If the comparison cannot be produced.
        """
        if not isinstance(job_title, str) or not job_title.strip():
            raise ValueError("job_title must be a non-empty string.")

        job_title = job_title.strip()
        context_chunks = self.retrieve_context(
            "job_comparison",
            query=f"{job_title} skills experience requirements responsibilities",
        )
        prompt = build_job_comparison_prompt(context_chunks, job_title)
        return format_analysis_text(self._run_llm("job_comparison", prompt, context_chunks))

    # ----------------------
    # COMPLETE ANALYSIS
    # ----------------------
    def _run_analysis_with_fallback(self, analysis_name: str) -> object:
        """
        Run one analysis, returning the ResumeAnalysis default for its field
        if it fails. Failures go to the analysis-specific failure logger,
        unless running under pytest.
        """
        try:
            return getattr(self, ANALYSIS_METHODS[analysis_name])()
        except Exception as e:
            if not any("pytest" in arg for arg in sys.argv):
                logger_factory.get_analysis_failure_logger(analysis_name).warning(
                    f"Analysis '{analysis_name}' failed: {str(e)}"
                )
            analysis_logger.warning(f"Analysis '{analysis_name}' failed, using default value.")
            return getattr(ResumeAnalysis(), analysis_name)

    def perform_complete_analysis(
        self,
        features: Optional[ResumeFeatures] = None,
    ) -> ResumeAnalysis:
        """
        Run every analysis in ANALYSIS_METHODS and collect the results.

        Analyses run sequentially (max_threads=1) or in a ThreadPoolExecutor.
        A failed analysis leaves its field at the ResumeAnalysis default; the
        others are unaffected.

        Args:
            features (ResumeFeatures | None): Keyword features to attach to the result.

        Returns:
            ResumeAnalysis: All analyses plus a UTC `analyzed_at` timestamp.
        """
        analysis = ResumeAnalysis(features=features)

        if self.max_threads == 1:
            for analysis_name in ANALYSIS_METHODS:
                setattr(analysis, analysis_name, self._run_analysis_with_fallback(analysis_name))
        else:
            with ThreadPoolExecutor(max_workers=self.max_threads) as executor:
                future_to_name = {
                    executor.submit(self._run_analysis_with_fallback, name): name
                    for name in ANALYSIS_METHODS
                }
                for future in as_completed(future_to_name):
                    setattr(analysis, future_to_name[future], future.result())

        analysis.analyzed_at = datetime.now(timezone.utc).isoformat()
        analysis_logger.info(
            f"Completed analysis over {len(self.vector_service)} chunks "
            f"(rating total: {analysis.rating.total if analysis.rating else 'n/a'})."
        )
        return analysis
