"""test_resume_analyzer.py
Test ResumeAnalyzer with canned and MagicMock LLM responses.
"""
from datetime import datetime
from unittest.mock import MagicMock

import pytest

from resume_rag.exceptions import AnalysisError, LLMQueryError
from resume_rag.models import ResumeAnalysis, ResumeFeatures, ResumeRating
from resume_rag.llm.llm_client import LLMClient
from resume_rag.llm.prompts import SYSTEM_PROMPTS
from resume_rag.text_processing.chunk_text import chunk_text
from resume_rag.vector_store.similarity_search import VectorService
from resume_rag.conftest_helpers import mock_llm_responses
from resume_rag.resume_analyzer.resume_analyzer import ANALYSIS_METHODS, ResumeAnalyzer
from resume_rag.test_helpers.sample_resumes import SAMPLE_RESUME_TEXT


@pytest.fixture
def vector_service():
    service = VectorService()
    service.build_index(chunk_text(SAMPLE_RESUME_TEXT, chunk_size=300, chunk_overlap=50))
    return service


@pytest.fixture
def mock_llm_client():
    """MagicMock that passes the LLMClient type check."""
    client = MagicMock(spec=LLMClient)
    client.query.return_value = "- Strong Python skills"
    return client


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------
class TestResumeAnalyzerInit:
    def test_requires_vector_service(self):
        with pytest.raises(TypeError):
            ResumeAnalyzer(vector_service=["not", "a", "service"], force_mock_llm_response=True,
                           llm_dummy_responses={})

    def test_mock_mode_requires_dummy_responses(self, vector_service):
        with pytest.raises(ValueError):
            ResumeAnalyzer(vector_service, force_mock_llm_response=True)

    def test_mock_mode_has_no_client(self, vector_service):
        analyzer = ResumeAnalyzer(vector_service, force_mock_llm_response=True, llm_dummy_responses={})
        assert analyzer.llm_client is None

    def test_invalid_thread_count_defaults_to_one(self, vector_service):
        with pytest.warns(UserWarning):
            analyzer = ResumeAnalyzer(
                vector_service, max_threads=0, force_mock_llm_response=True, llm_dummy_responses={}
            )
        assert analyzer.max_threads == 1

    def test_thread_count_is_capped(self, vector_service):
        with pytest.warns(UserWarning):
            analyzer = ResumeAnalyzer(
                vector_service, max_threads=1000, force_mock_llm_response=True, llm_dummy_responses={}
            )
        assert 1 <= analyzer.max_threads <= len(ANALYSIS_METHODS)


# ---------------------------------------------------------------------------
# Individual analyses with canned responses
# ---------------------------------------------------------------------------
@pytest.mark.usefixtures("FORCE_MOCK_LLM_RESPONSES")
class TestIndividualAnalyses:
    @pytest.fixture
    def analyzer(self, vector_service):
        return ResumeAnalyzer(vector_service, top_k=2)

    def test_patched_analyzer_uses_mock_responses(self, analyzer):
        assert analyzer.force_mock_llm_response is True
        assert analyzer.llm_dummy_responses == mock_llm_responses("success")

    def test_retrieve_context(self, analyzer):
        context = analyzer.retrieve_context("summary")
        assert 1 <= len(context) <= 2
        assert all(chunk in SAMPLE_RESUME_TEXT for chunk in context)

    def test_retrieve_context_custom_query(self, analyzer):
        context = analyzer.retrieve_context("anything", query="Bachelor University education")
        assert any("University" in chunk for chunk in context)

    def test_retrieve_context_unknown_analysis(self, analyzer):
        with pytest.raises(KeyError):
            analyzer.retrieve_context("unknown")

    def test_generate_summary(self, analyzer):
        assert "6 years of experience" in analyzer.generate_summary()

    def test_analyze_strengths_formats_bullets(self, analyzer):
        strengths = analyzer.analyze_strengths()
        assert strengths.startswith("• Strong technical depth")

    def test_analyze_weaknesses(self, analyzer):
        assert "No certifications listed" in analyzer.analyze_weaknesses()

    def test_suggest_job_titles(self, analyzer):
        assert analyzer.suggest_job_titles() == [
            "Senior Software Engineer",
            "Backend Developer",
            "Full Stack Engineer",
            "Technical Lead",
            "Cloud Engineer",
        ]

    def test_generate_professional_summary(self, analyzer):
        assert "Results-driven software engineer" in analyzer.generate_professional_summary()

    def test_rate_resume(self, analyzer):
        rating = analyzer.rate_resume()
        assert isinstance(rating, ResumeRating)
        assert rating.total == 8
        assert rating.grade == "Good (Minor Improvements Needed)"

    def test_compare_with_job_title(self, analyzer):
        assert analyzer.compare_with_job_title("Backend Engineer").startswith("Match: 7/10")

    @pytest.mark.parametrize("job_title", ["", "   ", None])
    def test_compare_with_empty_job_title(self, analyzer, job_title):
        with pytest.raises(ValueError):
            analyzer.compare_with_job_title(job_title)

    def test_missing_dummy_response_raises(self, vector_service):
        analyzer = ResumeAnalyzer(vector_service, llm_dummy_responses={"summary": "ok"})
        with pytest.raises(AnalysisError) as exc_info:
            analyzer.rate_resume()
        assert exc_info.value.analysis_name == "rating"

    def test_no_context_raises(self):
        analyzer = ResumeAnalyzer(VectorService())
        with pytest.raises(AnalysisError):
            analyzer.generate_summary()


# ---------------------------------------------------------------------------
# Complete analysis
# ---------------------------------------------------------------------------
@pytest.mark.usefixtures("FORCE_MOCK_LLM_RESPONSES")
class TestPerformCompleteAnalysis:
    @pytest.mark.parametrize("max_threads", [1, 2])
    def test_all_analyses_succeed(self, vector_service, max_threads):
        features = ResumeFeatures(skills=["Python"])
        analyzer = ResumeAnalyzer(vector_service, max_threads=max_threads)
        analysis = analyzer.perform_complete_analysis(features=features)

        assert isinstance(analysis, ResumeAnalysis)
        assert "6 years of experience" in analysis.summary
        assert analysis.strengths
        assert analysis.weaknesses
        assert len(analysis.job_titles) == 5
        assert analysis.professional_summary
        assert analysis.rating.total == 8
        assert analysis.features is features
        assert analysis.job_comparison is None
        assert datetime.fromisoformat(analysis.analyzed_at).tzinfo is not None

    def test_sequential_and_threaded_match(self, vector_service):
        sequential = ResumeAnalyzer(vector_service, max_threads=1).perform_complete_analysis()
        threaded = ResumeAnalyzer(vector_service, max_threads=2).perform_complete_analysis()
        sequential.analyzed_at = threaded.analyzed_at = None
        assert sequential == threaded

    def test_failed_analysis_keeps_default(self, vector_service):
        responses = mock_llm_responses("success")
        del responses["rating"]
        del responses["job_titles"]
        analysis = ResumeAnalyzer(
            vector_service, llm_dummy_responses=responses
        ).perform_complete_analysis()

        assert analysis.rating is None
        assert analysis.job_titles == []
        assert "6 years of experience" in analysis.summary

    def test_empty_index_gives_defaults(self):
        analysis = ResumeAnalyzer(VectorService(), max_threads=1).perform_complete_analysis()
        assert analysis.summary is None
        assert analysis.job_titles == []
        assert analysis.rating is None
        assert analysis.analyzed_at is not None


# ---------------------------------------------------------------------------
# Live query path with a MagicMock client
# ---------------------------------------------------------------------------
class TestLiveQueryPath:
    def test_query_arguments(self, vector_service, mock_llm_client):
        analyzer = ResumeAnalyzer(vector_service, llm_client=mock_llm_client)
        assert analyzer.analyze_strengths() == "• Strong Python skills"

        kwargs = mock_llm_client.query.call_args.kwargs
        assert kwargs["function_name"] == "strengths"
        assert kwargs["system_prompt"] == SYSTEM_PROMPTS["strengths"]
        assert "RESUME CONTENT:" in kwargs["user_prompt"]

    def test_llm_error_becomes_analysis_error(self, vector_service, mock_llm_client):
        mock_llm_client.query.side_effect = LLMQueryError(provider="anthropic")
        analyzer = ResumeAnalyzer(vector_service, llm_client=mock_llm_client)
        with pytest.raises(AnalysisError) as exc_info:
            analyzer.generate_summary()
        assert exc_info.value.analysis_name == "summary"
        assert exc_info.value.context_chunks

    def test_llm_errors_do_not_stop_complete_analysis(self, vector_service, mock_llm_client):
        mock_llm_client.query.side_effect = LLMQueryError(provider="anthropic")
        analysis = ResumeAnalyzer(
            vector_service, llm_client=mock_llm_client, max_threads=1
        ).perform_complete_analysis()
        assert analysis == ResumeAnalysis(analyzed_at=analysis.analyzed_at)

    def test_test_mode_client_serves_every_analysis(self, vector_service, FAKE_ANTHROPIC_KEY):
        """A real LLMClient in test mode serves every analysis by name."""
        client = LLMClient(test_mode=True)
        client.client = MagicMock()
        analysis = ResumeAnalyzer(vector_service, llm_client=client, max_threads=1).perform_complete_analysis()
        assert analysis.rating.total == 8
        assert analysis.job_titles[0] == "Senior Software Engineer"


@pytest.mark.usefixtures("USE_MOCK_LLM_RESPONSE_SETTING")
class TestLiveLLM:
    def test_complete_analysis(self, vector_service, LLM_TEST_MODE):
        if LLM_TEST_MODE != "full":
            pytest.skip("Runs against the live LLM only with --llm-mode=full")
        analysis = ResumeAnalyzer(vector_service).perform_complete_analysis()
        assert analysis.summary
        assert 0 <= analysis.rating.total <= analysis.rating.max_total
