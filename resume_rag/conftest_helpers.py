"""conftest_helpers.py
Helper functions for `tests/conftest.py`
"""

from resume_rag.resume_analyzer.resume_analyzer import ResumeAnalyzer
from resume_rag.resume_analyzer.market_insights import MarketInsights
from resume_rag.test_helpers.llm_client_test_helpers import expected_test_responses


def mock_llm_responses(response_type: str = "success") -> dict:
    """Canned raw LLM output per analysis name, as ResumeAnalyzer would receive it."""
    return {
        name: responses[response_type]
        for name, responses in expected_test_responses.items()
    }


# --------------------------------------------------------------
# SETUP MONKEYPATCH FIXTURES
# --------------------------------------------------------------
def apply_mock_llm_patch(monkeypatch):
    """
    Force ResumeAnalyzer and MarketInsights to use mock LLM responses:
      - `force_mock_llm_response=True`
      - `llm_dummy_responses` defaults to the "success" canned responses

    Explicitly passed `llm_dummy_responses` are kept, so a test can still
    choose its own responses.

    Notes:
      - Intended to be called from a fixture to control scope.
      - Does not yield; directly applies the monkeypatch.
    """
    for cls in (ResumeAnalyzer, MarketInsights):
        original_init = cls.__init__

        def patched_init(self, *args, _original_init=original_init, **kwargs):
            kwargs["force_mock_llm_response"] = True
            if kwargs.get("llm_dummy_responses") is None:
                kwargs["llm_dummy_responses"] = mock_llm_responses("success")
            _original_init(self, *args, **kwargs)

        monkeypatch.setattr(cls, "__init__", patched_init)
