"""conftest.py
Shared pytest hooks, command line options and fixtures.
"""

import pytest
from resume_rag.logging import LoggerFactory
from resume_rag.conftest_helpers import apply_mock_llm_patch

# --------------------------------------------------------------
# SETUP TEST LOGGING
# --------------------------------------------------------------

logger = LoggerFactory().get_logger(
    name="pytest_logger",
    logger_type="pytest",
    console=True
)
current_class = None

@pytest.hookimpl(tryfirst=True)
def pytest_sessionstart(session):
    logger.info("==== PYTEST SESSION START ====")

@pytest.hookimpl(tryfirst=True)
def pytest_runtest_logstart(nodeid, location):
    """Log a header whenever a new test module starts."""
    global current_class
    class_name = location[0]
    if class_name != current_class:
        current_class = class_name
        logger.info(f"\n---- TestClass: {current_class} ----")

@pytest.hookimpl(tryfirst=True)
def pytest_runtest_logreport(report):
    """Log the outcome of each test call (setup/teardown phases are skipped)."""
    if report.when != "call":
        return

    status = report.outcome.upper()
    if status == "PASSED":
        logger.info(f"PASSED: {report.nodeid}")
    elif status == "FAILED":
        logger.error(f"FAILED: {report.nodeid}\n{report.longreprtext}")
    elif status == "SKIPPED":
        logger.warning(f"SKIPPED: {report.nodeid}\n{report.longreprtext}")

@pytest.hookimpl(tryfirst=True)
def pytest_sessionfinish(session, exitstatus):
    logger.info(f"==== PYTEST SESSION END: exitstatus={exitstatus} ====")


# --------------------------------------------------------------
# SETUP RUN ARGUMENT PARSING
# --------------------------------------------------------------
def pytest_addoption(parser):
    """
    Register a command-line option for selecting the LLM test mode.

    Example usage:
        # Run tests with canned LLM responses (default)
        pytest

        # Run the few tests that make live LLM calls
        pytest --llm-mode=basic_only

        # Run every analysis against the live LLM
        pytest --llm-mode=full
    """
    parser.addoption(
        "--llm-mode",
        action="store",
        default="mock_only",
        choices=["mock_only", "basic_only", "full"],
        help=(
            "Set the LLM test mode for pytest. Options:\n"
            "  'mock_only' (default): Use canned responses.\n"
            "  'basic_only': Run a minimal subset of live LLM tests.\n"
            "  'full': Run all live LLM tests."
        ),
    )

@pytest.fixture(scope="session")
def LLM_TEST_MODE(request):
    """
    Returns:
        str: One of 'mock_only', 'basic_only', 'full'.
    """
    return request.config.getoption("--llm-mode")


@pytest.fixture(autouse=False)
def FORCE_MOCK_LLM_RESPONSES(monkeypatch):
    """
    Always use canned LLM responses in ResumeAnalyzer and MarketInsights.

    Usage:
      - Class-level:
        ```
        @pytest.mark.usefixtures("FORCE_MOCK_LLM_RESPONSES")
        class TestResumeAnalyzer:
            ...
        ```
      - Function-level:
        ```
        def test_example(FORCE_MOCK_LLM_RESPONSES):
            ...
        ```
    """
    apply_mock_llm_patch(monkeypatch)
    yield


@pytest.fixture
def USE_MOCK_LLM_RESPONSE_SETTING(monkeypatch, LLM_TEST_MODE):
    """
    Use canned LLM responses unless `--llm-mode=full` was requested.
    """
    if LLM_TEST_MODE != "full":
        apply_mock_llm_patch(monkeypatch)
    yield


@pytest.fixture
def FAKE_ANTHROPIC_KEY(monkeypatch):
    """Provide a placeholder API key so LLMClient can be constructed offline."""
    monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")
    yield "test-key"
