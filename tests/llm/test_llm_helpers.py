"""test_llm_helpers.py
Test initialize_llm_if_needed.
"""
import pytest
from unittest.mock import patch

from resume_rag.llm.llm_client import LLMClient
from resume_rag.llm.llm_helpers import initialize_llm_if_needed


class TestInitializeLLMIfNeeded:
    def test_existing_client_is_returned(self, FAKE_ANTHROPIC_KEY):
        client = LLMClient()
        assert initialize_llm_if_needed(llm_client=client) is client

    def test_existing_client_wins_over_mock_flag(self, FAKE_ANTHROPIC_KEY):
        client = LLMClient()
        assert initialize_llm_if_needed(llm_client=client, force_mock_llm_response=True) is client

    def test_wrong_type_raises(self):
        with pytest.raises(TypeError):
            initialize_llm_if_needed(llm_client="not a client")

    def test_mock_mode_needs_no_client(self):
        assert initialize_llm_if_needed(force_mock_llm_response=True) is None

    @patch("resume_rag.llm.llm_helpers.LLMClient")
    def test_creates_and_initializes_client(self, mock_llm_client):
        result = initialize_llm_if_needed()
        mock_llm_client.assert_called_once_with()
        mock_llm_client.return_value.initialize_client.assert_called_once()
        assert result is mock_llm_client.return_value
