"""llm_helpers.py
Functions to help with initiating a LLMClient class
"""

from typing import Optional

from resume_rag.llm.llm_client import LLMClient

def initialize_llm_if_needed(
    llm_client: Optional[LLMClient] = None,
    force_mock_llm_response: bool = False,
) -> Optional[LLMClient]:
    """
    Return an LLMClient ready for analysis queries, creating one only when needed.

    Logic flow:
        1. An existing `llm_client` is validated and returned as-is.
        2. When mock responses are forced, no client is needed and `None` is returned.
        3. Otherwise a new LLMClient is created from ANALYZER_DEFAULTS / .env and
           initialized.

    Args:
        llm_client (Optional[LLMClient]): Existing client to use.
        force_mock_llm_response (bool): Whether the caller will skip live queries.

    Returns:
        Optional[LLMClient]: An initialized client, or None if not required.

    Raises:
        TypeError: If `llm_client` is provided but not an instance of `LLMClient`.
        LLMConfigError: If a new client is needed but the configuration is missing.
        LLMInitializationError: If a new client cannot be initialized.
    """
    if llm_client is not None:
        if not isinstance(llm_client, LLMClient):
            raise TypeError("Provided llm_client must be an instance of LLMClient.")
        return llm_client

    if force_mock_llm_response:
        return None

    llm_client = LLMClient()
    llm_client.initialize_client()

    return llm_client
