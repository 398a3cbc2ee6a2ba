"""
llm_client.py

LangChain-based client used to send the analysis prompts to an LLM provider.
Supports Anthropic (Claude).
Includes configuration validation, flexible prompting, and optional JSON parsing.
"""
import json
import os
import re
from typing import Optional, Literal
import warnings

from dotenv import load_dotenv

from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from resume_rag.config import ANALYZER_DEFAULTS
from resume_rag.exceptions import (
    LLMConfigError,
    LLMError,
    LLMInitializationError,
    LLMQueryError,
    LLMEmptyResponse
)
from resume_rag.test_helpers.llm_client_test_helpers import (
    create_mock_llm_response
)

SUPPORTED_PROVIDERS = ["anthropic"]
load_dotenv()

class LLMClient:
    """
    A provider-agnostic client for querying large language models through the
    LangChain interface. Must be "initialized" with `initialize_client()` before
    it can be used to make queries.

    Handles:
        - Pulling API keys from the .env file
        - Resolving provider, model ID, and API keys
        - Optional test mode with canned responses per analysis
        - Integration with LangChain clients (Anthropic)

    Initialization uses defaults from `ANALYZER_DEFAULTS` if values are not provided.

    Attributes:
        provider (str): Name of the LLM provider (e.g., "anthropic").
        model (str): Model identifier. Defaults to the provider's model in
            ANALYZER_DEFAULTS.
        api_key (str): Provider-specific API key pulled from the environment.
        function_name (Optional[str]): Name of the analysis invoking the LLM
            (e.g. "summary", "rating"). Selects the canned response in test mode.
        fallback_message (Optional[str]): Returned when the model response is blank.
        test_mode (bool): If True, returns mock responses instead of making real API calls.
        test_response_type (str): Mock response type used in test mode.
        client (Any): Initialized LangChain chat model client.

    Raises:
        LLMConfigError: If required environment variables are missing or invalid.

    Example:
        >>> client = LLMClient(provider="anthropic", model="claude-haiku-4-5")
        >>> client.initialize_client()
        >>> client.query(
        ...     system_prompt="You are an expert resume reviewer.",
        ...     user_prompt="Summarize this resume: ...",
        ... )
        'Experienced software engineer with...'
    """

    def __init__(
        self,
        provider: Optional[str] = ANALYZER_DEFAULTS.LLM_PROVIDER,
        model: Optional[str] = None,
        function_name: Optional[str] = None,
        fallback_message: Optional[str] = None,
        test_mode: Optional[bool] = False,
        test_response_type: Literal["success", "failed", "unexpected_json", "not_json"] = "success",
    ):
        self.function_name = function_name
        self.fallback_message = fallback_message
        self.test_mode = test_mode
        self.test_response_type = test_response_type

        self.provider = provider
        self._resolve_provider()
        self._resolve_model(model)
        self._resolve_api_key()

        # Only filled when `initialize_client()` is run
        self.client = None

    # --- Init helpers ---
    def _resolve_provider(self) -> None:
        """
        Raises:
            LLMConfigError: If the provider is not one of the supported providers.
        """
        if self.provider not in SUPPORTED_PROVIDERS:
            raise LLMConfigError(
                variable_name="LLM_PROVIDER",
                extra_info=f"Choices are: {SUPPORTED_PROVIDERS}"
            )

    def _resolve_model(self, model: Optional[str]) -> None:
        """
        Use `model` if provided, otherwise the provider default from `ANALYZER_DEFAULTS`.

        Raises:
            LLMConfigError: If no model ID is available for the selected provider.
        """
        default_models = {
            "anthropic": ANALYZER_DEFAULTS.ANTHROPIC_MODEL_ID,
        }

        resolved_model = model or default_models.get(self.provider)
        if not resolved_model:
            raise LLMConfigError(
                variable_name=f"{self.provider}_MODEL_ID",
                message=(
                    f"You must provide a model ID for `{self.provider}` either via ANALYZER_DEFAULTS "
                    "or by explicitly passing `model` when initializing LLMClient."
                )
            )

        self.model = resolved_model

    def _resolve_api_key(self) -> None:
        """
        Load the API key for the selected provider from the environment. Does
        not check that the key is accepted by the provider.

        Raises:
            LLMConfigError: If the API key is missing or still a placeholder.
        """
        api_key_map = {
            "anthropic": "ANTHROPIC_API_KEY",
        }

        key_name = api_key_map.get(self.provider)
        if not key_name:
            raise LLMConfigError(
                variable_name="LLM_PROVIDER",
                message=f"No API key mapping defined for provider `{self.provider}`"
            )

        api_key = os.getenv(key_name)
        if not api_key or api_key == "<REPLACE_ME>":
            raise LLMConfigError(
                variable_name=key_name,
                message=(
                    f"You must set a `{self.provider}` API key in your environment variables "
                    "to run LLM queries to their services."
                )
            )

        self.api_key = api_key

    def initialize_client(self) -> None:
        """
        Create the LangChain chat model for the selected provider and assign
        it to `self.client`.

        No API call is made here, so initializing costs nothing. Use
        `test_connection()` to verify credentials.

        Raises:
            LLMInitializationError: If the client cannot be created.
        """
        try:
            if self.provider == "anthropic":
                from langchain_anthropic import ChatAnthropic
                self.client = ChatAnthropic(
                    model=self.model,
                    anthropic_api_key=self.api_key,
                    temperature=ANALYZER_DEFAULTS.LLM_TEMPERATURE
                )
            else:
                raise LLMConfigError(
                    variable_name="LLM_PROVIDER",
                    extra_info=f"Unsupported provider: {self.provider}"
                )
        except Exception as e:
            raise LLMInitializationError(
                provider=self.provider,
                model=self.model,
                original_exception=e
            )

    # --- QUERY EXECUTION ---
    def query(
        self,
        system_prompt: Optional[str],
        user_prompt: str,
        temperature: float = ANALYZER_DEFAULTS.LLM_TEMPERATURE,
        expect_json: bool = False,
        function_name: Optional[str] = None,
    ) -> str | dict | list:
        """
        Send one prompt to the model.

        Args:
            system_prompt (Optional[str]): Instruction or behavioral setup for the model.
            user_prompt (str): The analysis prompt, retrieved resume context included.
            temperature (float): Sampling temperature (0.0-1.0).
            expect_json (bool): Whether to parse the response as JSON.
            function_name (Optional[str]): Overrides `self.function_name` for this
                query, so one client can serve several analyses.

        Returns:
            str | dict | list: Parsed JSON when `expect_json` is True and the
                response is valid JSON, otherwise the stripped response text.

        Raises:
            LLMInitializationError: If `initialize_client()` has not been run.
            LLMEmptyResponse: If the model returns no content.
            LLMQueryError: If the query itself fails.
        """
        if not self.client:
            raise LLMInitializationError(provider=self.provider, model=self.model)

        messages = [
            SystemMessage(content=system_prompt) if system_prompt else None,
            HumanMessage(content=user_prompt)
        ]
        messages = [m for m in messages if m]

        try:
            response = self._invoke(messages, temperature, function_name or self.function_name)
        except LLMError:
            raise
        except Exception as e:
            raise LLMQueryError(provider=self.provider, model=self.model, original_exception=e)

        if not response or not response.content:
            raise LLMEmptyResponse(provider=self.provider, model=self.model)

        response_content = response.content.strip()

        if expect_json:
            try:
                response_content = self._clean_llm_json_response(response_text=response_content)
            except json.JSONDecodeError as e:
                warnings.warn(
                    (
                        f"LLM did not return valid JSON when it was expected to. "
                        f"Provider: `{self.provider}` "
                        f"Model: `{self.model}` "
                        f"Function: `{function_name or self.function_name}` \n"
                        f"Exception: `{e}`"
                    ),
                    category=UserWarning,
                )

        if not response_content:
            response_content = self.fallback_message or "No query result"

        return response_content

    def _invoke(self, messages: list, temperature: float, function_name: Optional[str]) -> AIMessage:
        """Run the live query, or build the canned response in test mode."""
        if not self.test_mode:
            return self.client.invoke(messages, temperature=temperature)

        if function_name and self.test_response_type:
            return create_mock_llm_response(
                function_name=function_name,
                response_type=self.test_response_type,
                provider=self.provider
            )

        raise LLMQueryError(
            provider=self.provider,
            model=self.model,
            additional_message=(
                "Test mode is enabled without valid test variables having been defined. "
                f"self.test_mode = {self.test_mode} "
                f"self.function_name = {self.function_name} "
            ),
        )

    def _clean_llm_json_response(self, response_text: str):
        """
        Parse JSON returned by an LLM, tolerating Markdown code fences and
        surrounding prose.

        Strips ```json fences, tries a direct parse, then falls back to the
        first `{...}` or `[...]` block found in the text.

        Raises:
            json.JSONDecodeError: If no valid JSON structure can be extracted.
        """
        text = response_text.strip()

        text = re.sub(r"^```[a-zA-Z]*\n?", "", text)
        text = re.sub(r"\n?```$", "", text)

        try:
            return json.loads(text)
        except json.JSONDecodeError:
            match = re.search(r"(\{.*\}|\[.*\])", text, re.DOTALL)
            if match:
                return json.loads(match.group(1))
            raise

    # --- TESTING ---
    def test_connection(self) -> bool:
        """
        Check that the provider accepts this client's credentials, initializing
        the client first if needed.

        Returns:
            bool: True when a ping query succeeds.

        Raises:
            LLMInitializationError: On invalid keys, exhausted quota or rate limits.
        """
        if not self.client:
            self.initialize_client()

        if self.provider == "anthropic":
            return self._test_connection_generic("Anthropic")

        raise LLMInitializationError(
            provider=self.provider,
            model=self.model,
            additional_message="No valid provider selected"
        )

    def _test_connection_generic(self, provider_name: str) -> bool:
        """
        Invoke a lightweight "ping" query on the initialized client.

        Raises:
            LLMInitializationError: If the client has not been initialized or
                the provider returns an error. Quota and rate limit problems
                are named in the message.
        """
        if not self.client:
            raise LLMInitializationError(
                provider=provider_name,
                model=self.model,
                additional_message="No client initialized"
            )
        try:
            response = self.client.invoke("ping")
        except Exception as e:
            additional_message = ""
            if "insufficient_quota" in str(e).lower():
                additional_message += f"Out of tokens for `{provider_name}`"
            if "rate limit" in str(e).lower():
                additional_message += f"Rate limit reached for `{provider_name}`"
            raise LLMInitializationError(
                provider=provider_name,
                model=self.model,
                original_exception=e,
                additional_message=additional_message or None
            )
        return bool(response is not None and hasattr(response, "content"))
