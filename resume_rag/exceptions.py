"""exceptions.py
Defines custom exceptions for this project.
"""
from typing import Optional, List

# ------------------------ File Parser Errors ------------------------
class FileParserError(Exception):
    """Base exception for file parser errors."""
    pass

class FileNotSupportedError(FileParserError):
    """Raised when the current file path has an unsupported extension."""
    def __init__(
        self,
        extension: str,
        supported_extensions: List[str],
        context: Optional[str] = None
    ):
        self.extension = extension
        self.supported_extensions = supported_extensions
        message = (
            f"File with extension '{extension}' is not supported. "
            f"Supported extensions: {supported_extensions}"
        )
        if context:
            message += f" Context: {context}"
        super().__init__(message)


class NoFilePathError(FileParserError):
    """Raised when no file path is provided but the FileParser attempts to access it."""
    def __init__(self):
        message = (
            "No file path was provided. This FileParser instance "
            "cannot access or parse a file without a valid 'file_path'."
        )
        super().__init__(message)

class FileTooLargeError(FileParserError):
    """Raised when a file exceeds the allowed file size."""
    def __init__(self, max_size: int, actual_size: int):
        super().__init__(
            f"File size is {actual_size} bytes, which exceeds the max allowed {max_size} bytes."
        )
        self.max_size = max_size
        self.actual_size = actual_size

class FileOpenError(FileParserError):
    """Raised when a file cannot be opened or read."""
    def __init__(self, file_path: str, original_error: str):
        super().__init__(
            f"Failed to open or read file: {file_path}. Original error: {original_error}"
        )
        self.file_path = file_path
        self.original_error = original_error

class FileEmptyError(FileParserError):
    """Raised when a file contains no parsable text."""
    def __init__(self, file_path: str, message: str | None = None):
        self.file_path = file_path
        if message is None:
            message = f"File `{file_path}` contains no parsable text."
        super().__init__(message)

# ------------------------ Core Configuration Errors ------------------------

class ResumeRagConfigError(ValueError):
    """
    Base exception for invalid settings passed to the chunking, tokenizing or
    search routines. These indicate programmer error, not bad document content.

    Attributes:
        parameter (str | None): Name of the offending parameter.
        value (object): The value that was rejected.
    """
    def __init__(
        self,
        message: str,
        parameter: str | None = None,
        value: object = None,
    ):
        self.parameter = parameter
        self.value = value
        self.message = message
        super().__init__(self.full_message)

    @property
    def full_message(self) -> str:
        if self.parameter:
            return f"{self.message} ({self.parameter}={self.value!r})"
        return self.message

class TokenizerConfigError(ResumeRagConfigError):
    """Raised when a Tokenizer is configured with an invalid minimum token length."""
    pass

class ChunkingConfigError(ResumeRagConfigError):
    """Raised when chunk_text() receives invalid size/overlap/mode settings."""
    pass

class SearchConfigError(ResumeRagConfigError):
    """Raised when a similarity search is requested with an invalid `k`."""
    pass

# ------------------------ Analysis Errors ------------------------

class AnalysisError(Exception):
    """
    Raised when a ResumeAnalyzer fails to produce one of its analyses.

    Attributes:
        analysis_name (str | None): The analysis that failed (e.g. "summary").
        message (str): Human-readable description of the error.
        context_chunks (list[str] | None): Retrieved chunks that were sent
            with the prompt, useful for debugging failures.
    """

    def __init__(
        self,
        analysis_name: str | None = None,
        message: str = "Failed to run analysis",
        context_chunks: list[str] | None = None,
    ):
        self.analysis_name = analysis_name
        self.message = message
        self.context_chunks = context_chunks
        super().__init__(self.full_message)

    @property
    def full_message(self) -> str:
        """Construct the complete error message including optional chunks."""
        base_message = (
            f"{self.message}: {self.analysis_name}" if self.analysis_name else self.message
        )
        if self.context_chunks:
            chunks_display = "\n".join(
                f"- {chunk}" for chunk in self.context_chunks
            )
            base_message += f"\n\nContext Chunks:\n{chunks_display}"
        return base_message

# ------------------------ ResumeAnalysisFramework Errors ------------------------
class ResumeAnalysisFrameworkConfigError(Exception):
    """
    Raised when the ResumeAnalysisFramework configuration is invalid.
    """
    def __init__(self, message: str):
        super().__init__(f"ResumeAnalysisFrameworkConfigError: {message}")


# ------------------------ LLM Querying Errors ------------------------
class LLMConfigError(Exception):
    """Raised when a required configuration (in .env by default) for LLMClient to function
    is missing or invalid."""

    def __init__(
        self,
        variable_name: str,
        message: str = None,
        extra_info: str = None
    ):
        """
        Args:
            variable_name: Name of the config variable.
            message: Optional custom message for the error.
            extra_info: Additional information to append to the error message.
        """
        if message is None:
            message = f"Missing or invalid configuration: {variable_name}. Please set it in your .env file."
        if extra_info:
            message += f" | {extra_info}"
        super().__init__(message)
        self.variable_name = variable_name
        self.extra_info = extra_info

    def __str__(self):
        return f"[CONFIG ERROR] {super().__str__()} | Variable: {self.variable_name}"

class LLMError(Exception):
    """Base exception for all LLM-related errors."""
    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        original_exception: Optional[Exception] = None
    ):
        self.provider = provider
        self.model = model
        self.original_exception = original_exception

        base_msg = message
        if provider:
            base_msg += f" | Provider: {provider}"
        if model:
            base_msg += f" | Model: {model}"
        if original_exception:
            base_msg += f" | Original Exception: {original_exception}"

        super().__init__(base_msg)


class LLMInitializationError(LLMError):
    """Raised when the LLM client fails to initialize."""
    def __init__(
        self,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        original_exception: Optional[Exception] = None,
        additional_message: Optional[str] = None
    ):
        message = "Failed to initialize LLM client"
        if additional_message:
            message += f": {additional_message}"
        super().__init__(
            message=message,
            provider=provider,
            model=model,
            original_exception=original_exception,
        )


class LLMQueryError(LLMError):
    """Raised when a query to the LLM fails."""
    def __init__(
        self,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        additional_message: Optional[str] = None,
        original_exception: Exception = None,
    ):
        message = "LLM query failed"
        if additional_message:
            message += f": {additional_message}"

        super().__init__(
            message=message,
            provider=provider,
            model=model,
            original_exception=original_exception,
        )


class LLMEmptyResponse(LLMError):
    """Raised when the LLM returns an empty response."""
    def __init__(
        self,
        provider: Optional[str] = None,
        model: Optional[str] = None
    ):
        super().__init__(
            message="LLM returned an empty response",
            provider=provider,
            model=model,
        )
