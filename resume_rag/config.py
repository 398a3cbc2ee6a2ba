"""config.py
Holds various defaults for different resume analyzer settings.
"""

from dataclasses import dataclass, field

# --------------------------------------------------------------
# SETUP DEFAULT VALUES
# --------------------------------------------------------------
@dataclass
class AnalyzerDefaults:
    """
    Default settings for parameters used across the resume_rag repo.
    """
    # ---- Chunking settings ----
    CHUNK_SIZE: int = field(
        default = 700,
        metadata = {
            "description": "Target size of each chunk in characters"
    })
    CHUNK_OVERLAP: int = field(
        default = 200,
        metadata = {
            "description": "Characters carried over from the end of the previous chunk"
    })
    MIN_CHUNK_LENGTH: int = field(
        default = 50,
        metadata = {
            "description": "Chunks shorter than this (after trimming) are discarded"
    })

    # ---- Tokenizer / vector space settings ----
    MIN_TOKEN_LENGTH: int = field(
        default = 2,
        metadata = {
            "description": "Tokens must be longer than this to be indexed"
    })
    TOP_K: int = field(
        default = 3,
        metadata = {
            "description": "Number of chunks retrieved per analysis question"
    })
    KEYWORD_LIMIT: int = field(
        default = 20,
        metadata = {
            "description": "Number of generic high-frequency keywords to return"
    })

    # ---- FileParser settings ----
    MAX_FILE_SIZE_MB: float = field(
        default = 10.0,
        metadata = {
            "description": "Maximum allowed file size in MB"
    })

    # ---- ResumeAnalyzer settings ----
    MAX_THREADS: int = field(
        default = 3,
        metadata = {
            "description": "Maximum number of analyses to run at the same time"
    })

    # ---- LLMClient settings ----
    LLM_PROVIDER: str = field(
        default = "anthropic",
        metadata = {
            "description": 'LLM provider: "anthropic"'
    })
    ANTHROPIC_MODEL_ID: str = field(
        default = "claude-haiku-4-5",
        metadata = {
            "description": "Anthropic model ID"
    })
    LLM_TEMPERATURE: float = field(
        default = 0.3,
        metadata = {
            "description": "Sampling temperature used for analysis queries"
    })


# Import this where needed
ANALYZER_DEFAULTS = AnalyzerDefaults()
