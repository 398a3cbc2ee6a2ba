"""tokenizer.py
Normalizes raw text into index-eligible terms.
"""
import re
from typing import Iterator, Optional

from resume_rag.config import ANALYZER_DEFAULTS
from resume_rag.exceptions import TokenizerConfigError

# Anything that is not a letter, digit or whitespace (underscore counts as punctuation)
NON_WORD_REGEX = re.compile(r"[^\w\s]|_")
TOKEN_REGEX = re.compile(r"\S+")


def normalize_text(text: Optional[str]) -> str:
    """Lowercase `text` and replace every non-alphanumeric character with a space."""
    if not text:
        return ""
    return NON_WORD_REGEX.sub(" ", text.lower())


def tokenize(
    text: Optional[str],
    min_token_length: int = ANALYZER_DEFAULTS.MIN_TOKEN_LENGTH,
) -> Iterator[str]:
    """
    Lazily yield the normalized terms of `text`.

    Text is lowercased, punctuation is replaced with whitespace and the result
    is split on whitespace runs. Only tokens longer than `min_token_length`
    are yielded. No stemming or stop-word removal is applied.

    Calling `tokenize` again on the same text restarts the sequence.

    Args:
        text (str | None): Raw text to split.
        min_token_length (int): Tokens of this length or shorter are dropped.
            Defaults to 2 (keeps tokens of 3+ characters).

    Yields:
        str: Normalized tokens in document order.

    Raises:
        TokenizerConfigError: If `min_token_length` is negative.
    """
    _validate_min_token_length(min_token_length)
    return _iter_tokens(normalize_text(text), min_token_length)


def _iter_tokens(normalized: str, min_token_length: int) -> Iterator[str]:
    for match in TOKEN_REGEX.finditer(normalized):
        token = match.group(0)
        if len(token) > min_token_length:
            yield token


def _validate_min_token_length(min_token_length: int) -> None:
    if not isinstance(min_token_length, int) or min_token_length < 0:
        raise TokenizerConfigError(
            message="min_token_length must be a non-negative integer",
            parameter="min_token_length",
            value=min_token_length,
        )


class Tokenizer:
    """
    Callable holder for a tokenizer configuration.

    Example:
        >>> tokenizer = Tokenizer(min_token_length=2)
        >>> list(tokenizer("Senior Python/AWS developer, 5 yrs."))
        ['senior', 'python', 'aws', 'developer', 'yrs']
    """

    def __init__(self, min_token_length: int = ANALYZER_DEFAULTS.MIN_TOKEN_LENGTH):
        _validate_min_token_length(min_token_length)
        self.min_token_length = min_token_length

    def tokenize(self, text: Optional[str]) -> Iterator[str]:
        return _iter_tokens(normalize_text(text), self.min_token_length)

    def __call__(self, text: Optional[str]) -> Iterator[str]:
        return self.tokenize(text)
