"""feature_extractor.py
Pattern-based scan of resume text for skills, experience, education and
certification keywords, plus the most frequent generic terms.
"""
import re
from collections import Counter
from typing import Dict, List, Optional

from resume_rag.config import ANALYZER_DEFAULTS
from resume_rag.models import ResumeFeatures
from resume_rag.text_processing.tokenizer import tokenize
from resume_rag.feature_extractor.feature_patterns import (
    FEATURE_PATTERNS,
    EXPERIENCE_YEARS_REGEX,
    EXPERIENCE_LEVELS,
    TOP_EXPERIENCE_LEVEL,
    DEFAULT_EXPERIENCE_LEVEL,
)


def extract_features(
    text: Optional[str],
    keyword_limit: int = ANALYZER_DEFAULTS.KEYWORD_LIMIT,
    patterns: Optional[Dict[str, List[str]]] = None,
) -> ResumeFeatures:
    """
    Extract categorized keyword lists from resume text.

    Every category in `patterns` is matched case-insensitively. Matches keep
    the casing used in the resume and are de-duplicated ignoring case (first
    occurrence wins). Generic keywords are the `keyword_limit` most frequent
    tokens of 3+ characters, ties broken by first occurrence.

    This is a plain keyword scan; it does not use the vector space.

    Args:
        text (str | None): Full resume text.
        keyword_limit (int): Number of generic keywords to return.
        patterns (Dict[str, List[str]] | None): Category table to use instead
            of `FEATURE_PATTERNS` (mainly for testing).

    Returns:
        ResumeFeatures: Lists for skills, experience, education,
            certifications and keywords. All empty for empty text.
    """
    text = text or ""
    patterns = FEATURE_PATTERNS if patterns is None else patterns

    features = ResumeFeatures()
    for category, category_patterns in patterns.items():
        setattr(features, category, match_patterns(text, category_patterns))

    features.keywords = top_keywords(text, limit=keyword_limit)
    return features


def match_patterns(text: str, patterns: List[str]) -> List[str]:
    """
    Return all matches of `patterns` in `text`, pattern by pattern, without
    case-insensitive duplicates.
    """
    seen = set()
    matches = []
    for pattern in patterns:
        for match in re.finditer(pattern, text, flags=re.IGNORECASE):
            value = match.group(0).strip()
            if value and value.lower() not in seen:
                seen.add(value.lower())
                matches.append(value)
    return matches


def top_keywords(text: str, limit: int = ANALYZER_DEFAULTS.KEYWORD_LIMIT) -> List[str]:
    """Most frequent tokens of `text`; ties keep first-occurrence order."""
    if limit <= 0:
        return []
    # Counter keeps insertion order and most_common() sorts stably
    counts = Counter(tokenize(text))
    return [term for term, _ in counts.most_common(limit)]


def extract_experience_level(text: Optional[str]) -> str:
    """
    Map the first "N years (of) experience" phrase in `text` to a seniority label.

    Returns `DEFAULT_EXPERIENCE_LEVEL` when no such phrase exists.
    """
    match = re.search(EXPERIENCE_YEARS_REGEX, text or "", flags=re.IGNORECASE)
    if not match:
        return DEFAULT_EXPERIENCE_LEVEL

    years = int(match.group(1))
    for upper_bound, label in EXPERIENCE_LEVELS:
        if years < upper_bound:
            return label
    return TOP_EXPERIENCE_LEVEL
