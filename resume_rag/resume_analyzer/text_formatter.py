"""text_formatter.py
Cleans up LLM output before it is stored on a ResumeAnalysis.
"""
import re
from typing import List, Optional

# Lines of a job title response that introduce a group rather than name a title
JOB_TITLE_GROUP_HEADER_REGEX = re.compile(r"^(CURRENT|GROWTH|DIFFERENT|EMERGING)", re.IGNORECASE)
LIST_ITEM_REGEX = re.compile(r"^(?:[-•*]|\d+[.)])\s+")
META_INSTRUCTION_REGEX = re.compile(
    r"^(Write only the professional summary|The summary should).*$",
    re.IGNORECASE | re.MULTILINE,
)


def format_analysis_text(text: Optional[str]) -> str:
    """
    Normalize markdown-ish LLM text for display.

    Drops heading markers, collapses long runs of spaces, limits blank lines to
    one, and rewrites bullets as ``•`` and numbered items as ``N.``.
    """
    if not text:
        return ""

    formatted = re.sub(r"^#{1,6}\s+", "", text, flags=re.MULTILINE)
    formatted = re.sub(r"[ \t]{3,}", " ", formatted)
    formatted = re.sub(r"\n{3,}", "\n\n", formatted)
    formatted = re.sub(r"^[ \t]*[-•*][ \t]+", "• ", formatted, flags=re.MULTILINE)
    formatted = re.sub(r"^[ \t]*(\d+)[.)][ \t]+", r"\1. ", formatted, flags=re.MULTILINE)
    formatted = re.sub(r"^[ \t]+|[ \t]+$", "", formatted, flags=re.MULTILINE)
    return formatted.strip()


def format_job_titles(job_titles: Optional[str]) -> List[str]:
    """
    Turn a job title response into a list of titles, one per non-empty line,
    without list markers or group headers.
    """
    if not job_titles:
        return []

    titles = []
    for line in job_titles.splitlines():
        trimmed = line.strip()
        if not trimmed or JOB_TITLE_GROUP_HEADER_REGEX.match(trimmed):
            continue
        cleaned = re.sub(r"^[0-9]+\.\s*", "", trimmed)
        cleaned = re.sub(r"^[-•*]\s*", "", cleaned)
        cleaned = re.sub(r"^[:\-]\s*", "", cleaned)
        cleaned = cleaned.replace("**", "").strip()
        # Placeholder echoes of the prompt template
        if cleaned and "List" not in cleaned and "positions]" not in cleaned:
            titles.append(cleaned)
    return titles


def format_professional_summary(summary: Optional[str]) -> str:
    """Strip wrapping quotes, markdown and echoed prompt instructions."""
    if not summary:
        return ""

    formatted = re.sub(r"^[\"']|[\"']$", "", summary.strip())
    formatted = format_analysis_text(formatted)
    formatted = META_INSTRUCTION_REGEX.sub("", formatted)
    return formatted.strip()
