"""rating_parser.py
Turns a free-text resume evaluation (as returned by the LLM for the rating
prompt) back into a structured ResumeRating.
"""
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from resume_rag.models import ResumeRating


@dataclass(frozen=True)
class RatingCriterion:
    """One scored line of the rating format, e.g. ``Content Quality: 2/2``."""
    key: str
    label: str
    max_score: int


RATING_CRITERIA: Tuple[RatingCriterion, ...] = (
    RatingCriterion("content_quality", "Content Quality", 2),
    RatingCriterion("skills_presentation", "Skills Presentation", 2),
    RatingCriterion("experience_description", "Experience Description", 2),
    RatingCriterion("achievement_highlights", "Achievement Highlights", 2),
    RatingCriterion("education_certifications", "Education & Certifications", 2),
)
MAX_TOTAL_SCORE = sum(c.max_score for c in RATING_CRITERIA)

# Descending (minimum total, grade) bands; anything below the last is LOWEST_GRADE
GRADE_BANDS: List[Tuple[int, str]] = [
    (9, "Excellent (Job-Ready)"),
    (7, "Good (Minor Improvements Needed)"),
    (5, "Average (Needs Improvement)"),
    (3, "Below Average (Significant Revision Needed)"),
]
LOWEST_GRADE = "Poor (Major Revision Required)"

# Optional list / markdown decoration (bullets, numbering, emphasis) in front of a label
_LINE_PREFIX = r"^[ \t>*#\-•]*(?:\d+[.)][ \t]*)?\**[ \t]*"

TOTAL_SCORE_REGEX = re.compile(
    _LINE_PREFIX + r"(?:TOTAL|OVERALL)\s+SCORE\**\s*:\s*\**\s*(\d+)\s*/\s*\d+",
    re.IGNORECASE | re.MULTILINE,
)
# The phrase has to open the line; an optional colon may be followed by the first item
IMPROVEMENTS_HEADER_REGEX = re.compile(
    _LINE_PREFIX
    + r"improvement[ \t]+recommendations?\b[ \t*]*(?:\([^)\n]*\)[ \t*]*)?(?::[ \t*]*(?P<inline>.*?))?[ \t*]*$",
    re.IGNORECASE | re.MULTILINE,
)
# Lines that start a new section and therefore end the improvements list.
# An all-caps label only counts as a header when nothing follows its colon.
SECTION_HEADER_REGEX = re.compile(
    r"^\s*(?:#{1,6}\s+\S.*|\**[A-Z][A-Z0-9 &/'\-]+:\**\s*$|\**(?:TOTAL|OVERALL)\s+SCORE\b.*)$"
)
LIST_MARKER_REGEX = re.compile(r"^\s*(?:[-*•●▪◦]+|\d+[.)]|[a-zA-Z][.)](?=\s))\s*")


def _criterion_regex(criterion: RatingCriterion) -> re.Pattern:
    return re.compile(
        _LINE_PREFIX
        + re.escape(criterion.label)
        + r"\**\s*:\s*\**\s*(\d+)\s*/\s*"
        + str(criterion.max_score)
        + r"\b",
        re.IGNORECASE | re.MULTILINE,
    )


CRITERION_REGEXES = {c.key: _criterion_regex(c) for c in RATING_CRITERIA}


def grade_for_total(total: int) -> str:
    """
    Map a total score to its grade band. Higher totals never map to a lower band.
    """
    for minimum, grade in GRADE_BANDS:
        if total >= minimum:
            return grade
    return LOWEST_GRADE


def parse_rating(response_text: Optional[str]) -> ResumeRating:
    """
    Parse a rating response into a `ResumeRating`.

    Expected (loosely) formatted input::

        Content Quality: 2/2 - Relevant and detailed
        Skills Presentation: 1/2 - ...
        ...
        TOTAL SCORE: 8/10

        IMPROVEMENT RECOMMENDATIONS:
        1. Quantify achievements
        - Add a certifications section

    Missing sub-scores default to 0, a missing total is the sum of the
    sub-scores and a missing recommendations section gives an empty list.
    Scores are clamped to their criterion's scale. Never raises on malformed
    text; `raw` always holds the input.

    Args:
        response_text (str | None): Raw response text.

    Returns:
        ResumeRating: Parsed rating.
    """
    raw = response_text or ""

    sub_scores = {}
    for criterion in RATING_CRITERIA:
        match = CRITERION_REGEXES[criterion.key].search(raw)
        score = int(match.group(1)) if match else 0
        sub_scores[criterion.key] = _clamp(score, criterion.max_score)

    total_match = TOTAL_SCORE_REGEX.search(raw)
    if total_match:
        total = _clamp(int(total_match.group(1)), MAX_TOTAL_SCORE)
    else:
        total = sum(sub_scores.values())

    return ResumeRating(
        sub_scores=sub_scores,
        total=total,
        grade=grade_for_total(total),
        improvements=parse_improvements(raw),
        raw=raw,
        max_total=MAX_TOTAL_SCORE,
    )


def parse_improvements(text: str) -> List[str]:
    """
    Collect the lines of the "improvement recommendations" section, with
    bullet and number markers removed. Text following the header on the same
    line (after a colon) counts as the first item.
    """
    header = IMPROVEMENTS_HEADER_REGEX.search(text or "")
    if not header:
        return []

    lines = []
    inline = header.group("inline")
    if inline and inline.strip():
        lines.append(inline)

    for line in text[header.end():].splitlines():
        if not line.strip():
            continue
        if (
            SECTION_HEADER_REGEX.match(line)
            or TOTAL_SCORE_REGEX.match(line)
            or _is_criterion_line(line)
        ):
            break
        lines.append(line)

    improvements = []
    for line in lines:
        item = LIST_MARKER_REGEX.sub("", line).replace("**", "").strip()
        if item:
            improvements.append(item)
    return improvements


def _is_criterion_line(line: str) -> bool:
    return any(regex.match(line) for regex in CRITERION_REGEXES.values())


def _clamp(value: int, maximum: int) -> int:
    return max(0, min(value, maximum))
