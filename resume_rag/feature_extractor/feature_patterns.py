"""feature_patterns.py
Central table of the keyword patterns used to pull features out of a resume.

Each category maps to a list of case-insensitive regex patterns. Patterns are
applied in list order; add a pattern here to extend a category.
"""
from typing import Dict, List, Tuple

FEATURE_PATTERNS: Dict[str, List[str]] = {
    "skills": [
        # Languages, frameworks, platforms
        r"\b(?:JavaScript|TypeScript|Python|Java|React|Angular|Vue\.?js|Node\.?js|SQL|"
        r"PostgreSQL|MySQL|MongoDB|Redis|HTML|CSS|Git|Docker|Kubernetes|Jenkins|AWS|Azure|"
        r"GCP|Machine Learning|AI|Data Science|Analytics)\b",
        # General competencies
        r"\b(?:Programming|Development|Engineering|Analysis|Management|Leadership|Communication)\b",
    ],
    "experience": [
        r"\b\d+\+?\s*(?:years?|yrs?)\s*(?:of\s*)?(?:experience|exp)\b",
        r"\b(?:Senior|Junior|Lead|Principal|Manager|Director|Analyst|Engineer|Developer)\b",
    ],
    "education": [
        r"\b(?:Bachelor|Master|PhD|Degree|University|College|Graduate|MBA|BS|MS|BSc|MSc)\b",
    ],
    "certifications": [
        r"\b(?:Certified|Certification|Certificate|AWS|Microsoft|Google|Oracle|Cisco)\b",
    ],
}

# Years of experience -> seniority label. Checked in order; first match wins.
EXPERIENCE_YEARS_REGEX = r"(\d+)\+?\s*years?\s*(?:of\s*)?experience"
EXPERIENCE_LEVELS: List[Tuple[int, str]] = [
    (2, "Entry Level"),
    (5, "Mid Level"),
    (10, "Senior Level"),
]
TOP_EXPERIENCE_LEVEL = "Executive Level"
DEFAULT_EXPERIENCE_LEVEL = "Entry Level"
