"""test_feature_extractor.py
Run tests on keyword feature extraction.
"""
import pytest

from resume_rag.models import ResumeFeatures
from resume_rag.feature_extractor.feature_extractor import (
    extract_experience_level,
    extract_features,
    match_patterns,
    top_keywords,
)
from resume_rag.test_helpers.sample_resumes import SAMPLE_RESUME_TEXT


class TestExtractFeatures:
    @pytest.fixture(scope="class")
    def features(self):
        return extract_features(SAMPLE_RESUME_TEXT)

    def test_returns_resume_features(self, features):
        assert isinstance(features, ResumeFeatures)

    def test_skills(self, features):
        for skill in ["Python", "JavaScript", "AWS", "Docker", "Kubernetes",
                      "MySQL", "PostgreSQL", "React", "Jenkins"]:
            assert skill in features.skills, f"Missing skill: {skill}"

    def test_javascript_is_not_split(self, features):
        assert "Java" not in features.skills

    def test_matches_are_deduplicated(self, features):
        lowered = [s.lower() for s in features.skills]
        assert lowered.count("python") == 1
        assert len(lowered) == len(set(lowered))

    def test_experience(self, features):
        assert "7 years of experience" in features.experience
        assert "Senior" in features.experience

    def test_education(self, features):
        assert "Bachelor" in features.education
        assert "University" in features.education

    def test_certifications(self, features):
        assert "Certified" in features.certifications
        assert "AWS" in features.certifications

    def test_keywords_respect_limit(self, features):
        assert 0 < len(features.keywords) <= 20
        assert len(extract_features(SAMPLE_RESUME_TEXT, keyword_limit=5).keywords) == 5

    @pytest.mark.parametrize("text", ["", None])
    def test_empty_text(self, text):
        assert extract_features(text) == ResumeFeatures()

    def test_custom_pattern_table(self):
        features = extract_features(
            "Fluent in Rust and Go",
            patterns={"skills": [r"\bRust\b"], "education": []},
        )
        assert features.skills == ["Rust"]
        assert features.education == []
        assert features.experience == []


class TestMatchPatterns:
    def test_keeps_first_casing(self):
        assert match_patterns("aws, then AWS again", [r"\bAWS\b"]) == ["aws"]

    def test_pattern_order(self):
        text = "Docker and Python"
        assert match_patterns(text, [r"\bPython\b", r"\bDocker\b"]) == ["Python", "Docker"]

    def test_no_partial_word_matches(self):
        assert match_patterns("MySQL only", [r"\bSQL\b"]) == []


class TestTopKeywords:
    def test_ties_keep_first_occurrence(self):
        assert top_keywords("beta alpha beta alpha gamma", limit=2) == ["beta", "alpha"]

    def test_most_frequent_first(self):
        assert top_keywords("gamma beta beta alpha alpha alpha", limit=3) == ["alpha", "beta", "gamma"]

    def test_short_tokens_ignored(self):
        assert top_keywords("an an an SQL", limit=5) == ["sql"]

    def test_zero_limit(self):
        assert top_keywords("python python", limit=0) == []


class TestExperienceLevel:
    @pytest.mark.parametrize("text,expected", [
        ("1 year of experience", "Entry Level"),
        ("3 years experience in QA", "Mid Level"),
        ("Engineer with 7 years of experience", "Senior Level"),
        ("12+ years of experience leading teams", "Executive Level"),
        ("No stated tenure", "Entry Level"),
        (None, "Entry Level"),
    ])
    def test_levels(self, text, expected):
        assert extract_experience_level(text) == expected
