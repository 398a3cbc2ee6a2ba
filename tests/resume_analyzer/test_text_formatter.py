"""test_text_formatter.py
Test cleanup of LLM output.
"""
from resume_rag.resume_analyzer.text_formatter import (
    format_analysis_text,
    format_job_titles,
    format_professional_summary,
)


class TestFormatAnalysisText:
    def test_removes_heading_markers(self):
        assert format_analysis_text("## Strengths\nGood") == "Strengths\nGood"

    def test_bullets_and_numbers(self):
        text = "- first\n* second\n  • third\n1) fourth\n2.   fifth"
        assert format_analysis_text(text) == "• first\n• second\n• third\n1. fourth\n2. fifth"

    def test_collapses_whitespace(self):
        assert format_analysis_text("a     b\n\n\n\n\nc") == "a b\n\nc"

    def test_trims_lines(self):
        assert format_analysis_text("  hello  \n  world  ") == "hello\nworld"

    def test_empty(self):
        assert format_analysis_text("") == ""
        assert format_analysis_text(None) == ""


class TestFormatJobTitles:
    def test_numbered_list(self):
        assert format_job_titles("1. Data Engineer\n2. **ML Engineer**") == ["Data Engineer", "ML Engineer"]

    def test_skips_group_headers_and_placeholders(self):
        text = (
            "CURRENT LEVEL POSITIONS:\n"
            "- Backend Developer\n"
            "GROWTH OPPORTUNITIES:\n"
            "• Engineering Manager\n"
            "[List 2-3 positions]\n"
        )
        assert format_job_titles(text) == ["Backend Developer", "Engineering Manager"]

    def test_empty(self):
        assert format_job_titles("") == []
        assert format_job_titles(None) == []


class TestFormatProfessionalSummary:
    def test_strips_quotes(self):
        assert format_professional_summary('"Seasoned engineer."') == "Seasoned engineer."

    def test_removes_echoed_instructions(self):
        text = "Seasoned engineer with 10 years of experience.\nWrite only the professional summary, no commentary."
        assert format_professional_summary(text) == "Seasoned engineer with 10 years of experience."

    def test_empty(self):
        assert format_professional_summary(None) == ""
