"""prompts.py
Prompt builders for every LLM-backed resume analysis.

Each builder takes the text of the chunks retrieved for that analysis and
returns the user prompt. System prompts are kept separately in SYSTEM_PROMPTS.
"""
from typing import Dict, Sequence

from resume_rag.models import DocumentChunk
from resume_rag.rating.rating_parser import RATING_CRITERIA, MAX_TOTAL_SCORE
from resume_rag.text_processing.chunk_text import join_document_chunk_text

CONTEXT_SEPARATOR = "\n\n"

SYSTEM_PROMPTS: Dict[str, str] = {
    "summary": "You are an expert resume analyst.",
    "strengths": "You are an expert career counselor.",
    "weaknesses": "You are an expert resume reviewer.",
    "job_titles": "You are an expert career advisor.",
    "professional_summary": "You are an expert resume writer.",
    "rating": "You are a strict, consistent resume evaluator.",
    "job_comparison": "You are an experienced technical recruiter.",
    "market_insights": (
        "You are a career market analyst. Always answer with a single valid JSON "
        "object and no additional commentary."
    ),
}


def _resume_content(chunks: Sequence[str]) -> str:
    # Retrieved chunks keep their ranking order
    context = join_document_chunk_text(
        [DocumentChunk(chunk_index=i, text=text) for i, text in enumerate(chunks, start=1)],
        separator=CONTEXT_SEPARATOR,
    )
    return "RESUME CONTENT:\n" + context


def build_summary_prompt(chunks: Sequence[str]) -> str:
    return f"""Please provide a detailed summary of the following resume content and conclude with key insights:

{_resume_content(chunks)}

Please provide a comprehensive summary including:
1. Professional background and experience level
2. Key skills and technical competencies
3. Notable achievements and accomplishments
4. Education and certifications
5. Overall career trajectory and focus areas

Keep the summary professional, detailed, and insightful."""


def build_strengths_prompt(chunks: Sequence[str]) -> str:
    return f"""Please analyze the following resume content and identify key strengths:

{_resume_content(chunks)}

Analyze and explain the candidate's key strengths including:
1. Technical skills and expertise
2. Professional experience highlights
3. Leadership and soft skills
4. Educational qualifications
5. Unique value propositions
6. Industry knowledge and domain expertise

Provide specific examples from the resume to support each strength identified."""


def build_weaknesses_prompt(chunks: Sequence[str]) -> str:
    return f"""Please analyze the following resume content and identify areas for improvement:

{_resume_content(chunks)}

Analyze potential weaknesses and provide constructive improvement suggestions:
1. Missing skills or qualifications for target roles
2. Gaps in experience or career progression
3. Presentation and formatting issues
4. Missing achievements or quantifiable results
5. Areas where additional certifications might help
6. Ways to better highlight existing strengths

Focus on actionable advice to improve the resume's effectiveness."""


def build_job_titles_prompt(chunks: Sequence[str]) -> str:
    return f"""Based on the following resume content, suggest suitable job titles and roles:

{_resume_content(chunks)}

Suggest 8-10 specific job titles that align with this candidate's background, including:
1. Current level positions (matching experience)
2. Growth/advancement opportunities
3. Different industries where skills could transfer
4. Emerging roles in relevant fields

Return a numbered list with one job title per line. Do not add explanations."""


def build_professional_summary_prompt(chunks: Sequence[str]) -> str:
    return f"""Create a compelling 2-3 sentence professional summary for the top of a resume based on this content:

{_resume_content(chunks)}

The summary should:
1. Highlight the most impressive qualifications
2. Mention years of experience and key areas of expertise
3. Include 2-3 most relevant skills or achievements
4. Be written in a professional, confident tone
5. Be concise but impactful (2-3 sentences maximum)

Write only the professional summary, no additional commentary."""


def build_rating_prompt(chunks: Sequence[str]) -> str:
    """
    The requested output format is the one `parse_rating()` reads, so the
    criterion labels and scales come from RATING_CRITERIA.
    """
    criteria_lines = "\n".join(
        f"{c.label}: X/{c.max_score} - Brief explanation" for c in RATING_CRITERIA
    )
    return f"""Rate this resume on each criterion below and provide a total score:

{_resume_content(chunks)}

Score each criterion as a whole number:
- Content Quality: relevance and depth of information
- Skills Presentation: how well technical and soft skills are showcased
- Experience Description: quality of work experience descriptions
- Achievement Highlights: presence of quantifiable accomplishments
- Education & Certifications: academic and professional credentials

Format your response exactly as:
{criteria_lines}
TOTAL SCORE: X/{MAX_TOTAL_SCORE}

IMPROVEMENT RECOMMENDATIONS:
1. First recommendation
2. Second recommendation
3. Third recommendation"""


def build_job_comparison_prompt(chunks: Sequence[str], job_title: str) -> str:
    return f"""Compare this resume against the requirements for a "{job_title}" position:

{_resume_content(chunks)}

Analyze:
1. Skills Match: Which required skills does the candidate have/lack?
2. Experience Relevance: How well does their experience align?
3. Gap Analysis: What skills or experience are missing?
4. Strengths for this Role: What makes them a strong candidate?
5. Improvement Suggestions: How to better position for this role?
6. Match Percentage: Provide an estimated match percentage (0-100%)

Be specific about technical requirements, years of experience, and industry knowledge."""


PROMPT_BUILDERS = {
    "summary": build_summary_prompt,
    "strengths": build_strengths_prompt,
    "weaknesses": build_weaknesses_prompt,
    "job_titles": build_job_titles_prompt,
    "professional_summary": build_professional_summary_prompt,
    "rating": build_rating_prompt,
}
