"""llm_client_test_helpers.py
Canned LLM responses used by LLMClient's test mode and the analyzer tests.
"""

from typing import Literal
import json
import random
import uuid

from langchain_core.messages import AIMessage

MOCK_RATING_RESPONSE = (
    "Content Quality: 2/2 - Relevant roles with concrete detail.\n"
    "Skills Presentation: 2/2 - Skills are grouped and easy to scan.\n"
    "Experience Description: 2/2 - Clear progression across roles.\n"
    "Achievement Highlights: 1/2 - Few quantified results.\n"
    "Education & Certifications: 1/2 - Degree listed, no certifications.\n"
    "TOTAL SCORE: 8/10\n"
    "\n"
    "IMPROVEMENT RECOMMENDATIONS:\n"
    "1. Quantify achievements with metrics such as revenue or time saved.\n"
    "2. Add relevant certifications (e.g. AWS Certified Developer).\n"
    "3. Tailor the summary to the target role.\n"
)

expected_test_responses = {
    "summary": {
        "success": (
            "Experienced software engineer with 6 years of experience building "
            "Python and JavaScript web services, leading small teams and shipping "
            "cloud-native products on AWS."
        ),
        "failed": "No summary could be generated.",
        "unexpected_json": {"resume": "Looks fine."},
        "not_json": "A solid resume.",
    },
    "strengths": {
        "success": (
            "- Strong technical depth in Python, React and AWS\n"
            "- Demonstrated leadership of a 4 person team\n"
            "- Consistent career progression"
        ),
        "failed": "No strengths found.",
        "unexpected_json": {"pros": ["Python"]},
        "not_json": "Good skills.",
    },
    "weaknesses": {
        "success": (
            "- Few quantified achievements\n"
            "- No certifications listed\n"
            "- Summary is generic"
        ),
        "failed": "No weaknesses found.",
        "unexpected_json": {"cons": ["none"]},
        "not_json": "Nothing major.",
    },
    "job_titles": {
        "success": (
            "1. Senior Software Engineer\n"
            "2. Backend Developer\n"
            "3. Full Stack Engineer\n"
            "4. Technical Lead\n"
            "5. Cloud Engineer"
        ),
        "failed": "No job titles found.",
        "unexpected_json": {"titles": "engineer"},
        "not_json": "Engineer.",
    },
    "professional_summary": {
        "success": (
            "**Professional Summary:** Results-driven software engineer with 6 years "
            "of experience designing scalable Python services and leading delivery "
            "teams. Skilled in AWS, React and CI/CD, with a record of improving "
            "system reliability."
        ),
        "failed": "No professional summary could be generated.",
        "unexpected_json": {"summary": "Engineer."},
        "not_json": "Engineer.",
    },
    "rating": {
        "success": MOCK_RATING_RESPONSE,
        "failed": "Unable to rate this resume.",
        "unexpected_json": {"score": 8},
        "not_json": "8 out of 10.",
    },
    "job_comparison": {
        "success": (
            "Match: 7/10. The resume covers the core backend skills for the role. "
            "Missing: Kubernetes, system design examples."
        ),
        "failed": "No comparison could be made.",
        "unexpected_json": {"match": 7},
        "not_json": "Decent match.",
    },
    "personalized_insights": {
        "success": {
            "market_position": "Competitive mid-level backend candidate",
            "career_opportunities": ["Senior Backend Engineer", "Cloud Engineer", "Tech Lead"],
            "skill_gaps": ["Kubernetes", "Terraform"],
            "salary_range": "$105k - $150k",
            "next_steps": ["Earn an AWS certification", "Quantify project impact", "Lead a design review"],
        },
        "failed": {},
        "unexpected_json": {"insights": "None"},
        "not_json": "Learn more cloud.",
    },
    "industry_recommendations": {
        "success": {
            "trending_skills": ["Python", "AWS", "Docker", "Kubernetes", "SQL"],
            "certifications": ["AWS Certified Developer", "CKA"],
            "salary_outlook": "$80k - $200k, growing 5% per year",
            "key_companies": ["Acme Cloud", "Globex"],
            "preparation_tips": ["Practice system design", "Publish side projects"],
        },
        "failed": {},
        "unexpected_json": {"advice": "None"},
        "not_json": "Grow your skills.",
    },
    "job_market_insights": {
        "success": {
            "hot_skills": ["Python", "Cloud computing", "Data analysis", "Machine learning", "DevOps"],
            "growth_sectors": ["AI", "Cybersecurity", "Healthcare technology"],
            "remote_trends": "Hybrid work is the norm",
            "hiring_outlook": "Steady demand for experienced engineers",
            "key_metrics": {
                "avg_time_to_hire": "36 days",
                "interview_callback_rate": "12%",
                "salary_growth": "4%",
            },
        },
        "failed": {},
        "unexpected_json": {"market": "None"},
        "not_json": "The market is fine.",
    },
}

def create_mock_llm_response(
    function_name: str,
    provider: Literal["anthropic"],
    response_type: Literal["success", "failed", "unexpected_json", "not_json"] = "success"
) -> AIMessage:
    """
    Create a simulated AIMessage mimicking a provider response for `function_name`
    (an analysis name such as "summary" or "rating").
    """
    try:
        content_value = expected_test_responses[function_name][response_type]
    except KeyError:
        content_value = "Generic response"

    # Convert dict responses to JSON string; leave strings as-is
    content = json.dumps(content_value) if isinstance(content_value, dict) else content_value

    input_tokens = random.randint(50, 150)
    output_tokens = random.randint(20, 100)
    total_tokens = input_tokens + output_tokens

    if provider == "anthropic":
        response_metadata = {
            "id": str(uuid.uuid4()),
            "model": "claude-haiku-4-5",
            "stop_reason": "end_turn",
            "usage": {
                "input_tokens": input_tokens,
                "output_tokens": output_tokens,
                "total_tokens": total_tokens
            }
        }
    else:
        raise ValueError(f"Unknown llm provider: {provider}")

    return AIMessage(
        content=content,
        additional_kwargs={},
        response_metadata=response_metadata,
        id=str(uuid.uuid4()),
        usage_metadata={
            "input_tokens": input_tokens,
            "output_tokens": output_tokens,
            "total_tokens": total_tokens
        }
    )
