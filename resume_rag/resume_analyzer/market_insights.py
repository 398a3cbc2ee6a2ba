"""market_insights.py
Career and job market insights generated from a small industry knowledge base.

The knowledge base is indexed in its own VectorService; the entries most
similar to a question are retrieved and sent to the LLM, which answers in JSON.
"""
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from resume_rag.config import ANALYZER_DEFAULTS
from resume_rag.logging import LoggerFactory
from resume_rag.models import ResumeAnalysis, SearchResult
from resume_rag.vector_store.similarity_search import VectorService
from resume_rag.feature_extractor.feature_extractor import (
    extract_experience_level,
    match_patterns,
)
from resume_rag.feature_extractor.feature_patterns import FEATURE_PATTERNS
from resume_rag.llm.llm_helpers import initialize_llm_if_needed
from resume_rag.llm.prompts import SYSTEM_PROMPTS

logger_factory = LoggerFactory()

MAX_PROFILE_SKILLS = 10


@dataclass
class KnowledgeEntry:
    """One fact of the industry knowledge base."""
    id: str
    content: str
    category: str
    keywords: List[str] = field(default_factory=list)

    def as_metadata(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "category": self.category,
            "keywords": list(self.keywords),
        }


DEFAULT_KNOWLEDGE_BASE: List[KnowledgeEntry] = [
    KnowledgeEntry(
        id="tech_hiring_trends",
        content=(
            "Technology sector hiring trends show 85% increase in AI/ML positions, 70% demand "
            "for cloud architects, and 65% growth in cybersecurity roles. Remote work adoption "
            "at 78% in tech companies."
        ),
        category="hiring_trends",
        keywords=["technology", "AI", "ML", "cloud", "cybersecurity", "remote work"],
    ),
    KnowledgeEntry(
        id="resume_ats_statistics",
        content=(
            "ATS systems filter out 75% of resumes before human review. Key factors: keyword "
            "optimization (90% weight), proper formatting (85% weight), and relevant experience "
            "matching (95% weight)."
        ),
        category="ats_insights",
        keywords=["ATS", "filtering", "keywords", "formatting", "experience"],
    ),
    KnowledgeEntry(
        id="career_advancement_metrics",
        content=(
            "Professionals with optimized resumes see 40% faster job placement, 25% higher "
            "salary offers, and 60% more interview callbacks. Regular resume updates correlate "
            "with 35% career growth acceleration."
        ),
        category="career_metrics",
        keywords=["career growth", "salary", "interviews", "resume optimization"],
    ),
    KnowledgeEntry(
        id="skill_demand_analysis",
        content=(
            "Most in-demand skills: Python (95% demand), React/JavaScript (90%), AWS/Cloud (88%), "
            "Data Analysis (85%), Machine Learning (82%), DevOps (80%)."
        ),
        category="skills_demand",
        keywords=["Python", "React", "JavaScript", "AWS", "cloud", "data analysis",
                  "machine learning", "DevOps"],
    ),
    KnowledgeEntry(
        id="industry_salary_insights",
        content=(
            "Average salary increases by experience: Entry-level (0-2 years): $55-75k, "
            "Mid-level (3-5 years): $75-105k, Senior (5-10 years): $105-150k, "
            "Lead/Principal (10+ years): $150-250k."
        ),
        category="salary_insights",
        keywords=["salary", "experience", "entry-level", "senior", "lead", "principal"],
    ),
    KnowledgeEntry(
        id="resume_optimization_stats",
        content=(
            "Resume optimization impact: Professional summary increases callbacks by 30%, "
            "quantified achievements boost by 45%, skills section optimization improves ATS "
            "score by 60%."
        ),
        category="optimization_stats",
        keywords=["resume optimization", "professional summary", "achievements",
                  "skills section", "ATS score"],
    ),
]


class MarketInsights:
    """
    Generates personalized career insights, industry recommendations and job
    market insights.

    Every insight method returns the LLM's parsed JSON, or None when the query
    fails or the answer is not valid JSON; failures are logged, never raised.

    Example:
        >>> insights = MarketInsights(force_mock_llm_response=True, llm_dummy_responses={})
        >>> insights.query_knowledge("salary by years of experience", limit=1)[0].metadata["id"]
        'industry_salary_insights'
    """

    def __init__(
        self,
        llm_client: Optional["LLMClient"] = None,
        knowledge_base: Optional[List[KnowledgeEntry]] = None,
        force_mock_llm_response: bool = False,
        llm_dummy_responses: Optional[Dict[str, Any]] = None,
    ):
        """
        Raises:
            ValueError: If mock responses are forced but none are provided.
        """
        if force_mock_llm_response and llm_dummy_responses is None:
            raise ValueError(
                "`llm_dummy_responses` must be provided when `force_mock_llm_response` is True."
            )
        self.force_mock_llm_response = force_mock_llm_response
        self.llm_dummy_responses = llm_dummy_responses or {}
        self.llm_client = initialize_llm_if_needed(
            llm_client=llm_client,
            force_mock_llm_response=force_mock_llm_response,
        )

        self.vector_service = VectorService()
        self.knowledge_base: Dict[str, KnowledgeEntry] = {}
        entries = DEFAULT_KNOWLEDGE_BASE if knowledge_base is None else knowledge_base
        for entry in entries:
            self.knowledge_base[entry.id] = entry
        self._reindex()

    # ----------------------
    # KNOWLEDGE BASE
    # ----------------------
    def _reindex(self) -> None:
        entries = list(self.knowledge_base.values())
        self.vector_service.build_index(
            [entry.content for entry in entries],
            metadata=[entry.as_metadata() for entry in entries],
        )

    def add_knowledge(
        self,
        id: str,
        content: str,
        category: str,
        keywords: Optional[List[str]] = None,
    ) -> KnowledgeEntry:
        """
        Add (or replace, by id) a knowledge entry and rebuild the index.
        """
        entry = KnowledgeEntry(id=id, content=content, category=category, keywords=keywords or [])
        self.knowledge_base[id] = entry
        self._reindex()
        return entry

    def query_knowledge(self, query: str, limit: int = 5) -> List[SearchResult]:
        """Knowledge entries ranked by similarity to `query`."""
        return self.vector_service.search(query, k=limit)

    def _market_data(self, query: str, limit: int) -> str:
        return "\n".join(result.content for result in self.query_knowledge(query, limit))

    # ----------------------
    # INSIGHTS
    # ----------------------
    def get_personalized_insights(self, analysis: ResumeAnalysis) -> Optional[Dict[str, Any]]:
        """
        Career insights for the candidate described by a complete analysis.
        Skills and experience level are read from the analysis summary.
        """
        summary = analysis.summary or ""
        skills = match_patterns(summary, FEATURE_PATTERNS["skills"][:1])[:MAX_PROFILE_SKILLS]
        experience_level = extract_experience_level(summary)
        overall_score = (
            f"{analysis.rating.total}/{analysis.rating.max_total}"
            if analysis.rating else "Not available"
        )

        market_data = self._market_data(
            f"{' '.join(skills)} {experience_level} career advice job market", limit=5
        )
        prompt = f"""Based on the following resume analysis and current market data, provide personalized career insights:

RESUME ANALYSIS:
Skills: {', '.join(skills) or 'Not available'}
Experience Level: {experience_level}
Overall Score: {overall_score}

MARKET DATA:
{market_data}

Provide insights in JSON format with these keys:
{{
  "market_position": "Brief assessment of their market position",
  "career_opportunities": ["3-4 specific opportunities based on their profile"],
  "skill_gaps": ["2-3 skills they should develop"],
  "salary_range": "Expected salary range for their profile",
  "next_steps": ["3 actionable next steps for career growth"]
}}

Return only valid JSON."""
        return self._query_json("personalized_insights", prompt)

    def get_industry_recommendations(self, industry: str, role: str) -> Optional[Dict[str, Any]]:
        """Recommendations for landing `role` in `industry`."""
        market_data = self._market_data(f"{industry} {role} trends skills requirements", limit=3)
        prompt = f"""Based on current market data for the {industry} industry and {role} positions, provide specific recommendations:

MARKET DATA:
{market_data}

Provide recommendations in JSON format:
{{
  "trending_skills": ["5 most important skills for this role"],
  "certifications": ["3-4 valuable certifications"],
  "salary_outlook": "salary range and growth projection",
  "key_companies": ["top companies hiring for this role"],
  "preparation_tips": ["3-4 specific tips for landing this role"]
}}

Return only valid JSON."""
        return self._query_json("industry_recommendations", prompt)

    def get_job_market_insights(self) -> Optional[Dict[str, Any]]:
        """General hiring market overview."""
        market_data = self._market_data("job market trends hiring demand skills technology", limit=4)
        prompt = f"""Based on current job market data, provide comprehensive market insights:

MARKET DATA:
{market_data}

Generate insights in JSON format:
{{
  "hot_skills": ["top 5 in-demand skills"],
  "growth_sectors": ["3-4 fastest growing sectors"],
  "remote_trends": "insights about remote work trends",
  "hiring_outlook": "overall hiring market outlook",
  "key_metrics": {{
    "avg_time_to_hire": "average time in days",
    "interview_callback_rate": "percentage",
    "salary_growth": "percentage increase"
  }}
}}

Return only valid JSON."""
        return self._query_json("job_market_insights", prompt)

    def _query_json(self, insight_name: str, prompt: str) -> Optional[Dict[str, Any]]:
        """Run a JSON-expecting query; None (logged) on any failure."""
        if self.force_mock_llm_response:
            response = self.llm_dummy_responses.get(insight_name)
        else:
            try:
                response = self.llm_client.query(
                    system_prompt=SYSTEM_PROMPTS["market_insights"],
                    user_prompt=prompt,
                    temperature=ANALYZER_DEFAULTS.LLM_TEMPERATURE,
                    expect_json=True,
                    function_name=insight_name,
                )
            except Exception as e:
                self._log_failure(insight_name, f"LLM query failed: {e}")
                return None

        if not isinstance(response, dict):
            self._log_failure(insight_name, f"Expected a JSON object, got {type(response).__name__}.")
            return None
        return response

    def _log_failure(self, insight_name: str, message: str) -> None:
        if not any("pytest" in arg for arg in sys.argv):
            logger_factory.get_analysis_failure_logger(insight_name).warning(message)
