"""models.py
Holds standardized data models used across various functions.
"""
from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field


@dataclass
class DocumentChunk:
    """
    Represents a single chunk of text cut from a resume's full text.
    Typically stored in a list to preserve the order of chunks.

    Attributes:
        chunk_index (int): Index of the chunk within the resume,
            counting sequentially. Starts at 1.
        text (str): Text content of the chunk.
        start_offset (Optional[int]): Character offset of `text` inside the
            source text, when the chunker can provide it.
    """
    chunk_index: int
    text: str
    start_offset: Optional[int] = None

    @property
    def length(self) -> int:
        return len(self.text)


@dataclass(frozen=True)
class Document:
    """
    Raw text of one uploaded resume. Created once per upload and never modified.

    Attributes:
        text (str): Full extracted text (may be empty).
        source_type (str): Extension of the originating file (".pdf", ".docx").
        file_name (Optional[str]): Name of the uploaded file.
    """
    text: str
    source_type: str
    file_name: Optional[str] = None


@dataclass
class SearchResult:
    """
    A chunk returned by a similarity search.

    Attributes:
        content (str): Text of the matching chunk.
        score (float): Cosine similarity between the query and the chunk.
        chunk_index (int): Position of the chunk in the index (0-based).
        metadata (Dict[str, Any]): Metadata attached when the index was built.
    """
    content: str
    score: float
    chunk_index: int
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ResumeFeatures:
    """
    Keyword signals pulled from a resume by pattern matching.
    """
    skills: List[str] = field(default_factory=list)
    experience: List[str] = field(default_factory=list)
    education: List[str] = field(default_factory=list)
    certifications: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)


@dataclass
class ResumeRating:
    """
    Structured result of parsing a free-text resume evaluation.

    Attributes:
        sub_scores (Dict[str, int]): Score per rating criterion, keyed by criterion key.
        total (int): Total score (parsed, or the sum of `sub_scores`).
        grade (str): Grade band derived from `total`.
        improvements (List[str]): Improvement recommendations.
        raw (str): The original response text.
        max_total (int): Highest possible total.
    """
    sub_scores: Dict[str, int] = field(default_factory=dict)
    total: int = 0
    grade: str = ""
    improvements: List[str] = field(default_factory=list)
    raw: str = ""
    max_total: int = 10


@dataclass
class ResumeAnalysis:
    """
    Stores every analysis produced for a resume. Fields are left at their
    defaults when the matching analysis fails.
    """
    summary: Optional[str] = None
    strengths: Optional[str] = None
    weaknesses: Optional[str] = None
    job_titles: List[str] = field(default_factory=list)
    professional_summary: Optional[str] = None
    rating: Optional[ResumeRating] = None
    features: Optional[ResumeFeatures] = None
    job_comparison: Optional[str] = None
    analyzed_at: Optional[str] = None
