"""server.py
Server to launch a FastAPI / Swagger UI instance.
"""
import os
import uuid
from typing import List, Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from pydantic import BaseModel, Field

from resume_rag.config import ANALYZER_DEFAULTS
from resume_rag.exceptions import (
    FileEmptyError,
    FileNotSupportedError,
    FileOpenError,
    FileParserError,
    FileTooLargeError,
    ResumeRagConfigError,
)
from resume_rag.logging import LoggerFactory
from resume_rag.models import ResumeAnalysis, ResumeFeatures, ResumeRating, SearchResult
from resume_rag.rating.rating_parser import parse_rating
from resume_rag.resume_analysis_framework import ResumeAnalysisFramework

app = FastAPI(title="Resume RAG Analyzer API", version="1.0")
logger = LoggerFactory().get_logger(name="api_server")

TEMP_FILE_DIR = "temp_files"

# Status code per file problem; anything else is a 500
FILE_ERROR_STATUS_CODES = {
    FileNotSupportedError: 415,
    FileTooLargeError: 413,
    FileEmptyError: 422,
    FileOpenError: 422,
}


class SearchInputs(BaseModel):
    text: str = Field(..., description="Full document text to index.")
    query: str = Field(..., description="Free-text search query.")
    k: int = Field(ANALYZER_DEFAULTS.TOP_K, description="Maximum number of results.")


class ParseRatingInputs(BaseModel):
    response_text: str = Field("", description="Raw rating response produced by the LLM.")


# Initiate ResumeAnalysisFramework for use when server calls
resume_analysis_framework = ResumeAnalysisFramework()


async def _save_upload(file: UploadFile) -> str:
    """Validate the upload size and write it to a unique temp path."""
    contents = await file.read()
    max_bytes = ANALYZER_DEFAULTS.MAX_FILE_SIZE_MB * 1024 * 1024
    if len(contents) > max_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Max allowed size is {ANALYZER_DEFAULTS.MAX_FILE_SIZE_MB} MB.",
        )

    os.makedirs(TEMP_FILE_DIR, exist_ok=True)
    file_name = os.path.basename(file.filename or "upload")
    temp_path = os.path.join(TEMP_FILE_DIR, f"{uuid.uuid4().hex}_{file_name}")
    with open(temp_path, "wb") as f:
        f.write(contents)
    return temp_path


def _remove_temp_file(temp_path: str) -> None:
    try:
        os.remove(temp_path)
    except FileNotFoundError:
        pass


def _file_error_to_http(e: FileParserError) -> HTTPException:
    status_code = next(
        (code for error_type, code in FILE_ERROR_STATUS_CODES.items() if isinstance(e, error_type)),
        400,
    )
    return HTTPException(status_code=status_code, detail=str(e))


@app.post(
    "/analyze_resume",
    response_model=ResumeAnalysis,
    summary="Analyze a resume file with retrieval-augmented LLM prompts",
    description=(
        "Uploads a resume (PDF or DOCX), indexes its chunks, and returns the summary, "
        "strengths, weaknesses, job titles, professional summary, rating and features. "
        "Pass `job_title` to also compare the resume against that role."
    ),
)
async def analyze_resume(
    file: UploadFile = File(...),
    job_title: Optional[str] = Form(None),
) -> ResumeAnalysis:
    temp_path = await _save_upload(file)
    try:
        return resume_analysis_framework.analyze_resume(file_path=temp_path, job_title=job_title)
    except FileParserError as e:
        raise _file_error_to_http(e)
    except Exception as e:
        logger.exception("analyze_resume failed")
        raise HTTPException(status_code=500, detail=str(e))
    finally:
        _remove_temp_file(temp_path)


@app.post(
    "/extract_features",
    response_model=ResumeFeatures,
    summary="Extract keyword features from a resume file",
    description="Uploads a resume (PDF or DOCX) and returns pattern-matched skills, "
                "experience, education, certifications and top keywords. No LLM is used.",
)
async def extract_features(file: UploadFile = File(...)) -> ResumeFeatures:
    temp_path = await _save_upload(file)
    try:
        return resume_analysis_framework.extract_features(file_path=temp_path)
    except FileParserError as e:
        raise _file_error_to_http(e)
    finally:
        _remove_temp_file(temp_path)


@app.post(
    "/search",
    response_model=List[SearchResult],
    summary="Rank the chunks of a text against a query",
    description="Chunks and indexes `text`, then returns up to `k` chunks ranked by "
                "TF-IDF cosine similarity to `query`.",
)
async def search(inputs: SearchInputs) -> List[SearchResult]:
    try:
        return resume_analysis_framework.search_text(inputs.text, inputs.query, k=inputs.k)
    except ResumeRagConfigError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.post(
    "/parse_rating",
    response_model=ResumeRating,
    summary="Parse a free-text resume rating",
    description="Turns a rating response into sub-scores, total, grade and improvements.",
)
async def parse_rating_endpoint(inputs: ParseRatingInputs) -> ResumeRating:
    return parse_rating(inputs.response_text)
