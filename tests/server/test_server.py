"""test_server.py
Test the FastAPI endpoints with canned LLM responses.
"""
import pytest
from fastapi.testclient import TestClient

import api.server as server
from resume_rag.config import ANALYZER_DEFAULTS
from resume_rag.test_helpers.file_parsing import write_docx, write_pdf, write_resume_pdf
from resume_rag.test_helpers.sample_resumes import SAMPLE_RESUME_TEXT

client = TestClient(server.app)


@pytest.fixture(autouse=True)
def temp_upload_dir(tmp_path, monkeypatch):
    upload_dir = tmp_path / "uploads"
    monkeypatch.setattr(server, "TEMP_FILE_DIR", str(upload_dir))
    return upload_dir


@pytest.fixture
def resume_pdf_bytes(tmp_path):
    return write_resume_pdf(tmp_path / "resume.pdf").read_bytes()


@pytest.mark.usefixtures("FORCE_MOCK_LLM_RESPONSES")
class TestAnalyzeResumeEndpoint:
    def test_analyze_pdf(self, resume_pdf_bytes, temp_upload_dir):
        response = client.post(
            "/analyze_resume",
            files={"file": ("resume.pdf", resume_pdf_bytes, "application/pdf")},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["rating"]["total"] == 8
        assert body["rating"]["grade"] == "Good (Minor Improvements Needed)"
        assert body["job_titles"][0] == "Senior Software Engineer"
        assert "Python" in body["features"]["skills"]
        assert body["job_comparison"] is None
        assert body["analyzed_at"]
        # Uploads are removed once the request finishes
        assert list(temp_upload_dir.iterdir()) == []

    def test_analyze_with_job_title(self, resume_pdf_bytes):
        response = client.post(
            "/analyze_resume",
            files={"file": ("resume.pdf", resume_pdf_bytes, "application/pdf")},
            data={"job_title": "Backend Engineer"},
        )
        assert response.status_code == 200
        assert response.json()["job_comparison"].startswith("Match: 7/10")

    def test_unsupported_file_type(self):
        response = client.post(
            "/analyze_resume",
            files={"file": ("resume.txt", SAMPLE_RESUME_TEXT.encode(), "text/plain")},
        )
        assert response.status_code == 415

    def test_empty_pdf(self, tmp_path):
        empty_pdf = write_pdf(tmp_path / "empty.pdf", []).read_bytes()
        response = client.post(
            "/analyze_resume",
            files={"file": ("empty.pdf", empty_pdf, "application/pdf")},
        )
        assert response.status_code == 422

    def test_corrupted_pdf(self):
        response = client.post(
            "/analyze_resume",
            files={"file": ("broken.pdf", b"this is not a pdf", "application/pdf")},
        )
        assert response.status_code == 422

    def test_file_too_large(self, resume_pdf_bytes, monkeypatch):
        monkeypatch.setattr(ANALYZER_DEFAULTS, "MAX_FILE_SIZE_MB", 0.0001)
        response = client.post(
            "/analyze_resume",
            files={"file": ("resume.pdf", resume_pdf_bytes, "application/pdf")},
        )
        assert response.status_code == 413


class TestExtractFeaturesEndpoint:
    def test_extract_from_docx(self, tmp_path):
        docx_bytes = write_docx(tmp_path / "resume.docx", SAMPLE_RESUME_TEXT.splitlines()).read_bytes()
        response = client.post(
            "/extract_features",
            files={"file": ("resume.docx", docx_bytes, "application/octet-stream")},
        )
        assert response.status_code == 200
        body = response.json()
        assert "Kubernetes" in body["skills"]
        assert "Bachelor" in body["education"]

    def test_unsupported_file_type(self):
        response = client.post(
            "/extract_features",
            files={"file": ("resume.doc", b"legacy", "application/msword")},
        )
        assert response.status_code == 415


class TestSearchEndpoint:
    def test_search(self):
        response = client.post(
            "/search",
            json={"text": SAMPLE_RESUME_TEXT, "query": "AWS Certified Developer", "k": 2},
        )
        assert response.status_code == 200
        results = response.json()
        assert len(results) == 2
        assert results[0]["score"] >= results[1]["score"]
        assert set(results[0]) == {"content", "score", "chunk_index", "metadata"}

    def test_negative_k(self):
        response = client.post("/search", json={"text": SAMPLE_RESUME_TEXT, "query": "AWS", "k": -1})
        assert response.status_code == 422

    def test_empty_text(self):
        response = client.post("/search", json={"text": "", "query": "AWS"})
        assert response.status_code == 200
        assert response.json() == []


class TestParseRatingEndpoint:
    def test_parse_rating(self):
        response = client.post(
            "/parse_rating",
            json={"response_text": "Content Quality: 2/2 - strong\nTOTAL SCORE: 9/10"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 9
        assert body["grade"] == "Excellent (Job-Ready)"
        assert body["sub_scores"]["content_quality"] == 2

    def test_empty_body(self):
        response = client.post("/parse_rating", json={})
        assert response.status_code == 200
        assert response.json()["total"] == 0
