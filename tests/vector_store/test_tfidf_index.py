"""test_tfidf_index.py
Run tests on building the TF-IDF vector space.
"""
import math

import numpy as np
import pytest

from resume_rag.models import DocumentChunk
from resume_rag.exceptions import TokenizerConfigError
from resume_rag.vector_store.tfidf_index import TfidfIndex, build_index
from resume_rag.test_helpers.sample_resumes import RANKING_CHUNKS


class TestBuildIndex:
    def test_vocabulary_in_first_seen_order(self):
        index = build_index(RANKING_CHUNKS)
        assert list(index.vocabulary) == [
            "python", "developer", "with", "aws", "experience",
            "java", "backend", "engineer",
            "frontend", "react", "specialist",
        ]

    def test_vector_matrix_shape(self):
        index = build_index(RANKING_CHUNKS)
        assert isinstance(index, TfidfIndex)
        assert index.vectors.shape == (3, 11)
        assert len(index) == index.size == 3

    def test_accepts_document_chunks(self):
        chunks = [DocumentChunk(1, "Python developer"), DocumentChunk(2, "Java engineer")]
        index = build_index(chunks)
        assert index.chunks == ("Python developer", "Java engineer")

    def test_default_metadata_is_position(self):
        index = build_index(RANKING_CHUNKS)
        assert index.metadata == ({"id": 0}, {"id": 1}, {"id": 2})

    def test_partial_metadata_is_filled(self):
        index = build_index(RANKING_CHUNKS, metadata=[{"id": "a"}, None])
        assert index.metadata == ({"id": "a"}, {"id": 1}, {"id": 2})

    def test_too_much_metadata_raises(self):
        with pytest.raises(ValueError):
            build_index(["one chunk"], metadata=[{}, {}])

    def test_string_instead_of_sequence_raises(self):
        with pytest.raises(TypeError):
            build_index("Python developer")

    def test_non_text_chunk_raises(self):
        with pytest.raises(TypeError):
            build_index(["Python developer", 42])

    def test_invalid_token_length_raises(self):
        with pytest.raises(TokenizerConfigError):
            build_index(RANKING_CHUNKS, min_token_length=-1)

    def test_empty_index(self):
        index = build_index([])
        assert index.is_empty
        assert index.size == 0
        assert index.vectorize("anything").shape == (0,)


class TestWeighting:
    def test_idf_values(self):
        index = build_index(RANKING_CHUNKS)
        assert index.idf("aws") == pytest.approx(math.log(3 / 2))
        # Unknown terms are treated as appearing in no chunk
        assert index.idf("kubernetes") == pytest.approx(math.log(3 / 1))

    def test_single_chunk_idf_is_negative(self):
        """Terms of a one-chunk index get ln(1/2); the negative weight is kept."""
        index = build_index(["Python developer"])
        assert index.idf("python") == pytest.approx(math.log(1 / 2))
        assert np.all(index.vectors < 0)

    def test_tf_idf_weight(self):
        index = build_index(["python python java", "ruby rust", "golang"])
        python_col = index.vocabulary["python"]
        java_col = index.vocabulary["java"]
        assert index.vectors[0][python_col] == pytest.approx((2 / 3) * math.log(3 / 2))
        assert index.vectors[0][java_col] == pytest.approx((1 / 3) * math.log(3 / 2))
        assert index.vectors[1][python_col] == 0.0

    def test_vectorize_ignores_unknown_terms(self):
        index = build_index(RANKING_CHUNKS)
        vector = index.vectorize("Kubernetes Terraform")
        assert vector.shape == (11,)
        assert not vector.any()

    def test_vectorize_does_not_grow_vocabulary(self):
        index = build_index(RANKING_CHUNKS)
        index.vectorize("entirely new words appear here")
        assert len(index.vocabulary) == 11


class TestImmutability:
    def test_vectors_are_read_only(self):
        index = build_index(RANKING_CHUNKS)
        with pytest.raises(ValueError):
            index.vectors[0][0] = 1.0

    def test_vocabulary_is_read_only(self):
        index = build_index(RANKING_CHUNKS)
        with pytest.raises(TypeError):
            index.vocabulary["new"] = 99

    def test_rebuilding_returns_a_new_index(self):
        first = build_index(RANKING_CHUNKS)
        second = build_index(["Go developer"])
        assert first is not second
        assert first.size == 3
        assert "aws" in first.vocabulary
        assert "aws" not in second.vocabulary
