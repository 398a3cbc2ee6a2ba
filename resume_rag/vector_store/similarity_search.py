"""similarity_search.py
Cosine-similarity search over a TfidfIndex, plus the VectorService that owns
the index for one analysis session.
"""
import threading
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from resume_rag.config import ANALYZER_DEFAULTS
from resume_rag.exceptions import SearchConfigError
from resume_rag.models import SearchResult
from resume_rag.vector_store.tfidf_index import ChunkInput, TfidfIndex, build_index


def cosine_similarity(vec_a: np.ndarray, vec_b: np.ndarray) -> float:
    """
    Cosine similarity of two vectors.

    Returns exactly 0.0 when either vector has zero norm or the vectors differ
    in length. The result is clipped to [-1, 1] so rounding never pushes it
    outside the valid range.
    """
    vec_a = np.asarray(vec_a, dtype=float)
    vec_b = np.asarray(vec_b, dtype=float)
    if vec_a.shape != vec_b.shape:
        return 0.0

    norm_a = float(np.linalg.norm(vec_a))
    norm_b = float(np.linalg.norm(vec_b))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    similarity = float(np.dot(vec_a, vec_b)) / (norm_a * norm_b)
    return float(np.clip(similarity, -1.0, 1.0))


def search(
    index: TfidfIndex,
    query: Optional[str],
    k: int = ANALYZER_DEFAULTS.TOP_K,
) -> List[SearchResult]:
    """
    Return up to `k` chunks of `index` ranked by cosine similarity to `query`.

    Results are sorted by descending score; equal scores keep index order so
    identical input always gives identical output. A `k` larger than the index
    returns every chunk.

    Args:
        index (TfidfIndex): Index to search.
        query (str | None): Free-text query. Empty queries score 0 everywhere.
        k (int): Maximum number of results.

    Returns:
        List[SearchResult]: Ranked results; empty for an empty index or k == 0.

    Raises:
        SearchConfigError: If `k` is negative or not an integer.
    """
    _validate_k(k)
    if index.is_empty or k == 0:
        return []

    query_vector = index.vectorize(query)
    scores = np.array(
        [cosine_similarity(query_vector, chunk_vector) for chunk_vector in index.vectors]
    )

    # Stable sort keeps earlier chunks first among equal scores
    ranked = np.argsort(-scores, kind="stable")[: min(k, index.size)]

    return [
        SearchResult(
            content=index.chunks[position],
            score=float(scores[position]),
            chunk_index=int(position),
            metadata=dict(index.metadata[position]),
        )
        for position in ranked
    ]


def _validate_k(k: int) -> None:
    if isinstance(k, bool) or not isinstance(k, int) or k < 0:
        raise SearchConfigError(
            message="k must be a non-negative integer",
            parameter="k",
            value=k,
        )


class VectorService:
    """
    Holds the TF-IDF index of one document for an analysis session.

    `build_index` builds a complete new index before swapping it in under a
    lock, so only one rebuild publishes at a time and a `search` running in
    another thread always sees either the old index or the new one.

    Example:
        >>> service = VectorService()
        >>> service.build_index(["Python developer with AWS experience", "Java backend engineer"])
        >>> service.search("AWS cloud skills", k=1)[0].chunk_index
        0
    """

    def __init__(self, min_token_length: int = ANALYZER_DEFAULTS.MIN_TOKEN_LENGTH):
        self.min_token_length = min_token_length
        self._write_lock = threading.Lock()
        self._index: TfidfIndex = build_index([], min_token_length=min_token_length)

    @property
    def index(self) -> TfidfIndex:
        """The currently published index."""
        return self._index

    def build_index(
        self,
        chunks: Sequence[ChunkInput],
        metadata: Optional[Sequence[Optional[Dict[str, Any]]]] = None,
    ) -> TfidfIndex:
        """
        Replace the current index with one built from `chunks`.

        The vocabulary and every vector are rebuilt from scratch.

        Returns:
            TfidfIndex: The newly published index.
        """
        new_index = build_index(chunks, metadata=metadata, min_token_length=self.min_token_length)
        with self._write_lock:
            self._index = new_index
        return new_index

    # Older name kept for callers that think in terms of adding documents
    add_documents = build_index

    def search(
        self,
        query: Optional[str],
        k: int = ANALYZER_DEFAULTS.TOP_K,
    ) -> List[SearchResult]:
        """Search the currently published index. See `search()`."""
        return search(self._index, query, k)

    def vectorize(self, text: Optional[str]) -> np.ndarray:
        """Project `text` into the current vocabulary."""
        return self._index.vectorize(text)

    get_text_embedding = vectorize

    def __len__(self) -> int:
        return self._index.size
