"""tfidf_index.py
Builds an immutable TF-IDF vector space over a set of document chunks.
"""
import math
from collections import Counter
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from resume_rag.config import ANALYZER_DEFAULTS
from resume_rag.models import DocumentChunk
from resume_rag.text_processing.tokenizer import Tokenizer

ChunkInput = Union[str, DocumentChunk]


class TfidfIndex:
    """
    TF-IDF vector space built from one set of chunks.

    An index is never modified after `build_index()` returns it. Indexing a
    new set of chunks means building a new index, which also discards the
    IDF cache of the old one.

    Weighting:
        - tf(term, chunk) = occurrences of term / total tokens in chunk
        - idf(term)       = ln(total_chunks / (chunks_containing_term + 1))

    IDF may be negative (e.g. any term of a single-chunk index); such weights
    are kept unchanged.

    Attributes:
        chunks (Tuple[str, ...]): Indexed chunk texts in index order.
        vocabulary (Mapping[str, int]): Term -> vector position, in first-seen order.
        vectors (np.ndarray): Read-only matrix of shape (len(chunks), len(vocabulary)).
        metadata (Tuple[Dict[str, Any], ...]): Per-chunk metadata.
    """

    def __init__(
        self,
        chunks: Sequence[str],
        metadata: Sequence[Dict[str, Any]],
        tokenizer: Tokenizer,
    ):
        self._tokenizer = tokenizer
        self._chunks: Tuple[str, ...] = tuple(chunks)
        self._metadata: Tuple[Dict[str, Any], ...] = tuple(dict(m) for m in metadata)
        self._idf_cache: Dict[str, float] = {}

        # Count tokens once per chunk; reused for vocabulary, df and tf
        self._term_counts: List[Counter] = [
            Counter(self._tokenizer(chunk)) for chunk in self._chunks
        ]

        vocabulary: Dict[str, int] = {}
        document_frequency: Counter = Counter()
        for counts in self._term_counts:
            for term in counts:
                if term not in vocabulary:
                    vocabulary[term] = len(vocabulary)
            document_frequency.update(counts.keys())

        self._vocabulary = MappingProxyType(vocabulary)
        self._document_frequency = MappingProxyType(dict(document_frequency))

        self._vectors = np.zeros((len(self._chunks), len(vocabulary)), dtype=float)
        for row, counts in enumerate(self._term_counts):
            self._vectors[row] = self._weigh(counts)
        self._vectors.setflags(write=False)

    # ----------------------
    # READ-ONLY VIEWS
    # ----------------------
    @property
    def chunks(self) -> Tuple[str, ...]:
        return self._chunks

    @property
    def metadata(self) -> Tuple[Dict[str, Any], ...]:
        return self._metadata

    @property
    def vocabulary(self) -> Mapping[str, int]:
        return self._vocabulary

    @property
    def vectors(self) -> np.ndarray:
        return self._vectors

    @property
    def size(self) -> int:
        return len(self._chunks)

    @property
    def is_empty(self) -> bool:
        return not self._chunks

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"TfidfIndex(chunks={self.size}, vocabulary={len(self._vocabulary)})"

    # ----------------------
    # WEIGHTING
    # ----------------------
    def idf(self, term: str) -> float:
        """
        Inverse document frequency of `term`, computed on first request and
        cached for the lifetime of this index.
        """
        if term not in self._idf_cache:
            containing = self._document_frequency.get(term, 0)
            total = self.size
            # An empty index has no terms to weigh
            self._idf_cache[term] = math.log(total / (containing + 1)) if total else 0.0
        return self._idf_cache[term]

    def vectorize(self, text: Optional[str]) -> np.ndarray:
        """
        Project `text` into this index's vocabulary.

        Terms never seen at build time contribute nothing; the vocabulary is
        not extended for queries.

        Args:
            text (str | None): Any text, typically a search query.

        Returns:
            np.ndarray: Vector of length ``len(vocabulary)``.
        """
        return self._weigh(Counter(self._tokenizer(text)))

    def _weigh(self, counts: Counter) -> np.ndarray:
        vector = np.zeros(len(self._vocabulary), dtype=float)
        total_tokens = sum(counts.values())
        if not total_tokens:
            return vector

        for term, count in counts.items():
            position = self._vocabulary.get(term)
            if position is None:
                continue
            vector[position] = (count / total_tokens) * self.idf(term)
        return vector


def build_index(
    chunks: Sequence[ChunkInput],
    metadata: Optional[Sequence[Optional[Dict[str, Any]]]] = None,
    min_token_length: int = ANALYZER_DEFAULTS.MIN_TOKEN_LENGTH,
) -> TfidfIndex:
    """
    Build a fresh `TfidfIndex` from `chunks`.

    Args:
        chunks (Sequence[str | DocumentChunk]): Chunks to index. May be empty.
        metadata (Sequence[dict | None] | None): Optional metadata per chunk.
            Missing entries default to ``{"id": position}``.
        min_token_length (int): Forwarded to the `Tokenizer`.

    Returns:
        TfidfIndex: A new, immutable index.

    Raises:
        TypeError: If a chunk is neither a string nor a DocumentChunk.
        ValueError: If more metadata entries than chunks are given.
        TokenizerConfigError: If `min_token_length` is invalid.
    """
    chunk_texts = _chunk_texts(chunks)

    metadata = list(metadata or [])
    if len(metadata) > len(chunk_texts):
        raise ValueError(
            f"Received {len(metadata)} metadata entries for {len(chunk_texts)} chunks."
        )
    resolved_metadata = [
        (metadata[i] if i < len(metadata) and metadata[i] is not None else {"id": i})
        for i in range(len(chunk_texts))
    ]

    return TfidfIndex(
        chunks=chunk_texts,
        metadata=resolved_metadata,
        tokenizer=Tokenizer(min_token_length=min_token_length),
    )


def _chunk_texts(chunks: Sequence[ChunkInput]) -> List[str]:
    if chunks is None:
        return []
    if isinstance(chunks, str):
        raise TypeError("chunks must be a sequence of strings or DocumentChunk objects, not a str.")

    texts = []
    for idx, chunk in enumerate(chunks):
        if isinstance(chunk, DocumentChunk):
            texts.append(chunk.text)
        elif isinstance(chunk, str):
            texts.append(chunk)
        else:
            raise TypeError(
                f"chunks[{idx}] must be a str or DocumentChunk (got {type(chunk).__name__})."
            )
    return texts
