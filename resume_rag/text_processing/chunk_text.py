"""chunk_text.py
Used to chunk a continuous output of text into a list of overlapping DocumentChunks.
"""

import re
from typing import List, Literal, Optional, Tuple

from resume_rag.config import ANALYZER_DEFAULTS
from resume_rag.exceptions import ChunkingConfigError
from resume_rag.models import DocumentChunk

ChunkingMode = Literal["window", "sentence"]
CHUNKING_MODES = ("window", "sentence")

SENTENCE_TERMINATORS = (".", "!", "?")
SENTENCE_SPLIT_REGEX = re.compile(r"[.!?]+")

# A preferred break point must lie past this fraction of the window
BREAK_POINT_RATIO = 0.5
# Sentence mode carries over roughly one word per this many overlap characters
CHARS_PER_OVERLAP_WORD = 10


def chunk_text(
    text: Optional[str],
    chunk_size: int = ANALYZER_DEFAULTS.CHUNK_SIZE,
    chunk_overlap: int = ANALYZER_DEFAULTS.CHUNK_OVERLAP,
    min_chunk_length: int = ANALYZER_DEFAULTS.MIN_CHUNK_LENGTH,
    mode: ChunkingMode = "window",
) -> List[DocumentChunk]:
    """
    Split the input text into overlapping `DocumentChunk` objects.

    Two strategies are available:

    - ``"window"`` (default): slide a window of `chunk_size` characters over the
      text. Each window is shortened to end after the last sentence terminator,
      or failing that at the last whitespace, provided the break point lies in
      the second half of the window. The next window starts `chunk_overlap`
      characters before the previous one ended. Text no longer than
      `chunk_size` is returned as a single chunk. Chunks never exceed
      `chunk_size` characters.
    - ``"sentence"``: split on sentence terminators and greedily pack whole
      sentences into chunks. When a chunk is flushed, the next one starts with
      its last ``chunk_overlap // 10`` words.

    Chunks shorter than `min_chunk_length` after trimming are discarded and
    the survivors are numbered sequentially from 1.

    Args:
        text (str | None): The text to split into chunks.
        chunk_size (int): Target maximum size of each chunk in characters.
        chunk_overlap (int): Overlap budget carried into the following chunk.
        min_chunk_length (int): Minimum trimmed length of a kept chunk.
        mode (Literal["window", "sentence"]): Chunking strategy.

    Returns:
        List[DocumentChunk]: Sequential chunks. Empty when `text` is empty or
            every candidate chunk is below `min_chunk_length`.

    Raises:
        ChunkingConfigError: If any size setting or the mode is invalid.
    """
    validate_chunking_settings(chunk_size, chunk_overlap, min_chunk_length, mode)

    if not text or not text.strip():
        return []

    if mode == "window":
        spans = _chunk_by_window(text, chunk_size, chunk_overlap)
    else:
        spans = [(None, chunk) for chunk in _chunk_by_sentence(text, chunk_size, chunk_overlap)]

    chunks = []
    for start_offset, chunk_str in spans:
        if len(chunk_str) < min_chunk_length or not chunk_str:
            continue
        chunks.append(
            DocumentChunk(
                chunk_index=len(chunks) + 1,
                text=chunk_str,
                start_offset=start_offset,
            )
        )
    return chunks


def validate_chunking_settings(
    chunk_size: int,
    chunk_overlap: int,
    min_chunk_length: int,
    mode: str,
) -> None:
    """
    Raises:
        ChunkingConfigError: On non-positive `chunk_size`, an overlap outside
            ``[0, chunk_size)``, a negative `min_chunk_length` or an unknown mode.
    """
    if not isinstance(chunk_size, int) or chunk_size <= 0:
        raise ChunkingConfigError(
            message="chunk_size must be a positive integer",
            parameter="chunk_size",
            value=chunk_size,
        )
    if not isinstance(chunk_overlap, int) or chunk_overlap < 0:
        raise ChunkingConfigError(
            message="chunk_overlap must be a non-negative integer",
            parameter="chunk_overlap",
            value=chunk_overlap,
        )
    if chunk_overlap >= chunk_size:
        raise ChunkingConfigError(
            message=f"chunk_overlap must be smaller than chunk_size ({chunk_size})",
            parameter="chunk_overlap",
            value=chunk_overlap,
        )
    if not isinstance(min_chunk_length, int) or min_chunk_length < 0:
        raise ChunkingConfigError(
            message="min_chunk_length must be a non-negative integer",
            parameter="min_chunk_length",
            value=min_chunk_length,
        )
    if mode not in CHUNKING_MODES:
        raise ChunkingConfigError(
            message=f"mode must be one of {list(CHUNKING_MODES)}",
            parameter="mode",
            value=mode,
        )


# ----------------------
# WINDOW MODE
# ----------------------
def _chunk_by_window(
    text: str,
    chunk_size: int,
    chunk_overlap: int,
) -> List[Tuple[int, str]]:
    """Return `(start_offset, trimmed_text)` pairs for each window."""
    text_length = len(text)
    if text_length <= chunk_size:
        return [_trim_span(text, 0, text_length)]

    spans = []
    start = 0
    while start < text_length:
        end = min(start + chunk_size, text_length)

        # Not the last window: try to end on a sentence or word boundary
        if end < text_length:
            end = _find_break_point(text, start, end, chunk_size)

        spans.append(_trim_span(text, start, end))

        if end >= text_length:
            break

        # Step back by the overlap, but always move forward
        start = max(start + 1, end - chunk_overlap)

    return spans


def _find_break_point(text: str, start: int, end: int, chunk_size: int) -> int:
    """
    Pick the end of the window `text[start:end]`.

    Prefers the position just after the last sentence terminator, then the
    last whitespace character, as long as either lies past the halfway mark.
    Otherwise the raw window boundary is kept.
    """
    halfway_mark = start + chunk_size * BREAK_POINT_RATIO

    last_terminator = max(text.rfind(t, start, end) for t in SENTENCE_TERMINATORS)
    if last_terminator > halfway_mark:
        return last_terminator + 1

    for i in range(end - 1, start, -1):
        if i <= halfway_mark:
            break
        if text[i].isspace():
            return i

    return end


def _trim_span(text: str, start: int, end: int) -> Tuple[int, str]:
    """Strip `text[start:end]` and shift `start` past any leading whitespace."""
    raw = text[start:end]
    leading = len(raw) - len(raw.lstrip())
    return start + leading, raw.strip()


# ----------------------
# SENTENCE MODE
# ----------------------
def _chunk_by_sentence(
    text: str,
    chunk_size: int,
    chunk_overlap: int,
) -> List[str]:
    """Greedily pack sentences into chunks with a word-based overlap."""
    sentences = [s.strip() for s in SENTENCE_SPLIT_REGEX.split(text) if s.strip()]
    overlap_words = chunk_overlap // CHARS_PER_OVERLAP_WORD

    chunks = []
    current_chunk = ""
    for sentence in sentences:
        if current_chunk and len(current_chunk) + len(sentence) > chunk_size:
            chunks.append(current_chunk.strip())
            carried = current_chunk.split()[-overlap_words:] if overlap_words else []
            current_chunk = " ".join(carried + [sentence])
        else:
            current_chunk += (". " if current_chunk else "") + sentence

    if current_chunk.strip():
        chunks.append(current_chunk.strip())

    return chunks


def join_document_chunk_text(
    chunks: List[DocumentChunk],
    separator: str = "\n\n",
    char_limit: Optional[int] = None,
) -> str:
    """
    Join the text of `DocumentChunk` objects in `chunk_index` order.

    Used to assemble retrieved chunks into prompt context. Overlapping text is
    kept as-is since retrieved chunks are rarely adjacent.

    Args:
        chunks (List[DocumentChunk]): Chunks to join.
        separator (str): Inserted between chunk texts. Defaults to a blank line.
        char_limit (int | None): Maximum number of characters to include in
            the final text. If None, all text is included.

    Returns:
        str: Combined text.
    """
    chunks_sorted = sorted(chunks, key=lambda c: c.chunk_index)
    combined_text = separator.join(chunk.text for chunk in chunks_sorted)

    if char_limit is not None:
        combined_text = combined_text[:char_limit]

    return combined_text
