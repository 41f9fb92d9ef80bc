"""
Fixed-size character chunking with overlap.

Windows start every ``size - overlap`` characters, so adjacent chunks share
exactly ``overlap`` characters. Chunking stops at the first window that
reaches the end of the text, which means the last chunk may be shorter
than ``size`` but always ends where the text ends.
"""

from typing import List, Tuple

from smart_rlm.utils.exceptions import ChunkingError


def _validate(size: int, overlap: int) -> int:
    """Return the window step, refusing parameters that would never advance."""
    if overlap < 0:
        raise ChunkingError(f"overlap must be >= 0, got {overlap}")
    if size <= overlap:
        raise ChunkingError(
            f"size must be greater than overlap (size={size}, overlap={overlap})"
        )
    return size - overlap


def chunk_spans(length: int, size: int, overlap: int) -> List[Tuple[int, int]]:
    """
    Compute chunk windows as ``(start, end)`` character offsets.

    Args:
        length: Length of the text to cover
        size: Maximum characters per chunk
        overlap: Characters shared by adjacent chunks

    Returns:
        List[Tuple[int, int]]: Half-open windows covering ``[0, length)``

    Raises:
        ChunkingError: If ``size <= overlap`` or ``overlap < 0``
    """
    step = _validate(size, overlap)
    spans: List[Tuple[int, int]] = []
    start = 0
    while start < length:
        end = min(start + size, length)
        spans.append((start, end))
        if end == length:
            break
        start += step
    return spans


def chunk_text(text: str, size: int = 10000, overlap: int = 500) -> List[str]:
    """
    Split text into overlapping fixed-size chunks.

    A new list is built on every call; the input is never modified.

    Args:
        text: Text to chunk
        size: Maximum characters per chunk
        overlap: Characters shared by adjacent chunks

    Returns:
        List[str]: Chunks in document order (empty for empty text)

    Raises:
        ChunkingError: If ``size <= overlap`` or ``overlap < 0``
    """
    return [text[start:end] for start, end in chunk_spans(len(text), size, overlap)]
