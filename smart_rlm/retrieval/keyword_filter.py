"""
Cheap keyword pre-filter for chunks.

A chunk is kept when it contains at least one keyword as a case-insensitive
substring. Order is preserved and no chunk is ever modified, so the filter
is idempotent. This runs before any model call and is what keeps the leaf
fan-out small.
"""

from typing import Iterable, List, Sequence, Union

from smart_rlm.utils.logger import get_logger

logger = get_logger("KeywordFilter")


def _normalize_keywords(keywords: Union[str, Iterable[str], None]) -> List[str]:
    if keywords is None:
        return []
    if isinstance(keywords, str):
        keywords = [keywords]
    return [str(k).lower() for k in keywords if str(k).strip()]


def keyword_filter(
    chunks: Sequence[str],
    keywords: Union[str, Iterable[str], None],
) -> List[str]:
    """
    Keep chunks matching ANY of the keywords (case-insensitive).

    Args:
        chunks: Chunks in document order
        keywords: Match terms; a bare string counts as one keyword and
            blank terms are ignored

    Returns:
        List[str]: Matching chunks in their original order. An empty
        keyword set matches nothing.
    """
    terms = _normalize_keywords(keywords)
    logger.info(f"Filtering {len(chunks)} chunks for keywords: {terms}")

    selected = [
        chunk for chunk in chunks
        if any(term in chunk.lower() for term in terms)
    ]

    logger.info(f"Reduced to {len(selected)} relevant chunks.")
    return selected
