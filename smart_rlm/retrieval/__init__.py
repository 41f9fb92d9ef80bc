"""
Retrieval module.

Narrows a chunk list before any model sees it.
"""

from smart_rlm.retrieval.keyword_filter import keyword_filter

__all__ = ["keyword_filter"]
