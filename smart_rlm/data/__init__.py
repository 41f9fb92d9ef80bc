"""
Data loading and chunking module.

This module handles:
- Document loading (text and PDF)
- Fixed-size character chunking with overlap
"""

from smart_rlm.data.document_loader import DocumentLoader
from smart_rlm.data.chunker import chunk_spans, chunk_text

__all__ = ["DocumentLoader", "chunk_spans", "chunk_text"]
