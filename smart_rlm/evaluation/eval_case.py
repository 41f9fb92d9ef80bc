"""
EvalCase dataclass for evaluation.

Defines the structure of an evaluation case.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class EvalCase:
    """
    Represents a single evaluation case.

    Attributes:
        query: The user query to run
        expected_answer: Text the produced answer must contain (case-insensitive)
        context: Document text for this case; the suite's default context when None
        category: Optional category label (e.g. "needle", "not_found")
        description: Optional description of what this case validates
    """
    query: str
    expected_answer: str
    context: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self):
        """Validate case data."""
        if not self.query or not self.query.strip():
            raise ValueError("EvalCase query cannot be empty")
        if not self.expected_answer or not self.expected_answer.strip():
            raise ValueError("EvalCase expected_answer cannot be empty")
