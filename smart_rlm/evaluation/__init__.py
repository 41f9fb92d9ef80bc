"""
Evaluation system for the smart RLM engine.

This package provides:
- EvalCase dataclass for defining evaluation cases
- EvalSuite for running cases through the engine and scoring the answers
- get_eval_cases() with the built-in cases
"""

from smart_rlm.evaluation.eval_case import EvalCase
from smart_rlm.evaluation.eval_suite import EvalResult, EvalSuite
from smart_rlm.evaluation.eval_cases import get_eval_cases

__all__ = ["EvalCase", "EvalResult", "EvalSuite", "get_eval_cases"]
