"""
Constants and enumerations for the smart RLM engine.

This module defines all application-wide constants including:
- Agent types
- Run states of a single query
- Sentinel answers shared by the prompts, the sandbox and the tests
- Evaluation metrics
"""

from enum import Enum


# ============================================================================
# AGENT TYPES
# ============================================================================

class AgentType(Enum):
    """Enumeration for the two agent tiers."""
    ROOT = "root"    # High-capability strategy planner
    LEAF = "leaf"    # Low-cost per-chunk extractor


# ============================================================================
# RUN STATES
# ============================================================================

class RunState(Enum):
    """Linear lifecycle of one query. There is no transition back."""
    IDLE = "idle"
    PLANNING = "planning"
    PLANNED = "planned"
    EXECUTING = "executing"
    COMPLETED = "completed"
    FAILED = "failed"


# ============================================================================
# SENTINEL ANSWERS
# ============================================================================

# Reported by a strategy program when no leaf verdict was positive
NOT_FOUND_ANSWER = "Information not found in context."

# Returned by the leaf agent in place of an error
LEAF_FAILURE_ANSWER = "Error processing chunk"

# Shown by the CLI when the strategy never called report()
NO_ANSWER_PRODUCED = "No answer produced."


# ============================================================================
# SANDBOX
# ============================================================================

STRATEGY_FILENAME = "<strategy>"

# Characters of program text / answers echoed in single-line log records
LOG_PREVIEW_CHARS = 200


# ============================================================================
# EVALUATION METRICS
# ============================================================================

class EvaluationMetric(Enum):
    """Enumeration for evaluation metrics."""
    ANSWER_CONTAINS = "answer_contains"    # Expected answer appears in produced answer
