"""
Built-in evaluation cases.

Each case carries its own small document so the suite can run without a
document on disk:
- Precise factual lookup (needle)
- Question with no supporting data (must not hallucinate)
"""

from typing import List

from smart_rlm.config.constants import NOT_FOUND_ANSWER
from smart_rlm.evaluation.eval_case import EvalCase

INVOICES_CONTEXT = "Invoice #1001 total $500. Invoice #1002 total $750."

NO_FINANCIAL_DATA_CONTEXT = (
    "The museum opens at nine in the morning. Guided tours start every hour "
    "from the main hall. Photography is allowed without flash. The cafe on "
    "the second floor serves tea and pastries."
)

EVALUATION_CASES = [
    EvalCase(
        query="What is the total for invoice 1002?",
        expected_answer="$750",
        context=INVOICES_CONTEXT,
        category="needle",
        description="Pick the right figure among near-identical records",
    ),
    EvalCase(
        query="total amount due",
        expected_answer=NOT_FOUND_ANSWER,
        context=NO_FINANCIAL_DATA_CONTEXT,
        category="not_found",
        description="No financial data: report the not-found sentinel, no invented figure",
    ),
]


def get_eval_cases() -> List[EvalCase]:
    """Return a fresh list of the built-in evaluation cases."""
    return list(EVALUATION_CASES)
