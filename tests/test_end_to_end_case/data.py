from smart_rlm.config.constants import NOT_FOUND_ANSWER
from smart_rlm.evaluation.eval_case import EvalCase
from smart_rlm.evaluation.eval_cases import INVOICES_CONTEXT, NO_FINANCIAL_DATA_CONTEXT

FILLER = "Lorem ipsum dolor sit amet, consectetur adipiscing elit. "
NEEDLE = "Invoice #1002 total $750."
NEEDLE_OFFSET = 30000


def _haystack() -> str:
    text = FILLER * (60000 // len(FILLER))
    return text[:NEEDLE_OFFSET] + NEEDLE + text[NEEDLE_OFFSET:]


HAYSTACK_CONTEXT = _haystack()

STRATEGY_KEYWORDS = ["invoice", "total", "amount"]

TEST_CASES = [
    EvalCase(
        query="What is the total for invoice 1002?",
        expected_answer="$750",
        context=INVOICES_CONTEXT,
        category="needle",
    ),
    EvalCase(
        query="What is the total for invoice 1001?",
        expected_answer="$500",
        context=INVOICES_CONTEXT,
        category="needle",
    ),
    EvalCase(
        query="What is the total for invoice 1002?",
        expected_answer="$750",
        context=HAYSTACK_CONTEXT,
        category="needle",
        description="Single record buried in a document spanning several chunks",
    ),
    EvalCase(
        query="total amount due",
        expected_answer=NOT_FOUND_ANSWER,
        context=NO_FINANCIAL_DATA_CONTEXT,
        category="not_found",
    ),
]
