"""
EvalSuite implementation for running and scoring evaluation cases.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from smart_rlm.agents.rlm_engine import RLMEngine
from smart_rlm.config.constants import NO_ANSWER_PRODUCED, EvaluationMetric
from smart_rlm.evaluation.eval_case import EvalCase
from smart_rlm.utils.exceptions import EvaluationError
from smart_rlm.utils.logger import get_logger

EngineFactory = Callable[[str], RLMEngine]


@dataclass
class EvalResult:
    """
    Result object for a single evaluation case.

    Attributes:
        query: The query that was evaluated
        expected_answer: The expected answer
        answer: The answer produced by the engine
        category: Category of the case
        description: Description of the case
        answer_contains: 1.0 if the expected answer appears in the answer, else 0.0
        leaf_calls: Leaf queries issued by the strategy
        fallback_triggered: Whether the zero-match fallback fired
        error: Diagnostic when the run failed
    """
    query: str
    expected_answer: str
    answer: str
    category: Optional[str] = None
    description: Optional[str] = None
    answer_contains: float = 0.0
    leaf_calls: int = 0
    fallback_triggered: bool = False
    error: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.answer_contains >= 1.0


def score_answer_contains(answer: str, expected_answer: str) -> float:
    """Case-insensitive containment score (1.0 or 0.0)."""
    return 1.0 if expected_answer.strip().lower() in (answer or "").lower() else 0.0


class EvalSuite:
    """
    Runs evaluation cases through the engine and aggregates the scores.

    A fresh engine is built per case from ``engine_factory`` because the
    engine owns exactly one document context.
    """

    def __init__(
        self,
        engine_factory: Optional[EngineFactory] = None,
        default_context: Optional[str] = None,
    ) -> None:
        """
        Initialize the suite.

        Args:
            engine_factory: Builds an engine for a context (RLMEngine by default)
            default_context: Context for cases that do not carry their own
        """
        self.logger = get_logger("EvalSuite")
        self.engine_factory = engine_factory or (lambda context: RLMEngine(context))
        self.default_context = default_context
        self.cases: List[EvalCase] = []
        self.results: List[EvalResult] = []

    def load_cases(self, cases: List[EvalCase]) -> None:
        if not cases:
            raise EvaluationError("No evaluation cases provided")
        self.cases = list(cases)
        self.logger.info(f"Loaded {len(self.cases)} evaluation cases")

    def evaluate(self, case: EvalCase) -> EvalResult:
        """
        Run a single case and score it.

        Raises:
            EvaluationError: If the case has no context or the run fails fatally
        """
        context = case.context if case.context is not None else self.default_context
        if context is None:
            raise EvaluationError(f"No context available for case '{case.query[:50]}'")

        self.logger.info(f"Evaluating case: {case.query[:60]}...")

        try:
            engine = self.engine_factory(context)
            run = engine.run_sync(case.query)
        except Exception as e:
            raise EvaluationError(f"Failed to evaluate case '{case.query[:50]}...': {e}") from e

        answer = run.answer if run.answer is not None else NO_ANSWER_PRODUCED
        result = EvalResult(
            query=case.query,
            expected_answer=case.expected_answer,
            answer=answer,
            category=case.category,
            description=case.description,
            answer_contains=score_answer_contains(answer, case.expected_answer),
            leaf_calls=run.execution.leaf_calls,
            fallback_triggered=run.execution.fallback_triggered,
            error=run.execution.error,
        )

        self.logger.info(
            f"Evaluation completed. {EvaluationMetric.ANSWER_CONTAINS.value}={result.answer_contains:.1f}"
        )
        return result

    def run_all(self) -> List[EvalResult]:
        """
        Run every loaded case. A failing case is recorded with a zero score.
        """
        if not self.cases:
            raise EvaluationError("No evaluation cases loaded. Call load_cases() first.")

        self.results = []
        for i, case in enumerate(self.cases, start=1):
            self.logger.info(f"Case {i}/{len(self.cases)}")
            try:
                self.results.append(self.evaluate(case))
            except EvaluationError as e:
                self.logger.error(f"Case {i} failed: {e}")
                self.results.append(EvalResult(
                    query=case.query,
                    expected_answer=case.expected_answer,
                    answer="",
                    category=case.category,
                    description=case.description,
                    error=str(e),
                ))

        self.logger.info(f"Completed {len(self.results)} evaluation cases")
        return self.results

    def generate_report(
        self,
        output_file: Optional[Path] = None,
        include_details: bool = True,
    ) -> Dict[str, Any]:
        """
        Build an evaluation report and optionally write it as JSON.
        """
        if not self.results:
            raise EvaluationError("No results available. Run cases first using run_all().")

        scores = [r.answer_contains for r in self.results]
        category_counts: Dict[str, int] = {}
        for result in self.results:
            category = result.category or "unknown"
            category_counts[category] = category_counts.get(category, 0) + 1

        report: Dict[str, Any] = {
            "timestamp": datetime.now().isoformat(),
            "summary": {
                "total_cases": len(self.results),
                "passed": sum(1 for r in self.results if r.passed),
                "average_scores": {
                    EvaluationMetric.ANSWER_CONTAINS.value: sum(scores) / len(scores),
                },
                "category_distribution": category_counts,
            },
        }

        if include_details:
            report["detailed_results"] = [asdict(r) for r in self.results]

        if output_file:
            output_file = Path(output_file)
            output_file.parent.mkdir(parents=True, exist_ok=True)
            with open(output_file, "w", encoding="utf-8") as f:
                json.dump(report, f, indent=2, ensure_ascii=False)
            self.logger.info(f"Evaluation report saved to: {output_file}")

        return report

    def print_summary(self) -> None:
        """Print a summary of the evaluation results."""
        if not self.results:
            print("No results available. Run cases first.")
            return

        summary = self.generate_report(include_details=False)["summary"]

        print("\n" + "=" * 60)
        print("EVALUATION SUMMARY")
        print("=" * 60)
        print(f"Total Cases: {summary['total_cases']}  Passed: {summary['passed']}")
        print("\nAverage Scores:")
        for metric, score in summary["average_scores"].items():
            print(f"  {metric}: {score:.3f}")
        print("\nCategory Distribution:")
        for category, count in summary["category_distribution"].items():
            print(f"  {category}: {count}")
        print("=" * 60 + "\n")
