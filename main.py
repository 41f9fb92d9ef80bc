from __future__ import annotations
import sys
from datetime import datetime
from logging import Logger
from typing import NoReturn

from smart_rlm.agents.rlm_engine import RLMEngine
from smart_rlm.config.constants import NO_ANSWER_PRODUCED
from smart_rlm.config.settings import config
from smart_rlm.evaluation import EvalSuite, get_eval_cases
from smart_rlm.helpers.agent_helper import init
from smart_rlm.utils.exceptions import EvaluationError, PlanningError, RLMError


def _system(log: Logger, engine: RLMEngine) -> None:
    print("==============================================")
    print(" Smart RLM")
    print(f" Document: {len(engine.context):,} characters")
    while True:
        print("==============================================")
        print("Type your question about the document.")
        print("Type 'eval' or 'evaluation' for evaluation")
        print("Type 'exit' or 'quit' to exit.\n")
        print("==============================================")

        try:
            query = input(">>> ").strip()
        except (KeyboardInterrupt, EOFError):
            print("\nExiting. Goodbye!")
            break

        if not query:
            print("no query entered")
            continue

        if query.lower() in {"exit", "quit", "q"}:
            print("Goodbye!")
            break
        elif query.lower() in {"eval", "evaluation", "e"}:
            _evaluation_mode(engine, log)
        else:
            _query_mode(engine, query, log)


def _query_mode(engine: RLMEngine, query: str, log: Logger) -> None:
    try:
        result = engine.run_sync(query)

        print("\n--- Answer ---")
        print(result.answer if result.answer is not None else NO_ANSWER_PRODUCED)
        if result.execution.error:
            print(f"(strategy error: {result.execution.error})")
        print("--------------")

    except PlanningError as e:
        log.error(f"Planning failed while handling query: {e}", exc_info=True)
        print(f"Error: could not generate a strategy for the query: {e}")
    except RLMError as e:
        log.error(f"Engine error while handling query: {e}", exc_info=True)
        print(f"Error: {e}")


def _evaluation_mode(engine: RLMEngine, log: Logger) -> None:
    """Run the built-in evaluation cases and write a report."""
    print("\n" + "=" * 60)
    print("EVALUATION MODE")
    print("=" * 60)

    # Cases carry their own documents; reuse the loaded engine's client
    client = engine.client
    suite = EvalSuite(
        engine_factory=lambda context: RLMEngine(context, client=client),
        default_context=engine.context,
    )

    try:
        suite.load_cases(get_eval_cases())
        suite.run_all()

        evaluation_dir = config.RESULTS_DIR / "evaluation"
        report_filename = evaluation_dir / f"evaluation_report_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"
        suite.generate_report(output_file=report_filename, include_details=True)
        suite.print_summary()
        print(f"\nFull evaluation report saved to: {report_filename}")
    except EvaluationError as e:
        log.error(f"Evaluation failed: {e}", exc_info=True)
        print(f"Error: Evaluation failed: {e}")


def main() -> NoReturn:
    context_path = sys.argv[1] if len(sys.argv) > 1 else None
    try:
        log, engine = init(context_path)
    except RLMError as e:
        print(f"Failed to start: {e}")
        sys.exit(1)
    _system(log, engine)
    sys.exit(0)


if __name__ == "__main__":
    main()
