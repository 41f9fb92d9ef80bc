from logging import Logger
from pathlib import Path
from typing import Optional, Tuple, Union

from smart_rlm.agents.model_client import ModelClient
from smart_rlm.agents.rlm_engine import RLMEngine
from smart_rlm.config.settings import config
from smart_rlm.data.document_loader import DocumentLoader
from smart_rlm.evaluation.eval_case import EvalCase
from smart_rlm.utils.exceptions import AgentError, ConfigurationError, DocumentLoadingError
from smart_rlm.utils.logger import logger


def _load_context(context_path: Path, log: Logger) -> str:
    try:
        context = DocumentLoader().load(context_path)
        log.info(f"✓ Loaded document: {context_path}")
    except DocumentLoadingError as e:
        log.error(f"✗ Error loading document from {context_path}: {e}")
        raise
    return context


def init(
    context_path: Optional[Union[str, Path]] = None,
    client: Optional[ModelClient] = None,
) -> Tuple[Logger, RLMEngine]:
    log: Logger = logger
    log.info("Starting Smart RLM CLI")

    if client is None and not config.validate():
        raise ConfigurationError("OPENROUTER_KEY is required to reach the model service")

    context = _load_context(Path(context_path or config.CONTEXT_PATH), log)

    try:
        engine = RLMEngine(context, client=client)
    except AgentError as e:
        log.error(f"Failed to initialize engine: {e}", exc_info=True)
        raise

    return log, engine


def assert_hard_query(engine: RLMEngine, test_case: EvalCase) -> None:
    result = engine.run_sync(test_case.query)
    answer = result.answer or ""
    assert test_case.expected_answer.lower() in answer.lower(), (
        f"Answer does not contain expected value. query: {test_case.query}, "
        f"expected: {test_case.expected_answer}, actual: {answer}"
    )


def assert_hard_queries(engine: RLMEngine, test_cases: list[EvalCase]) -> None:
    for test_case in test_cases:
        assert_hard_query(engine, test_case)
