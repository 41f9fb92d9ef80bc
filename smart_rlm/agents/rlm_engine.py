"""
RLMEngine implementation.

This component wires the two agent tiers together for one document:

1. Holds the document context (read-only) and builds in __init__:
   - StrategyPlanner (root agent)
   - LeafQueryAgent
   - SandboxExecutor bound to the context and the leaf agent
2. Exposes run() which, for one query:
   - asks the planner for a strategy program (fatal on failure)
   - logs the program for inspection
   - executes it in the sandbox (failures there are soft)
   - returns the reported answer, or None if nothing was reported.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

from smart_rlm.agents.leaf_agent import LeafQueryAgent
from smart_rlm.agents.model_client import LangChainModelClient, ModelClient
from smart_rlm.agents.planner_agent import StrategyPlanner
from smart_rlm.config.constants import RunState
from smart_rlm.sandbox.executor import ExecutionResult, SandboxExecutor
from smart_rlm.utils.exceptions import PlanningError
from smart_rlm.utils.helpers import run_blocking
from smart_rlm.utils.logger import get_logger

_RULE = "-" * 51


@dataclass
class RunResult:
    """
    Outcome of one query.

    Attributes:
        query: The user query
        program: Strategy program produced by the planner
        answer: Final reported answer, or None if the strategy reported nothing
        state: Terminal RunState (COMPLETED for every run that got past planning)
        execution: Sandbox outcome with diagnostics
        elapsed_seconds: Wall-clock duration including planning
    """
    query: str
    program: str
    answer: Optional[str]
    state: RunState
    execution: ExecutionResult
    elapsed_seconds: float = 0.0


class RLMEngine:
    """
    Orchestrates planning and sandboxed execution over one document.
    """

    def __init__(
        self,
        context: str,
        client: Optional[ModelClient] = None,
        root_model: Optional[str] = None,
        leaf_model: Optional[str] = None,
        chunk_size: Optional[int] = None,
        chunk_overlap: Optional[int] = None,
        sandbox_timeout: Optional[float] = None,
        enforce_fallback: Optional[bool] = None,
    ) -> None:
        if not isinstance(context, str):
            raise TypeError("Context must be a string")

        self.logger = get_logger("RLMEngine")
        self._context = context
        self._client = client or LangChainModelClient()
        self._state = RunState.IDLE

        self.planner = StrategyPlanner(
            client=self._client,
            model=root_model,
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
        )
        self.leaf_agent = LeafQueryAgent(client=self._client, model=leaf_model)
        self.executor = SandboxExecutor(
            context=self._context,
            leaf_agent=self.leaf_agent,
            timeout=sandbox_timeout,
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            enforce_fallback=enforce_fallback,
        )

        self.logger.info(
            f"RLMEngine initialized | context={len(context):,} chars "
            f"root={self.planner.model} leaf={self.leaf_agent.model}"
        )

    @property
    def context(self) -> str:
        return self._context

    @property
    def client(self) -> ModelClient:
        return self._client

    @property
    def state(self) -> RunState:
        """State of the most recent run."""
        return self._state

    async def run(self, user_query: str) -> RunResult:
        """
        Answer ``user_query`` against the context.

        Returns:
            RunResult: Program, answer and diagnostics

        Raises:
            ValueError: If the query is empty
            PlanningError: If no strategy could be generated
        """
        if not isinstance(user_query, str) or not user_query.strip():
            raise ValueError("Query must be a non-empty string")

        start = time.monotonic()
        self.logger.info(f'Smart RLM processing: "{user_query}"')
        self.logger.info(f"Context size: {len(self._context):,} chars")

        self._state = RunState.PLANNING
        try:
            program = await self.planner.plan(user_query)
        except PlanningError as e:
            self._state = RunState.FAILED
            self.logger.error(f"Planning failed: {e}")
            raise
        self._state = RunState.PLANNED

        self.logger.info(f"Strategy code:\n{_RULE}\n{program}\n{_RULE}")

        self._state = RunState.EXECUTING
        execution = await self.executor.execute(program, user_query)
        self._state = RunState.COMPLETED

        if execution.answer is None:
            self.logger.warning("Strategy finished without reporting an answer")

        return RunResult(
            query=user_query,
            program=program,
            answer=execution.answer,
            state=self._state,
            execution=execution,
            elapsed_seconds=time.monotonic() - start,
        )

    def run_sync(self, user_query: str) -> RunResult:
        """Blocking wrapper around run() for callers without an event loop."""
        return run_blocking(self.run(user_query))
