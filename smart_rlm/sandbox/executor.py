"""
SandboxExecutor implementation.

Runs one strategy program inside a fresh, allow-listed namespace
(see toolbox.build_scope). The program is compiled with top-level
``await`` enabled, so it can fan out leaf calls without defining its own
coroutine, and the whole evaluation sits inside a failure boundary:

- syntax errors and sandbox violations
- references to names outside the toolbox
- exceptions raised synchronously or after an ``await``
- exceeding the wall-clock timeout (at await points for asynchronous
  programs, at every line for programs without a top-level ``await``)

are all logged and recorded on the ExecutionResult. None of them reach
the caller, so a buggy strategy degrades to "no answer" instead of taking
the engine down. Task cancellation still propagates.
"""

from __future__ import annotations

import ast
import asyncio
import inspect
import sys
import time
from dataclasses import dataclass, field
from types import CodeType
from typing import TYPE_CHECKING, List, Optional

from smart_rlm.config.constants import STRATEGY_FILENAME
from smart_rlm.config.settings import config
from smart_rlm.sandbox.toolbox import SandboxSession, build_scope, check_program
from smart_rlm.utils.logger import get_logger

if TYPE_CHECKING:
    from smart_rlm.agents.leaf_agent import LeafQueryAgent


class _DeadlineExceeded(BaseException):
    """Raised into a synchronous strategy when its time is up. Strategies cannot catch it."""


def _deadline_tracer(deadline: float):
    """
    Build a sys.settrace hook that interrupts strategy frames after ``deadline``.

    Only frames compiled from the strategy program are traced line by line;
    toolbox and library frames run untraced.
    """

    def _local(frame, event, arg):
        if time.monotonic() > deadline:
            raise _DeadlineExceeded()
        return _local

    def _global(frame, event, arg):
        if frame.f_code.co_filename != STRATEGY_FILENAME:
            return None
        return _local(frame, event, arg)

    return _global


@dataclass
class ExecutionResult:
    """
    Outcome of one strategy program run.

    Attributes:
        answer: Text passed to the last report() call, or None
        reports: Every reported text, in call order
        logs: Progress messages emitted by the program
        error: Diagnostic for a failed run, or None
        timed_out: True if the wall-clock limit stopped the program
        fallback_triggered: True if a zero-match filter was widened to all chunks
        leaf_calls: Number of ask_leaf() calls issued
        elapsed_seconds: Wall-clock duration of the run
    """
    answer: Optional[str] = None
    reports: List[str] = field(default_factory=list)
    logs: List[str] = field(default_factory=list)
    error: Optional[str] = None
    timed_out: bool = False
    fallback_triggered: bool = False
    leaf_calls: int = 0
    elapsed_seconds: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.error is None


class SandboxExecutor:
    """
    Executes untrusted strategy programs against a fixed toolbox.
    """

    def __init__(
        self,
        context: str,
        leaf_agent: LeafQueryAgent,
        timeout: Optional[float] = None,
        chunk_size: Optional[int] = None,
        chunk_overlap: Optional[int] = None,
        enforce_fallback: Optional[bool] = None,
    ) -> None:
        self.logger = get_logger("SandboxExecutor")
        self._context = context
        self._leaf_agent = leaf_agent
        timeout = config.SANDBOX_TIMEOUT if timeout is None else timeout
        self._timeout = timeout if timeout and timeout > 0 else None
        self._chunk_size = chunk_size or config.CHUNK_SIZE
        self._chunk_overlap = config.CHUNK_OVERLAP if chunk_overlap is None else chunk_overlap
        self._enforce_fallback = config.ENFORCE_FALLBACK if enforce_fallback is None else enforce_fallback

    async def execute(self, program: str, query: str) -> ExecutionResult:
        """
        Run ``program`` with ``ask_leaf`` pre-bound to ``query``.

        Returns:
            ExecutionResult: Always returned, also when the program fails
        """
        session = SandboxSession()
        scope = build_scope(
            context=self._context,
            query=query,
            ask=self._leaf_agent.ask,
            session=session,
            chunk_size=self._chunk_size,
            chunk_overlap=self._chunk_overlap,
            enforce_fallback=self._enforce_fallback,
        )
        result = ExecutionResult()
        start = time.monotonic()

        try:
            await self._run(program, scope)
        except asyncio.TimeoutError:
            result.timed_out = True
            result.error = f"TimeoutError: strategy exceeded {self._timeout}s"
            self.logger.error(result.error)
        except Exception as e:
            result.error = f"{type(e).__name__}: {e}"
            self.logger.error(f"Strategy failed: {result.error}", exc_info=True)

        result.elapsed_seconds = time.monotonic() - start
        result.answer = session.answer
        result.reports = list(session.reports)
        result.logs = list(session.logs)
        result.leaf_calls = session.leaf_calls
        result.fallback_triggered = session.fallback_triggered

        self.logger.info(
            f"Finished in {result.elapsed_seconds:.2f}s | "
            f"leaf_calls={result.leaf_calls} fallback={result.fallback_triggered} "
            f"answered={result.answer is not None} ok={result.succeeded}"
        )
        return result

    async def _run(self, program: str, scope: dict) -> None:
        tree = ast.parse(program, filename=STRATEGY_FILENAME, mode="exec")
        check_program(tree)
        code = compile(
            tree,
            STRATEGY_FILENAME,
            "exec",
            flags=ast.PyCF_ALLOW_TOP_LEVEL_AWAIT,
        )
        # Programs that await at top level compile to a coroutine; wait_for
        # bounds them at their await points
        if code.co_flags & inspect.CO_COROUTINE:
            await asyncio.wait_for(eval(code, scope), timeout=self._timeout)
        else:
            self.logger.debug("Strategy has no top-level await; running synchronously")
            self._run_sync(code, scope)

    def _run_sync(self, code: CodeType, scope: dict) -> None:
        if self._timeout is None:
            eval(code, scope)
            return

        previous = sys.gettrace()
        sys.settrace(_deadline_tracer(time.monotonic() + self._timeout))
        try:
            eval(code, scope)
        except _DeadlineExceeded:
            raise asyncio.TimeoutError() from None
        finally:
            sys.settrace(previous)
