"""
Capabilities injected into the strategy sandbox.

A strategy program sees exactly the names built by ``build_scope()``:
the context, the user query, the toolbox functions and an allow-list of
plain builtins. Nothing else from the host process is reachable by name,
and ``check_program()`` rejects imports, underscore attributes and the
attributes that lead back to host frames before the program is compiled.
"""

from __future__ import annotations

import ast
import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Sequence, Union

from smart_rlm.data.chunker import chunk_text
from smart_rlm.retrieval.keyword_filter import keyword_filter
from smart_rlm.utils.exceptions import SandboxViolationError
from smart_rlm.utils.helpers import preview
from smart_rlm.utils.logger import get_logger

logger = get_logger("Sandbox")
strategy_logger = get_logger("Strategy")

LeafAsk = Callable[[str, str], Awaitable[Any]]

SAFE_BUILTINS: Dict[str, Any] = {
    "abs": abs, "all": all, "any": any, "bool": bool, "dict": dict,
    "divmod": divmod, "enumerate": enumerate, "filter": filter,
    "float": float, "frozenset": frozenset, "int": int, "isinstance": isinstance,
    "iter": iter, "len": len, "list": list, "map": map, "max": max,
    "min": min, "next": next, "range": range, "repr": repr,
    "reversed": reversed, "round": round, "set": set, "sorted": sorted,
    "str": str, "sum": sum, "tuple": tuple, "zip": zip,
    "Exception": Exception, "AttributeError": AttributeError,
    "IndexError": IndexError, "KeyError": KeyError,
    "RuntimeError": RuntimeError, "TypeError": TypeError,
    "ValueError": ValueError, "ZeroDivisionError": ZeroDivisionError,
}


# Attributes that lead from a toolbox object back to host frames, code
# objects or module globals, plus the string formatters whose replacement
# fields ("{0.__globals__}") perform attribute lookups the AST never sees.
BLOCKED_ATTRIBUTES = frozenset({
    "cr_frame", "cr_code", "cr_await", "cr_origin",
    "gi_frame", "gi_code", "gi_yieldfrom",
    "ag_frame", "ag_code", "ag_await",
    "f_globals", "f_builtins", "f_locals", "f_back", "f_code",
    "tb_frame", "tb_next",
    "format", "format_map",
})


def check_program(tree: ast.AST) -> None:
    """
    Reject constructs that would reach outside the toolbox.

    Raises:
        SandboxViolationError: On import statements, bare ``except:``
            clauses, any dunder name, any attribute starting with an
            underscore, or an attribute listed in BLOCKED_ATTRIBUTES
    """
    for node in ast.walk(tree):
        if isinstance(node, (ast.Import, ast.ImportFrom)):
            raise SandboxViolationError(
                f"line {node.lineno}: import statements are not available in the sandbox"
            )
        if isinstance(node, ast.Attribute) and (
            node.attr.startswith("_") or node.attr in BLOCKED_ATTRIBUTES
        ):
            raise SandboxViolationError(
                f"line {node.lineno}: access to attribute {node.attr!r} is not allowed"
            )
        if isinstance(node, ast.Name) and node.id.startswith("__"):
            raise SandboxViolationError(
                f"line {node.lineno}: name {node.id!r} is not available in the sandbox"
            )
        if isinstance(node, ast.ExceptHandler) and node.type is None:
            raise SandboxViolationError(
                f"line {node.lineno}: bare except clauses are not allowed; catch Exception"
            )


@dataclass
class SandboxSession:
    """Mutable record of what one strategy program did."""
    reports: List[str] = field(default_factory=list)
    logs: List[str] = field(default_factory=list)
    leaf_calls: int = 0
    fallback_triggered: bool = False

    @property
    def answer(self) -> Optional[str]:
        return self.reports[-1] if self.reports else None


def build_scope(
    context: str,
    query: str,
    ask: LeafAsk,
    session: SandboxSession,
    chunk_size: int,
    chunk_overlap: int,
    enforce_fallback: bool = True,
) -> Dict[str, Any]:
    """
    Build the global namespace for one strategy program.

    Args:
        context: Full document text, exposed as ``CONTEXT``
        query: Current user query, exposed as ``USER_QUERY`` and used as
            the default query of ``ask_leaf``
        ask: Leaf agent coroutine ``(chunk, query) -> LeafVerdict``
        session: Collects reports, logs and call counts
        chunk_size: Default ``size`` of ``chunk_text``
        chunk_overlap: Default ``overlap`` of ``chunk_text``
        enforce_fallback: When True, a filter that matches nothing on a
            non-empty chunk list returns the full list instead

    Returns:
        Dict[str, Any]: Globals for exec/eval
    """
    default_query = query

    def sandbox_chunk_text(text: str, size: int = chunk_size, overlap: int = chunk_overlap) -> List[str]:
        return chunk_text(text, size, overlap)

    def sandbox_keyword_filter(
        chunks: Sequence[str],
        keywords: Union[str, Iterable[str], None],
    ) -> List[str]:
        selected = keyword_filter(chunks, keywords)
        if not selected and chunks and enforce_fallback:
            logger.warning(
                f"Keywords matched 0 chunks; falling back to all {len(chunks)} chunks"
            )
            session.fallback_triggered = True
            return list(chunks)
        return selected

    async def ask_leaf(chunk: str, query: Optional[str] = None) -> Any:
        session.leaf_calls += 1
        return await ask(str(chunk), query or default_query)

    async def gather(*awaitables: Awaitable[Any]) -> List[Any]:
        # Accept gather([a, b]) as well as gather(a, b)
        if len(awaitables) == 1 and isinstance(awaitables[0], (list, tuple)):
            awaitables = tuple(awaitables[0])
        return list(await asyncio.gather(*awaitables))

    def log(*parts: Any) -> None:
        message = " ".join(str(p) for p in parts)
        session.logs.append(message)
        strategy_logger.info(message)

    def report(text: Any) -> None:
        answer = str(text)
        session.reports.append(answer)
        logger.info(f"FINAL ANSWER: {preview(answer, 500)}")

    builtins = dict(SAFE_BUILTINS)
    builtins["print"] = log

    return {
        "__builtins__": builtins,
        "CONTEXT": context,
        "USER_QUERY": query,
        "chunk_text": sandbox_chunk_text,
        "keyword_filter": sandbox_keyword_filter,
        "ask_leaf": ask_leaf,
        "gather": gather,
        "log": log,
        "report": report,
    }
