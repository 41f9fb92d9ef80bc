"""
StrategyPlanner (root agent) implementation.

The planner makes one request to the high-capability root model and gets
back a complete Python program written against the sandbox toolbox. The
program is returned as text; it is neither executed nor syntax-checked
here. Execution is the only validation it gets (see SandboxExecutor).
"""

from __future__ import annotations

from typing import Optional

from smart_rlm.agents.base_agent import BaseAgent
from smart_rlm.agents.model_client import ModelClient
from smart_rlm.config.constants import NOT_FOUND_ANSWER, AgentType
from smart_rlm.config.settings import config
from smart_rlm.utils.exceptions import PlanningError
from smart_rlm.utils.helpers import strip_code_fences


def build_planner_system_prompt(chunk_size: int, chunk_overlap: int) -> str:
    """
    System prompt for the root agent.

    Documents the toolbox with exact signatures, the algorithm every
    strategy must follow (including the zero-match fallback) and the
    code-only output format.
    """
    return (
        "You are a Senior Python RLM (Recursive Language Model) Architect.\n"
        "Your goal is to answer the user query by writing a Python script that analyzes "
        "a massive text variable named `CONTEXT`.\n\n"
        "CRITICAL CONSTRAINTS:\n"
        "1. Efficiency first: you are billed per token. Do NOT process the whole text if "
        "keywords can narrow it down.\n"
        "2. Safety net: if keyword filtering results in 0 chunks, you MUST fall back to "
        "processing ALL chunks so the answer is not missed.\n"
        "3. Output: return ONLY raw Python code. No Markdown fences. No explanations.\n"
        "4. The script runs in a restricted sandbox. `import` statements, files, network, "
        "attributes starting with `_`, `str.format` and any name not listed below are "
        "unavailable. Use f-strings or `+` to build text. Top-level `await` is allowed.\n\n"
        "YOUR TOOLBOX (available in the sandbox):\n"
        "- `CONTEXT` (str): the massive text document.\n"
        "- `USER_QUERY` (str): the user query.\n"
        "- `chunk_text(text, size, overlap)` -> list[str].\n"
        f"    Recommended: size={chunk_size}, overlap={chunk_overlap}.\n"
        "- `keyword_filter(chunks, keywords)` -> list[str].\n"
        "    Keeps chunks containing ANY of the keywords (case-insensitive).\n"
        "- `ask_leaf(chunk, query=USER_QUERY)` -> awaitable LeafVerdict.\n"
        "    Uses a cheaper LLM to analyze one chunk. The verdict has attributes "
        "`found` (bool) and `answer` (str).\n"
        "- `gather(*awaitables)` -> awaitable list of results in the same order.\n"
        "    Use it to run `ask_leaf` calls concurrently.\n"
        "- `log(text)`: prints a progress message.\n"
        "- `report(text)`: reports the final answer. Call it once, at the end.\n\n"
        "THE ALGORITHM YOU MUST WRITE:\n"
        "1. Chunking: split `CONTEXT` into chunks with overlap.\n"
        "2. Keyword strategy:\n"
        "   - Identify 2-3 BROAD keywords from the user query (e.g. for \"invoice #99\", "
        "use \"invoice\", NOT \"invoice #99\"). Never use numbers or identifiers as keywords.\n"
        "   - Run `keyword_filter`.\n"
        "3. Branching logic (the safety net):\n"
        "   - IF filtered chunks exist: process only those chunks.\n"
        "   - ELSE (0 chunks found): process ALL chunks (fallback mode).\n"
        "4. Parallel execution: `await gather(*[ask_leaf(c, USER_QUERY) for c in targets])`.\n"
        "5. Aggregation:\n"
        "   - Keep only verdicts where `found` is True.\n"
        "   - If more than one answer is found, join the answers and call `ask_leaf` "
        "again on the joined text to synthesize one final answer.\n"
        f"   - If no answers are found, report exactly \"{NOT_FOUND_ANSWER}\"\n"
        "6. Final output: call `report()` with the answer.\n\n"
        "EXAMPLE STRUCTURE:\n"
        f"chunks = chunk_text(CONTEXT, {chunk_size}, {chunk_overlap})\n"
        "keywords = [\"keyword1\", \"keyword2\"]\n"
        "targets = keyword_filter(chunks, keywords)\n"
        "if not targets:\n"
        "    log(\"Keywords not found. Scanning full document...\")\n"
        "    targets = chunks\n"
        "results = await gather(*[ask_leaf(c, USER_QUERY) for c in targets])\n"
        "valid = [r for r in results if r.found]\n"
        "if len(valid) > 1:\n"
        "    combined = \"\\n\".join(r.answer for r in valid)\n"
        "    final = await ask_leaf(combined, USER_QUERY)\n"
        "    report(final.answer if final.found else combined)\n"
        "elif valid:\n"
        "    report(valid[0].answer)\n"
        "else:\n"
        f"    report(\"{NOT_FOUND_ANSWER}\")\n"
    )


class StrategyPlanner(BaseAgent):
    """
    Root agent that writes the processing strategy for one query.
    """

    def __init__(
        self,
        client: Optional[ModelClient] = None,
        model: Optional[str] = None,
        chunk_size: Optional[int] = None,
        chunk_overlap: Optional[int] = None,
    ) -> None:
        super().__init__(
            agent_type=AgentType.ROOT,
            model=model or config.ROOT_MODEL,
            client=client,
        )
        self._system_prompt = build_planner_system_prompt(
            chunk_size=chunk_size or config.CHUNK_SIZE,
            chunk_overlap=config.CHUNK_OVERLAP if chunk_overlap is None else chunk_overlap,
        )

    @property
    def system_prompt(self) -> str:
        return self._system_prompt

    async def plan(self, user_query: str) -> str:
        """
        Produce a strategy program for ``user_query``.

        Returns:
            str: Python source with any Markdown fencing removed

        Raises:
            PlanningError: If the model call fails or returns no code
        """
        q = (user_query or "").strip()
        if not q:
            raise ValueError("Query must be a non-empty string")

        self.logger.info(f"Requesting strategy from {self.model}")

        try:
            raw = await self._call_llm(prompt=q, system_prompt=self._system_prompt)
        except Exception as e:
            raise PlanningError(f"Strategy generation failed: {type(e).__name__}: {e}") from e

        program = strip_code_fences(raw)
        if not program:
            raise PlanningError("Root model returned an empty strategy program")

        self.logger.info(f"Received strategy ({len(program):,} chars)")
        return program
