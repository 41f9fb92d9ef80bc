"""
LeafQueryAgent implementation.

This agent:
- Inherits from BaseAgent
- Sends one chunk plus the user query to the low-cost leaf model
- Requests a JSON verdict ``{"found": bool, "answer": str}``

The structured response lets a strategy program drop "not found" chunks
programmatically instead of reading every explanation. A leaf call never
raises: any failure becomes a negative verdict so one bad chunk cannot
abort the fan-out over all the others.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from smart_rlm.agents.base_agent import BaseAgent
from smart_rlm.agents.model_client import ModelClient
from smart_rlm.config.constants import LEAF_FAILURE_ANSWER, AgentType
from smart_rlm.config.settings import config
from smart_rlm.utils.helpers import parse_json_object, preview

LEAF_SYSTEM_PROMPT = (
    "You are a precise data extractor.\n"
    "Analyze the text chunk. Does it contain information relevant to the user's query?\n"
    'Return JSON: { "found": boolean, "answer": "extracted info or reasoning" }\n'
    'If not found, set "found": false.\n'
    "Use ONLY the text chunk. Do not add background knowledge."
)


@dataclass(frozen=True)
class LeafVerdict:
    """
    Evidence returned for one chunk.

    When ``found`` is False the ``answer`` carries no information and
    callers discard it.
    """
    found: bool
    answer: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def parse_verdict(raw: str) -> LeafVerdict:
    """
    Convert a raw leaf response into a verdict.

    Raises:
        ValueError: If the response is not a JSON object with a boolean
            ``found`` field
    """
    data = parse_json_object(raw)
    found = data.get("found")
    if not isinstance(found, bool):
        raise ValueError(f"'found' must be a boolean, got {found!r}")
    answer = data.get("answer", "")
    return LeafVerdict(found=found, answer="" if answer is None else str(answer))


class LeafQueryAgent(BaseAgent):
    """
    Agent that judges a single chunk against the user query.
    """

    def __init__(self, client: Optional[ModelClient] = None, model: Optional[str] = None) -> None:
        super().__init__(
            agent_type=AgentType.LEAF,
            model=model or config.LEAF_MODEL,
            client=client,
        )

    async def ask(self, chunk: str, query: str) -> LeafVerdict:
        """
        Ask the leaf model whether ``chunk`` answers ``query``.

        Returns:
            LeafVerdict: Parsed verdict, or ``found=False`` with the failure
            marker on any error
        """
        prompt = f"Query: {query}\n\nText Chunk: {chunk}"
        try:
            raw = await self._call_llm(
                prompt=prompt,
                system_prompt=LEAF_SYSTEM_PROMPT,
                json_mode=True,
            )
            verdict = parse_verdict(raw)
        except Exception as e:
            self.logger.warning(
                f"Chunk of {len(chunk):,} chars failed: {type(e).__name__}: {e}"
            )
            return LeafVerdict(found=False, answer=LEAF_FAILURE_ANSWER)

        self.logger.debug(
            f"found={verdict.found} answer={preview(verdict.answer, 120)!r}"
        )
        return verdict
