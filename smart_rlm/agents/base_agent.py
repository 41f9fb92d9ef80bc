"""
Base agent definitions.

This module defines:
- AgentInterface: minimal common interface for both agent tiers.
- BaseAgent: shared model-client wiring and a helper for sending prompts.

Concrete agents (StrategyPlanner, LeafQueryAgent) inherit from BaseAgent
and decide what to do when a model call fails: the planner treats it as
fatal, the leaf agent turns it into a negative verdict.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from smart_rlm.agents.model_client import LangChainModelClient, ModelClient
from smart_rlm.config.constants import AgentType
from smart_rlm.utils.exceptions import AgentError
from smart_rlm.utils.logger import get_logger


class AgentInterface(ABC):
    """
    Minimal interface for all agents in the system.
    """

    @abstractmethod
    def get_agent_type(self) -> AgentType:
        """Return the AgentType enum value for this agent."""

    @property
    @abstractmethod
    def model(self) -> str:
        """Model identifier this agent sends its requests to."""


class BaseAgent(AgentInterface, ABC):
    """
    Abstract base class for agents.

    Responsibilities:
    - Store the AgentType and model identifier
    - Hold the injected ModelClient (a LangChain-backed one by default)
    - Provide a private helper for sending prompts to the model
    """

    def __init__(
        self,
        agent_type: AgentType,
        model: str,
        client: Optional[ModelClient] = None,
    ) -> None:
        self._agent_type = agent_type
        self._model = model
        self._client = client or LangChainModelClient()
        self.logger = get_logger(type(self).__name__)
        self.logger.info(f"{agent_type.value} agent ready with model: {model}")

    # ------------------------------------------------------------------
    # AgentInterface implementation
    # ------------------------------------------------------------------
    def get_agent_type(self) -> AgentType:
        return self._agent_type

    @property
    def model(self) -> str:
        return self._model

    # ------------------------------------------------------------------
    # LLM helper
    # ------------------------------------------------------------------
    async def _call_llm(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        json_mode: bool = False,
    ) -> str:
        if self._client is None:
            raise AgentError("Model client is not initialized")

        messages: List[Dict[str, str]] = []

        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})

        messages.append({"role": "user", "content": prompt})

        return await self._client.complete(
            model=self._model,
            messages=messages,
            json_mode=json_mode,
        )
