"""
Model completion client.

The engine talks to the language model through a single-method interface,
``ModelClient.complete()``, so the process-wide client is an injected
dependency and tests can swap in a deterministic stub.

LangChainModelClient is the production implementation. It builds one
ChatOpenAI instance per model identifier against an OpenAI-compatible
endpoint (OpenRouter by default configuration) and forwards the attribution
headers from config unchanged.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from smart_rlm.config.settings import config
from smart_rlm.utils.exceptions import AgentError
from smart_rlm.utils.logger import get_logger

JSON_RESPONSE_FORMAT = {"type": "json_object"}


class ModelClient(ABC):
    """
    Minimal interface to the model completion service.
    """

    @abstractmethod
    async def complete(
        self,
        model: str,
        messages: List[Dict[str, str]],
        json_mode: bool = False,
    ) -> str:
        """
        Send one chat request and return the generated message text.

        Args:
            model: Model identifier
            messages: Ordered ``{"role", "content"}`` dicts
            json_mode: Request a JSON object response

        Raises:
            Exception: Any transport or service error is propagated.
        """


class LangChainModelClient(ModelClient):
    """
    ModelClient backed by langchain_openai.ChatOpenAI.
    """

    _ROLE_TO_MESSAGE = {
        "system": SystemMessage,
        "user": HumanMessage,
        "assistant": AIMessage,
    }

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        default_headers: Optional[Dict[str, str]] = None,
        max_retries: Optional[int] = None,
    ) -> None:
        self.logger = get_logger("ModelClient")
        self._base_url = base_url or config.BASE_URL or None
        self._api_key = api_key or config.API_KEY
        self._default_headers = default_headers if default_headers is not None else config.default_headers
        self._max_retries = config.LLM_MAX_RETRIES if max_retries is None else max_retries
        self._llms: Dict[str, ChatOpenAI] = {}

    def _get_llm(self, model: str) -> ChatOpenAI:
        if model not in self._llms:
            try:
                self._llms[model] = ChatOpenAI(
                    model=model,
                    api_key=self._api_key,
                    base_url=self._base_url,
                    default_headers=self._default_headers or None,
                    max_retries=self._max_retries,
                )
            except Exception as e:  # pragma: no cover - credentials dependent
                raise AgentError(f"Failed to initialize LLM client for model '{model}': {e}") from e
            self.logger.info(f"Initialized LLM client for model: {model}")
        return self._llms[model]

    def _to_messages(self, messages: List[Dict[str, str]]) -> List[BaseMessage]:
        converted = []
        for message in messages:
            role = message.get("role", "user")
            message_cls = self._ROLE_TO_MESSAGE.get(role)
            if message_cls is None:
                raise AgentError(f"Unsupported message role: {role!r}")
            converted.append(message_cls(content=message.get("content", "")))
        return converted

    async def complete(
        self,
        model: str,
        messages: List[Dict[str, str]],
        json_mode: bool = False,
    ) -> str:
        llm = self._get_llm(model)
        runnable = llm.bind(response_format=JSON_RESPONSE_FORMAT) if json_mode else llm

        response = await runnable.ainvoke(self._to_messages(messages))

        # Extract text content from AIMessage object
        if hasattr(response, 'content'):
            return str(response.content) if response.content else ""
        return str(response)
