"""Service encapsulating interactions with the language model.

Uses LangChain's ChatOpenAI integration to call the chat completion API.
The service accepts an assembled message sequence and returns the text
of the first generated choice.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Sequence

import openai
from langchain_core.messages import BaseMessage
from langchain_openai import ChatOpenAI
from loguru import logger

from ..config.llm_config import LlmConfig, get_llm_config
from ..utils.error_handler import ConfigurationError, UpstreamError

FALLBACK_REPLY = "...the connection fades..."


class LLMService:
    """Service for generating spirit replies from the language model.

    The underlying :class:`~langchain_openai.ChatOpenAI` client is built
    lazily from :class:`LlmConfig` so the application can start without a
    credential; a missing key is reported as a :class:`ConfigurationError`
    on first use.  Retries are disabled: a failed call surfaces directly to
    the caller.
    """

    def __init__(self, llm_config: LlmConfig | None = None, llm: ChatOpenAI | None = None) -> None:
        self.llm_config = llm_config or get_llm_config()
        self._llm = llm

    @property
    def is_configured(self) -> bool:
        return self._llm is not None or self.llm_config.is_configured

    @property
    def llm(self) -> ChatOpenAI:
        if self._llm is None:
            if not self.llm_config.is_configured:
                raise ConfigurationError("OPENAI_API_KEY is missing")
            # Unspecified parameters fall back to library defaults.
            llm_kwargs: dict[str, object] = {
                "api_key": self.llm_config.api_key,
                "model": self.llm_config.model,
                "temperature": self.llm_config.temperature,
                "max_tokens": self.llm_config.max_tokens,
                "max_retries": 0,
            }
            if self.llm_config.base_url:
                llm_kwargs["base_url"] = self.llm_config.base_url
            if self.llm_config.timeout:
                llm_kwargs["timeout"] = self.llm_config.timeout
            self._llm = ChatOpenAI(**llm_kwargs)
        return self._llm

    async def generate(self, messages: Sequence[BaseMessage]) -> str:
        """Return the first generated message text for ``messages``.

        Raises
        ------
        UpstreamError
            If the generation service answers with a non-success status.
        """
        logger.debug("Requesting generation with {} messages", len(messages))
        try:
            result = await self.llm.ainvoke(list(messages))
        except openai.APIStatusError as exc:
            logger.error(
                "Generation API error: status={} message={}",
                exc.status_code,
                exc.message,
            )
            raise UpstreamError(f"Generation API returned {exc.status_code}") from exc

        return extract_reply(getattr(result, "content", None))


def extract_reply(content: object) -> str:
    """Return generated text, or the fallback phrase when there is none.

    LangChain returns either a string or a list of content blocks; only
    text blocks are kept.
    """
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(str(block.get("text", "")))
        content = "".join(parts)
    if isinstance(content, str) and content:
        return content
    return FALLBACK_REPLY


@lru_cache()
def get_llm_service() -> LLMService:
    """Dependency injector for a shared LLMService."""
    return LLMService()
