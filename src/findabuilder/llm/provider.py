"""LLM provider protocol and provider selection."""

import logging
from typing import Protocol, runtime_checkable

import httpx

from findabuilder.config import SearchConfig

logger = logging.getLogger(__name__)


@runtime_checkable
class LLMProvider(Protocol):
    """Protocol for language model providers with graceful degradation."""

    async def is_available(self) -> bool:
        """Check if the LLM backend is usable."""
        ...

    async def generate(self, prompt: str, *, system: str | None = None) -> str | None:
        """Generate text from a prompt. Returns None if unavailable."""
        ...

    async def close(self) -> None:
        """Release resources."""
        ...


def create_llm(
    config: SearchConfig, http_client: httpx.AsyncClient | None = None
) -> LLMProvider | None:
    """Create the LLM client named by ``config.llm_provider``, or None if unknown."""
    if config.llm_provider == "openai":
        from findabuilder.llm.chat_completions import ChatCompletionsClient

        return ChatCompletionsClient(config, http_client)
    if config.llm_provider == "anthropic":
        from findabuilder.llm.anthropic import AnthropicLLMClient

        return AnthropicLLMClient(config)
    logger.warning("Unknown LLM provider '%s' — query interpretation disabled", config.llm_provider)
    return None
