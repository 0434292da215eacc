"""Anthropic LLM client with graceful degradation."""

from __future__ import annotations

import logging
import os
from typing import Any

from anthropic import AsyncAnthropic

from findabuilder.config import SearchConfig

logger = logging.getLogger(__name__)

# Interpreter replies are a single small JSON object
_MAX_TOKENS = 512


class AnthropicLLMClient:
    """Generates text via the Anthropic Messages API."""

    def __init__(self, config: SearchConfig) -> None:
        """Initialize with lazy client creation."""
        self._config = config
        self._client: Any = None
        self._available: bool | None = None

    async def is_available(self) -> bool:
        """Check availability. Only caches success, so a failure is retried."""
        if self._available is True:
            return True
        if not os.environ.get("ANTHROPIC_API_KEY"):
            logger.warning("ANTHROPIC_API_KEY not set — Anthropic LLM disabled")
            return False
        # Key is set; assume available until the first generate() proves otherwise
        return True

    async def generate(self, prompt: str, *, system: str | None = None) -> str | None:
        """Generate text from a prompt. Returns None if unavailable."""
        try:
            client = self._get_client()
            kwargs: dict[str, Any] = {
                "model": self._config.anthropic_model,
                "max_tokens": _MAX_TOKENS,
                "temperature": 0.1,
                "messages": [{"role": "user", "content": prompt}],
            }
            if system is not None:
                kwargs["system"] = system

            response = await client.messages.create(
                **kwargs,
                timeout=self._config.request_timeout,
            )
            result: str = response.content[0].text
            self._available = True
            return result
        except Exception:
            logger.warning("Anthropic generation failed", exc_info=True)
            self._available = None
            return None

    def _get_client(self) -> Any:
        """Lazily create the AsyncAnthropic client."""
        if self._client is None:
            self._client = AsyncAnthropic()
        return self._client

    async def close(self) -> None:
        """Close the Anthropic client if open."""
        if self._client is not None:
            await self._client.close()
            self._client = None
