"""OpenAI-compatible chat-completions client with graceful degradation."""

import logging

import httpx

from findabuilder.config import SearchConfig

logger = logging.getLogger(__name__)

_TEMPERATURE = 0.1


class ChatCompletionsClient:
    """Generates JSON replies via a ``/chat/completions`` endpoint (Galadriel, OpenAI, ...)."""

    def __init__(
        self,
        config: SearchConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize with config and an optional HTTP client."""
        self._config = config
        self._http = http_client
        self._available: bool | None = None

    async def is_available(self) -> bool:
        """A configured bearer token is enough; success is cached after the first reply."""
        if self._available is True:
            return True
        if not self._config.llm_api_key:
            logger.warning("FAB_LLM_API_KEY not set — query interpretation disabled")
            return False
        return True

    async def generate(self, prompt: str, *, system: str | None = None) -> str | None:
        """Generate text from a prompt. Returns None if unavailable."""
        if not await self.is_available():
            return None
        messages: list[dict[str, str]] = []
        if system is not None:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        payload: dict[str, object] = {
            "model": self._config.llm_model,
            "messages": messages,
            "temperature": _TEMPERATURE,
            "response_format": {"type": "json_object"},
        }
        try:
            client = self._get_client()
            resp = await client.post(
                f"{self._config.llm_endpoint}/chat/completions",
                json=payload,
                headers={"Authorization": f"Bearer {self._config.llm_api_key}"},
                timeout=self._config.request_timeout,
            )
            resp.raise_for_status()
            data = resp.json()
            result: str = data["choices"][0]["message"]["content"]
            self._available = True
            logger.debug("LLM reply: %s", result)
            return result
        except Exception:
            logger.warning("Chat completion failed", exc_info=True)
            self._available = None
            return None

    def _get_client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient()
        return self._http

    async def close(self) -> None:
        """Close the HTTP client if open."""
        if self._http is not None:
            await self._http.aclose()
            self._http = None
