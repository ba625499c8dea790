"""llama.cpp LLM provider using httpx (OpenAI-compatible endpoint)."""

from __future__ import annotations

import logging

import httpx

from skillmatch.infra.providers.openrouter import parse_chat_completion
from skillmatch.models.provider import LLMConfig, LLMMessage, LLMResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080"


class LlamaCppProvider:
    """LLM provider for a local llama.cpp server."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = 30.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(base_url=self._base_url, timeout=timeout)

    async def complete(
        self,
        messages: list[LLMMessage],
        config: LLMConfig | None = None,
    ) -> LLMResponse:
        """Generate a completion via local llama.cpp server."""
        config = config or LLMConfig()

        payload: dict = {
            "messages": [m.to_dict() for m in messages],
            "max_tokens": config.max_tokens,
            "temperature": config.temperature,
        }
        if config.model:
            payload["model"] = config.model

        response = await self._client.post("/v1/chat/completions", json=payload)
        response.raise_for_status()
        return parse_chat_completion(response.json(), config.model)

    async def close(self) -> None:
        await self._client.aclose()
