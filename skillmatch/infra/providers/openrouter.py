"""OpenRouter LLM provider using httpx."""

from __future__ import annotations

import logging

import httpx

from skillmatch.models.provider import LLMConfig, LLMMessage, LLMResponse

logger = logging.getLogger(__name__)

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "anthropic/claude-sonnet-4"


def parse_chat_completion(data: dict, model: str = "") -> LLMResponse:
    """Build an LLMResponse from an OpenAI-compatible chat completion body."""
    choice = data["choices"][0]
    message = choice["message"]

    # Map OpenAI-style usage keys to expected format
    raw_usage = data.get("usage") or {}
    usage = {
        "input_tokens": raw_usage.get("prompt_tokens", 0),
        "output_tokens": raw_usage.get("completion_tokens", 0),
    }

    return LLMResponse(
        content=message.get("content", "") or "",
        model=data.get("model", model),
        finish_reason=choice.get("finish_reason", "") or "",
        usage=usage,
    )


class OpenRouterProvider:
    """LLM provider using the OpenRouter API (OpenAI-compatible)."""

    def __init__(self, api_key: str = "", model: str = "", timeout: float = 30.0) -> None:
        self._default_model = model or DEFAULT_MODEL
        self._client = httpx.AsyncClient(
            base_url=OPENROUTER_BASE_URL,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
        )

    def _resolve_model(self, model: str) -> str:
        """Use the given model if it looks like an OpenRouter model, else default.

        OpenRouter models use 'provider/model' format (e.g. 'anthropic/claude-sonnet-4').
        """
        if model and "/" in model:
            return model
        return self._default_model

    async def complete(
        self,
        messages: list[LLMMessage],
        config: LLMConfig | None = None,
    ) -> LLMResponse:
        """Generate a completion via OpenRouter."""
        config = config or LLMConfig()
        model = self._resolve_model(config.model)

        payload: dict = {
            "model": model,
            "messages": [m.to_dict() for m in messages],
            "max_tokens": config.max_tokens,
            "temperature": config.temperature,
        }

        logger.debug("Sending request to OpenRouter with model: %s", model)
        response = await self._client.post("/chat/completions", json=payload)
        logger.debug("OpenRouter response status: %s", response.status_code)
        response.raise_for_status()
        return parse_chat_completion(response.json(), model)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
