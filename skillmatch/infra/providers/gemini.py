"""Google Gemini LLM provider using httpx against the generateContent REST API."""

from __future__ import annotations

import logging

import httpx

from skillmatch.models.provider import LLMConfig, LLMMessage, LLMResponse

logger = logging.getLogger(__name__)

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.0-flash"


class GeminiProvider:
    """LLM provider using the Gemini API."""

    def __init__(self, api_key: str = "", model: str = "", timeout: float = 30.0) -> None:
        self._default_model = model or DEFAULT_MODEL
        self._client = httpx.AsyncClient(
            base_url=GEMINI_BASE_URL,
            headers={"x-goog-api-key": api_key, "Content-Type": "application/json"},
            timeout=timeout,
        )

    @staticmethod
    def _build_payload(messages: list[LLMMessage], config: LLMConfig) -> dict:
        system_parts = []
        contents = []
        for msg in messages:
            if msg.role == "system":
                system_parts.append({"text": msg.content})
            else:
                role = "model" if msg.role == "assistant" else "user"
                contents.append({"role": role, "parts": [{"text": msg.content}]})

        payload: dict = {
            "contents": contents,
            "generationConfig": {
                "maxOutputTokens": config.max_tokens,
                "temperature": config.temperature,
            },
        }
        if system_parts:
            payload["systemInstruction"] = {"parts": system_parts}
        return payload

    async def complete(
        self,
        messages: list[LLMMessage],
        config: LLMConfig | None = None,
    ) -> LLMResponse:
        """Generate a completion via Gemini."""
        config = config or LLMConfig()
        model = config.model if config.model.startswith("gemini") else self._default_model

        response = await self._client.post(
            f"/models/{model}:generateContent",
            json=self._build_payload(messages, config),
        )
        logger.debug("Gemini response status: %s", response.status_code)
        response.raise_for_status()
        data = response.json()

        candidates = data.get("candidates") or []
        if not candidates:
            raise RuntimeError(f"Gemini returned no candidates: {data.get('promptFeedback', {})}")
        candidate = candidates[0]
        parts = candidate.get("content", {}).get("parts", [])
        raw_usage = data.get("usageMetadata", {})

        return LLMResponse(
            content="".join(p.get("text", "") for p in parts),
            model=data.get("modelVersion", model),
            finish_reason=candidate.get("finishReason", ""),
            usage={
                "input_tokens": raw_usage.get("promptTokenCount", 0),
                "output_tokens": raw_usage.get("candidatesTokenCount", 0),
            },
        )

    async def close(self) -> None:
        await self._client.aclose()
