"""Tests for provider registry and HTTP providers."""

import json

import httpx
import pytest

from skillmatch.config import AppConfig, InferenceConfig, ProviderConfig, load_config
from skillmatch.infra.providers import registry
from skillmatch.infra.providers.anthropic import AnthropicProvider
from skillmatch.infra.providers.base import LLMProvider
from skillmatch.infra.providers.gemini import GEMINI_BASE_URL, GeminiProvider
from skillmatch.infra.providers.llamacpp import LlamaCppProvider
from skillmatch.infra.providers.openrouter import OpenRouterProvider, parse_chat_completion
from skillmatch.infra.providers.registry import build_inference_provider, get_provider
from skillmatch.models.provider import LLMConfig, LLMMessage, ProviderType
from skillmatch.services.skill_inference import SkillInferenceService


def _make_config(**inference) -> AppConfig:
    return AppConfig(
        providers={
            "gemini": ProviderConfig(api_key="g-key", default_model="gemini-2.0-flash"),
            "anthropic": ProviderConfig(api_key="test-key", default_model="test-model"),
            "openrouter": ProviderConfig(api_key="or-key", default_model="or-model"),
            "llamacpp": ProviderConfig(base_url="http://localhost:9999"),
        },
        inference=InferenceConfig(**inference),
    )


class TestProviderRegistry:
    def test_get_gemini(self):
        provider = get_provider(ProviderType.GEMINI, _make_config())
        assert isinstance(provider, GeminiProvider)

    def test_get_anthropic(self):
        provider = get_provider(ProviderType.ANTHROPIC, _make_config())
        assert isinstance(provider, AnthropicProvider)

    def test_get_openrouter(self):
        provider = get_provider(ProviderType.OPENROUTER, _make_config())
        assert isinstance(provider, OpenRouterProvider)

    def test_get_llamacpp(self):
        provider = get_provider(ProviderType.LLAMACPP, _make_config())
        assert isinstance(provider, LlamaCppProvider)
        assert isinstance(provider, LLMProvider)

    def test_get_by_string(self):
        provider = get_provider("anthropic", _make_config())
        assert isinstance(provider, AnthropicProvider)

    def test_unknown_raises(self):
        with pytest.raises(ValueError):
            get_provider("nonexistent", _make_config())


class TestBuildInferenceProvider:
    def test_configured_primary(self):
        provider = build_inference_provider(_make_config(provider="gemini"))
        assert isinstance(provider, GeminiProvider)

    def test_disabled(self):
        assert build_inference_provider(_make_config(enabled=False)) is None

    def test_missing_api_key(self):
        config = AppConfig(providers={"gemini": ProviderConfig(api_key_env="GEMINI_API_KEY")})
        assert build_inference_provider(config) is None

    def test_unknown_provider(self):
        assert build_inference_provider(_make_config(provider="mystery")) is None

    def test_extra_providers_not_chained(self):
        provider = build_inference_provider(_make_config(provider="openrouter"))
        assert isinstance(provider, OpenRouterProvider)


class CountingProvider:
    """Fails every call and counts it."""

    def __init__(self, calls: list[str], name: str) -> None:
        self._calls = calls
        self._name = name

    async def complete(self, messages, config=None):
        self._calls.append(self._name)
        raise ConnectionError(f"{self._name} down")

    async def close(self) -> None:
        pass


class TestOneCallPerInference:
    @pytest.fixture
    def calls(self, monkeypatch):
        calls: list[str] = []
        monkeypatch.setattr(
            registry,
            "_build_provider",
            lambda provider_type, config: CountingProvider(calls, provider_type.value),
        )
        return calls

    @pytest.mark.asyncio
    @pytest.mark.parametrize("provider_type", list(ProviderType))
    async def test_single_call_with_every_provider_configured(self, calls, provider_type):
        provider = build_inference_provider(_make_config(provider=provider_type.value))
        service = SkillInferenceService(provider)
        skills = await service.infer_skills("Create database migration")
        assert calls == [provider_type.value]
        assert skills == ("Backend",)

    @pytest.mark.asyncio
    async def test_legacy_chain_option_ignored(self, calls, tmp_path, monkeypatch):
        for var in ("GEMINI_API_KEY", "ANTHROPIC_API_KEY", "OPENROUTER_API_KEY"):
            monkeypatch.setenv(var, "key")
        monkeypatch.delenv("SKILLMATCH_LLM_PROVIDER", raising=False)
        path = tmp_path / "config.toml"
        path.write_text(
            '[inference]\nprovider = "gemini"\nfallback = true\n\n'
            '[providers.gemini]\napi_key_env = "GEMINI_API_KEY"\n\n'
            '[providers.anthropic]\napi_key_env = "ANTHROPIC_API_KEY"\n\n'
            '[providers.openrouter]\napi_key_env = "OPENROUTER_API_KEY"\n'
        )
        service = SkillInferenceService(build_inference_provider(load_config(path)))
        await service.infer_skills("Create database migration")
        assert calls == ["gemini"]


class TestChatCompletionParsing:
    def test_parse(self):
        data = {
            "model": "org/model",
            "choices": [{"message": {"content": '{"skills": ["Backend"]}'}, "finish_reason": "stop"}],
            "usage": {"prompt_tokens": 12, "completion_tokens": 5},
        }
        response = parse_chat_completion(data)
        assert response.content == '{"skills": ["Backend"]}'
        assert response.model == "org/model"
        assert response.finish_reason == "stop"
        assert response.usage == {"input_tokens": 12, "output_tokens": 5}

    def test_null_content(self):
        data = {"choices": [{"message": {"content": None}, "finish_reason": None}]}
        response = parse_chat_completion(data, "fallback-model")
        assert response.content == ""
        assert response.model == "fallback-model"
        assert response.usage == {"input_tokens": 0, "output_tokens": 0}

    def test_openrouter_model_resolution(self):
        provider = OpenRouterProvider(api_key="k", model="org/default")
        assert provider._resolve_model("anthropic/claude-sonnet-4") == "anthropic/claude-sonnet-4"
        assert provider._resolve_model("gemini-2.0-flash") == "org/default"
        assert provider._resolve_model("") == "org/default"


class TestGeminiProvider:
    def test_payload(self):
        messages = [LLMMessage("system", "Be terse."), LLMMessage("user", "Classify this")]
        payload = GeminiProvider._build_payload(messages, LLMConfig(max_tokens=64))
        assert payload["systemInstruction"] == {"parts": [{"text": "Be terse."}]}
        assert payload["contents"] == [{"role": "user", "parts": [{"text": "Classify this"}]}]
        assert payload["generationConfig"] == {
            "maxOutputTokens": 64,
            "temperature": 0.0,
        }

    @pytest.mark.asyncio
    async def test_complete(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={
                "candidates": [{
                    "content": {"parts": [{"text": '{"skills": '}, {"text": '["Frontend"]}'}]},
                    "finishReason": "STOP",
                }],
                "usageMetadata": {"promptTokenCount": 40, "candidatesTokenCount": 6},
            })

        provider = GeminiProvider(api_key="g-key")
        provider._client = httpx.AsyncClient(
            base_url=GEMINI_BASE_URL, transport=httpx.MockTransport(handler),
        )
        response = await provider.complete([LLMMessage("user", "Classify")])
        await provider.close()

        assert seen["path"].endswith("/models/gemini-2.0-flash:generateContent")
        assert seen["body"]["contents"][0]["parts"][0]["text"] == "Classify"
        assert response.content == '{"skills": ["Frontend"]}'
        assert response.finish_reason == "STOP"
        assert response.usage == {"input_tokens": 40, "output_tokens": 6}

    @pytest.mark.asyncio
    async def test_no_candidates(self):
        provider = GeminiProvider(api_key="g-key")
        provider._client = httpx.AsyncClient(
            base_url=GEMINI_BASE_URL,
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"candidates": []})),
        )
        with pytest.raises(RuntimeError, match="no candidates"):
            await provider.complete([LLMMessage("user", "Classify")])
        await provider.close()

    @pytest.mark.asyncio
    async def test_http_error_propagates(self):
        provider = GeminiProvider(api_key="bad")
        provider._client = httpx.AsyncClient(
            base_url=GEMINI_BASE_URL,
            transport=httpx.MockTransport(lambda request: httpx.Response(403, json={})),
        )
        with pytest.raises(httpx.HTTPStatusError):
            await provider.complete([LLMMessage("user", "Classify")])
        await provider.close()
