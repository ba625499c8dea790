"""Tests for AppContext resource cleanup."""

import pytest

from skillmatch.config import AppConfig, ProviderConfig
from skillmatch.context import AppContext
from skillmatch.infra.providers import registry
from skillmatch.infra.providers.gemini import GeminiProvider


class ClosingProvider:
    def __init__(self) -> None:
        self.closed = 0

    async def complete(self, messages, config=None):
        raise ConnectionError("offline")

    async def close(self) -> None:
        self.closed += 1


class TestAppContextClose:
    @pytest.mark.asyncio
    async def test_closes_inference_provider(self, monkeypatch):
        provider = ClosingProvider()
        monkeypatch.setattr(registry, "build_inference_provider", lambda config: provider)
        ctx = AppContext(config=AppConfig())
        result = await ctx.inference_service.infer("Create database migration")
        assert result.method == "keywords"
        await ctx.close()
        await ctx.close()
        assert provider.closed == 1

    @pytest.mark.asyncio
    async def test_closes_http_client(self):
        ctx = AppContext(config=AppConfig(providers={"gemini": ProviderConfig(api_key="g-key")}))
        provider = ctx.inference_service._provider
        assert isinstance(provider, GeminiProvider)
        await ctx.close()
        assert provider._client.is_closed

    @pytest.mark.asyncio
    async def test_close_without_provider(self):
        ctx = AppContext(config=AppConfig(providers={}))
        assert (await ctx.inference_service.infer("Add a modal")).skills == ("Frontend",)
        await ctx.close()

    @pytest.mark.asyncio
    async def test_close_before_use(self):
        await AppContext(config=AppConfig()).close()
