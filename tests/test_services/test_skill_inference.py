"""Tests for SkillInferenceService with stub providers."""

from __future__ import annotations

import httpx
import pytest

from skillmatch.models.provider import LLMConfig, LLMMessage, LLMResponse
from skillmatch.services.keyword_classifier import classify
from skillmatch.services.skill_inference import SkillInferenceService, build_prompt


class StubProvider:
    """Returns a canned response, or raises, and records each call."""

    def __init__(self, content: str = "", error: Exception | None = None) -> None:
        self._content = content
        self._error = error
        self.calls: list[tuple[list[LLMMessage], LLMConfig | None]] = []

    async def complete(self, messages, config=None):
        self.calls.append((messages, config))
        if self._error is not None:
            raise self._error
        return LLMResponse(content=self._content, model="stub")


DB_TITLE = "Create database migration for user preferences"
PROFILE_TITLE = "As a user, I want to update my profile information and upload a profile picture"


class TestBuildPrompt:
    def test_includes_title_and_vocabulary(self):
        prompt = build_prompt("Add a login form", ("Frontend", "Backend"))
        assert '"Add a login form"' in prompt
        assert "- Frontend:" in prompt
        assert "- Backend:" in prompt
        assert '{"skills": [...]}' in prompt

    def test_unknown_tags_listed_without_description(self):
        prompt = build_prompt("Ship it", ("DevOps", "QA"))
        assert "- DevOps\n- QA" in prompt
        assert '["DevOps", "QA"]' in prompt


class TestInferSkills:
    @pytest.mark.asyncio
    async def test_structured_response_used_unchanged(self):
        provider = StubProvider('{"skills": ["Frontend"]}')
        service = SkillInferenceService(provider)
        # Keywords alone would say Backend; the LLM answer wins
        assert await service.infer_skills(DB_TITLE) == ("Frontend",)
        assert len(provider.calls) == 1

    @pytest.mark.asyncio
    async def test_reports_method(self):
        service = SkillInferenceService(StubProvider('{"skills": ["Frontend", "Backend"]}'))
        result = await service.infer(PROFILE_TITLE)
        assert result.skills == ("Frontend", "Backend")
        assert result.method == "json"

    @pytest.mark.asyncio
    async def test_prose_response(self):
        service = SkillInferenceService(StubProvider("I'd say this is Backend work."))
        result = await service.infer(PROFILE_TITLE)
        assert result.skills == ("Backend",)
        assert result.method == "text"

    @pytest.mark.asyncio
    async def test_transport_error_falls_back_to_keywords(self):
        error = httpx.ConnectError("connection refused")
        service = SkillInferenceService(StubProvider(error=error))
        result = await service.infer(DB_TITLE)
        assert result.skills == ("Backend",)
        assert result.method == "keywords"

    @pytest.mark.asyncio
    async def test_vendor_error_falls_back_to_keywords(self):
        service = SkillInferenceService(StubProvider(error=RuntimeError("quota exceeded")))
        assert await service.infer_skills(PROFILE_TITLE) == ("Frontend", "Backend")

    @pytest.mark.asyncio
    async def test_unparseable_response_falls_back_to_keywords(self):
        service = SkillInferenceService(StubProvider("Sorry, I can't help with that."))
        result = await service.infer(DB_TITLE)
        assert result == await SkillInferenceService(None).infer(DB_TITLE)
        assert result.skills == classify(DB_TITLE)

    @pytest.mark.asyncio
    async def test_empty_response_falls_back_to_keywords(self):
        service = SkillInferenceService(StubProvider(""))
        assert await service.infer_skills("Refactor the pricing module") == ("Frontend", "Backend")

    @pytest.mark.asyncio
    async def test_no_provider_uses_keywords(self):
        service = SkillInferenceService(None)
        result = await service.infer(PROFILE_TITLE)
        assert result.skills == ("Frontend", "Backend")
        assert result.method == "keywords"

    @pytest.mark.asyncio
    async def test_never_empty(self):
        service = SkillInferenceService(StubProvider(error=TimeoutError()))
        for title in ["", "?", "Something vague"]:
            assert await service.infer_skills(title)

    @pytest.mark.asyncio
    async def test_single_call_no_retry(self):
        provider = StubProvider(error=httpx.ReadTimeout("slow"))
        service = SkillInferenceService(provider)
        await service.infer_skills(DB_TITLE)
        assert len(provider.calls) == 1

    @pytest.mark.asyncio
    async def test_sends_prompt_and_config(self):
        provider = StubProvider('{"skills": ["Backend"]}')
        config = LLMConfig(model="m", max_tokens=64)
        service = SkillInferenceService(provider, llm_config=config)
        await service.infer_skills(DB_TITLE)
        messages, sent_config = provider.calls[0]
        assert messages[0].role == "system"
        assert messages[-1].role == "user"
        assert DB_TITLE in messages[-1].content
        assert sent_config is config

    @pytest.mark.asyncio
    async def test_custom_vocabulary_passed_to_parser(self):
        provider = StubProvider('{"skills": ["QA", "Frontend"]}')
        service = SkillInferenceService(provider, vocabulary=("QA", "DevOps"))
        assert await service.infer_skills("Write e2e tests") == ("QA",)
        assert service.vocabulary == ("QA", "DevOps")
