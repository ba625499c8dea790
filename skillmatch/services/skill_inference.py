"""Infer required skills from a task title.

One LLM call per title. The response is parsed for skills; if the call fails
or nothing usable comes back, the keyword classifier decides. The result is
never empty and this service never raises for LLM problems.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from skillmatch.infra.providers.base import LLMProvider
from skillmatch.models.provider import LLMConfig, LLMMessage
from skillmatch.models.skill import DEFAULT_VOCABULARY, SkillTag
from skillmatch.services.keyword_classifier import DEFAULT_KEYWORD_RULES, KeywordRule, classify
from skillmatch.services.response_parser import parse_skills

logger = logging.getLogger(__name__)

SKILL_DESCRIPTIONS: dict[str, str] = {
    SkillTag.FRONTEND.value: (
        "user interface, visual elements and client-side interaction: forms, "
        "responsive layouts, navigation, displaying data, animations"
    ),
    SkillTag.BACKEND.value: (
        "server-side logic, data persistence and APIs: database operations, "
        "business rules, authentication, background processing"
    ),
}

SYSTEM_PROMPT = """\
You are a technical architect deciding which software development skills a \
user story needs. A story that lets a user create, change or delete data \
through the interface needs both the user-facing and the data-handling skill: \
the interface collects input, the server processes and stores it, and the \
interface shows the result."""

PROMPT_TEMPLATE = """\
Available skills:
{skills}

Examples:
- "As a visitor, I want to see a responsive homepage with animations." -> {{"skills": {example_ui}}}
- "As a system, I want automated daily database backups." -> {{"skills": {example_data}}}
- "As a user, I want to update my profile and upload a profile picture." -> {{"skills": {example_both}}}

User story: "{title}"

Respond ONLY with JSON of the form {{"skills": [...]}} using only the skill names above."""


@dataclass(frozen=True)
class SkillInference:
    """Inferred skills and how they were obtained ("json", "text" or "keywords")."""

    skills: tuple[str, ...]
    method: str


def build_prompt(title: str, vocabulary: Sequence[str] = DEFAULT_VOCABULARY) -> str:
    """Build the classification prompt for title over vocabulary."""
    lines = []
    for tag in vocabulary:
        description = SKILL_DESCRIPTIONS.get(tag)
        lines.append(f"- {tag}: {description}" if description else f"- {tag}")
    first = list(vocabulary[:1])
    last = list(vocabulary[-1:])
    return PROMPT_TEMPLATE.format(
        skills="\n".join(lines),
        example_ui=json.dumps(first),
        example_data=json.dumps(last),
        example_both=json.dumps(list(vocabulary)),
        title=title,
    )


class SkillInferenceService:
    """Maps task titles to required skill tags with an LLM and keyword fallback."""

    def __init__(
        self,
        provider: LLMProvider | None,
        vocabulary: Sequence[str] = DEFAULT_VOCABULARY,
        keyword_rules: Sequence[KeywordRule] = DEFAULT_KEYWORD_RULES,
        llm_config: LLMConfig | None = None,
    ) -> None:
        self._provider = provider
        self._vocabulary = tuple(vocabulary)
        self._keyword_rules = tuple(keyword_rules)
        self._llm_config = llm_config or LLMConfig()

    @property
    def vocabulary(self) -> tuple[str, ...]:
        return self._vocabulary

    async def infer_skills(self, title: str) -> tuple[str, ...]:
        """Return the non-empty tuple of skills required by title."""
        result = await self.infer(title)
        return result.skills

    async def infer(self, title: str) -> SkillInference:
        """Infer skills for title, reporting which method produced them."""
        logger.info("Inferring skills for: %s", title)

        text = await self._generate(title)
        if text is not None:
            logger.debug("LLM response: %s", text[:200] + ("..." if len(text) > 200 else ""))
            parsed = parse_skills(text, self._vocabulary)
            if parsed is not None:
                logger.info("Detected skills %s (method: %s)", list(parsed.skills), parsed.method)
                return SkillInference(skills=parsed.skills, method=parsed.method)
            logger.info("Could not parse skills from LLM response, using keywords")

        skills = classify(title, self._keyword_rules)
        logger.info("Detected skills %s (method: keywords)", list(skills))
        return SkillInference(skills=skills, method="keywords")

    async def _generate(self, title: str) -> str | None:
        """Send the prompt once; None if there is no provider or the call fails."""
        if self._provider is None:
            return None
        messages = [
            LLMMessage(role="system", content=SYSTEM_PROMPT),
            LLMMessage(role="user", content=build_prompt(title, self._vocabulary)),
        ]
        try:
            response = await self._provider.complete(messages, self._llm_config)
        except Exception as e:
            logger.warning("LLM skill detection failed: %s. Using keywords", e)
            return None
        return (response.content or "").strip()
