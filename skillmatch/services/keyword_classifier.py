"""Deterministic keyword-based skill classification.

Used when the LLM is unavailable or its answer cannot be parsed. Each rule
pairs a skill tag with a whole-word keyword pattern; rules are evaluated
independently and every matching tag is returned. A title that matches no
rule requires every known skill.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from skillmatch.models.skill import SkillTag

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeywordRule:
    """A skill tag and the compiled keyword pattern that implies it."""

    tag: str
    pattern: re.Pattern

    @classmethod
    def from_keywords(cls, tag: str, keywords: Iterable[str]) -> KeywordRule:
        alternatives = "|".join(re.escape(k) for k in keywords)
        return cls(tag=tag, pattern=re.compile(rf"\b(?:{alternatives})\b", re.IGNORECASE))

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


UI_KEYWORDS = (
    "form", "button", "page", "display", "view", "ui", "interface", "responsive",
    "animation", "navigation", "layout", "component", "design", "visual",
    "front-end", "frontend", "client-side", "upload", "picture", "image", "photo",
    "file", "input", "select", "dropdown", "modal", "dialog", "menu",
)

DATA_KEYWORDS = (
    "save", "update", "delete", "create", "store", "persist", "database", "api",
    "server", "backend", "back-end", "endpoint", "process", "authenticate",
    "authorize", "audit", "log", "migration", "backup", "sync", "modify",
    "change", "edit", "submit", "send", "post", "record",
)

DEFAULT_KEYWORD_RULES: tuple[KeywordRule, ...] = (
    KeywordRule.from_keywords(SkillTag.FRONTEND.value, UI_KEYWORDS),
    KeywordRule.from_keywords(SkillTag.BACKEND.value, DATA_KEYWORDS),
)


def classify(title: str, rules: Sequence[KeywordRule] = DEFAULT_KEYWORD_RULES) -> tuple[str, ...]:
    """Return the skill tags implied by keywords in title, in rule order.

    Never empty: when no rule matches, all tags are returned.
    """
    all_tags = tuple(dict.fromkeys(rule.tag for rule in rules))
    matched = tuple(dict.fromkeys(rule.tag for rule in rules if rule.matches(title)))
    if matched:
        return matched
    logger.info("No clear skill indicators in %r, requiring all skills", title)
    return all_tags
