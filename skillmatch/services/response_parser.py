"""Extract skill tags from raw LLM output.

Tried in order, first non-empty result wins:

1. the first brace-delimited JSON object in the text, reading its ``skills`` list
2. whole-word, case-insensitive mentions of each tag anywhere in the text

If neither yields a tag, ``parse_skills`` returns None and the caller falls
back to keyword classification. Malformed input is expected and never raises.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass

from skillmatch.models.skill import order_by_vocabulary

logger = logging.getLogger(__name__)

_decoder = json.JSONDecoder()


@dataclass(frozen=True)
class ParsedSkills:
    """Skills read from an LLM response and the method that found them."""

    skills: tuple[str, ...]
    method: str  # "json" or "text"


def _first_json_object(text: str) -> dict | None:
    """Decode the first JSON object embedded in text, if any."""
    start = text.find("{")
    while start != -1:
        try:
            obj, _ = _decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            obj = None
        if isinstance(obj, dict):
            return obj
        start = text.find("{", start + 1)
    return None


def extract_structured(text: str, valid_tags: Sequence[str]) -> tuple[str, ...]:
    """Return the valid tags listed under ``skills`` in the first JSON object."""
    obj = _first_json_object(text)
    if obj is None:
        return ()
    raw = obj.get("skills")
    if not isinstance(raw, list):
        return ()
    valid = set(valid_tags)
    found = [s for s in raw if isinstance(s, str) and s in valid]
    return order_by_vocabulary(found, valid_tags)


def extract_mentions(text: str, valid_tags: Sequence[str]) -> tuple[str, ...]:
    """Return every valid tag mentioned as a whole word, in vocabulary order."""
    found = [
        tag for tag in valid_tags
        if re.search(rf"\b{re.escape(tag)}\b", text, re.IGNORECASE)
    ]
    return tuple(dict.fromkeys(found))


def parse_skills(text: str, valid_tags: Sequence[str]) -> ParsedSkills | None:
    """Extract skills from an LLM response, or None if none can be found."""
    if not text:
        return None

    skills = extract_structured(text, valid_tags)
    if skills:
        return ParsedSkills(skills=skills, method="json")
    logger.debug("No structured skills in response, searching text")

    skills = extract_mentions(text, valid_tags)
    if skills:
        return ParsedSkills(skills=skills, method="text")

    return None
