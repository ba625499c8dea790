"""Skill business logic service."""

from __future__ import annotations

import logging

from skillmatch.errors import SkillNotFoundError
from skillmatch.infra.db.skills import SkillRepo
from skillmatch.models.skill import Skill

logger = logging.getLogger(__name__)


class SkillService:
    """Business logic for the skill catalogue."""

    def __init__(self, skill_repo: SkillRepo) -> None:
        self._repo = skill_repo

    async def create_skill(self, name: str) -> Skill:
        """Create a new skill. Names are unique."""
        skill = Skill(name=name.strip())
        existing = await self._repo.find_by_name(skill.name)
        if existing:
            raise ValueError(f"Skill '{skill.name}' already exists")
        created = await self._repo.insert(skill)
        logger.info("Created skill: %s (%s)", created.name, created.id)
        return created

    async def list_skills(self) -> list[Skill]:
        return await self._repo.list_skills()

    async def resolve_names(self, names: tuple[str, ...]) -> tuple[str, ...]:
        """Check every name is a known skill; returns them deduplicated, in order given."""
        wanted = tuple(dict.fromkeys(names))
        found = {s.name for s in await self._repo.find_by_names(list(wanted))}
        for name in wanted:
            if name not in found:
                raise SkillNotFoundError(name)
        return wanted

    async def known_names(self, names: tuple[str, ...]) -> tuple[str, ...]:
        """Filter names down to the skills that exist, keeping order."""
        found = {s.name for s in await self._repo.find_by_names(list(names))}
        return tuple(n for n in dict.fromkeys(names) if n in found)
