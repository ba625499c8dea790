"""Skill repository - MongoDB CRUD for skills."""

from __future__ import annotations

import logging

import pymongo

from skillmatch.infra.db.counters import CounterRepo
from skillmatch.models.skill import Skill

logger = logging.getLogger(__name__)


class SkillRepo:
    """CRUD operations for skills in MongoDB."""

    COLLECTION = "skills"

    def __init__(self, db) -> None:
        self._col = db[self.COLLECTION]
        self._counters = CounterRepo(db)

    async def insert(self, skill: Skill) -> Skill:
        """Insert a new skill. Returns skill with assigned id."""
        skill_id = await self._counters.next_id(self.COLLECTION)
        created = Skill(id=skill_id, name=skill.name)
        await self._col.insert_one(created.to_doc())
        return created

    async def find_by_name(self, name: str) -> Skill | None:
        doc = await self._col.find_one({"name": name})
        return Skill.from_doc(doc) if doc else None

    async def find_by_names(self, names: list[str]) -> list[Skill]:
        """Find every skill whose name is in names."""
        cursor = self._col.find({"name": {"$in": list(names)}})
        return [Skill.from_doc(doc) async for doc in cursor]

    async def list_skills(self) -> list[Skill]:
        cursor = self._col.find({}).sort("name", pymongo.ASCENDING)
        return [Skill.from_doc(doc) async for doc in cursor]
