"""Developer repository - MongoDB CRUD for developers."""

from __future__ import annotations

import logging

import pymongo

from skillmatch.infra.db.counters import CounterRepo
from skillmatch.models.developer import Developer

logger = logging.getLogger(__name__)


class DeveloperRepo:
    """CRUD operations for developers in MongoDB."""

    COLLECTION = "developers"

    def __init__(self, db) -> None:
        self._col = db[self.COLLECTION]
        self._counters = CounterRepo(db)

    async def insert(self, developer: Developer) -> Developer:
        """Insert a new developer. Returns developer with assigned id."""
        developer_id = await self._counters.next_id(self.COLLECTION)
        created = Developer(
            id=developer_id,
            name=developer.name,
            skills=developer.skills,
            created_at=developer.created_at,
        )
        await self._col.insert_one(created.to_doc())
        return created

    async def find_by_id(self, developer_id: int) -> Developer | None:
        doc = await self._col.find_one({"_id": developer_id})
        return Developer.from_doc(doc) if doc else None

    async def find_by_name(self, name: str) -> Developer | None:
        doc = await self._col.find_one({"name": name})
        return Developer.from_doc(doc) if doc else None

    async def list_developers(self) -> list[Developer]:
        cursor = self._col.find({}).sort("name", pymongo.ASCENDING)
        return [Developer.from_doc(doc) async for doc in cursor]

    async def add_skill(self, developer_id: int, skill_name: str) -> Developer | None:
        """Add a skill name to a developer's skill set."""
        result = await self._col.find_one_and_update(
            {"_id": developer_id},
            {"$addToSet": {"skills": skill_name}},
            return_document=True,
        )
        return Developer.from_doc(result) if result else None
