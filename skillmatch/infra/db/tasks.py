"""Task repository - MongoDB CRUD for tasks."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone

import pymongo

from skillmatch.infra.db.counters import CounterRepo
from skillmatch.models.task import Task, TaskStatus

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


class TaskRepo:
    """CRUD operations for tasks in MongoDB."""

    COLLECTION = "tasks"

    def __init__(self, db) -> None:
        self._col = db[self.COLLECTION]
        self._counters = CounterRepo(db)

    async def insert(self, task: Task) -> Task:
        """Insert a new task. Returns task with assigned id."""
        task_id = await self._counters.next_id(self.COLLECTION)
        created = Task(
            id=task_id,
            title=task.title,
            status=task.status,
            parent_task_id=task.parent_task_id,
            developer_id=task.developer_id,
            skills=task.skills,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )
        await self._col.insert_one(created.to_doc())
        return created

    async def find_by_id(self, task_id: int) -> Task | None:
        doc = await self._col.find_one({"_id": task_id})
        return Task.from_doc(doc) if doc else None

    async def find_children(self, parent_task_id: int) -> list[Task]:
        """Direct subtasks of a task, oldest first."""
        cursor = self._col.find({"parent_task_id": parent_task_id}).sort("_id", pymongo.ASCENDING)
        return [Task.from_doc(doc) async for doc in cursor]

    async def find_by_developer(self, developer_id: int) -> list[Task]:
        cursor = self._col.find({"developer_id": developer_id}).sort("_id", pymongo.ASCENDING)
        return [Task.from_doc(doc) async for doc in cursor]

    def _build_query(
        self,
        status: TaskStatus | None = None,
        developer_id: int | None = None,
        skills: tuple[str, ...] = (),
        search: str = "",
    ) -> dict:
        query: dict = {"parent_task_id": None}
        if status:
            query["status"] = status.value
        if developer_id is not None:
            query["developer_id"] = developer_id
        if skills:
            query["skills"] = {"$all": list(skills)}
        if search:
            query["title"] = {"$regex": re.escape(search), "$options": "i"}
        return query

    async def list_tasks(
        self,
        status: TaskStatus | None = None,
        developer_id: int | None = None,
        skills: tuple[str, ...] = (),
        search: str = "",
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[Task], int]:
        """List top-level tasks, newest first. Returns (page of tasks, total count).

        ``skills`` matches tasks that require all of the given skill names.
        """
        query = self._build_query(status, developer_id, skills, search)
        limit = max(1, min(limit, MAX_PAGE_SIZE))
        page = max(1, page)
        total = await self._col.count_documents(query)
        cursor = (
            self._col.find(query)
            .sort("created_at", pymongo.DESCENDING)
            .skip((page - 1) * limit)
            .limit(limit)
        )
        return [Task.from_doc(doc) async for doc in cursor], total

    async def update(self, task_id: int, updates: dict) -> Task | None:
        """Update arbitrary fields on a task."""
        result = await self._col.find_one_and_update(
            {"_id": task_id},
            {"$set": {**updates, "updated_at": datetime.now(timezone.utc)}},
            return_document=True,
        )
        return Task.from_doc(result) if result else None
