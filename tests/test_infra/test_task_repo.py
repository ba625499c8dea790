"""Tests for TaskRepo with a mocked Motor collection."""

from unittest.mock import AsyncMock

import pytest

from skillmatch.infra.db.tasks import TaskRepo
from skillmatch.models.task import TaskStatus


@pytest.fixture
def collection():
    col = AsyncMock()
    col.find_one_and_update.return_value = {"_id": 1, "title": "Fix Auth", "status": "DONE"}
    return col


@pytest.fixture
def repo(collection):
    return TaskRepo({"tasks": collection, "counters": AsyncMock()})


class TestTaskRepoUpdate:
    @pytest.mark.asyncio
    async def test_caller_updates_left_untouched(self, repo, collection):
        updates = {"status": "DONE"}
        task = await repo.update(1, updates)
        assert updates == {"status": "DONE"}
        assert task.status == TaskStatus.DONE

        query, change = collection.find_one_and_update.call_args[0]
        assert query == {"_id": 1}
        assert change["$set"]["status"] == "DONE"
        assert "updated_at" in change["$set"]

    @pytest.mark.asyncio
    async def test_missing_task(self, repo, collection):
        collection.find_one_and_update.return_value = None
        assert await repo.update(99, {"developer_id": None}) is None
