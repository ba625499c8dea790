"""MongoDB index creation."""

from __future__ import annotations

import logging

import pymongo

logger = logging.getLogger(__name__)


async def run_migrations(db) -> None:
    """Create indexes on startup."""
    logger.info("Running MongoDB migrations...")

    skills = db["skills"]
    await skills.create_index([("name", pymongo.ASCENDING)], unique=True)

    developers = db["developers"]
    await developers.create_index([("name", pymongo.ASCENDING)], unique=True)
    await developers.create_index([("skills", pymongo.ASCENDING)])

    tasks = db["tasks"]
    await tasks.create_index([("parent_task_id", pymongo.ASCENDING)])
    await tasks.create_index([("developer_id", pymongo.ASCENDING)])
    await tasks.create_index([("status", pymongo.ASCENDING), ("created_at", pymongo.DESCENDING)])
    await tasks.create_index([("skills", pymongo.ASCENDING)])

    logger.info("MongoDB migrations complete")
