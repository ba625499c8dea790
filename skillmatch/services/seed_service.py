"""Reference data for a fresh database."""

from __future__ import annotations

import logging

from skillmatch.models.skill import SkillTag
from skillmatch.services.developer_service import DeveloperService
from skillmatch.services.skill_service import SkillService
from skillmatch.services.task_service import TaskService

logger = logging.getLogger(__name__)

FRONTEND = SkillTag.FRONTEND.value
BACKEND = SkillTag.BACKEND.value

SEED_DEVELOPERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Alice", (FRONTEND,)),
    ("Bob", (BACKEND,)),
    ("Carol", (FRONTEND, BACKEND)),
    ("Dave", (BACKEND,)),
)

SEED_TASKS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        "As a visitor, I want to see a responsive homepage so that I can easily "
        "navigate on both desktop and mobile devices.",
        (FRONTEND,),
    ),
    (
        "As a system administrator, I want audit logs of all data access and "
        "modifications so that I can ensure compliance with data protection "
        "regulations and investigate any security incidents.",
        (BACKEND,),
    ),
    (
        "As a logged-in user, I want to update my profile information and upload "
        "a profile picture so that my account details are accurate and personalized.",
        (FRONTEND, BACKEND),
    ),
)


async def seed_reference_data(
    skill_service: SkillService,
    developer_service: DeveloperService,
    task_service: TaskService,
) -> dict:
    """Create the reference skills, developers and sample tasks.

    Safe to re-run: existing skills and developers are kept, and sample
    tasks are only added to an empty task list.
    """
    counts = {"skills": 0, "developers": 0, "tasks": 0}

    existing_skills = {s.name for s in await skill_service.list_skills()}
    for tag in SkillTag:
        if tag.value not in existing_skills:
            await skill_service.create_skill(tag.value)
            counts["skills"] += 1

    existing_developers = {d.name for d in await developer_service.list_developers()}
    for name, skills in SEED_DEVELOPERS:
        if name not in existing_developers:
            await developer_service.create_developer(name, skills=skills)
            counts["developers"] += 1

    _, total = await task_service.list_tasks(limit=1)
    if total == 0:
        for title, skills in SEED_TASKS:
            await task_service.create_task(title, skills=skills)
            counts["tasks"] += 1

    logger.info("Seed complete: %s", counts)
    return counts
