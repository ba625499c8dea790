"""Developer business logic service."""

from __future__ import annotations

import logging

from skillmatch.errors import DeveloperNotFoundError
from skillmatch.infra.db.developers import DeveloperRepo
from skillmatch.infra.db.tasks import TaskRepo
from skillmatch.models.developer import Developer
from skillmatch.models.task import Task
from skillmatch.services.skill_service import SkillService

logger = logging.getLogger(__name__)


class DeveloperService:
    """Business logic for developers and their skills."""

    def __init__(
        self,
        developer_repo: DeveloperRepo,
        skill_service: SkillService,
        task_repo: TaskRepo,
    ) -> None:
        self._repo = developer_repo
        self._skills = skill_service
        self._task_repo = task_repo

    async def create_developer(self, name: str, skills: tuple[str, ...] = ()) -> Developer:
        """Create a developer with the given (existing) skill names."""
        developer = Developer.create(name, skills=await self._skills.resolve_names(skills))
        existing = await self._repo.find_by_name(developer.name)
        if existing:
            raise ValueError(f"Developer '{developer.name}' already exists")
        created = await self._repo.insert(developer)
        logger.info("Created developer: %s (%s) skills=%s", created.name, created.id, list(created.skills))
        return created

    async def get_developer(self, developer_id: int) -> Developer | None:
        return await self._repo.find_by_id(developer_id)

    async def list_developers(self) -> list[Developer]:
        return await self._repo.list_developers()

    async def list_developers_with_tasks(self) -> list[tuple[Developer, list[Task]]]:
        """Every developer, ordered by name, with the tasks assigned to them."""
        result = []
        for developer in await self._repo.list_developers():
            tasks = await self._task_repo.find_by_developer(developer.id)
            result.append((developer, tasks))
        return result

    async def get_developer_tasks(self, developer_id: int) -> list[Task]:
        if await self._repo.find_by_id(developer_id) is None:
            raise DeveloperNotFoundError(developer_id)
        return await self._task_repo.find_by_developer(developer_id)

    async def add_skill(self, developer_id: int, skill_name: str) -> Developer:
        """Give a developer an existing skill."""
        (name,) = await self._skills.resolve_names((skill_name,))
        developer = await self._repo.add_skill(developer_id, name)
        if developer is None:
            raise DeveloperNotFoundError(developer_id)
        logger.info("Added skill %s to developer %s", name, developer_id)
        return developer
