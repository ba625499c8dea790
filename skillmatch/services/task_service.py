"""Task business logic service.

Binds skill inference and the task rules to the repositories. Every gate is
checked against a fresh read before any field is written, so a rejected
update leaves the stored task untouched.
"""

from __future__ import annotations

import logging

from skillmatch.errors import (
    DeveloperNotFoundError,
    IncompleteSubtasksError,
    MissingSkillsError,
    TaskNotFoundError,
)
from skillmatch.infra.db.developers import DeveloperRepo
from skillmatch.infra.db.tasks import TaskRepo
from skillmatch.models.developer import Developer
from skillmatch.models.task import Task, TaskNode, TaskStatus
from skillmatch.services.skill_inference import SkillInferenceService
from skillmatch.services.skill_service import SkillService
from skillmatch.services.task_rules import (
    can_assign,
    can_transition_to_done,
    incomplete_subtasks,
    missing_skills,
)

logger = logging.getLogger(__name__)

_UNSET = object()


class TaskService:
    """Business logic for task management."""

    def __init__(
        self,
        task_repo: TaskRepo,
        developer_repo: DeveloperRepo,
        skill_service: SkillService,
        inference: SkillInferenceService,
    ) -> None:
        self._repo = task_repo
        self._developers = developer_repo
        self._skills = skill_service
        self._inference = inference

    async def create_task(
        self,
        title: str,
        skills: tuple[str, ...] = (),
        parent_task_id: int | None = None,
    ) -> Task:
        """Create a TODO task.

        Without explicit skills, the required skills are inferred from the
        title once, here, and never recomputed.
        """
        if not title or not title.strip():
            raise ValueError("Task title cannot be empty")

        if parent_task_id is not None and await self._repo.find_by_id(parent_task_id) is None:
            raise TaskNotFoundError(parent_task_id)

        if skills:
            required = await self._skills.resolve_names(skills)
        else:
            logger.info("No skills specified, inferring from title")
            inferred = await self._inference.infer_skills(title)
            required = await self._skills.known_names(inferred)
            unknown = [s for s in inferred if s not in required]
            if unknown:
                logger.warning("Inferred skills not in catalogue, ignoring: %s", unknown)

        task = Task.create(title=title, skills=required, parent_task_id=parent_task_id)
        created = await self._repo.insert(task)
        logger.info("Created task %s: %s (skills: %s)", created.id, created.title, list(created.skills))
        return created

    async def get_task_tree(self, task_id: int) -> TaskNode:
        """Load a task with its assignee and all nested subtasks."""
        task = await self._require_task(task_id)
        developers: dict[int, Developer | None] = {}
        return await self._load_node(task, developers)

    async def _load_node(self, task: Task, developers: dict[int, Developer | None]) -> TaskNode:
        developer = None
        if task.developer_id is not None:
            if task.developer_id not in developers:
                developers[task.developer_id] = await self._developers.find_by_id(task.developer_id)
            developer = developers[task.developer_id]
        children = await self._repo.find_children(task.id)
        subtasks = tuple([await self._load_node(child, developers) for child in children])
        return TaskNode(task=task, developer=developer, subtasks=subtasks)

    async def list_tasks(
        self,
        status: TaskStatus | str | None = None,
        developer_id: int | None = None,
        skills: tuple[str, ...] = (),
        search: str = "",
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[Task], int]:
        """List top-level tasks with optional filters. Returns (tasks, total)."""
        if isinstance(status, str):
            status = TaskStatus(status)
        return await self._repo.list_tasks(
            status=status,
            developer_id=developer_id,
            skills=skills,
            search=search.strip(),
            page=page,
            limit=limit,
        )

    async def update_status(self, task_id: int, status: TaskStatus | str) -> Task:
        """Change a task's status; DONE requires every direct subtask DONE."""
        return await self.update_task(task_id, status=status)

    async def assign_developer(self, task_id: int, developer_id: int | None) -> Task:
        """Assign a developer (None unassigns)."""
        return await self.update_task(task_id, developer_id=developer_id)

    async def unassign_developer(self, task_id: int) -> Task:
        return await self.update_task(task_id, developer_id=None)

    async def update_task(
        self,
        task_id: int,
        status: TaskStatus | str | None = None,
        developer_id=_UNSET,
    ) -> Task:
        """Update status and/or assignee after checking both rules.

        ``developer_id=None`` unassigns; leaving it out keeps the assignee.
        """
        task = await self._require_task(task_id)
        updates: dict = {}

        if status is not None:
            status = TaskStatus(status)
            if status == TaskStatus.DONE:
                await self._check_can_complete(task)
            updates["status"] = status.value

        if developer_id is not _UNSET:
            if developer_id is not None:
                await self._check_can_assign(task, developer_id)
            updates["developer_id"] = developer_id

        if not updates:
            return task

        updated = await self._repo.update(task_id, updates)
        if updated is None:
            raise TaskNotFoundError(task_id)
        logger.info("Updated task %s (fields: %s)", task_id, list(updates.keys()))
        return updated

    async def _require_task(self, task_id: int) -> Task:
        task = await self._repo.find_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    async def _check_can_complete(self, task: Task) -> None:
        subtasks = await self._repo.find_children(task.id)
        if not can_transition_to_done(task, subtasks):
            blocking = tuple(s.id for s in incomplete_subtasks(subtasks))
            logger.info("Rejected DONE for task %s: incomplete subtasks %s", task.id, blocking)
            raise IncompleteSubtasksError(task.id, blocking)

    async def _check_can_assign(self, task: Task, developer_id: int) -> None:
        developer = await self._developers.find_by_id(developer_id)
        if developer is None:
            raise DeveloperNotFoundError(developer_id)
        if not can_assign(developer.skills, task.skills):
            missing = missing_skills(developer.skills, task.skills)
            logger.info(
                "Rejected assignment of developer %s to task %s: missing %s",
                developer_id, task.id, list(missing),
            )
            raise MissingSkillsError(developer_id, task.id, missing)
