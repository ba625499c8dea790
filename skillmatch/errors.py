"""Exceptions raised by the task services.

Policy violations are requests that are well-formed but break a task rule;
not-found errors are requests that reference a record that does not exist.
"""

from __future__ import annotations


class TaskPolicyError(ValueError):
    """A state transition that a task rule forbids."""


class IncompleteSubtasksError(TaskPolicyError):
    def __init__(self, task_id: int | None, subtask_ids: tuple[int, ...]) -> None:
        self.task_id = task_id
        self.subtask_ids = subtask_ids
        ids = ", ".join(str(i) for i in subtask_ids)
        super().__init__(
            f"Cannot mark task {task_id} as done: incomplete subtasks ({ids}). "
            "All subtasks must be completed first."
        )


class MissingSkillsError(TaskPolicyError):
    def __init__(self, developer_id: int | None, task_id: int | None, missing: tuple[str, ...]) -> None:
        self.developer_id = developer_id
        self.task_id = task_id
        self.missing = missing
        super().__init__(
            f"Developer {developer_id} does not have the required skills for task "
            f"{task_id}: missing skills {', '.join(missing)}"
        )


class NotFoundError(LookupError):
    """A referenced record does not exist."""

    kind = "Record"

    def __init__(self, key) -> None:
        self.key = key
        super().__init__(f"{self.kind} not found: {key}")

    def __str__(self) -> str:
        return self.args[0]


class TaskNotFoundError(NotFoundError):
    kind = "Task"


class DeveloperNotFoundError(NotFoundError):
    kind = "Developer"


class SkillNotFoundError(NotFoundError):
    kind = "Skill"
