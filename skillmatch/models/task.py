"""Task domain model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from skillmatch.models.developer import Developer


class TaskStatus(str, Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


@dataclass(frozen=True)
class Task:
    """Unit of work with a title, status, optional parent, assignee and required skills."""

    title: str
    status: TaskStatus = TaskStatus.TODO
    parent_task_id: int | None = None
    developer_id: int | None = None
    skills: tuple[str, ...] = ()
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: int | None = None

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise ValueError("Task title cannot be empty")

    @classmethod
    def create(
        cls,
        title: str,
        skills: tuple[str, ...] = (),
        parent_task_id: int | None = None,
    ) -> Task:
        """Create a new TODO task."""
        return cls(
            title=title.strip(),
            skills=tuple(dict.fromkeys(skills)),
            parent_task_id=parent_task_id,
        )

    @property
    def is_done(self) -> bool:
        return self.status == TaskStatus.DONE

    def to_doc(self) -> dict:
        """Serialize to MongoDB document."""
        doc: dict = {
            "title": self.title,
            "status": self.status.value,
            "parent_task_id": self.parent_task_id,
            "developer_id": self.developer_id,
            "skills": list(self.skills),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
        if self.id is not None:
            doc["_id"] = self.id
        return doc

    @classmethod
    def from_doc(cls, doc: dict) -> Task:
        """Deserialize from MongoDB document."""
        return cls(
            id=doc["_id"],
            title=doc["title"],
            status=TaskStatus(doc.get("status", TaskStatus.TODO.value)),
            parent_task_id=doc.get("parent_task_id"),
            developer_id=doc.get("developer_id"),
            skills=tuple(doc.get("skills", [])),
            created_at=doc.get("created_at", datetime.now(timezone.utc)),
            updated_at=doc.get("updated_at", datetime.now(timezone.utc)),
        )


@dataclass(frozen=True)
class TaskNode:
    """A task together with its assignee and nested subtasks."""

    task: Task
    developer: Developer | None = None
    subtasks: tuple[TaskNode, ...] = ()

    def to_dict(self) -> dict:
        d = self.task.to_doc()
        d["id"] = d.pop("_id", None)
        d["developer"] = self.developer.to_doc() if self.developer is not None else None
        d["subtasks"] = [s.to_dict() for s in self.subtasks]
        return d
