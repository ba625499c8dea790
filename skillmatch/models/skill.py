"""Skill domain model and the reference skill vocabulary."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SkillTag(str, Enum):
    FRONTEND = "Frontend"
    BACKEND = "Backend"


DEFAULT_VOCABULARY: tuple[str, ...] = tuple(tag.value for tag in SkillTag)


@dataclass(frozen=True)
class Skill:
    """A named capability that developers have and tasks require."""

    name: str
    id: int | None = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Skill name cannot be empty")

    def to_doc(self) -> dict:
        """Serialize to MongoDB document."""
        doc: dict = {"name": self.name}
        if self.id is not None:
            doc["_id"] = self.id
        return doc

    @classmethod
    def from_doc(cls, doc: dict) -> Skill:
        """Deserialize from MongoDB document."""
        return cls(id=doc["_id"], name=doc["name"])


def order_by_vocabulary(names, vocabulary) -> tuple[str, ...]:
    """Deduplicate names, ordering known ones by vocabulary position."""
    position = {name: i for i, name in enumerate(vocabulary)}
    unique = dict.fromkeys(names)
    return tuple(sorted(unique, key=lambda n: position.get(n, len(position))))
