"""Developer domain model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class Developer:
    """A developer and the names of the skills they have."""

    name: str
    skills: tuple[str, ...] = ()
    created_at: datetime | None = None
    id: int | None = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Developer name cannot be empty")

    @classmethod
    def create(cls, name: str, skills: tuple[str, ...] = ()) -> Developer:
        return cls(
            name=name.strip(),
            skills=tuple(dict.fromkeys(skills)),
            created_at=datetime.now(timezone.utc),
        )

    def to_doc(self) -> dict:
        """Serialize to MongoDB document."""
        doc: dict = {
            "name": self.name,
            "skills": list(self.skills),
            "created_at": self.created_at or datetime.now(timezone.utc),
        }
        if self.id is not None:
            doc["_id"] = self.id
        return doc

    @classmethod
    def from_doc(cls, doc: dict) -> Developer:
        """Deserialize from MongoDB document."""
        return cls(
            id=doc["_id"],
            name=doc["name"],
            skills=tuple(doc.get("skills", [])),
            created_at=doc.get("created_at"),
        )
