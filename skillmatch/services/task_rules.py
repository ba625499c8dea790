"""Task state transition rules.

Pure checks over snapshots the caller has already loaded: completion gating
looks only at a task's direct subtasks, and assignment gating compares skill
names. Neither touches storage.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from skillmatch.models.task import Task


def incomplete_subtasks(subtasks: Sequence[Task]) -> tuple[Task, ...]:
    """Direct subtasks that are not DONE."""
    return tuple(s for s in subtasks if not s.is_done)


def can_transition_to_done(task: Task, subtasks: Sequence[Task]) -> bool:
    """True if task may be marked DONE given its direct subtasks.

    Grandchildren are not consulted, and marking a parent DONE never
    changes its subtasks.
    """
    return not incomplete_subtasks(subtasks)


def missing_skills(developer_skills: Iterable[str], required_skills: Iterable[str]) -> tuple[str, ...]:
    """Required skill names the developer lacks, in required order."""
    have = set(developer_skills)
    return tuple(dict.fromkeys(s for s in required_skills if s not in have))


def can_assign(developer_skills: Iterable[str], required_skills: Iterable[str]) -> bool:
    """True if the developer has every required skill.

    Extra developer skills are irrelevant and an empty requirement is
    satisfied by anyone.
    """
    return not missing_skills(developer_skills, required_skills)
