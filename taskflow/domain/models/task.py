"""Task snapshot as seen by the workflow core.

Tasks are owned by an external persistence collaborator. The core reads
them through TaskRepositoryProtocol and only mutates the status and
blocking fields through the workflow engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class Task:
    """Immutable snapshot of an externally persisted task.

    Attributes:
        id: Task identifier.
        project_id: Owning project.
        title: Display title.
        status: Current workflow status name.
        code: Short human code (e.g. "OPS-12"), may be empty.
        department_id: Department used for enforcement lookup.
        owner_id: Accountable owner (single user id).
        assignee_ids: Users working on the task.
        blocked_reason: Why the task is blocked (None unless blocked).
        blocked_at: When the task entered the blocked status.
        blocked_by: Who blocked the task.
    """

    id: str
    project_id: str
    title: str
    status: str
    code: str = ""
    department_id: str | None = None
    owner_id: str | None = None
    assignee_ids: tuple[str, ...] = field(default_factory=tuple)
    blocked_reason: str | None = None
    blocked_at: datetime | None = None
    blocked_by: str | None = None

    @property
    def display_name(self) -> str:
        """Code if set, then title, then id."""
        return self.code or self.title or self.id

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "project_id": self.project_id,
            "title": self.title,
            "status": self.status,
            "code": self.code,
            "department_id": self.department_id,
            "owner_id": self.owner_id,
            "assignee_ids": list(self.assignee_ids),
            "blocked_reason": self.blocked_reason,
            "blocked_at": self.blocked_at.isoformat() if self.blocked_at else None,
            "blocked_by": self.blocked_by,
        }


@dataclass(frozen=True)
class TaskSummary:
    """The slice of a task shown next to a dependency edge or graph node."""

    id: str
    code: str
    title: str
    status: str

    @classmethod
    def from_task(cls, task: Task) -> TaskSummary:
        return cls(id=task.id, code=task.code, title=task.title, status=task.status)

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "code": self.code,
            "title": self.title,
            "status": self.status,
        }
