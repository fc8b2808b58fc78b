"""Task status history entries (append-only audit log)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class TaskStatusHistoryEntry:
    """Immutable record of a status transition.

    `from_status` is None for the synthetic entry written when a task is
    created.
    """

    id: str
    task_id: str
    from_status: str | None
    to_status: str
    changed_by: str
    note: str | None
    created_at: datetime

    @property
    def is_creation(self) -> bool:
        return self.from_status is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "task_id": self.task_id,
            "from_status": self.from_status,
            "to_status": self.to_status,
            "changed_by": self.changed_by,
            "note": self.note,
            "created_at": self.created_at.isoformat(),
        }
