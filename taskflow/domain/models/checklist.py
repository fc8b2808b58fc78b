"""Checklist items and their state-change history."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class ChecklistAction(str, Enum):
    CHECKED = "CHECKED"
    UNCHECKED = "UNCHECKED"


@dataclass(frozen=True)
class ChecklistItem:
    """A checklist entry attached to a task.

    Attributes:
        id: Item identifier.
        task_id: Owning task.
        text: Item text.
        is_mandatory: Must be completed before the task can be completed
            (subject to the enforcement mode).
        is_completed: Current completion state.
        position: Display order within the task.
        completed_by: Set when the item flips to completed.
        unchecked_by: Set when the item flips back to not completed.
        unchecked_reason: Optional reason given when unchecking.
    """

    id: str
    task_id: str
    text: str
    is_mandatory: bool = False
    is_completed: bool = False
    position: int = 0
    completed_by: str | None = None
    unchecked_by: str | None = None
    unchecked_reason: str | None = None

    @property
    def is_outstanding_mandatory(self) -> bool:
        return self.is_mandatory and not self.is_completed

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "task_id": self.task_id,
            "text": self.text,
            "is_mandatory": self.is_mandatory,
            "is_completed": self.is_completed,
            "position": self.position,
            "completed_by": self.completed_by,
            "unchecked_by": self.unchecked_by,
            "unchecked_reason": self.unchecked_reason,
        }


@dataclass(frozen=True)
class ChecklistStateHistoryEntry:
    """Immutable record of one observed completion flip."""

    id: str
    checklist_item_id: str
    task_id: str
    action: ChecklistAction
    actor_id: str
    actor_name: str | None
    reason: str | None
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "checklist_item_id": self.checklist_item_id,
            "task_id": self.task_id,
            "action": self.action.value,
            "actor_id": self.actor_id,
            "actor_name": self.actor_name,
            "reason": self.reason,
            "created_at": self.created_at.isoformat(),
        }
