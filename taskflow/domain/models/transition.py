"""Results returned by the workflow engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from taskflow.domain.models.status_history import TaskStatusHistoryEntry
from taskflow.domain.models.task import Task
from taskflow.domain.models.validation_issue import ValidationIssue


@dataclass(frozen=True)
class StatusTransitionResult:
    """Outcome of a status change request.

    Attributes:
        task: Task snapshot after the transition.
        from_status: Status before the request.
        to_status: Requested status.
        changed: False when the request did not change the status.
        warnings: Advisory issues (warn-mode enforcement) surfaced to the
            caller.
    """

    task: Task
    from_status: str
    to_status: str
    changed: bool
    warnings: tuple[ValidationIssue, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "task": self.task.to_dict(),
            "from_status": self.from_status,
            "to_status": self.to_status,
            "changed": self.changed,
            "warnings": [w.to_dict() for w in self.warnings],
        }


@dataclass(frozen=True)
class TaskCreatedResult:
    """Outcome of recording a task's creation.

    Attributes:
        task: The created task.
        history_entry: Synthetic history entry (from_status None).
        warnings: Warn-mode ownership issues.
    """

    task: Task
    history_entry: TaskStatusHistoryEntry
    warnings: tuple[ValidationIssue, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "task": self.task.to_dict(),
            "history_entry": self.history_entry.to_dict(),
            "warnings": [w.to_dict() for w in self.warnings],
        }


@dataclass(frozen=True)
class OwnerChangeResult:
    """Outcome of an owner change."""

    task: Task
    previous_owner_id: str | None
    warnings: tuple[ValidationIssue, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "task": self.task.to_dict(),
            "previous_owner_id": self.previous_owner_id,
            "warnings": [w.to_dict() for w in self.warnings],
        }
