"""Dependency graph errors.

All three are raised by TaskDependencyService.add_dependency before the
edge store is modified.
"""

from __future__ import annotations

from collections.abc import Sequence

from taskflow.domain.exceptions import TaskflowError
from taskflow.domain.models.validation_issue import IssueCode


class DependencyError(TaskflowError):
    """Base error for dependency graph operations."""

    code: IssueCode

    def __init__(self, task_id: str, depends_on_task_id: str, message: str) -> None:
        self.task_id = task_id
        self.depends_on_task_id = depends_on_task_id
        super().__init__(message)

    def to_dict(self) -> dict[str, object]:
        data = super().to_dict()
        data.update(
            {
                "code": self.code.value,
                "task_id": self.task_id,
                "depends_on_task_id": self.depends_on_task_id,
            }
        )
        return data


class SelfDependencyError(DependencyError):
    """Raised when a task is asked to depend on itself."""

    code = IssueCode.SELF_DEPENDENCY

    def __init__(self, task_id: str) -> None:
        super().__init__(task_id, task_id, f"Task {task_id} cannot depend on itself")


class DuplicateDependencyError(DependencyError):
    """Raised when an edge with the same (task, prerequisite) pair exists."""

    code = IssueCode.DEPENDENCY_EXISTS

    def __init__(self, task_id: str, depends_on_task_id: str) -> None:
        super().__init__(
            task_id,
            depends_on_task_id,
            f"Dependency already exists: {task_id} depends on {depends_on_task_id}",
        )


class CycleDetectedError(DependencyError):
    """Raised when a BLOCKS edge would close a directed cycle.

    Attributes:
        path: Cycle path, starting and ending at the dependent task.
    """

    code = IssueCode.CIRCULAR_DEPENDENCY

    def __init__(
        self,
        task_id: str,
        depends_on_task_id: str,
        path: Sequence[str],
        description: str | None = None,
    ) -> None:
        self.path = tuple(path)
        super().__init__(
            task_id,
            depends_on_task_id,
            description
            or "Adding this dependency would create a circular dependency: "
            + " -> ".join(self.path),
        )

    def to_dict(self) -> dict[str, object]:
        data = super().to_dict()
        data["path"] = list(self.path)
        return data
