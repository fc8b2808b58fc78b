"""Task repository port (external task persistence collaborator).

Task records are owned outside the workflow core. The core reads them and
writes status/blocking/owner fields, always through the workflow engine's
validated transition path.
"""

from __future__ import annotations

from collections.abc import Mapping
from contextlib import AbstractAsyncContextManager
from typing import Any, Protocol

from taskflow.domain.models.task import Task


class TaskRepositoryProtocol(Protocol):
    """Contract for reading and updating tasks."""

    async def get_task_by_id(self, task_id: str) -> Task | None:
        """Return the task, or None if it does not exist."""
        ...

    async def update_task(self, task_id: str, fields: Mapping[str, Any]) -> Task:
        """Apply field updates and return the updated snapshot.

        Field names match Task attributes (status, blocked_reason,
        blocked_at, blocked_by, owner_id).

        Raises:
            NotFoundError: If the task does not exist.
        """
        ...

    async def list_tasks_by_project(self, project_id: str) -> list[Task]:
        """Return every task of a project."""
        ...

    def lock_task(self, task_id: str) -> AbstractAsyncContextManager[None]:
        """Serialise read-validate-write sequences on one task.

        Implementations use a row lock or transaction scope so that two
        concurrent transitions cannot both commit against the same
        `from_status`.
        """
        ...
