"""Dependency store port.

The dependency store is owned by the workflow core and is the single
source of truth for the graph. Writers that must check-then-insert do so
inside `exclusive()`, which serialises them against every other writer of
the edge set (an asyncio lock in memory, a transaction plus table lock in
PostgreSQL). Reads issued inside the scope see the same snapshot the
insert commits against.
"""

from __future__ import annotations

from collections.abc import Iterable
from contextlib import AbstractAsyncContextManager
from typing import Protocol

from taskflow.domain.models.task_dependency import TaskDependency


class DependencyRepositoryProtocol(Protocol):
    """Contract for persisting dependency edges."""

    def exclusive(self) -> AbstractAsyncContextManager[None]:
        """Scope in which reads and the insert are atomic w.r.t. other writers."""
        ...

    async def create(self, dependency: TaskDependency) -> None:
        """Insert an edge.

        Raises:
            DuplicateDependencyError: If (task_id, depends_on_task_id) exists.
        """
        ...

    async def get(self, dependency_id: str) -> TaskDependency | None:
        ...

    async def find_by_tasks(
        self, task_id: str, depends_on_task_id: str
    ) -> TaskDependency | None:
        ...

    async def delete(self, dependency_id: str) -> bool:
        """Delete by id; returns False if nothing was deleted."""
        ...

    async def delete_by_tasks(self, task_id: str, depends_on_task_id: str) -> bool:
        ...

    async def list_dependencies(self, task_id: str) -> list[TaskDependency]:
        """Edges where `task_id` is the dependent (its prerequisites)."""
        ...

    async def list_dependents(self, task_id: str) -> list[TaskDependency]:
        """Edges where `task_id` is the prerequisite."""
        ...

    async def list_touching(self, task_ids: Iterable[str]) -> list[TaskDependency]:
        """Edges with either endpoint in `task_ids`."""
        ...

    async def list_blocking_edges(self) -> list[TaskDependency]:
        """Every BLOCKS edge (cycle detection input)."""
        ...

    async def count(self) -> int:
        ...
