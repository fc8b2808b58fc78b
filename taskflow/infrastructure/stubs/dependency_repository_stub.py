"""In-memory dependency edge store."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager

from taskflow.application.ports.dependency_repository import (
    DependencyRepositoryProtocol,
)
from taskflow.domain.errors import DuplicateDependencyError
from taskflow.domain.models.task_dependency import TaskDependency


class DependencyRepositoryStub(DependencyRepositoryProtocol):
    """In-memory stub for DependencyRepositoryProtocol.

    `exclusive()` is a single asyncio.Lock over the whole edge set. It is
    not re-entrant: methods called inside the scope never take it.
    """

    def __init__(self) -> None:
        self._edges: dict[str, TaskDependency] = {}
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def exclusive(self) -> AsyncIterator[None]:
        async with self._lock:
            yield

    async def create(self, dependency: TaskDependency) -> None:
        if self._find(dependency.task_id, dependency.depends_on_task_id) is not None:
            raise DuplicateDependencyError(
                dependency.task_id, dependency.depends_on_task_id
            )
        self._edges[dependency.id] = dependency

    async def get(self, dependency_id: str) -> TaskDependency | None:
        return self._edges.get(dependency_id)

    async def find_by_tasks(
        self, task_id: str, depends_on_task_id: str
    ) -> TaskDependency | None:
        return self._find(task_id, depends_on_task_id)

    async def delete(self, dependency_id: str) -> bool:
        return self._edges.pop(dependency_id, None) is not None

    async def delete_by_tasks(self, task_id: str, depends_on_task_id: str) -> bool:
        edge = self._find(task_id, depends_on_task_id)
        if edge is None:
            return False
        del self._edges[edge.id]
        return True

    async def list_dependencies(self, task_id: str) -> list[TaskDependency]:
        return [e for e in self._edges.values() if e.task_id == task_id]

    async def list_dependents(self, task_id: str) -> list[TaskDependency]:
        return [e for e in self._edges.values() if e.depends_on_task_id == task_id]

    async def list_touching(self, task_ids: Iterable[str]) -> list[TaskDependency]:
        wanted = set(task_ids)
        return [
            e
            for e in self._edges.values()
            if e.task_id in wanted or e.depends_on_task_id in wanted
        ]

    async def list_blocking_edges(self) -> list[TaskDependency]:
        return [e for e in self._edges.values() if e.is_blocking]

    async def count(self) -> int:
        return len(self._edges)

    def all_edges(self) -> list[TaskDependency]:
        return list(self._edges.values())

    def _find(self, task_id: str, depends_on_task_id: str) -> TaskDependency | None:
        for edge in self._edges.values():
            if edge.task_id == task_id and edge.depends_on_task_id == depends_on_task_id:
                return edge
        return None

    def clear(self) -> None:
        self._edges.clear()
