"""Cycle detection over the persisted BLOCKS edge set.

Loads the current BLOCKS edges from the dependency store and runs the
iterative traversal from `taskflow.domain.services.dependency_graph`.
When called inside `DependencyRepositoryProtocol.exclusive()`, the edge
snapshot is the one the subsequent insert commits against.
"""

from __future__ import annotations

from collections.abc import Sequence

from taskflow.application.ports.dependency_repository import (
    DependencyRepositoryProtocol,
)
from taskflow.application.ports.task_repository import TaskRepositoryProtocol
from taskflow.domain.models.task_dependency import CycleDetectionResult
from taskflow.domain.services.dependency_graph import (
    build_adjacency,
    cycle_path_for_new_edge,
)

CYCLE_MESSAGE_PREFIX = "Adding this dependency would create a circular dependency: "


class CycleDetector:
    """Decides whether a proposed BLOCKS edge would close a cycle."""

    def __init__(
        self,
        dependency_repository: DependencyRepositoryProtocol,
        task_repository: TaskRepositoryProtocol,
    ) -> None:
        self._dependency_repository = dependency_repository
        self._task_repository = task_repository

    async def detect(self, task_id: str, depends_on_task_id: str) -> CycleDetectionResult:
        """Check the edge (task_id depends on depends_on_task_id).

        Returns:
            CycleDetectionResult with the path (starting and ending at
            `task_id`) and a description rendered with task codes.
        """
        edges = await self._dependency_repository.list_blocking_edges()
        path = cycle_path_for_new_edge(task_id, depends_on_task_id, build_adjacency(edges))
        if path is None:
            return CycleDetectionResult(would_cycle=False)
        return CycleDetectionResult(
            would_cycle=True,
            path=path,
            description=await self.describe(path),
        )

    async def describe(self, path: Sequence[str]) -> str:
        """Render a path with task codes, falling back to titles, then ids."""
        names: dict[str, str] = {}
        for task_id in path:
            if task_id in names:
                continue
            task = await self._task_repository.get_task_by_id(task_id)
            names[task_id] = task.display_name if task is not None else task_id
        return CYCLE_MESSAGE_PREFIX + " -> ".join(names[task_id] for task_id in path)
