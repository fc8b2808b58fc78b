"""Task status history port (append-only)."""

from __future__ import annotations

from typing import Protocol

from taskflow.domain.models.status_history import TaskStatusHistoryEntry


class StatusHistoryRepositoryProtocol(Protocol):
    """Append-only store of status transitions.

    There is no update or delete: history is immutable. Listings are
    newest first.
    """

    async def append(self, entry: TaskStatusHistoryEntry) -> None:
        ...

    async def list_for_task(self, task_id: str) -> list[TaskStatusHistoryEntry]:
        ...

    async def latest_for_task(self, task_id: str) -> TaskStatusHistoryEntry | None:
        ...

    async def list_by_actor(
        self, actor_id: str, limit: int, offset: int = 0
    ) -> list[TaskStatusHistoryEntry]:
        ...
