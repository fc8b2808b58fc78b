"""Checklist state history port (append-only)."""

from __future__ import annotations

from typing import Protocol

from taskflow.domain.models.checklist import ChecklistStateHistoryEntry


class ChecklistHistoryRepositoryProtocol(Protocol):
    """Append-only store of checklist completion flips, newest first."""

    async def append(self, entry: ChecklistStateHistoryEntry) -> None:
        ...

    async def list_for_task(self, task_id: str) -> list[ChecklistStateHistoryEntry]:
        ...

    async def list_for_item(self, item_id: str) -> list[ChecklistStateHistoryEntry]:
        ...

    async def latest_for_item(self, item_id: str) -> ChecklistStateHistoryEntry | None:
        ...

    async def list_by_actor(
        self, actor_id: str, limit: int, offset: int = 0
    ) -> list[ChecklistStateHistoryEntry]:
        ...

    async def count_for_item(self, item_id: str) -> int:
        ...
