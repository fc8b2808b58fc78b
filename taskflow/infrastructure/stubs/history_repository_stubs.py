"""In-memory append-only history stores.

Listings are newest first: by `created_at`, then by insertion order for
entries written in the same instant.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from taskflow.application.ports.checklist_history_repository import (
    ChecklistHistoryRepositoryProtocol,
)
from taskflow.application.ports.status_history_repository import (
    StatusHistoryRepositoryProtocol,
)
from taskflow.domain.models.checklist import ChecklistStateHistoryEntry
from taskflow.domain.models.status_history import TaskStatusHistoryEntry

_Entry = TypeVar("_Entry", TaskStatusHistoryEntry, ChecklistStateHistoryEntry)


def _newest_first(
    entries: list[_Entry], predicate: Callable[[_Entry], bool]
) -> list[_Entry]:
    matching = [(seq, e) for seq, e in enumerate(entries) if predicate(e)]
    matching.sort(key=lambda pair: (pair[1].created_at, pair[0]), reverse=True)
    return [entry for _, entry in matching]


class StatusHistoryRepositoryStub(StatusHistoryRepositoryProtocol):
    """In-memory stub for StatusHistoryRepositoryProtocol."""

    def __init__(self) -> None:
        self._entries: list[TaskStatusHistoryEntry] = []

    async def append(self, entry: TaskStatusHistoryEntry) -> None:
        self._entries.append(entry)

    async def list_for_task(self, task_id: str) -> list[TaskStatusHistoryEntry]:
        return _newest_first(self._entries, lambda e: e.task_id == task_id)

    async def latest_for_task(self, task_id: str) -> TaskStatusHistoryEntry | None:
        entries = await self.list_for_task(task_id)
        return entries[0] if entries else None

    async def list_by_actor(
        self, actor_id: str, limit: int, offset: int = 0
    ) -> list[TaskStatusHistoryEntry]:
        entries = _newest_first(self._entries, lambda e: e.changed_by == actor_id)
        return entries[offset : offset + limit]

    def get_entry_count(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()


class ChecklistHistoryRepositoryStub(ChecklistHistoryRepositoryProtocol):
    """In-memory stub for ChecklistHistoryRepositoryProtocol."""

    def __init__(self) -> None:
        self._entries: list[ChecklistStateHistoryEntry] = []

    async def append(self, entry: ChecklistStateHistoryEntry) -> None:
        self._entries.append(entry)

    async def list_for_task(self, task_id: str) -> list[ChecklistStateHistoryEntry]:
        return _newest_first(self._entries, lambda e: e.task_id == task_id)

    async def list_for_item(self, item_id: str) -> list[ChecklistStateHistoryEntry]:
        return _newest_first(self._entries, lambda e: e.checklist_item_id == item_id)

    async def latest_for_item(self, item_id: str) -> ChecklistStateHistoryEntry | None:
        entries = await self.list_for_item(item_id)
        return entries[0] if entries else None

    async def list_by_actor(
        self, actor_id: str, limit: int, offset: int = 0
    ) -> list[ChecklistStateHistoryEntry]:
        entries = _newest_first(self._entries, lambda e: e.actor_id == actor_id)
        return entries[offset : offset + limit]

    async def count_for_item(self, item_id: str) -> int:
        return sum(1 for e in self._entries if e.checklist_item_id == item_id)

    def get_entry_count(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()
