"""In-memory checklist item store."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from taskflow.application.ports.checklist_repository import (
    ChecklistItemRepositoryProtocol,
)
from taskflow.domain.errors import NotFoundError
from taskflow.domain.models.checklist import ChecklistItem
from taskflow.domain.models.validation_issue import IssueCode


class ChecklistItemRepositoryStub(ChecklistItemRepositoryProtocol):
    """In-memory stub for ChecklistItemRepositoryProtocol."""

    def __init__(self) -> None:
        self._items: dict[str, ChecklistItem] = {}

    def seed(self, *items: ChecklistItem) -> None:
        for item in items:
            self._items[item.id] = item

    async def get_item(self, item_id: str) -> ChecklistItem | None:
        return self._items.get(item_id)

    async def list_items_for_task(self, task_id: str) -> list[ChecklistItem]:
        items = [item for item in self._items.values() if item.task_id == task_id]
        return sorted(items, key=lambda item: item.position)

    async def add_item(self, item: ChecklistItem) -> ChecklistItem:
        self._items[item.id] = item
        return item

    async def update_item(
        self, item_id: str, fields: Mapping[str, Any]
    ) -> ChecklistItem:
        item = self._items.get(item_id)
        if item is None:
            raise NotFoundError(
                "checklist_item", item_id, code=IssueCode.CHECKLIST_ITEM_NOT_FOUND
            )
        updated = replace(item, **dict(fields))
        self._items[item_id] = updated
        return updated

    def clear(self) -> None:
        self._items.clear()
