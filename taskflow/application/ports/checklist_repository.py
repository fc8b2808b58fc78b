"""Checklist item repository port.

Checklist items live with the task records in the external store.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from taskflow.domain.models.checklist import ChecklistItem


class ChecklistItemRepositoryProtocol(Protocol):
    """Contract for checklist item access."""

    async def get_item(self, item_id: str) -> ChecklistItem | None:
        ...

    async def list_items_for_task(self, task_id: str) -> list[ChecklistItem]:
        """Items of a task ordered by position."""
        ...

    async def add_item(self, item: ChecklistItem) -> ChecklistItem:
        ...

    async def update_item(self, item_id: str, fields: Mapping[str, Any]) -> ChecklistItem:
        """Apply field updates (last write wins) and return the item.

        Raises:
            NotFoundError: If the item does not exist.
        """
        ...
