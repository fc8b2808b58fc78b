"""Append-only audit trail of status transitions and checklist flips.

Entries are never updated or deleted. Every listing is newest first.
"""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from taskflow.application.ports.checklist_history_repository import (
    ChecklistHistoryRepositoryProtocol,
)
from taskflow.application.ports.status_history_repository import (
    StatusHistoryRepositoryProtocol,
)
from taskflow.application.services.base import LoggingMixin
from taskflow.config.workflow_config import (
    DEFAULT_WORKFLOW_CONFIG,
    MAX_HISTORY_PAGE_LIMIT,
    WorkflowConfig,
)
from taskflow.domain.models.checklist import ChecklistAction, ChecklistStateHistoryEntry
from taskflow.domain.models.status_history import TaskStatusHistoryEntry


class AuditTrailService(LoggingMixin):
    """Records and queries status and checklist history."""

    def __init__(
        self,
        status_history: StatusHistoryRepositoryProtocol,
        checklist_history: ChecklistHistoryRepositoryProtocol,
        config: WorkflowConfig = DEFAULT_WORKFLOW_CONFIG,
    ) -> None:
        self._status_history = status_history
        self._checklist_history = checklist_history
        self._page_limit = config.status_history_page_limit
        self._init_logger()

    def _page(self, limit: int | None, offset: int) -> tuple[int, int]:
        if limit is None:
            limit = self._page_limit
        return max(1, min(limit, MAX_HISTORY_PAGE_LIMIT)), max(0, offset)

    async def record_status_change(
        self,
        task_id: str,
        from_status: str | None,
        to_status: str,
        changed_by: str,
        note: str | None = None,
        created_at: datetime | None = None,
    ) -> TaskStatusHistoryEntry:
        """Append a status transition (from_status None for creation)."""
        entry = TaskStatusHistoryEntry(
            id=str(uuid4()),
            task_id=task_id,
            from_status=from_status,
            to_status=to_status,
            changed_by=changed_by,
            note=note,
            created_at=created_at or datetime.now(timezone.utc),
        )
        await self._status_history.append(entry)
        self._log_operation("record_status_change", task_id=task_id).debug(
            "status_history_recorded",
            from_status=from_status,
            to_status=to_status,
            changed_by=changed_by,
        )
        return entry

    async def record_checklist_change(
        self,
        checklist_item_id: str,
        task_id: str,
        action: ChecklistAction,
        actor_id: str,
        actor_name: str | None = None,
        reason: str | None = None,
        created_at: datetime | None = None,
    ) -> ChecklistStateHistoryEntry:
        """Append an observed checked/unchecked flip."""
        entry = ChecklistStateHistoryEntry(
            id=str(uuid4()),
            checklist_item_id=checklist_item_id,
            task_id=task_id,
            action=action,
            actor_id=actor_id,
            actor_name=actor_name,
            reason=reason,
            created_at=created_at or datetime.now(timezone.utc),
        )
        await self._checklist_history.append(entry)
        self._log_operation(
            "record_checklist_change",
            task_id=task_id,
            checklist_item_id=checklist_item_id,
        ).debug("checklist_history_recorded", action=action.value, actor_id=actor_id)
        return entry

    async def get_task_status_history(self, task_id: str) -> list[TaskStatusHistoryEntry]:
        return await self._status_history.list_for_task(task_id)

    async def get_latest_task_status_change(
        self, task_id: str
    ) -> TaskStatusHistoryEntry | None:
        return await self._status_history.latest_for_task(task_id)

    async def get_status_history_by_user(
        self,
        user_id: str,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[TaskStatusHistoryEntry]:
        """Paginated transitions made by one user.

        `limit` defaults to the configured page size and is capped at
        MAX_HISTORY_PAGE_LIMIT.
        """
        limit, offset = self._page(limit, offset)
        return await self._status_history.list_by_actor(user_id, limit, offset)

    async def get_checklist_state_history(
        self, task_id: str
    ) -> list[ChecklistStateHistoryEntry]:
        return await self._checklist_history.list_for_task(task_id)

    async def get_checklist_item_history(
        self, item_id: str
    ) -> list[ChecklistStateHistoryEntry]:
        return await self._checklist_history.list_for_item(item_id)

    async def get_latest_checklist_item_change(
        self, item_id: str
    ) -> ChecklistStateHistoryEntry | None:
        return await self._checklist_history.latest_for_item(item_id)

    async def get_checklist_history_by_user(
        self,
        user_id: str,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[ChecklistStateHistoryEntry]:
        limit, offset = self._page(limit, offset)
        return await self._checklist_history.list_by_actor(user_id, limit, offset)

    async def count_checklist_item_changes(self, item_id: str) -> int:
        return await self._checklist_history.count_for_item(item_id)
