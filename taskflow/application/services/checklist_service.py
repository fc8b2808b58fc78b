"""Checklist item mutation with audit of completion flips.

History is appended only when `is_completed` actually flips relative to
this caller's pre-read. Concurrent toggles are last-write-wins on the
item; each caller that observed a flip records it, so duplicate-looking
entries are expected and are kept.
"""

from __future__ import annotations

from typing import Any
from uuid import uuid4

from taskflow.application.ports.checklist_repository import (
    ChecklistItemRepositoryProtocol,
)
from taskflow.application.ports.project_progress import ProjectProgressProtocol
from taskflow.application.ports.task_repository import TaskRepositoryProtocol
from taskflow.application.services.audit_trail_service import AuditTrailService
from taskflow.application.services.base import LoggingMixin
from taskflow.domain.errors import NotFoundError, ValidationError
from taskflow.domain.models.checklist import (
    ChecklistAction,
    ChecklistItem,
    ChecklistStateHistoryEntry,
)
from taskflow.domain.models.validation_issue import IssueCode


class ChecklistService(LoggingMixin):
    """Adds and updates checklist items."""

    def __init__(
        self,
        checklist_repository: ChecklistItemRepositoryProtocol,
        task_repository: TaskRepositoryProtocol,
        audit_trail: AuditTrailService,
        progress: ProjectProgressProtocol,
    ) -> None:
        self._items = checklist_repository
        self._tasks = task_repository
        self._audit = audit_trail
        self._progress = progress
        self._init_logger()

    async def get_checklist(self, task_id: str) -> list[ChecklistItem]:
        return await self._items.list_items_for_task(task_id)

    async def add_checklist_item(
        self,
        task_id: str,
        text: str,
        is_mandatory: bool = False,
        position: int | None = None,
    ) -> ChecklistItem:
        """Attach a new, uncompleted item to a task.

        Raises:
            ValidationError: CHECKLIST_TEXT_REQUIRED for blank text.
            NotFoundError: If the task does not exist.
        """
        if not text or not text.strip():
            raise _text_required()
        if await self._tasks.get_task_by_id(task_id) is None:
            raise NotFoundError("task", task_id)

        if position is None:
            position = len(await self._items.list_items_for_task(task_id))
        item = await self._items.add_item(
            ChecklistItem(
                id=str(uuid4()),
                task_id=task_id,
                text=text.strip(),
                is_mandatory=is_mandatory,
                position=position,
            )
        )
        self._log_operation("add_checklist_item", task_id=task_id).info(
            "checklist_item_added", item_id=item.id, is_mandatory=is_mandatory
        )
        return item

    async def update_checklist_item(
        self,
        item_id: str,
        text: str | None = None,
        is_completed: bool | None = None,
        is_mandatory: bool | None = None,
        actor_id: str | None = None,
        actor_name: str | None = None,
        unchecked_reason: str | None = None,
    ) -> ChecklistItem:
        """Update an item; record history when completion flips.

        Raises:
            NotFoundError: CHECKLIST_ITEM_NOT_FOUND if the item is missing.
            ValidationError: CHECKLIST_TEXT_REQUIRED for blank text,
                ACTOR_REQUIRED when completion is set without an actor.
        """
        current = await self._items.get_item(item_id)
        if current is None:
            raise NotFoundError(
                "checklist_item", item_id, code=IssueCode.CHECKLIST_ITEM_NOT_FOUND
            )
        if text is not None and not text.strip():
            raise _text_required()
        if is_completed is not None and (actor_id is None or not actor_id.strip()):
            raise ValidationError(
                code=IssueCode.ACTOR_REQUIRED,
                message="An actor is required to change checklist completion",
                field="actor_id",
            )

        fields: dict[str, Any] = {}
        if text is not None:
            fields["text"] = text.strip()
        if is_mandatory is not None:
            fields["is_mandatory"] = is_mandatory

        action: ChecklistAction | None = None
        if is_completed is not None:
            fields["is_completed"] = is_completed
            if is_completed and not current.is_completed:
                action = ChecklistAction.CHECKED
                fields.update(
                    completed_by=actor_id, unchecked_by=None, unchecked_reason=None
                )
            elif not is_completed and current.is_completed:
                action = ChecklistAction.UNCHECKED
                fields.update(
                    completed_by=None,
                    unchecked_by=actor_id,
                    unchecked_reason=unchecked_reason,
                )

        updated = await self._items.update_item(item_id, fields) if fields else current

        log = self._log_operation(
            "update_checklist_item", item_id=item_id, task_id=current.task_id
        )
        if action is not None and actor_id is not None:
            await self._audit.record_checklist_change(
                item_id,
                current.task_id,
                action,
                actor_id,
                actor_name=actor_name,
                reason=unchecked_reason if action == ChecklistAction.UNCHECKED else None,
            )
            log.info("checklist_item_toggled", action=action.value, actor_id=actor_id)

        if is_completed is not None:
            task = await self._tasks.get_task_by_id(current.task_id)
            if task is not None:
                await self._progress.recalculate_progress(task.project_id)

        return updated

    async def get_checklist_state_history(
        self, task_id: str
    ) -> list[ChecklistStateHistoryEntry]:
        return await self._audit.get_checklist_state_history(task_id)

    async def get_checklist_item_history(
        self, item_id: str
    ) -> list[ChecklistStateHistoryEntry]:
        return await self._audit.get_checklist_item_history(item_id)


def _text_required() -> ValidationError:
    return ValidationError(
        code=IssueCode.CHECKLIST_TEXT_REQUIRED,
        message="Checklist item text is required",
        field="text",
    )
