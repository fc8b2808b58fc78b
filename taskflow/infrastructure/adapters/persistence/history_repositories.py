"""SQL append-only history stores (status and checklist)."""

from __future__ import annotations

from typing import Any

from sqlalchemy import DateTime, bindparam, text

from taskflow.application.ports.checklist_history_repository import (
    ChecklistHistoryRepositoryProtocol,
)
from taskflow.application.ports.status_history_repository import (
    StatusHistoryRepositoryProtocol,
)
from taskflow.domain.models.checklist import ChecklistAction, ChecklistStateHistoryEntry
from taskflow.domain.models.status_history import TaskStatusHistoryEntry
from taskflow.infrastructure.adapters.persistence.session_scope import (
    SessionScope,
    as_utc,
    translate_errors,
)

_STATUS_COLUMNS = "id, task_id, from_status, to_status, changed_by, note, created_at"
_CHECKLIST_COLUMNS = (
    "id, checklist_item_id, task_id, action, actor_id, actor_name, reason, created_at"
)
# seq breaks ties between entries appended in the same instant
_NEWEST_FIRST = "ORDER BY created_at DESC, seq DESC"


def _row_to_status_entry(row: Any) -> TaskStatusHistoryEntry:
    return TaskStatusHistoryEntry(
        id=row.id,
        task_id=row.task_id,
        from_status=row.from_status,
        to_status=row.to_status,
        changed_by=row.changed_by,
        note=row.note,
        created_at=as_utc(row.created_at),
    )


def _row_to_checklist_entry(row: Any) -> ChecklistStateHistoryEntry:
    return ChecklistStateHistoryEntry(
        id=row.id,
        checklist_item_id=row.checklist_item_id,
        task_id=row.task_id,
        action=ChecklistAction(row.action),
        actor_id=row.actor_id,
        actor_name=row.actor_name,
        reason=row.reason,
        created_at=as_utc(row.created_at),
    )


class SqlStatusHistoryRepository(StatusHistoryRepositoryProtocol):
    """StatusHistoryRepositoryProtocol over task_status_history."""

    def __init__(self, scope: SessionScope) -> None:
        self._scope = scope

    async def append(self, entry: TaskStatusHistoryEntry) -> None:
        statement = text(
            f"""
            INSERT INTO task_status_history ({_STATUS_COLUMNS})
            VALUES (:id, :task_id, :from_status, :to_status, :changed_by, :note, :created_at)
            """
        ).bindparams(bindparam("created_at", type_=DateTime(timezone=True)))
        async with translate_errors("status_history_append"):
            async with self._scope.transaction() as session:
                await session.execute(
                    statement,
                    {
                        "id": entry.id,
                        "task_id": entry.task_id,
                        "from_status": entry.from_status,
                        "to_status": entry.to_status,
                        "changed_by": entry.changed_by,
                        "note": entry.note,
                        "created_at": entry.created_at,
                    },
                )

    async def list_for_task(self, task_id: str) -> list[TaskStatusHistoryEntry]:
        return await self._select("WHERE task_id = :task_id", {"task_id": task_id})

    async def latest_for_task(self, task_id: str) -> TaskStatusHistoryEntry | None:
        rows = await self._select(
            "WHERE task_id = :task_id", {"task_id": task_id}, limit=1
        )
        return rows[0] if rows else None

    async def list_by_actor(
        self, actor_id: str, limit: int, offset: int = 0
    ) -> list[TaskStatusHistoryEntry]:
        return await self._select(
            "WHERE changed_by = :actor_id",
            {"actor_id": actor_id},
            limit=limit,
            offset=offset,
        )

    async def _select(
        self,
        where: str,
        params: dict[str, Any],
        limit: int | None = None,
        offset: int = 0,
    ) -> list[TaskStatusHistoryEntry]:
        sql = f"SELECT {_STATUS_COLUMNS} FROM task_status_history {where} {_NEWEST_FIRST}"
        if limit is not None:
            sql += " LIMIT :limit OFFSET :offset"
            params = {**params, "limit": limit, "offset": offset}
        async with translate_errors("status_history_select"):
            async with self._scope.transaction() as session:
                result = await session.execute(text(sql), params)
                return [_row_to_status_entry(row) for row in result]


class SqlChecklistHistoryRepository(ChecklistHistoryRepositoryProtocol):
    """ChecklistHistoryRepositoryProtocol over checklist_state_history."""

    def __init__(self, scope: SessionScope) -> None:
        self._scope = scope

    async def append(self, entry: ChecklistStateHistoryEntry) -> None:
        statement = text(
            f"""
            INSERT INTO checklist_state_history ({_CHECKLIST_COLUMNS})
            VALUES (:id, :checklist_item_id, :task_id, :action, :actor_id,
                    :actor_name, :reason, :created_at)
            """
        ).bindparams(bindparam("created_at", type_=DateTime(timezone=True)))
        async with translate_errors("checklist_history_append"):
            async with self._scope.transaction() as session:
                await session.execute(
                    statement,
                    {
                        "id": entry.id,
                        "checklist_item_id": entry.checklist_item_id,
                        "task_id": entry.task_id,
                        "action": entry.action.value,
                        "actor_id": entry.actor_id,
                        "actor_name": entry.actor_name,
                        "reason": entry.reason,
                        "created_at": entry.created_at,
                    },
                )

    async def list_for_task(self, task_id: str) -> list[ChecklistStateHistoryEntry]:
        return await self._select("WHERE task_id = :task_id", {"task_id": task_id})

    async def list_for_item(self, item_id: str) -> list[ChecklistStateHistoryEntry]:
        return await self._select(
            "WHERE checklist_item_id = :item_id", {"item_id": item_id}
        )

    async def latest_for_item(self, item_id: str) -> ChecklistStateHistoryEntry | None:
        rows = await self._select(
            "WHERE checklist_item_id = :item_id", {"item_id": item_id}, limit=1
        )
        return rows[0] if rows else None

    async def list_by_actor(
        self, actor_id: str, limit: int, offset: int = 0
    ) -> list[ChecklistStateHistoryEntry]:
        return await self._select(
            "WHERE actor_id = :actor_id",
            {"actor_id": actor_id},
            limit=limit,
            offset=offset,
        )

    async def count_for_item(self, item_id: str) -> int:
        async with translate_errors("checklist_history_count"):
            async with self._scope.transaction() as session:
                result = await session.execute(
                    text(
                        "SELECT COUNT(*) FROM checklist_state_history "
                        "WHERE checklist_item_id = :item_id"
                    ),
                    {"item_id": item_id},
                )
                return int(result.scalar() or 0)

    async def _select(
        self,
        where: str,
        params: dict[str, Any],
        limit: int | None = None,
        offset: int = 0,
    ) -> list[ChecklistStateHistoryEntry]:
        sql = (
            f"SELECT {_CHECKLIST_COLUMNS} FROM checklist_state_history "
            f"{where} {_NEWEST_FIRST}"
        )
        if limit is not None:
            sql += " LIMIT :limit OFFSET :offset"
            params = {**params, "limit": limit, "offset": offset}
        async with translate_errors("checklist_history_select"):
            async with self._scope.transaction() as session:
                result = await session.execute(text(sql), params)
                return [_row_to_checklist_entry(row) for row in result]
