"""SQL dependency edge store.

`exclusive()` serialises writers twice over: a process-local asyncio.Lock
for writers sharing this repository, and on PostgreSQL a
SHARE ROW EXCLUSIVE table lock taken at the start of the transaction for
writers in other processes. The duplicate check, the cycle detection
read and the insert all run in that one transaction.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import DateTime, bindparam, text
from sqlalchemy.exc import IntegrityError

from taskflow.application.ports.dependency_repository import (
    DependencyRepositoryProtocol,
)
from taskflow.domain.errors import DuplicateDependencyError
from taskflow.domain.models.task_dependency import DependencyType, TaskDependency
from taskflow.infrastructure.adapters.persistence.session_scope import (
    SessionScope,
    as_utc,
    translate_errors,
)

_COLUMNS = "id, task_id, depends_on_task_id, dependency_type, created_by, created_at"

_INSERT = text(
    f"""
    INSERT INTO task_dependencies ({_COLUMNS})
    VALUES (:id, :task_id, :depends_on_task_id, :dependency_type, :created_by, :created_at)
    """
).bindparams(bindparam("created_at", type_=DateTime(timezone=True)))

_LOCK_TABLE = text("LOCK TABLE task_dependencies IN SHARE ROW EXCLUSIVE MODE")


def _row_to_dependency(row: Any) -> TaskDependency:
    return TaskDependency(
        id=row.id,
        task_id=row.task_id,
        depends_on_task_id=row.depends_on_task_id,
        dependency_type=DependencyType(row.dependency_type),
        created_by=row.created_by,
        created_at=as_utc(row.created_at),
    )


class SqlDependencyRepository(DependencyRepositoryProtocol):
    """DependencyRepositoryProtocol over the task_dependencies table."""

    def __init__(self, scope: SessionScope) -> None:
        self._scope = scope
        self._write_lock = asyncio.Lock()

    @asynccontextmanager
    async def exclusive(self) -> AsyncIterator[None]:
        async with self._write_lock:
            async with translate_errors("dependency_exclusive"):
                async with self._scope.transaction() as session:
                    if session.bind.dialect.name == "postgresql":
                        await session.execute(_LOCK_TABLE)
                    yield

    async def create(self, dependency: TaskDependency) -> None:
        try:
            async with self._scope.transaction() as session:
                await session.execute(
                    _INSERT,
                    {
                        "id": dependency.id,
                        "task_id": dependency.task_id,
                        "depends_on_task_id": dependency.depends_on_task_id,
                        "dependency_type": dependency.dependency_type.value,
                        "created_by": dependency.created_by,
                        "created_at": dependency.created_at,
                    },
                )
        except IntegrityError as exc:
            raise DuplicateDependencyError(
                dependency.task_id, dependency.depends_on_task_id
            ) from exc

    async def get(self, dependency_id: str) -> TaskDependency | None:
        rows = await self._select("WHERE id = :id", {"id": dependency_id})
        return rows[0] if rows else None

    async def find_by_tasks(
        self, task_id: str, depends_on_task_id: str
    ) -> TaskDependency | None:
        rows = await self._select(
            "WHERE task_id = :task_id AND depends_on_task_id = :depends_on_task_id",
            {"task_id": task_id, "depends_on_task_id": depends_on_task_id},
        )
        return rows[0] if rows else None

    async def delete(self, dependency_id: str) -> bool:
        return await self._delete("WHERE id = :id", {"id": dependency_id})

    async def delete_by_tasks(self, task_id: str, depends_on_task_id: str) -> bool:
        return await self._delete(
            "WHERE task_id = :task_id AND depends_on_task_id = :depends_on_task_id",
            {"task_id": task_id, "depends_on_task_id": depends_on_task_id},
        )

    async def list_dependencies(self, task_id: str) -> list[TaskDependency]:
        return await self._select("WHERE task_id = :task_id", {"task_id": task_id})

    async def list_dependents(self, task_id: str) -> list[TaskDependency]:
        return await self._select(
            "WHERE depends_on_task_id = :task_id", {"task_id": task_id}
        )

    async def list_touching(self, task_ids: Iterable[str]) -> list[TaskDependency]:
        ids = list(task_ids)
        if not ids:
            return []
        statement = text(
            f"""
            SELECT {_COLUMNS} FROM task_dependencies
            WHERE task_id IN :ids OR depends_on_task_id IN :ids
            ORDER BY created_at, id
            """
        ).bindparams(bindparam("ids", expanding=True))
        async with translate_errors("dependency_list_touching"):
            async with self._scope.transaction() as session:
                result = await session.execute(statement, {"ids": ids})
                return [_row_to_dependency(row) for row in result]

    async def list_blocking_edges(self) -> list[TaskDependency]:
        return await self._select(
            "WHERE dependency_type = :dependency_type",
            {"dependency_type": DependencyType.BLOCKS.value},
        )

    async def count(self) -> int:
        async with translate_errors("dependency_count"):
            async with self._scope.transaction() as session:
                result = await session.execute(
                    text("SELECT COUNT(*) FROM task_dependencies")
                )
                return int(result.scalar() or 0)

    async def _select(self, where: str, params: dict[str, Any]) -> list[TaskDependency]:
        statement = text(
            f"SELECT {_COLUMNS} FROM task_dependencies {where} ORDER BY created_at, id"
        )
        async with translate_errors("dependency_select"):
            async with self._scope.transaction() as session:
                result = await session.execute(statement, params)
                return [_row_to_dependency(row) for row in result]

    async def _delete(self, where: str, params: dict[str, Any]) -> bool:
        async with translate_errors("dependency_delete"):
            async with self._scope.transaction() as session:
                result = await session.execute(
                    text(f"DELETE FROM task_dependencies {where}"), params
                )
                return (result.rowcount or 0) > 0
