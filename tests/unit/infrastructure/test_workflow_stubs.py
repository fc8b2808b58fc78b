"""Unit tests for the in-memory stores and collaborator stubs."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

import pytest

from taskflow.application.ports.notification_dispatcher import Notification
from taskflow.domain.errors import DuplicateDependencyError, NotFoundError
from taskflow.domain.models.checklist import ChecklistItem
from taskflow.domain.models.enforcement import (
    EnforcementMode,
    EnforcementPolicy,
    EnforcementSetting,
)
from taskflow.domain.models.status_history import TaskStatusHistoryEntry
from taskflow.domain.models.task import Task
from taskflow.domain.models.task_dependency import DependencyType, TaskDependency
from taskflow.infrastructure.stubs import (
    ChecklistItemRepositoryStub,
    DependencyRepositoryStub,
    EnforcementSettingsRepositoryStub,
    NotificationDispatcherStub,
    StatusHistoryRepositoryStub,
    TaskRepositoryStub,
)

NOW = datetime(2024, 2, 2, tzinfo=timezone.utc)


class TestTaskRepositoryStub:
    @pytest.mark.asyncio
    async def test_update_and_list(self, make_task: Callable[..., Task]) -> None:
        stub = TaskRepositoryStub()
        stub.add_tasks(make_task("t1"), make_task("t2", project_id="proj-2"))

        updated = await stub.update_task("t1", {"status": "Done"})

        assert updated.status == "Done"
        assert stub.update_calls == [("t1", {"status": "Done"})]
        assert [t.id for t in await stub.list_tasks_by_project("proj-1")] == ["t1"]
        assert stub.get_task_count() == 2

    @pytest.mark.asyncio
    async def test_update_missing_task(self) -> None:
        with pytest.raises(NotFoundError):
            await TaskRepositoryStub().update_task("ghost", {"status": "Done"})

    @pytest.mark.asyncio
    async def test_clear(self, make_task: Callable[..., Task]) -> None:
        stub = TaskRepositoryStub()
        stub.add_task(make_task("t1"))

        stub.clear()

        assert await stub.get_task_by_id("t1") is None


class TestChecklistItemRepositoryStub:
    @pytest.mark.asyncio
    async def test_orders_by_position(self, make_item: Callable[..., ChecklistItem]) -> None:
        stub = ChecklistItemRepositoryStub()
        stub.seed(make_item("b", position=2), make_item("a", position=1))

        assert [i.id for i in await stub.list_items_for_task("t1")] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_update_missing_item(self) -> None:
        with pytest.raises(NotFoundError):
            await ChecklistItemRepositoryStub().update_item("nope", {"text": "x"})


class TestDependencyRepositoryStub:
    @pytest.mark.asyncio
    async def test_rejects_duplicate_pairs(self) -> None:
        stub = DependencyRepositoryStub()
        edge = TaskDependency("e1", "a", "b", DependencyType.BLOCKS, None, NOW)
        await stub.create(edge)

        with pytest.raises(DuplicateDependencyError):
            await stub.create(
                TaskDependency("e2", "a", "b", DependencyType.RELATES_TO, None, NOW)
            )

        assert stub.all_edges() == [edge]

    @pytest.mark.asyncio
    async def test_blocking_edges_only(self) -> None:
        stub = DependencyRepositoryStub()
        await stub.create(TaskDependency("e1", "a", "b", DependencyType.BLOCKS, None, NOW))
        await stub.create(
            TaskDependency("e2", "a", "c", DependencyType.RELATES_TO, None, NOW)
        )

        assert [e.id for e in await stub.list_blocking_edges()] == ["e1"]
        assert await stub.count() == 2


class TestStatusHistoryRepositoryStub:
    @pytest.mark.asyncio
    async def test_same_instant_entries_keep_insertion_order(self) -> None:
        stub = StatusHistoryRepositoryStub()
        for index in range(3):
            await stub.append(
                TaskStatusHistoryEntry(f"h{index}", "t1", "A", "B", "u1", None, NOW)
            )

        assert [e.id for e in await stub.list_for_task("t1")] == ["h2", "h1", "h0"]
        assert stub.get_entry_count() == 3


class TestEnforcementSettingsRepositoryStub:
    @pytest.mark.asyncio
    async def test_counts_lookups(self) -> None:
        stub = EnforcementSettingsRepositoryStub()
        setting = EnforcementSetting(
            "global", EnforcementPolicy.OWNERSHIP, EnforcementMode.BLOCK, NOW
        )
        await stub.upsert(setting)

        assert await stub.get("global", EnforcementPolicy.OWNERSHIP) == setting
        assert stub.get_calls == 1
        stub.clear()
        assert stub.get_calls == 0


class TestNotificationDispatcherStub:
    @pytest.mark.asyncio
    async def test_records_and_fails_on_demand(self) -> None:
        notification = Notification(
            title="Task blocked",
            message="blocked",
            notification_type="task_blocked",
            related_id="t1",
        )
        stub = NotificationDispatcherStub()

        assert await stub.notify_users(["u1", "u2"], notification) == 2
        assert stub.recipients() == ["u1", "u2"]

        stub.fail_with = ConnectionError("down")
        with pytest.raises(ConnectionError):
            await stub.notify_user("u3", notification)
