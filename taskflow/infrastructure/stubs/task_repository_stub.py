"""In-memory task store for development and tests."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from dataclasses import replace
from typing import Any

from taskflow.application.ports.task_repository import TaskRepositoryProtocol
from taskflow.domain.errors import NotFoundError
from taskflow.domain.models.task import Task


class TaskRepositoryStub(TaskRepositoryProtocol):
    """In-memory stub for TaskRepositoryProtocol.

    `lock_task` hands out one asyncio.Lock per task id, which serialises
    transitions on the same task within the event loop.

    Example:
        stub = TaskRepositoryStub()
        stub.add_task(Task(id="t1", project_id="p1", title="Ship", status="To Do"))
        task = await stub.get_task_by_id("t1")
        stub.clear()
    """

    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self.update_calls: list[tuple[str, dict[str, Any]]] = []

    def add_task(self, task: Task) -> Task:
        """Seed or replace a task."""
        self._tasks[task.id] = task
        return task

    def add_tasks(self, *tasks: Task) -> None:
        for task in tasks:
            self.add_task(task)

    async def get_task_by_id(self, task_id: str) -> Task | None:
        return self._tasks.get(task_id)

    async def update_task(self, task_id: str, fields: Mapping[str, Any]) -> Task:
        task = self._tasks.get(task_id)
        if task is None:
            raise NotFoundError("task", task_id)
        updated = replace(task, **dict(fields))
        self._tasks[task_id] = updated
        self.update_calls.append((task_id, dict(fields)))
        return updated

    async def list_tasks_by_project(self, project_id: str) -> list[Task]:
        return [task for task in self._tasks.values() if task.project_id == project_id]

    @asynccontextmanager
    async def lock_task(self, task_id: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(task_id, asyncio.Lock())
        async with lock:
            yield

    def get_task_count(self) -> int:
        return len(self._tasks)

    def clear(self) -> None:
        self._tasks.clear()
        self._locks.clear()
        self.update_calls.clear()
