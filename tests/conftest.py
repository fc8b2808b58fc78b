"""
Pytest configuration and shared fixtures for taskflow tests.

Testing Standards:
- Async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async collaborator mocking
- Unit tests go in tests/unit/<layer>/
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from taskflow.bootstrap.container import (
    WorkflowContainer,
    build_in_memory_container,
    reset_workflow_container,
)
from taskflow.config.workflow_config import TEST_WORKFLOW_CONFIG
from taskflow.domain.models.checklist import ChecklistItem
from taskflow.domain.models.task import Task


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from taskflow import __version__

    return __version__


@pytest.fixture
def make_task() -> Callable[..., Task]:
    """Factory for Task snapshots with sensible defaults."""

    def _make(task_id: str, **overrides: Any) -> Task:
        values: dict[str, Any] = {
            "id": task_id,
            "project_id": "proj-1",
            "title": f"Task {task_id}",
            "status": "To Do",
            "code": task_id.upper(),
            "department_id": "dept-ops",
            "owner_id": "owner-1",
        }
        values.update(overrides)
        return Task(**values)

    return _make


@pytest.fixture
def make_item() -> Callable[..., ChecklistItem]:
    """Factory for checklist items."""

    def _make(item_id: str, task_id: str = "t1", **overrides: Any) -> ChecklistItem:
        values: dict[str, Any] = {
            "id": item_id,
            "task_id": task_id,
            "text": f"Item {item_id}",
        }
        values.update(overrides)
        return ChecklistItem(**values)

    return _make


class StepClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def container() -> Iterator[WorkflowContainer]:
    """In-memory container with the enforcement cache disabled."""
    wired = build_in_memory_container(TEST_WORKFLOW_CONFIG)
    yield wired
    reset_workflow_container()
