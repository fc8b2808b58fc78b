"""In-memory stand-ins for the external collaborators.

Each stub records what it was asked to do so tests can assert on it.
"""

from __future__ import annotations

from collections.abc import Sequence

from taskflow.application.ports.department_directory import (
    DepartmentDirectoryProtocol,
)
from taskflow.application.ports.notification_dispatcher import (
    Notification,
    NotificationDispatcherProtocol,
)
from taskflow.application.ports.project_progress import ProjectProgressProtocol


class ProjectProgressStub(ProjectProgressProtocol):
    def __init__(self) -> None:
        self.recalculated: list[str] = []

    async def recalculate_progress(self, project_id: str) -> None:
        self.recalculated.append(project_id)

    def clear(self) -> None:
        self.recalculated.clear()


class DepartmentDirectoryStub(DepartmentDirectoryProtocol):
    def __init__(self) -> None:
        self._managers: dict[str, list[str]] = {}

    def set_managers(self, department_id: str, manager_ids: Sequence[str]) -> None:
        self._managers[department_id] = list(manager_ids)

    async def find_managers_by_department_id(self, department_id: str) -> list[str]:
        return list(self._managers.get(department_id, []))

    def clear(self) -> None:
        self._managers.clear()


class NotificationDispatcherStub(NotificationDispatcherProtocol):
    """Records deliveries; `fail_with` makes every call raise."""

    def __init__(self, fail_with: Exception | None = None) -> None:
        self.sent: list[tuple[str, Notification]] = []
        self.fail_with = fail_with

    async def notify_user(self, user_id: str, notification: Notification) -> int:
        if self.fail_with is not None:
            raise self.fail_with
        self.sent.append((user_id, notification))
        return 1

    async def notify_users(
        self, user_ids: Sequence[str], notification: Notification
    ) -> int:
        count = 0
        for user_id in user_ids:
            count += await self.notify_user(user_id, notification)
        return count

    def recipients(self) -> list[str]:
        return [user_id for user_id, _ in self.sent]

    def clear(self) -> None:
        self.sent.clear()
        self.fail_with = None
