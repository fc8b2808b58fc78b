"""Fire-and-forget notification when a task becomes blocked.

Dispatch runs as a background asyncio task created after the transition
is written, so notification latency or failure never delays or rolls
back the transition. Failures are logged and swallowed.
"""

from __future__ import annotations

import asyncio

from taskflow.application.ports.department_directory import (
    DepartmentDirectoryProtocol,
)
from taskflow.application.ports.notification_dispatcher import (
    Notification,
    NotificationDispatcherProtocol,
)
from taskflow.application.services.base import LoggingMixin
from taskflow.domain.models.task import Task


class BlockedTaskNotifier(LoggingMixin):
    """Notifies owner, assignees and department managers of a block."""

    def __init__(
        self,
        dispatcher: NotificationDispatcherProtocol,
        departments: DepartmentDirectoryProtocol | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._departments = departments
        self._pending: set[asyncio.Task[int]] = set()
        self._init_logger()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def notify_blocked(self, task: Task, blocked_by: str | None) -> asyncio.Task[int]:
        """Schedule the notification and return immediately."""
        dispatch = asyncio.create_task(self._dispatch(task, blocked_by))
        self._pending.add(dispatch)
        dispatch.add_done_callback(self._pending.discard)
        return dispatch

    async def drain(self) -> None:
        """Wait for every scheduled dispatch (shutdown, tests)."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def recipients_for(self, task: Task, blocked_by: str | None) -> list[str]:
        """Owner, assignees and department managers; each once; never the actor."""
        candidates: list[str] = []
        if task.owner_id:
            candidates.append(task.owner_id)
        candidates.extend(task.assignee_ids)
        if task.department_id and self._departments is not None:
            candidates.extend(
                await self._departments.find_managers_by_department_id(
                    task.department_id
                )
            )

        recipients: list[str] = []
        for user_id in candidates:
            if not user_id or user_id == blocked_by or user_id in recipients:
                continue
            recipients.append(user_id)
        return recipients

    async def _dispatch(self, task: Task, blocked_by: str | None) -> int:
        log = self._log_operation("notify_blocked", task_id=task.id)
        try:
            recipients = await self.recipients_for(task, blocked_by)
            if not recipients:
                log.debug("blocked_notification_no_recipients")
                return 0
            message = f"\"{task.title}\" was blocked"
            if task.blocked_reason:
                message = f"{message}: {task.blocked_reason}"
            notification = Notification(
                title="Task blocked",
                message=message,
                notification_type="task_blocked",
                related_id=task.id,
                category="task",
                priority="high",
                actor_id=blocked_by,
                link=f"/projects/{task.project_id}/tasks/{task.id}",
            )
            count = await self._dispatcher.notify_users(recipients, notification)
            log.info("blocked_notification_sent", recipients=len(recipients), count=count)
            return count
        except Exception as exc:
            log.warning(
                "blocked_notification_failed",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return 0
