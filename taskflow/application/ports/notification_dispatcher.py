"""Notification dispatcher port (external, best effort).

Delivery failures are the caller's to log; they never fail the workflow
operation that triggered the notification.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Notification:
    """Payload of an in-app notification.

    Attributes:
        title: Short headline.
        message: Body text.
        notification_type: Machine type (e.g. "task_blocked").
        related_id: Id of the record the notification is about.
        category: Grouping used by clients.
        priority: "low", "normal" or "high".
        actor_id: User whose action triggered the notification.
        link: Client route to open.
    """

    title: str
    message: str
    notification_type: str
    related_id: str
    category: str = "task"
    priority: str = "normal"
    actor_id: str | None = None
    link: str | None = None


class NotificationDispatcherProtocol(Protocol):
    async def notify_user(self, user_id: str, notification: Notification) -> int:
        """Deliver to one user; returns the number of notifications created."""
        ...

    async def notify_users(
        self, user_ids: Sequence[str], notification: Notification
    ) -> int:
        """Deliver to many users; returns the number of notifications created."""
        ...
