"""Ports (interfaces) consumed by the application services.

Core-owned stores:
- DependencyRepositoryProtocol: dependency edges
- StatusHistoryRepositoryProtocol / ChecklistHistoryRepositoryProtocol: audit trail
- EnforcementSettingsRepositoryProtocol: warn/block settings

External collaborators:
- TaskRepositoryProtocol, ChecklistItemRepositoryProtocol
- ProjectProgressProtocol, DepartmentDirectoryProtocol
- NotificationDispatcherProtocol
"""

from taskflow.application.ports.checklist_history_repository import (
    ChecklistHistoryRepositoryProtocol,
)
from taskflow.application.ports.checklist_repository import (
    ChecklistItemRepositoryProtocol,
)
from taskflow.application.ports.department_directory import (
    DepartmentDirectoryProtocol,
)
from taskflow.application.ports.dependency_repository import (
    DependencyRepositoryProtocol,
)
from taskflow.application.ports.enforcement_settings_repository import (
    EnforcementSettingsRepositoryProtocol,
)
from taskflow.application.ports.notification_dispatcher import (
    Notification,
    NotificationDispatcherProtocol,
)
from taskflow.application.ports.project_progress import ProjectProgressProtocol
from taskflow.application.ports.status_history_repository import (
    StatusHistoryRepositoryProtocol,
)
from taskflow.application.ports.task_repository import TaskRepositoryProtocol

__all__ = [
    "ChecklistHistoryRepositoryProtocol",
    "ChecklistItemRepositoryProtocol",
    "DepartmentDirectoryProtocol",
    "DependencyRepositoryProtocol",
    "EnforcementSettingsRepositoryProtocol",
    "Notification",
    "NotificationDispatcherProtocol",
    "ProjectProgressProtocol",
    "StatusHistoryRepositoryProtocol",
    "TaskRepositoryProtocol",
]
