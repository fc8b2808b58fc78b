"""In-memory implementations of every port (development and tests)."""

from taskflow.infrastructure.stubs.checklist_repository_stub import (
    ChecklistItemRepositoryStub,
)
from taskflow.infrastructure.stubs.collaborator_stubs import (
    DepartmentDirectoryStub,
    NotificationDispatcherStub,
    ProjectProgressStub,
)
from taskflow.infrastructure.stubs.dependency_repository_stub import (
    DependencyRepositoryStub,
)
from taskflow.infrastructure.stubs.enforcement_settings_repository_stub import (
    EnforcementSettingsRepositoryStub,
)
from taskflow.infrastructure.stubs.history_repository_stubs import (
    ChecklistHistoryRepositoryStub,
    StatusHistoryRepositoryStub,
)
from taskflow.infrastructure.stubs.task_repository_stub import TaskRepositoryStub

__all__ = [
    "ChecklistHistoryRepositoryStub",
    "ChecklistItemRepositoryStub",
    "DepartmentDirectoryStub",
    "DependencyRepositoryStub",
    "EnforcementSettingsRepositoryStub",
    "NotificationDispatcherStub",
    "ProjectProgressStub",
    "StatusHistoryRepositoryStub",
    "TaskRepositoryStub",
]
