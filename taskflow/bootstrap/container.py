"""Bootstrap wiring for the workflow services.

Every service receives its collaborators through its constructor; this
module is the one place they are assembled. The in-memory container
backs development and tests. The SQL container persists the core-owned
stores (dependencies, history, enforcement settings) through
SQLAlchemy; task, checklist, project, department and notification
collaborators are passed in by the host application (stubs by default).
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

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
    NotificationDispatcherProtocol,
)
from taskflow.application.ports.project_progress import ProjectProgressProtocol
from taskflow.application.ports.status_history_repository import (
    StatusHistoryRepositoryProtocol,
)
from taskflow.application.ports.task_repository import TaskRepositoryProtocol
from taskflow.application.services.audit_trail_service import AuditTrailService
from taskflow.application.services.blocked_task_notifier import BlockedTaskNotifier
from taskflow.application.services.checklist_service import ChecklistService
from taskflow.application.services.enforcement_policy_service import (
    EnforcementPolicyService,
)
from taskflow.application.services.mandatory_checklist_validator import (
    MandatoryChecklistValidatorService,
)
from taskflow.application.services.task_dependency_service import (
    TaskDependencyService,
)
from taskflow.application.services.task_ownership_enforcer import (
    TaskOwnershipEnforcerService,
)
from taskflow.application.services.task_workflow_engine import TaskWorkflowEngine
from taskflow.bootstrap.database import get_session_factory
from taskflow.config.workflow_config import WorkflowConfig
from taskflow.infrastructure.adapters.persistence import (
    SessionScope,
    SqlChecklistHistoryRepository,
    SqlDependencyRepository,
    SqlEnforcementSettingsRepository,
    SqlStatusHistoryRepository,
)
from taskflow.infrastructure.stubs import (
    ChecklistHistoryRepositoryStub,
    ChecklistItemRepositoryStub,
    DepartmentDirectoryStub,
    DependencyRepositoryStub,
    EnforcementSettingsRepositoryStub,
    NotificationDispatcherStub,
    ProjectProgressStub,
    StatusHistoryRepositoryStub,
    TaskRepositoryStub,
)


@dataclass
class WorkflowContainer:
    """Wired stores, collaborators and services."""

    config: WorkflowConfig
    tasks: TaskRepositoryProtocol
    checklist_items: ChecklistItemRepositoryProtocol
    dependencies: DependencyRepositoryProtocol
    status_history: StatusHistoryRepositoryProtocol
    checklist_history: ChecklistHistoryRepositoryProtocol
    enforcement_settings: EnforcementSettingsRepositoryProtocol
    progress: ProjectProgressProtocol
    departments: DepartmentDirectoryProtocol
    notifications: NotificationDispatcherProtocol
    policy_service: EnforcementPolicyService
    checklist_validator: MandatoryChecklistValidatorService
    ownership_enforcer: TaskOwnershipEnforcerService
    audit_trail: AuditTrailService
    dependency_service: TaskDependencyService
    notifier: BlockedTaskNotifier
    workflow_engine: TaskWorkflowEngine
    checklist_service: ChecklistService
    database_engine: AsyncEngine | None = None


def _wire(
    config: WorkflowConfig,
    tasks: TaskRepositoryProtocol,
    checklist_items: ChecklistItemRepositoryProtocol,
    dependencies: DependencyRepositoryProtocol,
    status_history: StatusHistoryRepositoryProtocol,
    checklist_history: ChecklistHistoryRepositoryProtocol,
    enforcement_settings: EnforcementSettingsRepositoryProtocol,
    progress: ProjectProgressProtocol,
    departments: DepartmentDirectoryProtocol,
    notifications: NotificationDispatcherProtocol,
) -> WorkflowContainer:
    policy_service = EnforcementPolicyService(enforcement_settings, config)
    checklist_validator = MandatoryChecklistValidatorService(
        checklist_items, policy_service
    )
    ownership_enforcer = TaskOwnershipEnforcerService(policy_service)
    audit_trail = AuditTrailService(status_history, checklist_history, config)
    dependency_service = TaskDependencyService(dependencies, tasks, config)
    notifier = BlockedTaskNotifier(notifications, departments)
    workflow_engine = TaskWorkflowEngine(
        task_repository=tasks,
        checklist_validator=checklist_validator,
        ownership_enforcer=ownership_enforcer,
        audit_trail=audit_trail,
        dependency_service=dependency_service,
        progress=progress,
        notifier=notifier,
        config=config,
    )
    checklist_service = ChecklistService(checklist_items, tasks, audit_trail, progress)
    return WorkflowContainer(
        config=config,
        tasks=tasks,
        checklist_items=checklist_items,
        dependencies=dependencies,
        status_history=status_history,
        checklist_history=checklist_history,
        enforcement_settings=enforcement_settings,
        progress=progress,
        departments=departments,
        notifications=notifications,
        policy_service=policy_service,
        checklist_validator=checklist_validator,
        ownership_enforcer=ownership_enforcer,
        audit_trail=audit_trail,
        dependency_service=dependency_service,
        notifier=notifier,
        workflow_engine=workflow_engine,
        checklist_service=checklist_service,
    )


def build_in_memory_container(config: WorkflowConfig | None = None) -> WorkflowContainer:
    """Wire every service over in-memory stubs."""
    return _wire(
        config or WorkflowConfig.from_environment(),
        tasks=TaskRepositoryStub(),
        checklist_items=ChecklistItemRepositoryStub(),
        dependencies=DependencyRepositoryStub(),
        status_history=StatusHistoryRepositoryStub(),
        checklist_history=ChecklistHistoryRepositoryStub(),
        enforcement_settings=EnforcementSettingsRepositoryStub(),
        progress=ProjectProgressStub(),
        departments=DepartmentDirectoryStub(),
        notifications=NotificationDispatcherStub(),
    )


def build_sql_container(
    session_factory: async_sessionmaker[AsyncSession],
    config: WorkflowConfig | None = None,
    tasks: TaskRepositoryProtocol | None = None,
    checklist_items: ChecklistItemRepositoryProtocol | None = None,
    progress: ProjectProgressProtocol | None = None,
    departments: DepartmentDirectoryProtocol | None = None,
    notifications: NotificationDispatcherProtocol | None = None,
) -> WorkflowContainer:
    """Wire the services with SQL-backed core stores.

    Collaborators not supplied fall back to in-memory stubs.
    """
    scope = SessionScope(session_factory)
    container = _wire(
        config or WorkflowConfig.from_environment(),
        tasks=tasks or TaskRepositoryStub(),
        checklist_items=checklist_items or ChecklistItemRepositoryStub(),
        dependencies=SqlDependencyRepository(scope),
        status_history=SqlStatusHistoryRepository(scope),
        checklist_history=SqlChecklistHistoryRepository(scope),
        enforcement_settings=SqlEnforcementSettingsRepository(scope),
        progress=progress or ProjectProgressStub(),
        departments=departments or DepartmentDirectoryStub(),
        notifications=notifications or NotificationDispatcherStub(),
    )
    container.database_engine = session_factory.kw.get("bind")
    return container


_container: WorkflowContainer | None = None


def get_workflow_container() -> WorkflowContainer:
    """Get the process-wide container.

    SQL-backed when DATABASE_URL is set, in-memory otherwise, unless one
    was installed with `set_workflow_container`.
    """
    global _container
    if _container is None:
        if os.environ.get("DATABASE_URL"):
            _container = build_sql_container(get_session_factory())
        else:
            _container = build_in_memory_container()
    return _container


def set_workflow_container(container: WorkflowContainer) -> None:
    """Install a custom container (SQL wiring, tests)."""
    global _container
    _container = container


def reset_workflow_container() -> None:
    """Reset the singleton for testing."""
    global _container
    _container = None
