"""Workflow API dependencies.

Every getter reads the process-wide container from
`taskflow.bootstrap.container`; tests replace individual services with
`app.dependency_overrides`.
"""

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
from taskflow.application.services.task_workflow_engine import TaskWorkflowEngine
from taskflow.bootstrap.container import get_workflow_container


def get_dependency_service() -> TaskDependencyService:
    return get_workflow_container().dependency_service


def get_workflow_engine() -> TaskWorkflowEngine:
    return get_workflow_container().workflow_engine


def get_checklist_validator() -> MandatoryChecklistValidatorService:
    return get_workflow_container().checklist_validator


def get_checklist_service() -> ChecklistService:
    return get_workflow_container().checklist_service


def get_policy_service() -> EnforcementPolicyService:
    return get_workflow_container().policy_service
