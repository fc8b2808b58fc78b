"""Application services for the task workflow core."""

from taskflow.application.services.audit_trail_service import AuditTrailService
from taskflow.application.services.blocked_task_notifier import BlockedTaskNotifier
from taskflow.application.services.checklist_service import ChecklistService
from taskflow.application.services.cycle_detector import CycleDetector
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

__all__ = [
    "AuditTrailService",
    "BlockedTaskNotifier",
    "ChecklistService",
    "CycleDetector",
    "EnforcementPolicyService",
    "MandatoryChecklistValidatorService",
    "TaskDependencyService",
    "TaskOwnershipEnforcerService",
    "TaskWorkflowEngine",
]
