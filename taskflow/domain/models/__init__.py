"""Domain models for the task workflow core."""

from taskflow.domain.models.checklist import (
    ChecklistAction,
    ChecklistItem,
    ChecklistStateHistoryEntry,
)
from taskflow.domain.models.enforcement import (
    GLOBAL_SCOPE,
    EnforcementMode,
    EnforcementPolicy,
    EnforcementSetting,
    scope_key_for,
)
from taskflow.domain.models.status_history import TaskStatusHistoryEntry
from taskflow.domain.models.task import Task, TaskSummary
from taskflow.domain.models.task_dependency import (
    AddDependencyResult,
    BlockingDependencyReport,
    CycleDetectionResult,
    DependencyGraph,
    DependencyType,
    DependencyValidationResult,
    DependencyWithDetails,
    GraphEdge,
    GraphNode,
    TaskDependency,
)
from taskflow.domain.models.transition import (
    OwnerChangeResult,
    StatusTransitionResult,
    TaskCreatedResult,
)
from taskflow.domain.models.validation_issue import IssueCode, ValidationIssue

__all__ = [
    "AddDependencyResult",
    "BlockingDependencyReport",
    "ChecklistAction",
    "ChecklistItem",
    "ChecklistStateHistoryEntry",
    "CycleDetectionResult",
    "DependencyGraph",
    "DependencyType",
    "DependencyValidationResult",
    "DependencyWithDetails",
    "EnforcementMode",
    "EnforcementPolicy",
    "EnforcementSetting",
    "GLOBAL_SCOPE",
    "GraphEdge",
    "GraphNode",
    "IssueCode",
    "OwnerChangeResult",
    "StatusTransitionResult",
    "Task",
    "TaskCreatedResult",
    "TaskDependency",
    "TaskStatusHistoryEntry",
    "TaskSummary",
    "ValidationIssue",
    "scope_key_for",
]
