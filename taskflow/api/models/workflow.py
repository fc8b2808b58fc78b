"""Pydantic request/response models for the workflow API."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from taskflow.domain.models.checklist import ChecklistItem, ChecklistStateHistoryEntry
from taskflow.domain.models.enforcement import EnforcementSetting
from taskflow.domain.models.status_history import TaskStatusHistoryEntry
from taskflow.domain.models.task import Task, TaskSummary
from taskflow.domain.models.task_dependency import (
    BlockingDependencyReport,
    CycleDetectionResult,
    DependencyGraph,
    DependencyType,
    DependencyValidationResult,
    DependencyWithDetails,
)
from taskflow.domain.models.transition import StatusTransitionResult
from taskflow.domain.models.validation_issue import ValidationIssue

# =============================================================================
# Shared
# =============================================================================


class IssueResponse(BaseModel):
    """A structured error or warning."""

    field: str
    message: str
    code: str
    items: list[Any] = Field(default_factory=list)

    @classmethod
    def from_issue(cls, issue: ValidationIssue) -> IssueResponse:
        return cls(**{"items": [], **issue.to_dict()})


def _issues(issues: tuple[ValidationIssue, ...]) -> list[IssueResponse]:
    return [IssueResponse.from_issue(issue) for issue in issues]


class TaskResponse(BaseModel):
    id: str
    project_id: str
    title: str
    status: str
    code: str
    department_id: str | None = None
    owner_id: str | None = None
    assignee_ids: list[str] = Field(default_factory=list)
    blocked_reason: str | None = None
    blocked_at: datetime | None = None
    blocked_by: str | None = None

    @classmethod
    def from_task(cls, task: Task) -> TaskResponse:
        return cls(
            id=task.id,
            project_id=task.project_id,
            title=task.title,
            status=task.status,
            code=task.code,
            department_id=task.department_id,
            owner_id=task.owner_id,
            assignee_ids=list(task.assignee_ids),
            blocked_reason=task.blocked_reason,
            blocked_at=task.blocked_at,
            blocked_by=task.blocked_by,
        )


class TaskSummaryResponse(BaseModel):
    id: str
    code: str
    title: str
    status: str

    @classmethod
    def from_summary(cls, summary: TaskSummary | None) -> TaskSummaryResponse | None:
        if summary is None:
            return None
        return cls(**summary.to_dict())


class DeletionResponse(BaseModel):
    deleted: bool


# =============================================================================
# Dependencies
# =============================================================================


class AddDependencyRequest(BaseModel):
    depends_on_task_id: str = Field(min_length=1)
    dependency_type: DependencyType = DependencyType.BLOCKS
    created_by: str | None = None


class ValidateDependencyRequest(BaseModel):
    depends_on_task_id: str = Field(min_length=1)
    dependency_type: DependencyType = DependencyType.BLOCKS


class AddDependencyResponse(BaseModel):
    id: str
    warnings: list[IssueResponse] = Field(default_factory=list)


class CycleDetectionResponse(BaseModel):
    would_cycle: bool
    path: list[str] | None = None
    description: str | None = None

    @classmethod
    def from_result(cls, result: CycleDetectionResult) -> CycleDetectionResponse:
        return cls(**result.to_dict())


class DependencyValidationResponse(BaseModel):
    is_valid: bool
    errors: list[IssueResponse]
    warnings: list[IssueResponse]
    cycle_detection: CycleDetectionResponse | None = None

    @classmethod
    def from_result(
        cls, result: DependencyValidationResult
    ) -> DependencyValidationResponse:
        return cls(
            is_valid=result.is_valid,
            errors=_issues(result.errors),
            warnings=_issues(result.warnings),
            cycle_detection=(
                CycleDetectionResponse.from_result(result.cycle_detection)
                if result.cycle_detection
                else None
            ),
        )


class DependencyResponse(BaseModel):
    id: str
    task_id: str
    depends_on_task_id: str
    dependency_type: DependencyType
    created_by: str | None = None
    created_at: datetime
    related_task: TaskSummaryResponse | None = None

    @classmethod
    def from_details(cls, details: DependencyWithDetails) -> DependencyResponse:
        edge = details.dependency
        return cls(
            id=edge.id,
            task_id=edge.task_id,
            depends_on_task_id=edge.depends_on_task_id,
            dependency_type=edge.dependency_type,
            created_by=edge.created_by,
            created_at=edge.created_at,
            related_task=TaskSummaryResponse.from_summary(details.related_task),
        )


class BlockingDependencyResponse(BaseModel):
    task_id: str
    has_blocking: bool
    blocking_tasks: list[DependencyResponse]

    @classmethod
    def from_report(cls, report: BlockingDependencyReport) -> BlockingDependencyResponse:
        return cls(
            task_id=report.task_id,
            has_blocking=report.has_blocking,
            blocking_tasks=[
                DependencyResponse.from_details(d) for d in report.blocking_tasks
            ],
        )


class GraphNodeResponse(BaseModel):
    id: str
    code: str
    title: str
    status: str
    external: bool = False


class GraphEdgeResponse(BaseModel):
    """Edge pointing from the dependent task to its prerequisite."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    source: str = Field(serialization_alias="from")
    target: str = Field(serialization_alias="to")
    type: DependencyType


class DependencyGraphResponse(BaseModel):
    project_id: str
    nodes: list[GraphNodeResponse]
    edges: list[GraphEdgeResponse]

    @classmethod
    def from_graph(cls, graph: DependencyGraph) -> DependencyGraphResponse:
        return cls(
            project_id=graph.project_id,
            nodes=[GraphNodeResponse(**node.to_dict()) for node in graph.nodes],
            edges=[
                GraphEdgeResponse(
                    id=edge.id,
                    source=edge.source,
                    target=edge.target,
                    type=edge.dependency_type,
                )
                for edge in graph.edges
            ],
        )


# =============================================================================
# Status transitions
# =============================================================================


class StatusUpdateRequest(BaseModel):
    status: str
    changed_by: str = Field(min_length=1)
    note: str | None = None
    blocked_reason: str | None = None
    department_id: str | None = None


class BlockTaskRequest(BaseModel):
    blocked_reason: str
    blocked_by: str = Field(min_length=1)
    department_id: str | None = None


class UnblockTaskRequest(BaseModel):
    status: str
    unblocked_by: str = Field(min_length=1)
    note: str | None = None
    department_id: str | None = None


class RecordCreationRequest(BaseModel):
    created_by: str = Field(min_length=1)
    department_id: str | None = None


class ChangeOwnerRequest(BaseModel):
    owner_id: str | None = None
    changed_by: str = Field(min_length=1)
    department_id: str | None = None


class StatusTransitionResponse(BaseModel):
    task: TaskResponse
    from_status: str
    to_status: str
    changed: bool
    warnings: list[IssueResponse] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: StatusTransitionResult) -> StatusTransitionResponse:
        return cls(
            task=TaskResponse.from_task(result.task),
            from_status=result.from_status,
            to_status=result.to_status,
            changed=result.changed,
            warnings=_issues(result.warnings),
        )


class StatusHistoryEntryResponse(BaseModel):
    id: str
    task_id: str
    from_status: str | None
    to_status: str
    changed_by: str
    note: str | None
    created_at: datetime

    @classmethod
    def from_entry(cls, entry: TaskStatusHistoryEntry) -> StatusHistoryEntryResponse:
        return cls(
            id=entry.id,
            task_id=entry.task_id,
            from_status=entry.from_status,
            to_status=entry.to_status,
            changed_by=entry.changed_by,
            note=entry.note,
            created_at=entry.created_at,
        )


class TaskCreatedResponse(BaseModel):
    task: TaskResponse
    history_entry: StatusHistoryEntryResponse
    warnings: list[IssueResponse] = Field(default_factory=list)


class OwnerChangeResponse(BaseModel):
    task: TaskResponse
    previous_owner_id: str | None
    warnings: list[IssueResponse] = Field(default_factory=list)


# =============================================================================
# Checklist
# =============================================================================


class ChecklistItemResponse(BaseModel):
    id: str
    task_id: str
    text: str
    is_mandatory: bool
    is_completed: bool
    position: int
    completed_by: str | None = None
    unchecked_by: str | None = None
    unchecked_reason: str | None = None

    @classmethod
    def from_item(cls, item: ChecklistItem) -> ChecklistItemResponse:
        return cls(**item.to_dict())


class ChecklistItemCreateRequest(BaseModel):
    text: str
    is_mandatory: bool = False
    position: int | None = Field(default=None, ge=0)


class ChecklistItemUpdateRequest(BaseModel):
    text: str | None = None
    is_completed: bool | None = None
    is_mandatory: bool | None = None
    actor_id: str | None = None
    actor_name: str | None = None
    unchecked_reason: str | None = None


class ChecklistHistoryEntryResponse(BaseModel):
    id: str
    checklist_item_id: str
    task_id: str
    action: str
    actor_id: str
    actor_name: str | None
    reason: str | None
    created_at: datetime

    @classmethod
    def from_entry(
        cls, entry: ChecklistStateHistoryEntry
    ) -> ChecklistHistoryEntryResponse:
        return cls(
            id=entry.id,
            checklist_item_id=entry.checklist_item_id,
            task_id=entry.task_id,
            action=entry.action.value,
            actor_id=entry.actor_id,
            actor_name=entry.actor_name,
            reason=entry.reason,
            created_at=entry.created_at,
        )


class MandatoryChecklistValidationResponse(BaseModel):
    is_valid: bool
    enforcement_mode: str
    uncompleted_mandatory_items: list[ChecklistItemResponse]
    errors: list[IssueResponse]
    warnings: list[IssueResponse]


# =============================================================================
# Enforcement
# =============================================================================


class EnforcementModeRequest(BaseModel):
    mode: str
    department_id: str | None = None


class EnforcementModeResponse(BaseModel):
    policy: str
    department_id: str | None = None
    mode: str


class EnforcementSettingResponse(BaseModel):
    scope_key: str
    policy: str
    mode: str
    updated_at: datetime
    require_owner: bool | None = None

    @classmethod
    def from_setting(cls, setting: EnforcementSetting) -> EnforcementSettingResponse:
        return cls(
            scope_key=setting.scope_key,
            policy=setting.policy.value,
            mode=setting.mode.value,
            updated_at=setting.updated_at,
            require_owner=setting.to_dict().get("require_owner"),
        )


class RequireOwnerRequest(BaseModel):
    required: bool
    department_id: str | None = None


class RequireOwnerResponse(BaseModel):
    department_id: str | None = None
    require_owner: bool


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response produced by the error handlers."""

    detail: dict[str, Any]
