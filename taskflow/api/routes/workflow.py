"""Task workflow routes: status transitions, ownership and history."""

from fastapi import APIRouter, Depends, Query

from taskflow.api.dependencies.workflow import get_workflow_engine
from taskflow.api.models.workflow import (
    BlockingDependencyResponse,
    BlockTaskRequest,
    ChangeOwnerRequest,
    ErrorResponse,
    IssueResponse,
    OwnerChangeResponse,
    RecordCreationRequest,
    StatusHistoryEntryResponse,
    StatusTransitionResponse,
    StatusUpdateRequest,
    TaskCreatedResponse,
    TaskResponse,
    UnblockTaskRequest,
)
from taskflow.application.services.task_workflow_engine import TaskWorkflowEngine
from taskflow.config.workflow_config import MAX_HISTORY_PAGE_LIMIT

router = APIRouter(prefix="/v1/tasks", tags=["workflow"])

_TRANSITION_ERRORS = {
    400: {"model": ErrorResponse, "description": "Invalid status or missing reason"},
    404: {"model": ErrorResponse, "description": "Task not found"},
    422: {"model": ErrorResponse, "description": "Blocked by enforcement policy"},
}


@router.patch(
    "/{task_id}/status",
    response_model=StatusTransitionResponse,
    responses=_TRANSITION_ERRORS,
    summary="Change a task's status",
)
async def update_task_status(
    task_id: str,
    body: StatusUpdateRequest,
    engine: TaskWorkflowEngine = Depends(get_workflow_engine),
) -> StatusTransitionResponse:
    result = await engine.update_task_status(
        task_id,
        body.status,
        body.changed_by,
        note=body.note,
        blocked_reason=body.blocked_reason,
        department_id=body.department_id,
    )
    return StatusTransitionResponse.from_result(result)


@router.post(
    "/{task_id}/block",
    response_model=StatusTransitionResponse,
    responses=_TRANSITION_ERRORS,
    summary="Block a task with a reason",
)
async def block_task(
    task_id: str,
    body: BlockTaskRequest,
    engine: TaskWorkflowEngine = Depends(get_workflow_engine),
) -> StatusTransitionResponse:
    result = await engine.block_task(
        task_id, body.blocked_reason, body.blocked_by, department_id=body.department_id
    )
    return StatusTransitionResponse.from_result(result)


@router.post(
    "/{task_id}/unblock",
    response_model=StatusTransitionResponse,
    responses=_TRANSITION_ERRORS,
    summary="Unblock a task into another status",
)
async def unblock_task(
    task_id: str,
    body: UnblockTaskRequest,
    engine: TaskWorkflowEngine = Depends(get_workflow_engine),
) -> StatusTransitionResponse:
    result = await engine.unblock_task(
        task_id,
        body.status,
        body.unblocked_by,
        note=body.note,
        department_id=body.department_id,
    )
    return StatusTransitionResponse.from_result(result)


@router.post(
    "/{task_id}/creation",
    response_model=TaskCreatedResponse,
    responses=_TRANSITION_ERRORS,
    summary="Record a task's creation in its status history",
)
async def record_task_created(
    task_id: str,
    body: RecordCreationRequest,
    engine: TaskWorkflowEngine = Depends(get_workflow_engine),
) -> TaskCreatedResponse:
    result = await engine.record_task_created(
        task_id, body.created_by, department_id=body.department_id
    )
    return TaskCreatedResponse(
        task=TaskResponse.from_task(result.task),
        history_entry=StatusHistoryEntryResponse.from_entry(result.history_entry),
        warnings=[IssueResponse.from_issue(w) for w in result.warnings],
    )


@router.put(
    "/{task_id}/owner",
    response_model=OwnerChangeResponse,
    responses=_TRANSITION_ERRORS,
    summary="Assign a task's owner",
)
async def change_task_owner(
    task_id: str,
    body: ChangeOwnerRequest,
    engine: TaskWorkflowEngine = Depends(get_workflow_engine),
) -> OwnerChangeResponse:
    result = await engine.change_task_owner(
        task_id, body.owner_id, body.changed_by, department_id=body.department_id
    )
    return OwnerChangeResponse(
        task=TaskResponse.from_task(result.task),
        previous_owner_id=result.previous_owner_id,
        warnings=[IssueResponse.from_issue(w) for w in result.warnings],
    )


@router.get(
    "/{task_id}/can-start",
    response_model=BlockingDependencyResponse,
    responses={404: {"model": ErrorResponse, "description": "Task not found"}},
    summary="Open BLOCKS prerequisites of a task",
)
async def can_start_task(
    task_id: str,
    engine: TaskWorkflowEngine = Depends(get_workflow_engine),
) -> BlockingDependencyResponse:
    return BlockingDependencyResponse.from_report(await engine.can_start_task(task_id))


@router.get(
    "/{task_id}/status-history",
    response_model=list[StatusHistoryEntryResponse],
    summary="Status history of a task, newest first",
)
async def get_task_status_history(
    task_id: str,
    engine: TaskWorkflowEngine = Depends(get_workflow_engine),
) -> list[StatusHistoryEntryResponse]:
    entries = await engine.get_task_status_history(task_id)
    return [StatusHistoryEntryResponse.from_entry(e) for e in entries]


@router.get(
    "/{task_id}/status-history/latest",
    response_model=StatusHistoryEntryResponse | None,
    summary="Latest status change of a task",
)
async def get_latest_task_status_change(
    task_id: str,
    engine: TaskWorkflowEngine = Depends(get_workflow_engine),
) -> StatusHistoryEntryResponse | None:
    entry = await engine.get_latest_task_status_change(task_id)
    return StatusHistoryEntryResponse.from_entry(entry) if entry else None


@router.get(
    "/status-history/by-user/{user_id}",
    response_model=list[StatusHistoryEntryResponse],
    summary="Status changes made by a user, newest first",
)
async def get_status_history_by_user(
    user_id: str,
    limit: int | None = Query(default=None, ge=1, le=MAX_HISTORY_PAGE_LIMIT),
    offset: int = Query(default=0, ge=0),
    engine: TaskWorkflowEngine = Depends(get_workflow_engine),
) -> list[StatusHistoryEntryResponse]:
    entries = await engine.get_status_history_by_user(user_id, limit, offset)
    return [StatusHistoryEntryResponse.from_entry(e) for e in entries]
