"""Checklist routes: items, the mandatory completion gate and history."""

from fastapi import APIRouter, Depends, Query, status

from taskflow.api.dependencies.workflow import (
    get_checklist_service,
    get_checklist_validator,
)
from taskflow.api.models.workflow import (
    ChecklistHistoryEntryResponse,
    ChecklistItemCreateRequest,
    ChecklistItemResponse,
    ChecklistItemUpdateRequest,
    ErrorResponse,
    IssueResponse,
    MandatoryChecklistValidationResponse,
)
from taskflow.application.services.checklist_service import ChecklistService
from taskflow.application.services.mandatory_checklist_validator import (
    MandatoryChecklistValidatorService,
)

router = APIRouter(prefix="/v1/tasks", tags=["checklist"])


@router.get(
    "/{task_id}/checklist",
    response_model=list[ChecklistItemResponse],
    summary="Checklist items of a task",
)
async def get_checklist(
    task_id: str,
    service: ChecklistService = Depends(get_checklist_service),
) -> list[ChecklistItemResponse]:
    return [ChecklistItemResponse.from_item(i) for i in await service.get_checklist(task_id)]


@router.post(
    "/{task_id}/checklist",
    response_model=ChecklistItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Blank text"},
        404: {"model": ErrorResponse, "description": "Task not found"},
    },
    summary="Add a checklist item",
)
async def add_checklist_item(
    task_id: str,
    body: ChecklistItemCreateRequest,
    service: ChecklistService = Depends(get_checklist_service),
) -> ChecklistItemResponse:
    item = await service.add_checklist_item(
        task_id, body.text, is_mandatory=body.is_mandatory, position=body.position
    )
    return ChecklistItemResponse.from_item(item)


@router.patch(
    "/checklist-items/{item_id}",
    response_model=ChecklistItemResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Blank text or missing actor"},
        404: {"model": ErrorResponse, "description": "Item not found"},
    },
    summary="Update a checklist item",
)
async def update_checklist_item(
    item_id: str,
    body: ChecklistItemUpdateRequest,
    service: ChecklistService = Depends(get_checklist_service),
) -> ChecklistItemResponse:
    item = await service.update_checklist_item(
        item_id,
        text=body.text,
        is_completed=body.is_completed,
        is_mandatory=body.is_mandatory,
        actor_id=body.actor_id,
        actor_name=body.actor_name,
        unchecked_reason=body.unchecked_reason,
    )
    return ChecklistItemResponse.from_item(item)


@router.get(
    "/{task_id}/checklist/validation",
    response_model=MandatoryChecklistValidationResponse,
    summary="Would completing the task pass the mandatory checklist gate?",
)
async def validate_mandatory_checklist(
    task_id: str,
    department_id: str | None = Query(default=None),
    validator: MandatoryChecklistValidatorService = Depends(get_checklist_validator),
) -> MandatoryChecklistValidationResponse:
    result = await validator.validate_for_task_completion(task_id, department_id)
    return MandatoryChecklistValidationResponse(
        is_valid=result.is_valid,
        enforcement_mode=result.enforcement_mode.value,
        uncompleted_mandatory_items=[
            ChecklistItemResponse.from_item(i) for i in result.uncompleted_mandatory_items
        ],
        errors=[IssueResponse.from_issue(e) for e in result.errors],
        warnings=[IssueResponse.from_issue(w) for w in result.warnings],
    )


@router.get(
    "/{task_id}/checklist/uncompleted-mandatory",
    response_model=list[ChecklistItemResponse],
    summary="Mandatory items that are not completed",
)
async def get_uncompleted_mandatory_items(
    task_id: str,
    validator: MandatoryChecklistValidatorService = Depends(get_checklist_validator),
) -> list[ChecklistItemResponse]:
    items = await validator.get_uncompleted_mandatory_items(task_id)
    return [ChecklistItemResponse.from_item(i) for i in items]


@router.get(
    "/{task_id}/checklist/history",
    response_model=list[ChecklistHistoryEntryResponse],
    summary="Checklist completion flips of a task, newest first",
)
async def get_checklist_state_history(
    task_id: str,
    service: ChecklistService = Depends(get_checklist_service),
) -> list[ChecklistHistoryEntryResponse]:
    entries = await service.get_checklist_state_history(task_id)
    return [ChecklistHistoryEntryResponse.from_entry(e) for e in entries]


@router.get(
    "/checklist-items/{item_id}/history",
    response_model=list[ChecklistHistoryEntryResponse],
    summary="Completion flips of one checklist item, newest first",
)
async def get_checklist_item_history(
    item_id: str,
    service: ChecklistService = Depends(get_checklist_service),
) -> list[ChecklistHistoryEntryResponse]:
    entries = await service.get_checklist_item_history(item_id)
    return [ChecklistHistoryEntryResponse.from_entry(e) for e in entries]
