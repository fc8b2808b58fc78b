"""Task dependency routes.

Edges read "task_id depends on depends_on_task_id". Only BLOCKS edges
take part in cycle checks and blocking queries.
"""

from fastapi import APIRouter, Depends, Query, status

from taskflow.api.dependencies.workflow import get_dependency_service
from taskflow.api.models.workflow import (
    AddDependencyRequest,
    AddDependencyResponse,
    BlockingDependencyResponse,
    CycleDetectionResponse,
    DeletionResponse,
    DependencyGraphResponse,
    DependencyResponse,
    DependencyValidationResponse,
    ErrorResponse,
    IssueResponse,
    ValidateDependencyRequest,
)
from taskflow.application.services.task_dependency_service import (
    TaskDependencyService,
)

router = APIRouter(prefix="/v1/tasks", tags=["dependencies"])
project_router = APIRouter(prefix="/v1/projects", tags=["dependencies"])


@router.post(
    "/{task_id}/dependencies",
    response_model=AddDependencyResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Self dependency or bad input"},
        404: {"model": ErrorResponse, "description": "Task not found"},
        409: {"model": ErrorResponse, "description": "Duplicate or cycle"},
    },
    summary="Add a dependency",
)
async def add_task_dependency(
    task_id: str,
    body: AddDependencyRequest,
    service: TaskDependencyService = Depends(get_dependency_service),
) -> AddDependencyResponse:
    result = await service.add_dependency(
        task_id,
        body.depends_on_task_id,
        dependency_type=body.dependency_type,
        created_by=body.created_by,
    )
    return AddDependencyResponse(
        id=result.id,
        warnings=[IssueResponse.from_issue(w) for w in result.warnings],
    )


@router.post(
    "/{task_id}/dependencies/validate",
    response_model=DependencyValidationResponse,
    summary="Pre-flight a dependency without creating it",
)
async def validate_task_dependency(
    task_id: str,
    body: ValidateDependencyRequest,
    service: TaskDependencyService = Depends(get_dependency_service),
) -> DependencyValidationResponse:
    result = await service.validate_dependency(
        task_id, body.depends_on_task_id, body.dependency_type
    )
    return DependencyValidationResponse.from_result(result)


@router.get(
    "/{task_id}/dependencies/cycle-check",
    response_model=CycleDetectionResponse,
    summary="Would a BLOCKS edge close a cycle?",
)
async def detect_circular_dependency(
    task_id: str,
    depends_on_task_id: str = Query(min_length=1),
    service: TaskDependencyService = Depends(get_dependency_service),
) -> CycleDetectionResponse:
    result = await service.detect_circular_dependency(task_id, depends_on_task_id)
    return CycleDetectionResponse.from_result(result)


@router.get(
    "/{task_id}/dependencies",
    response_model=list[DependencyResponse],
    summary="Prerequisites of a task",
)
async def get_task_dependencies(
    task_id: str,
    service: TaskDependencyService = Depends(get_dependency_service),
) -> list[DependencyResponse]:
    return [
        DependencyResponse.from_details(d)
        for d in await service.get_task_dependencies(task_id)
    ]


@router.get(
    "/{task_id}/dependents",
    response_model=list[DependencyResponse],
    summary="Tasks that depend on a task",
)
async def get_task_dependents(
    task_id: str,
    service: TaskDependencyService = Depends(get_dependency_service),
) -> list[DependencyResponse]:
    return [
        DependencyResponse.from_details(d)
        for d in await service.get_task_dependents(task_id)
    ]


@router.get(
    "/{task_id}/blocking-dependencies",
    response_model=BlockingDependencyResponse,
    summary="Direct BLOCKS prerequisites that are not done",
)
async def has_uncompleted_blocking_dependencies(
    task_id: str,
    service: TaskDependencyService = Depends(get_dependency_service),
) -> BlockingDependencyResponse:
    report = await service.has_uncompleted_blocking_dependencies(task_id)
    return BlockingDependencyResponse.from_report(report)


@router.delete(
    "/dependencies/{dependency_id}",
    response_model=DeletionResponse,
    summary="Remove a dependency by id (idempotent)",
)
async def remove_task_dependency(
    dependency_id: str,
    service: TaskDependencyService = Depends(get_dependency_service),
) -> DeletionResponse:
    return DeletionResponse(deleted=await service.remove_dependency(dependency_id))


@router.delete(
    "/{task_id}/dependencies/{depends_on_task_id}",
    response_model=DeletionResponse,
    summary="Remove the dependency between two tasks (idempotent)",
)
async def remove_task_dependency_by_tasks(
    task_id: str,
    depends_on_task_id: str,
    service: TaskDependencyService = Depends(get_dependency_service),
) -> DeletionResponse:
    deleted = await service.remove_dependency_by_tasks(task_id, depends_on_task_id)
    return DeletionResponse(deleted=deleted)


@project_router.get(
    "/{project_id}/dependency-graph",
    response_model=DependencyGraphResponse,
    response_model_by_alias=True,
    summary="Dependency graph of a project",
)
async def get_dependency_graph(
    project_id: str,
    service: TaskDependencyService = Depends(get_dependency_service),
) -> DependencyGraphResponse:
    return DependencyGraphResponse.from_graph(
        await service.get_dependency_graph(project_id)
    )


@project_router.get(
    "/{project_id}/dependencies",
    response_model=list[DependencyResponse],
    summary="Every dependency of a project's tasks",
)
async def get_project_dependencies(
    project_id: str,
    service: TaskDependencyService = Depends(get_dependency_service),
) -> list[DependencyResponse]:
    return [
        DependencyResponse.from_details(d)
        for d in await service.get_project_dependencies(project_id)
    ]
