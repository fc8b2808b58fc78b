"""Task dependency service: edge mutations, queries and graph export.

Structural invariants enforced on insert:
- no self edge
- both endpoints exist
- unique (task_id, depends_on_task_id)
- the BLOCKS subgraph stays acyclic

The duplicate check, the cycle check and the insert run inside the
store's `exclusive()` scope, so two concurrent inserts cannot each pass
against the same snapshot and jointly create a cycle.
"""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from taskflow.application.ports.dependency_repository import (
    DependencyRepositoryProtocol,
)
from taskflow.application.ports.task_repository import TaskRepositoryProtocol
from taskflow.application.services.base import LoggingMixin
from taskflow.application.services.cycle_detector import CycleDetector
from taskflow.config.workflow_config import DEFAULT_WORKFLOW_CONFIG, WorkflowConfig
from taskflow.domain.errors import (
    CycleDetectedError,
    DuplicateDependencyError,
    NotFoundError,
    SelfDependencyError,
    ValidationError,
)
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
from taskflow.domain.models.validation_issue import IssueCode, ValidationIssue


class TaskDependencyService(LoggingMixin):
    """Public operations over the task dependency graph."""

    def __init__(
        self,
        dependency_repository: DependencyRepositoryProtocol,
        task_repository: TaskRepositoryProtocol,
        config: WorkflowConfig = DEFAULT_WORKFLOW_CONFIG,
        cycle_detector: CycleDetector | None = None,
    ) -> None:
        self._dependencies = dependency_repository
        self._tasks = task_repository
        self._statuses = config.statuses
        self._cycle_detector = cycle_detector or CycleDetector(
            dependency_repository, task_repository
        )
        self._init_logger()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def add_dependency(
        self,
        task_id: str,
        depends_on_task_id: str,
        dependency_type: DependencyType = DependencyType.BLOCKS,
        created_by: str | None = None,
    ) -> AddDependencyResult:
        """Create the edge "task_id depends on depends_on_task_id".

        Raises:
            ValidationError: TASK_ID_REQUIRED if either id is blank.
            SelfDependencyError: If both ids are equal.
            NotFoundError: If either task does not exist.
            DuplicateDependencyError: If the edge already exists.
            CycleDetectedError: If a BLOCKS edge would close a cycle.

        Returns:
            The new edge id and advisory warnings.
        """
        log = self._log_operation(
            "add_dependency",
            task_id=task_id,
            depends_on_task_id=depends_on_task_id,
            dependency_type=dependency_type.value,
        )
        self._require_ids(task_id, depends_on_task_id)
        if task_id == depends_on_task_id:
            raise SelfDependencyError(task_id)

        task, prerequisite = await self._load_endpoints(task_id, depends_on_task_id)

        async with self._dependencies.exclusive():
            if await self._dependencies.find_by_tasks(task_id, depends_on_task_id):
                raise DuplicateDependencyError(task_id, depends_on_task_id)

            if dependency_type == DependencyType.BLOCKS:
                cycle = await self._cycle_detector.detect(task_id, depends_on_task_id)
                if cycle.would_cycle:
                    log.info("dependency_rejected_cycle", path=list(cycle.path or ()))
                    raise CycleDetectedError(
                        task_id,
                        depends_on_task_id,
                        cycle.path or (),
                        cycle.description,
                    )

            dependency = TaskDependency(
                id=str(uuid4()),
                task_id=task_id,
                depends_on_task_id=depends_on_task_id,
                dependency_type=dependency_type,
                created_by=created_by,
                created_at=datetime.now(timezone.utc),
            )
            await self._dependencies.create(dependency)

        warnings = self._relationship_warnings(task, prerequisite)
        log.info(
            "dependency_added",
            dependency_id=dependency.id,
            warnings=[w.code.value for w in warnings],
        )
        return AddDependencyResult(id=dependency.id, warnings=tuple(warnings))

    async def remove_dependency(self, dependency_id: str) -> bool:
        """Delete an edge by id. Removing a missing edge is a no-op."""
        deleted = await self._dependencies.delete(dependency_id)
        self._log_operation("remove_dependency", dependency_id=dependency_id).info(
            "dependency_removed" if deleted else "dependency_remove_noop"
        )
        return deleted

    async def remove_dependency_by_tasks(
        self, task_id: str, depends_on_task_id: str
    ) -> bool:
        """Delete the edge between two tasks. Missing edges are a no-op."""
        deleted = await self._dependencies.delete_by_tasks(task_id, depends_on_task_id)
        self._log_operation(
            "remove_dependency_by_tasks",
            task_id=task_id,
            depends_on_task_id=depends_on_task_id,
        ).info("dependency_removed" if deleted else "dependency_remove_noop")
        return deleted

    # ------------------------------------------------------------------
    # Pre-flight
    # ------------------------------------------------------------------

    async def detect_circular_dependency(
        self, task_id: str, depends_on_task_id: str
    ) -> CycleDetectionResult:
        """Would the BLOCKS edge close a cycle? Never mutates anything."""
        return await self._cycle_detector.detect(task_id, depends_on_task_id)

    async def validate_dependency(
        self,
        task_id: str,
        depends_on_task_id: str,
        dependency_type: DependencyType = DependencyType.BLOCKS,
    ) -> DependencyValidationResult:
        """Report every problem `add_dependency` would raise, without raising."""
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        if _is_blank(task_id) or _is_blank(depends_on_task_id):
            errors.append(_required_ids_issue())
            return DependencyValidationResult(is_valid=False, errors=tuple(errors))

        if task_id == depends_on_task_id:
            errors.append(
                ValidationIssue(
                    field="depends_on_task_id",
                    message="A task cannot depend on itself",
                    code=IssueCode.SELF_DEPENDENCY,
                )
            )
            return DependencyValidationResult(
                is_valid=False,
                errors=tuple(errors),
                cycle_detection=CycleDetectionResult(
                    would_cycle=True, path=(task_id, task_id)
                ),
            )

        task = await self._tasks.get_task_by_id(task_id)
        prerequisite = await self._tasks.get_task_by_id(depends_on_task_id)
        if task is None:
            errors.append(
                ValidationIssue(
                    field="task_id",
                    message=f"Task not found: {task_id}",
                    code=IssueCode.TASK_NOT_FOUND,
                )
            )
        if prerequisite is None:
            errors.append(
                ValidationIssue(
                    field="depends_on_task_id",
                    message=f"Dependency task not found: {depends_on_task_id}",
                    code=IssueCode.DEPENDS_ON_TASK_NOT_FOUND,
                )
            )

        if await self._dependencies.find_by_tasks(task_id, depends_on_task_id):
            errors.append(
                ValidationIssue(
                    field="depends_on_task_id",
                    message="This dependency already exists",
                    code=IssueCode.DEPENDENCY_EXISTS,
                )
            )

        cycle: CycleDetectionResult | None = None
        if dependency_type == DependencyType.BLOCKS:
            cycle = await self._cycle_detector.detect(task_id, depends_on_task_id)
            if cycle.would_cycle:
                errors.append(
                    ValidationIssue(
                        field="depends_on_task_id",
                        message=cycle.description or "Circular dependency",
                        code=IssueCode.CIRCULAR_DEPENDENCY,
                    )
                )

        if task is not None and prerequisite is not None:
            warnings.extend(self._relationship_warnings(task, prerequisite))

        return DependencyValidationResult(
            is_valid=not errors,
            errors=tuple(errors),
            warnings=tuple(warnings),
            cycle_detection=cycle,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get_task_dependencies(self, task_id: str) -> list[DependencyWithDetails]:
        """Prerequisites of a task, each with a summary of the prerequisite."""
        edges = await self._dependencies.list_dependencies(task_id)
        return [
            DependencyWithDetails(
                dependency=edge,
                related_task=await self._summary(edge.depends_on_task_id),
            )
            for edge in edges
        ]

    async def get_task_dependents(self, task_id: str) -> list[DependencyWithDetails]:
        """Tasks that depend on `task_id`, each with a summary of the dependent."""
        edges = await self._dependencies.list_dependents(task_id)
        return [
            DependencyWithDetails(
                dependency=edge,
                related_task=await self._summary(edge.task_id),
            )
            for edge in edges
        ]

    async def get_project_dependencies(
        self, project_id: str
    ) -> list[DependencyWithDetails]:
        """Every edge whose dependent task belongs to the project."""
        tasks = await self._tasks.list_tasks_by_project(project_id)
        project_ids = {task.id for task in tasks}
        edges = await self._dependencies.list_touching(project_ids)
        return [
            DependencyWithDetails(
                dependency=edge,
                related_task=await self._summary(edge.depends_on_task_id),
            )
            for edge in edges
            if edge.task_id in project_ids
        ]

    async def has_uncompleted_blocking_dependencies(
        self, task_id: str
    ) -> BlockingDependencyReport:
        """Direct BLOCKS prerequisites that are not in a done status.

        Transitive prerequisites are not inspected: an upstream task cannot
        itself be done while its own blockers are open. A prerequisite that
        no longer exists counts as blocking.
        """
        edges = await self._dependencies.list_dependencies(task_id)
        blocking: list[DependencyWithDetails] = []
        for edge in edges:
            if not edge.is_blocking:
                continue
            prerequisite = await self._tasks.get_task_by_id(edge.depends_on_task_id)
            if prerequisite is not None and self._statuses.is_done(prerequisite.status):
                continue
            blocking.append(
                DependencyWithDetails(
                    dependency=edge,
                    related_task=(
                        TaskSummary.from_task(prerequisite) if prerequisite else None
                    ),
                )
            )
        return BlockingDependencyReport(task_id=task_id, blocking_tasks=tuple(blocking))

    async def get_dependency_graph(self, project_id: str) -> DependencyGraph:
        """Nodes and edges of a project's dependency graph for visualisation.

        Edges with one endpoint outside the project are included, and the
        outside task is added as an external node.
        """
        tasks = await self._tasks.list_tasks_by_project(project_id)
        nodes = [
            GraphNode(id=t.id, code=t.code, title=t.title, status=t.status)
            for t in tasks
        ]
        known = {t.id for t in tasks}
        edges = await self._dependencies.list_touching(known)

        for edge in edges:
            for endpoint in (edge.task_id, edge.depends_on_task_id):
                if endpoint in known:
                    continue
                known.add(endpoint)
                other = await self._tasks.get_task_by_id(endpoint)
                nodes.append(
                    GraphNode(
                        id=endpoint,
                        code=other.code if other else "",
                        title=other.title if other else "",
                        status=other.status if other else "",
                        external=True,
                    )
                )

        return DependencyGraph(
            project_id=project_id,
            nodes=tuple(nodes),
            edges=tuple(
                GraphEdge(
                    id=edge.id,
                    source=edge.task_id,
                    target=edge.depends_on_task_id,
                    dependency_type=edge.dependency_type,
                )
                for edge in edges
            ),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _require_ids(task_id: str, depends_on_task_id: str) -> None:
        if _is_blank(task_id) or _is_blank(depends_on_task_id):
            raise ValidationError.from_issue(_required_ids_issue())

    async def _load_endpoints(
        self, task_id: str, depends_on_task_id: str
    ) -> tuple[Task, Task]:
        task = await self._tasks.get_task_by_id(task_id)
        if task is None:
            raise NotFoundError("task", task_id)
        prerequisite = await self._tasks.get_task_by_id(depends_on_task_id)
        if prerequisite is None:
            raise NotFoundError(
                "task", depends_on_task_id, code=IssueCode.DEPENDS_ON_TASK_NOT_FOUND
            )
        return task, prerequisite

    async def _summary(self, task_id: str) -> TaskSummary | None:
        task = await self._tasks.get_task_by_id(task_id)
        return TaskSummary.from_task(task) if task is not None else None

    def _relationship_warnings(
        self, task: Task, prerequisite: Task
    ) -> list[ValidationIssue]:
        warnings: list[ValidationIssue] = []
        if task.project_id != prerequisite.project_id:
            warnings.append(
                ValidationIssue(
                    field="depends_on_task_id",
                    message="This dependency crosses project boundaries",
                    code=IssueCode.CROSS_PROJECT_DEPENDENCY,
                )
            )
        if (
            task.department_id
            and prerequisite.department_id
            and task.department_id != prerequisite.department_id
        ):
            warnings.append(
                ValidationIssue(
                    field="depends_on_task_id",
                    message="This dependency crosses department boundaries",
                    code=IssueCode.CROSS_DEPARTMENT_DEPENDENCY,
                )
            )
        if self._statuses.is_done(prerequisite.status):
            warnings.append(
                ValidationIssue(
                    field="depends_on_task_id",
                    message="The dependency task is already completed",
                    code=IssueCode.DEPENDENCY_ALREADY_COMPLETED,
                )
            )
        return warnings


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _required_ids_issue() -> ValidationIssue:
    return ValidationIssue(
        field="task_id",
        message="Both task_id and depends_on_task_id are required",
        code=IssueCode.TASK_ID_REQUIRED,
    )
