"""Task dependency graph models.

An edge `TaskDependency(task_id=A, depends_on_task_id=B)` reads "A depends
on B": B is a prerequisite of A. Only BLOCKS edges take part in cycle
checks and completion gating; RELATES_TO edges are informational.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from taskflow.domain.models.task import TaskSummary
from taskflow.domain.models.validation_issue import ValidationIssue


class DependencyType(str, Enum):
    """Kind of dependency edge."""

    BLOCKS = "BLOCKS"
    """Dependent task cannot be considered complete until the prerequisite is."""

    RELATES_TO = "RELATES_TO"
    """Informational link, excluded from cycle detection."""


@dataclass(frozen=True)
class TaskDependency:
    """A persisted directed edge.

    Attributes:
        id: Edge identifier.
        task_id: The dependent task.
        depends_on_task_id: The prerequisite task.
        dependency_type: BLOCKS or RELATES_TO.
        created_by: User who created the edge, if known.
        created_at: Creation timestamp (UTC).
    """

    id: str
    task_id: str
    depends_on_task_id: str
    dependency_type: DependencyType
    created_by: str | None
    created_at: datetime

    @property
    def is_blocking(self) -> bool:
        return self.dependency_type == DependencyType.BLOCKS

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "task_id": self.task_id,
            "depends_on_task_id": self.depends_on_task_id,
            "dependency_type": self.dependency_type.value,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class DependencyWithDetails:
    """An edge plus a summary of the task on the other end.

    For dependency listings `related_task` is the prerequisite, for
    dependent listings it is the dependent. None when the task no longer
    exists in the task store.
    """

    dependency: TaskDependency
    related_task: TaskSummary | None

    def to_dict(self) -> dict[str, Any]:
        data = self.dependency.to_dict()
        data["related_task"] = (
            self.related_task.to_dict() if self.related_task else None
        )
        return data


@dataclass(frozen=True)
class CycleDetectionResult:
    """Outcome of a cycle pre-flight.

    Attributes:
        would_cycle: True if the proposed BLOCKS edge closes a cycle.
        path: Task ids of the cycle, starting and ending at the dependent
            task. None when no cycle.
        description: Human-readable rendering of the path.
    """

    would_cycle: bool
    path: tuple[str, ...] | None = None
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "would_cycle": self.would_cycle,
            "path": list(self.path) if self.path is not None else None,
            "description": self.description,
        }


@dataclass(frozen=True)
class DependencyValidationResult:
    """Non-raising pre-flight verdict for a proposed edge."""

    is_valid: bool
    errors: tuple[ValidationIssue, ...] = field(default_factory=tuple)
    warnings: tuple[ValidationIssue, ...] = field(default_factory=tuple)
    cycle_detection: CycleDetectionResult | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "errors": [issue.to_dict() for issue in self.errors],
            "warnings": [issue.to_dict() for issue in self.warnings],
            "cycle_detection": (
                self.cycle_detection.to_dict() if self.cycle_detection else None
            ),
        }


@dataclass(frozen=True)
class AddDependencyResult:
    """Result of a successful edge insert."""

    id: str
    warnings: tuple[ValidationIssue, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "warnings": [w.to_dict() for w in self.warnings]}


@dataclass(frozen=True)
class BlockingDependencyReport:
    """Direct BLOCKS prerequisites that are not yet complete."""

    task_id: str
    blocking_tasks: tuple[DependencyWithDetails, ...] = field(default_factory=tuple)

    @property
    def has_blocking(self) -> bool:
        return len(self.blocking_tasks) > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "task_id": self.task_id,
            "has_blocking": self.has_blocking,
            "blocking_tasks": [dep.to_dict() for dep in self.blocking_tasks],
        }


@dataclass(frozen=True)
class GraphNode:
    id: str
    code: str
    title: str
    status: str
    external: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "code": self.code,
            "title": self.title,
            "status": self.status,
            "external": self.external,
        }


@dataclass(frozen=True)
class GraphEdge:
    id: str
    source: str
    target: str
    dependency_type: DependencyType

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "from": self.source,
            "to": self.target,
            "type": self.dependency_type.value,
        }


@dataclass(frozen=True)
class DependencyGraph:
    """Read-only projection of a project's dependency graph.

    Nodes cover every task of the project; tasks from other projects that
    appear on an included edge are added with `external=True`.
    """

    project_id: str
    nodes: tuple[GraphNode, ...]
    edges: tuple[GraphEdge, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "project_id": self.project_id,
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }
