"""Structured validation issues shared by errors and warnings.

A ValidationIssue is the unit API clients consume: a field,
a human message, a machine code and (for checklist issues) the offending
items. Blocking verdicts carry them in `errors`, advisory verdicts in
`warnings`; the payload is identical either way.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class IssueCode(str, Enum):
    """Machine-readable issue codes."""

    BLOCKED_REASON_REQUIRED = "BLOCKED_REASON_REQUIRED"
    MANDATORY_CHECKLIST_INCOMPLETE = "MANDATORY_CHECKLIST_INCOMPLETE"
    OWNER_REQUIRED = "OWNER_REQUIRED"
    SINGLE_OWNER_REQUIRED = "SINGLE_OWNER_REQUIRED"
    TASK_NOT_FOUND = "TASK_NOT_FOUND"
    DEPENDS_ON_TASK_NOT_FOUND = "DEPENDS_ON_TASK_NOT_FOUND"
    DEPENDENCY_NOT_FOUND = "DEPENDENCY_NOT_FOUND"
    CHECKLIST_ITEM_NOT_FOUND = "CHECKLIST_ITEM_NOT_FOUND"
    SELF_DEPENDENCY = "SELF_DEPENDENCY"
    DEPENDENCY_EXISTS = "DEPENDENCY_EXISTS"
    CIRCULAR_DEPENDENCY = "CIRCULAR_DEPENDENCY"
    CROSS_PROJECT_DEPENDENCY = "CROSS_PROJECT_DEPENDENCY"
    CROSS_DEPARTMENT_DEPENDENCY = "CROSS_DEPARTMENT_DEPENDENCY"
    DEPENDENCY_ALREADY_COMPLETED = "DEPENDENCY_ALREADY_COMPLETED"
    TASK_ID_REQUIRED = "TASK_ID_REQUIRED"
    TASK_NOT_BLOCKED = "TASK_NOT_BLOCKED"
    INVALID_STATUS = "INVALID_STATUS"
    INVALID_ENFORCEMENT_MODE = "INVALID_ENFORCEMENT_MODE"
    ACTOR_REQUIRED = "ACTOR_REQUIRED"
    CHECKLIST_TEXT_REQUIRED = "CHECKLIST_TEXT_REQUIRED"


@dataclass(frozen=True)
class ValidationIssue:
    """A single error or warning.

    Attributes:
        field: Input field the issue refers to.
        message: Human-readable explanation.
        code: Machine-readable code.
        items: Structured payload (e.g. unchecked checklist items).
    """

    field: str
    message: str
    code: IssueCode
    items: tuple[Any, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        data: dict[str, Any] = {
            "field": self.field,
            "message": self.message,
            "code": self.code.value,
        }
        if self.items:
            data["items"] = [
                item.to_dict() if hasattr(item, "to_dict") else item
                for item in self.items
            ]
        return data
