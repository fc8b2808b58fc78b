"""Errors for references to records that do not exist."""

from __future__ import annotations

from taskflow.domain.exceptions import TaskflowError
from taskflow.domain.models.validation_issue import IssueCode


class NotFoundError(TaskflowError):
    """Raised when a referenced task, dependency or checklist item is absent.

    Attributes:
        resource: Kind of record ("task", "dependency", "checklist_item").
        resource_id: The identifier that was looked up.
        code: Issue code matching the resource.
    """

    def __init__(
        self,
        resource: str,
        resource_id: str,
        code: IssueCode = IssueCode.TASK_NOT_FOUND,
    ) -> None:
        self.resource = resource
        self.resource_id = resource_id
        self.code = code
        super().__init__(f"{resource.replace('_', ' ').capitalize()} not found: {resource_id}")

    def to_dict(self) -> dict[str, object]:
        data = super().to_dict()
        data.update(
            {
                "code": self.code.value,
                "resource": self.resource,
                "resource_id": self.resource_id,
            }
        )
        return data
