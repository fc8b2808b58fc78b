"""Validation errors for missing or ill-formed input."""

from __future__ import annotations

from taskflow.domain.exceptions import TaskflowError
from taskflow.domain.models.validation_issue import IssueCode, ValidationIssue


class ValidationError(TaskflowError):
    """Raised when a request is rejected before any state is touched.

    Attributes:
        code: Machine-readable issue code (e.g. BLOCKED_REASON_REQUIRED).
        field: Input field the error refers to.
    """

    def __init__(self, code: IssueCode, message: str, field: str = "") -> None:
        """Initialize ValidationError.

        Args:
            code: Machine-readable issue code.
            message: Human-readable explanation.
            field: Name of the offending input field.
        """
        self.code = code
        self.field = field
        super().__init__(message)

    @classmethod
    def from_issue(cls, issue: ValidationIssue) -> ValidationError:
        return cls(code=issue.code, message=issue.message, field=issue.field)

    def to_dict(self) -> dict[str, object]:
        data = super().to_dict()
        data["code"] = self.code.value
        data["field"] = self.field
        return data
