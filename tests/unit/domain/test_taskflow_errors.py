"""Unit tests for the domain error taxonomy."""

from taskflow.domain.errors import (
    CycleDetectedError,
    DependencyError,
    DuplicateDependencyError,
    EnforcementBlockedError,
    NotFoundError,
    PersistenceError,
    SelfDependencyError,
    ValidationError,
)
from taskflow.domain.exceptions import TaskflowError
from taskflow.domain.models.enforcement import EnforcementPolicy
from taskflow.domain.models.validation_issue import IssueCode, ValidationIssue


class TestTaxonomy:
    def test_every_error_is_a_taskflow_error(self) -> None:
        for error in (
            ValidationError(IssueCode.INVALID_STATUS, "bad"),
            NotFoundError("task", "t1"),
            SelfDependencyError("t1"),
            DuplicateDependencyError("t1", "t2"),
            CycleDetectedError("t1", "t2", ["t1", "t2", "t1"]),
            EnforcementBlockedError(EnforcementPolicy.OWNERSHIP, []),
            PersistenceError("select"),
        ):
            assert isinstance(error, TaskflowError)

    def test_dependency_errors_share_base(self) -> None:
        assert issubclass(CycleDetectedError, DependencyError)
        assert issubclass(SelfDependencyError, DependencyError)


class TestPayloads:
    def test_validation_error_from_issue(self) -> None:
        issue = ValidationIssue(
            field="blocked_reason",
            message="Reason required",
            code=IssueCode.BLOCKED_REASON_REQUIRED,
        )

        data = ValidationError.from_issue(issue).to_dict()

        assert data == {
            "error": "ValidationError",
            "message": "Reason required",
            "code": "BLOCKED_REASON_REQUIRED",
            "field": "blocked_reason",
        }

    def test_not_found_message(self) -> None:
        error = NotFoundError(
            "checklist_item", "c9", code=IssueCode.CHECKLIST_ITEM_NOT_FOUND
        )

        assert error.message == "Checklist item not found: c9"
        assert error.to_dict()["code"] == "CHECKLIST_ITEM_NOT_FOUND"

    def test_cycle_error_carries_path(self) -> None:
        error = CycleDetectedError("B", "A", ["B", "A", "B"])

        data = error.to_dict()

        assert error.path == ("B", "A", "B")
        assert data["path"] == ["B", "A", "B"]
        assert data["code"] == "CIRCULAR_DEPENDENCY"
        assert "B -> A -> B" in error.message

    def test_enforcement_error_lists_codes(self) -> None:
        issue = ValidationIssue(
            field="owner_id", message="Owner required", code=IssueCode.OWNER_REQUIRED
        )

        error = EnforcementBlockedError(EnforcementPolicy.OWNERSHIP, [issue])

        assert error.codes == ["OWNER_REQUIRED"]
        assert error.to_dict()["policy"] == "ownership"
        assert error.to_dict()["errors"][0]["field"] == "owner_id"
