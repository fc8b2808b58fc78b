"""Unit tests for blocked-status rules."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from taskflow.domain.models.validation_issue import IssueCode
from taskflow.domain.services.blocking import (
    blocking_field_changes,
    validate_blocking_reason,
)
from taskflow.domain.services.task_status import WorkflowStatuses

STATUSES = WorkflowStatuses()
NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class TestValidateBlockingReason:
    @pytest.mark.parametrize("reason", [None, "", "   \t"])
    def test_entering_blocked_requires_reason(self, reason: str | None) -> None:
        issue = validate_blocking_reason("Blocked", reason, "In Progress", STATUSES)

        assert issue is not None
        assert issue.code == IssueCode.BLOCKED_REASON_REQUIRED
        assert issue.field == "blocked_reason"

    def test_reason_satisfies_rule(self) -> None:
        assert validate_blocking_reason("Blocked", "vendor", "To Do", STATUSES) is None

    def test_reentry_is_not_revalidated(self) -> None:
        assert validate_blocking_reason("Blocked", None, "Blocked", STATUSES) is None

    def test_status_comparison_is_case_insensitive(self) -> None:
        issue = validate_blocking_reason("blocked", "", "To Do", STATUSES)

        assert issue is not None

    def test_other_transitions_need_no_reason(self) -> None:
        assert validate_blocking_reason("Done", None, "To Do", STATUSES) is None


class TestBlockingFieldChanges:
    def test_entering_blocked_sets_fields(self) -> None:
        changes = blocking_field_changes(
            "Blocked", "To Do", "  waiting  ", "u1", NOW, STATUSES
        )

        assert changes == {
            "blocked_reason": "waiting",
            "blocked_at": NOW,
            "blocked_by": "u1",
        }

    @pytest.mark.parametrize("destination", ["To Do", "In Progress", "Done"])
    def test_leaving_blocked_clears_fields(self, destination: str) -> None:
        changes = blocking_field_changes(destination, "Blocked", None, "u1", NOW, STATUSES)

        assert changes == {"blocked_reason": None, "blocked_at": None, "blocked_by": None}

    def test_reblocking_updates_reason_only(self) -> None:
        changes = blocking_field_changes("Blocked", "Blocked", "new", "u2", NOW, STATUSES)

        assert changes == {"blocked_reason": "new"}

    def test_unrelated_transition_has_no_changes(self) -> None:
        assert blocking_field_changes("Done", "To Do", None, "u1", NOW, STATUSES) == {}
