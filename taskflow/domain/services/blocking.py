"""Blocking rules for the Blocked status.

Entering the blocked status needs a non-blank reason; re-entering it while
already blocked is not re-validated. Leaving it clears every blocking
field, whatever the destination status.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from taskflow.domain.models.validation_issue import IssueCode, ValidationIssue
from taskflow.domain.services.task_status import WorkflowStatuses


def validate_blocking_reason(
    new_status: str,
    blocked_reason: str | None,
    current_status: str | None,
    statuses: WorkflowStatuses,
) -> ValidationIssue | None:
    """Return the BLOCKED_REASON_REQUIRED issue if the transition needs one.

    Args:
        new_status: Requested status.
        blocked_reason: Reason supplied by the caller.
        current_status: Status before the transition.
        statuses: Status vocabulary.

    Returns:
        The issue when entering the blocked status without a reason,
        otherwise None.
    """
    if not statuses.enters_blocked(current_status, new_status):
        return None
    if blocked_reason is not None and blocked_reason.strip():
        return None
    return ValidationIssue(
        field="blocked_reason",
        message=(
            f"Blocked reason is required when changing task status to "
            f"{statuses.blocked_status}"
        ),
        code=IssueCode.BLOCKED_REASON_REQUIRED,
    )


def blocking_field_changes(
    new_status: str,
    current_status: str | None,
    blocked_reason: str | None,
    actor_id: str | None,
    now: datetime,
    statuses: WorkflowStatuses,
) -> dict[str, Any]:
    """Blocking field updates that accompany a status change.

    Returns:
        Fields to write next to the status: populated when entering the
        blocked status, nulled when leaving it, the new reason when a
        blocked task is re-blocked with one, empty otherwise.
    """
    if statuses.enters_blocked(current_status, new_status):
        return {
            "blocked_reason": (blocked_reason or "").strip(),
            "blocked_at": now,
            "blocked_by": actor_id,
        }
    if statuses.leaves_blocked(current_status, new_status):
        return {"blocked_reason": None, "blocked_at": None, "blocked_by": None}
    if statuses.is_blocked(new_status) and blocked_reason and blocked_reason.strip():
        return {"blocked_reason": blocked_reason.strip()}
    return {}
