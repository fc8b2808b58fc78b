"""Task ownership rule: every task has exactly one accountable owner."""

from __future__ import annotations

from taskflow.domain.models.enforcement import EnforcementMode
from taskflow.domain.models.validation_issue import IssueCode, ValidationIssue
from taskflow.domain.services.enforcement_verdict import EnforcementVerdict


def ownership_issues(owner_id: str | None) -> list[ValidationIssue]:
    """Violations of the single-owner rule for a proposed owner value."""
    if owner_id is None or not owner_id.strip():
        return [
            ValidationIssue(
                field="owner_id",
                message="Task must have exactly one owner assigned",
                code=IssueCode.OWNER_REQUIRED,
            )
        ]
    if "," in owner_id:
        return [
            ValidationIssue(
                field="owner_id",
                message="Task can only have one owner, multiple values provided",
                code=IssueCode.SINGLE_OWNER_REQUIRED,
            )
        ]
    return []


def validate_task_ownership(
    owner_id: str | None,
    enforcement_mode: EnforcementMode = EnforcementMode.WARN,
    require_owner: bool = True,
) -> EnforcementVerdict:
    """Apply the ownership rule under the given enforcement mode.

    Departments that switched the requirement off always pass.
    """
    if not require_owner:
        return EnforcementVerdict.from_issues(enforcement_mode, [])
    return EnforcementVerdict.from_issues(enforcement_mode, ownership_issues(owner_id))
