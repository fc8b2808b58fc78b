"""Errors raised when a policy in block mode rejects an action."""

from __future__ import annotations

from collections.abc import Sequence

from taskflow.domain.exceptions import TaskflowError
from taskflow.domain.models.enforcement import EnforcementPolicy
from taskflow.domain.models.validation_issue import ValidationIssue


class EnforcementBlockedError(TaskflowError):
    """Raised when an enforcement policy in `block` mode has violations.

    The transition that triggered the check is rejected wholesale; the
    structured issues are carried so callers can show the offending
    checklist items or ownership rules.

    Attributes:
        policy: The policy that blocked the action.
        issues: Aggregated violations.
    """

    def __init__(
        self,
        policy: EnforcementPolicy,
        issues: Sequence[ValidationIssue],
    ) -> None:
        self.policy = policy
        self.issues = tuple(issues)
        messages = "; ".join(issue.message for issue in self.issues)
        super().__init__(f"{policy.value} enforcement blocked the action: {messages}")

    @property
    def codes(self) -> list[str]:
        return [issue.code.value for issue in self.issues]

    def to_dict(self) -> dict[str, object]:
        data = super().to_dict()
        data["policy"] = self.policy.value
        data["errors"] = [issue.to_dict() for issue in self.issues]
        return data
