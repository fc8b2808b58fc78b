"""Shared warn/block split for enforcement policies."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from taskflow.domain.models.enforcement import EnforcementMode
from taskflow.domain.models.validation_issue import ValidationIssue


@dataclass(frozen=True)
class EnforcementVerdict:
    """Outcome of checking one policy.

    In block mode every issue lands in `errors` and the verdict is invalid;
    in warn mode the same issues land in `warnings` and the verdict stays
    valid.
    """

    is_valid: bool
    enforcement_mode: EnforcementMode
    errors: tuple[ValidationIssue, ...] = field(default_factory=tuple)
    warnings: tuple[ValidationIssue, ...] = field(default_factory=tuple)

    @property
    def issues(self) -> tuple[ValidationIssue, ...]:
        return self.errors + self.warnings

    @classmethod
    def from_issues(
        cls,
        mode: EnforcementMode,
        issues: Sequence[ValidationIssue],
    ) -> EnforcementVerdict:
        if not issues:
            return cls(is_valid=True, enforcement_mode=mode)
        if mode == EnforcementMode.BLOCK:
            return cls(is_valid=False, enforcement_mode=mode, errors=tuple(issues))
        return cls(is_valid=True, enforcement_mode=mode, warnings=tuple(issues))

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "enforcement_mode": self.enforcement_mode.value,
            "errors": [issue.to_dict() for issue in self.errors],
            "warnings": [issue.to_dict() for issue in self.warnings],
        }
