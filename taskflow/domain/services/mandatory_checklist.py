"""Mandatory checklist validation (pure core).

This is the only place the completion rule lives. The persistence-backed
MandatoryChecklistValidatorService fetches items and the enforcement mode
and delegates here, so both paths give the same verdict for the same
input. Clients can run the same function before submitting a completion.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from taskflow.domain.models.checklist import ChecklistItem
from taskflow.domain.models.enforcement import EnforcementMode
from taskflow.domain.models.validation_issue import IssueCode, ValidationIssue
from taskflow.domain.services.enforcement_verdict import EnforcementVerdict


@dataclass(frozen=True)
class MandatoryChecklistValidationResult(EnforcementVerdict):
    """Verdict plus the list of mandatory items still open."""

    uncompleted_mandatory_items: tuple[ChecklistItem, ...] = field(
        default_factory=tuple
    )

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["uncompleted_mandatory_items"] = [
            item.to_dict() for item in self.uncompleted_mandatory_items
        ]
        return data


def uncompleted_mandatory_items(
    items: Iterable[ChecklistItem],
) -> tuple[ChecklistItem, ...]:
    """Mandatory items that are not completed, in input order."""
    return tuple(item for item in items if item.is_outstanding_mandatory)


def validate_mandatory_checklist(
    items: Iterable[ChecklistItem],
    enforcement_mode: EnforcementMode = EnforcementMode.WARN,
) -> MandatoryChecklistValidationResult:
    """Check that every mandatory item is completed.

    Args:
        items: The task's checklist items.
        enforcement_mode: WARN reports open items as warnings, BLOCK as
            errors that invalidate the verdict.

    Returns:
        MandatoryChecklistValidationResult. The open item list is the same
        in both modes; only `is_valid` and errors vs warnings differ.
    """
    open_items = uncompleted_mandatory_items(items)
    issues: list[ValidationIssue] = []
    if open_items:
        texts = ", ".join(item.text for item in open_items)
        issues.append(
            ValidationIssue(
                field="checklist",
                message=(
                    f"Cannot complete task: {len(open_items)} mandatory checklist "
                    f"item(s) are not completed: {texts}"
                ),
                code=IssueCode.MANDATORY_CHECKLIST_INCOMPLETE,
                items=open_items,
            )
        )

    verdict = EnforcementVerdict.from_issues(enforcement_mode, issues)
    return MandatoryChecklistValidationResult(
        is_valid=verdict.is_valid,
        enforcement_mode=verdict.enforcement_mode,
        errors=verdict.errors,
        warnings=verdict.warnings,
        uncompleted_mandatory_items=open_items,
    )
