"""Unit tests for the pure mandatory checklist validator."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from taskflow.domain.models.checklist import ChecklistItem
from taskflow.domain.models.enforcement import EnforcementMode
from taskflow.domain.models.validation_issue import IssueCode
from taskflow.domain.services.mandatory_checklist import (
    uncompleted_mandatory_items,
    validate_mandatory_checklist,
)


@pytest.fixture
def items(make_item: Callable[..., ChecklistItem]) -> list[ChecklistItem]:
    return [
        make_item("i1", text="Sign-off", is_mandatory=True),
        make_item("i2", text="Nice to have"),
        make_item("i3", text="Backup taken", is_mandatory=True, is_completed=True),
        make_item("i4", text="Runbook", is_mandatory=True),
    ]


class TestUncompletedMandatoryItems:
    def test_filters_open_mandatory_items_in_order(self, items: list[ChecklistItem]) -> None:
        assert [i.id for i in uncompleted_mandatory_items(items)] == ["i1", "i4"]


class TestValidateMandatoryChecklist:
    def test_empty_checklist_is_valid(self) -> None:
        result = validate_mandatory_checklist([], EnforcementMode.BLOCK)

        assert result.is_valid
        assert result.errors == ()
        assert result.warnings == ()

    def test_all_mandatory_done_is_valid(self, make_item: Callable[..., ChecklistItem]) -> None:
        result = validate_mandatory_checklist(
            [make_item("i1", is_mandatory=True, is_completed=True)],
            EnforcementMode.BLOCK,
        )

        assert result.is_valid
        assert result.uncompleted_mandatory_items == ()

    def test_block_mode_reports_errors(self, items: list[ChecklistItem]) -> None:
        result = validate_mandatory_checklist(items, EnforcementMode.BLOCK)

        assert result.is_valid is False
        assert result.warnings == ()
        assert len(result.errors) == 1
        issue = result.errors[0]
        assert issue.code == IssueCode.MANDATORY_CHECKLIST_INCOMPLETE
        assert "2 mandatory checklist item(s)" in issue.message
        assert "Sign-off" in issue.message and "Runbook" in issue.message
        assert [i.id for i in issue.items] == ["i1", "i4"]

    def test_warn_mode_reports_warnings(self, items: list[ChecklistItem]) -> None:
        result = validate_mandatory_checklist(items, EnforcementMode.WARN)

        assert result.is_valid is True
        assert result.errors == ()
        assert result.warnings[0].code == IssueCode.MANDATORY_CHECKLIST_INCOMPLETE

    def test_default_mode_is_warn(self, items: list[ChecklistItem]) -> None:
        assert validate_mandatory_checklist(items).enforcement_mode == EnforcementMode.WARN

    def test_warn_and_block_differ_only_in_verdict(self, items: list[ChecklistItem]) -> None:
        warn = validate_mandatory_checklist(items, EnforcementMode.WARN)
        block = validate_mandatory_checklist(items, EnforcementMode.BLOCK)

        assert warn.uncompleted_mandatory_items == block.uncompleted_mandatory_items
        assert warn.warnings == block.errors
        assert (warn.is_valid, block.is_valid) == (True, False)

    def test_to_dict_includes_items(self, items: list[ChecklistItem]) -> None:
        data = validate_mandatory_checklist(items, EnforcementMode.BLOCK).to_dict()

        assert data["enforcement_mode"] == "block"
        assert [i["id"] for i in data["uncompleted_mandatory_items"]] == ["i1", "i4"]
        assert data["errors"][0]["items"][0]["text"] == "Sign-off"
