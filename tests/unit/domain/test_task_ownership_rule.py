"""Unit tests for the single-owner rule."""

import pytest

from taskflow.domain.models.enforcement import EnforcementMode
from taskflow.domain.models.validation_issue import IssueCode
from taskflow.domain.services.task_ownership import (
    ownership_issues,
    validate_task_ownership,
)


class TestOwnershipIssues:
    @pytest.mark.parametrize("owner_id", [None, "", "   "])
    def test_missing_owner(self, owner_id: str | None) -> None:
        assert [i.code for i in ownership_issues(owner_id)] == [IssueCode.OWNER_REQUIRED]

    def test_multiple_owners(self) -> None:
        issues = ownership_issues("u1,u2")

        assert [i.code for i in issues] == [IssueCode.SINGLE_OWNER_REQUIRED]

    def test_single_owner_is_fine(self) -> None:
        assert ownership_issues("u1") == []


class TestValidateTaskOwnership:
    def test_block_mode_invalidates(self) -> None:
        verdict = validate_task_ownership(None, EnforcementMode.BLOCK)

        assert verdict.is_valid is False
        assert verdict.errors[0].code == IssueCode.OWNER_REQUIRED

    def test_warn_mode_only_warns(self) -> None:
        verdict = validate_task_ownership(None, EnforcementMode.WARN)

        assert verdict.is_valid is True
        assert verdict.warnings[0].code == IssueCode.OWNER_REQUIRED

    def test_valid_owner_has_no_issues(self) -> None:
        verdict = validate_task_ownership("u1", EnforcementMode.BLOCK)

        assert verdict.is_valid
        assert verdict.issues == ()

    @pytest.mark.parametrize("owner_id", [None, "u1,u2"])
    def test_requirement_switched_off_always_passes(self, owner_id: str | None) -> None:
        verdict = validate_task_ownership(owner_id, EnforcementMode.BLOCK, require_owner=False)

        assert verdict.is_valid
        assert verdict.enforcement_mode == EnforcementMode.BLOCK
        assert verdict.issues == ()
