"""Unit tests for EnforcementPolicyService resolution and caching."""

from __future__ import annotations

import pytest

from taskflow.application.services.enforcement_policy_service import (
    EnforcementPolicyService,
)
from taskflow.config.workflow_config import WorkflowConfig
from taskflow.domain.errors import ValidationError
from taskflow.domain.models.enforcement import (
    GLOBAL_SCOPE,
    EnforcementMode,
    EnforcementPolicy,
)
from taskflow.domain.models.validation_issue import IssueCode
from taskflow.infrastructure.stubs import EnforcementSettingsRepositoryStub

CHECKLIST = EnforcementPolicy.MANDATORY_CHECKLIST
OWNERSHIP = EnforcementPolicy.OWNERSHIP


class FakeMonotonic:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def repository() -> EnforcementSettingsRepositoryStub:
    return EnforcementSettingsRepositoryStub()


@pytest.fixture
def monotonic() -> FakeMonotonic:
    return FakeMonotonic()


@pytest.fixture
def service(
    repository: EnforcementSettingsRepositoryStub, monotonic: FakeMonotonic
) -> EnforcementPolicyService:
    return EnforcementPolicyService(
        repository, WorkflowConfig(enforcement_cache_ttl_seconds=60.0), monotonic
    )


class TestResolution:
    @pytest.mark.asyncio
    async def test_falls_back_to_default(self, service: EnforcementPolicyService) -> None:
        assert await service.get_enforcement_mode(CHECKLIST, "dept-1") == EnforcementMode.WARN

    @pytest.mark.asyncio
    async def test_configured_default(self) -> None:
        service = EnforcementPolicyService(
            EnforcementSettingsRepositoryStub(),
            WorkflowConfig(default_enforcement_mode=EnforcementMode.BLOCK),
        )

        assert await service.get_enforcement_mode(OWNERSHIP) == EnforcementMode.BLOCK
        assert service.default_mode == EnforcementMode.BLOCK

    @pytest.mark.asyncio
    async def test_department_overrides_global(
        self, service: EnforcementPolicyService
    ) -> None:
        await service.set_enforcement_mode(CHECKLIST, EnforcementMode.BLOCK)
        await service.set_enforcement_mode(CHECKLIST, "warn", "dept-1")

        assert await service.get_enforcement_mode(CHECKLIST, "dept-1") == EnforcementMode.WARN
        assert await service.get_enforcement_mode(CHECKLIST, "dept-2") == EnforcementMode.BLOCK
        assert await service.get_enforcement_mode(CHECKLIST) == EnforcementMode.BLOCK

    @pytest.mark.asyncio
    async def test_policies_are_independent(
        self, service: EnforcementPolicyService
    ) -> None:
        await service.set_enforcement_mode(OWNERSHIP, EnforcementMode.BLOCK)

        assert await service.get_enforcement_mode(CHECKLIST) == EnforcementMode.WARN

    @pytest.mark.asyncio
    async def test_clear_falls_through_to_global(
        self, service: EnforcementPolicyService
    ) -> None:
        await service.set_enforcement_mode(CHECKLIST, "block", "dept-1")

        assert await service.clear_enforcement_mode(CHECKLIST, "dept-1") is True
        assert await service.clear_enforcement_mode(CHECKLIST, "dept-1") is False
        assert await service.get_enforcement_mode(CHECKLIST, "dept-1") == EnforcementMode.WARN


class TestSetEnforcementMode:
    @pytest.mark.asyncio
    async def test_accepts_case_insensitive_strings(
        self, service: EnforcementPolicyService
    ) -> None:
        setting = await service.set_enforcement_mode(CHECKLIST, " BLOCK ", "dept-1")

        assert setting.mode == EnforcementMode.BLOCK
        assert setting.scope_key == "dept-1"

    @pytest.mark.asyncio
    async def test_global_scope_key(self, service: EnforcementPolicyService) -> None:
        setting = await service.set_enforcement_mode(CHECKLIST, "warn")

        assert setting.scope_key == GLOBAL_SCOPE
        assert setting.is_global

    @pytest.mark.asyncio
    async def test_rejects_unknown_mode(
        self,
        service: EnforcementPolicyService,
        repository: EnforcementSettingsRepositoryStub,
    ) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await service.set_enforcement_mode(CHECKLIST, "strict")

        assert exc_info.value.code == IssueCode.INVALID_ENFORCEMENT_MODE
        assert exc_info.value.field == "mode"
        assert await repository.list_all() == []

    @pytest.mark.asyncio
    async def test_list_settings(self, service: EnforcementPolicyService) -> None:
        await service.set_enforcement_mode(OWNERSHIP, "block", "dept-1")
        await service.set_enforcement_mode(CHECKLIST, "block")

        everything = await service.list_settings()
        ownership_only = await service.list_settings(OWNERSHIP)

        assert [s.policy for s in everything] == [CHECKLIST, OWNERSHIP]
        assert [s.scope_key for s in ownership_only] == ["dept-1"]


class TestCache:
    @pytest.mark.asyncio
    async def test_lookups_are_cached_within_ttl(
        self,
        service: EnforcementPolicyService,
        repository: EnforcementSettingsRepositoryStub,
    ) -> None:
        await service.get_enforcement_mode(CHECKLIST, "dept-1")
        calls = repository.get_calls

        await service.get_enforcement_mode(CHECKLIST, "dept-1")

        assert calls == 2
        assert repository.get_calls == calls

    @pytest.mark.asyncio
    async def test_external_write_visible_after_ttl(
        self,
        service: EnforcementPolicyService,
        repository: EnforcementSettingsRepositoryStub,
        monotonic: FakeMonotonic,
    ) -> None:
        assert await service.get_enforcement_mode(CHECKLIST) == EnforcementMode.WARN
        other_writer = EnforcementPolicyService(repository)
        await other_writer.set_enforcement_mode(CHECKLIST, "block")

        assert await service.get_enforcement_mode(CHECKLIST) == EnforcementMode.WARN
        monotonic.now += 61

        assert await service.get_enforcement_mode(CHECKLIST) == EnforcementMode.BLOCK

    @pytest.mark.asyncio
    async def test_own_write_invalidates_scope(
        self, service: EnforcementPolicyService
    ) -> None:
        await service.get_enforcement_mode(CHECKLIST, "dept-1")

        await service.set_enforcement_mode(CHECKLIST, "block", "dept-1")

        assert await service.get_enforcement_mode(CHECKLIST, "dept-1") == EnforcementMode.BLOCK

    @pytest.mark.asyncio
    async def test_explicit_invalidate(
        self,
        service: EnforcementPolicyService,
        repository: EnforcementSettingsRepositoryStub,
    ) -> None:
        await service.get_enforcement_mode(CHECKLIST)
        await EnforcementPolicyService(repository).set_enforcement_mode(
            CHECKLIST, "block"
        )

        service.invalidate()

        assert await service.get_enforcement_mode(CHECKLIST) == EnforcementMode.BLOCK

    @pytest.mark.asyncio
    async def test_zero_ttl_disables_cache(
        self, repository: EnforcementSettingsRepositoryStub
    ) -> None:
        service = EnforcementPolicyService(
            repository, WorkflowConfig(enforcement_cache_ttl_seconds=0.0)
        )

        await service.get_enforcement_mode(CHECKLIST)
        await service.get_enforcement_mode(CHECKLIST)

        assert repository.get_calls == 2


class TestRequireOwner:
    @pytest.mark.asyncio
    async def test_required_by_default(self, service: EnforcementPolicyService) -> None:
        assert await service.get_require_owner() is True
        assert await service.get_require_owner("dept-1") is True

    @pytest.mark.asyncio
    async def test_department_switch_keeps_resolved_mode(
        self, service: EnforcementPolicyService
    ) -> None:
        await service.set_enforcement_mode(OWNERSHIP, "block")

        setting = await service.set_require_owner(False, "dept-1")

        assert setting.scope_key == "dept-1"
        assert setting.mode == EnforcementMode.BLOCK
        assert await service.get_require_owner("dept-1") is False
        assert await service.get_require_owner("dept-2") is True
        assert await service.get_enforcement_mode(OWNERSHIP, "dept-1") == EnforcementMode.BLOCK

    @pytest.mark.asyncio
    async def test_mode_change_keeps_requirement(
        self, service: EnforcementPolicyService
    ) -> None:
        await service.set_require_owner(False, "dept-1")

        setting = await service.set_enforcement_mode(OWNERSHIP, "block", "dept-1")

        assert setting.require_owner is False
        assert setting.to_dict()["require_owner"] is False
        assert await service.get_require_owner("dept-1") is False
