"""Enforcement policy store with department/global/default resolution.

The resolved mode for each (scope, policy) pair is cached for a TTL.
Writes through this service invalidate the written scope; writes made
elsewhere become visible after the TTL or an explicit `invalidate()`.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import datetime, timezone

from taskflow.application.ports.enforcement_settings_repository import (
    EnforcementSettingsRepositoryProtocol,
)
from taskflow.application.services.base import LoggingMixin
from taskflow.config.workflow_config import DEFAULT_WORKFLOW_CONFIG, WorkflowConfig
from taskflow.domain.errors import ValidationError
from taskflow.domain.models.enforcement import (
    GLOBAL_SCOPE,
    EnforcementMode,
    EnforcementPolicy,
    EnforcementSetting,
    scope_key_for,
)
from taskflow.domain.models.validation_issue import IssueCode


def _coerce_mode(mode: EnforcementMode | str) -> EnforcementMode:
    if isinstance(mode, EnforcementMode):
        return mode
    try:
        return EnforcementMode(str(mode).strip().lower())
    except ValueError:
        raise ValidationError(
            code=IssueCode.INVALID_ENFORCEMENT_MODE,
            message=f"Invalid enforcement mode: {mode!r} (expected 'warn' or 'block')",
            field="mode",
        ) from None


class EnforcementPolicyService(LoggingMixin):
    """Resolves and stores warn/block modes per policy and department."""

    def __init__(
        self,
        repository: EnforcementSettingsRepositoryProtocol,
        config: WorkflowConfig = DEFAULT_WORKFLOW_CONFIG,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self._repository = repository
        self._default_mode = config.default_enforcement_mode
        self._ttl = config.enforcement_cache_ttl_seconds
        self._monotonic = monotonic
        # (scope_key, policy) -> (stored setting or None, expires_at)
        self._cache: dict[
            tuple[str, EnforcementPolicy], tuple[EnforcementSetting | None, float]
        ] = {}
        self._init_logger()

    @property
    def default_mode(self) -> EnforcementMode:
        return self._default_mode

    async def _stored_setting(
        self, scope_key: str, policy: EnforcementPolicy
    ) -> EnforcementSetting | None:
        key = (scope_key, policy)
        now = self._monotonic()
        cached = self._cache.get(key)
        if cached is not None and cached[1] > now:
            return cached[0]

        setting = await self._repository.get(scope_key, policy)
        if self._ttl > 0:
            self._cache[key] = (setting, now + self._ttl)
        return setting

    async def resolve_setting(
        self,
        policy: EnforcementPolicy,
        department_id: str | None = None,
    ) -> EnforcementSetting | None:
        """The department setting, else the global one, else None."""
        if department_id:
            setting = await self._stored_setting(department_id, policy)
            if setting is not None:
                return setting
        return await self._stored_setting(GLOBAL_SCOPE, policy)

    async def get_enforcement_mode(
        self,
        policy: EnforcementPolicy,
        department_id: str | None = None,
    ) -> EnforcementMode:
        """Resolve the mode: department setting, then global, then default."""
        setting = await self.resolve_setting(policy, department_id)
        return setting.mode if setting is not None else self._default_mode

    async def set_enforcement_mode(
        self,
        policy: EnforcementPolicy,
        mode: EnforcementMode | str,
        department_id: str | None = None,
    ) -> EnforcementSetting:
        """Store a mode for a department (or globally when None).

        The scope's ownership requirement is kept as stored.

        Raises:
            ValidationError: INVALID_ENFORCEMENT_MODE for an unknown mode.
        """
        resolved = _coerce_mode(mode)
        scope_key = scope_key_for(department_id)
        current = await self._repository.get(scope_key, policy)
        setting = EnforcementSetting(
            scope_key=scope_key,
            policy=policy,
            mode=resolved,
            updated_at=datetime.now(timezone.utc),
            require_owner=current.require_owner if current is not None else True,
        )
        await self._repository.upsert(setting)
        self.invalidate(scope_key)

        log = self._log_operation(
            "set_enforcement_mode",
            policy=policy.value,
            scope_key=scope_key,
        )
        log.info("enforcement_mode_set", mode=resolved.value)
        return setting

    async def get_require_owner(self, department_id: str | None = None) -> bool:
        """Whether tasks in the department must have an owner (default True)."""
        setting = await self.resolve_setting(EnforcementPolicy.OWNERSHIP, department_id)
        return setting.require_owner if setting is not None else True

    async def set_require_owner(
        self, required: bool, department_id: str | None = None
    ) -> EnforcementSetting:
        """Switch the ownership requirement for a department (or globally).

        A scope without a stored row is created with the mode currently in
        effect for it, so the switch does not change the resolved mode.
        """
        policy = EnforcementPolicy.OWNERSHIP
        scope_key = scope_key_for(department_id)
        current = await self._repository.get(scope_key, policy)
        mode = (
            current.mode
            if current is not None
            else await self.get_enforcement_mode(policy, department_id)
        )
        setting = EnforcementSetting(
            scope_key=scope_key,
            policy=policy,
            mode=mode,
            updated_at=datetime.now(timezone.utc),
            require_owner=required,
        )
        await self._repository.upsert(setting)
        self.invalidate(scope_key)

        self._log_operation("set_require_owner", scope_key=scope_key).info(
            "ownership_requirement_set", require_owner=required
        )
        return setting

    async def clear_enforcement_mode(
        self,
        policy: EnforcementPolicy,
        department_id: str | None = None,
    ) -> bool:
        """Remove a stored mode so resolution falls through to the next scope."""
        scope_key = scope_key_for(department_id)
        deleted = await self._repository.delete(scope_key, policy)
        self.invalidate(scope_key)
        if deleted:
            self._log_operation(
                "clear_enforcement_mode", policy=policy.value, scope_key=scope_key
            ).info("enforcement_mode_cleared")
        return deleted

    async def list_settings(
        self, policy: EnforcementPolicy | None = None
    ) -> list[EnforcementSetting]:
        return await self._repository.list_all(policy)

    def invalidate(self, scope_key: str | None = None) -> None:
        """Drop cached modes for one scope, or for every scope when None."""
        if scope_key is None:
            self._cache.clear()
            return
        for key in [key for key in self._cache if key[0] == scope_key]:
            del self._cache[key]

    def reset(self) -> None:
        """Forget every cached mode (test isolation)."""
        self._cache.clear()
