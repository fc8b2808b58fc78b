"""In-memory enforcement settings store."""

from __future__ import annotations

from taskflow.application.ports.enforcement_settings_repository import (
    EnforcementSettingsRepositoryProtocol,
)
from taskflow.domain.models.enforcement import EnforcementPolicy, EnforcementSetting


class EnforcementSettingsRepositoryStub(EnforcementSettingsRepositoryProtocol):
    """In-memory stub keyed by (scope_key, policy).

    `get_calls` counts lookups so cache behaviour can be asserted.
    """

    def __init__(self) -> None:
        self._settings: dict[tuple[str, EnforcementPolicy], EnforcementSetting] = {}
        self.get_calls = 0

    async def get(
        self, scope_key: str, policy: EnforcementPolicy
    ) -> EnforcementSetting | None:
        self.get_calls += 1
        return self._settings.get((scope_key, policy))

    async def upsert(self, setting: EnforcementSetting) -> None:
        self._settings[(setting.scope_key, setting.policy)] = setting

    async def delete(self, scope_key: str, policy: EnforcementPolicy) -> bool:
        return self._settings.pop((scope_key, policy), None) is not None

    async def list_all(
        self, policy: EnforcementPolicy | None = None
    ) -> list[EnforcementSetting]:
        settings = [
            s for s in self._settings.values() if policy is None or s.policy == policy
        ]
        return sorted(settings, key=lambda s: (s.policy.value, s.scope_key))

    def clear(self) -> None:
        self._settings.clear()
        self.get_calls = 0
