"""Enforcement settings port.

Settings are keyed by (scope_key, policy). Resolution order and caching
are the EnforcementPolicyService's job; the repository only stores rows.
"""

from __future__ import annotations

from typing import Protocol

from taskflow.domain.models.enforcement import EnforcementPolicy, EnforcementSetting


class EnforcementSettingsRepositoryProtocol(Protocol):
    async def get(
        self, scope_key: str, policy: EnforcementPolicy
    ) -> EnforcementSetting | None:
        ...

    async def upsert(self, setting: EnforcementSetting) -> None:
        ...

    async def delete(self, scope_key: str, policy: EnforcementPolicy) -> bool:
        ...

    async def list_all(
        self, policy: EnforcementPolicy | None = None
    ) -> list[EnforcementSetting]:
        ...
