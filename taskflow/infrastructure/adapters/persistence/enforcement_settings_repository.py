"""SQL enforcement settings store."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Boolean, DateTime, bindparam, text

from taskflow.application.ports.enforcement_settings_repository import (
    EnforcementSettingsRepositoryProtocol,
)
from taskflow.domain.models.enforcement import (
    EnforcementMode,
    EnforcementPolicy,
    EnforcementSetting,
)
from taskflow.infrastructure.adapters.persistence.session_scope import (
    SessionScope,
    as_utc,
    translate_errors,
)

_COLUMNS = "scope_key, policy, mode, require_owner, updated_at"

# ON CONFLICT ... DO UPDATE is understood by PostgreSQL and SQLite >= 3.24
_UPSERT = text(
    """
    INSERT INTO enforcement_settings (scope_key, policy, mode, require_owner, updated_at)
    VALUES (:scope_key, :policy, :mode, :require_owner, :updated_at)
    ON CONFLICT (scope_key, policy)
    DO UPDATE SET mode = excluded.mode,
                  require_owner = excluded.require_owner,
                  updated_at = excluded.updated_at
    """
).bindparams(
    bindparam("updated_at", type_=DateTime(timezone=True)),
    bindparam("require_owner", type_=Boolean()),
)


def _row_to_setting(row: Any) -> EnforcementSetting:
    return EnforcementSetting(
        scope_key=row.scope_key,
        policy=EnforcementPolicy(row.policy),
        mode=EnforcementMode(row.mode),
        updated_at=as_utc(row.updated_at),
        require_owner=bool(row.require_owner),
    )


class SqlEnforcementSettingsRepository(EnforcementSettingsRepositoryProtocol):
    """EnforcementSettingsRepositoryProtocol over enforcement_settings."""

    def __init__(self, scope: SessionScope) -> None:
        self._scope = scope

    async def get(
        self, scope_key: str, policy: EnforcementPolicy
    ) -> EnforcementSetting | None:
        async with translate_errors("enforcement_settings_get"):
            async with self._scope.transaction() as session:
                result = await session.execute(
                    text(
                        f"SELECT {_COLUMNS} FROM enforcement_settings "
                        "WHERE scope_key = :scope_key AND policy = :policy"
                    ),
                    {"scope_key": scope_key, "policy": policy.value},
                )
                row = result.fetchone()
                return _row_to_setting(row) if row else None

    async def upsert(self, setting: EnforcementSetting) -> None:
        async with translate_errors("enforcement_settings_upsert"):
            async with self._scope.transaction() as session:
                await session.execute(
                    _UPSERT,
                    {
                        "scope_key": setting.scope_key,
                        "policy": setting.policy.value,
                        "mode": setting.mode.value,
                        "require_owner": setting.require_owner,
                        "updated_at": setting.updated_at,
                    },
                )

    async def delete(self, scope_key: str, policy: EnforcementPolicy) -> bool:
        async with translate_errors("enforcement_settings_delete"):
            async with self._scope.transaction() as session:
                result = await session.execute(
                    text(
                        "DELETE FROM enforcement_settings "
                        "WHERE scope_key = :scope_key AND policy = :policy"
                    ),
                    {"scope_key": scope_key, "policy": policy.value},
                )
                return (result.rowcount or 0) > 0

    async def list_all(
        self, policy: EnforcementPolicy | None = None
    ) -> list[EnforcementSetting]:
        sql = f"SELECT {_COLUMNS} FROM enforcement_settings"
        params: dict[str, Any] = {}
        if policy is not None:
            sql += " WHERE policy = :policy"
            params["policy"] = policy.value
        sql += " ORDER BY policy, scope_key"
        async with translate_errors("enforcement_settings_list"):
            async with self._scope.transaction() as session:
                result = await session.execute(text(sql), params)
                return [_row_to_setting(row) for row in result]
