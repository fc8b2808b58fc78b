"""Enforcement policy settings (warn vs block).

Two independent policies can be tightened per department without code
changes: the ownership requirement and mandatory checklist completion.
Lookup order is department scope, then the global scope, then the
configured default.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

GLOBAL_SCOPE = "global"


class EnforcementMode(str, Enum):
    """How a policy violation is treated."""

    WARN = "warn"
    """Violation is reported, the action proceeds."""

    BLOCK = "block"
    """Violation prevents the action."""


class EnforcementPolicy(str, Enum):
    """Policies that carry an enforcement mode."""

    OWNERSHIP = "ownership"
    MANDATORY_CHECKLIST = "mandatory_checklist"


def scope_key_for(department_id: str | None) -> str:
    """Storage key for a department, or the global scope when None."""
    return department_id or GLOBAL_SCOPE


@dataclass(frozen=True)
class EnforcementSetting:
    """A stored mode for one (scope, policy) pair.

    Attributes:
        scope_key: Department id or GLOBAL_SCOPE.
        policy: The policy being configured.
        mode: Warn or block.
        updated_at: When the setting was last written (UTC).
        require_owner: Ownership policy only. False lets tasks in the scope
            go without an owner whatever the mode.
    """

    scope_key: str
    policy: EnforcementPolicy
    mode: EnforcementMode
    updated_at: datetime
    require_owner: bool = True

    @property
    def is_global(self) -> bool:
        return self.scope_key == GLOBAL_SCOPE

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "scope_key": self.scope_key,
            "policy": self.policy.value,
            "mode": self.mode.value,
            "updated_at": self.updated_at.isoformat(),
        }
        if self.policy is EnforcementPolicy.OWNERSHIP:
            data["require_owner"] = self.require_owner
        return data
