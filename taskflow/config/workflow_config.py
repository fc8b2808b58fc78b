"""Workflow core configuration.

Defines the status vocabulary, the enforcement default and the tuning
knobs of the workflow services, with environment variable overrides.

Environment Variables:
- TASKFLOW_DONE_STATUSES: Comma separated completion statuses (default: Done)
- TASKFLOW_BLOCKED_STATUS: Status that requires a reason (default: Blocked)
- TASKFLOW_DEFAULT_ENFORCEMENT_MODE: warn or block, used when no setting
  is stored for a policy (default: warn)
- ENFORCEMENT_CACHE_TTL_SECONDS: Resolved enforcement mode cache TTL
  (default: 60)
- STATUS_HISTORY_PAGE_LIMIT: Default page size of by-actor history
  queries (default: 50, max: 500)
- TASKFLOW_ENV: production selects JSON logs (default: development)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from taskflow.domain.models.enforcement import EnforcementMode
from taskflow.domain.services.task_status import (
    DEFAULT_BLOCKED_STATUS,
    DEFAULT_DONE_STATUSES,
    WorkflowStatuses,
)

MAX_HISTORY_PAGE_LIMIT = 500


def _get_int_env(key: str, default: int) -> int:
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float_env(key: str, default: float) -> float:
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_list_env(key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = os.environ.get(key)
    if value is None:
        return default
    parsed = tuple(part.strip() for part in value.split(",") if part.strip())
    return parsed or default


def get_environment() -> str:
    """Deployment environment name (TASKFLOW_ENV)."""
    return os.environ.get("TASKFLOW_ENV", "development").strip().lower()


@dataclass(frozen=True)
class WorkflowConfig:
    """Configuration for the workflow services.

    Attributes:
        done_statuses: Completion statuses; the first is canonical.
        blocked_status: Status that requires a blocking reason.
        default_enforcement_mode: Mode used when neither a department nor a
            global setting exists.
        enforcement_cache_ttl_seconds: How long a resolved mode is cached.
            Zero disables the cache.
        status_history_page_limit: Default page size for by-actor history.
    """

    done_statuses: tuple[str, ...] = DEFAULT_DONE_STATUSES
    blocked_status: str = DEFAULT_BLOCKED_STATUS
    default_enforcement_mode: EnforcementMode = EnforcementMode.WARN
    enforcement_cache_ttl_seconds: float = 60.0
    status_history_page_limit: int = 50

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not self.done_statuses:
            raise ValueError("done_statuses must name at least one status")
        if not self.blocked_status.strip():
            raise ValueError("blocked_status must not be blank")
        if self.enforcement_cache_ttl_seconds < 0:
            raise ValueError(
                "enforcement_cache_ttl_seconds must be non-negative, "
                f"got {self.enforcement_cache_ttl_seconds}"
            )
        if not 1 <= self.status_history_page_limit <= MAX_HISTORY_PAGE_LIMIT:
            raise ValueError(
                f"status_history_page_limit must be between 1 and "
                f"{MAX_HISTORY_PAGE_LIMIT}, got {self.status_history_page_limit}"
            )
        # Raises ValueError on overlapping vocabularies
        self.statuses  # noqa: B018

    @property
    def statuses(self) -> WorkflowStatuses:
        return WorkflowStatuses(
            done_statuses=self.done_statuses,
            blocked_status=self.blocked_status,
        )

    @classmethod
    def from_environment(cls) -> "WorkflowConfig":
        """Create config from environment variables with defaults.

        Raises:
            ValueError: If a variable holds an invalid value (e.g. an unknown
                enforcement mode).
        """
        mode = os.environ.get(
            "TASKFLOW_DEFAULT_ENFORCEMENT_MODE", EnforcementMode.WARN.value
        )
        return cls(
            done_statuses=_get_list_env("TASKFLOW_DONE_STATUSES", DEFAULT_DONE_STATUSES),
            blocked_status=os.environ.get(
                "TASKFLOW_BLOCKED_STATUS", DEFAULT_BLOCKED_STATUS
            ).strip(),
            default_enforcement_mode=EnforcementMode(mode.strip().lower()),
            enforcement_cache_ttl_seconds=_get_float_env(
                "ENFORCEMENT_CACHE_TTL_SECONDS", 60.0
            ),
            status_history_page_limit=_get_int_env("STATUS_HISTORY_PAGE_LIMIT", 50),
        )


# Default config (no environment overrides)
DEFAULT_WORKFLOW_CONFIG = WorkflowConfig()

# Testing config: cache disabled so settings writes are visible immediately
TEST_WORKFLOW_CONFIG = WorkflowConfig(enforcement_cache_ttl_seconds=0.0)
