"""SQLAlchemy async adapters for the stores owned by the workflow core."""

from taskflow.infrastructure.adapters.persistence.dependency_repository import (
    SqlDependencyRepository,
)
from taskflow.infrastructure.adapters.persistence.enforcement_settings_repository import (
    SqlEnforcementSettingsRepository,
)
from taskflow.infrastructure.adapters.persistence.history_repositories import (
    SqlChecklistHistoryRepository,
    SqlStatusHistoryRepository,
)
from taskflow.infrastructure.adapters.persistence.schema import create_schema
from taskflow.infrastructure.adapters.persistence.session_scope import SessionScope

__all__ = [
    "SessionScope",
    "SqlChecklistHistoryRepository",
    "SqlDependencyRepository",
    "SqlEnforcementSettingsRepository",
    "SqlStatusHistoryRepository",
    "create_schema",
]
