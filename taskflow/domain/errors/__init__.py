"""Domain errors for taskflow.

All exceptions inherit from TaskflowError.
"""

from taskflow.domain.errors.dependency import (
    CycleDetectedError,
    DependencyError,
    DuplicateDependencyError,
    SelfDependencyError,
)
from taskflow.domain.errors.enforcement import EnforcementBlockedError
from taskflow.domain.errors.not_found import NotFoundError
from taskflow.domain.errors.persistence import PersistenceError
from taskflow.domain.errors.validation import ValidationError

__all__: list[str] = [
    "CycleDetectedError",
    "DependencyError",
    "DuplicateDependencyError",
    "EnforcementBlockedError",
    "NotFoundError",
    "PersistenceError",
    "SelfDependencyError",
    "ValidationError",
]
