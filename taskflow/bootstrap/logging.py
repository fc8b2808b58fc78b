"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

from taskflow.config.workflow_config import get_environment
from taskflow.infrastructure.observability import configure_structlog as _configure_structlog


def configure_structlog(environment: str | None = None) -> None:
    """Configure structlog for the given (or TASKFLOW_ENV) environment."""
    _configure_structlog(environment=environment or get_environment())


__all__ = ["configure_structlog"]
