"""structlog configuration for taskflow processes.

`TASKFLOW_ENV=production` renders one JSON object per line; any other
environment gets the console renderer. `LOG_LEVEL` filters (default INFO).

A production line looks like:
    {"event": "dependency_added", "level": "info",
     "timestamp": "2026-01-01T00:00:00Z", "correlation_id": "...",
     "service": "TaskDependencyService", "operation": "add_dependency",
     "task_id": "...", "depends_on_task_id": "..."}
"""

import logging
import os
from typing import cast

import structlog
from structlog.typing import Processor

from taskflow.infrastructure.observability.correlation import correlation_id_processor

LOG_LEVEL_ENV = "LOG_LEVEL"
JSON_ENVIRONMENTS = frozenset({"production"})


def _log_level() -> int:
    name = os.getenv(LOG_LEVEL_ENV, "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _renderer(environment: str) -> Processor:
    if environment.strip().lower() in JSON_ENVIRONMENTS:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=True)


def configure_structlog(environment: str = "production") -> None:
    """Install the processor chain. Call once at startup."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        cast(Processor, correlation_id_processor),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _renderer(environment),
    ]
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_log_level()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
