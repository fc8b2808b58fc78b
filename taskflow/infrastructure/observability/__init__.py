"""Observability: structlog configuration and correlation ids."""

from taskflow.infrastructure.observability.correlation import (
    correlation_id_processor,
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from taskflow.infrastructure.observability.logging import configure_structlog

__all__ = [
    "configure_structlog",
    "correlation_id_processor",
    "correlation_scope",
    "generate_correlation_id",
    "get_correlation_id",
    "reset_correlation_id",
    "set_correlation_id",
]
