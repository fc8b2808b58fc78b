"""Correlation ids for tracing a request through the workflow services.

The id is held in a ContextVar. Background tasks started while it is set
(blocked-task notifications) get a copy, so their log lines carry the id of
the request that triggered them.

Usage:
    with correlation_scope(request.headers.get("X-Correlation-ID")) as cid:
        ...  # every service log line carries cid
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any
from uuid import uuid4

# Empty string means "not set"
_correlation_id: ContextVar[str] = ContextVar("taskflow_correlation_id", default="")


def generate_correlation_id() -> str:
    return str(uuid4())


def get_correlation_id() -> str:
    """Current correlation id, or an empty string outside a request."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> Token[str]:
    """Set the id for the current context; the token undoes the change."""
    return _correlation_id.set(correlation_id)


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Bind a correlation id (generated when missing) for the block's duration."""
    resolved = (correlation_id or "").strip() or generate_correlation_id()
    token = set_correlation_id(resolved)
    try:
        yield resolved
    finally:
        reset_correlation_id(token)


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor: add correlation_id unless unset or already bound."""
    correlation_id = get_correlation_id()
    if correlation_id:
        event_dict.setdefault("correlation_id", correlation_id)
    return event_dict
