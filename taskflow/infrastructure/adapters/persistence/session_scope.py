"""Transaction scope shared by the SQL repositories.

A transaction opened by one repository (e.g. the dependency store's
`exclusive()` scope) is reused by every repository call made inside it
on the same task, so reads and writes commit together. Outside such a
scope each call runs in its own short transaction.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from contextvars import ContextVar
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

from taskflow.domain.errors import PersistenceError

logger = get_logger()

_current_session: ContextVar[AsyncSession | None] = ContextVar(
    "taskflow_current_session", default=None
)


class SessionScope:
    """Hands out the ambient session or opens a new transaction."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        existing = _current_session.get()
        if existing is not None:
            yield existing
            return

        async with self._session_factory() as session:
            async with session.begin():
                token = _current_session.set(session)
                try:
                    yield session
                finally:
                    _current_session.reset(token)


@asynccontextmanager
async def translate_errors(operation: str) -> AsyncIterator[None]:
    """Log driver failures with context and re-raise as PersistenceError."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error(
            "persistence_operation_failed",
            operation=operation,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        raise PersistenceError(operation) from exc


def as_utc(value: datetime | str) -> datetime:
    """Normalise a stored timestamp (SQLite returns naive strings)."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
