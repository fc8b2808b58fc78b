"""Tables owned by the workflow core.

The DDL is shared by PostgreSQL and SQLite except for the `seq` column of
the history tables, an auto-increment key that orders entries written in
the same instant. The unique pair constraint on task_dependencies backs the duplicate check that
`add_dependency` runs inside the store's exclusive scope.
"""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

SCHEMA_STATEMENTS: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS task_dependencies (
        id VARCHAR(64) PRIMARY KEY,
        task_id VARCHAR(64) NOT NULL,
        depends_on_task_id VARCHAR(64) NOT NULL,
        dependency_type VARCHAR(16) NOT NULL,
        created_by VARCHAR(64),
        created_at TIMESTAMP WITH TIME ZONE NOT NULL,
        CONSTRAINT uq_task_dependencies_pair UNIQUE (task_id, depends_on_task_id),
        CONSTRAINT ck_task_dependencies_no_self CHECK (task_id <> depends_on_task_id)
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS ix_task_dependencies_depends_on
        ON task_dependencies (depends_on_task_id)
    """,
    """
    CREATE TABLE IF NOT EXISTS task_status_history (
        {seq_column},
        id VARCHAR(64) NOT NULL UNIQUE,
        task_id VARCHAR(64) NOT NULL,
        from_status VARCHAR(64),
        to_status VARCHAR(64) NOT NULL,
        changed_by VARCHAR(64) NOT NULL,
        note TEXT,
        created_at TIMESTAMP WITH TIME ZONE NOT NULL
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS ix_task_status_history_task
        ON task_status_history (task_id, created_at)
    """,
    """
    CREATE INDEX IF NOT EXISTS ix_task_status_history_actor
        ON task_status_history (changed_by, created_at)
    """,
    """
    CREATE TABLE IF NOT EXISTS checklist_state_history (
        {seq_column},
        id VARCHAR(64) NOT NULL UNIQUE,
        checklist_item_id VARCHAR(64) NOT NULL,
        task_id VARCHAR(64) NOT NULL,
        action VARCHAR(16) NOT NULL,
        actor_id VARCHAR(64) NOT NULL,
        actor_name VARCHAR(255),
        reason TEXT,
        created_at TIMESTAMP WITH TIME ZONE NOT NULL
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS ix_checklist_state_history_item
        ON checklist_state_history (checklist_item_id, created_at)
    """,
    """
    CREATE TABLE IF NOT EXISTS enforcement_settings (
        scope_key VARCHAR(64) NOT NULL,
        policy VARCHAR(32) NOT NULL,
        mode VARCHAR(8) NOT NULL,
        require_owner BOOLEAN NOT NULL DEFAULT TRUE,
        updated_at TIMESTAMP WITH TIME ZONE NOT NULL,
        PRIMARY KEY (scope_key, policy)
    )
    """,
)


_SEQ_COLUMNS = {
    "postgresql": "seq BIGINT GENERATED ALWAYS AS IDENTITY PRIMARY KEY",
    "sqlite": "seq INTEGER PRIMARY KEY AUTOINCREMENT",
}


async def create_schema(engine: AsyncEngine) -> None:
    """Create the core tables if they do not exist."""
    seq_column = _SEQ_COLUMNS[engine.dialect.name]
    async with engine.begin() as conn:
        for statement in SCHEMA_STATEMENTS:
            await conn.execute(text(statement.format(seq_column=seq_column)))
