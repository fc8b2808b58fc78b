"""FastAPI application entry point for the taskflow workflow core."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from taskflow import __version__
from taskflow.api.errors import register_exception_handlers
from taskflow.api.middleware.logging_middleware import LoggingMiddleware
from taskflow.api.routes.checklist import router as checklist_router
from taskflow.api.routes.dependencies import project_router
from taskflow.api.routes.dependencies import router as dependencies_router
from taskflow.api.routes.enforcement import router as enforcement_router
from taskflow.api.routes.workflow import router as workflow_router
from taskflow.bootstrap.container import (
    WorkflowContainer,
    get_workflow_container,
    set_workflow_container,
)
from taskflow.bootstrap.database import close_database_engine
from taskflow.bootstrap.logging import configure_structlog
from taskflow.infrastructure.adapters.persistence import create_schema


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_structlog()
    container = get_workflow_container()
    if container.database_engine is not None:
        await create_schema(container.database_engine)
    yield
    # Let in-flight blocked-task notifications finish before shutdown
    await container.notifier.drain()
    await close_database_engine()


def create_app(container: WorkflowContainer | None = None) -> FastAPI:
    """Build the application, optionally around a pre-wired container."""
    if container is not None:
        set_workflow_container(container)

    app = FastAPI(
        title="Taskflow API",
        description="Task dependency graph and workflow state machine",
        version=__version__,
        lifespan=_lifespan,
    )
    app.add_middleware(LoggingMiddleware)
    register_exception_handlers(app)

    app.include_router(dependencies_router)
    app.include_router(project_router)
    app.include_router(workflow_router)
    app.include_router(checklist_router)
    app.include_router(enforcement_router)
    return app


app = create_app()
