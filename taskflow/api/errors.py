"""Mapping of the domain error taxonomy to HTTP responses.

| Error                                   | Status |
|-----------------------------------------|--------|
| ValidationError, SelfDependencyError    | 400    |
| NotFoundError                           | 404    |
| DuplicateDependencyError, CycleDetected | 409    |
| EnforcementBlockedError                 | 422    |
| anything else                           | 500    |

4xx bodies carry the error's structured payload under `detail`. 500
bodies are sanitised: only the error class family and the correlation id
reach the caller, the full context is logged server side.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from structlog import get_logger

from taskflow.api.middleware.logging_middleware import CORRELATION_HEADER
from taskflow.domain.errors import (
    CycleDetectedError,
    DuplicateDependencyError,
    EnforcementBlockedError,
    NotFoundError,
    SelfDependencyError,
    ValidationError,
)
from taskflow.domain.exceptions import TaskflowError
from taskflow.infrastructure.observability.correlation import get_correlation_id

logger = get_logger()

_STATUS_BY_ERROR: tuple[tuple[type[TaskflowError], int], ...] = (
    (ValidationError, 400),
    (SelfDependencyError, 400),
    (NotFoundError, 404),
    (DuplicateDependencyError, 409),
    (CycleDetectedError, 409),
    (EnforcementBlockedError, 422),
)


def status_code_for(exc: TaskflowError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 500


def _correlation_id(request: Request) -> str:
    return get_correlation_id() or request.headers.get(CORRELATION_HEADER, "")


def _internal_error(request: Request) -> JSONResponse:
    correlation_id = _correlation_id(request)
    return JSONResponse(
        status_code=500,
        content={
            "detail": {
                "error": "InternalServerError",
                "message": "An internal error occurred",
                "correlation_id": correlation_id,
            }
        },
        headers={CORRELATION_HEADER: correlation_id} if correlation_id else None,
    )


async def taskflow_error_handler(request: Request, exc: TaskflowError) -> JSONResponse:
    status_code = status_code_for(exc)
    log = logger.bind(path=request.url.path, error_type=type(exc).__name__)
    if status_code == 500:
        log.error("request_error_unhandled_domain", error=exc.message)
        return _internal_error(request)
    log.info("request_rejected", status_code=status_code, error=exc.message)
    return JSONResponse(status_code=status_code, content={"detail": exc.to_dict()})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.bind(path=request.url.path).error(
        "request_error_unhandled",
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return _internal_error(request)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskflowError, taskflow_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
