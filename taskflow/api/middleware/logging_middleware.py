"""Request logging and correlation id propagation.

The id comes from the X-Correlation-ID header when the caller sends one.
It is bound for the whole request, so service logs and 500 payloads can be
matched to the access log, and is echoed back on the response.
"""

import time
from collections.abc import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from taskflow.infrastructure.observability.correlation import correlation_scope

CORRELATION_HEADER = "X-Correlation-ID"

logger = structlog.get_logger(__name__)


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Binds the correlation id and logs each request's outcome."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        with correlation_scope(request.headers.get(CORRELATION_HEADER)) as correlation_id:
            log = logger.bind(
                correlation_id=correlation_id,
                method=request.method,
                path=request.url.path,
            )
            log.debug("request_started")
            start = time.perf_counter()

            try:
                response = await call_next(request)
            except Exception as exc:
                log.exception(
                    "request_failed",
                    duration_ms=_elapsed_ms(start),
                    error_type=type(exc).__name__,
                )
                raise

            # 4xx are expected domain rejections (cycles, blocked checklist)
            level = log.warning if response.status_code >= 500 else log.info
            level(
                "request_completed",
                status_code=response.status_code,
                duration_ms=_elapsed_ms(start),
            )
            response.headers[CORRELATION_HEADER] = correlation_id
            return response
