"""Logging mixin shared by the workflow services.

Services call `_init_logger()` once in `__init__` and open an
operation-scoped logger per public method:

    log = self._log_operation("block_task", task_id=task_id)
    log.info("task_blocked", reason=reason)
"""

import structlog

from taskflow.infrastructure.observability.correlation import get_correlation_id


class LoggingMixin:
    """Gives a service a structlog logger bound to its class name.

    Operation loggers add the operation name, the current correlation id
    (when a request is in flight) and any identifiers passed as keywords.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "workflow") -> None:
        self._log = structlog.get_logger().bind(
            service=type(self).__name__,
            component=component,
        )

    def _log_operation(self, operation: str, **context: object) -> structlog.BoundLogger:
        bound: dict[str, object] = {"operation": operation, **context}
        correlation_id = get_correlation_id()
        if correlation_id:
            bound["correlation_id"] = correlation_id
        return self._log.bind(**bound)
