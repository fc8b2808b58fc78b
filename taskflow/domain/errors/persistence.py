"""Infrastructure error for unexpected storage failures."""

from taskflow.domain.exceptions import TaskflowError


class PersistenceError(TaskflowError):
    """Raised by storage adapters when the backing store fails.

    The original driver exception is chained (`raise ... from`). The HTTP
    layer never returns this message to callers.
    """

    def __init__(self, operation: str, message: str = "") -> None:
        self.operation = operation
        super().__init__(message or f"Storage operation failed: {operation}")
