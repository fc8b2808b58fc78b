"""Base exception classes for the taskflow domain layer."""


class TaskflowError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class so the
    HTTP layer can map the whole taxonomy in one place.
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, object]:
        """Structured payload for callers (HTTP detail body, logs)."""
        return {"error": type(self).__name__, "message": self.message}
