"""Workflow status vocabulary.

Statuses are free-form names driven by an external, configurable workflow.
Only two kinds carry meaning for the core: completion statuses (default
"Done") and the blocked status (default "Blocked"). Comparison is
case-insensitive so "done" and "Done" are the same terminal state.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_DONE_STATUSES: tuple[str, ...] = ("Done",)
DEFAULT_BLOCKED_STATUS = "Blocked"


def _normalize(status: str | None) -> str:
    return (status or "").strip().casefold()


@dataclass(frozen=True)
class WorkflowStatuses:
    """Names of the statuses the workflow engine treats specially.

    Attributes:
        done_statuses: Terminal completion statuses. The first one is the
            canonical name used when the core has to pick one.
        blocked_status: Status that requires a blocking reason.
    """

    done_statuses: tuple[str, ...] = DEFAULT_DONE_STATUSES
    blocked_status: str = DEFAULT_BLOCKED_STATUS

    def __post_init__(self) -> None:
        if not self.done_statuses:
            raise ValueError("done_statuses must name at least one status")
        if not self.blocked_status.strip():
            raise ValueError("blocked_status must not be blank")
        if _normalize(self.blocked_status) in {_normalize(s) for s in self.done_statuses}:
            raise ValueError("blocked_status cannot also be a done status")

    @property
    def done_status(self) -> str:
        return self.done_statuses[0]

    def is_done(self, status: str | None) -> bool:
        normalized = _normalize(status)
        return any(normalized == _normalize(done) for done in self.done_statuses)

    def is_blocked(self, status: str | None) -> bool:
        return _normalize(status) == _normalize(self.blocked_status)

    def enters_done(self, from_status: str | None, to_status: str) -> bool:
        return self.is_done(to_status) and not self.is_done(from_status)

    def leaves_done(self, from_status: str | None, to_status: str) -> bool:
        return self.is_done(from_status) and not self.is_done(to_status)

    def enters_blocked(self, from_status: str | None, to_status: str) -> bool:
        return self.is_blocked(to_status) and not self.is_blocked(from_status)

    def leaves_blocked(self, from_status: str | None, to_status: str) -> bool:
        return self.is_blocked(from_status) and not self.is_blocked(to_status)

    def same_status(self, left: str | None, right: str | None) -> bool:
        return _normalize(left) == _normalize(right)

    def canonical(self, status: str) -> str:
        """The configured spelling of a done or blocked status, else `status` stripped."""
        if self.is_blocked(status):
            return self.blocked_status
        normalized = _normalize(status)
        for done in self.done_statuses:
            if _normalize(done) == normalized:
                return done
        return status.strip()
