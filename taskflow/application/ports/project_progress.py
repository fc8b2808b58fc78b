"""Project progress port (external aggregation collaborator)."""

from typing import Protocol


class ProjectProgressProtocol(Protocol):
    async def recalculate_progress(self, project_id: str) -> None:
        """Recompute a project's completion figures."""
        ...
