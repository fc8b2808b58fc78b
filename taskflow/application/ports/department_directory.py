"""Department directory port (external collaborator)."""

from typing import Protocol


class DepartmentDirectoryProtocol(Protocol):
    async def find_managers_by_department_id(self, department_id: str) -> list[str]:
        """User ids of the department's managers."""
        ...
