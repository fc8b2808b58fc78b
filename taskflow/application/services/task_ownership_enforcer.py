"""Single-owner enforcement for task creation and owner changes."""

from __future__ import annotations

from taskflow.application.services.base import LoggingMixin
from taskflow.application.services.enforcement_policy_service import (
    EnforcementPolicyService,
)
from taskflow.domain.errors import EnforcementBlockedError
from taskflow.domain.models.enforcement import (
    EnforcementMode,
    EnforcementPolicy,
    EnforcementSetting,
)
from taskflow.domain.services.enforcement_verdict import EnforcementVerdict
from taskflow.domain.services.task_ownership import validate_task_ownership


class TaskOwnershipEnforcerService(LoggingMixin):
    """Applies the ownership policy under the department's enforcement mode."""

    def __init__(self, policy_service: EnforcementPolicyService) -> None:
        self._policy_service = policy_service
        self._init_logger()

    async def get_enforcement_mode(
        self, department_id: str | None = None
    ) -> EnforcementMode:
        return await self._policy_service.get_enforcement_mode(
            EnforcementPolicy.OWNERSHIP, department_id
        )

    async def set_enforcement_mode(
        self,
        mode: EnforcementMode | str,
        department_id: str | None = None,
    ) -> EnforcementSetting:
        return await self._policy_service.set_enforcement_mode(
            EnforcementPolicy.OWNERSHIP, mode, department_id
        )

    async def set_require_owner(
        self, required: bool, department_id: str | None = None
    ) -> EnforcementSetting:
        return await self._policy_service.set_require_owner(required, department_id)

    async def validate_ownership(
        self,
        owner_id: str | None,
        department_id: str | None = None,
    ) -> EnforcementVerdict:
        mode = await self.get_enforcement_mode(department_id)
        require_owner = await self._policy_service.get_require_owner(department_id)
        return validate_task_ownership(owner_id, mode, require_owner)

    async def enforce_ownership(
        self,
        owner_id: str | None,
        department_id: str | None = None,
    ) -> EnforcementVerdict:
        """Validate and raise when the verdict blocks.

        Raises:
            EnforcementBlockedError: In block mode when the owner is missing
                or ambiguous and the department requires one.

        Returns:
            The (valid) verdict; warn-mode issues are in `warnings`.
        """
        verdict = await self.validate_ownership(owner_id, department_id)
        if not verdict.is_valid:
            log = self._log_operation("enforce_ownership", department_id=department_id)
            log.warning(
                "ownership_enforcement_blocked",
                codes=[issue.code.value for issue in verdict.errors],
            )
            raise EnforcementBlockedError(EnforcementPolicy.OWNERSHIP, verdict.errors)
        return verdict
