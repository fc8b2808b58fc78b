"""Persistence-backed mandatory checklist gate.

Fetches a task's checklist items and the effective enforcement mode, then
delegates to the pure `validate_mandatory_checklist`.
"""

from __future__ import annotations

from taskflow.application.ports.checklist_repository import (
    ChecklistItemRepositoryProtocol,
)
from taskflow.application.services.base import LoggingMixin
from taskflow.application.services.enforcement_policy_service import (
    EnforcementPolicyService,
)
from taskflow.domain.models.checklist import ChecklistItem
from taskflow.domain.models.enforcement import (
    EnforcementMode,
    EnforcementPolicy,
    EnforcementSetting,
)
from taskflow.domain.services.mandatory_checklist import (
    MandatoryChecklistValidationResult,
    uncompleted_mandatory_items,
    validate_mandatory_checklist,
)


class MandatoryChecklistValidatorService(LoggingMixin):
    """Checks mandatory checklist completion before a task is completed."""

    def __init__(
        self,
        checklist_repository: ChecklistItemRepositoryProtocol,
        policy_service: EnforcementPolicyService,
    ) -> None:
        self._checklist_repository = checklist_repository
        self._policy_service = policy_service
        self._init_logger()

    async def get_enforcement_mode(
        self, department_id: str | None = None
    ) -> EnforcementMode:
        return await self._policy_service.get_enforcement_mode(
            EnforcementPolicy.MANDATORY_CHECKLIST, department_id
        )

    async def set_enforcement_mode(
        self,
        mode: EnforcementMode | str,
        department_id: str | None = None,
    ) -> EnforcementSetting:
        return await self._policy_service.set_enforcement_mode(
            EnforcementPolicy.MANDATORY_CHECKLIST, mode, department_id
        )

    async def get_uncompleted_mandatory_items(
        self, task_id: str
    ) -> tuple[ChecklistItem, ...]:
        items = await self._checklist_repository.list_items_for_task(task_id)
        return uncompleted_mandatory_items(items)

    async def validate_for_task_completion(
        self,
        task_id: str,
        department_id: str | None = None,
    ) -> MandatoryChecklistValidationResult:
        """Validate the task's checklist under the effective mode.

        Args:
            task_id: Task about to be completed.
            department_id: Department used for the mode lookup.

        Returns:
            The same verdict `validate_mandatory_checklist` gives for the
            stored items and mode.
        """
        items = await self._checklist_repository.list_items_for_task(task_id)
        mode = await self.get_enforcement_mode(department_id)
        result = validate_mandatory_checklist(items, mode)

        if result.uncompleted_mandatory_items:
            self._log_operation(
                "validate_for_task_completion",
                task_id=task_id,
                department_id=department_id,
            ).info(
                "mandatory_checklist_incomplete",
                enforcement_mode=mode.value,
                open_items=len(result.uncompleted_mandatory_items),
                is_valid=result.is_valid,
            )
        return result
