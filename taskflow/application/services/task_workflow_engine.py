"""Task workflow engine: the validated path for every status change.

Special statuses:
- entering the blocked status needs a reason and records who/when;
  leaving it clears every blocking field
- entering a done status runs the mandatory checklist gate; a block-mode
  violation rejects the transition without touching the task
- entering or leaving a done status triggers project progress
  recalculation

Every real status change appends a history entry. The read, validation,
write and history append for one task run inside the task store's
`lock_task()` scope, so two concurrent transitions cannot both commit
against the same `from_status`.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

from taskflow.application.ports.project_progress import ProjectProgressProtocol
from taskflow.application.ports.task_repository import TaskRepositoryProtocol
from taskflow.application.services.audit_trail_service import AuditTrailService
from taskflow.application.services.base import LoggingMixin
from taskflow.application.services.blocked_task_notifier import BlockedTaskNotifier
from taskflow.application.services.mandatory_checklist_validator import (
    MandatoryChecklistValidatorService,
)
from taskflow.application.services.task_dependency_service import (
    TaskDependencyService,
)
from taskflow.application.services.task_ownership_enforcer import (
    TaskOwnershipEnforcerService,
)
from taskflow.config.workflow_config import DEFAULT_WORKFLOW_CONFIG, WorkflowConfig
from taskflow.domain.errors import EnforcementBlockedError, NotFoundError, ValidationError
from taskflow.domain.models.enforcement import EnforcementPolicy
from taskflow.domain.models.status_history import TaskStatusHistoryEntry
from taskflow.domain.models.task import Task
from taskflow.domain.models.task_dependency import BlockingDependencyReport
from taskflow.domain.models.transition import (
    OwnerChangeResult,
    StatusTransitionResult,
    TaskCreatedResult,
)
from taskflow.domain.models.validation_issue import IssueCode, ValidationIssue
from taskflow.domain.services.blocking import (
    blocking_field_changes,
    validate_blocking_reason,
)

TASK_CREATED_NOTE = "Task created"
TASK_UNBLOCKED_NOTE = "Task unblocked"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class TaskWorkflowEngine(LoggingMixin):
    """Applies status changes, blocking and ownership rules to tasks."""

    def __init__(
        self,
        task_repository: TaskRepositoryProtocol,
        checklist_validator: MandatoryChecklistValidatorService,
        ownership_enforcer: TaskOwnershipEnforcerService,
        audit_trail: AuditTrailService,
        dependency_service: TaskDependencyService,
        progress: ProjectProgressProtocol,
        notifier: BlockedTaskNotifier,
        config: WorkflowConfig = DEFAULT_WORKFLOW_CONFIG,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._tasks = task_repository
        self._checklist_validator = checklist_validator
        self._ownership_enforcer = ownership_enforcer
        self._audit = audit_trail
        self._dependencies = dependency_service
        self._progress = progress
        self._notifier = notifier
        self._statuses = config.statuses
        self._clock = clock
        self._init_logger()

    # ------------------------------------------------------------------
    # Status transitions
    # ------------------------------------------------------------------

    async def update_task_status(
        self,
        task_id: str,
        new_status: str,
        changed_by: str,
        note: str | None = None,
        blocked_reason: str | None = None,
        department_id: str | None = None,
    ) -> StatusTransitionResult:
        """Move a task to `new_status`.

        Args:
            task_id: Task to transition.
            new_status: Requested status name.
            changed_by: Acting user, recorded in history.
            note: Optional history note.
            blocked_reason: Required when entering the blocked status.
            department_id: Overrides the task's department for the
                enforcement lookup.

        Raises:
            ValidationError: INVALID_STATUS for a blank status,
                BLOCKED_REASON_REQUIRED when blocking without a reason.
            NotFoundError: If the task does not exist.
            EnforcementBlockedError: If the mandatory checklist gate blocks
                completion. The task is left unchanged.

        Returns:
            StatusTransitionResult with the updated task and any warn-mode
            warnings.
        """
        return await self._transition(
            task_id,
            new_status,
            changed_by,
            note=note,
            blocked_reason=blocked_reason,
            department_id=department_id,
        )

    async def block_task(
        self,
        task_id: str,
        blocked_reason: str,
        blocked_by: str,
        department_id: str | None = None,
    ) -> StatusTransitionResult:
        """Move a task to the blocked status with a mandatory reason.

        Unlike `update_task_status`, the reason is required even when the
        task is already blocked; re-blocking updates the reason only.

        Raises:
            ValidationError: BLOCKED_REASON_REQUIRED for a blank reason.
            NotFoundError: If the task does not exist.
        """
        if _is_blank(blocked_reason):
            raise ValidationError(
                code=IssueCode.BLOCKED_REASON_REQUIRED,
                message="Blocked reason is required to block a task",
                field="blocked_reason",
            )
        reason = blocked_reason.strip()
        return await self._transition(
            task_id,
            self._statuses.blocked_status,
            blocked_by,
            note=f"Blocked: {reason}",
            blocked_reason=reason,
            department_id=department_id,
        )

    async def unblock_task(
        self,
        task_id: str,
        new_status: str,
        unblocked_by: str,
        note: str | None = None,
        department_id: str | None = None,
    ) -> StatusTransitionResult:
        """Move a blocked task to a non-blocked status.

        Goes through the normal transition path, so unblocking straight
        into a done status runs the checklist gate.

        Raises:
            ValidationError: TASK_NOT_BLOCKED if the task is not blocked,
                INVALID_STATUS if the target is blank or the blocked status.
            NotFoundError: If the task does not exist.
        """
        if not _is_blank(new_status) and self._statuses.is_blocked(new_status):
            raise ValidationError(
                code=IssueCode.INVALID_STATUS,
                message="Cannot unblock a task into the blocked status",
                field="new_status",
            )
        return await self._transition(
            task_id,
            new_status,
            unblocked_by,
            note=note or TASK_UNBLOCKED_NOTE,
            department_id=department_id,
            require_blocked=True,
        )

    async def _transition(
        self,
        task_id: str,
        new_status: str,
        actor_id: str,
        note: str | None = None,
        blocked_reason: str | None = None,
        department_id: str | None = None,
        require_blocked: bool = False,
    ) -> StatusTransitionResult:
        log = self._log_operation(
            "update_task_status",
            task_id=task_id,
            to_status=new_status,
            actor_id=actor_id,
        )
        if _is_blank(new_status):
            raise ValidationError(
                code=IssueCode.INVALID_STATUS,
                message="Status is required",
                field="status",
            )
        new_status = self._statuses.canonical(new_status)

        async with self._tasks.lock_task(task_id):
            task = await self._get_task(task_id)
            from_status = task.status

            if require_blocked and not self._statuses.is_blocked(from_status):
                raise ValidationError(
                    code=IssueCode.TASK_NOT_BLOCKED,
                    message=f"Task is not blocked (current status: {from_status})",
                    field="status",
                )

            issue = validate_blocking_reason(
                new_status, blocked_reason, from_status, self._statuses
            )
            if issue is not None:
                raise ValidationError.from_issue(issue)

            warnings: list[ValidationIssue] = []
            if self._statuses.enters_done(from_status, new_status):
                verdict = await self._checklist_validator.validate_for_task_completion(
                    task_id, department_id or task.department_id
                )
                if not verdict.is_valid:
                    log.info(
                        "status_change_blocked_by_checklist",
                        from_status=from_status,
                        open_items=len(verdict.uncompleted_mandatory_items),
                    )
                    raise EnforcementBlockedError(
                        EnforcementPolicy.MANDATORY_CHECKLIST, verdict.errors
                    )
                warnings.extend(verdict.warnings)

            now = self._clock()
            changed = not self._statuses.same_status(new_status, from_status)
            fields = blocking_field_changes(
                new_status, from_status, blocked_reason, actor_id, now, self._statuses
            )
            if changed or fields:
                updated = await self._tasks.update_task(
                    task_id, {"status": new_status, **fields}
                )
            else:
                updated = task

            if changed:
                await self._audit.record_status_change(
                    task_id, from_status, new_status, actor_id, note, created_at=now
                )

        completion_flipped = self._statuses.enters_done(
            from_status, new_status
        ) or self._statuses.leaves_done(from_status, new_status)
        if completion_flipped:
            await self._progress.recalculate_progress(task.project_id)

        if self._statuses.enters_blocked(from_status, new_status):
            self._notifier.notify_blocked(updated, actor_id)

        if changed:
            log.info(
                "task_status_changed",
                from_status=from_status,
                warnings=[w.code.value for w in warnings],
            )
        else:
            log.debug("task_status_unchanged", status=from_status)

        return StatusTransitionResult(
            task=updated,
            from_status=from_status,
            to_status=new_status,
            changed=changed,
            warnings=tuple(warnings),
        )

    # ------------------------------------------------------------------
    # Creation and ownership
    # ------------------------------------------------------------------

    async def record_task_created(
        self,
        task_id: str,
        created_by: str,
        department_id: str | None = None,
    ) -> TaskCreatedResult:
        """Apply the ownership gate and write the synthetic creation entry.

        Raises:
            NotFoundError: If the task does not exist.
            EnforcementBlockedError: If ownership is enforced in block mode
                and the task has no single owner.
        """
        task = await self._get_task(task_id)
        verdict = await self._ownership_enforcer.enforce_ownership(
            task.owner_id, department_id or task.department_id
        )
        entry = await self._audit.record_status_change(
            task_id,
            None,
            task.status,
            created_by,
            TASK_CREATED_NOTE,
            created_at=self._clock(),
        )
        self._log_operation("record_task_created", task_id=task_id).info(
            "task_creation_recorded", status=task.status, created_by=created_by
        )
        return TaskCreatedResult(task=task, history_entry=entry, warnings=verdict.warnings)

    async def change_task_owner(
        self,
        task_id: str,
        owner_id: str | None,
        changed_by: str,
        department_id: str | None = None,
    ) -> OwnerChangeResult:
        """Assign a new owner through the ownership gate.

        Raises:
            NotFoundError: If the task does not exist.
            EnforcementBlockedError: If the new owner value violates the
                ownership policy in block mode.
        """
        async with self._tasks.lock_task(task_id):
            task = await self._get_task(task_id)
            verdict = await self._ownership_enforcer.enforce_ownership(
                owner_id, department_id or task.department_id
            )
            normalized = owner_id.strip() if owner_id and owner_id.strip() else None
            updated = await self._tasks.update_task(task_id, {"owner_id": normalized})

        self._log_operation(
            "change_task_owner", task_id=task_id, actor_id=changed_by
        ).info(
            "task_owner_changed",
            previous_owner_id=task.owner_id,
            owner_id=normalized,
        )
        return OwnerChangeResult(
            task=updated,
            previous_owner_id=task.owner_id,
            warnings=verdict.warnings,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def can_start_task(self, task_id: str) -> BlockingDependencyReport:
        """Direct BLOCKS prerequisites that are still open.

        Raises:
            NotFoundError: If the task does not exist.
        """
        await self._get_task(task_id)
        return await self._dependencies.has_uncompleted_blocking_dependencies(task_id)

    async def get_task_status_history(self, task_id: str) -> list[TaskStatusHistoryEntry]:
        return await self._audit.get_task_status_history(task_id)

    async def get_latest_task_status_change(
        self, task_id: str
    ) -> TaskStatusHistoryEntry | None:
        return await self._audit.get_latest_task_status_change(task_id)

    async def get_status_history_by_user(
        self,
        user_id: str,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[TaskStatusHistoryEntry]:
        return await self._audit.get_status_history_by_user(user_id, limit, offset)

    async def _get_task(self, task_id: str) -> Task:
        task = await self._tasks.get_task_by_id(task_id)
        if task is None:
            raise NotFoundError("task", task_id)
        return task
