"""Enforcement mode routes (warn vs block per policy and department)."""

from fastapi import APIRouter, Depends, Query

from taskflow.api.dependencies.workflow import get_policy_service
from taskflow.api.models.workflow import (
    DeletionResponse,
    EnforcementModeRequest,
    EnforcementModeResponse,
    EnforcementSettingResponse,
    ErrorResponse,
    RequireOwnerRequest,
    RequireOwnerResponse,
)
from taskflow.application.services.enforcement_policy_service import (
    EnforcementPolicyService,
)
from taskflow.domain.models.enforcement import EnforcementPolicy

router = APIRouter(prefix="/v1/enforcement", tags=["enforcement"])


@router.get(
    "",
    response_model=list[EnforcementSettingResponse],
    summary="Stored enforcement settings",
)
async def list_enforcement_settings(
    policy: EnforcementPolicy | None = Query(default=None),
    service: EnforcementPolicyService = Depends(get_policy_service),
) -> list[EnforcementSettingResponse]:
    settings = await service.list_settings(policy)
    return [EnforcementSettingResponse.from_setting(s) for s in settings]


@router.get(
    "/{policy}",
    response_model=EnforcementModeResponse,
    summary="Effective mode (department, then global, then default)",
)
async def get_enforcement_mode(
    policy: EnforcementPolicy,
    department_id: str | None = Query(default=None),
    service: EnforcementPolicyService = Depends(get_policy_service),
) -> EnforcementModeResponse:
    mode = await service.get_enforcement_mode(policy, department_id)
    return EnforcementModeResponse(
        policy=policy.value, department_id=department_id, mode=mode.value
    )


@router.put(
    "/{policy}",
    response_model=EnforcementSettingResponse,
    responses={400: {"model": ErrorResponse, "description": "Unknown mode"}},
    summary="Set the mode for a department, or globally",
)
async def set_enforcement_mode(
    policy: EnforcementPolicy,
    body: EnforcementModeRequest,
    service: EnforcementPolicyService = Depends(get_policy_service),
) -> EnforcementSettingResponse:
    setting = await service.set_enforcement_mode(policy, body.mode, body.department_id)
    return EnforcementSettingResponse.from_setting(setting)


@router.delete(
    "/{policy}",
    response_model=DeletionResponse,
    summary="Remove a stored mode",
)
async def clear_enforcement_mode(
    policy: EnforcementPolicy,
    department_id: str | None = Query(default=None),
    service: EnforcementPolicyService = Depends(get_policy_service),
) -> DeletionResponse:
    deleted = await service.clear_enforcement_mode(policy, department_id)
    return DeletionResponse(deleted=deleted)


@router.get(
    "/ownership/require-owner",
    response_model=RequireOwnerResponse,
    summary="Whether tasks in a department must have an owner",
)
async def get_require_owner(
    department_id: str | None = Query(default=None),
    service: EnforcementPolicyService = Depends(get_policy_service),
) -> RequireOwnerResponse:
    required = await service.get_require_owner(department_id)
    return RequireOwnerResponse(department_id=department_id, require_owner=required)


@router.put(
    "/ownership/require-owner",
    response_model=EnforcementSettingResponse,
    summary="Switch the owner requirement for a department, or globally",
)
async def set_require_owner(
    body: RequireOwnerRequest,
    service: EnforcementPolicyService = Depends(get_policy_service),
) -> EnforcementSettingResponse:
    setting = await service.set_require_owner(body.required, body.department_id)
    return EnforcementSettingResponse.from_setting(setting)
