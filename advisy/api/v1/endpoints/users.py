"""User-centric RBAC views: roles of a user and the caller's effective permissions."""

from typing import Annotated

from fastapi import APIRouter, Depends

from advisy.api.v1.dependencies import (
    get_assignment_service,
    get_authorization_service,
    get_current_claims,
    get_tenant_id,
    require_settings_view,
)
from advisy.application.services.assignment_service import AssignmentService
from advisy.application.services.authorization_service import AuthorizationService
from advisy.infrastructure.security.jwt import TokenClaims
from advisy.schemas.assignment import AssignmentResponse
from advisy.schemas.permission import EffectivePermissionsResponse

router = APIRouter()


@router.get("/me/permissions", response_model=EffectivePermissionsResponse)
async def get_my_permissions(
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
):
    """Effective permissions of the caller (any authenticated user of the tenant)."""
    effective = await auth_svc.get_effective_permissions(
        claims.user_id, claims.tenant_id
    )
    return EffectivePermissionsResponse(
        user_id=claims.user_id,
        tenant_id=claims.tenant_id,
        is_admin=effective.is_admin,
        roles=list(effective.roles),
        permissions=sorted(effective.permissions),
        dashboard_scope=effective.dashboard_scope,
        commission_scope=effective.commission_scope,
    )


@router.get("/{user_id}/roles", response_model=list[AssignmentResponse])
async def get_user_roles(
    user_id: str,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    service: Annotated[AssignmentService, Depends(get_assignment_service)],
    _: Annotated[object, Depends(require_settings_view)],
):
    """Assignments (with roles) of one user in the tenant."""
    assignments = await service.get_user_roles(tenant_id, user_id)
    return [AssignmentResponse.model_validate(a) for a in assignments]
