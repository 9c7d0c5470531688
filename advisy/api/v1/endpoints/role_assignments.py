"""Role assignments API: list, assign and remove (tenant-scoped)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from advisy.api.v1.dependencies import (
    get_assignment_service,
    get_assignment_service_for_write,
    get_tenant_id,
    require_settings_update,
    require_settings_view,
)
from advisy.application.services.assignment_service import AssignmentService
from advisy.core.limiter import limit_writes
from advisy.infrastructure.security.jwt import TokenClaims
from advisy.schemas.assignment import AssignmentCreate, AssignmentResponse

router = APIRouter()


@router.get("", response_model=list[AssignmentResponse])
async def list_assignments(
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    service: Annotated[AssignmentService, Depends(get_assignment_service)],
    _: Annotated[object, Depends(require_settings_view)],
):
    """All assignments of the tenant, each with its role."""
    assignments = await service.list_assignments(tenant_id)
    return [AssignmentResponse.model_validate(a) for a in assignments]


@router.post("", response_model=AssignmentResponse, status_code=201)
@limit_writes
async def assign_role(
    request: Request,
    body: AssignmentCreate,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    service: Annotated[AssignmentService, Depends(get_assignment_service_for_write)],
    claims: Annotated[TokenClaims, Depends(require_settings_update)],
):
    """Assign a role to a user; 409 DUPLICATE_ASSIGNMENT if already held."""
    assignment = await service.assign_role(
        tenant_id, body.user_id, body.role_id, assigned_by=claims.user_id
    )
    return AssignmentResponse.model_validate(assignment)


@router.delete("/{assignment_id}", status_code=204)
@limit_writes
async def remove_assignment(
    request: Request,
    assignment_id: str,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    service: Annotated[AssignmentService, Depends(get_assignment_service_for_write)],
    _: Annotated[object, Depends(require_settings_update)],
) -> Response:
    await service.remove_assignment(tenant_id, assignment_id)
    return Response(status_code=204)
