"""Roles API: list, get, create, update, delete, duplicate, seed and permission matrix."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from advisy.api.v1.dependencies import (
    get_permission_service,
    get_permission_service_for_write,
    get_role_service,
    get_role_service_for_write,
    get_tenant_id,
    require_settings_update,
    require_settings_view,
)
from advisy.application.services.permission_service import PermissionMatrixService
from advisy.application.services.role_service import RoleService
from advisy.core.limiter import limit_writes
from advisy.schemas.permission import (
    PermissionBulkSet,
    PermissionResponse,
    PermissionSet,
    RolePermissionsResponse,
)
from advisy.schemas.role import (
    InitializeDefaultsResponse,
    RoleCreate,
    RoleDuplicate,
    RoleResponse,
    RoleUpdate,
)

router = APIRouter()


@router.get("", response_model=list[RoleResponse])
async def list_roles(
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    service: Annotated[RoleService, Depends(get_role_service)],
    _: Annotated[object, Depends(require_settings_view)],
    include_inactive: bool = True,
):
    """List the tenant's roles ordered by name."""
    roles = await service.list_roles(tenant_id, include_inactive=include_inactive)
    return [RoleResponse.model_validate(r) for r in roles]


@router.post("", response_model=RoleResponse, status_code=201)
@limit_writes
async def create_role(
    request: Request,
    body: RoleCreate,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    service: Annotated[RoleService, Depends(get_role_service_for_write)],
    _: Annotated[object, Depends(require_settings_update)],
):
    """Create a custom role (never a system role)."""
    role = await service.create_role(tenant_id, **body.model_dump())
    return RoleResponse.model_validate(role)


@router.post(
    "/initialize-defaults", response_model=InitializeDefaultsResponse, status_code=200
)
@limit_writes
async def initialize_default_roles(
    request: Request,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    service: Annotated[RoleService, Depends(get_role_service_for_write)],
    _: Annotated[object, Depends(require_settings_update)],
):
    """Seed the default roles; no-op if the tenant already has roles."""
    result = await service.initialize_default_roles(tenant_id)
    return InitializeDefaultsResponse.model_validate(result)


@router.get("/{role_id}", response_model=RoleResponse)
async def get_role(
    role_id: str,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    service: Annotated[RoleService, Depends(get_role_service)],
    _: Annotated[object, Depends(require_settings_view)],
):
    return RoleResponse.model_validate(await service.get_role(tenant_id, role_id))


@router.patch("/{role_id}", response_model=RoleResponse)
@limit_writes
async def update_role(
    request: Request,
    role_id: str,
    body: RoleUpdate,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    service: Annotated[RoleService, Depends(get_role_service_for_write)],
    _: Annotated[object, Depends(require_settings_update)],
):
    """Partial update of a custom role. System roles are rejected (403)."""
    changes = body.model_dump(exclude_unset=True)
    role = await service.update_role(tenant_id, role_id, **changes)
    return RoleResponse.model_validate(role)


@router.delete("/{role_id}", status_code=204)
@limit_writes
async def delete_role(
    request: Request,
    role_id: str,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    service: Annotated[RoleService, Depends(get_role_service_for_write)],
    _: Annotated[object, Depends(require_settings_update)],
) -> Response:
    """Delete a custom role with its permissions and assignments."""
    await service.delete_role(tenant_id, role_id)
    return Response(status_code=204)


@router.post("/{role_id}/duplicate", response_model=RoleResponse, status_code=201)
@limit_writes
async def duplicate_role(
    request: Request,
    role_id: str,
    body: RoleDuplicate,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    service: Annotated[RoleService, Depends(get_role_service_for_write)],
    _: Annotated[object, Depends(require_settings_update)],
):
    """Copy a role and its permission rows under a new name."""
    role = await service.duplicate_role(tenant_id, role_id, body.name)
    return RoleResponse.model_validate(role)


@router.get("/{role_id}/permissions", response_model=RolePermissionsResponse)
async def get_role_permissions(
    role_id: str,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    service: Annotated[PermissionMatrixService, Depends(get_permission_service)],
    _: Annotated[object, Depends(require_settings_view)],
):
    """Stored rows of the role plus a module -> action -> allowed grid."""
    matrix = await service.load_matrix(tenant_id, role_id)
    return RolePermissionsResponse(
        role_id=role_id,
        permissions=[PermissionResponse.model_validate(r) for r in matrix.rows],
        matrix=matrix.as_grid(),
    )


@router.put("/{role_id}/permissions", response_model=PermissionResponse)
@limit_writes
async def set_role_permission(
    request: Request,
    role_id: str,
    body: PermissionSet,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    service: Annotated[
        PermissionMatrixService, Depends(get_permission_service_for_write)
    ],
    _: Annotated[object, Depends(require_settings_update)],
):
    """Grant or revoke one (module, action) cell."""
    row = await service.set_permission(
        tenant_id, role_id, body.module, body.action, body.allowed
    )
    return PermissionResponse.model_validate(row)


@router.put("/{role_id}/permissions/bulk", response_model=list[PermissionResponse])
@limit_writes
async def set_role_permissions_bulk(
    request: Request,
    role_id: str,
    body: PermissionBulkSet,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    service: Annotated[
        PermissionMatrixService, Depends(get_permission_service_for_write)
    ],
    _: Annotated[object, Depends(require_settings_update)],
):
    """Apply many cells at once; returns every stored row of the role."""
    rows = await service.set_permissions(
        tenant_id,
        role_id,
        [(p.module, p.action, p.allowed) for p in body.permissions],
    )
    return [PermissionResponse.model_validate(r) for r in rows]
