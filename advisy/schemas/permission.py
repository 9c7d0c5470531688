"""Permission matrix and catalog API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from advisy.domain.enums import CommissionScope, DashboardScope


class CatalogItem(BaseModel):
    id: str
    label: str


class PermissionCatalogResponse(BaseModel):
    """Response for GET /permissions/catalog."""

    modules: list[CatalogItem]
    actions: list[CatalogItem]
    module_actions: dict[str, list[str]]


class PermissionSet(BaseModel):
    """Request body for PUT /roles/{role_id}/permissions (one cell)."""

    module: str = Field(..., min_length=1, max_length=32)
    action: str = Field(..., min_length=1, max_length=32)
    allowed: bool


class PermissionBulkSet(BaseModel):
    """Request body for PUT /roles/{role_id}/permissions/bulk."""

    permissions: list[PermissionSet] = Field(..., max_length=200)


class PermissionResponse(BaseModel):
    """One stored permission row."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    role_id: str
    module: str
    action: str
    allowed: bool


class RolePermissionsResponse(BaseModel):
    """Response for GET /roles/{role_id}/permissions."""

    role_id: str
    permissions: list[PermissionResponse]
    matrix: dict[str, dict[str, bool]]


class EffectivePermissionsResponse(BaseModel):
    """Response for GET /users/me/permissions."""

    user_id: str
    tenant_id: str
    is_admin: bool
    roles: list[str]
    permissions: list[str]
    dashboard_scope: DashboardScope
    commission_scope: CommissionScope
