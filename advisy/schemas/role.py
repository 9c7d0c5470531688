"""Role API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from advisy.domain.enums import DashboardScope


class RoleCreate(BaseModel):
    """Request body for creating a custom role."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=500)
    dashboard_scope: DashboardScope = DashboardScope.PERSONAL
    can_see_own_commissions: bool = True
    can_see_team_commissions: bool = False
    can_see_all_commissions: bool = False


class RoleUpdate(BaseModel):
    """Request body for updating a role (partial). Omitted fields are unchanged."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=500)
    is_active: bool | None = None
    dashboard_scope: DashboardScope | None = None
    can_see_own_commissions: bool | None = None
    can_see_team_commissions: bool | None = None
    can_see_all_commissions: bool | None = None

    @field_validator(
        "name",
        "is_active",
        "dashboard_scope",
        "can_see_own_commissions",
        "can_see_team_commissions",
        "can_see_all_commissions",
        mode="before",
    )
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        """Only description may be cleared; omit a field to leave it unchanged."""
        if v is None:
            raise ValueError("must not be null")
        return v


class RoleDuplicate(BaseModel):
    """Request body for POST /roles/{role_id}/duplicate."""

    name: str = Field(..., min_length=1, max_length=255)


class RoleResponse(BaseModel):
    """Role list/detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    name: str
    description: str | None
    is_system_role: bool
    is_active: bool
    dashboard_scope: DashboardScope
    can_see_own_commissions: bool
    can_see_team_commissions: bool
    can_see_all_commissions: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class InitializeDefaultsResponse(BaseModel):
    """Response for POST /roles/initialize-defaults."""

    model_config = ConfigDict(from_attributes=True)

    already_initialized: bool
    created_role_ids: list[str]
    failed_templates: list[str]
