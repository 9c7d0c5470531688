"""User-role assignment API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from advisy.schemas.role import RoleResponse


class AssignmentCreate(BaseModel):
    """Request body for POST /role-assignments."""

    user_id: str = Field(..., min_length=1, max_length=128)
    role_id: str = Field(..., min_length=1, max_length=64)


class AssignmentResponse(BaseModel):
    """Assignment with its role (when loaded)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    user_id: str
    role_id: str
    assigned_by: str | None
    assigned_at: datetime | None
    role: RoleResponse | None = None
