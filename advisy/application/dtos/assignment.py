"""DTOs for user-role assignment use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from advisy.application.dtos.role import RoleResult


@dataclass(frozen=True)
class AssignmentResult:
    """User-role assignment, joined with its role when loaded by list queries."""

    id: str
    tenant_id: str
    user_id: str
    role_id: str
    assigned_by: str | None
    assigned_at: datetime | None
    role: RoleResult | None = None
