"""DTOs for role use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime

from advisy.domain.enums import DashboardScope


@dataclass(frozen=True)
class RoleResult:
    """Role read-model (result of get_by_id_and_tenant, list_by_tenant, create_role, etc.)."""

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


@dataclass(frozen=True)
class InitializationResult:
    """Outcome of seeding the default roles for a tenant."""

    already_initialized: bool
    created_role_ids: list[str] = field(default_factory=list)
    failed_templates: list[str] = field(default_factory=list)
