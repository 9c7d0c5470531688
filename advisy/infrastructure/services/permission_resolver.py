"""Resolves effective permissions from the DB (implements IPermissionResolver)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from advisy.domain.effective_permissions import EffectivePermissions, combine_roles
from advisy.infrastructure.persistence.models.permission import UserTenantRole
from advisy.infrastructure.persistence.models.role import TenantRole
from advisy.infrastructure.persistence.repositories.role_permission_repo import (
    RolePermissionRepository,
)
from advisy.infrastructure.persistence.repositories.role_repo import role_to_result
from advisy.shared.telemetry import get_tracer

tracer = get_tracer(__name__)


class PermissionResolver:
    """Loads a user's active roles and their allowed cells, then combines them."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_effective_permissions(
        self, user_id: str, tenant_id: str
    ) -> EffectivePermissions:
        with tracer.start_as_current_span("permissions.resolve") as span:
            span.set_attribute("advisy.tenant_id", tenant_id)
            span.set_attribute("advisy.user_id", user_id)
            result = await self.db.execute(
                select(TenantRole)
                .join(UserTenantRole, UserTenantRole.role_id == TenantRole.id)
                .where(
                    UserTenantRole.user_id == user_id,
                    UserTenantRole.tenant_id == tenant_id,
                    TenantRole.tenant_id == tenant_id,
                    TenantRole.is_active.is_(True),
                )
            )
            roles = [role_to_result(r) for r in result.scalars().all()]
            pairs = await RolePermissionRepository(self.db).list_allowed_pairs(
                r.id for r in roles
            )
            span.set_attribute("advisy.role_count", len(roles))
            return combine_roles(roles, pairs)
