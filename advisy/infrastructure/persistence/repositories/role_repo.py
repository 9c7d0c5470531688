"""Role repository. Read methods return RoleResult (DTO); entity getters return ORM for writes."""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from advisy.application.dtos.role import RoleResult
from advisy.domain.enums import DashboardScope
from advisy.domain.exceptions import DuplicateRoleNameException
from advisy.domain.role_fields import UPDATABLE_ROLE_FIELDS
from advisy.infrastructure.persistence.models.permission import (
    RolePermission,
    UserTenantRole,
)
from advisy.infrastructure.persistence.models.role import TenantRole
from advisy.infrastructure.persistence.repositories.base import (
    BaseRepository,
    is_unique_violation,
)
from advisy.shared.utils import ensure_utc


def _is_name_clash(exc: IntegrityError) -> bool:
    return is_unique_violation(
        exc, "uq_tenant_role_tenant_name", "tenant_role", ("tenant_id", "name")
    )


def role_to_result(r: TenantRole) -> RoleResult:
    """Map ORM TenantRole to application RoleResult."""
    return RoleResult(
        id=r.id,
        tenant_id=r.tenant_id,
        name=r.name,
        description=r.description,
        is_system_role=r.is_system_role,
        is_active=r.is_active,
        dashboard_scope=DashboardScope(r.dashboard_scope),
        can_see_own_commissions=r.can_see_own_commissions,
        can_see_team_commissions=r.can_see_team_commissions,
        can_see_all_commissions=r.can_see_all_commissions,
        created_at=ensure_utc(r.created_at),
        updated_at=ensure_utc(r.updated_at),
    )


class RoleRepository(BaseRepository[TenantRole]):
    """Tenant role repository. Use get_entity_by_id_and_tenant for update/delete."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, TenantRole)

    async def create_role(
        self,
        tenant_id: str,
        name: str,
        description: str | None = None,
        *,
        dashboard_scope: DashboardScope = DashboardScope.PERSONAL,
        can_see_own_commissions: bool = True,
        can_see_team_commissions: bool = False,
        can_see_all_commissions: bool = False,
        is_system_role: bool = False,
    ) -> RoleResult:
        """Create a role; return read-model DTO.

        The insert runs in a SAVEPOINT so a name clash leaves the outer
        transaction usable.
        """
        role = TenantRole(
            tenant_id=tenant_id,
            name=name,
            description=description,
            is_system_role=is_system_role,
            is_active=True,
            dashboard_scope=DashboardScope(dashboard_scope).value,
            can_see_own_commissions=can_see_own_commissions,
            can_see_team_commissions=can_see_team_commissions,
            can_see_all_commissions=can_see_all_commissions,
        )
        try:
            async with self.db.begin_nested():
                created = await self.create(role)
        except IntegrityError as exc:
            if not _is_name_clash(exc):
                raise
            raise DuplicateRoleNameException(name) from None
        return role_to_result(created)

    async def get_by_id_and_tenant(
        self, role_id: str, tenant_id: str
    ) -> RoleResult | None:
        """Return role by id and tenant (read-model DTO)."""
        orm = await self.get_entity_by_id_and_tenant(role_id, tenant_id)
        return role_to_result(orm) if orm else None

    async def get_entity_by_id_and_tenant(
        self, role_id: str, tenant_id: str
    ) -> TenantRole | None:
        """Return role ORM by id and tenant for update/delete."""
        result = await self.db.execute(
            select(TenantRole).where(
                TenantRole.id == role_id, TenantRole.tenant_id == tenant_id
            )
        )
        return result.scalar_one_or_none()

    async def get_by_name_and_tenant(
        self, name: str, tenant_id: str
    ) -> RoleResult | None:
        result = await self.db.execute(
            select(TenantRole).where(
                TenantRole.name == name, TenantRole.tenant_id == tenant_id
            )
        )
        row = result.scalar_one_or_none()
        return role_to_result(row) if row else None

    async def list_by_tenant(
        self, tenant_id: str, *, include_inactive: bool = True
    ) -> list[RoleResult]:
        q = select(TenantRole).where(TenantRole.tenant_id == tenant_id)
        if not include_inactive:
            q = q.where(TenantRole.is_active.is_(True))
        result = await self.db.execute(q.order_by(TenantRole.name))
        return [role_to_result(r) for r in result.scalars().all()]

    async def has_any_role(self, tenant_id: str) -> bool:
        result = await self.db.execute(
            select(exists().where(TenantRole.tenant_id == tenant_id))
        )
        return bool(result.scalar())

    async def update_role(
        self, role_id: str, tenant_id: str, changes: dict[str, Any]
    ) -> RoleResult | None:
        """Apply changes to an existing role; return None if not found.

        Raises:
            DuplicateRoleNameException: If the new name is taken in the tenant.
            ValueError: If changes contains a non-updatable field.
        """
        unknown = set(changes) - UPDATABLE_ROLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update role fields: {sorted(unknown)}")
        role = await self.get_entity_by_id_and_tenant(role_id, tenant_id)
        if role is None:
            return None
        try:
            async with self.db.begin_nested():
                for key, value in changes.items():
                    if key == "dashboard_scope":
                        value = DashboardScope(value).value
                    setattr(role, key, value)
                updated = await self.update(role)
        except IntegrityError as exc:
            await self.db.refresh(role)
            if not _is_name_clash(exc):
                raise
            raise DuplicateRoleNameException(changes.get("name", role.name)) from None
        return role_to_result(updated)

    async def delete_role(self, role_id: str, tenant_id: str) -> bool:
        """Delete role, its permission rows and its assignments. Return False if not found."""
        role = await self.get_entity_by_id_and_tenant(role_id, tenant_id)
        if role is None:
            return False
        await self.db.execute(
            delete(RolePermission).where(RolePermission.role_id == role_id)
        )
        await self.db.execute(
            delete(UserTenantRole).where(
                UserTenantRole.role_id == role_id,
                UserTenantRole.tenant_id == tenant_id,
            )
        )
        await self.delete(role)
        return True
