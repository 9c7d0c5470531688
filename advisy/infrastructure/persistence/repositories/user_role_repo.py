"""UserTenantRole repository: user-role assignments within a tenant."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from advisy.application.dtos.assignment import AssignmentResult
from advisy.domain.exceptions import DuplicateAssignmentException
from advisy.infrastructure.persistence.models.permission import UserTenantRole
from advisy.infrastructure.persistence.models.role import TenantRole
from advisy.infrastructure.persistence.repositories.base import is_unique_violation
from advisy.infrastructure.persistence.repositories.role_repo import role_to_result
from advisy.shared.utils import ensure_utc


def assignment_to_result(
    ur: UserTenantRole, role: TenantRole | None = None
) -> AssignmentResult:
    """Map ORM UserTenantRole (and optionally its role) to AssignmentResult."""
    return AssignmentResult(
        id=ur.id,
        tenant_id=ur.tenant_id,
        user_id=ur.user_id,
        role_id=ur.role_id,
        assigned_by=ur.assigned_by,
        assigned_at=ensure_utc(ur.assigned_at),
        role=role_to_result(role) if role is not None else None,
    )


class UserRoleRepository:
    """User-role link table only. Assign/remove and list assignments."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_by_tenant(self, tenant_id: str) -> list[AssignmentResult]:
        result = await self.db.execute(
            select(UserTenantRole, TenantRole)
            .join(TenantRole, TenantRole.id == UserTenantRole.role_id)
            .where(UserTenantRole.tenant_id == tenant_id)
            .order_by(UserTenantRole.assigned_at.desc(), UserTenantRole.id)
        )
        return [assignment_to_result(ur, role) for ur, role in result.all()]

    async def list_for_user(
        self, user_id: str, tenant_id: str
    ) -> list[AssignmentResult]:
        result = await self.db.execute(
            select(UserTenantRole, TenantRole)
            .join(TenantRole, TenantRole.id == UserTenantRole.role_id)
            .where(
                UserTenantRole.user_id == user_id,
                UserTenantRole.tenant_id == tenant_id,
                TenantRole.tenant_id == tenant_id,
            )
            .order_by(TenantRole.name)
        )
        return [assignment_to_result(ur, role) for ur, role in result.all()]

    async def list_user_ids_for_role(self, role_id: str, tenant_id: str) -> list[str]:
        """Return users holding role_id (for cache invalidation)."""
        result = await self.db.execute(
            select(UserTenantRole.user_id).where(
                UserTenantRole.role_id == role_id,
                UserTenantRole.tenant_id == tenant_id,
            )
        )
        return list(result.scalars().all())

    async def assign_role_to_user(
        self,
        user_id: str,
        role_id: str,
        tenant_id: str,
        assigned_by: str | None = None,
    ) -> AssignmentResult:
        ur = UserTenantRole(
            tenant_id=tenant_id,
            user_id=user_id,
            role_id=role_id,
            assigned_by=assigned_by,
        )
        try:
            async with self.db.begin_nested():
                self.db.add(ur)
                await self.db.flush()
            await self.db.refresh(ur)
        except IntegrityError as exc:
            if not is_unique_violation(
                exc, "uq_user_tenant_role", "user_tenant_role", ("user_id", "role_id")
            ):
                raise
            raise DuplicateAssignmentException(
                "Role already assigned to user",
                assignment_type="user_role",
                details_extra={"user_id": user_id, "role_id": role_id},
            ) from None
        return assignment_to_result(ur)

    async def get_by_id_and_tenant(
        self, assignment_id: str, tenant_id: str
    ) -> AssignmentResult | None:
        result = await self.db.execute(
            select(UserTenantRole, TenantRole)
            .join(TenantRole, TenantRole.id == UserTenantRole.role_id)
            .where(
                UserTenantRole.id == assignment_id,
                UserTenantRole.tenant_id == tenant_id,
            )
        )
        row = result.first()
        return assignment_to_result(row[0], row[1]) if row else None

    async def remove_assignment(self, assignment_id: str, tenant_id: str) -> bool:
        result = await self.db.execute(
            select(UserTenantRole).where(
                UserTenantRole.id == assignment_id,
                UserTenantRole.tenant_id == tenant_id,
            )
        )
        ur = result.scalar_one_or_none()
        if not ur:
            return False
        await self.db.delete(ur)
        await self.db.flush()
        return True
