"""Tenant default-role initialization (implements ITenantInitializationService)."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from advisy.application.dtos.assignment import AssignmentResult
from advisy.application.dtos.role import InitializationResult
from advisy.domain.default_roles import ADMIN_ROLE_NAME, DEFAULT_ROLES, RoleTemplate
from advisy.domain.exceptions import AdvisyException, ResourceNotFoundException
from advisy.infrastructure.persistence.repositories.role_permission_repo import (
    RolePermissionRepository,
)
from advisy.infrastructure.persistence.repositories.role_repo import RoleRepository
from advisy.infrastructure.persistence.repositories.user_role_repo import (
    UserRoleRepository,
)

logger = logging.getLogger(__name__)


class TenantInitializationService:
    """Seeds the default system roles of a tenant, one SAVEPOINT per template."""

    def __init__(
        self,
        db: AsyncSession,
        role_repo: RoleRepository | None = None,
        permission_repo: RolePermissionRepository | None = None,
        templates: list[RoleTemplate] | None = None,
    ) -> None:
        self.db = db
        self.role_repo = role_repo or RoleRepository(db)
        self.permission_repo = permission_repo or RolePermissionRepository(db)
        self.templates = templates if templates is not None else DEFAULT_ROLES

    async def initialize_default_roles(self, tenant_id: str) -> InitializationResult:
        """Create the default roles unless the tenant already owns a role.

        A template that fails is rolled back to its savepoint and recorded in
        failed_templates; the remaining templates are still attempted.
        """
        if await self.role_repo.has_any_role(tenant_id):
            logger.info("Tenant %s already has roles; skipping seed", tenant_id)
            return InitializationResult(already_initialized=True)

        created: list[str] = []
        failed: list[str] = []
        for template in self.templates:
            try:
                async with self.db.begin_nested():
                    role_id = await self._create_from_template(tenant_id, template)
            except (AdvisyException, SQLAlchemyError):
                logger.exception(
                    "Failed to seed default role %r for tenant %s",
                    template["name"],
                    tenant_id,
                )
                failed.append(template["name"])
                continue
            created.append(role_id)

        logger.info(
            "Seeded %s default roles for tenant %s (%s failed)",
            len(created),
            tenant_id,
            len(failed),
        )
        return InitializationResult(
            already_initialized=False,
            created_role_ids=created,
            failed_templates=failed,
        )

    async def _create_from_template(self, tenant_id: str, template: RoleTemplate) -> str:
        role = await self.role_repo.create_role(
            tenant_id,
            template["name"],
            template["description"],
            dashboard_scope=template["dashboard_scope"],
            can_see_own_commissions=template["can_see_own_commissions"],
            can_see_team_commissions=template["can_see_team_commissions"],
            can_see_all_commissions=template["can_see_all_commissions"],
            is_system_role=True,
        )
        await self.permission_repo.insert_many(
            role.id,
            ((p["module"], p["action"], p["allowed"]) for p in template["permissions"]),
        )
        return role.id

    async def assign_admin_role(
        self, tenant_id: str, admin_user_id: str, assigned_by: str | None = None
    ) -> AssignmentResult:
        """Assign the seeded admin role to a user. Call after initialize_default_roles."""
        admin = await self.role_repo.get_by_name_and_tenant(ADMIN_ROLE_NAME, tenant_id)
        if admin is None or not admin.is_system_role:
            raise ResourceNotFoundException("role", f"{ADMIN_ROLE_NAME}:{tenant_id}")
        return await UserRoleRepository(self.db).assign_role_to_user(
            admin_user_id, admin.id, tenant_id, assigned_by=assigned_by
        )
