"""Role application service: role lifecycle, duplication and default seeding."""

from __future__ import annotations

import logging
from typing import Any

from advisy.application.dtos.role import InitializationResult, RoleResult
from advisy.application.interfaces.repositories import (
    IRolePermissionRepository,
    IRoleRepository,
)
from advisy.application.interfaces.services import (
    INotifier,
    ITenantInitializationService,
)
from advisy.application.services.authorization_service import AuthorizationService
from advisy.application.services.notify import notify_outcome
from advisy.domain.enums import DashboardScope
from advisy.domain.exceptions import (
    ResourceNotFoundException,
    SystemRoleProtectedException,
    ValidationException,
)
from advisy.domain.role_fields import check_role_changes

logger = logging.getLogger(__name__)

_MSG_CREATED = "Rôle créé avec succès"
_MSG_CREATE_FAILED = "Erreur lors de la création du rôle"
_MSG_UPDATED = "Rôle mis à jour"
_MSG_UPDATE_FAILED = "Erreur lors de la mise à jour"
_MSG_DELETED = "Rôle supprimé"
_MSG_DELETE_FAILED = "Erreur lors de la suppression"
_MSG_DUPLICATED = "Rôle dupliqué"
_MSG_DUPLICATE_FAILED = "Erreur lors de la duplication"
_MSG_DEFAULTS_CREATED = "Rôles par défaut créés"
_MSG_DEFAULTS_EXIST = "Rôles déjà initialisés"
_MSG_DEFAULTS_FAILED = "Erreur lors de l'initialisation des rôles"

DUPLICATE_DESCRIPTION = "Copie de {name}"


def _clean_name(name: str | None) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationException("Role name must not be empty", field="name")
    return cleaned


class RoleService:
    """Role store: list, create, update, delete and duplicate tenant roles.

    System roles (seeded defaults) are read-only: update and delete raise
    SystemRoleProtectedException.
    """

    def __init__(
        self,
        role_repo: IRoleRepository,
        permission_repo: IRolePermissionRepository,
        notifier: INotifier,
        initializer: ITenantInitializationService | None = None,
        authorization: AuthorizationService | None = None,
    ) -> None:
        self._role_repo = role_repo
        self._permission_repo = permission_repo
        self._notifier = notifier
        self._initializer = initializer
        self._authorization = authorization

    async def list_roles(
        self, tenant_id: str, *, include_inactive: bool = True
    ) -> list[RoleResult]:
        return await self._role_repo.list_by_tenant(
            tenant_id, include_inactive=include_inactive
        )

    async def get_role(self, tenant_id: str, role_id: str) -> RoleResult:
        """Return the role or raise ResourceNotFoundException."""
        role = await self._role_repo.get_by_id_and_tenant(role_id, tenant_id)
        if role is None:
            raise ResourceNotFoundException("role", role_id)
        return role

    async def _get_mutable_role(
        self, tenant_id: str, role_id: str, operation: str
    ) -> RoleResult:
        role = await self.get_role(tenant_id, role_id)
        if role.is_system_role:
            raise SystemRoleProtectedException(role_id, operation)
        return role

    async def create_role(
        self,
        tenant_id: str,
        name: str,
        description: str | None = None,
        dashboard_scope: DashboardScope = DashboardScope.PERSONAL,
        can_see_own_commissions: bool = True,
        can_see_team_commissions: bool = False,
        can_see_all_commissions: bool = False,
    ) -> RoleResult:
        """Create a custom (non-system) role.

        Raises:
            ValidationException: If name is empty or blank.
            DuplicateRoleNameException: If the name is taken in the tenant.
        """
        with notify_outcome(
            self._notifier, _MSG_CREATED, _MSG_CREATE_FAILED, tenant_id=tenant_id
        ):
            role = await self._role_repo.create_role(
                tenant_id,
                _clean_name(name),
                description,
                dashboard_scope=DashboardScope(dashboard_scope),
                can_see_own_commissions=can_see_own_commissions,
                can_see_team_commissions=can_see_team_commissions,
                can_see_all_commissions=can_see_all_commissions,
                is_system_role=False,
            )
        logger.info("Created role %s (%s) in tenant %s", role.id, role.name, tenant_id)
        return role

    async def update_role(
        self, tenant_id: str, role_id: str, **changes: Any
    ) -> RoleResult:
        """Partially update a custom role.

        Raises:
            ResourceNotFoundException: If the role is not in the tenant.
            SystemRoleProtectedException: If the role is a system role.
            ValidationException: If name is blank, a field is not updatable
                (e.g. is_system_role) or a required field is null.
        """
        with notify_outcome(
            self._notifier,
            _MSG_UPDATED,
            _MSG_UPDATE_FAILED,
            tenant_id=tenant_id,
            role_id=role_id,
        ):
            changes = check_role_changes(changes)
            await self._get_mutable_role(tenant_id, role_id, "update")
            if "name" in changes:
                changes["name"] = _clean_name(changes["name"])
            updated = await self._role_repo.update_role(role_id, tenant_id, changes)
            if updated is None:
                raise ResourceNotFoundException("role", role_id)
        if self._authorization is not None:
            await self._authorization.invalidate_tenant_cache(tenant_id)
        return updated

    async def delete_role(self, tenant_id: str, role_id: str) -> None:
        """Delete a custom role with its permissions and assignments."""
        with notify_outcome(
            self._notifier,
            _MSG_DELETED,
            _MSG_DELETE_FAILED,
            tenant_id=tenant_id,
            role_id=role_id,
        ):
            await self._get_mutable_role(tenant_id, role_id, "delete")
            if not await self._role_repo.delete_role(role_id, tenant_id):
                raise ResourceNotFoundException("role", role_id)
        logger.info("Deleted role %s in tenant %s", role_id, tenant_id)
        if self._authorization is not None:
            await self._authorization.invalidate_tenant_cache(tenant_id)

    async def duplicate_role(
        self, tenant_id: str, role_id: str, new_name: str
    ) -> RoleResult:
        """Copy a role (system or custom) and its permission rows under new_name.

        The copy is never a system role. If copying the permission rows fails,
        the new role is deleted before the error is re-raised.
        """
        with notify_outcome(
            self._notifier,
            _MSG_DUPLICATED,
            _MSG_DUPLICATE_FAILED,
            tenant_id=tenant_id,
            role_id=role_id,
        ):
            source = await self.get_role(tenant_id, role_id)
            copy = await self._role_repo.create_role(
                tenant_id,
                _clean_name(new_name),
                DUPLICATE_DESCRIPTION.format(name=source.name),
                dashboard_scope=source.dashboard_scope,
                can_see_own_commissions=source.can_see_own_commissions,
                can_see_team_commissions=source.can_see_team_commissions,
                can_see_all_commissions=source.can_see_all_commissions,
                is_system_role=False,
            )
            try:
                await self._permission_repo.copy_role_permissions(source.id, copy.id)
            except Exception:
                logger.warning(
                    "Permission copy failed for role %s; removing copy %s", role_id, copy.id
                )
                await self._role_repo.delete_role(copy.id, tenant_id)
                raise
        return copy

    async def initialize_default_roles(self, tenant_id: str) -> InitializationResult:
        """Seed the default roles once; one notification describes the outcome."""
        if self._initializer is None:
            raise RuntimeError("RoleService was built without a tenant initializer")
        try:
            result = await self._initializer.initialize_default_roles(tenant_id)
        except Exception as exc:
            self._notifier.error(
                _MSG_DEFAULTS_FAILED, error=type(exc).__name__, tenant_id=tenant_id
            )
            raise
        if result.already_initialized:
            self._notifier.success(_MSG_DEFAULTS_EXIST, tenant_id=tenant_id)
        elif result.failed_templates:
            self._notifier.error(
                _MSG_DEFAULTS_FAILED,
                tenant_id=tenant_id,
                failed_templates=list(result.failed_templates),
            )
        else:
            self._notifier.success(_MSG_DEFAULTS_CREATED, tenant_id=tenant_id)
        return result
