"""Permission matrix service: read and edit the (module, action) cells of a role."""

from __future__ import annotations

import asyncio
import logging
import weakref
from collections.abc import Iterable
from dataclasses import dataclass

from advisy.application.dtos.permission import PermissionResult
from advisy.application.dtos.role import RoleResult
from advisy.application.interfaces.repositories import (
    IRolePermissionRepository,
    IRoleRepository,
)
from advisy.application.interfaces.services import INotifier
from advisy.application.services.authorization_service import AuthorizationService
from advisy.application.services.notify import notify_outcome
from advisy.domain.exceptions import (
    ResourceNotFoundException,
    SystemRoleProtectedException,
)
from advisy.domain.permission_catalog import validate_pair

logger = logging.getLogger(__name__)

_MSG_UPDATED = "Permission mise à jour"
_MSG_UPDATE_FAILED = "Erreur lors de la mise à jour de la permission"

# Per-role write locks; entries disappear once no writer holds them.
_role_locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
    weakref.WeakValueDictionary()
)


def _lock_for(role_id: str) -> asyncio.Lock:
    lock = _role_locks.get(role_id)
    if lock is None:
        lock = asyncio.Lock()
        _role_locks[role_id] = lock
    return lock


@dataclass(frozen=True)
class PermissionMatrix:
    """Snapshot of a role's permission rows. Absent cells are denied."""

    role_id: str
    rows: tuple[PermissionResult, ...] = ()

    def has_permission(self, module: str, action: str) -> bool:
        return any(
            r.module == module and r.action == action and r.allowed for r in self.rows
        )

    def as_grid(self) -> dict[str, dict[str, bool]]:
        """Return {module: {action: allowed}} for the stored rows."""
        grid: dict[str, dict[str, bool]] = {}
        for r in self.rows:
            grid.setdefault(r.module, {})[r.action] = r.allowed
        return grid


class PermissionMatrixService:
    """Reads and writes role permission cells; writes are upserts."""

    def __init__(
        self,
        role_repo: IRoleRepository,
        permission_repo: IRolePermissionRepository,
        notifier: INotifier,
        authorization: AuthorizationService | None = None,
    ) -> None:
        self._role_repo = role_repo
        self._permission_repo = permission_repo
        self._notifier = notifier
        self._authorization = authorization

    async def _get_role(self, tenant_id: str, role_id: str) -> RoleResult:
        role = await self._role_repo.get_by_id_and_tenant(role_id, tenant_id)
        if role is None:
            raise ResourceNotFoundException("role", role_id)
        return role

    async def list_permissions(
        self, tenant_id: str, role_id: str
    ) -> list[PermissionResult]:
        await self._get_role(tenant_id, role_id)
        return await self._permission_repo.list_for_role(role_id)

    async def load_matrix(self, tenant_id: str, role_id: str) -> PermissionMatrix:
        rows = await self.list_permissions(tenant_id, role_id)
        return PermissionMatrix(role_id=role_id, rows=tuple(rows))

    async def has_permission(
        self, tenant_id: str, role_id: str, module: str, action: str
    ) -> bool:
        matrix = await self.load_matrix(tenant_id, role_id)
        return matrix.has_permission(module, action)

    async def set_permission(
        self,
        tenant_id: str,
        role_id: str,
        module: str,
        action: str,
        allowed: bool,
    ) -> PermissionResult:
        """Grant or revoke one cell of a custom role.

        Raises:
            InvalidPermissionException: If (module, action) is not in the catalog.
            ResourceNotFoundException: If the role is not in the tenant.
            SystemRoleProtectedException: If the role is a system role.
        """
        with notify_outcome(
            self._notifier,
            _MSG_UPDATED,
            _MSG_UPDATE_FAILED,
            tenant_id=tenant_id,
            role_id=role_id,
        ):
            module, action = validate_pair(module, action)
            role = await self._get_role(tenant_id, role_id)
            if role.is_system_role:
                raise SystemRoleProtectedException(role_id, "set_permission")
            async with _lock_for(role_id):
                row = await self._permission_repo.upsert(role_id, module, action, allowed)
        logger.debug("Set %s:%s=%s on role %s", module, action, allowed, role_id)
        if self._authorization is not None:
            await self._authorization.invalidate_tenant_cache(tenant_id)
        return row

    async def set_permissions(
        self,
        tenant_id: str,
        role_id: str,
        entries: Iterable[tuple[str, str, bool]],
    ) -> list[PermissionResult]:
        """Apply many cells in one upsert; every pair is validated before writing."""
        with notify_outcome(
            self._notifier,
            _MSG_UPDATED,
            _MSG_UPDATE_FAILED,
            tenant_id=tenant_id,
            role_id=role_id,
        ):
            cells = [(*validate_pair(m, a), bool(allowed)) for m, a, allowed in entries]
            role = await self._get_role(tenant_id, role_id)
            if role.is_system_role:
                raise SystemRoleProtectedException(role_id, "set_permission")
            async with _lock_for(role_id):
                await self._permission_repo.upsert_many(role_id, cells)
                rows = await self._permission_repo.list_for_role(role_id)
        if self._authorization is not None:
            await self._authorization.invalidate_tenant_cache(tenant_id)
        return rows
