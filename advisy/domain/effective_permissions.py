"""Effective permissions: how the roles held by one user combine.

Policy:
- only active roles count;
- permissions are the union of allowed cells across roles;
- dashboard scope is the widest scope held;
- commission scope is the widest visibility held (all > team > own > none);
- holding the active system role ADMIN_ROLE_NAME grants every catalog pair.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol

from advisy.domain.default_roles import ADMIN_ROLE_NAME
from advisy.domain.enums import CommissionScope, DashboardScope
from advisy.domain.permission_catalog import all_pairs, permission_code


class RoleLike(Protocol):
    """Role attributes needed to compute effective permissions."""

    name: str
    is_active: bool
    is_system_role: bool
    dashboard_scope: DashboardScope
    can_see_own_commissions: bool
    can_see_team_commissions: bool
    can_see_all_commissions: bool


@dataclass(frozen=True)
class EffectivePermissions:
    """Combined view of a user's permissions in one tenant."""

    permissions: frozenset[str] = field(default_factory=frozenset)
    dashboard_scope: DashboardScope = DashboardScope.PERSONAL
    commission_scope: CommissionScope = CommissionScope.NONE
    roles: tuple[str, ...] = ()
    is_admin: bool = False

    def can(self, module: str, action: str) -> bool:
        """Return True if module:action is granted (deny by default)."""
        if self.is_admin:
            return True
        return permission_code(module, action) in self.permissions

    def can_any(self, module: str, actions: Iterable[str]) -> bool:
        return any(self.can(module, a) for a in actions)

    def can_all(self, module: str, actions: Iterable[str]) -> bool:
        return all(self.can(module, a) for a in actions)

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable form (cache payload and API response)."""
        return {
            "permissions": sorted(self.permissions),
            "dashboard_scope": self.dashboard_scope.value,
            "commission_scope": self.commission_scope.value,
            "roles": list(self.roles),
            "is_admin": self.is_admin,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EffectivePermissions:
        return cls(
            permissions=frozenset(data.get("permissions", [])),
            dashboard_scope=DashboardScope(data.get("dashboard_scope", "personal")),
            commission_scope=CommissionScope(data.get("commission_scope", "none")),
            roles=tuple(data.get("roles", [])),
            is_admin=bool(data.get("is_admin", False)),
        )


def _commission_scope(role: RoleLike) -> CommissionScope:
    if role.can_see_all_commissions:
        return CommissionScope.ALL
    if role.can_see_team_commissions:
        return CommissionScope.TEAM
    if role.can_see_own_commissions:
        return CommissionScope.OWN
    return CommissionScope.NONE


_COMMISSION_RANK = {
    CommissionScope.NONE: 0,
    CommissionScope.OWN: 1,
    CommissionScope.TEAM: 2,
    CommissionScope.ALL: 3,
}


def combine_roles(
    roles: Iterable[RoleLike],
    allowed_pairs: Iterable[tuple[str, str]],
) -> EffectivePermissions:
    """Combine a user's roles and their allowed (module, action) cells.

    Args:
        roles: Roles assigned to the user; inactive ones are ignored.
        allowed_pairs: (module, action) cells with allowed=True belonging to
            the active roles.

    Returns:
        EffectivePermissions; empty (personal / none) when no role is active.
    """
    active = [r for r in roles if r.is_active]
    if not active:
        return EffectivePermissions()

    is_admin = any(r.is_system_role and r.name == ADMIN_ROLE_NAME for r in active)
    dashboard = max(
        (DashboardScope(r.dashboard_scope) for r in active),
        key=lambda s: s.rank(),
    )
    commission = max(
        (_commission_scope(r) for r in active),
        key=_COMMISSION_RANK.__getitem__,
    )
    codes = {permission_code(m, a) for m, a in allowed_pairs}
    if is_admin:
        codes.update(permission_code(m, a) for m, a in all_pairs())
    return EffectivePermissions(
        permissions=frozenset(codes),
        dashboard_scope=dashboard,
        commission_scope=commission,
        roles=tuple(sorted(r.name for r in active)),
        is_admin=is_admin,
    )
