"""Default role templates seeded for every new tenant.

Each template pairs the role attributes with an explicit list of
(module, action, allowed) entries. Seeded roles are system roles.
"""

from __future__ import annotations

from typing import TypedDict

from advisy.domain.enums import DashboardScope
from advisy.domain.permission_catalog import all_pairs

ADMIN_ROLE_NAME = "Admin Cabinet"
MANAGER_ROLE_NAME = "Manager"
AGENT_ROLE_NAME = "Agent"
BACK_OFFICE_ROLE_NAME = "Back-office"


class PermissionEntry(TypedDict):
    """One cell of a role's permission matrix."""

    module: str
    action: str
    allowed: bool


class RoleTemplate(TypedDict):
    """Role configuration for default roles."""

    name: str
    description: str
    dashboard_scope: DashboardScope
    can_see_own_commissions: bool
    can_see_team_commissions: bool
    can_see_all_commissions: bool
    permissions: list[PermissionEntry]


def _grants(pairs: list[tuple[str, str]]) -> list[PermissionEntry]:
    return [{"module": m, "action": a, "allowed": True} for m, a in pairs]


DEFAULT_ROLES: list[RoleTemplate] = [
    {
        "name": ADMIN_ROLE_NAME,
        "description": "Accès complet à toutes les fonctionnalités",
        "dashboard_scope": DashboardScope.GLOBAL,
        "can_see_own_commissions": True,
        "can_see_team_commissions": True,
        "can_see_all_commissions": True,
        "permissions": _grants(all_pairs()),
    },
    {
        "name": MANAGER_ROLE_NAME,
        "description": "Accès équipe + clients personnels, dashboard équipe",
        "dashboard_scope": DashboardScope.TEAM,
        "can_see_own_commissions": True,
        "can_see_team_commissions": True,
        "can_see_all_commissions": False,
        "permissions": _grants(
            [
                ("clients", "view"),
                ("clients", "create"),
                ("clients", "update"),
                ("clients", "export"),
                ("contracts", "view"),
                ("contracts", "deposit"),
                ("contracts", "update"),
                ("contracts", "export"),
                ("collaborators", "view"),
                ("commissions", "view"),
                ("decomptes", "view"),
                ("dashboard", "view"),
                ("settings", "view"),
            ]
        ),
    },
    {
        "name": AGENT_ROLE_NAME,
        "description": "Accès uniquement à ses clients et contrats",
        "dashboard_scope": DashboardScope.PERSONAL,
        "can_see_own_commissions": True,
        "can_see_team_commissions": False,
        "can_see_all_commissions": False,
        "permissions": _grants(
            [
                ("clients", "view"),
                ("clients", "create"),
                ("clients", "update"),
                ("contracts", "view"),
                ("contracts", "deposit"),
                ("commissions", "view"),
                ("dashboard", "view"),
            ]
        ),
    },
    {
        "name": BACK_OFFICE_ROLE_NAME,
        "description": "Voit tous les clients et contrats, aucun accès finance",
        "dashboard_scope": DashboardScope.GLOBAL,
        "can_see_own_commissions": False,
        "can_see_team_commissions": False,
        "can_see_all_commissions": False,
        "permissions": _grants(
            [
                ("clients", "view"),
                ("clients", "create"),
                ("clients", "update"),
                ("clients", "export"),
                ("contracts", "view"),
                ("contracts", "deposit"),
                ("contracts", "update"),
                ("contracts", "export"),
                ("partners", "view"),
                ("products", "view"),
                ("collaborators", "view"),
                ("dashboard", "view"),
                ("settings", "view"),
            ]
        ),
    },
]
