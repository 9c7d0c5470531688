"""Domain enumerations for the role and permission model.

Enums represent fixed sets of domain values: permission modules and
actions, dashboard scope and the derived commission scope.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]  # type: ignore[attr-defined]


class PermissionModule(_ValuesMixin, str, Enum):
    """Functional area of the CRM that permissions are scoped to."""

    CLIENTS = "clients"
    CONTRACTS = "contracts"
    PARTNERS = "partners"
    PRODUCTS = "products"
    COLLABORATORS = "collaborators"
    COMMISSIONS = "commissions"
    DECOMPTES = "decomptes"
    PAYOUT = "payout"
    DASHBOARD = "dashboard"
    SETTINGS = "settings"


class PermissionAction(_ValuesMixin, str, Enum):
    """Operation within a module that a permission grants or denies."""

    VIEW = "view"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    EXPORT = "export"
    DEPOSIT = "deposit"
    CANCEL = "cancel"
    GENERATE = "generate"
    VALIDATE = "validate"
    MODIFY_RULES = "modify_rules"


class DashboardScope(_ValuesMixin, str, Enum):
    """How much of the organization's data a role's dashboard aggregates.

    Ordered from narrowest to widest; see rank().
    """

    PERSONAL = "personal"
    TEAM = "team"
    GLOBAL = "global"

    def rank(self) -> int:
        """Return 0 for personal, 1 for team, 2 for global."""
        return _DASHBOARD_RANK[self]


_DASHBOARD_RANK = {
    DashboardScope.PERSONAL: 0,
    DashboardScope.TEAM: 1,
    DashboardScope.GLOBAL: 2,
}


class CommissionScope(_ValuesMixin, str, Enum):
    """Commission visibility of a user, derived from the roles they hold."""

    NONE = "none"
    OWN = "own"
    TEAM = "team"
    ALL = "all"
