"""Permission catalog: modules, actions and the actions valid per module.

Static configuration. MODULE_ACTIONS is the authority for which
(module, action) pairs may ever be displayed or stored.
"""

from __future__ import annotations

from dataclasses import dataclass

from advisy.domain.enums import PermissionAction, PermissionModule
from advisy.domain.exceptions import InvalidPermissionException

M = PermissionModule
A = PermissionAction


@dataclass(frozen=True)
class CatalogEntry:
    """Identifier and display label of a module or action."""

    id: str
    label: str


PERMISSION_MODULES: tuple[CatalogEntry, ...] = (
    CatalogEntry(M.CLIENTS.value, "Clients"),
    CatalogEntry(M.CONTRACTS.value, "Contrats"),
    CatalogEntry(M.PARTNERS.value, "Partenaires"),
    CatalogEntry(M.PRODUCTS.value, "Produits"),
    CatalogEntry(M.COLLABORATORS.value, "Collaborateurs"),
    CatalogEntry(M.COMMISSIONS.value, "Commissions"),
    CatalogEntry(M.DECOMPTES.value, "Décomptes"),
    CatalogEntry(M.PAYOUT.value, "Payout"),
    CatalogEntry(M.DASHBOARD.value, "Dashboard"),
    CatalogEntry(M.SETTINGS.value, "Paramètres"),
)

PERMISSION_ACTIONS: tuple[CatalogEntry, ...] = (
    CatalogEntry(A.VIEW.value, "Voir"),
    CatalogEntry(A.CREATE.value, "Créer"),
    CatalogEntry(A.UPDATE.value, "Modifier"),
    CatalogEntry(A.DELETE.value, "Supprimer"),
    CatalogEntry(A.EXPORT.value, "Exporter"),
    CatalogEntry(A.DEPOSIT.value, "Déposer"),
    CatalogEntry(A.CANCEL.value, "Annuler"),
    CatalogEntry(A.GENERATE.value, "Générer"),
    CatalogEntry(A.VALIDATE.value, "Valider"),
    CatalogEntry(A.MODIFY_RULES.value, "Modifier règles"),
)

MODULE_ACTIONS: dict[str, tuple[str, ...]] = {
    M.CLIENTS.value: ("view", "create", "update", "delete", "export"),
    M.CONTRACTS.value: ("view", "deposit", "update", "cancel", "export"),
    M.PARTNERS.value: ("view", "create", "update", "delete"),
    M.PRODUCTS.value: ("view", "create", "update", "delete"),
    M.COLLABORATORS.value: ("view", "create", "update", "delete", "export"),
    M.COMMISSIONS.value: ("view", "modify_rules", "export"),
    M.DECOMPTES.value: ("view", "generate", "export"),
    M.PAYOUT.value: ("view", "generate", "validate", "export"),
    M.DASHBOARD.value: ("view",),
    M.SETTINGS.value: ("view", "update"),
}


def _value(item: str | PermissionModule | PermissionAction) -> str:
    return item.value if isinstance(item, (PermissionModule, PermissionAction)) else item


def permission_code(
    module: str | PermissionModule, action: str | PermissionAction
) -> str:
    """Return the 'module:action' code used in effective permission sets."""
    return f"{_value(module)}:{_value(action)}"


def is_valid_pair(
    module: str | PermissionModule, action: str | PermissionAction
) -> bool:
    """Return True if action is declared for module in MODULE_ACTIONS."""
    return _value(action) in MODULE_ACTIONS.get(_value(module), ())


def validate_pair(
    module: str | PermissionModule, action: str | PermissionAction
) -> tuple[str, str]:
    """Return (module, action) as plain strings or raise InvalidPermissionException."""
    m, a = _value(module), _value(action)
    if not is_valid_pair(m, a):
        raise InvalidPermissionException(m, a)
    return m, a


def all_pairs() -> list[tuple[str, str]]:
    """Return every valid (module, action) pair in catalog order."""
    return [
        (module, action)
        for module, actions in MODULE_ACTIONS.items()
        for action in actions
    ]
