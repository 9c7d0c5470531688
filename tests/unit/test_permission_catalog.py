"""Tests for the permission catalog (module/action mapping and validation)."""

import pytest

from advisy.domain.enums import PermissionAction, PermissionModule
from advisy.domain.exceptions import InvalidPermissionException
from advisy.domain.permission_catalog import (
    MODULE_ACTIONS,
    PERMISSION_ACTIONS,
    PERMISSION_MODULES,
    all_pairs,
    is_valid_pair,
    permission_code,
    validate_pair,
)


def test_every_module_has_a_label_and_an_action_list() -> None:
    module_ids = [m.id for m in PERMISSION_MODULES]
    assert module_ids == PermissionModule.values()
    assert set(MODULE_ACTIONS) == set(module_ids)
    assert all(m.label for m in PERMISSION_MODULES)


def test_action_labels_cover_every_action() -> None:
    assert [a.id for a in PERMISSION_ACTIONS] == PermissionAction.values()
    labels = {a.id: a.label for a in PERMISSION_ACTIONS}
    assert labels["view"] == "Voir"
    assert labels["modify_rules"] == "Modifier règles"


def test_module_actions_only_reference_known_actions() -> None:
    known = set(PermissionAction.values())
    for actions in MODULE_ACTIONS.values():
        assert set(actions) <= known


@pytest.mark.parametrize(
    ("module", "action", "expected"),
    [
        ("payout", "validate", True),
        ("contracts", "deposit", True),
        ("settings", "update", True),
        ("dashboard", "create", False),
        ("clients", "validate", False),
        ("unknown", "view", False),
    ],
)
def test_is_valid_pair(module: str, action: str, expected: bool) -> None:
    assert is_valid_pair(module, action) is expected


def test_validate_pair_accepts_enums_and_returns_strings() -> None:
    assert validate_pair(PermissionModule.PAYOUT, PermissionAction.VALIDATE) == (
        "payout",
        "validate",
    )


def test_validate_pair_rejects_pair_outside_mapping() -> None:
    with pytest.raises(InvalidPermissionException) as exc_info:
        validate_pair("dashboard", "delete")
    assert exc_info.value.error_code == "INVALID_PERMISSION"
    assert exc_info.value.details == {"module": "dashboard", "action": "delete"}


def test_all_pairs_counts_every_cell_once() -> None:
    pairs = all_pairs()
    assert len(pairs) == sum(len(a) for a in MODULE_ACTIONS.values())
    assert len(set(pairs)) == len(pairs)
    assert ("commissions", "modify_rules") in pairs


def test_permission_code() -> None:
    assert permission_code("clients", "view") == "clients:view"
    assert permission_code(PermissionModule.PAYOUT, "export") == "payout:export"
