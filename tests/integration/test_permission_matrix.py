"""Permission matrix writes: upsert semantics, catalog validation, system-role guard."""

import pytest

from advisy.domain.default_roles import MANAGER_ROLE_NAME
from advisy.domain.exceptions import (
    InvalidPermissionException,
    ResourceNotFoundException,
    SystemRoleProtectedException,
)
from tests.conftest import OTHER_TENANT_ID, TENANT_ID


async def test_set_permission_twice_keeps_one_row(
    role_service, matrix_service, notifier
) -> None:
    """Setting the same cell again updates it in place."""
    role = await role_service.create_role(TENANT_ID, "Gestionnaire")

    first = await matrix_service.set_permission(TENANT_ID, role.id, "clients", "view", True)
    second = await matrix_service.set_permission(
        TENANT_ID, role.id, "clients", "view", False
    )

    rows = await matrix_service.list_permissions(TENANT_ID, role.id)
    assert len(rows) == 1
    assert first.id == second.id
    assert rows[0].allowed is False
    assert not await matrix_service.has_permission(TENANT_ID, role.id, "clients", "view")
    assert notifier.messages[-2:] == [
        ("success", "Permission mise à jour"),
        ("success", "Permission mise à jour"),
    ]


async def test_granted_cell_is_reported_in_matrix(role_service, matrix_service) -> None:
    role = await role_service.create_role(TENANT_ID, "Comptable")
    await matrix_service.set_permission(TENANT_ID, role.id, "payout", "validate", True)

    matrix = await matrix_service.load_matrix(TENANT_ID, role.id)

    assert matrix.has_permission("payout", "validate")
    assert not matrix.has_permission("payout", "view")
    assert matrix.as_grid() == {"payout": {"validate": True}}


async def test_unknown_pair_is_rejected_before_writing(
    role_service, matrix_service, notifier
) -> None:
    role = await role_service.create_role(TENANT_ID, "Test")
    with pytest.raises(InvalidPermissionException):
        await matrix_service.set_permission(TENANT_ID, role.id, "clients", "launch", True)
    with pytest.raises(InvalidPermissionException):
        await matrix_service.set_permission(TENANT_ID, role.id, "rockets", "view", True)
    assert await matrix_service.list_permissions(TENANT_ID, role.id) == []
    assert notifier.messages[-1] == ("error", "Erreur lors de la mise à jour de la permission")


async def test_system_role_matrix_is_read_only(role_service, matrix_service) -> None:
    await role_service.initialize_default_roles(TENANT_ID)
    manager = next(
        r for r in await role_service.list_roles(TENANT_ID) if r.name == MANAGER_ROLE_NAME
    )
    before = await matrix_service.list_permissions(TENANT_ID, manager.id)

    with pytest.raises(SystemRoleProtectedException):
        await matrix_service.set_permission(
            TENANT_ID, manager.id, "settings", "update", True
        )
    with pytest.raises(SystemRoleProtectedException):
        await matrix_service.set_permissions(
            TENANT_ID, manager.id, [("settings", "update", True)]
        )
    assert await matrix_service.list_permissions(TENANT_ID, manager.id) == before


async def test_role_of_other_tenant_cannot_be_edited(role_service, matrix_service) -> None:
    role = await role_service.create_role(OTHER_TENANT_ID, "Autre")
    with pytest.raises(ResourceNotFoundException):
        await matrix_service.set_permission(TENANT_ID, role.id, "clients", "view", True)


async def test_bulk_set_upserts_and_last_entry_wins(role_service, matrix_service) -> None:
    role = await role_service.create_role(TENANT_ID, "Export")
    await matrix_service.set_permission(TENANT_ID, role.id, "clients", "view", True)

    rows = await matrix_service.set_permissions(
        TENANT_ID,
        role.id,
        [
            ("clients", "view", False),
            ("clients", "export", True),
            ("contracts", "export", False),
            ("contracts", "export", True),
        ],
    )

    cells = {(r.module, r.action): r.allowed for r in rows}
    assert cells == {
        ("clients", "view"): False,
        ("clients", "export"): True,
        ("contracts", "export"): True,
    }


async def test_bulk_set_with_one_invalid_pair_writes_nothing(
    role_service, matrix_service
) -> None:
    role = await role_service.create_role(TENANT_ID, "Partiel")
    with pytest.raises(InvalidPermissionException):
        await matrix_service.set_permissions(
            TENANT_ID,
            role.id,
            [("clients", "view", True), ("dashboard", "delete", True)],
        )
    assert await matrix_service.list_permissions(TENANT_ID, role.id) == []
