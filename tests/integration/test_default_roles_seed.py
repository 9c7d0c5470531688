"""Default-role seeding against the database."""

import pytest
from sqlalchemy.exc import SQLAlchemyError

from advisy.domain.default_roles import (
    ADMIN_ROLE_NAME,
    AGENT_ROLE_NAME,
    DEFAULT_ROLES,
    MANAGER_ROLE_NAME,
)
from advisy.domain.exceptions import DuplicateAssignmentException, ResourceNotFoundException
from advisy.domain.permission_catalog import all_pairs
from advisy.infrastructure.persistence.repositories import RolePermissionRepository
from advisy.infrastructure.services import TenantInitializationService
from tests.conftest import ADMIN_USER_ID, OTHER_TENANT_ID, TENANT_ID


class FailingForRolePermissionRepository(RolePermissionRepository):
    """Fails the permission insert of the n-th seeded role."""

    def __init__(self, db, fail_on_call: int) -> None:
        super().__init__(db)
        self.calls = 0
        self.fail_on_call = fail_on_call

    async def insert_many(self, role_id, entries):
        self.calls += 1
        if self.calls == self.fail_on_call:
            raise SQLAlchemyError("simulated failure")
        return await super().insert_many(role_id, entries)


async def test_seed_creates_the_four_system_roles(initializer, role_repo, permission_repo) -> None:
    result = await initializer.initialize_default_roles(TENANT_ID)

    assert not result.already_initialized
    assert result.failed_templates == []
    roles = await role_repo.list_by_tenant(TENANT_ID)
    assert {r.name for r in roles} == {t["name"] for t in DEFAULT_ROLES}
    assert all(r.is_system_role for r in roles)

    admin = next(r for r in roles if r.name == ADMIN_ROLE_NAME)
    admin_rows = await permission_repo.list_for_role(admin.id)
    assert {(r.module, r.action) for r in admin_rows} == set(all_pairs())


async def test_seed_is_idempotent(initializer, role_repo) -> None:
    """A second seed creates nothing and reports the tenant as initialized."""
    await initializer.initialize_default_roles(TENANT_ID)
    before = await role_repo.list_by_tenant(TENANT_ID)

    again = await initializer.initialize_default_roles(TENANT_ID)

    assert again.already_initialized
    assert again.created_role_ids == []
    assert await role_repo.list_by_tenant(TENANT_ID) == before


async def test_seed_skips_tenant_with_custom_role(initializer, role_service, role_repo) -> None:
    await role_service.create_role(TENANT_ID, "Maison")
    result = await initializer.initialize_default_roles(TENANT_ID)
    assert result.already_initialized
    assert [r.name for r in await role_repo.list_by_tenant(TENANT_ID)] == ["Maison"]


async def test_seed_is_per_tenant(initializer, role_repo) -> None:
    await initializer.initialize_default_roles(TENANT_ID)
    result = await initializer.initialize_default_roles(OTHER_TENANT_ID)
    assert not result.already_initialized
    assert len(await role_repo.list_by_tenant(OTHER_TENANT_ID)) == len(DEFAULT_ROLES)


async def test_failed_template_is_rolled_back_alone(db_session, role_repo) -> None:
    """The failing template leaves no role behind; the others are seeded."""
    service = TenantInitializationService(
        db_session,
        permission_repo=FailingForRolePermissionRepository(db_session, fail_on_call=2),
    )

    result = await service.initialize_default_roles(TENANT_ID)

    assert result.failed_templates == [MANAGER_ROLE_NAME]
    names = {r.name for r in await role_repo.list_by_tenant(TENANT_ID)}
    assert MANAGER_ROLE_NAME not in names
    assert ADMIN_ROLE_NAME in names
    assert AGENT_ROLE_NAME in names


async def test_initialize_through_role_service_notifies(role_service, notifier) -> None:
    await role_service.initialize_default_roles(TENANT_ID)
    await role_service.initialize_default_roles(TENANT_ID)
    assert notifier.messages == [
        ("success", "Rôles par défaut créés"),
        ("success", "Rôles déjà initialisés"),
    ]


async def test_assign_admin_role(initializer, user_role_repo) -> None:
    await initializer.initialize_default_roles(TENANT_ID)
    assignment = await initializer.assign_admin_role(TENANT_ID, ADMIN_USER_ID)

    held = await user_role_repo.list_for_user(ADMIN_USER_ID, TENANT_ID)
    assert [a.id for a in held] == [assignment.id]
    assert held[0].role is not None
    assert held[0].role.name == ADMIN_ROLE_NAME

    with pytest.raises(DuplicateAssignmentException):
        await initializer.assign_admin_role(TENANT_ID, ADMIN_USER_ID)


async def test_assign_admin_role_before_seed_fails(initializer) -> None:
    with pytest.raises(ResourceNotFoundException):
        await initializer.assign_admin_role(TENANT_ID, ADMIN_USER_ID)
