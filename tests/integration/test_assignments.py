"""User-role assignments."""

import pytest
from sqlalchemy.exc import IntegrityError

from advisy.domain.exceptions import DuplicateAssignmentException, ResourceNotFoundException
from tests.conftest import ADMIN_USER_ID, OTHER_TENANT_ID, TENANT_ID


async def test_assign_returns_assignment_with_role(role_service, assignment_service) -> None:
    role = await role_service.create_role(TENANT_ID, "Agent Terrain")
    assignment = await assignment_service.assign_role(
        TENANT_ID, "user-1", role.id, assigned_by=ADMIN_USER_ID
    )
    assert assignment.user_id == "user-1"
    assert assignment.role_id == role.id
    assert assignment.assigned_by == ADMIN_USER_ID
    assert assignment.assigned_at is not None
    assert assignment.role == role


async def test_duplicate_assignment_is_rejected_with_specific_message(
    role_service, assignment_service, notifier
) -> None:
    role = await role_service.create_role(TENANT_ID, "Agent Terrain")
    await assignment_service.assign_role(TENANT_ID, "user-1", role.id)

    with pytest.raises(DuplicateAssignmentException) as exc_info:
        await assignment_service.assign_role(TENANT_ID, "user-1", role.id)

    assert exc_info.value.error_code == "DUPLICATE_ASSIGNMENT"
    assert notifier.messages[-1] == ("error", "Ce rôle est déjà assigné à cet utilisateur")
    assert len(await assignment_service.get_user_roles(TENANT_ID, "user-1")) == 1


async def test_repository_reraises_non_duplicate_integrity_errors(user_role_repo) -> None:
    """A missing role is a foreign-key failure, not a duplicate assignment."""
    with pytest.raises(IntegrityError):
        await user_role_repo.assign_role_to_user("user-1", "no-such-role", TENANT_ID)
    assert await user_role_repo.list_user_ids_for_role("no-such-role", TENANT_ID) == []


async def test_user_may_hold_several_roles(role_service, assignment_service) -> None:
    a = await role_service.create_role(TENANT_ID, "A")
    b = await role_service.create_role(TENANT_ID, "B")
    await assignment_service.assign_role(TENANT_ID, "user-1", a.id)
    await assignment_service.assign_role(TENANT_ID, "user-1", b.id)

    roles = await assignment_service.get_user_roles(TENANT_ID, "user-1")
    assert [r.role.name for r in roles if r.role] == ["A", "B"]
    assert len(await assignment_service.list_assignments(TENANT_ID)) == 2


async def test_assigning_role_of_other_tenant_fails(role_service, assignment_service) -> None:
    foreign = await role_service.create_role(OTHER_TENANT_ID, "Étranger")
    with pytest.raises(ResourceNotFoundException):
        await assignment_service.assign_role(TENANT_ID, "user-1", foreign.id)
    assert await assignment_service.list_assignments(TENANT_ID) == []


async def test_remove_assignment(role_service, assignment_service, notifier) -> None:
    role = await role_service.create_role(TENANT_ID, "Retirable")
    assignment = await assignment_service.assign_role(TENANT_ID, "user-1", role.id)

    await assignment_service.remove_assignment(TENANT_ID, assignment.id)

    assert await assignment_service.get_user_roles(TENANT_ID, "user-1") == []
    assert notifier.messages[-1] == ("success", "Rôle retiré")
    with pytest.raises(ResourceNotFoundException):
        await assignment_service.remove_assignment(TENANT_ID, assignment.id)
