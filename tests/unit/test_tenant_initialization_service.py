"""Unit tests for TenantInitializationService (template isolation, assign_admin_role)."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import SQLAlchemyError

from advisy.application.dtos.role import RoleResult
from advisy.domain.default_roles import ADMIN_ROLE_NAME, DEFAULT_ROLES
from advisy.domain.enums import DashboardScope
from advisy.domain.exceptions import ResourceNotFoundException
from advisy.infrastructure.services.tenant_initialization_service import (
    TenantInitializationService,
)


def _role(role_id: str, name: str, system: bool = True) -> RoleResult:
    return RoleResult(
        id=role_id,
        tenant_id="t1",
        name=name,
        description=None,
        is_system_role=system,
        is_active=True,
        dashboard_scope=DashboardScope.GLOBAL,
        can_see_own_commissions=True,
        can_see_team_commissions=True,
        can_see_all_commissions=True,
    )


def _service(role_repo: AsyncMock, permission_repo: AsyncMock | None = None):
    db = MagicMock()
    return TenantInitializationService(
        db, role_repo=role_repo, permission_repo=permission_repo or AsyncMock()
    )


async def test_seed_is_skipped_when_tenant_has_roles() -> None:
    """A tenant that owns any role is reported as already initialized."""
    role_repo = AsyncMock()
    role_repo.has_any_role.return_value = True
    result = await _service(role_repo).initialize_default_roles("t1")
    assert result.already_initialized
    role_repo.create_role.assert_not_awaited()


async def test_seed_creates_every_template_as_system_role() -> None:
    """Each template becomes one system role plus its permission rows."""
    role_repo = AsyncMock()
    role_repo.has_any_role.return_value = False
    role_repo.create_role.side_effect = [
        _role(f"r{i}", t["name"]) for i, t in enumerate(DEFAULT_ROLES)
    ]
    permission_repo = AsyncMock()

    result = await _service(role_repo, permission_repo).initialize_default_roles("t1")

    assert not result.already_initialized
    assert result.created_role_ids == [f"r{i}" for i in range(len(DEFAULT_ROLES))]
    assert result.failed_templates == []
    for call in role_repo.create_role.call_args_list:
        assert call.kwargs["is_system_role"] is True
    assert permission_repo.insert_many.await_count == len(DEFAULT_ROLES)


async def test_failing_template_does_not_stop_the_others() -> None:
    """A template whose rows fail to insert is recorded; later templates still run."""
    role_repo = AsyncMock()
    role_repo.has_any_role.return_value = False
    role_repo.create_role.side_effect = [
        _role(f"r{i}", t["name"]) for i, t in enumerate(DEFAULT_ROLES)
    ]
    permission_repo = AsyncMock()
    permission_repo.insert_many.side_effect = [
        None,
        SQLAlchemyError("insert failed"),
        None,
        None,
    ]

    result = await _service(role_repo, permission_repo).initialize_default_roles("t1")

    assert result.failed_templates == [DEFAULT_ROLES[1]["name"]]
    assert result.created_role_ids == ["r0", "r2", "r3"]


async def test_assign_admin_role_without_seeded_admin_raises() -> None:
    """assign_admin_role raises ResourceNotFoundException when no admin role exists."""
    role_repo = AsyncMock()
    role_repo.get_by_name_and_tenant.return_value = None
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await _service(role_repo).assign_admin_role("t1", "user-1")
    assert exc_info.value.details["resource_id"] == f"{ADMIN_ROLE_NAME}:t1"


async def test_assign_admin_role_ignores_custom_role_with_admin_name() -> None:
    """A custom role named like the admin role is not treated as the admin role."""
    role_repo = AsyncMock()
    role_repo.get_by_name_and_tenant.return_value = _role("r1", ADMIN_ROLE_NAME, system=False)
    with pytest.raises(ResourceNotFoundException):
        await _service(role_repo).assign_admin_role("t1", "user-1")
