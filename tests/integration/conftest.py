"""Service fixtures wired to the per-test SQLite session."""

import pytest

from advisy.application.services import (
    AssignmentService,
    PermissionMatrixService,
    RoleService,
)
from advisy.infrastructure.persistence.repositories import (
    RolePermissionRepository,
    RoleRepository,
    UserRoleRepository,
)
from advisy.infrastructure.services import PermissionResolver, TenantInitializationService


@pytest.fixture
def role_repo(db_session):
    return RoleRepository(db_session)


@pytest.fixture
def permission_repo(db_session):
    return RolePermissionRepository(db_session)


@pytest.fixture
def user_role_repo(db_session):
    return UserRoleRepository(db_session)


@pytest.fixture
def initializer(db_session):
    return TenantInitializationService(db_session)


@pytest.fixture
def resolver(db_session):
    return PermissionResolver(db_session)


@pytest.fixture
def role_service(role_repo, permission_repo, notifier, initializer):
    return RoleService(role_repo, permission_repo, notifier, initializer=initializer)


@pytest.fixture
def matrix_service(role_repo, permission_repo, notifier):
    return PermissionMatrixService(role_repo, permission_repo, notifier)


@pytest.fixture
def assignment_service(role_repo, user_role_repo, notifier):
    return AssignmentService(role_repo, user_role_repo, notifier)
