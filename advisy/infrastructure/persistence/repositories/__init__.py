"""Persistence repositories. Re-exports for dependency injection."""

from advisy.infrastructure.persistence.repositories.base import BaseRepository
from advisy.infrastructure.persistence.repositories.role_permission_repo import (
    RolePermissionRepository,
)
from advisy.infrastructure.persistence.repositories.role_repo import RoleRepository
from advisy.infrastructure.persistence.repositories.user_role_repo import (
    UserRoleRepository,
)

__all__ = [
    "BaseRepository",
    "RolePermissionRepository",
    "RoleRepository",
    "UserRoleRepository",
]
