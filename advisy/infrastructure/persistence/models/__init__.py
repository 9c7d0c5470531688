"""ORM models. Importing this package registers every table on Base.metadata."""

from advisy.infrastructure.persistence.models.permission import (
    RolePermission,
    UserTenantRole,
)
from advisy.infrastructure.persistence.models.role import TenantRole

__all__ = ["RolePermission", "TenantRole", "UserTenantRole"]
