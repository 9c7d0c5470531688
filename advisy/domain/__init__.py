"""Domain layer: permission catalog, default roles, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from advisy.domain.effective_permissions import EffectivePermissions, combine_roles
from advisy.domain.enums import (
    CommissionScope,
    DashboardScope,
    PermissionAction,
    PermissionModule,
)
from advisy.domain.exceptions import (
    AdvisyException,
    AuthorizationException,
    DuplicateAssignmentException,
    DuplicateRoleNameException,
    InvalidPermissionException,
    ResourceNotFoundException,
    SystemRoleProtectedException,
    ValidationException,
)

__all__ = [
    # Effective permissions
    "EffectivePermissions",
    "combine_roles",
    # Enums
    "CommissionScope",
    "DashboardScope",
    "PermissionAction",
    "PermissionModule",
    # Exceptions
    "AdvisyException",
    "AuthorizationException",
    "DuplicateAssignmentException",
    "DuplicateRoleNameException",
    "InvalidPermissionException",
    "ResourceNotFoundException",
    "SystemRoleProtectedException",
    "ValidationException",
]
