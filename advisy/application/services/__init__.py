"""Application services: roles, permission matrix, assignments, authorization."""

from advisy.application.services.assignment_service import AssignmentService
from advisy.application.services.authorization_service import AuthorizationService
from advisy.application.services.permission_service import (
    PermissionMatrix,
    PermissionMatrixService,
)
from advisy.application.services.role_service import RoleService

__all__ = [
    "AssignmentService",
    "AuthorizationService",
    "PermissionMatrix",
    "PermissionMatrixService",
    "RoleService",
]
