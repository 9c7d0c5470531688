"""Application DTOs (read models, no dependency on ORM)."""

from advisy.application.dtos.assignment import AssignmentResult
from advisy.application.dtos.permission import PermissionResult
from advisy.application.dtos.role import InitializationResult, RoleResult

__all__ = [
    "AssignmentResult",
    "InitializationResult",
    "PermissionResult",
    "RoleResult",
]
