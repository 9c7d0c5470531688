"""Domain exceptions for the Advisy role and permission model.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class AdvisyException(Exception):
    """Base exception for all Advisy application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the API exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(AdvisyException):
    """Raised when input validation fails (e.g. empty role name)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthorizationException(AdvisyException):
    """Raised when the user lacks the permission required for the operation."""

    def __init__(
        self,
        module: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional module, action, and message.

        Args:
            module: Optional permission module (e.g. 'settings').
            action: Optional action that was attempted (e.g. 'update').
            message: Human-readable message; default used when module/action omitted.
        """
        if module and action:
            message = f"Permission denied: {action} on {module}"
        details: dict[str, Any] = {}
        if module:
            details["module"] = module
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(AdvisyException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'role', 'assignment').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class SystemRoleProtectedException(AdvisyException):
    """Raised when updating, deleting or re-permissioning a seeded system role."""

    def __init__(self, role_id: str, operation: str) -> None:
        """Initialize with the protected role and the rejected operation.

        Args:
            role_id: The system role that was targeted.
            operation: 'update', 'delete' or 'set_permission'.
        """
        super().__init__(
            f"System roles cannot be modified ({operation})",
            "SYSTEM_ROLE_PROTECTED",
            {"role_id": role_id, "operation": operation},
        )


class InvalidPermissionException(AdvisyException):
    """Raised when a (module, action) pair is not in the permission catalog."""

    def __init__(self, module: str, action: str) -> None:
        super().__init__(
            f"Action '{action}' is not available for module '{module}'",
            "INVALID_PERMISSION",
            {"module": module, "action": action},
        )


class DuplicateRoleNameException(AdvisyException):
    """Raised when a role name is already used in the tenant (unique constraint)."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Role with name '{name}' already exists",
            "DUPLICATE_ROLE_NAME",
            {"name": name},
        )


class DuplicateAssignmentException(AdvisyException):
    """Raised when assigning a role that the user already holds (unique constraint)."""

    def __init__(
        self,
        message: str,
        assignment_type: str,
        details_extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with message and assignment context.

        Args:
            message: Human-readable description (e.g. 'Role already assigned to user').
            assignment_type: 'user_role'.
            details_extra: Optional extra keys (e.g. user_id, role_id).
        """
        details = details_extra or {}
        details["assignment_type"] = assignment_type
        super().__init__(message, "DUPLICATE_ASSIGNMENT", details)


class SqlNotConfiguredException(AdvisyException):
    """Raised when an operation requires the database but it is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
