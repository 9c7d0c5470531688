"""Presentation-layer dependency injection (composition root).

Routes depend only on these providers, never on repositories directly.
"""

from .auth import (
    get_authorization_service,
    get_current_claims,
    require_permission,
    require_settings_update,
    require_settings_view,
)
from .rbac import (
    get_assignment_service,
    get_assignment_service_for_write,
    get_notifier,
    get_permission_service,
    get_permission_service_for_write,
    get_role_service,
    get_role_service_for_write,
)
from .tenant import get_tenant_id

__all__ = [
    "get_assignment_service",
    "get_assignment_service_for_write",
    "get_authorization_service",
    "get_current_claims",
    "get_notifier",
    "get_permission_service",
    "get_permission_service_for_write",
    "get_role_service",
    "get_role_service_for_write",
    "get_tenant_id",
    "require_permission",
    "require_settings_update",
    "require_settings_view",
]
