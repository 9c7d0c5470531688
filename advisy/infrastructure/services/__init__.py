"""Infrastructure services: tenant seeding and permission resolution."""

from advisy.infrastructure.services.permission_resolver import PermissionResolver
from advisy.infrastructure.services.tenant_initialization_service import (
    TenantInitializationService,
)

__all__ = ["PermissionResolver", "TenantInitializationService"]
