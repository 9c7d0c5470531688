"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from advisy.infrastructure or advisy.api.
"""

from advisy.application.interfaces.repositories import (
    IRolePermissionRepository,
    IRoleRepository,
    IUserRoleRepository,
)
from advisy.application.interfaces.services import (
    ICacheService,
    INotifier,
    IPermissionResolver,
    ITenantInitializationService,
)

__all__ = [
    "ICacheService",
    "INotifier",
    "IPermissionResolver",
    "IRolePermissionRepository",
    "IRoleRepository",
    "ITenantInitializationService",
    "IUserRoleRepository",
]
