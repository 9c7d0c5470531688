"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from advisy.application.dtos.role import InitializationResult
    from advisy.domain.effective_permissions import EffectivePermissions


class INotifier(Protocol):
    """User-facing notification sink: one message per operation outcome."""

    def success(self, message: str, **context: Any) -> None:
        """Emit a success message."""

    def error(self, message: str, **context: Any) -> None:
        """Emit a failure message."""


class IPermissionResolver(Protocol):
    """Protocol for resolving effective permissions (used by AuthorizationService)."""

    async def get_effective_permissions(
        self, user_id: str, tenant_id: str
    ) -> EffectivePermissions:
        """Combine the user's active roles in tenant into EffectivePermissions."""


class ITenantInitializationService(Protocol):
    """Protocol for seeding a tenant's default roles."""

    async def initialize_default_roles(self, tenant_id: str) -> InitializationResult:
        """Seed default roles once; no-op when the tenant already has roles."""


class ICacheService(Protocol):
    """Minimal cache protocol for permission caching (DIP)."""

    def is_available(self) -> bool:
        """Return True if cache is connected."""

    async def get(self, key: str) -> Any:
        """Return cached value or None."""

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL. Returns True on success."""

    async def delete(self, key: str) -> bool:
        """Delete key. Returns True on success."""

    async def delete_pattern(self, pattern: str) -> int:
        """Delete keys matching pattern. Returns count deleted."""
