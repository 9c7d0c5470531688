"""Authorization service: effective permission checks with optional caching."""

from __future__ import annotations

import logging

from advisy.application.interfaces.services import ICacheService, IPermissionResolver
from advisy.domain.effective_permissions import EffectivePermissions
from advisy.domain.exceptions import AuthorizationException
from advisy.shared.cache_keys import permission_key, permission_tenant_pattern

logger = logging.getLogger(__name__)


class AuthorizationService:
    """Centralized permission checking; uses cache when available (5 min TTL typical)."""

    def __init__(
        self,
        permission_resolver: IPermissionResolver,
        cache: ICacheService | None = None,
        cache_ttl: int = 300,
    ) -> None:
        self.permission_resolver = permission_resolver
        self.cache = cache
        self.cache_ttl = cache_ttl

    def _available_cache(self) -> ICacheService | None:
        if self.cache is not None and self.cache.is_available():
            return self.cache
        return None

    async def get_effective_permissions(
        self, user_id: str, tenant_id: str
    ) -> EffectivePermissions:
        """Return the user's combined permissions in tenant. Uses cache if available."""
        key = permission_key(tenant_id, user_id)
        cache = self._available_cache()
        if cache is not None:
            cached = await cache.get(key)
            if cached is not None:
                return EffectivePermissions.from_dict(cached)

        effective = await self.permission_resolver.get_effective_permissions(
            user_id, tenant_id
        )
        if cache is not None:
            await cache.set(key, effective.to_dict(), ttl=self.cache_ttl)
        return effective

    async def check_permission(
        self, user_id: str, tenant_id: str, module: str, action: str
    ) -> bool:
        """Return True if the user may perform action on module."""
        effective = await self.get_effective_permissions(user_id, tenant_id)
        return effective.can(module, action)

    async def require_permission(
        self, user_id: str, tenant_id: str, module: str, action: str
    ) -> None:
        """Raise AuthorizationException if user lacks permission."""
        if not await self.check_permission(user_id, tenant_id, module, action):
            logger.info(
                "Permission denied: user=%s tenant=%s %s:%s",
                user_id,
                tenant_id,
                module,
                action,
            )
            raise AuthorizationException(module=module, action=action)

    async def invalidate_user_cache(self, user_id: str, tenant_id: str) -> None:
        """Invalidate cached permissions for one user."""
        cache = self._available_cache()
        if cache is not None:
            await cache.delete(permission_key(tenant_id, user_id))

    async def invalidate_tenant_cache(self, tenant_id: str) -> None:
        """Invalidate all cached permissions for a tenant."""
        cache = self._available_cache()
        if cache is not None:
            await cache.delete_pattern(permission_tenant_pattern(tenant_id))
