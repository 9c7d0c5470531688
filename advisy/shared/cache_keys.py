"""Cache key builders. Single place for key format.

Key components (tenant_id, user_id) must not contain CACHE_KEY_SEP to avoid
ambiguous or colliding keys.
"""

from advisy.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_PERMISSION


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value contains the cache key separator."""
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def permission_key(tenant_id: str, user_id: str) -> str:
    """Cache key for a user's effective permissions in a tenant."""
    _validate_key_component(tenant_id, "tenant_id")
    _validate_key_component(user_id, "user_id")
    return CACHE_KEY_SEP.join((CACHE_PREFIX_PERMISSION, tenant_id, user_id))


def permission_tenant_pattern(tenant_id: str) -> str:
    """SCAN pattern matching every cached permission set of a tenant."""
    _validate_key_component(tenant_id, "tenant_id")
    return CACHE_KEY_SEP.join((CACHE_PREFIX_PERMISSION, tenant_id, "*"))
