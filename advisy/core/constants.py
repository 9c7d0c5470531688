"""Core constants: cache key prefixes and shared literal values."""

# Cache key prefixes (used with :tenant_id:user_id)
CACHE_PREFIX_PERMISSION = "permission"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"
