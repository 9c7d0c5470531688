"""Cache: Redis-backed effective permission cache and key builders."""

from advisy.infrastructure.cache.redis_cache import CacheService

__all__ = ["CacheService"]
