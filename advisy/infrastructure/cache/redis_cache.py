"""Redis-based cache for effective permissions.

Async Redis with TTL. Every operation degrades to a miss (or no-op) when
Redis is unreachable; the database stays the source of truth.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as redis

from advisy.core.config import get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CacheService:
    """Async Redis cache service with TTL support.

    Call connect() at startup and disconnect() at shutdown. When
    settings.redis_enabled is false, connect() is a no-op and the cache stays
    unavailable.
    """

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI; treated as connected.
        """
        self.redis = redis_client
        self.settings = get_settings()
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        if self.redis is not None or not self.settings.redis_enabled:
            return
        password = self.settings.redis_password
        client = redis.Redis(
            host=self.settings.redis_host,
            port=self.settings.redis_port,
            db=self.settings.redis_db,
            password=password.get_secret_value() if password else None,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_keepalive=True,
        )
        try:
            await client.ping()
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis connection failed: %s. Permission cache disabled.", e)
            await client.aclose()
            return
        self.redis = client
        self._connected = True
        logger.info(
            "Redis cache connected: %s:%s",
            self.settings.redis_host,
            self.settings.redis_port,
        )

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis is not None:
            await self.redis.aclose()
            logger.info("Redis cache disconnected")
        self.redis = None
        self._connected = False

    async def _reconnect(self) -> bool:
        """Drop the current client and connect again. Returns True if reconnected."""
        if self.redis is not None:
            try:
                await self.redis.aclose()
            except redis.RedisError:
                logger.debug("Ignoring error while closing stale Redis client")
        self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def _run(
        self,
        op_name: str,
        key: str,
        call: Callable[[redis.Redis], Awaitable[T]],
        fallback: T,
    ) -> T:
        """Run call against Redis, retrying once after a reconnect."""
        if not self.is_available() or self.redis is None:
            return fallback
        try:
            return await call(self.redis)
        except (redis.ConnectionError, redis.TimeoutError):
            if await self._reconnect() and self.redis is not None:
                try:
                    return await call(self.redis)
                except redis.RedisError:
                    logger.exception("Cache %s error for %s after reconnect", op_name, key)
                    return fallback
            logger.warning("Cache %s unavailable for %s (Redis disconnected)", op_name, key)
            return fallback
        except redis.RedisError:
            logger.exception("Cache %s error for %s", op_name, key)
            return fallback

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing/unavailable."""

        async def _get(client: redis.Redis) -> Any | None:
            value = await client.get(key)
            if value is None:
                logger.debug("Cache MISS: %s", key)
                return None
            logger.debug("Cache HIT: %s", key)
            return json.loads(value)

        return await self._run("get", key, _get, None)

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store JSON-serializable value with TTL in seconds. Returns True on success."""
        serialized = json.dumps(value)

        async def _set(client: redis.Redis) -> bool:
            await client.setex(key, ttl, serialized)
            logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
            return True

        return await self._run("set", key, _set, False)

    async def delete(self, key: str) -> bool:
        """Remove key from cache. Returns True if the command ran."""

        async def _delete(client: redis.Redis) -> bool:
            await client.delete(key)
            logger.debug("Cache DELETE: %s", key)
            return True

        return await self._run("delete", key, _delete, False)

    async def delete_pattern(self, pattern: str) -> int:
        """Delete all keys matching pattern using SCAN + batched UNLINK.

        Args:
            pattern: Redis SCAN match pattern (e.g. permission:tenant-123:*).

        Returns:
            Number of keys deleted.
        """
        chunk_size = 500

        async def _unlink(client: redis.Redis, keys: list[str]) -> int:
            async with client.pipeline(transaction=False) as pipe:
                pipe.unlink(*keys)
                results = await pipe.execute()
            return sum(int(r or 0) for r in results)

        async def _delete_pattern(client: redis.Redis) -> int:
            deleted = 0
            chunk: list[str] = []
            async for key in client.scan_iter(match=pattern):
                chunk.append(key)
                if len(chunk) >= chunk_size:
                    deleted += await _unlink(client, chunk)
                    chunk = []
            if chunk:
                deleted += await _unlink(client, chunk)
            if deleted:
                logger.info("Cache INVALIDATE: %s (%s keys)", pattern, deleted)
            return deleted

        return await self._run("delete_pattern", pattern, _delete_pattern, 0)
