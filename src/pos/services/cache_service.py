"""Redis-backed cache accessor and the read-through helper built on it."""

import logging
import time
from typing import Any, Awaitable, Callable, TypeVar

from redis.asyncio import Redis
from redis.exceptions import RedisError

from pos.core.exceptions import InternalError
from pos.middleware.metrics import record_cache_lookup, record_redis_operation
from pos.services.cache_keys import deserialize, serialize

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CacheService:
    """Key -> serialized blob store with per-key TTL and prefix invalidation."""

    # Keys deleted per round trip when invalidating a prefix
    DELETE_BATCH_SIZE = 500

    def __init__(self, redis: Redis):
        """Initialize cache service with a Redis client.

        Args:
            redis: Async Redis client instance
        """
        self.redis = redis

    async def get(self, key: str) -> str | None:
        """Get a cached value.

        Args:
            key: Cache key

        Returns:
            Serialized value or None on miss
        """
        start = time.perf_counter()
        value = await self.redis.get(key)
        record_redis_operation("get", time.perf_counter() - start)
        return value

    async def set(self, key: str, value: str, ttl: int = 0) -> None:
        """Store a value.

        Args:
            key: Cache key
            value: Serialized value
            ttl: Seconds until expiry, 0 keeps the key until deleted
        """
        start = time.perf_counter()
        if ttl > 0:
            await self.redis.set(key, value, ex=ttl)
        else:
            await self.redis.set(key, value)
        record_redis_operation("set", time.perf_counter() - start)

    async def delete(self, key: str) -> bool:
        """Delete a single key.

        Returns:
            True if the key existed
        """
        result = await self.redis.delete(key)
        return result > 0

    async def delete_by_prefix(self, pattern: str) -> int:
        """Delete every key matching a glob pattern such as ``orders:*``.

        Uses SCAN instead of KEYS so large keyspaces do not block the server.

        Returns:
            Number of keys deleted
        """
        start = time.perf_counter()
        deleted = 0
        batch: list[str] = []
        async for key in self.redis.scan_iter(match=pattern, count=self.DELETE_BATCH_SIZE):
            batch.append(key)
            if len(batch) >= self.DELETE_BATCH_SIZE:
                deleted += await self.redis.delete(*batch)
                batch = []
        if batch:
            deleted += await self.redis.delete(*batch)
        record_redis_operation("delete_by_prefix", time.perf_counter() - start)
        return deleted


class ReadThroughCache:
    """Read-through caching shared by the entity services.

    Reads surface cache problems as ``InternalError``. Writes and
    invalidations happen after storage already succeeded, so they are logged
    and skipped on failure; storage stays authoritative and the next miss
    repopulates the entry.
    """

    def __init__(self, cache: CacheService, ttl: int = 0):
        self.cache = cache
        self.ttl = ttl

    async def fetch(
        self,
        key: str,
        type_: Any,
        loader: Callable[[], Awaitable[T]],
    ) -> T:
        """Return the cached value for ``key`` or load, cache and return it.

        Args:
            key: Cache key
            type_: Type used to deserialize a hit, e.g. ``Order`` or ``list[Order]``
            loader: Coroutine factory that reads from storage on a miss

        Raises:
            InternalError: Cache unreachable or cached payload unreadable
        """
        try:
            cached = await self.cache.get(key)
        except RedisError as e:
            raise InternalError(f"cache read failed for {key}: {e}")

        if cached is not None:
            record_cache_lookup("hit")
            return deserialize(cached, type_)

        record_cache_lookup("miss")
        value = await loader()
        await self.store(key, value, type_)
        return value

    async def store(self, key: str, value: Any, type_: Any | None = None) -> None:
        """Cache ``value`` under ``key``, best-effort."""
        try:
            await self.cache.set(key, serialize(value, type_), self.ttl)
        except (RedisError, InternalError) as e:
            logger.warning(f"Failed to cache {key}: {e}")

    async def invalidate(self, *keys: str, patterns: tuple[str, ...] = ()) -> None:
        """Delete single keys and prefix patterns, best-effort."""
        for key in keys:
            try:
                await self.cache.delete(key)
            except RedisError as e:
                logger.warning(f"Failed to delete cache key {key}: {e}")
        for pattern in patterns:
            try:
                await self.cache.delete_by_prefix(pattern)
            except RedisError as e:
                logger.warning(f"Failed to invalidate cache pattern {pattern}: {e}")

