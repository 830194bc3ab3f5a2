"""
Redis client with connection pooling.

Provides the cache backend used by the ranking cache:
- String get/set for the serialized team list
- Sorted-set add/range for the ranked team members
- Key deletion for invalidation
- Connection failures surfaced as CacheUnavailable, never as a miss
"""

import threading
import time
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any, Optional

import redis
from redis.exceptions import RedisError

from teamstats.config import Settings, get_settings
from teamstats.constants import RANGE_END
from teamstats.exceptions import CacheUnavailable
from teamstats.logging import get_logger

logger = get_logger("cache")


class RedisCache:
    """
    Redis cache client with connection pooling.

    Features:
    - Explicit construction, one instance per hosting application
    - Lazily built connection pool (configurable max connections)
    - Raw bytes in and out; encoding is the codec's job
    - Redis errors raised as CacheUnavailable

    Usage:
        from teamstats.cache import RedisCache

        cache = RedisCache()
        cache.string_set("teamsList", payload)
        payload = cache.string_get("teamsList")

        cache.sorted_set_add("teamsSortedSet", member, 12)
        top = cache.sorted_set_range("teamsSortedSet", 0, 4)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional["redis.Redis"] = None,
    ):
        self._settings = settings
        self._client = client
        self._pool: Optional[redis.ConnectionPool] = None
        self._lock = threading.Lock()

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    def _create_pool(self) -> "redis.ConnectionPool":
        settings = self.settings
        pool = redis.ConnectionPool.from_url(
            settings.redis_url,
            max_connections=settings.redis_max_connections,
            socket_timeout=settings.redis_socket_timeout,
            socket_connect_timeout=settings.redis_socket_timeout,
            decode_responses=False,  # Codec handles encoding
        )
        logger.info("redis_pool_created", host=settings.redis_host, port=settings.redis_port)
        return pool

    @property
    def client(self) -> "redis.Redis":
        """Get the injected client, or one bound to the shared pool."""
        if self._client is not None:
            return self._client

        if self._pool is None:
            with self._lock:
                if self._pool is None:
                    self._pool = self._create_pool()

        return redis.Redis(connection_pool=self._pool)

    @contextmanager
    def _guard(self, operation: str, key: Optional[str] = None) -> Generator[None, None, None]:
        try:
            yield
        except RedisError as e:
            logger.warning("cache_unavailable", operation=operation, key=key, error=str(e))
            raise CacheUnavailable(operation, key, str(e)) from e

    # =========================================================================
    # String Operations (serialized team list)
    # =========================================================================

    def string_get(self, key: str) -> bytes | None:
        """
        Get a raw value.

        Returns:
            Stored bytes, or None when the key is absent
        """
        with self._guard("string_get", key):
            data = self.client.get(key)
        if isinstance(data, str):
            return data.encode("utf-8")
        return data

    def string_set(self, key: str, value: bytes, ttl: Optional[int] = None) -> None:
        """
        Store a raw value in one write.

        Args:
            key: Cache key
            value: Encoded payload
            ttl: Time-to-live in seconds, or None to keep until deleted
        """
        with self._guard("string_set", key):
            self.client.set(key, value, ex=ttl)

    # =========================================================================
    # Sorted Set Operations (ranked team members)
    # =========================================================================

    def sorted_set_add(self, key: str, member: bytes, score: float) -> None:
        """Add or overwrite one member with its score."""
        with self._guard("sorted_set_add", key):
            self.client.zadd(key, {member: score})

    def sorted_set_range(
        self,
        key: str,
        start: int = 0,
        stop: int = RANGE_END,
        descending: bool = True,
    ) -> list[tuple[bytes, float]]:
        """
        Get members by rank with their scores.

        Args:
            key: Sorted set key
            start: First rank (0-based, inclusive)
            stop: Last rank (inclusive), -1 for the end of the set
            descending: Rank from the highest score down

        Returns:
            (member, score) pairs in rank order; empty when the key is absent
        """
        with self._guard("sorted_set_range", key):
            result = self.client.zrange(key, start, stop, desc=descending, withscores=True)
        return [(member, float(score)) for member, score in result or []]

    # =========================================================================
    # Key Operations
    # =========================================================================

    def key_delete(self, *keys: str) -> int:
        """
        Delete keys in a single command.

        Returns:
            Number of keys that existed and were removed
        """
        if not keys:
            return 0
        with self._guard("key_delete", ",".join(keys)):
            deleted = self.client.delete(*keys)
        return int(deleted or 0)

    def expire(self, key: str, seconds: int) -> bool:
        """Set a TTL on an existing key."""
        with self._guard("expire", key):
            return bool(self.client.expire(key, seconds))

    # =========================================================================
    # Health Check
    # =========================================================================

    def ping(self) -> bool:
        with self._guard("ping"):
            return bool(self.client.ping())

    def health_check(self) -> dict[str, Any]:
        """
        Get cache health status.

        Returns:
            Dictionary with 'status', 'latency_ms' and 'error'
        """
        start = time.perf_counter()
        try:
            self.ping()
        except CacheUnavailable as e:
            latency = (time.perf_counter() - start) * 1000
            return {"status": "unavailable", "latency_ms": round(latency, 2), "error": e.error}
        latency = (time.perf_counter() - start) * 1000
        return {"status": "healthy", "latency_ms": round(latency, 2), "error": None}
