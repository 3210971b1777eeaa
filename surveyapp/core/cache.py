"""Redis client for the distributed cache tier.

Every operation returns a ``Result``: connection errors, timeouts and
(de)serialization problems come back as ``Failure(CacheError)`` instead of
being raised, so callers decide how to degrade. The client also tracks the
last known connection state for health reporting.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional
from urllib.parse import urlparse

from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import RedisError

from surveyapp.core.result import CacheError, Result, failure, success

logger = logging.getLogger(__name__)


class CacheConfig:
    """Redis cache configuration."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        db: int = 0,
        password: Optional[str] = None,
        max_connections: int = 50,
        socket_timeout: float = 5.0,
        socket_connect_timeout: float = 10.0,
        decode_responses: bool = True,
    ):
        self.host = host
        self.port = port
        self.db = db
        self.password = password
        self.max_connections = max_connections
        self.socket_timeout = socket_timeout
        self.socket_connect_timeout = socket_connect_timeout
        self.decode_responses = decode_responses

    @classmethod
    def from_url(cls, redis_url: str, **kwargs: Any) -> "CacheConfig":
        parsed = urlparse(redis_url)
        try:
            db = int(parsed.path.strip("/") or "0")
        except ValueError:
            db = 0
        config = cls(
            host=parsed.hostname or "localhost",
            port=parsed.port or 6379,
            db=db,
            password=parsed.password,
            **kwargs,
        )
        logger.info("Redis cache target: redis://%s:%s/%s", config.host, config.port, config.db)
        return config


class CacheClient:
    """
    Async Redis client for JSON values with TTLs.

    Features:
    - Result pattern for every operation
    - TTL management via SETEX
    - Pattern invalidation via SCAN + DEL
    - Last-known health flag
    """

    def __init__(self, config: Optional[CacheConfig] = None, *, client: Optional[Redis] = None):
        self.config = config or CacheConfig()
        self._pool: Optional[ConnectionPool] = None
        self._client: Optional[Redis] = client
        self._owns_client = client is None
        self._healthy = False

    @property
    def is_healthy(self) -> bool:
        return self._healthy

    async def connect(self) -> bool:
        """Create the connection pool and probe it.

        An unreachable server is not an error here: the client stays
        unhealthy and every operation degrades until Redis answers.
        """
        if self._client is None:
            self._pool = ConnectionPool(
                host=self.config.host,
                port=self.config.port,
                db=self.config.db,
                password=self.config.password,
                max_connections=self.config.max_connections,
                socket_timeout=self.config.socket_timeout,
                socket_connect_timeout=self.config.socket_connect_timeout,
                decode_responses=self.config.decode_responses,
            )
            self._client = Redis(connection_pool=self._pool)

        result = await self.ping()
        if result.is_success():
            logger.info("Redis cache connected (%s:%s/%s)", self.config.host, self.config.port, self.config.db)
        else:
            logger.warning("Redis cache unreachable, running on local cache: %s", result.error)
        return self._healthy

    async def disconnect(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None
        if self._pool is not None:
            await self._pool.disconnect()
            self._pool = None
        self._healthy = False
        logger.info("Redis cache disconnected")

    async def ping(self) -> Result[bool, CacheError]:
        if self._client is None:
            return self._not_connected("ping")
        try:
            await self._client.ping()
        except RedisError as e:
            return self._unavailable("ping", None, e)
        self._healthy = True
        return success(True)

    async def get(self, key: str) -> Result[Optional[Any], CacheError]:
        """Fetch and JSON-decode a value; ``Success(None)`` when absent."""
        if self._client is None:
            return self._not_connected("get", key)
        try:
            raw = await self._client.get(key)
        except RedisError as e:
            return self._unavailable("get", key, e)
        self._healthy = True

        if raw is None:
            return success(None)
        try:
            return success(json.loads(raw))
        except ValueError as e:
            return failure(
                CacheError(
                    operation="get",
                    key=key,
                    message=f"undecodable payload: {e}",
                    original_exception=e,
                )
            )

    async def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> Result[bool, CacheError]:
        if self._client is None:
            return self._not_connected("set", key)
        try:
            serialized = json.dumps(value)
        except (TypeError, ValueError) as e:
            return failure(
                CacheError(
                    operation="set",
                    key=key,
                    message=f"value is not JSON serializable: {e}",
                    original_exception=e,
                )
            )
        try:
            if ttl_seconds:
                await self._client.setex(key, int(ttl_seconds), serialized)
            else:
                await self._client.set(key, serialized)
        except RedisError as e:
            return self._unavailable("set", key, e)
        self._healthy = True
        return success(True)

    async def delete(self, *keys: str) -> Result[int, CacheError]:
        """Delete keys; returns how many existed."""
        if not keys:
            return success(0)
        if self._client is None:
            return self._not_connected("delete", ",".join(keys))
        try:
            deleted = await self._client.delete(*keys)
        except RedisError as e:
            return self._unavailable("delete", ",".join(keys), e)
        self._healthy = True
        return success(int(deleted))

    async def delete_pattern(self, pattern: str) -> Result[int, CacheError]:
        """
        Delete all keys matching a glob pattern.

        Args:
            pattern: Redis pattern (e.g., "survey:*")

        Returns:
            Result with count of deleted keys
        """
        if self._client is None:
            return self._not_connected("delete_pattern", pattern)
        try:
            keys = [key async for key in self._client.scan_iter(match=pattern)]
            deleted = await self._client.delete(*keys) if keys else 0
        except RedisError as e:
            return self._unavailable("delete_pattern", pattern, e)
        self._healthy = True
        if deleted:
            logger.info("Deleted %d keys matching pattern: %s", deleted, pattern)
        return success(int(deleted))

    def _not_connected(self, operation: str, key: Optional[str] = None) -> Result[Any, CacheError]:
        self._healthy = False
        return failure(CacheError(operation=operation, key=key, message="client not connected"))

    def _unavailable(self, operation: str, key: Optional[str], exc: Exception) -> Result[Any, CacheError]:
        self._healthy = False
        return failure(
            CacheError(
                operation=operation,
                key=key,
                message=str(exc) or exc.__class__.__name__,
                original_exception=exc,
            )
        )


__all__ = ["CacheClient", "CacheConfig"]
