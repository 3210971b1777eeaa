"""Two-tier cache: Redis (shared) in front of a process-local store.

Reads go to Redis first and warm the local tier on a hit; when Redis misses
or is unreachable the local tier answers. Writes and deletes go to both tiers
and succeed when either tier accepts them. Redis failures are logged and
counted, never raised.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from surveyapp.core import metrics
from surveyapp.core.cache import CacheClient
from surveyapp.core.cache_keys import CacheSettings
from surveyapp.core.microcache import LocalCache
from surveyapp.core.result import CacheError, Failure, Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheHealth:
    distributed_healthy: bool
    local_healthy: bool
    overall_healthy: bool

    def as_dict(self) -> dict[str, bool]:
        return {
            "distributed": self.distributed_healthy,
            "local": self.local_healthy,
            "overall": self.overall_healthy,
        }


class CacheManager:
    def __init__(
        self,
        distributed: Optional[CacheClient],
        local: LocalCache,
        settings: Optional[CacheSettings] = None,
    ):
        self.distributed = distributed
        self.local = local
        self.settings = settings or CacheSettings()

    async def get(self, key: str) -> Optional[Any]:
        """Return the cached value or ``None`` when neither tier has it."""
        if self.distributed is not None:
            result = await self.distributed.get(key)
            if self._absorb(result):
                value = result.unwrap()
                if value is not None:
                    metrics.record_cache_lookup("distributed", hit=True)
                    # Redis does not report the remaining TTL here, so the local copy
                    # takes the default and may outlive a shorter-lived Redis entry.
                    self.local.set(key, value, self.settings.default_ttl_seconds)
                    return value
                metrics.record_cache_lookup("distributed", hit=False)

        value = self.local.get(key)
        metrics.record_cache_lookup("local", hit=value is not None)
        return value

    async def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> bool:
        ttl = ttl_seconds or self.settings.default_ttl_seconds
        distributed_ok = False
        if self.distributed is not None:
            result = await self.distributed.set(key, value, ttl)
            distributed_ok = self._absorb(result) and bool(result.unwrap())
        local_ok = self.local.set(key, value, ttl)
        return distributed_ok or local_ok

    async def delete(self, keys: str | Iterable[str]) -> bool:
        key_list = [keys] if isinstance(keys, str) else list(keys)
        if not key_list:
            return False
        distributed_deleted = False
        if self.distributed is not None:
            result = await self.distributed.delete(*key_list)
            distributed_deleted = self._absorb(result) and result.unwrap() > 0
        local_deleted = self.local.delete(key_list)
        return distributed_deleted or local_deleted > 0

    async def invalidate_survey_pattern(self) -> None:
        """Drop every survey statistic from both tiers.

        The pattern scan reaches keys only Redis knows about; the explicit
        key list still clears the local tier when Redis is down.
        """
        keys = self.settings.keys
        await asyncio.gather(
            self._delete_pattern(keys.pattern()),
            self.delete(keys.all()),
        )
        logger.info("Survey cache invalidated", extra={"key": keys.pattern()})

    async def health_check(self) -> CacheHealth:
        distributed_healthy = self.distributed is not None and self.distributed.is_healthy
        local_healthy = True
        return CacheHealth(
            distributed_healthy=distributed_healthy,
            local_healthy=local_healthy,
            overall_healthy=distributed_healthy or local_healthy,
        )

    def stats(self) -> dict[str, Any]:
        local = self.local.stats()
        return {
            "local": {
                "hits": local.hits,
                "misses": local.misses,
                "keys": local.keys,
                "evictions": local.evictions,
            },
            "distributed": {
                "configured": self.distributed is not None,
                "connected": self.distributed is not None and self.distributed.is_healthy,
            },
        }

    async def shutdown(self) -> None:
        if self.distributed is not None:
            await self.distributed.disconnect()
        self.local.clear()

    async def _delete_pattern(self, pattern: str) -> int:
        if self.distributed is None:
            return 0
        result = await self.distributed.delete_pattern(pattern)
        return result.unwrap() if self._absorb(result) else 0

    def _absorb(self, result: Result[Any, CacheError]) -> bool:
        """Log and count a distributed-tier failure; True when the call succeeded."""
        if isinstance(result, Failure):
            metrics.record_degraded(result.error.operation)
            logger.warning(
                "Distributed cache degraded: %s",
                result.error,
                extra={"tier": "distributed", "operation": result.error.operation},
            )
            return False
        return True


__all__ = ["CacheHealth", "CacheManager"]
