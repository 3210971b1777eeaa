from unittest.mock import AsyncMock, Mock

import pytest
from prometheus_client import REGISTRY
from redis.exceptions import ConnectionError as RedisConnectionError

from surveyapp.core.cache import CacheClient
from surveyapp.core.cache_keys import CacheSettings
from surveyapp.core.cache_manager import CacheManager
from surveyapp.core.microcache import LocalCache


def _unreachable_client() -> CacheClient:
    redis = AsyncMock()
    error = RedisConnectionError("Connection refused")
    for name in ("ping", "get", "set", "setex", "delete"):
        getattr(redis, name).side_effect = error
    redis.scan_iter = Mock(side_effect=error)
    return CacheClient(client=redis)


def _degraded_count(operation: str) -> float:
    return REGISTRY.get_sample_value("survey_cache_degraded_total", {"operation": operation}) or 0.0


@pytest.mark.asyncio
async def test_distributed_hit_warms_local_tier(cache_manager, fake_redis):
    await fake_redis.set("survey:total-count:v1", "7")

    assert await cache_manager.get("survey:total-count:v1") == 7
    assert cache_manager.local.get("survey:total-count:v1") == 7


@pytest.mark.asyncio
async def test_local_tier_answers_distributed_miss(cache_manager):
    cache_manager.local.set("survey:total-count:v1", 4)

    assert await cache_manager.get("survey:total-count:v1") == 4


@pytest.mark.asyncio
async def test_miss_in_both_tiers_returns_none(cache_manager):
    assert await cache_manager.get("survey:total-count:v1") is None


@pytest.mark.asyncio
async def test_set_writes_both_tiers_with_ttl(cache_manager, fake_redis):
    assert await cache_manager.set("survey:age-stats:v1", {"avg": 30.0, "min": 20, "max": 40}, 300)

    assert await fake_redis.get("survey:age-stats:v1") == '{"avg": 30.0, "min": 20, "max": 40}'
    assert 0 < await fake_redis.ttl("survey:age-stats:v1") <= 300
    assert cache_manager.local.get("survey:age-stats:v1") == {"avg": 30.0, "min": 20, "max": 40}


@pytest.mark.asyncio
async def test_unreachable_distributed_tier_falls_back_to_local():
    before = _degraded_count("get")
    manager = CacheManager(_unreachable_client(), LocalCache(), CacheSettings())

    assert await manager.set("survey:total-count:v1", 3, 120) is True
    assert await manager.get("survey:total-count:v1") == 3
    assert await manager.delete("survey:total-count:v1") is True
    assert await manager.get("survey:total-count:v1") is None

    health = await manager.health_check()
    assert health.distributed_healthy is False
    assert health.local_healthy is True
    assert health.overall_healthy is True
    assert _degraded_count("get") >= before + 2


@pytest.mark.asyncio
async def test_invalidation_survives_unreachable_distributed_tier():
    manager = CacheManager(_unreachable_client(), LocalCache(), CacheSettings())
    for key in manager.settings.keys.all():
        manager.local.set(key, 1)

    await manager.invalidate_survey_pattern()

    assert len(manager.local) == 0


@pytest.mark.asyncio
async def test_local_only_manager_reports_distributed_unhealthy():
    manager = CacheManager(None, LocalCache(), CacheSettings())

    assert await manager.set("k", "v") is True
    assert await manager.get("k") == "v"
    health = await manager.health_check()
    assert health.as_dict() == {"distributed": False, "local": True, "overall": True}
    assert manager.stats()["distributed"] == {"configured": False, "connected": False}


@pytest.mark.asyncio
async def test_invalidate_survey_pattern_clears_both_tiers(cache_manager, fake_redis):
    keys = cache_manager.settings.keys
    for key in keys.all():
        await cache_manager.set(key, 1)
    await fake_redis.set("survey:legacy:v0", "1")
    await fake_redis.set("sessions:abc", "1")

    await cache_manager.invalidate_survey_pattern()

    assert await fake_redis.keys("survey:*") == []
    assert await fake_redis.exists("sessions:abc") == 1
    assert all(cache_manager.local.get(key) is None for key in keys.all())


@pytest.mark.asyncio
async def test_delete_reports_whether_anything_was_removed(cache_manager):
    assert await cache_manager.delete([]) is False
    assert await cache_manager.delete("survey:total-count:v1") is False

    await cache_manager.set("survey:total-count:v1", 2)
    assert await cache_manager.delete(["survey:total-count:v1"]) is True


@pytest.mark.asyncio
async def test_shutdown_clears_local_tier(cache_manager):
    await cache_manager.set("k", 1)

    await cache_manager.shutdown()

    assert len(cache_manager.local) == 0
    assert cache_manager.distributed.is_healthy is False


@pytest.mark.asyncio
async def test_local_copy_of_distributed_hit_uses_default_ttl(distributed, fake_redis):
    now = [1000.0]
    local = LocalCache(default_ttl_seconds=300, clock=lambda: now[0])
    manager = CacheManager(distributed, local, CacheSettings())
    await fake_redis.setex("survey:total-count:v1", 120, "5")

    assert await manager.get("survey:total-count:v1") == 5

    now[0] += 200
    assert local.get("survey:total-count:v1") == 5
    now[0] += 100
    assert local.get("survey:total-count:v1") is None
