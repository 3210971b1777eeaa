"""Cache-aside access to the derived survey statistics.

Each statistic is looked up in the cache manager first. On a miss it is
computed from the data source, written back under its versioned key with its
own TTL, and returned. A failing query propagates and nothing is cached.
"""

from __future__ import annotations

import logging
import time
from datetime import date, datetime, timezone
from typing import Any, Awaitable, Callable, Optional

from surveyapp.core import metrics
from surveyapp.core.cache_keys import CacheSettings, Statistic
from surveyapp.core.cache_manager import CacheManager
from surveyapp.domain.foods import count_foods
from surveyapp.domain.statistics import round_half_up, summarize_ages
from surveyapp.domain.types import AgeStatistics, FoodCount, RatingAverages
from surveyapp.repositories.data_source import SurveyDataSource

logger = logging.getLogger(__name__)

RATING_FIELDS = ("movies", "radio", "eatOut", "tv")


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


class ResultsRepository:
    """Computes and caches total count, rating averages, food distribution and ages."""

    def __init__(
        self,
        data_source: SurveyDataSource,
        cache: CacheManager,
        settings: Optional[CacheSettings] = None,
        *,
        empty_rating_value: Optional[float] = 0.0,
        today: Callable[[], date] = _utc_today,
    ):
        self.data_source = data_source
        self.cache = cache
        self.settings = settings or cache.settings
        self.empty_rating_value = empty_rating_value
        self._today = today

    async def get_total_responses(self, request_id: Optional[str] = None) -> int:
        return await self._cache_aside(Statistic.TOTAL_COUNT, self.data_source.count, request_id)

    async def get_average_ratings(self, request_id: Optional[str] = None) -> RatingAverages:
        async def compute() -> RatingAverages:
            averages = await self.data_source.average_of(RATING_FIELDS)
            return {  # type: ignore[return-value]
                name: self._rating(averages.get(name)) for name in RATING_FIELDS
            }

        return await self._cache_aside(Statistic.RATING_AVERAGES, compute, request_id)

    async def get_food_distribution(self, request_id: Optional[str] = None) -> list[FoodCount]:
        async def compute() -> list[FoodCount]:
            return count_foods(await self.data_source.scan_foods())

        return await self._cache_aside(Statistic.FOOD_DISTRIBUTION, compute, request_id)

    async def get_age_statistics(self, request_id: Optional[str] = None) -> AgeStatistics:
        # Ages are computed against today's date, so a cached entry can be off
        # by a birthday for at most the statistic's TTL.
        async def compute() -> AgeStatistics:
            return summarize_ages(await self.data_source.scan_dates_of_birth(), self._today())

        return await self._cache_aside(Statistic.AGE_STATISTICS, compute, request_id)

    async def invalidate_cache(self) -> None:
        """Forget every cached statistic so the next read recomputes it."""
        await self.cache.invalidate_survey_pattern()

    def _rating(self, value: Optional[float]) -> Optional[float]:
        if value is None:
            return self.empty_rating_value
        return round_half_up(value, 1)

    async def _cache_aside(
        self,
        statistic: Statistic,
        compute: Callable[[], Awaitable[Any]],
        request_id: Optional[str],
    ) -> Any:
        key = self.settings.keys.key(statistic)
        cached = await self.cache.get(key)
        if cached is not None:
            logger.debug("Cache hit: %s", key, extra={"request_id": request_id, "key": key})
            return cached

        started = time.perf_counter()
        value = await compute()
        elapsed = time.perf_counter() - started
        metrics.STATISTIC_COMPUTE_SECONDS.labels(statistic=statistic.value).observe(elapsed)

        await self.cache.set(key, value, self.settings.ttls.for_statistic(statistic))
        logger.debug(
            "Computed %s in %.1fms",
            statistic.value,
            elapsed * 1000,
            extra={"request_id": request_id, "key": key, "duration_ms": round(elapsed * 1000, 1)},
        )
        return value


__all__ = ["RATING_FIELDS", "ResultsRepository"]
