"""Cache key builders and TTL policy for survey statistics.

Rules:
- Every key ends with a ``v<version>`` suffix. Bumping the version is how a
  changed computation shape is retired; old entries simply expire.
- Keys never contain respondent data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Statistic(str, Enum):
    TOTAL_COUNT = "total-count"
    RATING_AVERAGES = "rating-avg"
    FOOD_DISTRIBUTION = "food-dist"
    AGE_STATISTICS = "age-stats"


@dataclass(frozen=True)
class CacheKeys:
    """Versioned key namespace for the survey statistics."""

    namespace: str = "survey"
    version: int = 1

    def key(self, statistic: Statistic) -> str:
        return f"{self.namespace}:{statistic.value}:v{self.version}"

    def pattern(self) -> str:
        return f"{self.namespace}:*"

    def all(self) -> tuple[str, ...]:
        return tuple(self.key(statistic) for statistic in Statistic)

    @property
    def total_count(self) -> str:
        return self.key(Statistic.TOTAL_COUNT)

    @property
    def rating_averages(self) -> str:
        return self.key(Statistic.RATING_AVERAGES)

    @property
    def food_distribution(self) -> str:
        return self.key(Statistic.FOOD_DISTRIBUTION)

    @property
    def age_statistics(self) -> str:
        return self.key(Statistic.AGE_STATISTICS)


@dataclass(frozen=True)
class StatisticTTLs:
    """Per-statistic TTLs in seconds.

    The response count changes with every submission, so it lives shorter
    than the derived distributions.
    """

    total_count: int = 120
    rating_averages: int = 300
    food_distribution: int = 300
    age_statistics: int = 300

    def for_statistic(self, statistic: Statistic) -> int:
        return {
            Statistic.TOTAL_COUNT: self.total_count,
            Statistic.RATING_AVERAGES: self.rating_averages,
            Statistic.FOOD_DISTRIBUTION: self.food_distribution,
            Statistic.AGE_STATISTICS: self.age_statistics,
        }[statistic]


@dataclass(frozen=True)
class CacheSettings:
    """Options shared by the cache manager and the results repository."""

    default_ttl_seconds: int = 300
    max_local_entries: int = 1000
    local_check_period_seconds: int = 600
    keys: CacheKeys = field(default_factory=CacheKeys)
    ttls: StatisticTTLs = field(default_factory=StatisticTTLs)


__all__ = ["CacheKeys", "CacheSettings", "Statistic", "StatisticTTLs"]
