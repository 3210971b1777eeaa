"""Assembles the results payload from the cached statistics."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Optional

from surveyapp.core import metrics
from surveyapp.domain.foods import find_food_count
from surveyapp.domain.statistics import percentage
from surveyapp.domain.types import SurveyResults
from surveyapp.repositories.results import ResultsRepository

logger = logging.getLogger(__name__)

# Response field -> accepted spellings of that food.
NAMED_FOODS: dict[str, tuple[str, ...]] = {
    "pizza": ("pizza",),
    "pasta": ("pasta",),
    "papAndWors": ("pap and wors", "papandwors"),
}


class ResultsService:
    def __init__(self, results_repository: ResultsRepository):
        self.results_repository = results_repository

    async def get_results(self, request_id: Optional[str] = None) -> SurveyResults:
        """Fetch the four statistics concurrently and shape the response.

        Any failing statistic fails the whole call; no partial payload is
        ever returned.
        """
        started = time.perf_counter()
        repo = self.results_repository
        try:
            total_count, avg_ratings, food_distribution, age_stats = await asyncio.gather(
                repo.get_total_responses(request_id),
                repo.get_average_ratings(request_id),
                repo.get_food_distribution(request_id),
                repo.get_age_statistics(request_id),
            )
        except Exception:
            metrics.RESULTS_FAILURES_TOTAL.inc()
            logger.exception(
                "Failed to retrieve survey results",
                extra={
                    "request_id": request_id,
                    "operation": "get_results",
                    "duration_ms": round((time.perf_counter() - started) * 1000, 1),
                },
            )
            raise

        elapsed = time.perf_counter() - started
        metrics.RESULTS_DURATION_SECONDS.observe(elapsed)
        logger.info(
            "Survey results retrieved (total=%d)",
            total_count,
            extra={
                "request_id": request_id,
                "operation": "get_results",
                "duration_ms": round(elapsed * 1000, 1),
            },
        )

        return {
            "totalCount": total_count,
            "age": age_stats,
            "foodPercentages": {  # type: ignore[typeddict-item]
                field: percentage(find_food_count(food_distribution, terms), total_count)
                for field, terms in NAMED_FOODS.items()
            },
            "avgRatings": {
                "movies": avg_ratings["movies"],
                "radio": avg_ratings["radio"],
                "eatOut": avg_ratings["eatOut"],
                "tv": avg_ratings["tv"],
            },
        }


__all__ = ["NAMED_FOODS", "ResultsService"]
