"""Shapes of the derived statistics.

These are plain JSON-compatible dicts because they are stored as-is in both
cache tiers.
"""

from __future__ import annotations

from typing import Optional, TypedDict


class FoodCount(TypedDict):
    food: str
    count: int


class RatingAverages(TypedDict):
    movies: Optional[float]
    radio: Optional[float]
    eatOut: Optional[float]
    tv: Optional[float]


class AgeStatistics(TypedDict):
    avg: Optional[float]
    min: Optional[int]
    max: Optional[int]


class FoodPercentages(TypedDict):
    pizza: Optional[float]
    pasta: Optional[float]
    papAndWors: Optional[float]


class SurveyResults(TypedDict):
    totalCount: int
    age: AgeStatistics
    foodPercentages: FoodPercentages
    avgRatings: RatingAverages


EMPTY_AGE_STATISTICS: AgeStatistics = {"avg": None, "min": None, "max": None}
