"""Response models for the public API."""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class AgeStatisticsOut(BaseModel):
    avg: Optional[float] = None
    min: Optional[int] = None
    max: Optional[int] = None


class FoodPercentagesOut(BaseModel):
    pizza: Optional[float] = None
    pasta: Optional[float] = None
    papAndWors: Optional[float] = None


class RatingAveragesOut(BaseModel):
    movies: Optional[float] = None
    radio: Optional[float] = None
    eatOut: Optional[float] = None
    tv: Optional[float] = None


class SurveyResultsOut(BaseModel):
    totalCount: int
    age: AgeStatisticsOut
    foodPercentages: FoodPercentagesOut
    avgRatings: RatingAveragesOut


class SurveyCreatedOut(BaseModel):
    id: int


class SuccessResponse(BaseModel, Generic[T]):
    success: bool = True
    data: T


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
