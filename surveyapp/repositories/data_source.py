"""
Aggregate queries over stored survey responses.

The results repository only needs four read operations, expressed by the
``SurveyDataSource`` protocol so tests can substitute an in-memory source.
Query failures are not caught here: they propagate to the caller.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Mapping, Optional, Protocol, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from surveyapp.domain.models import SurveyResponse

RATING_COLUMNS: dict[str, object] = {
    "movies": SurveyResponse.rating_movies,
    "radio": SurveyResponse.rating_radio,
    "eatOut": SurveyResponse.rating_eat_out,
    "tv": SurveyResponse.rating_tv,
}


class SurveyDataSource(Protocol):
    """Read-only query contract used by the results repository."""

    async def count(self) -> int:
        """Total number of stored responses."""
        ...

    async def average_of(self, columns: Sequence[str]) -> Mapping[str, Optional[float]]:
        """Native average per rating column; ``None`` for a column with no rows."""
        ...

    async def scan_foods(self) -> Sequence[str]:
        """Every row's raw delimited food-preference string."""
        ...

    async def scan_dates_of_birth(self) -> Sequence[date | datetime]:
        """Every row's date of birth."""
        ...


class SqlAlchemySurveyDataSource:
    """SurveyDataSource backed by the ``survey_responses`` table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def count(self) -> int:
        async with self._session_factory() as session:
            result = await session.execute(select(func.count()).select_from(SurveyResponse))
            return int(result.scalar_one())

    async def average_of(self, columns: Sequence[str]) -> Mapping[str, Optional[float]]:
        unknown = [name for name in columns if name not in RATING_COLUMNS]
        if unknown:
            raise ValueError(f"Unknown rating columns: {', '.join(unknown)}")

        stmt = select(*(func.avg(RATING_COLUMNS[name]) for name in columns))
        async with self._session_factory() as session:
            row = (await session.execute(stmt)).one()
        return {
            name: (float(value) if value is not None else None)
            for name, value in zip(columns, row)
        }

    async def scan_foods(self) -> Sequence[str]:
        async with self._session_factory() as session:
            result = await session.execute(select(SurveyResponse.foods).order_by(SurveyResponse.id))
            return list(result.scalars().all())

    async def scan_dates_of_birth(self) -> Sequence[date | datetime]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(SurveyResponse.date_of_birth).where(SurveyResponse.date_of_birth.is_not(None))
            )
            return list(result.scalars().all())


__all__ = ["RATING_COLUMNS", "SqlAlchemySurveyDataSource", "SurveyDataSource"]
