"""Survey response repository implementation."""

from __future__ import annotations

from datetime import datetime, time

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from surveyapp.core.result import DatabaseError, NotFoundError, Result, failure, success
from surveyapp.domain.foods import to_csv
from surveyapp.domain.models import SurveyResponse
from surveyapp.domain.validation import SurveyInput


class SurveyRepository:
    """Repository for SurveyResponse entities. Responses are only ever inserted."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, data: SurveyInput) -> Result[SurveyResponse, DatabaseError]:
        """
        Insert a new response.

        Args:
            data: Validated submission

        Returns:
            Result containing the flushed entity (with its id) or error
        """
        try:
            entity = SurveyResponse(
                first_name=data.first_name,
                last_name=data.last_name,
                email=data.email,
                contact_number=data.contact_number,
                date_of_birth=datetime.combine(data.date_of_birth, time.min),
                foods=to_csv(data.foods),
                rating_movies=data.rating_movies,
                rating_radio=data.rating_radio,
                rating_eat_out=data.rating_eat_out,
                rating_tv=data.rating_tv,
            )
            self.session.add(entity)
            await self.session.flush()
            await self.session.refresh(entity)
            return success(entity)

        except Exception as e:
            return failure(
                DatabaseError(
                    operation="SurveyResponse.create",
                    message=str(e),
                    original_exception=e,
                )
            )

    async def get(self, id: int) -> Result[SurveyResponse, NotFoundError | DatabaseError]:
        try:
            entity = await self.session.get(SurveyResponse, id)
        except Exception as e:
            return failure(
                DatabaseError(
                    operation="SurveyResponse.get",
                    message=str(e),
                    original_exception=e,
                )
            )
        if entity is None:
            return failure(NotFoundError(entity_type="SurveyResponse", entity_id=id))
        return success(entity)

    async def count(self) -> Result[int, DatabaseError]:
        try:
            result = await self.session.execute(select(func.count()).select_from(SurveyResponse))
            return success(int(result.scalar_one()))
        except Exception as e:
            return failure(
                DatabaseError(
                    operation="SurveyResponse.count",
                    message=str(e),
                    original_exception=e,
                )
            )


__all__ = ["SurveyRepository"]
