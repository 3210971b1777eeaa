"""Survey submission: persist a response, then retire cached statistics."""

from __future__ import annotations

import logging
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from surveyapp.core.result import DatabaseError, Result, failure, success
from surveyapp.domain.models import SurveyResponse
from surveyapp.domain.validation import SurveyInput
from surveyapp.repositories.results import ResultsRepository
from surveyapp.repositories.survey import SurveyRepository

logger = logging.getLogger(__name__)


class SurveyService:
    def __init__(
        self,
        session_factory: Callable[[], AsyncSession],
        results_repository: ResultsRepository,
    ):
        self._session_factory = session_factory
        self.results_repository = results_repository

    async def create_survey(self, data: SurveyInput) -> Result[SurveyResponse, DatabaseError]:
        async with self._session_factory() as session:
            created = await SurveyRepository(session).create(data)
            if created.is_failure():
                await session.rollback()
                logger.error("Failed to create survey response: %s", created.error)
                return created
            try:
                await session.commit()
            except Exception as e:
                await session.rollback()
                logger.exception("Failed to commit survey response")
                return failure(
                    DatabaseError(
                        operation="SurveyResponse.commit",
                        message=str(e),
                        original_exception=e,
                    )
                )

        response = created.unwrap()
        # Cache tiers absorb their own failures; this never raises for them.
        await self.results_repository.invalidate_cache()
        logger.info(
            "Survey response created (id=%s)",
            response.id,
            extra={"operation": "create_survey"},
        )
        return success(response)


__all__ = ["SurveyService"]
