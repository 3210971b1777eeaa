from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from surveyapp.apps.api.dependencies import get_request_id, get_results_service
from surveyapp.apps.api.schemas import SuccessResponse, SurveyResultsOut
from surveyapp.services.results import ResultsService

router = APIRouter(prefix="/api/results", tags=["results"])


@router.get("", response_model=SuccessResponse[SurveyResultsOut])
async def get_survey_results(
    service: ResultsService = Depends(get_results_service),
    request_id: Optional[str] = Depends(get_request_id),
) -> SuccessResponse[SurveyResultsOut]:
    """Aggregated statistics over every submitted survey."""
    results = await service.get_results(request_id)
    return SuccessResponse[SurveyResultsOut](data=SurveyResultsOut.model_validate(results))
