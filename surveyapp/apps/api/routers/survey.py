from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from surveyapp.apps.api.dependencies import get_survey_service
from surveyapp.apps.api.schemas import SuccessResponse, SurveyCreatedOut
from surveyapp.domain.validation import SurveyInput
from surveyapp.services.survey import SurveyService

router = APIRouter(prefix="/api/survey", tags=["survey"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SuccessResponse[SurveyCreatedOut],
)
async def submit_survey(
    payload: SurveyInput,
    service: SurveyService = Depends(get_survey_service),
) -> SuccessResponse[SurveyCreatedOut]:
    created = await service.create_survey(payload)
    if created.is_failure():
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to store survey response",
        )
    return SuccessResponse[SurveyCreatedOut](data=SurveyCreatedOut(id=created.unwrap().id))
