"""FastAPI dependencies resolving services from the application container."""

from typing import Optional

from fastapi import Header, Request

from surveyapp.apps.api.container import Container
from surveyapp.services.results import ResultsService
from surveyapp.services.survey import SurveyService


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_results_service(request: Request) -> ResultsService:
    return get_container(request).results_service


def get_survey_service(request: Request) -> SurveyService:
    return get_container(request).survey_service


def get_request_id(x_request_id: Optional[str] = Header(default=None)) -> Optional[str]:
    return x_request_id
