from .results import ResultsService
from .survey import SurveyService

__all__ = ["ResultsService", "SurveyService"]
