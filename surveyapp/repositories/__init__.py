"""Data access for survey responses and their derived statistics."""

from .data_source import SqlAlchemySurveyDataSource, SurveyDataSource
from .results import ResultsRepository
from .survey import SurveyRepository

__all__ = [
    "ResultsRepository",
    "SqlAlchemySurveyDataSource",
    "SurveyDataSource",
    "SurveyRepository",
]
