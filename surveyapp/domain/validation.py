"""Validation for incoming survey submissions."""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from surveyapp.domain.foods import deduplicate_foods
from surveyapp.domain.statistics import calculate_age

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_PHONE_RE = re.compile(r"^\+?[0-9]{7,20}$")

MIN_AGE = 5
MAX_AGE = 120
MAX_FOODS = 10


class SurveyInput(BaseModel):
    """A validated survey submission."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    first_name: str = Field(..., min_length=1, max_length=100, alias="firstName")
    last_name: str = Field(..., min_length=1, max_length=100, alias="lastName")
    email: str = Field(..., max_length=254)
    contact_number: str = Field(..., alias="contactNumber")
    date_of_birth: date = Field(..., alias="dateOfBirth")
    foods: List[str] = Field(..., min_length=1)
    rating_movies: int = Field(..., ge=1, le=5, alias="ratingMovies")
    rating_radio: int = Field(..., ge=1, le=5, alias="ratingRadio")
    rating_eat_out: int = Field(..., ge=1, le=5, alias="ratingEatOut")
    rating_tv: int = Field(..., ge=1, le=5, alias="ratingTV")

    @field_validator("email")
    @classmethod
    def _email_format(cls, value: str) -> str:
        if not _EMAIL_RE.match(value):
            raise ValueError("Invalid email address")
        return value.lower()

    @field_validator("contact_number")
    @classmethod
    def _phone_format(cls, value: str) -> str:
        compact = re.sub(r"[\s\-()]", "", value)
        if not _PHONE_RE.match(compact):
            raise ValueError("Contact number must contain 7-20 digits")
        return compact

    @field_validator("date_of_birth")
    @classmethod
    def _plausible_age(cls, value: date) -> date:
        today = datetime.now(timezone.utc).date()
        if value > today:
            raise ValueError("Date of birth cannot be in the future")
        age = calculate_age(value, today)
        if not MIN_AGE <= age <= MAX_AGE:
            raise ValueError(f"Age must be between {MIN_AGE} and {MAX_AGE}")
        return value

    @field_validator("foods")
    @classmethod
    def _clean_foods(cls, value: List[str]) -> List[str]:
        cleaned = deduplicate_foods(item.strip() for item in value if item and item.strip())
        if not cleaned:
            raise ValueError("Select at least one food")
        if len(cleaned) > MAX_FOODS:
            raise ValueError(f"Select at most {MAX_FOODS} foods")
        if any("," in item for item in cleaned):
            raise ValueError("Food names cannot contain commas")
        return cleaned


__all__ = ["MAX_AGE", "MAX_FOODS", "MIN_AGE", "SurveyInput"]
