from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from surveyapp.domain.foods import from_csv

from .base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SurveyResponse(Base):
    __tablename__ = "survey_responses"
    __table_args__ = (
        CheckConstraint("rating_movies BETWEEN 1 AND 5", name="ck_survey_rating_movies"),
        CheckConstraint("rating_radio BETWEEN 1 AND 5", name="ck_survey_rating_radio"),
        CheckConstraint("rating_eat_out BETWEEN 1 AND 5", name="ck_survey_rating_eat_out"),
        CheckConstraint("rating_tv BETWEEN 1 AND 5", name="ck_survey_rating_tv"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    contact_number: Mapped[str] = mapped_column(String(32), nullable=False)
    date_of_birth: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    # Comma-delimited food preferences, e.g. "Pizza,Pasta".
    foods: Mapped[str] = mapped_column(Text, nullable=False)
    rating_movies: Mapped[int] = mapped_column(Integer, nullable=False)
    rating_radio: Mapped[int] = mapped_column(Integer, nullable=False)
    rating_eat_out: Mapped[int] = mapped_column(Integer, nullable=False)
    rating_tv: Mapped[int] = mapped_column(Integer, nullable=False)
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )

    @property
    def food_list(self) -> list[str]:
        return from_csv(self.foods)

    def __repr__(self) -> str:
        return f"<SurveyResponse {self.id}>"
