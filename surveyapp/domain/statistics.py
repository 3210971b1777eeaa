"""Numeric helpers for the aggregated results."""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from surveyapp.domain.types import EMPTY_AGE_STATISTICS, AgeStatistics


def round_half_up(value: float, places: int = 1) -> float:
    """Round like a person would: 2.25 -> 2.3, 13/3 -> 4.3.

    ``round()`` rounds half to even on the binary value, which turns 2.25
    into 2.2.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def percentage(count: int, total: int) -> Optional[float]:
    if total <= 0:
        return None
    return round_half_up(count / total * 100, 1)


def calculate_age(date_of_birth: date | datetime, today: date) -> int:
    """Whole years between ``date_of_birth`` and ``today``."""
    if isinstance(date_of_birth, datetime):
        date_of_birth = date_of_birth.date()
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def summarize_ages(
    dates_of_birth: Iterable[date | datetime | None], today: date
) -> AgeStatistics:
    """Average (1 decimal), min and max age; all ``None`` without valid ages.

    Rows without a birth date or born after ``today`` carry no valid age.
    """
    ages = [
        calculate_age(dob, today)
        for dob in dates_of_birth
        if dob is not None
    ]
    ages = [age for age in ages if age >= 0]
    if not ages:
        return dict(EMPTY_AGE_STATISTICS)  # type: ignore[return-value]
    return {
        "avg": round_half_up(sum(ages) / len(ages), 1),
        "min": min(ages),
        "max": max(ages),
    }


__all__ = ["calculate_age", "percentage", "round_half_up", "summarize_ages"]
