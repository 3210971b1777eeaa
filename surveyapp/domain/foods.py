"""Food preference parsing and counting.

Preferences are stored as one comma-delimited string per response
("Pizza,Pasta") and handled as lists everywhere else.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Sequence

from surveyapp.domain.types import FoodCount

FOOD_DELIMITER = ","


def to_csv(foods: Iterable[str]) -> str:
    return FOOD_DELIMITER.join(foods)


def from_csv(csv: str | None) -> list[str]:
    """Split a stored preference string, trimming items and dropping empties.

    >>> from_csv(" Pizza , Pasta ")
    ['Pizza', 'Pasta']
    """
    if not csv or not csv.strip():
        return []
    return [item.strip() for item in csv.split(FOOD_DELIMITER) if item.strip()]


def normalize_food_name(food: str) -> str:
    return food.strip().lower()


def compact_food_name(food: str) -> str:
    """Lowercase with all whitespace removed: "Pap and Wors" -> "papandwors"."""
    return "".join(food.lower().split())


def deduplicate_foods(foods: Iterable[str]) -> list[str]:
    """Drop case-insensitive duplicates, keeping the first spelling."""
    seen: set[str] = set()
    unique: list[str] = []
    for food in foods:
        normalized = normalize_food_name(food)
        if normalized in seen:
            continue
        seen.add(normalized)
        unique.append(food)
    return unique


def count_foods(rows: Iterable[str | None]) -> list[FoodCount]:
    """Count preferences across stored rows, most popular first.

    Counting is case-sensitive. Ties keep the order in which foods were first
    encountered (``sorted`` is stable and ``Counter`` preserves insertion order).
    """
    counts: Counter[str] = Counter()
    for raw in rows:
        counts.update(from_csv(raw))
    ordered = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [{"food": food, "count": count} for food, count in ordered]


def find_food_count(distribution: Sequence[FoodCount], search_terms: Sequence[str]) -> int:
    """Count of the first distribution entry matching any of ``search_terms``.

    Matching ignores case and whitespace, so "Pap and Wors", "pap and wors"
    and "papandwors" are the same food. The distribution is ordered most
    popular first, so the most common spelling wins; others are not added.
    """
    wanted = {compact_food_name(term) for term in search_terms}
    return next(
        (entry["count"] for entry in distribution if compact_food_name(entry["food"]) in wanted),
        0,
    )


__all__ = [
    "FOOD_DELIMITER",
    "compact_food_name",
    "count_foods",
    "deduplicate_foods",
    "find_food_count",
    "from_csv",
    "normalize_food_name",
    "to_csv",
]
