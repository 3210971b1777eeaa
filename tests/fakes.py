"""In-memory collaborators shared by the test modules."""

from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

TODAY = date(2026, 6, 15)


@dataclass
class FakeRow:
    foods: str
    date_of_birth: Optional[datetime]
    movies: int = 3
    radio: int = 3
    eatOut: int = 3
    tv: int = 3


class FakeSurveyDataSource:
    """SurveyDataSource over a list of rows that counts how often each query runs."""

    def __init__(self, rows=None):
        self.rows: list[FakeRow] = list(rows or [])
        self.calls: Counter[str] = Counter()
        self.fail_with: Optional[Exception] = None

    def _query(self, name: str) -> None:
        self.calls[name] += 1
        if self.fail_with is not None:
            raise self.fail_with

    async def count(self) -> int:
        self._query("count")
        return len(self.rows)

    async def average_of(self, columns):
        self._query("average_of")
        averages = {}
        for column in columns:
            values = [getattr(row, column) for row in self.rows]
            averages[column] = sum(values) / len(values) if values else None
        return averages

    async def scan_foods(self):
        self._query("scan_foods")
        return [row.foods for row in self.rows]

    async def scan_dates_of_birth(self):
        self._query("scan_dates_of_birth")
        return [row.date_of_birth for row in self.rows if row.date_of_birth is not None]
