import datetime
import re
from typing import Literal, Optional

from pydantic import BaseModel

from ..errors import InvalidQuery

YEAR_RE = re.compile(r"^\d{4}$")

SortBy = Literal["date", "amount"]


class DateRange(BaseModel):
    start: Optional[datetime.date] = None
    end: Optional[datetime.date] = None

    @property
    def is_all(self) -> bool:
        return self.start is None and self.end is None

    def contains(self, day: datetime.date) -> bool:
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True

    @classmethod
    def parse(cls, value: str | None) -> "DateRange":
        """
        Accepts ``all``, a year such as ``2021``, or ``start:end`` where
        either side may be left empty.
        """
        value = (value or "all").strip()
        if value == "all":
            return cls()
        if YEAR_RE.match(value):
            year = int(value)
            return cls(start=datetime.date(year, 1, 1), end=datetime.date(year, 12, 31))
        if ":" in value:
            start, _, end = value.partition(":")
            try:
                rng = cls(
                    start=datetime.date.fromisoformat(start) if start else None,
                    end=datetime.date.fromisoformat(end) if end else None,
                )
            except ValueError:
                raise InvalidQuery(f"Invalid date range: {value}")
            if rng.start and rng.end and rng.start > rng.end:
                raise InvalidQuery(f"Date range starts after it ends: {value}")
            return rng
        raise InvalidQuery(f"Invalid date range: {value}")
