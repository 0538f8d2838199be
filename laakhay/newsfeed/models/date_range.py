"""Calendar date range."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from ..core.exceptions import PlanningInputError


@dataclass(frozen=True)
class DateRange:
    """Inclusive-start, exclusive-end span of UTC calendar days.

    Attributes:
        start: First calendar day of the range
        end: Boundary day; ``end - start`` is the number of days covered
    """

    start: date
    end: date

    def __post_init__(self) -> None:
        # datetime is a date subclass; keep calendar-day semantics only
        if isinstance(self.start, datetime):
            object.__setattr__(self, "start", self.start.date())
        if isinstance(self.end, datetime):
            object.__setattr__(self, "end", self.end.date())
        if self.start > self.end:
            raise PlanningInputError(
                f"start date {self.start.isoformat()} is after end date {self.end.isoformat()}"
            )

    @property
    def days(self) -> int:
        """Number of calendar days spanned."""
        return (self.end - self.start).days

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    @classmethod
    def parse(cls, start: str, end: str) -> DateRange:
        """Build a range from ISO ``YYYY-MM-DD`` strings.

        Raises:
            PlanningInputError: If a date is malformed or start > end
        """
        try:
            start_date = date.fromisoformat(start)
            end_date = date.fromisoformat(end)
        except ValueError as e:
            raise PlanningInputError(f"invalid date: {e}") from e
        return cls(start=start_date, end=end_date)

    def __str__(self) -> str:
        return f"{self.start.isoformat()}..{self.end.isoformat()}"
