"""Invocation parameters for a collection run."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from ..core.enums import GenerationMode
from .date_range import DateRange


class GenerationConfig(BaseModel):
    """What the user asked for: scope, dates, mode and density.

    ``items_per_day`` is not range-checked here; the planner clamps it to a
    minimum effective density.
    """

    scope: str = Field(..., min_length=1)
    start_date: date
    end_date: date
    mode: GenerationMode = GenerationMode.SYNTHETIC
    items_per_day: float = 1.0

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @property
    def date_range(self) -> DateRange:
        """Date range of the request.

        Raises:
            PlanningInputError: If start_date is after end_date
        """
        return DateRange(start=self.start_date, end=self.end_date)
