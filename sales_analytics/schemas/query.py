import re
from datetime import date, datetime, time, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sales_analytics.domain import DateRange, Granularity

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class AnalyticsQuery(BaseModel):
    """Query for /api/data. Field-level format checks only; range rules live in DateRange."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    start_date: date = Field(..., alias="startDate", description="YYYY-MM-DD")
    end_date: date = Field(..., alias="endDate", description="YYYY-MM-DD")
    aggregation_level: Granularity = Field(
        ..., alias="aggregationLevel", description="daily | weekly | monthly"
    )

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _strict_date_format(cls, value: Any) -> Any:
        if isinstance(value, date):
            return value
        if not isinstance(value, str) or not DATE_RE.match(value):
            raise ValueError("Date must be in YYYY-MM-DD format")
        return value

    @field_validator("aggregation_level", mode="before")
    @classmethod
    def _lowercase_level(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    def date_range(self) -> DateRange:
        """Whole-day range covering both dates."""
        return DateRange.from_dates(self.start_date, self.end_date)

    def bounds(self) -> tuple[datetime, datetime]:
        """Midnight UTC of each date, as used by the range limit checks."""
        return (
            datetime.combine(self.start_date, time.min, tzinfo=timezone.utc),
            datetime.combine(self.end_date, time.min, tzinfo=timezone.utc),
        )
