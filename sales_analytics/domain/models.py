import math
from dataclasses import dataclass
from datetime import date, datetime, time, timezone

from pydantic import BaseModel, ConfigDict, Field

from .errors import AnalyticsError, ErrorKind
from .result import Err, Ok, Result


def as_utc(ts: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def round_half_up(value: float) -> float:
    """Round to cents, half-up: 200.227 -> 200.23, 650.333 -> 650.33."""
    return math.floor(value * 100 + 0.5) / 100


@dataclass(frozen=True, slots=True)
class SalesEvent:
    """Immutable timestamped sale."""

    id: str
    timestamp: datetime
    value: float

    @classmethod
    def create(
        cls,
        id: str,
        timestamp: datetime,
        value: float,
        now: datetime | None = None,
    ) -> Result["SalesEvent"]:
        if not id:
            return Err(AnalyticsError(ErrorKind.INVALID_EVENT, "Event id cannot be empty"))
        try:
            value = float(value)
        except (TypeError, ValueError):
            return Err(
                AnalyticsError(ErrorKind.INVALID_EVENT, f"Event value is not a number: {value!r}")
            )
        if math.isnan(value) or math.isinf(value) or value < 0:
            return Err(
                AnalyticsError(
                    ErrorKind.INVALID_EVENT,
                    f"Event value must be a non-negative finite number, got {value}",
                    details={"id": id},
                )
            )
        ts = as_utc(timestamp)
        if ts > as_utc(now or utc_now()):
            return Err(
                AnalyticsError(
                    ErrorKind.INVALID_EVENT,
                    "Event timestamp cannot be in the future",
                    details={"id": id, "timestamp": ts.isoformat()},
                )
            )
        return Ok(cls(id=id, timestamp=ts, value=value))


class AggregatedDataPoint(BaseModel):
    """One bucket total. Serialised as {"date": ..., "total": ...}."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    period_key: str = Field(..., alias="date", description="Bucket key")
    total: float = Field(..., description="Sum of event values, 2 decimals")


@dataclass(frozen=True, slots=True)
class DateRange:
    """Inclusive [start, end] interval in UTC."""

    start: datetime
    end: datetime

    @classmethod
    def create(
        cls,
        start: datetime,
        end: datetime,
        now: datetime | None = None,
        max_days: int = 730,
        max_lookback_years: int = 10,
    ) -> Result["DateRange"]:
        start, end = as_utc(start), as_utc(end)
        now = as_utc(now or utc_now())
        if start > end:
            return Err(
                AnalyticsError(
                    ErrorKind.INVALID_DATE_RANGE,
                    "Start date must be before or equal to end date",
                    details={"field": "startDate"},
                )
            )
        if (end.date() - start.date()).days > max_days:
            return Err(
                AnalyticsError(
                    ErrorKind.INVALID_DATE_RANGE,
                    f"Date range cannot exceed {max_days} days",
                    details={"field": "endDate"},
                )
            )
        try:
            earliest = now.replace(year=now.year - max_lookback_years)
        except ValueError:  # Feb 29
            earliest = now.replace(year=now.year - max_lookback_years, day=28)
        if start < earliest:
            return Err(
                AnalyticsError(
                    ErrorKind.INVALID_DATE_RANGE,
                    f"Start date cannot be more than {max_lookback_years} years in the past",
                    details={"field": "startDate"},
                )
            )
        if end > now:
            return Err(
                AnalyticsError(
                    ErrorKind.INVALID_DATE_RANGE,
                    "End date cannot be in the future",
                    details={"field": "endDate"},
                )
            )
        return Ok(cls(start=start, end=end))

    @classmethod
    def from_dates(cls, start_date: date, end_date: date) -> "DateRange":
        """Whole calendar days: start at 00:00, end at the last microsecond of end_date."""
        start = datetime.combine(start_date, time.min, tzinfo=timezone.utc)
        end = datetime.combine(end_date, time.max, tzinfo=timezone.utc)
        return cls(start=start, end=end)

    def contains(self, ts: datetime) -> bool:
        return self.start <= as_utc(ts) <= self.end

    @property
    def days(self) -> int:
        return (self.end.date() - self.start.date()).days

    def __str__(self) -> str:
        return f"DateRange({self.start.date().isoformat()} to {self.end.date().isoformat()})"


__all__ = [
    "SalesEvent",
    "AggregatedDataPoint",
    "DateRange",
    "as_utc",
    "round_half_up",
    "utc_now",
]
