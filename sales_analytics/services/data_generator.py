import random
import time
from calendar import monthrange
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence

from uuid6 import uuid7

from sales_analytics.core.logger import get_logger
from sales_analytics.domain import SalesEvent, as_utc, round_half_up, unwrap, utc_now

logger = get_logger("services.data_generator")

BASE_VALUE = 100.0
WEEKEND_MODIFIER = 0.7
SPIKE_PROBABILITY = 0.05


def months_ago(moment: datetime, months: int) -> datetime:
    """Same wall-clock instant ``months`` calendar months earlier (day clamped)."""
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def seasonal_modifier(month: int) -> float:
    """Demand factor per calendar month (1-12)."""
    if month <= 3:  # post-holiday slump
        return 0.85
    if month <= 5:  # spring
        return 1.0
    if month <= 8:  # summer slowdown
        return 0.8
    if month <= 10:  # autumn
        return 1.1
    return 1.3  # holidays


class MockDataGenerator:
    """Builds a fixed set of plausible sales events once, at construction.

    Values follow a weekday/weekend pattern, a seasonal curve, +/-30% noise
    and occasional 2-3x spikes. Pass ``seed`` for a reproducible dataset.
    """

    def __init__(
        self,
        size: int = 5000,
        months: int = 12,
        seed: Optional[int] = None,
        now: Optional[datetime] = None,
    ):
        self.size = size
        self.months = months
        self._rng = random.Random(seed)
        self._now = as_utc(now) if now else utc_now()
        self._events: List[SalesEvent] = self._generate()

    @property
    def events(self) -> Sequence[SalesEvent]:
        return tuple(self._events)

    def get_events(self) -> Sequence[SalesEvent]:
        return self.events

    def _generate(self) -> List[SalesEvent]:
        started = time.perf_counter()
        start = months_ago(self._now, self.months)
        span_seconds = (self._now - start).total_seconds()
        events = []
        for _ in range(self.size):
            ts = start + timedelta(seconds=self._rng.random() * span_seconds)
            events.append(
                unwrap(
                    SalesEvent.create(
                        id=str(uuid7()),
                        timestamp=ts,
                        value=self._value_for(ts),
                        now=self._now,
                    )
                )
            )
        events.sort(key=lambda e: e.timestamp)
        logger.info(
            "mock_events_generated",
            extra={
                "count": len(events),
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                "first": events[0].timestamp.date().isoformat() if events else None,
                "last": events[-1].timestamp.date().isoformat() if events else None,
            },
        )
        return events

    def _value_for(self, ts: datetime) -> float:
        weekend = WEEKEND_MODIFIER if ts.weekday() >= 5 else 1.0
        noise = 0.7 + self._rng.random() * 0.6
        spike = 2 + self._rng.random() if self._rng.random() < SPIKE_PROBABILITY else 1
        value = BASE_VALUE * weekend * seasonal_modifier(ts.month) * noise * spike
        return round_half_up(value)

    def get_statistics(self) -> Optional[Dict[str, Any]]:
        if not self._events:
            return None
        values = [e.value for e in self._events]
        total = sum(values)
        return {
            "count": len(values),
            "total": round_half_up(total),
            "average": round_half_up(total / len(values)),
            "min": round_half_up(min(values)),
            "max": round_half_up(max(values)),
            "dateRange": {
                "start": self._events[0].timestamp.date().isoformat(),
                "end": self._events[-1].timestamp.date().isoformat(),
            },
        }
