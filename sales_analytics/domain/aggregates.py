"""Bucket totals with their event counts, and sorted collections of them.

The HTTP payload only carries ``{date, total}``; the counts feed the
averages and summaries computed here.
"""

import math
import re
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .errors import AnalyticsError, ErrorKind
from .models import AggregatedDataPoint, round_half_up
from .result import Err, Ok, Result

_KEY_RE = re.compile(r"^\d{4}-\d{2}(-\d{2})?$")


def _valid_key(key: str) -> bool:
    if not isinstance(key, str) or not _KEY_RE.match(key):
        return False
    try:
        date.fromisoformat(key if len(key) == 10 else f"{key}-01")
    except ValueError:
        return False
    return True


@dataclass(frozen=True, slots=True)
class AggregatedData:
    """One bucket: total of its event values and how many events it holds."""

    period_key: str
    total: float
    count: int = 1

    @classmethod
    def create(cls, period_key: str, total: float, count: int = 1) -> Result["AggregatedData"]:
        if not _valid_key(period_key):
            return Err(
                AnalyticsError(
                    ErrorKind.INVALID_AGGREGATE,
                    f"Period key must be YYYY-MM-DD or YYYY-MM, got {period_key!r}",
                )
            )
        if not isinstance(total, (int, float)) or not math.isfinite(total) or total < 0:
            return Err(
                AnalyticsError(
                    ErrorKind.INVALID_AGGREGATE,
                    f"Total must be a non-negative finite number, got {total!r}",
                    details={"date": period_key},
                )
            )
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            return Err(
                AnalyticsError(
                    ErrorKind.INVALID_AGGREGATE,
                    f"Count must be a positive integer, got {count!r}",
                    details={"date": period_key},
                )
            )
        return Ok(cls(period_key=period_key, total=float(total), count=count))

    @property
    def average(self) -> float:
        return round_half_up(self.total / self.count) if self.count else 0.0

    def combine(self, other: "AggregatedData") -> Result["AggregatedData"]:
        """Merge two buckets of the same period."""
        if other.period_key != self.period_key:
            return Err(
                AnalyticsError(
                    ErrorKind.INVALID_AGGREGATE,
                    "Cannot combine buckets of different periods",
                    details={"left": self.period_key, "right": other.period_key},
                )
            )
        return Ok(
            AggregatedData(
                period_key=self.period_key,
                total=round_half_up(self.total + other.total),
                count=self.count + other.count,
            )
        )

    def to_point(self) -> AggregatedDataPoint:
        return AggregatedDataPoint(period_key=self.period_key, total=self.total)


@dataclass(frozen=True, slots=True)
class AggregatedDataCollection:
    """Buckets with unique period keys, kept in ascending key order."""

    items: Tuple[AggregatedData, ...] = ()

    @classmethod
    def create(cls, items: Iterable[AggregatedData]) -> Result["AggregatedDataCollection"]:
        items = tuple(items)
        seen: Dict[str, int] = {}
        for item in items:
            seen[item.period_key] = seen.get(item.period_key, 0) + 1
        duplicates = sorted(k for k, n in seen.items() if n > 1)
        if duplicates:
            return Err(
                AnalyticsError(
                    ErrorKind.INVALID_AGGREGATE,
                    "Duplicate period keys in collection",
                    details={"duplicates": duplicates},
                )
            )
        return Ok(cls(items=tuple(sorted(items, key=lambda i: i.period_key))))

    @classmethod
    def empty(cls) -> "AggregatedDataCollection":
        return cls()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[AggregatedData]:
        return iter(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def event_count(self) -> int:
        return sum(i.count for i in self.items)

    def total_sum(self) -> float:
        return round_half_up(sum(i.total for i in self.items))

    def grand_average(self) -> float:
        """Average event value across every bucket (0 when empty)."""
        count = self.event_count
        return round_half_up(sum(i.total for i in self.items) / count) if count else 0.0

    def max_total(self) -> float:
        return max((i.total for i in self.items), default=0.0)

    def min_total(self) -> float:
        return min((i.total for i in self.items), default=0.0)

    def filter_by_range(self, start_key: str, end_key: str) -> "AggregatedDataCollection":
        """Buckets whose key lies within [start_key, end_key] by string order."""
        return AggregatedDataCollection(
            items=tuple(i for i in self.items if start_key <= i.period_key <= end_key)
        )

    def top_n(self, n: int) -> "AggregatedDataCollection":
        """The n largest buckets by total, returned in key order."""
        if n <= 0:
            return AggregatedDataCollection()
        ranked = sorted(self.items, key=lambda i: i.total, reverse=True)[:n]
        return AggregatedDataCollection(items=tuple(sorted(ranked, key=lambda i: i.period_key)))

    def add(self, item: AggregatedData) -> Result["AggregatedDataCollection"]:
        return AggregatedDataCollection.create((*self.items, item))

    def merge(self, other: "AggregatedDataCollection") -> Result["AggregatedDataCollection"]:
        """Union of two collections; buckets sharing a key are combined."""
        merged: Dict[str, AggregatedData] = {i.period_key: i for i in self.items}
        for item in other.items:
            existing: Optional[AggregatedData] = merged.get(item.period_key)
            if existing is None:
                merged[item.period_key] = item
                continue
            match existing.combine(item):
                case Ok(value=combined):
                    merged[item.period_key] = combined
                case Err() as err:
                    return err
        return AggregatedDataCollection.create(merged.values())

    def to_points(self) -> List[AggregatedDataPoint]:
        return [i.to_point() for i in self.items]

    def summary(self) -> Dict[str, float]:
        return {
            "total_sum": self.total_sum(),
            "grand_average": self.grand_average(),
            "max_total": self.max_total(),
            "min_total": self.min_total(),
            "event_count": self.event_count,
        }


__all__ = ["AggregatedData", "AggregatedDataCollection"]
