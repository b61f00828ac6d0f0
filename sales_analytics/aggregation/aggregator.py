from collections import defaultdict
from datetime import datetime
from typing import Dict, Iterable, List

from sales_analytics.domain import (
    AggregatedData,
    AggregatedDataCollection,
    AggregatedDataPoint,
    Granularity,
    SalesEvent,
    as_utc,
    round_half_up,
    unwrap,
)

from .periods import period_key, resolve_granularity


def aggregate_buckets(
    events: Iterable[SalesEvent],
    start: datetime,
    end: datetime,
    granularity: Granularity | str,
) -> AggregatedDataCollection:
    """Sum and count event values per calendar bucket within the inclusive [start, end].

    Totals are rounded once per bucket after summation. Buckets are ordered
    by period key, which is chronological because every key format is a
    zero-padded date string.
    """
    g = resolve_granularity(granularity)
    start, end = as_utc(start), as_utc(end)

    totals: Dict[str, float] = defaultdict(float)
    counts: Dict[str, int] = defaultdict(int)
    for event in events:
        ts = as_utc(event.timestamp)
        if start <= ts <= end:
            key = period_key(ts, g)
            totals[key] += event.value
            counts[key] += 1

    buckets = [
        unwrap(AggregatedData.create(key, round_half_up(totals[key]), counts[key]))
        for key in totals
    ]
    return unwrap(AggregatedDataCollection.create(buckets))


def aggregate(
    events: Iterable[SalesEvent],
    start: datetime,
    end: datetime,
    granularity: Granularity | str,
) -> List[AggregatedDataPoint]:
    """Bucket totals as ``{date, total}`` points, sorted by period key."""
    return aggregate_buckets(events, start, end, granularity).to_points()


__all__ = ["aggregate", "aggregate_buckets", "round_half_up"]
