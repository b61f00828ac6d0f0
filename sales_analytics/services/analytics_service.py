import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence

from sales_analytics.aggregation import aggregate_buckets
from sales_analytics.cache import InMemoryCache, encode, pattern
from sales_analytics.core.logger import get_logger
from sales_analytics.core.metrics import AGGREGATION_LATENCY, CACHE_WRITE_FAILURES
from sales_analytics.domain import AggregatedDataCollection, AggregatedDataPoint, SalesEvent
from sales_analytics.schemas.query import AnalyticsQuery

logger = get_logger("services.analytics")


class EventSource(Protocol):
    def get_events(self) -> Sequence[SalesEvent]: ...


@dataclass(frozen=True)
class AnalyticsResult:
    data: List[AggregatedDataPoint]
    cached: bool
    execution_time_ms: float
    cache_key: str
    summary: Dict[str, float] = field(default_factory=dict)


class AnalyticsService:
    """Cache-aside aggregation over an event source.

    The cache is an optimisation only: any cache failure is logged and the
    result is recomputed from the events.
    """

    def __init__(self, cache: InMemoryCache, source: EventSource):
        self.cache = cache
        self.source = source

    def get_aggregated(self, query: AnalyticsQuery) -> AnalyticsResult:
        started = time.perf_counter()
        key = encode(query)

        cached = self._cache_get(key)
        if isinstance(cached, AggregatedDataCollection):
            return AnalyticsResult(
                data=cached.to_points(),
                cached=True,
                execution_time_ms=_elapsed_ms(started),
                cache_key=key,
                summary=cached.summary(),
            )

        date_range = query.date_range()
        with AGGREGATION_LATENCY.time():
            buckets = aggregate_buckets(
                self.source.get_events(),
                date_range.start,
                date_range.end,
                query.aggregation_level,
            )
        self._cache_set(key, buckets)
        data = buckets.to_points()

        elapsed = _elapsed_ms(started)
        logger.info(
            "aggregation_computed",
            extra={"cache_key": key, "data_points": len(data), "execution_time_ms": elapsed},
        )
        return AnalyticsResult(
            data=data,
            cached=False,
            execution_time_ms=elapsed,
            cache_key=key,
            summary=buckets.summary(),
        )

    def invalidate(self, partial: Optional[Any] = None) -> int:
        """Evict cached results matching a partial query (all when None)."""
        return self.cache.delete_pattern(pattern(partial))

    def _cache_get(self, key: str) -> Any:
        try:
            return self.cache.get(key)
        except Exception as e:  # noqa: BLE001
            logger.exception("cache_get_failed", extra={"cache_key": key, "error": str(e)})
            return None

    def _cache_set(self, key: str, value: Any) -> None:
        try:
            stored = self.cache.set(key, value)
        except Exception as e:  # noqa: BLE001
            CACHE_WRITE_FAILURES.inc()
            logger.exception("cache_set_failed", extra={"cache_key": key, "error": str(e)})
            return
        if not stored:
            CACHE_WRITE_FAILURES.inc()


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
