"""Counters and timings for the cache and the aggregator.

Names are checked against Prometheus rules and prefixed with `analytics_`,
so `cache_hits_total` is scraped as `analytics_cache_hits_total` from
`/metrics`.
"""

from __future__ import annotations

import re

from prometheus_client import Counter, Histogram

_NAME_RE = re.compile(r"^[a-z_][a-z0-9_]*$")

SERVICE = "analytics"


def _validate(name: str) -> str:
    if not _NAME_RE.match(name):
        raise ValueError(
            f"Invalid metric name '{name}'. Use snake_case alphanumerics/underscores."
        )
    return name


def _prefix(name: str, service: str | None) -> str:
    if service and not name.startswith(service + "_"):
        return f"{service}_{name}"
    return name


def get_counter(name: str, documentation: str, service: str | None = None) -> Counter:
    return Counter(_validate(_prefix(name, service)), documentation)


def get_histogram(
    name: str,
    documentation: str,
    service: str | None = None,
    buckets: list[float] | None = None,
) -> Histogram:
    full_name = _validate(_prefix(name, service))
    if buckets is None:
        return Histogram(full_name, documentation)
    return Histogram(full_name, documentation, buckets=buckets)


CACHE_HITS = get_counter("cache_hits_total", "Result cache hits", SERVICE)
CACHE_MISSES = get_counter("cache_misses_total", "Result cache misses", SERVICE)
CACHE_WRITE_FAILURES = get_counter(
    "cache_write_failures_total", "Result cache writes rejected or failed", SERVICE
)
AGGREGATION_LATENCY = get_histogram(
    "aggregation_latency_seconds",
    "Time spent aggregating events on a cache miss",
    SERVICE,
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)


__all__ = [
    "get_counter",
    "get_histogram",
    "CACHE_HITS",
    "CACHE_MISSES",
    "CACHE_WRITE_FAILURES",
    "AGGREGATION_LATENCY",
]
