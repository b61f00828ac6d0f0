from .aggregator import aggregate, aggregate_buckets, round_half_up
from .periods import is_same_period, period_key, period_start

__all__ = [
    "aggregate",
    "aggregate_buckets",
    "round_half_up",
    "period_key",
    "period_start",
    "is_same_period",
]
