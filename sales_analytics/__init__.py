"""Sales analytics service: calendar aggregation behind an in-memory cache."""

__version__ = "0.1.0"
