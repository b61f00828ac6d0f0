"""Deterministic cache keys for analytics queries.

Format: ``analytics:{start}:{end}:{granularity}``. Dates lose any time
suffix and the granularity is lowercased, so semantically identical
queries always share one key.
"""

from typing import Any, Mapping, NamedTuple, Optional

KEY_PREFIX = "analytics"
SEGMENT_SEPARATOR = ":"
WILDCARD = "*"

_FIELD_ALIASES = {
    "start_date": ("startDate", "start_date", "start"),
    "end_date": ("endDate", "end_date", "end"),
    "aggregation_level": ("aggregationLevel", "aggregation_level", "granularity"),
}


class CacheKeyParts(NamedTuple):
    start_date: str
    end_date: str
    aggregation_level: str


def normalize_date(value: Any) -> str:
    """Keep the YYYY-MM-DD portion of a date or datetime string."""
    text = value.isoformat() if hasattr(value, "isoformat") else str(value)
    return text.split("T", 1)[0]


def normalize_level(value: Any) -> str:
    return str(getattr(value, "value", value)).lower()


def _field(query: Any, name: str) -> Any:
    aliases = _FIELD_ALIASES[name]
    if isinstance(query, Mapping):
        for alias in aliases:
            if query.get(alias) is not None:
                return query[alias]
        return None
    for alias in aliases:
        value = getattr(query, alias, None)
        if value is not None:
            return value
    return None


def normalize(query: Any) -> CacheKeyParts:
    start, end, level = (_field(query, name) for name in _FIELD_ALIASES)
    if start is None or end is None or level is None:
        raise ValueError("Query needs start date, end date and aggregation level")
    return CacheKeyParts(normalize_date(start), normalize_date(end), normalize_level(level))


def encode(query: Any) -> str:
    """Build the cache key for a query object or mapping."""
    parts = normalize(query)
    return SEGMENT_SEPARATOR.join((KEY_PREFIX, *parts))


def decode(key: str) -> Optional[CacheKeyParts]:
    """Split a key back into its parts; None unless it is a well-formed key."""
    segments = key.split(SEGMENT_SEPARATOR)
    if len(segments) != 4 or segments[0] != KEY_PREFIX:
        return None
    return CacheKeyParts(*segments[1:])


def pattern(partial: Any = None) -> str:
    """Glob pattern for bulk invalidation; missing fields become ``*``."""
    if partial is None:
        return f"{KEY_PREFIX}{SEGMENT_SEPARATOR}{WILDCARD}"
    start, end, level = (_field(partial, name) for name in _FIELD_ALIASES)
    return SEGMENT_SEPARATOR.join(
        (
            KEY_PREFIX,
            normalize_date(start) if start else WILDCARD,
            normalize_date(end) if end else WILDCARD,
            normalize_level(level) if level else WILDCARD,
        )
    )
