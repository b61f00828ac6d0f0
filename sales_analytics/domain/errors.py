from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    INVALID_GRANULARITY = "invalid_granularity"
    INVALID_DATE_RANGE = "invalid_date_range"
    INVALID_EVENT = "invalid_event"
    INVALID_AGGREGATE = "invalid_aggregate"
    VALIDATION = "validation"


class AnalyticsError(Exception):
    """Single tagged error type for the analytics domain.

    Callers distinguish categories by ``kind`` rather than by subclass:

        match err.kind:
            case ErrorKind.INVALID_GRANULARITY: ...
    """

    def __init__(self, kind: ErrorKind, message: str, details: Any = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details

    def __repr__(self) -> str:
        return f"AnalyticsError(kind={self.kind.value!r}, message={self.message!r})"
