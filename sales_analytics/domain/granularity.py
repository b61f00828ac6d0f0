from enum import Enum
from typing import Any

from .errors import AnalyticsError, ErrorKind
from .result import Err, Ok, Result


class Granularity(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @classmethod
    def parse(cls, value: Any) -> Result["Granularity"]:
        """Case-insensitive lookup returning Ok(member) or Err(INVALID_GRANULARITY)."""
        if isinstance(value, cls):
            return Ok(value)
        if isinstance(value, str):
            try:
                return Ok(cls(value.strip().lower()))
            except ValueError:
                pass
        allowed = ", ".join(member.value for member in cls)
        return Err(
            AnalyticsError(
                ErrorKind.INVALID_GRANULARITY,
                f"Invalid aggregation level: {value!r}. Must be one of: {allowed}",
                details={"value": repr(value), "allowed": [m.value for m in cls]},
            )
        )
