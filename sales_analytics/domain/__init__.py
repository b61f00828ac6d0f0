from .aggregates import AggregatedData, AggregatedDataCollection
from .errors import AnalyticsError, ErrorKind
from .granularity import Granularity
from .models import AggregatedDataPoint, DateRange, SalesEvent, as_utc, round_half_up, utc_now
from .result import Err, Ok, Result, unwrap

__all__ = [
    "AnalyticsError",
    "ErrorKind",
    "Granularity",
    "AggregatedData",
    "AggregatedDataCollection",
    "AggregatedDataPoint",
    "DateRange",
    "SalesEvent",
    "as_utc",
    "round_half_up",
    "utc_now",
    "Err",
    "Ok",
    "Result",
    "unwrap",
]
