from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from sales_analytics.domain import AggregatedDataPoint, Granularity


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DateRangeOut(CamelModel):
    start: str
    end: str


class AggregateSummary(CamelModel):
    total_sum: float
    grand_average: float
    max_total: float
    min_total: float
    event_count: int


class ResponseMetadata(CamelModel):
    cached: bool
    execution_time_ms: float
    data_points: int
    date_range: DateRangeOut
    aggregation_level: Granularity
    summary: Optional[AggregateSummary] = None


class AnalyticsResponse(CamelModel):
    success: bool = True
    data: List[AggregatedDataPoint]
    metadata: ResponseMetadata


class ErrorDetail(CamelModel):
    code: str
    message: str
    details: Optional[Any] = None


class ErrorResponse(CamelModel):
    success: bool = False
    error: ErrorDetail
