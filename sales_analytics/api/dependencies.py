from datetime import date
from typing import Dict, Optional

from fastapi import Depends, Query, Request

from sales_analytics.cache import InMemoryCache
from sales_analytics.core.config import settings
from sales_analytics.domain import AnalyticsError, DateRange, ErrorKind, Err, Granularity, Ok
from sales_analytics.schemas.query import DATE_RE, AnalyticsQuery
from sales_analytics.services.analytics_service import AnalyticsService
from sales_analytics.services.data_generator import MockDataGenerator


def get_cache(request: Request) -> InMemoryCache:
    return request.app.state.cache  # type: ignore[return-value]


def get_data_generator(request: Request) -> MockDataGenerator:
    return request.app.state.data_generator  # type: ignore[return-value]


def get_analytics_service(
    cache: InMemoryCache = Depends(get_cache),
    generator: MockDataGenerator = Depends(get_data_generator),
) -> AnalyticsService:
    return AnalyticsService(cache, generator)


def get_analytics_query(
    start_date: str = Query(..., alias="startDate"),
    end_date: str = Query(..., alias="endDate"),
    aggregation_level: str = Query(..., alias="aggregationLevel"),
) -> AnalyticsQuery:
    """Parse the query string and enforce the date range rules."""
    query = AnalyticsQuery.model_validate(
        {
            "startDate": start_date,
            "endDate": end_date,
            "aggregationLevel": aggregation_level,
        }
    )
    start, end = query.bounds()
    match DateRange.create(
        start,
        end,
        max_days=settings.max_range_days,
        max_lookback_years=settings.max_lookback_years,
    ):
        case Ok():
            return query
        case Err(error=error):
            field = (error.details or {}).get("field", "query")
            raise AnalyticsError(
                ErrorKind.VALIDATION,
                "Invalid query parameters",
                details=[{"field": field, "message": error.message}],
            )


def get_invalidation_filter(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    aggregation_level: Optional[str] = Query(None, alias="aggregationLevel"),
) -> Optional[Dict[str, Optional[str]]]:
    """Partial cache-key query for DELETE /api/cache; None evicts everything.

    Values end up inside a glob pattern, so each one must be a real date or
    a known aggregation level.
    """
    details = []
    for field, value in (("startDate", start_date), ("endDate", end_date)):
        if value and not _is_calendar_date(value):
            details.append({"field": field, "message": "Date must be in YYYY-MM-DD format"})
    level = None
    if aggregation_level:
        match Granularity.parse(aggregation_level):
            case Ok(value=granularity):
                level = granularity.value
            case Err(error=error):
                details.append({"field": "aggregationLevel", "message": error.message})
    if details:
        raise AnalyticsError(ErrorKind.VALIDATION, "Invalid cache filter", details=details)

    partial = {"startDate": start_date, "endDate": end_date, "aggregationLevel": level}
    if not any(partial.values()):
        return None
    return partial


def _is_calendar_date(value: str) -> bool:
    if not DATE_RE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True
