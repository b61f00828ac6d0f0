from fastapi import APIRouter, Depends

from sales_analytics.api.dependencies import get_analytics_query, get_analytics_service
from sales_analytics.schemas.query import AnalyticsQuery
from sales_analytics.schemas.responses import (
    AggregateSummary,
    AnalyticsResponse,
    DateRangeOut,
    ErrorResponse,
    ResponseMetadata,
)
from sales_analytics.services.analytics_service import AnalyticsService

router = APIRouter()


@router.get(
    "/data",
    response_model=AnalyticsResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Aggregated sales totals",
)
def get_data(
    query: AnalyticsQuery = Depends(get_analytics_query),
    svc: AnalyticsService = Depends(get_analytics_service),
):
    result = svc.get_aggregated(query)
    return AnalyticsResponse(
        data=result.data,
        metadata=ResponseMetadata(
            cached=result.cached,
            execution_time_ms=result.execution_time_ms,
            data_points=len(result.data),
            date_range=DateRangeOut(
                start=query.start_date.isoformat(), end=query.end_date.isoformat()
            ),
            aggregation_level=query.aggregation_level,
            summary=AggregateSummary(**result.summary) if result.summary else None,
        ),
    )
