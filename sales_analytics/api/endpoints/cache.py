from typing import Dict, Optional

from fastapi import APIRouter, Depends

from sales_analytics.api.dependencies import (
    get_analytics_service,
    get_cache,
    get_invalidation_filter,
)
from sales_analytics.cache import InMemoryCache, pattern
from sales_analytics.schemas.responses import ErrorResponse
from sales_analytics.services.analytics_service import AnalyticsService

router = APIRouter(prefix="/cache")


@router.get("/info")
def cache_info(cache: InMemoryCache = Depends(get_cache)):
    return {"success": True, "data": cache.info()}


@router.delete("", responses={400: {"model": ErrorResponse}})
def invalidate_cache(
    partial: Optional[Dict[str, Optional[str]]] = Depends(get_invalidation_filter),
    svc: AnalyticsService = Depends(get_analytics_service),
):
    removed = svc.invalidate(partial)
    return {"success": True, "data": {"pattern": pattern(partial), "removed": removed}}
