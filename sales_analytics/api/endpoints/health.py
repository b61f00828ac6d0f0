import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from sales_analytics.api.dependencies import get_cache, get_data_generator
from sales_analytics.cache import InMemoryCache
from sales_analytics.services.data_generator import MockDataGenerator

router = APIRouter()
_start_time = time.time()


@router.get("/health")
def health(
    cache: InMemoryCache = Depends(get_cache),
    generator: MockDataGenerator = Depends(get_data_generator),
):
    return {
        "success": True,
        "data": {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": round(time.time() - _start_time, 3),
            "dataGenerator": generator.get_statistics(),
            "cache": cache.stats().as_dict(),
        },
    }


@router.get("/healthz")
def healthz():
    return {"status": "ok"}
