from fastapi import APIRouter

from .endpoints import analytics, cache, health

api_router = APIRouter(prefix="/api")
api_router.include_router(health.router)
api_router.include_router(analytics.router)
api_router.include_router(cache.router)
