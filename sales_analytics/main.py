import asyncio
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from sales_analytics import __version__
from sales_analytics.api.errors import register_exception_handlers
from sales_analytics.api.router import api_router
from sales_analytics.cache import InMemoryCache, sweep_loop
from sales_analytics.core.config import settings
from sales_analytics.core.logger import get_logger
from sales_analytics.core.logging_config import configure_logging
from sales_analytics.services.data_generator import MockDataGenerator

configure_logging(
    service=settings.otel_service_name,
    environment=settings.app_environment,
    level=settings.app_log_level,
    redaction_patterns=settings.app_log_redaction_patterns,
)
logger = get_logger("analytics.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("analytics_service_starting", extra={"version": __version__})
    app.state.data_generator = MockDataGenerator(
        size=settings.mock_data_size,
        months=settings.mock_data_months,
        seed=settings.mock_data_seed,
    )
    app.state.cache = InMemoryCache(
        default_ttl_seconds=settings.cache_ttl_seconds,
        check_period_seconds=settings.cache_check_period_seconds,
        max_keys=settings.cache_max_keys,
    )
    app.state.sweeper_task = asyncio.create_task(sweep_loop(app.state.cache))
    try:
        yield
    finally:
        logger.info("analytics_service_stopping")
        app.state.sweeper_task.cancel()
        try:
            await app.state.sweeper_task
        except asyncio.CancelledError:  # expected during shutdown
            logger.debug("sweeper_task_cancelled")


app = FastAPI(title="Sales Analytics API", version=__version__, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_methods=["GET", "DELETE"],
    allow_headers=["*"],
)
register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "request_completed",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
        },
    )
    return response


Instrumentator(
    should_group_status_codes=True,
    should_ignore_untemplated=True,
    excluded_handlers=["/docs", "/openapi.json", "/metrics"],
).instrument(app).expose(app, include_in_schema=False)

app.include_router(api_router)
