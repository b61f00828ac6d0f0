import asyncio
from typing import Optional

from sales_analytics.core.logger import get_logger

from .memory import InMemoryCache

logger = get_logger("cache.sweeper")


async def sweep_loop(cache: InMemoryCache, interval_seconds: Optional[float] = None):
    """Periodically reclaim expired entries until cancelled.

    Runs every ``cache.check_period`` seconds unless an interval is given.
    """
    interval = cache.check_period if interval_seconds is None else interval_seconds
    logger.info("cache_sweeper_started", extra={"interval_seconds": interval})
    while True:
        await asyncio.sleep(interval)
        try:
            removed = cache.purge_expired()
        except Exception as e:  # noqa: BLE001
            logger.exception("cache_sweep_failed", extra={"error": str(e)})
            continue
        if removed:
            logger.info("cache_sweep", extra={"removed": removed})
