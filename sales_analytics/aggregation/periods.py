from datetime import date, datetime, timedelta

from sales_analytics.domain import Granularity, as_utc, unwrap

DAY_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"


def resolve_granularity(granularity: Granularity | str) -> Granularity:
    """Coerce to Granularity, raising AnalyticsError(INVALID_GRANULARITY)."""
    return unwrap(Granularity.parse(granularity))


def period_start(day: date, granularity: Granularity | str) -> date:
    """First calendar day of the bucket containing ``day``."""
    g = resolve_granularity(granularity)
    if g is Granularity.DAILY:
        return day
    if g is Granularity.WEEKLY:
        # ISO weeks start on Monday (weekday() == 0)
        return day - timedelta(days=day.weekday())
    return day.replace(day=1)


def period_key(timestamp: datetime, granularity: Granularity | str) -> str:
    """Canonical bucket key: YYYY-MM-DD for day/week, YYYY-MM for month."""
    g = resolve_granularity(granularity)
    start = period_start(as_utc(timestamp).date(), g)
    if g is Granularity.MONTHLY:
        return start.strftime(MONTH_FORMAT)
    return start.strftime(DAY_FORMAT)


def is_same_period(a: datetime, b: datetime, granularity: Granularity | str) -> bool:
    """True when both timestamps fall into the same bucket."""
    g = resolve_granularity(granularity)
    return period_key(a, g) == period_key(b, g)
