import pytest
from helpers import FakeClock, StaticEventSource, utc

from sales_analytics.cache import InMemoryCache
from sales_analytics.domain import SalesEvent


@pytest.fixture
def sample_events():
    """Mixed January/February dataset."""
    return [
        SalesEvent("1", utc(2024, 1, 15, 10), 100),
        SalesEvent("2", utc(2024, 1, 15, 14), 150.55),
        SalesEvent("3", utc(2024, 1, 16, 9), 200),
        SalesEvent("4", utc(2024, 1, 22, 12), 300),
        SalesEvent("5", utc(2024, 2, 1, 12), 400),
        SalesEvent("6", utc(2024, 2, 15, 8), 250.333),
    ]


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def cache(fake_clock):
    return InMemoryCache(default_ttl_seconds=60, check_period_seconds=10, clock=fake_clock)


@pytest.fixture
def event_source(sample_events):
    return StaticEventSource(sample_events)
