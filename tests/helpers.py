from datetime import datetime, timezone


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced monotonic clock for TTL tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class StaticEventSource:
    def __init__(self, events):
        self._events = tuple(events)
        self.calls = 0

    def get_events(self):
        self.calls += 1
        return self._events

    def get_statistics(self):
        return {"count": len(self._events)}
