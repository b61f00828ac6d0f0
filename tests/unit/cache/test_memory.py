import threading

from sales_analytics.cache import InMemoryCache


class TestGetSet:
    def test_miss_then_hit(self, cache):
        assert cache.get("k") is None
        cache.set("k", [1, 2])
        assert cache.get("k") == [1, 2]
        stats = cache.stats()
        assert (stats.hits, stats.misses) == (1, 1)

    def test_overwrite(self, cache):
        cache.set("k", "old")
        cache.set("k", "new")
        assert cache.get("k") == "new"
        assert cache.stats().key_count == 1

    def test_has_does_not_touch_counters(self, cache):
        cache.set("k", 1)
        assert cache.has("k")
        assert not cache.has("missing")
        stats = cache.stats()
        assert (stats.hits, stats.misses) == (0, 0)


class TestExpiry:
    def test_default_ttl(self, cache, fake_clock):
        cache.set("k", 1)
        fake_clock.advance(59)
        assert cache.get("k") == 1
        fake_clock.advance(1)
        assert cache.get("k") is None
        assert not cache.has("k")

    def test_custom_ttl(self, cache, fake_clock):
        cache.set("short", 1, ttl=5)
        cache.set("long", 2)
        fake_clock.advance(6)
        assert cache.get("short") is None
        assert cache.get("long") == 2

    def test_lazy_expiry_without_sweep(self, cache, fake_clock):
        cache.set("k", 1, ttl=1)
        fake_clock.advance(2)
        # nothing purged yet, but reads must already treat it as absent
        assert cache.keys() == []
        assert cache.get("k") is None

    def test_purge_expired(self, cache, fake_clock):
        cache.set("a", 1, ttl=1)
        cache.set("b", 2, ttl=100)
        fake_clock.advance(2)
        assert cache.purge_expired() == 1
        assert cache.keys() == ["b"]


class TestEviction:
    def test_delete(self, cache):
        cache.set("k", 1)
        assert cache.delete("k") is True
        assert cache.delete("k") is False
        assert cache.get("k") is None

    def test_delete_pattern(self, cache):
        cache.set("analytics:2024-01-01:2024-01-31:daily", 1)
        cache.set("analytics:2024-01-01:2024-01-31:weekly", 2)
        cache.set("analytics:2024-02-01:2024-02-28:daily", 3)
        assert cache.delete_pattern("analytics:*:*:daily") == 2
        assert cache.keys() == ["analytics:2024-01-01:2024-01-31:weekly"]

    def test_clear_resets_counters(self, cache):
        cache.set("k", 1)
        cache.get("k")
        cache.get("nope")
        cache.clear()
        stats = cache.stats()
        assert (stats.key_count, stats.hits, stats.misses, stats.hit_rate) == (0, 0, 0, 0)


class TestCapacity:
    def test_rejects_when_full(self, fake_clock):
        cache = InMemoryCache(default_ttl_seconds=60, max_keys=2, clock=fake_clock)
        assert cache.set("a", 1)
        assert cache.set("b", 2)
        assert cache.set("c", 3) is False
        assert cache.get("c") is None
        # overwriting an existing key is always allowed
        assert cache.set("a", 10)
        assert cache.get("a") == 10

    def test_expired_entries_make_room(self, fake_clock):
        cache = InMemoryCache(default_ttl_seconds=60, max_keys=1, clock=fake_clock)
        cache.set("a", 1, ttl=1)
        fake_clock.advance(2)
        assert cache.set("b", 2)


class TestStats:
    def test_hit_rate_no_lookups(self, cache):
        assert cache.stats().hit_rate == 0

    def test_hit_rate_rounded(self, cache):
        cache.set("k", 1)
        cache.get("k")
        cache.get("x")
        cache.get("y")
        assert cache.stats().hit_rate == 33.33

    def test_hit_rate_rounds_half_up(self, cache):
        # 1 / 32 = 3.125%, which round() would take to 3.12
        cache.set("k", 1)
        cache.get("k")
        for i in range(31):
            cache.get(f"missing-{i}")
        stats = cache.stats()
        assert (stats.hits, stats.misses) == (1, 31)
        assert stats.hit_rate == 3.13

    def test_info_lists_keys(self, cache):
        for i in range(12):
            cache.set(f"k{i}", i)
        info = cache.info()
        assert info["totalKeys"] == 12
        assert len(info["cacheKeys"]) == 10
        assert info["keys"] == 12


def test_concurrent_counters_are_not_lost():
    cache = InMemoryCache(default_ttl_seconds=60)
    cache.set("k", 1)

    def worker():
        for _ in range(500):
            cache.get("k")
            cache.get("missing")

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    stats = cache.stats()
    assert stats.hits == 4000
    assert stats.misses == 4000
