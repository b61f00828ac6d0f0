import fnmatch
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from sales_analytics.core.logger import get_logger
from sales_analytics.core.metrics import CACHE_HITS, CACHE_MISSES
from sales_analytics.domain import round_half_up

logger = get_logger("cache.memory")


@dataclass(frozen=True, slots=True)
class CacheEntry:
    value: Any
    expires_at: float


@dataclass(frozen=True, slots=True)
class CacheStats:
    key_count: int
    hits: int
    misses: int
    hit_rate: float

    def as_dict(self) -> Dict[str, Any]:
        return {
            "keys": self.key_count,
            "hits": self.hits,
            "misses": self.misses,
            "hitRate": self.hit_rate,
        }


class InMemoryCache:
    """Process-local key/value store with per-entry TTL and hit/miss stats.

    Notes:
        - Expiry is checked lazily on every read; ``purge_expired`` only
          reclaims memory and is safe to skip.
        - ``max_keys`` bounds the store. A write that does not fit after
          purging expired entries is rejected and reported as ``False``.
        - A single lock guards entries and counters, so a value and its
          expiry are always read and written together.
    """

    def __init__(
        self,
        default_ttl_seconds: float = 300,
        check_period_seconds: float = 60,
        max_keys: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.default_ttl = default_ttl_seconds
        self.check_period = check_period_seconds
        self.max_keys = max_keys
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        logger.info(
            "cache_initialized",
            extra={"ttl_seconds": default_ttl_seconds, "max_keys": max_keys},
        )

    # Reads
    def get(self, key: str) -> Any:
        with self._lock:
            entry = self._live_entry(key)
            if entry is None:
                self._misses += 1
            else:
                self._hits += 1
        if entry is None:
            CACHE_MISSES.inc()
            logger.debug("cache_miss", extra={"cache_key": key})
            return None
        CACHE_HITS.inc()
        logger.debug("cache_hit", extra={"cache_key": key})
        return entry.value

    def has(self, key: str) -> bool:
        with self._lock:
            return self._live_entry(key) is not None

    def keys(self) -> List[str]:
        with self._lock:
            now = self._clock()
            return [k for k, e in self._entries.items() if e.expires_at > now]

    # Writes
    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> bool:
        ttl = self.default_ttl if ttl is None else ttl
        with self._lock:
            rejected = self._is_full_locked(key)
            if not rejected:
                self._entries[key] = CacheEntry(value, self._clock() + ttl)
        if rejected:
            logger.warning(
                "cache_set_rejected",
                extra={"cache_key": key, "reason": "max_keys", "max_keys": self.max_keys},
            )
            return False
        logger.debug("cache_set", extra={"cache_key": key, "ttl_seconds": ttl})
        return True

    def delete(self, key: str) -> bool:
        with self._lock:
            removed = self._entries.pop(key, None) is not None
        if removed:
            logger.debug("cache_delete", extra={"cache_key": key})
        return removed

    def delete_pattern(self, glob: str) -> int:
        """Remove every key matching a glob such as ``analytics:*:*:daily``."""
        with self._lock:
            doomed = [k for k in self._entries if fnmatch.fnmatchcase(k, glob)]
            for k in doomed:
                del self._entries[k]
        logger.info("cache_delete_pattern", extra={"pattern": glob, "removed": len(doomed)})
        return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
        logger.info("cache_cleared")

    def purge_expired(self) -> int:
        with self._lock:
            removed = self._purge_locked()
        if removed:
            logger.debug("cache_expired_purged", extra={"removed": removed})
        return removed

    # Stats
    def stats(self) -> CacheStats:
        with self._lock:
            hits, misses = self._hits, self._misses
            now = self._clock()
            key_count = sum(1 for e in self._entries.values() if e.expires_at > now)
        total = hits + misses
        hit_rate = round_half_up(hits / total * 100) if total else 0
        return CacheStats(key_count=key_count, hits=hits, misses=misses, hit_rate=hit_rate)

    def info(self, sample_size: int = 10) -> Dict[str, Any]:
        keys = self.keys()
        return {
            **self.stats().as_dict(),
            "cacheKeys": keys[:sample_size],
            "totalKeys": len(keys),
        }

    # Internals
    def _live_entry(self, key: str) -> Optional[CacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at <= self._clock():
            del self._entries[key]
            return None
        return entry

    def _is_full_locked(self, key: str) -> bool:
        if self.max_keys is None or key in self._entries:
            return False
        if len(self._entries) < self.max_keys:
            return False
        self._purge_locked()
        return len(self._entries) >= self.max_keys

    def _purge_locked(self) -> int:
        now = self._clock()
        expired = [k for k, e in self._entries.items() if e.expires_at <= now]
        for k in expired:
            del self._entries[k]
        return len(expired)
