from .keys import CacheKeyParts, decode, encode, normalize, pattern
from .memory import CacheStats, InMemoryCache
from .sweeper import sweep_loop

__all__ = [
    "CacheKeyParts",
    "decode",
    "encode",
    "normalize",
    "pattern",
    "CacheStats",
    "InMemoryCache",
    "sweep_loop",
]
