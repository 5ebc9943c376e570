"""
ResponseCache - Process-lifetime cache of successful catalog responses.

Features:
- One entry per key, keys namespaced as "<namespace>:<argument>"
- No TTL and no eviction; entries live until invalidated or process exit
- Explicit invalidation that reports whether anything was removed
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from loguru import logger

SEARCH = "search"
INFO = "info"


def cache_key(namespace: str, argument: Any) -> str:
    """Build a namespaced cache key, e.g. cache_key("info", 42) -> "info:42"."""
    return f"{namespace}:{argument}"


@dataclass
class CacheEntry:
    """A single cached response payload."""

    key: str
    data: Any
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass
class CacheStats:
    """Cache statistics."""

    hits: int = 0
    misses: int = 0
    invalidations: int = 0
    size: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return self.hits / total

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "invalidations": self.invalidations,
            "size": self.size,
            "hit_rate": f"{self.hit_rate:.2%}",
        }


class ResponseCache:
    """
    Key/value store for the last successful payload per query.

    Access is sequential (one interactive command at a time), so there is no lock.

    Usage:
        cache = ResponseCache()

        key = cache_key(SEARCH, "fiction")
        data = cache.get(key)
        if data is None:
            data = await fetch()
            cache.set(key, data)

        cache.invalidate(key)  # True if an entry was removed
    """

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._stats = CacheStats()

    def get(self, key: str, default: Any = None) -> Any:
        """Return the cached payload for key, or default on a miss."""
        entry = self._entries.get(key)
        if entry is None:
            self._stats.misses += 1
            logger.debug(f"[ResponseCache] MISS: {key}")
            return default

        self._stats.hits += 1
        logger.debug(f"[ResponseCache] HIT: {key}")
        return entry.data

    def set(self, key: str, data: Any) -> None:
        """Insert or overwrite the entry for key."""
        self._entries[key] = CacheEntry(key=key, data=data)
        logger.debug(f"[ResponseCache] SET: {key}")

    def invalidate(self, key: str) -> bool:
        """Remove the entry for key. Returns False if there was none."""
        if self._entries.pop(key, None) is None:
            logger.info(f"Cache had no entry for \"{key}\"")
            return False

        self._stats.invalidations += 1
        logger.info(f"Cache cleared successfully for \"{key}\"")
        return True

    def clear(self) -> None:
        """Clear all cache entries."""
        count = len(self._entries)
        self._entries.clear()
        logger.debug(f"[ResponseCache] CLEAR: {count} entries removed")

    def get_stats(self) -> CacheStats:
        """Get cache statistics."""
        self._stats.size = len(self._entries)
        return self._stats

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
