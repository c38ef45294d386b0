"""
Memory Cache - In-memory TTL cache for gateway reads
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import structlog

from cryptocloud.domain.interfaces import ICacheService

logger = structlog.get_logger(__name__)


@dataclass
class CacheItem:
    """Cache item with expiration"""
    value: Any
    expires_at: float


class MemoryCache(ICacheService):
    """Expiring in-memory map; expired items are dropped lazily on read"""

    DEFAULT_TTL = 300.0

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._cache: Dict[str, CacheItem] = {}
        self._clock = clock
        self._stats = {
            "hits": 0,
            "misses": 0,
            "sets": 0,
            "deletes": 0,
        }

    async def get(self, key: str) -> Optional[Any]:
        """Get value from cache"""
        item = self._cache.get(key)

        if item is None:
            self._stats["misses"] += 1
            logger.debug("Cache miss", key=key)
            return None

        if self._clock() > item.expires_at:
            del self._cache[key]
            self._stats["misses"] += 1
            logger.debug("Cache expired", key=key)
            return None

        self._stats["hits"] += 1
        logger.debug("Cache hit", key=key)
        return item.value

    async def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """Set value in cache with TTL in seconds"""
        ttl = self.DEFAULT_TTL if ttl is None else ttl
        self._cache[key] = CacheItem(value=value, expires_at=self._clock() + ttl)
        self._stats["sets"] += 1
        logger.debug("Cache set", key=key, ttl=ttl)

    async def delete(self, key: str) -> None:
        """Delete key from cache"""
        if self._cache.pop(key, None) is not None:
            self._stats["deletes"] += 1
            logger.debug("Cache delete", key=key)

    async def clear(self) -> None:
        count = len(self._cache)
        self._cache.clear()
        logger.debug("Cache cleared", count=count)

    def cleanup(self) -> int:
        """Drop expired items, returning how many were removed"""
        now = self._clock()
        expired_keys = [key for key, item in self._cache.items() if now > item.expires_at]
        for key in expired_keys:
            del self._cache[key]

        if expired_keys:
            logger.debug("Cache cleanup", expired_count=len(expired_keys))
        return len(expired_keys)

    def size(self) -> int:
        return len(self._cache)

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics"""
        return {
            **self._stats,
            "cache_size": len(self._cache),
            "hit_rate": self._stats["hits"] / max(1, self._stats["hits"] + self._stats["misses"])
        }


class CacheKeys:
    """Cache keys and TTLs (seconds) for cached gateway reads"""

    INVOICE_TTL = 300.0
    BALANCE_TTL = 60.0
    STATISTICS_TTL = 300.0

    @staticmethod
    def invoice(invoice_id: str) -> str:
        return f"invoice:{invoice_id}"

    @staticmethod
    def balance() -> str:
        return "balance:all"

    @staticmethod
    def statistics(start_date: str, end_date: str) -> str:
        return f"statistics:{start_date}:{end_date}"
