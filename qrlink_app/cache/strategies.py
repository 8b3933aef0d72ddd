"""
Cache strategies using Strategy Pattern.
Allows switching between different cache backends (Redis, In-Memory, Null)
for identifier -> target URL lookups.

The cache is best-effort: backend errors are logged and reported as a miss
(or a failed write), never raised to the caller.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)


def url_cache_key(url_id: int) -> str:
    return f"url:{url_id}"


class CacheStrategy(ABC):
    """
    Abstract base class for cache strategies.
    
    All methods are async because cache operations may involve network I/O.
    """
    
    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Get value from cache.
        
        Returns:
            Cached value or None if missing/expired
        """
        pass
    
    @abstractmethod
    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        """
        Store value with a TTL in seconds.
        
        Returns:
            True if stored, False otherwise
        """
        pass
    
    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove key; True if it was present"""
        pass


class RedisCache(CacheStrategy):
    """
    Redis cache, shared between every process serving the same database.
    """
    
    def __init__(self, redis_client):
        """
        Args:
            redis_client: Redis client instance (redis.Redis)
        """
        self.redis = redis_client
    
    async def get(self, key: str) -> Optional[str]:
        try:
            value = self.redis.get(key)
            return value.decode("utf-8") if value else None
        except Exception as e:
            logger.warning("Redis get failed for %s: %s", key, e)
            return None
    
    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        try:
            return bool(self.redis.setex(key, ttl, value))
        except Exception as e:
            logger.warning("Redis set failed for %s: %s", key, e)
            return False
    
    async def delete(self, key: str) -> bool:
        try:
            return bool(self.redis.delete(key))
        except Exception as e:
            logger.warning("Redis delete failed for %s: %s", key, e)
            return False


class InMemoryCache(CacheStrategy):
    """
    Per-process dictionary cache with TTL expiry and a size cap.

    Expired entries are dropped when read, and all of them are swept when
    the cache is full. If it is still full after the sweep, the oldest
    entry is evicted.
    """
    
    def __init__(self, max_entries: int = 10000, clock=time.monotonic):
        self._cache: Dict[str, Tuple[str, float]] = {}
        self.max_entries = max_entries
        self._clock = clock
    
    async def get(self, key: str) -> Optional[str]:
        entry = self._cache.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._cache[key]
            return None
        return value
    
    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        # Re-inserting moves the key to the end of the eviction order
        self._cache.pop(key, None)
        if len(self._cache) >= self.max_entries:
            self._sweep()
        while self._cache and len(self._cache) >= self.max_entries:
            del self._cache[next(iter(self._cache))]
        self._cache[key] = (value, self._clock() + ttl)
        return True
    
    async def delete(self, key: str) -> bool:
        return self._cache.pop(key, None) is not None

    def _sweep(self) -> None:
        now = self._clock()
        expired = [key for key, (_, expires_at) in self._cache.items() if now >= expires_at]
        for key in expired:
            del self._cache[key]

    def __len__(self) -> int:
        return len(self._cache)


class NullCache(CacheStrategy):
    """
    Null Object Pattern - cache that does nothing.

    Default backend: every lookup reaches the database, so rows edited
    directly in storage are seen immediately.
    """
    
    async def get(self, key: str) -> Optional[str]:
        return None
    
    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        return True
    
    async def delete(self, key: str) -> bool:
        return False
