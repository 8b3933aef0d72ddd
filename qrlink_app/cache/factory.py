"""
Builds the cache strategy named in settings.

One instance per process is enough; ``dependencies.get_cache`` keeps it.
"""

import logging
from enum import Enum

from .strategies import CacheStrategy, RedisCache, InMemoryCache, NullCache
from qrlink_app.config import settings

logger = logging.getLogger(__name__)


class CacheBackend(Enum):
    """Available cache backends"""
    REDIS = "redis"
    MEMORY = "memory"
    NULL = "null"


class CacheFactory:

    @staticmethod
    def _connect_redis(redis_url: str) -> CacheStrategy:
        """Redis if it answers a ping, otherwise a per-process cache"""
        import redis

        try:
            client = redis.from_url(
                redis_url,
                decode_responses=False,
                socket_connect_timeout=2,
                socket_timeout=2,
            )
            client.ping()
        except redis.RedisError as e:
            logger.warning("Redis at %s unavailable (%s), using in-memory cache", redis_url, e)
            return InMemoryCache(max_entries=settings.cache_max_entries)

        logger.info("Lookups cached in Redis at %s", redis_url)
        return RedisCache(client)

    @classmethod
    def create(cls, backend: CacheBackend) -> CacheStrategy:
        """
        Args:
            backend: Which strategy to build

        Returns:
            A new cache for ``backend``
        """
        if backend == CacheBackend.REDIS:
            return cls._connect_redis(settings.redis_url)
        if backend == CacheBackend.MEMORY:
            logger.info("Lookups cached in process memory")
            return InMemoryCache(max_entries=settings.cache_max_entries)
        if backend == CacheBackend.NULL:
            logger.info("Lookup cache disabled")
            return NullCache()
        raise ValueError(f"Unknown cache backend: {backend}")
