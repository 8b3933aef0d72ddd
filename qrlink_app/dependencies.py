"""
FastAPI dependencies for dependency injection.

The database gateway, cache and QR renderer are process-wide singletons;
services are built per request on top of them. Tests swap the singletons
through ``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends

from qrlink_app.cache.factory import CacheFactory, CacheBackend
from qrlink_app.cache.strategies import CacheStrategy
from qrlink_app.config import settings
from qrlink_app.database.connection import Database
from qrlink_app.services.qr_renderer import QRRenderer, create_renderer
from qrlink_app.services.url_service import URLService


@lru_cache()
def get_database() -> Database:
    """
    Get the gateway to the single shared connection (singleton).

    Creating it also creates the tables if they are missing.
    """
    return Database(settings.database_url, lock_timeout=settings.lock_timeout)


@lru_cache()
def get_cache() -> CacheStrategy:
    """Get cache instance (singleton) for the configured backend"""
    backend = CacheBackend(settings.cache_backend)
    return CacheFactory.create(backend)


@lru_cache()
def get_qr_renderer() -> QRRenderer:
    return create_renderer()


def get_url_service(
    database: Database = Depends(get_database),
    cache: CacheStrategy = Depends(get_cache)
) -> URLService:
    """Get URLService with its gateway and cache injected"""
    return URLService(database=database, cache=cache)
