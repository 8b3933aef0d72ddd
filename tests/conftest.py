"""
Test configuration and fixtures for the QR link shortener.
Every test gets its own in-memory database, so tests are isolated.
"""

import os

# Must be set before the app (and its settings) are imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CACHE_BACKEND", "null")

import pytest
from fastapi.testclient import TestClient

from main import app
from qrlink_app.cache.strategies import NullCache
from qrlink_app.database.connection import Database
from qrlink_app.dependencies import get_cache, get_database
from qrlink_app.services.url_service import URLService


@pytest.fixture(scope="function")
def database():
    """
    Fresh in-memory database behind its own gateway.
    StaticPool keeps the single connection (and so the data) alive.
    """
    db = Database("sqlite://")
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def url_service(database):
    return URLService(database=database, cache=NullCache())


@pytest.fixture(scope="function")
def client(database):
    """
    Test client with the database and cache dependencies overridden.
    This is the main fixture that API tests use.
    """
    app.dependency_overrides[get_database] = lambda: database
    app.dependency_overrides[get_cache] = lambda: NullCache()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
