import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from qrlink_app.cache.strategies import CacheStrategy, url_cache_key
from qrlink_app.config import settings
from qrlink_app.database.connection import Database
from qrlink_app.errors import BadRequest, NotFound
from qrlink_app.models.url import URL
from qrlink_app.schemas.url import MAX_URL_ID, StoredURL

logger = logging.getLogger(__name__)


class URLService:
    """
    Registers, resolves and soft-deletes short links.

    Every storage operation runs inside ``database.session()``, which holds
    the shared connection lock for the whole unit of work. The lock is never
    held across an ``await``: the cache is consulted before or after the
    session, not during it.
    """

    def __init__(
        self,
        database: Database,
        cache: Optional[CacheStrategy] = None
    ):
        """
        Args:
            database: Gateway to the shared connection
            cache: Cache strategy for identifier lookups (optional)
        """
        self.database = database
        self.cache = cache

    # Storage operations (synchronous, lock held for their duration)

    def store_url(self, target_url: str) -> StoredURL:
        """
        Insert a new record and return its storage-assigned identifier.

        The same target may be stored any number of times; each call gets a
        fresh identifier.
        """
        if not target_url:
            raise BadRequest("Parameter 'url' must not be empty")

        with self.database.session() as db:
            url = URL(target_url=target_url)
            db.add(url)
            db.flush()  # Assigns url.id inside the same transaction
            stored = StoredURL.from_record(url.id, url.target_url)

        logger.info("Stored URL %s", stored.stored_id)
        return stored

    def _get_live_url(self, db: Session, url_id: int) -> URL:
        # Ids outside the INTEGER range cannot exist and cannot be bound
        if not 0 < url_id <= MAX_URL_ID:
            raise NotFound(f"No URL stored under id {url_id}")
        url = db.query(URL).filter(
            URL.id == url_id,
            URL.deleted_at.is_(None)
        ).first()
        if url is None:
            raise NotFound(f"No URL stored under id {url_id}")
        return url

    def find_url(self, url_id: int) -> StoredURL:
        """Look up a live (not soft-deleted) record or raise ``NotFound``"""
        with self.database.session() as db:
            url = self._get_live_url(db, url_id)
            return StoredURL.from_record(url.id, url.target_url)

    def mark_deleted(self, url_id: int) -> None:
        """Soft delete: stamp ``deleted_at`` on a live record"""
        with self.database.session() as db:
            url = self._get_live_url(db, url_id)
            url.deleted_at = datetime.now(timezone.utc)

        logger.info("Soft-deleted URL %s", url_id)

    # Request-facing operations

    async def create_short_url(self, target_url: str) -> StoredURL:
        stored = self.store_url(target_url)
        if self.cache:
            await self.cache.set(
                url_cache_key(int(stored.stored_id)), stored.stored_url, ttl=settings.cache_ttl
            )
        return stored

    async def get_target_url(self, url_id: int) -> str:
        """
        Target URL for a redirect, using the cache-aside pattern.

        Raises:
            NotFound: no live record for the identifier
        """
        cache_key = url_cache_key(url_id)
        if self.cache:
            cached_url = await self.cache.get(cache_key)
            if cached_url:
                return cached_url

        target_url = self.find_url(url_id).stored_url

        if self.cache:
            await self.cache.set(cache_key, target_url, ttl=settings.cache_ttl)
        return target_url

    async def get_url_meta(self, url_id: int) -> StoredURL:
        """Stored record as JSON-ready metadata (always read from storage)"""
        return self.find_url(url_id)

    async def get_qr_payload(self, url_id: int) -> str:
        """
        Text to encode in the QR symbol for ``url_id``.

        The identifier is resolved first so a symbol is never produced for
        a missing or deleted record.
        """
        target_url = await self.get_target_url(url_id)
        if settings.qr_encode_short_url:
            return f"{settings.base_url.rstrip('/')}/{url_id}"
        return target_url

    async def delete_url(self, url_id: int) -> None:
        self.mark_deleted(url_id)
        if self.cache:
            await self.cache.delete(url_cache_key(url_id))
