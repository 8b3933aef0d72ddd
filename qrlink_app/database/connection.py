"""
Persistence gateway around the single shared SQLite connection.

The engine uses ``StaticPool`` so every session in the process talks to the
same DBAPI connection. Access is serialized by one lock: a session is only
handed out while the lock is held, and the lock is released on every exit
path. A failed operation rolls back its transaction before releasing, so a
crash in one request never leaves the connection unusable for the next.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from qrlink_app.errors import LockFailure, StorageFailure

logger = logging.getLogger(__name__)

# Base class for models
Base = declarative_base()


def _set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Owns the engine, the session factory and the connection lock.

    Usage:
        with database.session() as db:
            db.add(URL(target_url="https://example.com"))
    """

    def __init__(self, database_url: str, lock_timeout: float = -1):
        """
        Args:
            database_url: SQLAlchemy URL of the SQLite database
            lock_timeout: Seconds to wait for the lock, negative waits forever
        """
        self.database_url = database_url
        self.lock_timeout = lock_timeout
        self._lock = threading.Lock()

        self.engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        event.listen(self.engine, "connect", _set_sqlite_pragma)
        self._session_factory = sessionmaker(
            bind=self.engine, autocommit=False, autoflush=False, expire_on_commit=False
        )
        self.create_tables()

    def create_tables(self) -> None:
        """Create ``urls`` and ``stats`` if they don't exist"""
        # Import models so they are registered with Base
        from qrlink_app import models  # noqa: F401

        with self._locked():
            try:
                Base.metadata.create_all(bind=self.engine)
            except SQLAlchemyError as e:
                raise StorageFailure(f"Database error: {e}") from e
        logger.info("Database ready at %s", self.database_url)

    @contextmanager
    def _locked(self) -> Iterator[None]:
        if not self._lock.acquire(timeout=self.lock_timeout):
            logger.warning("Timed out after %ss waiting for the database lock", self.lock_timeout)
            raise LockFailure("Lock acquisition failed: database connection is busy")
        try:
            yield
        finally:
            self._lock.release()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """
        Run one unit of work with exclusive access to the connection.

        Commits when the block exits normally, rolls back otherwise.
        SQLAlchemy errors are re-raised as ``StorageFailure``; anything
        else propagates unchanged.
        """
        with self._locked():
            db = self._session_factory()
            try:
                yield db
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                logger.error("Storage operation failed: %s", e)
                raise StorageFailure(f"Database error: {e}") from e
            except BaseException:
                db.rollback()
                raise
            finally:
                db.close()

    def close(self) -> None:
        """Dispose the engine and its connection"""
        self.engine.dispose()
