from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from qrlink_app.database.connection import Base


class URL(Base):
    """
    A stored short link.

    The auto-increment ``id`` is the public identifier (``/{id}``).
    AUTOINCREMENT keeps SQLite from handing out an id twice, even after the
    highest row is removed.

    ``deleted_at`` implements soft delete: rows with a value are invisible
    to every lookup.
    """
    __tablename__ = "urls"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    target_url = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    deleted_at = Column(DateTime(timezone=True), nullable=True, default=None)

    stats = relationship(
        "ClickStat",
        back_populates="url",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
