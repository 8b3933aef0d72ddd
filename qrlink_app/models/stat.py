from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from qrlink_app.database.connection import Base


class ClickStat(Base):
    """One click on a short link. Rows go away with their parent URL."""
    __tablename__ = "stats"

    id = Column(Integer, primary_key=True, autoincrement=True)
    url_id = Column(Integer, ForeignKey("urls.id", ondelete="CASCADE"), nullable=False, index=True)
    ip_addr = Column(String, nullable=False)
    clicked_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    url = relationship("URL", back_populates="stats")
