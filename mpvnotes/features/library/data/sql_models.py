from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, Integer, String
from mpvnotes.core.database.base import Base


def utc_now():
    return datetime.now(timezone.utc)


class PlayHistoryModel(Base):
    """
    One row per playback start.
    """
    __tablename__ = "play_history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    path = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False, default="")
    played_at = Column(DateTime(timezone=True), default=utc_now, index=True)
