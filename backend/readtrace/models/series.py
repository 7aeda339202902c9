"""Tracked series model."""
from enum import Enum
from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from readtrace.database import Base


class SeriesStatus(str, Enum):
    """Reading status of a tracked series."""
    READING = "reading"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"
    PLAN_TO_READ = "plan_to_read"


class UserSeries(Base):
    """A series in a user's library.

    One row per (user, normalized title); imports that collide on this
    key are rejected by the database and reported as skipped.
    """

    __tablename__ = "user_series"
    __table_args__ = (
        UniqueConstraint("user_id", "normalized_title", name="uq_user_series_title"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    normalized_title = Column(String(200), nullable=False, index=True)
    platform = Column(String(50), nullable=False, default="other", index=True)
    source_url = Column(String(1000))
    import_id = Column(String(32), index=True)
    status = Column(String(20), nullable=False, default=SeriesStatus.READING.value, index=True)
    current_chapter = Column(Float, nullable=False, default=0)
    total_chapters = Column(Integer)
    cover_url = Column(String(1000))
    genres = Column(JSON, nullable=False, default=list)
    last_read_at = Column(DateTime(timezone=True), index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="series")
    progress = relationship("ReadingProgress", back_populates="series", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<UserSeries {self.title}>"
