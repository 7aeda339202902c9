"""Per-platform reading progress model."""
from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from readtrace.database import Base


class ReadingProgress(Base):
    """Latest known position in a series on one platform."""

    __tablename__ = "reading_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "series_id", "platform", name="uq_reading_progress_platform"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    series_id = Column(Integer, ForeignKey("user_series.id", ondelete="CASCADE"), nullable=False, index=True)
    platform = Column(String(50), nullable=False)
    chapter_number = Column(Float, nullable=False)
    total_chapters = Column(Integer)
    scroll_position = Column(Float, nullable=False, default=0)  # unit defined by the reporting source
    resume_url = Column(String(1000))
    updated_at = Column(DateTime(timezone=True), nullable=False)

    series = relationship("UserSeries", back_populates="progress")

    def __repr__(self):
        return f"<ReadingProgress series={self.series_id} {self.platform} ch={self.chapter_number}>"
