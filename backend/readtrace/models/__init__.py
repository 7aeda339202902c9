"""SQLAlchemy models for ReadTrace."""
from readtrace.models.user import User
from readtrace.models.series import UserSeries, SeriesStatus
from readtrace.models.reading_progress import ReadingProgress

__all__ = [
    "User",
    "UserSeries",
    "SeriesStatus",
    "ReadingProgress",
]
