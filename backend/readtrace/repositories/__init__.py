"""Typed data access, one repository per table."""
from readtrace.repositories.series import SeriesRepository
from readtrace.repositories.profile import ProfileRepository
from readtrace.repositories.progress import ProgressRepository

__all__ = [
    "SeriesRepository",
    "ProfileRepository",
    "ProgressRepository",
]
