"""Utility functions."""
from readtrace.utils.normalize import normalize_title, normalize_query
from readtrace.utils.progress import (
    calculate_progress,
    format_progress_percentage,
    format_chapter_display,
    format_last_read,
)

__all__ = [
    "normalize_title",
    "normalize_query",
    "calculate_progress",
    "format_progress_percentage",
    "format_chapter_display",
    "format_last_read",
]
