"""Reading progress math and display formatting."""
import math
from datetime import datetime, timezone
from typing import Optional, Union


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_progress(current: float, total: Optional[float]) -> int:
    """Percentage of a series read, clamped to 0-100.

    Unknown or non-positive totals yield 0.
    """
    if not total or total <= 0:
        return 0
    pct = _round_half_up((current / total) * 100)
    return min(100, max(0, pct))


def format_progress_percentage(percentage: float) -> str:
    """Render a percentage as ``"NN%"``."""
    clamped = min(100, max(0, _round_half_up(percentage)))
    return f"{clamped}%"


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_chapter_display(current: Optional[float], total: Optional[float]) -> str:
    """Chapter label shown on series cards."""
    if current is None:
        return "--"
    if total is None:
        return f"Ch. {_format_number(current)}"
    return f"Ch. {_format_number(current)} / {_format_number(total)}"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def format_last_read(
    value: Union[str, datetime, None],
    now: Optional[datetime] = None,
) -> str:
    """Human readable "last read" label.

    Relative within the last week, calendar date after that.
    """
    if value is None:
        return "Never"

    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return "Never"

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    seconds = (now - value).total_seconds()
    if seconds < 7 * 24 * 3600:
        if seconds < 60:
            return "just now"
        if seconds < 3600:
            return _plural(int(seconds // 60), "minute")
        if seconds < 24 * 3600:
            return _plural(int(seconds // 3600), "hour")
        return _plural(int(seconds // (24 * 3600)), "day")

    return f"{value.strftime('%b')} {value.day}, {value.year}"
