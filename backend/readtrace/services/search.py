"""In-memory search and filtering over a user's series."""
from typing import Optional, List, Dict, Iterable, TypeVar

from readtrace.models.series import SeriesStatus
from readtrace.utils.normalize import normalize_query

S = TypeVar("S")


def _status_value(status) -> str:
    return status.value if isinstance(status, SeriesStatus) else str(status)


def search_series(series: List[S], search_query: Optional[str]) -> List[S]:
    """Case-insensitive substring match on title, platform or any genre."""
    query = normalize_query(search_query or "")
    if not query:
        return series

    def matches(item) -> bool:
        if query in normalize_query(item.title or ""):
            return True
        if query in normalize_query(item.platform or ""):
            return True
        return any(query in normalize_query(genre) for genre in (item.genres or []))

    return [item for item in series if matches(item)]


def filter_by_platforms(series: List[S], platforms: Optional[Iterable[str]]) -> List[S]:
    wanted = set(platforms or [])
    if not wanted:
        return series
    return [item for item in series if item.platform in wanted]


def filter_by_statuses(series: List[S], statuses: Optional[Iterable]) -> List[S]:
    wanted = {_status_value(s) for s in (statuses or [])}
    if not wanted:
        return series
    return [item for item in series if _status_value(item.status) in wanted]


def apply_filters(
    series: List[S],
    search_query: Optional[str] = None,
    platforms: Optional[Iterable[str]] = None,
    statuses: Optional[Iterable] = None,
) -> List[S]:
    """Narrow by text, then platform, then status. Empty criteria pass everything."""
    result = series

    if search_query:
        result = search_series(result, search_query)

    if platforms:
        result = filter_by_platforms(result, platforms)

    if statuses:
        result = filter_by_statuses(result, statuses)

    return result


def group_series_by_status(series: Iterable[S]) -> Dict[str, List[S]]:
    """Dashboard tabs: every status present as a key, unknown statuses dropped."""
    groups: Dict[str, List[S]] = {status.value: [] for status in SeriesStatus}
    for item in series:
        key = _status_value(item.status)
        if key in groups:
            groups[key].append(item)
    return groups
