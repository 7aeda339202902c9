"""Cross-platform reading progress.

Each platform reports its own position in a series. The unified view
promotes the most recently updated platform and lists the others as
alternatives, so the resume resolver can pick between them.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, List, Tuple, Iterable

from readtrace.models.reading_progress import ReadingProgress
from readtrace.repositories.progress import ProgressRepository
from readtrace.repositories.series import SeriesRepository

logger = logging.getLogger(__name__)


class SeriesNotFoundError(Exception):
    """Series does not exist or belongs to another user."""
    def __init__(self, series_id: int):
        self.series_id = series_id
        super().__init__(f"Series {series_id} not found")


@dataclass
class PlatformProgress:
    """One platform's view of a series."""
    platform: str
    current_chapter: float
    updated_at: datetime
    total_chapters: Optional[int] = None
    scroll_position: float = 0
    resume_url: Optional[str] = None

    @classmethod
    def from_record(cls, record: ReadingProgress) -> "PlatformProgress":
        return cls(
            platform=record.platform,
            current_chapter=record.chapter_number,
            total_chapters=record.total_chapters,
            scroll_position=record.scroll_position or 0,
            updated_at=as_utc(record.updated_at),
            resume_url=record.resume_url,
        )


@dataclass
class AlternativeProgress:
    """Progress on a platform other than the most recent one."""
    platform: str
    current_chapter: float
    updated_at: datetime
    resume_url: Optional[str] = None


@dataclass
class UnifiedProgress:
    """Consolidated reading state of a series across platforms."""
    series_id: int
    platform: str
    current_chapter: float
    updated_at: datetime
    total_chapters: Optional[int] = None
    scroll_position: float = 0
    resume_url: Optional[str] = None
    alternatives: List[AlternativeProgress] = field(default_factory=list)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes (SQLite drops tzinfo) as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _is_usable(progress: PlatformProgress) -> bool:
    return bool(progress.platform) and progress.current_chapter is not None and progress.updated_at is not None


def _recency_key(progress: PlatformProgress):
    return (as_utc(progress.updated_at), progress.current_chapter or 0)


def select_most_recent(entries: List[PlatformProgress]) -> Optional[PlatformProgress]:
    """Last write wins; ties go to the higher chapter, then the alphabetically first platform."""
    best = None
    for entry in entries:
        if best is None:
            best = entry
            continue
        if _recency_key(entry) > _recency_key(best):
            best = entry
        elif _recency_key(entry) == _recency_key(best) and entry.platform < best.platform:
            best = entry
    return best


def build_unified_progress(
    series_id: int,
    records: Iterable[PlatformProgress],
) -> Optional[UnifiedProgress]:
    """Fold per-platform progress into one unified record, or None if nothing usable."""
    entries = [r for r in records if _is_usable(r)]
    most_recent = select_most_recent(entries)
    if most_recent is None:
        return None

    others = sorted(
        (e for e in entries if e.platform != most_recent.platform),
        key=_recency_key,
        reverse=True,
    )

    alternatives = []
    seen = set()
    for entry in others:
        if entry.platform in seen:
            continue
        seen.add(entry.platform)
        alternatives.append(
            AlternativeProgress(
                platform=entry.platform,
                current_chapter=entry.current_chapter,
                updated_at=entry.updated_at,
                resume_url=entry.resume_url,
            )
        )

    return UnifiedProgress(
        series_id=series_id,
        platform=most_recent.platform,
        current_chapter=most_recent.current_chapter,
        total_chapters=most_recent.total_chapters,
        scroll_position=most_recent.scroll_position,
        updated_at=most_recent.updated_at,
        resume_url=most_recent.resume_url,
        alternatives=alternatives,
    )


def resolve_conflict(
    incoming: PlatformProgress,
    existing: PlatformProgress,
) -> Tuple[PlatformProgress, bool]:
    """Pick between two reports for the same platform.

    Returns the winner and whether the incoming report won. Equal
    timestamps fall back to the higher chapter; a full tie keeps
    what is stored.
    """
    incoming_ts = as_utc(incoming.updated_at)
    existing_ts = as_utc(existing.updated_at)

    if incoming_ts > existing_ts:
        return incoming, True
    if incoming_ts == existing_ts and (incoming.current_chapter or 0) > (existing.current_chapter or 0):
        return incoming, True
    return existing, False


class ProgressService:
    """Reads and records per-platform progress for a user's series."""

    def __init__(self, progress_repo: ProgressRepository, series_repo: SeriesRepository):
        self.progress_repo = progress_repo
        self.series_repo = series_repo

    def get_unified_progress(self, user_id: int, series_id: int) -> Optional[UnifiedProgress]:
        """Unified progress for a series; raises SeriesNotFoundError for foreign ids."""
        if not self.series_repo.get_for_user(user_id, series_id):
            raise SeriesNotFoundError(series_id)

        records = self.progress_repo.list_for_series(user_id, series_id)
        return build_unified_progress(
            series_id,
            [PlatformProgress.from_record(r) for r in records],
        )

    def record_progress(
        self,
        user_id: int,
        series_id: int,
        platform: str,
        chapter: float,
        updated_at: datetime,
        scroll_position: float = 0,
        total_chapters: Optional[int] = None,
        resume_url: Optional[str] = None,
    ) -> Tuple[PlatformProgress, bool]:
        """Store a progress report unless a newer one is already recorded.

        Returns the stored state and whether the report was applied.
        """
        series = self.series_repo.get_for_user(user_id, series_id)
        if not series:
            raise SeriesNotFoundError(series_id)

        incoming = PlatformProgress(
            platform=platform,
            current_chapter=chapter,
            total_chapters=total_chapters,
            scroll_position=scroll_position,
            updated_at=as_utc(updated_at),
            resume_url=resume_url,
        )

        existing_record = self.progress_repo.get(user_id, series_id, platform)
        if existing_record is not None:
            winner, applied = resolve_conflict(incoming, PlatformProgress.from_record(existing_record))
            if not applied:
                logger.debug(
                    f"Ignoring stale progress for series {series_id} on {platform} "
                    f"(ch {chapter} at {incoming.updated_at.isoformat()})"
                )
                return winner, False

        self.progress_repo.upsert(user_id, series_id, incoming)

        # Keep the series row on the furthest-forward, most recent report
        last_read = as_utc(series.last_read_at)
        if last_read is None or incoming.updated_at >= last_read:
            self.series_repo.update_reading_state(
                series,
                current_chapter=chapter,
                total_chapters=total_chapters,
                last_read_at=incoming.updated_at,
            )

        logger.info(f"Recorded progress for series {series_id} on {platform}: ch {chapter}")
        return incoming, True
