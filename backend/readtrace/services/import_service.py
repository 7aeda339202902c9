"""Library import: CSV and browser-history parsing, validation and deduplication.

Imports are two-step. ``build_import_job`` turns raw rows into a reviewable
job without touching the database; the client then confirms a subset and
``ImportService.confirm`` persists it. Rows never abort a job: malformed
rows become ``error`` entries and repeated titles become ``duplicate``
entries, both reported back for review.
"""
import csv
import io
import logging
import math
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, List, Any, Iterable

from sqlalchemy.exc import IntegrityError

from readtrace.repositories.series import SeriesRepository
from readtrace.services.platforms import detect_platform, normalize_platform
from readtrace.services.url_extractor import extract_series_from_url, MAX_TITLE_LENGTH
from readtrace.utils.normalize import normalize_title

logger = logging.getLogger(__name__)

# Fixed CSV header contract
CSV_COLUMNS = {
    "title": "Series Title",
    "chapter": "Chapter Number",
    "url": "URL",
    "platform": "Platform",
    "last_read_date": "Last Read Date",
}

FALLBACK_DATE_FORMATS = [
    "%m/%d/%Y",
    "%Y/%m/%d",
    "%b %d, %Y",
    "%d %b %Y",
    "%B %d, %Y",
]

UNKNOWN_PLATFORM = "other"


class EntryStatus(str, Enum):
    """Review status of an import entry."""
    OK = "ok"
    DUPLICATE = "duplicate"
    ERROR = "error"


class ImportSource(str, Enum):
    CSV = "csv"
    BROWSER_HISTORY = "browser_history"


@dataclass
class BrowserHistoryItem:
    """A visited page exported from the browser."""
    url: str
    title: Optional[str] = None
    visit_time: Optional[float] = None  # epoch milliseconds


@dataclass
class RawImportEntry:
    """A row as extracted from the source, before validation."""
    title: Optional[str] = None
    chapter: Any = None
    url: Optional[str] = None
    platform: Optional[str] = None
    last_read_date: Optional[str] = None


@dataclass
class ImportEntry:
    """A validated row shown in the import review."""
    id: str
    title: str
    normalized_title: str
    platform: str
    chapter: Optional[float] = None
    url: Optional[str] = None
    last_read_date: Optional[datetime] = None
    status: EntryStatus = EntryStatus.OK
    is_duplicate: bool = False
    selected: bool = True
    errors: List[str] = field(default_factory=list)


@dataclass
class ImportJob:
    """One import attempt awaiting user review."""
    import_id: str
    user_id: int
    source: ImportSource
    entries: List[ImportEntry]
    total_items: int
    error_items: int
    skipped_items: int
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def valid_items(self) -> int:
        return sum(1 for e in self.entries if e.status is not EntryStatus.ERROR)


@dataclass
class ImportResult:
    """Outcome of confirming an import."""
    import_id: Optional[str]
    imported_count: int = 0
    skipped_count: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.errors)


def _new_id() -> str:
    return uuid.uuid4().hex


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_date(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 or common calendar date; None when unparseable."""
    if isinstance(value, datetime):
        return value
    text = _clean(value)
    if not text:
        return None

    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        parsed = None
        for fmt in FALLBACK_DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue

    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_chapter(value: Any) -> Optional[float]:
    """Chapter number from a cell; raises ValueError when present but invalid."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(value)
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None

    number = float(value)
    if not math.isfinite(number) or number < 0:
        raise ValueError(value)
    return number


def parse_csv_text(csv_text: str) -> List[RawImportEntry]:
    """One raw entry per data row of a CSV export.

    Only ``Series Title`` is mandatory; any other column may be missing
    entirely or blank. Blank lines are skipped.
    """
    # A single cell may be as large as the whole upload
    csv.field_size_limit(max(csv.field_size_limit(), len(csv_text)))
    reader = csv.DictReader(io.StringIO(csv_text.lstrip("\ufeff")))
    entries = []

    for row in reader:
        if not any(_clean(v) for v in row.values() if isinstance(v, str)):
            continue
        entries.append(RawImportEntry(
            title=row.get(CSV_COLUMNS["title"]),
            chapter=row.get(CSV_COLUMNS["chapter"]),
            url=_clean(row.get(CSV_COLUMNS["url"])),
            platform=_clean(row.get(CSV_COLUMNS["platform"])),
            last_read_date=_clean(row.get(CSV_COLUMNS["last_read_date"])),
        ))

    return entries


def _visit_time_to_iso(visit_time: Optional[float]) -> Optional[str]:
    """ISO date for an epoch-millisecond visit time, or None when out of range."""
    if not visit_time:
        return None
    try:
        return datetime.fromtimestamp(visit_time / 1000, tz=timezone.utc).isoformat()
    except (OverflowError, OSError, ValueError):
        return None


def extract_from_browser_history(history_items: Iterable[BrowserHistoryItem]) -> List[RawImportEntry]:
    """Raw entries for history items on supported reading sites.

    Unrecognized URLs are dropped. Recognized pages without a chapter
    number are kept with the chapter unknown.
    """
    entries = []

    for item in history_items:
        extracted = extract_series_from_url(item.url, item.title)
        if not extracted:
            continue

        last_read = _visit_time_to_iso(item.visit_time)

        entries.append(RawImportEntry(
            title=extracted.title,
            chapter=extracted.chapter,
            url=item.url,
            platform=extracted.platform,
            last_read_date=last_read,
        ))

    return entries


def _resolve_platform(raw: RawImportEntry) -> str:
    if raw.platform:
        return normalize_platform(raw.platform)
    if raw.url:
        return detect_platform(raw.url) or UNKNOWN_PLATFORM
    return UNKNOWN_PLATFORM


def validate_entry(raw: RawImportEntry) -> ImportEntry:
    """Shape-check a raw row. Problems are recorded on the entry, never raised."""
    title = _clean(raw.title) or ""
    errors = []

    if not title:
        errors.append("Series title is required")
    elif len(title) > MAX_TITLE_LENGTH:
        errors.append(f"Series title must be at most {MAX_TITLE_LENGTH} characters")

    try:
        chapter = parse_chapter(raw.chapter)
    except (TypeError, ValueError):
        chapter = None
        errors.append(f"Invalid chapter number: {raw.chapter!r}")

    entry = ImportEntry(
        id=_new_id(),
        title=title,
        normalized_title=normalize_title(title),
        platform=_resolve_platform(raw),
        chapter=chapter,
        url=_clean(raw.url),
        last_read_date=parse_date(raw.last_read_date),
        errors=errors,
    )

    if errors:
        entry.status = EntryStatus.ERROR
        entry.selected = False
        logger.debug(f"Rejected import row {title!r}: {'; '.join(errors)}")

    return entry


def mark_duplicates(entries: List[ImportEntry]) -> int:
    """Flag every repeat of a normalized title after its first occurrence.

    Returns the number of entries newly classified as duplicates. Error
    entries keep their error status but still count as first occurrences.
    """
    seen = set()
    duplicates = 0

    for entry in entries:
        key = entry.normalized_title
        if key not in seen:
            seen.add(key)
            continue

        entry.is_duplicate = True
        entry.selected = False
        if entry.status is EntryStatus.OK:
            entry.status = EntryStatus.DUPLICATE
            duplicates += 1

    return duplicates


def build_import_job(
    user_id: int,
    source: ImportSource,
    raw_entries: List[RawImportEntry],
) -> ImportJob:
    """Validate and deduplicate raw rows into a job, preserving source order."""
    entries = [validate_entry(raw) for raw in raw_entries]
    skipped = mark_duplicates(entries)
    errors = sum(1 for e in entries if e.status is EntryStatus.ERROR)

    job = ImportJob(
        import_id=_new_id(),
        user_id=user_id,
        source=ImportSource(source),
        entries=entries,
        total_items=len(raw_entries),
        error_items=errors,
        skipped_items=skipped,
    )

    logger.info(
        f"Built {job.source.value} import {job.import_id} for user {user_id}: "
        f"{job.total_items} rows, {errors} errors, {skipped} duplicates"
    )
    return job


def get_selected_entries(job: ImportJob) -> List[ImportEntry]:
    """Entries the user wants imported."""
    return [e for e in job.entries if e.selected and e.status is not EntryStatus.ERROR]


def update_entry_selection(job: ImportJob, entry_id: str, selected: bool) -> ImportJob:
    """Copy of the job with one entry (de)selected. Error entries cannot be selected."""
    entries = [
        replace(e, selected=selected and e.status is not EntryStatus.ERROR) if e.id == entry_id else e
        for e in job.entries
    ]
    return replace(job, entries=entries)


class ImportService:
    """Persists confirmed import entries into a user's library."""

    def __init__(self, series_repo: SeriesRepository):
        self.series_repo = series_repo

    def confirm(self, user_id: int, entries: List[Any], import_id: Optional[str] = None) -> ImportResult:
        """Create one series per entry.

        Titles already in the library trip the unique constraint and are
        counted as skipped; other failures are collected per entry.
        """
        result = ImportResult(import_id=import_id)

        for entry in entries:
            title = (entry.title or "").strip()
            if not title:
                result.errors.append("Series title is required")
                result.skipped_count += 1
                continue

            try:
                self.series_repo.add(
                    user_id=user_id,
                    title=title,
                    normalized_title=normalize_title(title),
                    platform=normalize_platform(entry.platform or UNKNOWN_PLATFORM),
                    source_url=entry.url,
                    import_id=import_id,
                    current_chapter=entry.chapter,
                    last_read_at=parse_date(entry.last_read_date),
                )
                result.imported_count += 1
            except IntegrityError:
                self.series_repo.rollback()
                logger.debug(f"Skipping {title!r}: already in library for user {user_id}")
                result.skipped_count += 1
            except Exception as e:
                self.series_repo.rollback()
                logger.warning(f"Failed to import {title!r} for user {user_id}: {e}")
                result.errors.append(f'Failed to import "{title}": {e}')
                result.skipped_count += 1

        logger.info(
            f"Confirmed import {import_id} for user {user_id}: "
            f"{result.imported_count} imported, {result.skipped_count} skipped"
        )
        return result
