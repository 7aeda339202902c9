"""Tests for the import pipeline."""
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import patch

import pytest
from readtrace.models.series import UserSeries
from readtrace.repositories.series import SeriesRepository
from readtrace.services.import_service import (
    BrowserHistoryItem,
    EntryStatus,
    ImportService,
    ImportSource,
    RawImportEntry,
    build_import_job,
    extract_from_browser_history,
    get_selected_entries,
    parse_chapter,
    parse_csv_text,
    parse_date,
    update_entry_selection,
)

HEADER = "Series Title,Chapter Number,URL,Platform,Last Read Date\n"


def csv_job(body: str):
    return build_import_job(1, ImportSource.CSV, parse_csv_text(HEADER + body))


class TestParseCsv:
    """CSV column contract."""

    def test_single_valid_row(self):
        job = csv_job('"Naruto",700,,MangaDex,\n')
        assert job.total_items == 1
        assert job.error_items == 0
        assert job.skipped_items == 0
        assert job.entries[0].status is not EntryStatus.ERROR
        assert job.entries[0].platform == "mangadex"
        assert job.entries[0].chapter == 700

    def test_quoted_commas_and_bom(self):
        rows = parse_csv_text("\ufeff" + HEADER + '"Kaguya-sama: Love, War",12,,,\n')
        assert rows[0].title == "Kaguya-sama: Love, War"

    def test_missing_optional_columns(self):
        rows = parse_csv_text("Series Title\nBerserk\n\nVagabond\n")
        assert [r.title for r in rows] == ["Berserk", "Vagabond"]
        assert rows[0].chapter is None

    def test_blank_title_row_retained(self):
        job = csv_job(",12,,,\n")
        assert job.total_items == 1
        assert job.entries[0].status is EntryStatus.ERROR
        assert "Series title is required" in job.entries[0].errors

    def test_platform_detected_from_url(self):
        job = csv_job("Tower of God,,https://www.webtoons.com/en/fantasy/tower-of-god/list?title_no=95,,\n"
                      "Homebrew,3,,,\n")
        assert job.entries[0].platform == "webtoon"
        assert job.entries[1].platform == "other"


class TestDeduplication:

    def test_normalized_titles_collide(self):
        job = csv_job('"One Piece",1,,,\n"  one   piece ",2,,,\n')
        first, second = job.entries
        assert not first.is_duplicate
        assert second.is_duplicate
        assert second.status is EntryStatus.DUPLICATE
        assert not second.selected
        assert job.skipped_items == 1

    def test_exactly_one_original_per_title(self):
        job = csv_job("A,1,,,\nB,1,,,\na,2,,,\n A ,3,,,\nb,4,,,\n")
        originals = {}
        for entry in job.entries:
            if not entry.is_duplicate:
                assert entry.normalized_title not in originals
                originals[entry.normalized_title] = entry
        assert set(originals) == {"a", "b"}
        assert job.skipped_items == 3

    def test_blank_titles_share_one_original(self):
        job = csv_job(",1,,,\n,2,,,\n,3,,,\n")
        assert [e.is_duplicate for e in job.entries] == [False, True, True]
        assert all(e.status is EntryStatus.ERROR for e in job.entries)
        assert job.skipped_items == 0

    def test_source_order_kept(self):
        job = csv_job("C,,,,\nA,,,,\nB,,,,\n")
        assert [e.title for e in job.entries] == ["C", "A", "B"]

    def test_counts_bounded(self):
        job = csv_job("A,1,,,\na,2,,,\n,3,,,\nB,-1,,,\nC,x,,,\n")
        selected = len(get_selected_entries(job))
        assert job.total_items == len(job.entries) == 5
        assert job.error_items + job.skipped_items + selected <= job.total_items


class TestValidation:

    @pytest.mark.parametrize("chapter", ["-1", "abc", "nan", "inf"])
    def test_bad_chapter_is_error(self, chapter):
        job = csv_job(f"Berserk,{chapter},,,\n")
        entry = job.entries[0]
        assert entry.status is EntryStatus.ERROR
        assert entry.chapter is None
        assert entry.title == "Berserk"
        assert not entry.selected
        assert job.valid_items == 0

    def test_fractional_chapter(self):
        assert csv_job("Berserk,12.5,,,\n").entries[0].chapter == 12.5

    def test_title_too_long(self):
        job = csv_job("A" * 201 + ",,,,\n")
        assert job.entries[0].status is EntryStatus.ERROR

    def test_cell_larger_than_csv_default_limit(self):
        job = csv_job("A" * 200000 + ",1,,,\nNaruto,2,,,\n")
        huge, naruto = job.entries
        assert huge.status is EntryStatus.ERROR
        assert naruto.status is EntryStatus.OK
        assert naruto.chapter == 2

    def test_unparseable_date_is_not_an_error(self):
        entry = csv_job("Berserk,1,,,someday\n").entries[0]
        assert entry.status is EntryStatus.OK
        assert entry.last_read_date is None

    def test_parse_chapter(self):
        assert parse_chapter(None) is None
        assert parse_chapter("  ") is None
        assert parse_chapter(0) == 0
        with pytest.raises(ValueError):
            parse_chapter(True)

    @pytest.mark.parametrize("value,expected", [
        ("2026-01-15", datetime(2026, 1, 15, tzinfo=timezone.utc)),
        ("2026-01-15T10:30:00Z", datetime(2026, 1, 15, 10, 30, tzinfo=timezone.utc)),
        ("01/15/2026", datetime(2026, 1, 15, tzinfo=timezone.utc)),
        ("Jan 15, 2026", datetime(2026, 1, 15, tzinfo=timezone.utc)),
        ("", None),
        ("yesterday", None),
    ])
    def test_parse_date(self, value, expected):
        assert parse_date(value) == expected


class TestBrowserHistory:

    def test_unrecognized_urls_dropped(self):
        items = [
            BrowserHistoryItem(url="https://example.com/news"),
            BrowserHistoryItem(
                url="https://www.webtoons.com/en/fantasy/tower-of-god/ep-550/viewer?title_no=95&episode_no=550",
                title="Tower of God - Episode 550",
                visit_time=1767225600000,
            ),
            BrowserHistoryItem(url="https://mangadex.org/title/a1b2/berserk"),
        ]
        entries = extract_from_browser_history(items)
        assert [e.title for e in entries] == ["Tower of God", "Berserk"]
        assert entries[0].chapter == 550
        assert entries[0].last_read_date.startswith("2026-01-01")
        assert entries[1].chapter is None

    @pytest.mark.parametrize("visit_time", [1e20, -1e20])
    def test_out_of_range_visit_time(self, visit_time):
        entries = extract_from_browser_history([
            BrowserHistoryItem(url="https://mangadex.org/title/abc/one-piece", visit_time=visit_time),
        ])
        assert entries[0].title == "One Piece"
        assert entries[0].last_read_date is None

    def test_job_from_history(self):
        raw = extract_from_browser_history([
            BrowserHistoryItem(url="https://mangadex.org/title/a1b2/berserk"),
            BrowserHistoryItem(url="https://mangadex.org/title/a1b2/berserk", title="Berserk - Ch. 3 - MangaDex"),
        ])
        job = build_import_job(1, ImportSource.BROWSER_HISTORY, raw)
        assert job.source is ImportSource.BROWSER_HISTORY
        assert job.skipped_items == 1
        assert job.entries[0].platform == "mangadex"


class TestSelection:

    def test_toggle_selection(self):
        job = csv_job("A,1,,,\na,2,,,\n,3,,,\n")
        duplicate, error = job.entries[1], job.entries[2]

        updated = update_entry_selection(job, duplicate.id, True)
        assert [e.title for e in get_selected_entries(updated)] == ["A", "a"]
        assert not job.entries[1].selected

        updated = update_entry_selection(updated, error.id, True)
        assert not updated.entries[2].selected


class TestImportService:
    """Confirm step."""

    @staticmethod
    def entry(title, chapter=None, platform="mangadex", url=None, last_read_date=None):
        return SimpleNamespace(title=title, chapter=chapter, platform=platform, url=url, last_read_date=last_read_date)

    def test_confirm_inserts_series_and_progress(self, db, test_user):
        service = ImportService(SeriesRepository(db))
        result = service.confirm(test_user.id, [
            self.entry("Naruto", 700, url="https://mangadex.org/title/x/naruto", last_read_date="2026-01-15"),
            self.entry("Bleach"),
        ], import_id="abc")

        assert result.imported_count == 2
        assert result.skipped_count == 0
        naruto = db.query(UserSeries).filter(UserSeries.title == "Naruto").one()
        assert naruto.normalized_title == "naruto"
        assert naruto.import_id == "abc"
        assert naruto.current_chapter == 700
        assert len(naruto.progress) == 1
        assert naruto.progress[0].resume_url == "https://mangadex.org/title/x/naruto"

    def test_existing_title_skipped(self, db, test_user, make_series):
        make_series(test_user, "One Piece")
        service = ImportService(SeriesRepository(db))
        result = service.confirm(test_user.id, [self.entry("  ONE  piece"), self.entry("Bleach")])

        assert result.imported_count == 1
        assert result.skipped_count == 1
        assert result.error_count == 0

    def test_failure_collected(self, db, test_user):
        service = ImportService(SeriesRepository(db))
        with patch.object(SeriesRepository, "add", side_effect=RuntimeError("disk full")):
            result = service.confirm(test_user.id, [self.entry("Naruto")])

        assert result.imported_count == 0
        assert result.skipped_count == 1
        assert result.errors == ['Failed to import "Naruto": disk full']

    def test_blank_title_rejected(self, db, test_user):
        service = ImportService(SeriesRepository(db))
        result = service.confirm(test_user.id, [self.entry("   "), self.entry("Bleach")])

        assert result.imported_count == 1
        assert result.skipped_count == 1
        assert result.errors == ["Series title is required"]
        titles = [s.title for s in db.query(UserSeries).filter(UserSeries.user_id == test_user.id)]
        assert titles == ["Bleach"]
