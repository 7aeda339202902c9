"""Tests for normalization and progress formatting helpers."""
from datetime import datetime, timedelta, timezone

import pytest
from readtrace.utils.normalize import normalize_title, normalize_query
from readtrace.utils.progress import (
    calculate_progress,
    format_progress_percentage,
    format_chapter_display,
    format_last_read,
)


class TestNormalizeTitle:

    @pytest.mark.parametrize("raw,expected", [
        ("One Piece", "one piece"),
        ("  one   piece ", "one piece"),
        ("Tower\tof\nGod", "tower of god"),
        ("", ""),
        (None, ""),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_title(raw) == expected

    def test_punctuation_kept(self):
        assert normalize_title("One, Piece") != normalize_title("One Piece")
        assert normalize_title("One-Piece") == "one-piece"

    @pytest.mark.parametrize("raw", ["  A  b ", "Kaguya-sama: Love Is War", "\u3000Berserk\u3000 ", "x\n\ny"])
    def test_idempotent(self, raw):
        once = normalize_title(raw)
        assert normalize_title(once) == once

    def test_normalize_query(self):
        assert normalize_query("  MangaDex ") == "mangadex"
        assert normalize_query(None) == ""


class TestCalculateProgress:

    @pytest.mark.parametrize("current,total,expected", [
        (50, 100, 50),
        (1, 3, 33),
        (1, 8, 13),
        (150, 100, 100),
        (-5, 100, 0),
        (10, None, 0),
        (10, 0, 0),
        (10, -3, 0),
    ])
    def test_calculate(self, current, total, expected):
        assert calculate_progress(current, total) == expected

    def test_percentage_label(self):
        assert format_progress_percentage(42.4) == "42%"
        assert format_progress_percentage(120) == "100%"


class TestDisplay:

    def test_chapter_display(self):
        assert format_chapter_display(None, 10) == "--"
        assert format_chapter_display(12, None) == "Ch. 12"
        assert format_chapter_display(12.5, 200) == "Ch. 12.5 / 200"

    def test_last_read(self):
        now = datetime(2026, 5, 20, 12, 0, tzinfo=timezone.utc)
        assert format_last_read(None, now) == "Never"
        assert format_last_read(now - timedelta(seconds=30), now) == "just now"
        assert format_last_read(now - timedelta(minutes=1), now) == "1 minute ago"
        assert format_last_read(now - timedelta(hours=5), now) == "5 hours ago"
        assert format_last_read(now - timedelta(days=3), now) == "3 days ago"
        assert format_last_read(datetime(2026, 1, 2, 9, 0), now) == "Jan 2, 2026"

    def test_last_read_from_string(self):
        now = datetime(2026, 5, 20, 12, 0, tzinfo=timezone.utc)
        assert format_last_read("2026-05-20T10:00:00Z", now) == "2 hours ago"
        assert format_last_read("not a date", now) == "Never"
