"""Tests for library listing, dashboard and resume endpoints."""
from datetime import datetime, timedelta, timezone

import pytest

T0 = datetime(2026, 2, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def library(test_user, make_series):
    return [
        make_series(test_user, "One Piece", genres=["Adventure"], status="reading",
                    current_chapter=1087, total_chapters=1100, last_read_at=T0),
        make_series(test_user, "Tower of God", platform="webtoon", genres=["Fantasy"], status="reading",
                    last_read_at=T0 + timedelta(days=1)),
        make_series(test_user, "Berserk", genres=["Dark Fantasy"], status="on_hold"),
        make_series(test_user, "Vagabond", status="completed", last_read_at=T0 - timedelta(days=30)),
    ]


class TestListSeries:

    def test_most_recent_first(self, client, auth_headers, library):
        response = client.get("/api/series", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 4
        assert data["has_more"] is False
        assert [s["title"] for s in data["items"]] == ["Tower of God", "One Piece", "Vagabond", "Berserk"]

    def test_display_fields(self, client, auth_headers, library):
        data = client.get("/api/series", headers=auth_headers, params={"q": "one piece"}).json()
        item = data["items"][0]
        assert item["progress_percentage"] == 99
        assert item["chapter_display"] == "Ch. 1087 / 1100"
        assert item["genres"] == ["Adventure"]

    def test_search_matches_genre(self, client, auth_headers, library):
        data = client.get("/api/series", headers=auth_headers, params={"q": "FANTASY"}).json()
        assert {s["title"] for s in data["items"]} == {"Tower of God", "Berserk"}

    def test_platform_and_status_filters(self, client, auth_headers, library):
        data = client.get("/api/series", headers=auth_headers, params={"platform": "Webtoon"}).json()
        assert [s["title"] for s in data["items"]] == ["Tower of God"]

        data = client.get(
            "/api/series", headers=auth_headers, params=[("status", "on_hold"), ("status", "completed")]
        ).json()
        assert {s["title"] for s in data["items"]} == {"Berserk", "Vagabond"}

    def test_paging(self, client, auth_headers, library):
        data = client.get("/api/series", headers=auth_headers, params={"offset": 1, "limit": 2}).json()
        assert data["total"] == 4
        assert [s["title"] for s in data["items"]] == ["One Piece", "Vagabond"]
        assert data["has_more"] is True

    @pytest.mark.parametrize("params", [{"limit": 0}, {"limit": 101}, {"offset": -1}, {"status": "dropped"}])
    def test_invalid_params(self, client, auth_headers, params):
        response = client.get("/api/series", headers=auth_headers, params=params)
        assert response.status_code == 422

    def test_only_own_series(self, client, auth_headers, other_user, make_series):
        make_series(other_user, "Someone Else's")
        data = client.get("/api/series", headers=auth_headers).json()
        assert data["total"] == 0


def test_dashboard_groups(client, auth_headers, library):
    response = client.get("/api/series/dashboard", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 4
    assert set(data["groups"]) == {"reading", "completed", "on_hold", "plan_to_read"}
    assert [s["title"] for s in data["groups"]["reading"]] == ["Tower of God", "One Piece"]
    assert data["groups"]["plan_to_read"] == []


class TestResume:
    """Resume URL endpoint."""

    @pytest.fixture
    def series(self, test_user, make_series, make_progress):
        series = make_series(test_user, "Tower of God")
        make_progress(series, "mangadex", 20, T0 + timedelta(hours=2), resume_url="https://a")
        make_progress(series, "webtoon", 18, T0, resume_url="https://b")
        return series

    def test_preferences_apply(self, client, auth_headers, series):
        data = client.get(f"/api/series/{series.id}/resume", headers=auth_headers).json()
        assert data["resume_url"] == "https://a"
        assert data["platform"] == "mangadex"
        assert data["available_platforms"] == ["mangadex", "webtoon"]

    def test_preferred_site_beats_recency(self, client, auth_headers, series):
        client.post("/api/user/preferences/sites", headers=auth_headers, json={"preferred_sites": ["webtoon"]})
        data = client.get(f"/api/series/{series.id}/resume", headers=auth_headers).json()
        assert data["resume_url"] == "https://b"
        assert data["platform"] == "webtoon"

    def test_override_is_remembered(self, client, db, auth_headers, test_user, series):
        data = client.get(
            f"/api/series/{series.id}/resume", headers=auth_headers, params={"platform": "WEBTOON"}
        ).json()
        assert data["resume_url"] == "https://b"
        db.refresh(test_user)
        assert test_user.last_selected_platform == "webtoon"

    def test_unknown_override_not_remembered(self, client, db, auth_headers, test_user, series):
        data = client.get(
            f"/api/series/{series.id}/resume", headers=auth_headers, params={"platform": "tapas"}
        ).json()
        assert data["resume_url"] == "https://a"
        db.refresh(test_user)
        assert test_user.last_selected_platform is None

    def test_no_progress(self, client, auth_headers, test_user, make_series):
        series = make_series(test_user, "Berserk")
        data = client.get(f"/api/series/{series.id}/resume", headers=auth_headers).json()
        assert data == {"series_id": series.id, "resume_url": None, "platform": None, "available_platforms": []}

    def test_foreign_series(self, client, auth_headers, other_user, make_series):
        series = make_series(other_user, "Berserk")
        response = client.get(f"/api/series/{series.id}/resume", headers=auth_headers)
        assert response.status_code == 404
