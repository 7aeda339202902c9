"""Library listing, dashboard, unified progress and resume endpoints."""
from typing import Optional, List
from fastapi import APIRouter, Depends, HTTPException, Query
from readtrace.dependencies import (
    get_current_user,
    get_series_repository,
    get_progress_service,
    get_profile_service,
)
from readtrace.models.series import UserSeries, SeriesStatus
from readtrace.models.user import User
from readtrace.repositories.series import SeriesRepository
from readtrace.schemas.series import (
    SeriesResponse,
    SeriesListResponse,
    DashboardResponse,
    UnifiedProgressResponse,
    AlternativeProgressResponse,
    ResumeResponse,
)
from readtrace.services.platforms import normalize_platform, get_platform_display_name
from readtrace.services.profile import ProfileService
from readtrace.services.progress import ProgressService, SeriesNotFoundError, UnifiedProgress
from readtrace.services.resume import (
    PlatformPreferences,
    select_resume_url,
    get_available_platforms,
    is_valid_platform,
)
from readtrace.services.search import apply_filters, group_series_by_status
from readtrace.utils.progress import calculate_progress, format_chapter_display, format_last_read

router = APIRouter(prefix="/series")


def series_response(series: UserSeries) -> SeriesResponse:
    """ORM row plus the display fields the library views render."""
    response = SeriesResponse.model_validate(series)
    response.genres = list(series.genres or [])
    response.progress_percentage = calculate_progress(series.current_chapter or 0, series.total_chapters)
    response.chapter_display = format_chapter_display(series.current_chapter, series.total_chapters)
    response.last_read_display = format_last_read(series.last_read_at)
    return response


@router.get("", response_model=SeriesListResponse)
def list_series(
    q: Optional[str] = Query(None, max_length=200, description="Matches title, platform or genre"),
    platform: Optional[List[str]] = Query(None),
    status: Optional[List[SeriesStatus]] = Query(None),
    offset: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    user: User = Depends(get_current_user),
    repo: SeriesRepository = Depends(get_series_repository),
):
    """List the user's series, most recently read first."""
    statuses = [s.value for s in status] if status else None

    if q or platform:
        matched = apply_filters(
            repo.list_for_user(user.id, statuses),
            search_query=q,
            platforms=[normalize_platform(p) for p in platform] if platform else None,
        )
        total = len(matched)
        items = matched[offset:offset + limit]
    else:
        items, total = repo.list_page(user.id, offset, limit, statuses)

    return SeriesListResponse(
        items=[series_response(s) for s in items],
        total=total,
        has_more=offset + len(items) < total,
    )


@router.get("/dashboard", response_model=DashboardResponse)
def dashboard(
    user: User = Depends(get_current_user),
    repo: SeriesRepository = Depends(get_series_repository),
):
    """Series grouped by reading status."""
    series = repo.list_for_user(user.id)
    groups = group_series_by_status(series)
    return DashboardResponse(
        groups={key: [series_response(s) for s in items] for key, items in groups.items()},
        total=len(series),
    )


def _load_unified(service: ProgressService, user: User, series_id: int) -> Optional[UnifiedProgress]:
    try:
        return service.get_unified_progress(user.id, series_id)
    except SeriesNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{series_id}/progress", response_model=UnifiedProgressResponse)
def get_progress(
    series_id: int,
    user: User = Depends(get_current_user),
    service: ProgressService = Depends(get_progress_service),
):
    """Unified progress across every platform the series was read on."""
    unified = _load_unified(service, user, series_id)
    if unified is None:
        raise HTTPException(status_code=404, detail="No reading progress recorded")

    return UnifiedProgressResponse(
        series_id=unified.series_id,
        platform=unified.platform,
        platform_name=get_platform_display_name(unified.platform),
        current_chapter=unified.current_chapter,
        total_chapters=unified.total_chapters,
        scroll_position=unified.scroll_position,
        updated_at=unified.updated_at,
        resume_url=unified.resume_url,
        alternatives=[
            AlternativeProgressResponse(
                platform=alt.platform,
                platform_name=get_platform_display_name(alt.platform),
                current_chapter=alt.current_chapter,
                updated_at=alt.updated_at,
                resume_url=alt.resume_url,
            )
            for alt in unified.alternatives
        ],
    )


def _platform_for_url(unified: UnifiedProgress, url: Optional[str]) -> Optional[str]:
    if url is None:
        return None
    if unified.resume_url == url:
        return unified.platform
    for alt in unified.alternatives:
        if alt.resume_url == url:
            return alt.platform
    return None


@router.get("/{series_id}/resume", response_model=ResumeResponse)
def get_resume_url(
    series_id: int,
    platform: Optional[str] = Query(None, description="One-time platform override"),
    user: User = Depends(get_current_user),
    service: ProgressService = Depends(get_progress_service),
    profiles: ProfileService = Depends(get_profile_service),
):
    """Where "continue reading" should go. ``resume_url`` is null when nothing is resumable."""
    unified = _load_unified(service, user, series_id)
    override = normalize_platform(platform) if platform else None

    if override and is_valid_platform(override, unified):
        profiles.remember_platform_choice(user, override)

    url = select_resume_url(unified, PlatformPreferences.from_user(user), override)

    return ResumeResponse(
        series_id=series_id,
        resume_url=url,
        platform=_platform_for_url(unified, url) if unified else None,
        available_platforms=get_available_platforms(unified),
    )
