"""Progress sync endpoint used by the browser extension."""
import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException
from readtrace.dependencies import get_current_user, get_progress_service
from readtrace.models.user import User
from readtrace.schemas.series import ProgressSyncRequest, ProgressSyncResponse
from readtrace.services.platforms import normalize_platform
from readtrace.services.progress import ProgressService, SeriesNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/progress")

# Seconds the extension waits before its next report
NEXT_SYNC_SECONDS = 5


@router.post("/sync", response_model=ProgressSyncResponse)
def sync_progress(
    request: ProgressSyncRequest,
    user: User = Depends(get_current_user),
    service: ProgressService = Depends(get_progress_service),
):
    """Record a chapter position; stale reports are acknowledged but not applied."""
    platform = normalize_platform(request.platform)
    if not platform:
        raise HTTPException(status_code=400, detail="Platform is required")

    read_at = datetime.fromtimestamp(request.timestamp / 1000, tz=timezone.utc)

    try:
        _, applied = service.record_progress(
            user_id=user.id,
            series_id=request.series_id,
            platform=platform,
            chapter=request.chapter,
            updated_at=read_at,
            scroll_position=request.scroll_position,
            total_chapters=request.total_chapters,
            resume_url=request.resume_url,
        )
    except SeriesNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return ProgressSyncResponse(
        applied=applied,
        synced_at=datetime.now(timezone.utc),
        next_sync_in=NEXT_SYNC_SECONDS,
    )
