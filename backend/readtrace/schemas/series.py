"""Series and reading progress schemas."""
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional, List, Dict


class SeriesResponse(BaseModel):
    """Series in a user's library."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    platform: str
    status: str
    current_chapter: float = 0
    total_chapters: Optional[int] = None
    progress_percentage: int = 0
    chapter_display: str = "--"
    source_url: Optional[str] = None
    cover_url: Optional[str] = None
    genres: List[str] = []
    import_id: Optional[str] = None
    last_read_at: Optional[datetime] = None
    last_read_display: str = "Never"


class SeriesListResponse(BaseModel):
    items: List[SeriesResponse]
    total: int
    has_more: bool


class DashboardResponse(BaseModel):
    """Series grouped into dashboard tabs by status."""
    groups: Dict[str, List[SeriesResponse]]
    total: int


class AlternativeProgressResponse(BaseModel):
    platform: str
    platform_name: str
    current_chapter: float
    updated_at: datetime
    resume_url: Optional[str] = None


class UnifiedProgressResponse(BaseModel):
    series_id: int
    platform: str
    platform_name: str
    current_chapter: float
    total_chapters: Optional[int] = None
    scroll_position: float = 0
    updated_at: datetime
    resume_url: Optional[str] = None
    alternatives: List[AlternativeProgressResponse] = []


class ResumeResponse(BaseModel):
    series_id: int
    resume_url: Optional[str] = None
    platform: Optional[str] = None
    available_platforms: List[str] = []


# 9999-12-31T23:59:59Z, the last whole second datetime can represent
MAX_TIMESTAMP_MS = 253402300799000


class ProgressSyncRequest(BaseModel):
    """Progress report from the browser extension."""
    series_id: int = Field(gt=0)
    platform: str = Field(min_length=1)
    chapter: float = Field(gt=0)
    scroll_position: float = Field(default=0, ge=0, le=100)
    timestamp: int = Field(gt=0, le=MAX_TIMESTAMP_MS, description="Epoch milliseconds when the page was read")
    total_chapters: Optional[int] = Field(default=None, ge=0)
    resume_url: Optional[str] = None


class ProgressSyncResponse(BaseModel):
    success: bool = True
    applied: bool
    synced_at: datetime
    next_sync_in: int = 5
