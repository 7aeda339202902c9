"""Pydantic schemas for API request/response validation."""
from readtrace.schemas.user import (
    UserResponse,
    RegisterRequest,
    UserLogin,
    LoginResponse,
    ProfileUpdate,
    PasswordChange,
    PreferredSitesRequest,
    PreferredSitesResponse,
)
from readtrace.schemas.common import MessageResponse
from readtrace.schemas.series import (
    SeriesResponse,
    SeriesListResponse,
    DashboardResponse,
    UnifiedProgressResponse,
    ResumeResponse,
    ProgressSyncRequest,
    ProgressSyncResponse,
)
from readtrace.schemas.imports import (
    BrowserHistoryItemSchema,
    BrowserHistoryRequest,
    ImportEntryResponse,
    ImportJobResponse,
    ConfirmRequest,
    ConfirmResponse,
)

__all__ = [
    "UserResponse",
    "RegisterRequest",
    "UserLogin",
    "LoginResponse",
    "ProfileUpdate",
    "PasswordChange",
    "PreferredSitesRequest",
    "PreferredSitesResponse",
    "MessageResponse",
    "SeriesResponse",
    "SeriesListResponse",
    "DashboardResponse",
    "UnifiedProgressResponse",
    "ResumeResponse",
    "ProgressSyncRequest",
    "ProgressSyncResponse",
    "BrowserHistoryItemSchema",
    "BrowserHistoryRequest",
    "ImportEntryResponse",
    "ImportJobResponse",
    "ConfirmRequest",
    "ConfirmResponse",
]
