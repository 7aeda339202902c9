"""User and profile schemas."""
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional, List


class UserResponse(BaseModel):
    """User response."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    username: Optional[str] = None
    display_name: Optional[str] = None
    bio: Optional[str] = None
    preferred_platforms: List[str] = []
    created_at: Optional[datetime] = None


class RegisterRequest(BaseModel):
    """Registration request."""
    email: str
    password: str
    username: Optional[str] = None


class UserLogin(BaseModel):
    """Login request."""
    email: str
    password: str


class LoginResponse(BaseModel):
    """Login response with token."""
    token: str
    user: UserResponse


class ProfileUpdate(BaseModel):
    """Partial profile update; omitted fields are left unchanged."""
    username: Optional[str] = None
    display_name: Optional[str] = None
    bio: Optional[str] = None


class PasswordChange(BaseModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=1)


class PreferredSitesRequest(BaseModel):
    preferred_sites: List[str]


class PreferredSitesResponse(BaseModel):
    preferred_sites: List[str]
    updated_at: Optional[datetime] = None
