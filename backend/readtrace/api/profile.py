"""Profile endpoints."""
from fastapi import APIRouter, Depends, HTTPException, status
from readtrace.dependencies import get_current_user, get_profile_service
from readtrace.models.user import User
from readtrace.schemas.common import MessageResponse
from readtrace.schemas.user import UserResponse, ProfileUpdate, PasswordChange
from readtrace.services.profile import ProfileService, ProfileValidationError

router = APIRouter(prefix="/profile")


def _raise_for(error: ProfileValidationError):
    raise HTTPException(
        status_code=status.HTTP_409_CONFLICT if error.conflict else status.HTTP_400_BAD_REQUEST,
        detail=str(error),
    )


@router.get("", response_model=UserResponse)
def get_profile(user: User = Depends(get_current_user)):
    return UserResponse.model_validate(user)


@router.patch("", response_model=UserResponse)
def update_profile(
    request: ProfileUpdate,
    user: User = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
):
    """Update username, display name or bio."""
    try:
        user = service.update_profile(
            user,
            username=request.username,
            display_name=request.display_name,
            bio=request.bio,
        )
    except ProfileValidationError as e:
        _raise_for(e)
    return UserResponse.model_validate(user)


@router.post("/password", response_model=MessageResponse)
def change_password(
    request: PasswordChange,
    user: User = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
):
    try:
        service.change_password(user, request.current_password, request.new_password)
    except ProfileValidationError as e:
        _raise_for(e)
    return MessageResponse(message="Password updated")
