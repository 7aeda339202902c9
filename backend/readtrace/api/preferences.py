"""Preferred reading sites."""
from typing import Any
from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import ValidationError
from readtrace.dependencies import get_current_user, get_profile_service
from readtrace.models.user import User
from readtrace.schemas.user import PreferredSitesRequest, PreferredSitesResponse
from readtrace.services.profile import ProfileService

router = APIRouter(prefix="/user/preferences")


@router.get("/sites", response_model=PreferredSitesResponse)
def get_preferred_sites(
    user: User = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
):
    return PreferredSitesResponse(
        preferred_sites=service.get_preferred_platforms(user),
        updated_at=user.preferred_platforms_updated_at,
    )


@router.post("/sites", response_model=PreferredSitesResponse)
def save_preferred_sites(
    body: Any = Body(None),
    user: User = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
):
    """Replace the preference order. Unknown site ids are dropped."""
    try:
        request = PreferredSitesRequest.model_validate(body)
    except ValidationError:
        raise HTTPException(status_code=400, detail="preferred_sites must be an array")

    user = service.save_preferred_platforms(user, request.preferred_sites)
    return PreferredSitesResponse(
        preferred_sites=user.preferred_platforms,
        updated_at=user.preferred_platforms_updated_at,
    )
