from __future__ import annotations

from fastapi import APIRouter, Depends

from recipeshare.app.deps import CurrentUser, get_current_user, get_profile_service
from recipeshare.app.routers.errors import ROUTE_ERRORS, to_http
from recipeshare.app.schemas.profiles import (
    ProfileResponse,
    ProfileUpdate,
    ProfileUpdateResponse,
    profile_response,
)
from recipeshare.app.services.profile_service import ProfileService

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileResponse)
async def get_profile(
    user: CurrentUser = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    try:
        stats = service.load_profile(user.id)
    except ROUTE_ERRORS as exc:
        raise to_http(exc)
    return profile_response(stats)


@router.patch("", response_model=ProfileUpdateResponse)
async def update_profile(
    payload: ProfileUpdate,
    user: CurrentUser = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileUpdateResponse:
    try:
        stats = service.update_profile(
            user.id,
            user_name=payload.userName,
            full_name=payload.fullName,
            bio=payload.bio,
        )
    except ROUTE_ERRORS as exc:
        raise to_http(exc)
    return ProfileUpdateResponse(message="Profile updated successfully!", profile=profile_response(stats))
