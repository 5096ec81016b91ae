# recipeshare/app/schemas/profiles.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from recipeshare.app.domain.models import ProfileStats


class ProfileResponse(BaseModel):
    id: str
    userName: str
    fullName: Optional[str] = None
    bio: Optional[str] = None
    createdAt: Optional[str] = None
    recipeCount: int = 0
    savedCount: int = 0


class ProfileUpdate(BaseModel):
    userName: str = ""
    fullName: Optional[str] = Field(default=None, max_length=120)
    bio: Optional[str] = Field(default=None, max_length=500)


class ProfileUpdateResponse(BaseModel):
    message: str
    profile: ProfileResponse


def profile_response(stats: ProfileStats) -> ProfileResponse:
    profile = stats.profile
    return ProfileResponse(
        id=profile.id,
        userName=profile.user_name,
        fullName=profile.full_name,
        bio=profile.bio,
        createdAt=profile.created_at,
        recipeCount=stats.recipe_count,
        savedCount=stats.saved_count,
    )
