# recipeshare/app/schemas/feed.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from recipeshare.app.schemas.recipes import RecipeResponse


class FacetResponse(BaseModel):
    difficulties: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)


class FeedResponse(BaseModel):
    recipes: list[RecipeResponse] = Field(default_factory=list)
    total: int = 0
    facets: FacetResponse = Field(default_factory=FacetResponse)
    summary: Optional[str] = None
    query: str = ""
    difficulty: str = ""
    category: str = ""


class SavedResponse(BaseModel):
    recipes: list[RecipeResponse] = Field(default_factory=list)
