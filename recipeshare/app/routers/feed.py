# recipeshare/app/routers/feed.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from recipeshare.app.deps import CurrentUser, get_current_user, get_feed_service, get_saved_service
from recipeshare.app.routers.errors import ROUTE_ERRORS, to_http
from recipeshare.app.schemas.feed import FacetResponse, FeedResponse, SavedResponse
from recipeshare.app.schemas.recipes import recipe_response
from recipeshare.app.services.feed_service import FeedService
from recipeshare.app.services.saved_service import SavedService

router = APIRouter(tags=["feed"])


@router.get("/feed", response_model=FeedResponse)
async def get_feed(
    q: str = Query(default=""),
    difficulty: str = Query(default=""),
    category: str = Query(default=""),
    user: CurrentUser = Depends(get_current_user),
    service: FeedService = Depends(get_feed_service),
) -> FeedResponse:
    try:
        result = service.search(query=q, difficulty=difficulty, category=category)
    except ROUTE_ERRORS as exc:
        raise to_http(exc)
    return FeedResponse(
        recipes=[recipe_response(recipe) for recipe in result.recipes],
        total=result.total,
        facets=FacetResponse(
            difficulties=result.facets.difficulties,
            categories=result.facets.categories,
        ),
        summary=result.summary,
        query=q,
        difficulty=difficulty,
        category=category,
    )


@router.get("/saved", response_model=SavedResponse)
async def get_saved(
    user: CurrentUser = Depends(get_current_user),
    service: SavedService = Depends(get_saved_service),
) -> SavedResponse:
    try:
        recipes = service.load_saved(user.id)
    except ROUTE_ERRORS as exc:
        raise to_http(exc)
    return SavedResponse(recipes=[recipe_response(recipe) for recipe in recipes])
