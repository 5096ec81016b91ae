# recipeshare/app/routers/recipes.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from recipeshare.app.deps import (
    CurrentUser,
    get_comment_service,
    get_current_user,
    get_like_service,
    get_recipe_service,
)
from recipeshare.app.routers.errors import ROUTE_ERRORS, to_http
from recipeshare.app.schemas.recipes import (
    CommentCreate,
    CommentResponse,
    CommentUpdate,
    EditFormResponse,
    LikeSummaryResponse,
    MutationResponse,
    RecipeDetailResponse,
    RecipeForm,
    comment_response,
    detail_response,
    edit_form_response,
    like_response,
    recipe_response,
)
from recipeshare.app.services.comment_service import CommentService
from recipeshare.app.services.like_service import LikeService
from recipeshare.app.services.recipe_service import MutationResult, RecipeService

router = APIRouter(prefix="/recipes", tags=["recipes"])


def _mutation_response(result: MutationResult) -> MutationResponse:
    return MutationResponse(
        message=result.message,
        redirectTo=result.redirect_to,
        recipe=recipe_response(result.recipe) if result.recipe else None,
    )


@router.post("", response_model=MutationResponse, status_code=status.HTTP_201_CREATED)
async def create_recipe(
    payload: RecipeForm,
    user: CurrentUser = Depends(get_current_user),
    service: RecipeService = Depends(get_recipe_service),
) -> MutationResponse:
    try:
        result = service.create(user.id, payload.to_draft())
    except ROUTE_ERRORS as exc:
        raise to_http(exc)
    return _mutation_response(result)


@router.get("/{recipe_id}", response_model=RecipeDetailResponse)
async def get_recipe(
    recipe_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeDetailResponse:
    try:
        detail = service.get_detail(recipe_id, user.id)
    except ROUTE_ERRORS as exc:
        raise to_http(exc)
    return detail_response(detail)


@router.get("/{recipe_id}/edit", response_model=EditFormResponse)
async def get_edit_form(
    recipe_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: RecipeService = Depends(get_recipe_service),
) -> EditFormResponse:
    try:
        recipe = service.load_for_edit(recipe_id, user.id)
    except ROUTE_ERRORS as exc:
        raise to_http(exc)
    return edit_form_response(recipe)


@router.put("/{recipe_id}", response_model=MutationResponse)
async def update_recipe(
    recipe_id: str,
    payload: RecipeForm,
    user: CurrentUser = Depends(get_current_user),
    service: RecipeService = Depends(get_recipe_service),
) -> MutationResponse:
    try:
        result = service.update(recipe_id, user.id, payload.to_draft())
    except ROUTE_ERRORS as exc:
        raise to_http(exc)
    return _mutation_response(result)


@router.delete("/{recipe_id}", response_model=MutationResponse)
async def delete_recipe(
    recipe_id: str,
    confirm: bool = Query(default=False),
    user: CurrentUser = Depends(get_current_user),
    service: RecipeService = Depends(get_recipe_service),
) -> MutationResponse:
    try:
        result = service.delete(recipe_id, user.id, confirmed=confirm)
    except ROUTE_ERRORS as exc:
        raise to_http(exc)
    return _mutation_response(result)


@router.post("/{recipe_id}/like", response_model=LikeSummaryResponse)
async def toggle_like(
    recipe_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: LikeService = Depends(get_like_service),
) -> LikeSummaryResponse:
    try:
        summary = service.toggle(recipe_id, user.id)
    except ROUTE_ERRORS as exc:
        raise to_http(exc)
    return like_response(summary)


@router.post(
    "/{recipe_id}/comments",
    response_model=list[CommentResponse],
    status_code=status.HTTP_201_CREATED,
)
async def post_comment(
    recipe_id: str,
    payload: CommentCreate,
    user: CurrentUser = Depends(get_current_user),
    service: CommentService = Depends(get_comment_service),
) -> list[CommentResponse]:
    try:
        views = service.post(recipe_id, user.id, payload.text)
    except ROUTE_ERRORS as exc:
        raise to_http(exc)
    return [comment_response(view) for view in views]


@router.patch("/{recipe_id}/comments/{comment_id}", response_model=list[CommentResponse])
async def edit_comment(
    recipe_id: str,
    comment_id: str,
    payload: CommentUpdate,
    user: CurrentUser = Depends(get_current_user),
    service: CommentService = Depends(get_comment_service),
) -> list[CommentResponse]:
    try:
        views = service.edit(recipe_id, comment_id, user.id, payload.text)
    except ROUTE_ERRORS as exc:
        raise to_http(exc)
    return [comment_response(view) for view in views]


@router.delete("/{recipe_id}/comments/{comment_id}", response_model=list[CommentResponse])
async def delete_comment(
    recipe_id: str,
    comment_id: str,
    confirm: bool = Query(default=False),
    user: CurrentUser = Depends(get_current_user),
    service: CommentService = Depends(get_comment_service),
) -> list[CommentResponse]:
    try:
        views = service.delete(recipe_id, comment_id, user.id, confirmed=confirm)
    except ROUTE_ERRORS as exc:
        raise to_http(exc)
    return [comment_response(view) for view in views]
