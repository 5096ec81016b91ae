# recipeshare/app/schemas/recipes.py
from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, Field

from recipeshare.app.domain.models import (
    CATEGORIES,
    CommentView,
    Difficulty,
    LikeSummary,
    Profile,
    Recipe,
    RecipeDetail,
)
from recipeshare.app.domain.validation import RecipeDraft


class AuthorResponse(BaseModel):
    id: str
    userName: str
    fullName: Optional[str] = None
    displayName: str


class RecipeResponse(BaseModel):
    id: str
    userId: str
    title: str
    description: Optional[str] = None
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    cookingTime: Optional[int] = None
    difficulty: Optional[str] = None
    category: Optional[str] = None
    createdAt: Optional[str] = None
    author: Optional[AuthorResponse] = None


class RecipeForm(BaseModel):
    # Kept permissive: the domain validators produce the user-facing messages
    title: str = ""
    description: Optional[str] = None
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    cookingTime: Optional[Union[int, str]] = None
    difficulty: Optional[str] = None
    category: Optional[str] = None

    def to_draft(self) -> RecipeDraft:
        return RecipeDraft(
            title=self.title,
            ingredients=list(self.ingredients),
            instructions=list(self.instructions),
            description=self.description,
            cooking_time=self.cookingTime,
            difficulty=self.difficulty,
            category=self.category,
        )


class EditFormResponse(BaseModel):
    recipeId: str
    form: RecipeForm
    difficulties: list[str] = Field(default_factory=lambda: [level.value for level in Difficulty])
    categories: list[str] = Field(default_factory=lambda: list(CATEGORIES))


class MutationResponse(BaseModel):
    message: str
    redirectTo: str
    recipe: Optional[RecipeResponse] = None


class LikeSummaryResponse(BaseModel):
    count: int = 0
    liked: bool = False


class CommentCreate(BaseModel):
    text: str = ""


class CommentUpdate(BaseModel):
    text: str = ""


class CommentResponse(BaseModel):
    id: str
    recipeId: str
    userId: str
    text: str
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None
    edited: bool = False
    author: Optional[AuthorResponse] = None
    canEdit: bool = False
    canDelete: bool = False


class RecipeDetailResponse(BaseModel):
    recipe: RecipeResponse
    isOwner: bool
    likes: LikeSummaryResponse
    comments: list[CommentResponse] = Field(default_factory=list)


def author_response(profile: Optional[Profile]) -> Optional[AuthorResponse]:
    if profile is None:
        return None
    return AuthorResponse(
        id=profile.id,
        userName=profile.user_name,
        fullName=profile.full_name,
        displayName=profile.display_name,
    )


def recipe_response(recipe: Recipe) -> RecipeResponse:
    return RecipeResponse(
        id=recipe.id,
        userId=recipe.user_id,
        title=recipe.title,
        description=recipe.description,
        ingredients=recipe.ingredient_lines,
        instructions=recipe.instruction_lines,
        cookingTime=recipe.cooking_time,
        difficulty=recipe.difficulty,
        category=recipe.category,
        createdAt=recipe.created_at,
        author=author_response(recipe.author),
    )


def like_response(summary: LikeSummary) -> LikeSummaryResponse:
    return LikeSummaryResponse(count=summary.count, liked=summary.liked)


def comment_response(view: CommentView) -> CommentResponse:
    comment = view.comment
    return CommentResponse(
        id=comment.id,
        recipeId=comment.recipe_id,
        userId=comment.user_id,
        text=comment.comment_text,
        createdAt=comment.created_at,
        updatedAt=comment.updated_at,
        edited=comment.is_edited,
        author=author_response(comment.author),
        canEdit=view.permissions.can_edit,
        canDelete=view.permissions.can_delete,
    )


def detail_response(detail: RecipeDetail) -> RecipeDetailResponse:
    return RecipeDetailResponse(
        recipe=recipe_response(detail.recipe),
        isOwner=detail.is_owner,
        likes=like_response(detail.likes),
        comments=[comment_response(view) for view in detail.comments],
    )


def edit_form_response(recipe: Recipe) -> EditFormResponse:
    draft = RecipeDraft.from_recipe(recipe)
    return EditFormResponse(
        recipeId=recipe.id,
        form=RecipeForm(
            title=draft.title,
            description=draft.description,
            ingredients=draft.ingredients,
            instructions=draft.instructions,
            cookingTime=draft.cooking_time,
            difficulty=draft.difficulty,
            category=draft.category,
        ),
    )
