# recipeshare/app/services/recipe_service.py
"""
Recipe detail, create, edit and delete.
Ownership checks here are a guard in front of the backend's own row-level
policies; they reject obvious mistakes before any write is sent.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

from recipeshare.app.domain.errors import (
    AuthRequiredError,
    BackendRequestError,
    ConfirmationRequiredError,
    PermissionDeniedError,
    RecipeUnavailableError,
)
from recipeshare.app.domain.models import Recipe, RecipeDetail
from recipeshare.app.domain.permissions import is_recipe_owner
from recipeshare.app.domain.validation import RecipeDraft
from recipeshare.app.domain.view_state import ViewAction, ViewStateStore
from recipeshare.app.infra.db.base import ProfileRepository, RecipeRepository
from recipeshare.app.services.comment_service import CommentService
from recipeshare.app.services.like_service import LikeService, detail_view_key

logger = logging.getLogger(__name__)

FEED_PATH = "/feed"


def recipe_path(recipe_id: str) -> str:
    return f"/recipes/{recipe_id}"


@dataclass
class MutationResult:
    """Outcome of a successful write: what changed and where to go next."""
    message: str
    redirect_to: str
    recipe: Optional[Recipe] = None


class RecipeService:
    """
    Service for a single recipe.

    Responsibilities:
    - Load the detail view (recipe, author, likes, comments)
    - Load the edit form for the recipe's author
    - Create, update and delete recipes
    """

    def __init__(
        self,
        recipes: RecipeRepository,
        profiles: ProfileRepository,
        like_service: LikeService,
        comment_service: CommentService,
        view_states: Optional[ViewStateStore] = None,
    ):
        self._recipes = recipes
        self._profiles = profiles
        self._likes = like_service
        self._comments = comment_service
        self._view_states = view_states or ViewStateStore()

    def _fetch(self, recipe_id: str, unavailable_message: Optional[str] = None) -> Recipe:
        # not-found and not-visible look the same to the caller
        try:
            recipe = self._recipes.get_recipe(recipe_id)
        except BackendRequestError as error:
            logger.warning("Recipe %s could not be loaded: %s", recipe_id, error)
            recipe = None
        if recipe is None:
            if unavailable_message:
                raise RecipeUnavailableError(recipe_id, unavailable_message)
            raise RecipeUnavailableError(recipe_id)
        return recipe

    def _with_author(self, recipe: Recipe) -> Recipe:
        try:
            author = self._profiles.get_profile(recipe.user_id)
        except BackendRequestError as error:
            logger.warning("Could not load author %s for recipe %s: %s", recipe.user_id, recipe.id, error)
            author = None
        return replace(recipe, author=author)

    def get_detail(self, recipe_id: str, user_id: str) -> RecipeDetail:
        """
        Load everything the detail view shows.

        Raises:
            RecipeUnavailableError: If the recipe is missing or not visible
        """
        recipe = self._with_author(self._fetch(recipe_id))
        return RecipeDetail(
            recipe=recipe,
            is_owner=is_recipe_owner(recipe, user_id),
            likes=self._likes.summarize(recipe_id, user_id),
            comments=self._comments.list_views(recipe_id, recipe.user_id, user_id),
        )

    def load_for_edit(self, recipe_id: str, user_id: str) -> Recipe:
        """
        Raises:
            RecipeUnavailableError: If the recipe is missing or not visible
            PermissionDeniedError: If the user is not the author
        """
        recipe = self._fetch(recipe_id, "Recipe not found or you don't have permission to edit it.")
        if not is_recipe_owner(recipe, user_id):
            raise PermissionDeniedError("You don't have permission to edit this recipe.")
        return recipe

    def create(self, user_id: Optional[str], draft: RecipeDraft) -> MutationResult:
        """
        Validate and insert a new recipe owned by user_id.

        Raises:
            RecipeValidationError: If the form is invalid
            AuthRequiredError: If there is no identity
            BackendRequestError: If the profile lookup or the insert fails
        """
        payload = draft.validate()
        if not user_id:
            raise AuthRequiredError("You must be logged in to create a recipe.")

        with self._view_states.action(f"recipe:new:user:{user_id}", ViewAction.SAVING):
            try:
                profile = self._profiles.get_profile(user_id)
            except BackendRequestError as error:
                raise BackendRequestError("create recipe", "Error fetching your profile. Please try again.") from error
            if profile is None:
                raise BackendRequestError("create recipe", "Error fetching your profile. Please try again.")

            recipe = self._recipes.insert_recipe(profile.id, payload)

        return MutationResult(
            message="Recipe created successfully!",
            redirect_to=FEED_PATH,
            recipe=recipe,
        )

    def update(self, recipe_id: str, user_id: str, draft: RecipeDraft) -> MutationResult:
        payload = draft.validate()
        stored = self.load_for_edit(recipe_id, user_id)

        with self._view_states.action(detail_view_key(recipe_id, user_id), ViewAction.SAVING):
            updated = self._recipes.update_recipe(recipe_id, payload)

        if updated is None:
            updated = replace(stored, **payload.to_row())
        return MutationResult(
            message="Recipe updated successfully!",
            redirect_to=recipe_path(recipe_id),
            recipe=updated,
        )

    def delete(self, recipe_id: str, user_id: str, confirmed: bool = False) -> MutationResult:
        """
        Delete a recipe its author has confirmed removing.

        The ownership guard runs before any write; likes and comments are
        removed by the backend's cascade.

        Raises:
            PermissionDeniedError: If the user is not the author
            ConfirmationRequiredError: If the caller has not confirmed
            BackendRequestError: If the delete fails
        """
        recipe = self._fetch(recipe_id)
        if not is_recipe_owner(recipe, user_id):
            raise PermissionDeniedError("You don't have permission to delete this recipe.")
        if not confirmed:
            raise ConfirmationRequiredError(
                f'Are you sure you want to delete "{recipe.title}"? This action cannot be undone.'
            )

        with self._view_states.action(detail_view_key(recipe_id, user_id), ViewAction.DELETING):
            self._recipes.delete_recipe(recipe_id)

        return MutationResult(message="Recipe deleted.", redirect_to=FEED_PATH)
