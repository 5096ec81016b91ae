# recipeshare/app/services/comment_service.py
"""
Comment CRUD on a recipe.
Every write is followed by a fresh read of the recipe's comment list.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from recipeshare.app.domain.errors import (
    BackendRequestError,
    CommentNotFoundError,
    ConfirmationRequiredError,
    PermissionDeniedError,
    RecipeUnavailableError,
)
from recipeshare.app.domain.models import Comment, CommentView, Recipe
from recipeshare.app.domain.permissions import comment_permissions
from recipeshare.app.domain.validation import validate_comment_text
from recipeshare.app.domain.view_state import ViewAction, ViewStateStore
from recipeshare.app.infra.db.base import CommentRepository, RecipeRepository
from recipeshare.app.services.like_service import detail_view_key

logger = logging.getLogger(__name__)


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


class CommentService:
    """
    Service for comments on a recipe's detail view.

    Responsibilities:
    - List comments with per-user edit/delete permissions
    - Post, edit and delete comments with client-side guards
    """

    def __init__(
        self,
        comments: CommentRepository,
        recipes: RecipeRepository,
        view_states: Optional[ViewStateStore] = None,
    ):
        self._comments = comments
        self._recipes = recipes
        self._view_states = view_states or ViewStateStore()

    def list_views(self, recipe_id: str, recipe_owner_id: Optional[str], user_id: str) -> list[CommentView]:
        """Comments for the recipe, newest first; a failed read shows as no comments."""
        try:
            comments = self._comments.list_for_recipe(recipe_id)
        except BackendRequestError as error:
            logger.warning("Could not load comments for recipe %s: %s", recipe_id, error)
            return []
        return [
            CommentView(comment=comment, permissions=comment_permissions(comment, recipe_owner_id, user_id))
            for comment in comments
        ]

    def post(self, recipe_id: str, user_id: str, text: Optional[str]) -> list[CommentView]:
        """
        Raises:
            RecipeValidationError: If the text is blank
            ActionInFlightError: If a comment from this user on this recipe is still being posted
            BackendRequestError: If the insert fails
        """
        cleaned = validate_comment_text(text)
        recipe = self._get_recipe(recipe_id)

        with self._view_states.action(detail_view_key(recipe_id, user_id), ViewAction.SUBMITTING_COMMENT):
            self._comments.insert_comment(recipe_id, user_id, cleaned)

        return self.list_views(recipe_id, recipe.user_id, user_id)

    def edit(self, recipe_id: str, comment_id: str, user_id: str, text: Optional[str]) -> list[CommentView]:
        cleaned = validate_comment_text(text)
        recipe = self._get_recipe(recipe_id)
        comment = self._get_comment(recipe_id, comment_id)

        if not comment_permissions(comment, recipe.user_id, user_id).can_edit:
            raise PermissionDeniedError("You can only edit your own comments.")

        with self._view_states.action(detail_view_key(recipe_id, user_id), ViewAction.SAVING):
            self._comments.update_comment(comment_id, user_id, cleaned, _now_utc().isoformat())
        logger.info("Comment edited: id=%s, user=%s", comment_id, user_id)
        return self.list_views(recipe_id, recipe.user_id, user_id)

    def delete(
        self,
        recipe_id: str,
        comment_id: str,
        user_id: str,
        confirmed: bool = False,
    ) -> list[CommentView]:
        """
        Delete a comment as its author or as the recipe owner.

        Raises:
            ConfirmationRequiredError: If the caller has not confirmed
            PermissionDeniedError: If the user is neither author nor recipe owner
            ActionInFlightError: If a delete on this recipe by this user is still running
        """
        if not confirmed:
            raise ConfirmationRequiredError("Are you sure you want to delete this comment?")

        recipe = self._get_recipe(recipe_id)
        comment = self._get_comment(recipe_id, comment_id)

        if not comment_permissions(comment, recipe.user_id, user_id).can_delete:
            raise PermissionDeniedError("You don't have permission to delete this comment.")

        with self._view_states.action(detail_view_key(recipe_id, user_id), ViewAction.DELETING):
            self._comments.delete_comment(comment_id, comment.user_id)
        logger.info("Comment deleted: id=%s, by=%s, author=%s", comment_id, user_id, comment.user_id)
        return self.list_views(recipe_id, recipe.user_id, user_id)

    def _get_recipe(self, recipe_id: str) -> Recipe:
        try:
            recipe = self._recipes.get_recipe(recipe_id)
        except BackendRequestError as error:
            raise RecipeUnavailableError(recipe_id) from error
        if recipe is None:
            raise RecipeUnavailableError(recipe_id)
        return recipe

    def _get_comment(self, recipe_id: str, comment_id: str) -> Comment:
        comment = self._comments.get_comment(comment_id)
        if comment is None or comment.recipe_id != recipe_id:
            raise CommentNotFoundError(comment_id)
        return comment
