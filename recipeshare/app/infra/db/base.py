# recipeshare/app/infra/db/base.py
"""
Abstract repositories for the four backend tables.
This interface keeps services independent of the Supabase client so
tests can swap in in-memory stubs.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from recipeshare.app.domain.models import Comment, Like, Profile, Recipe, RecipePayload


class ProfileRepository(ABC):
    """
    Access to the `profiles` table.

    Profiles are created by the backend when an identity signs up; this
    application only reads and edits them.
    """

    @abstractmethod
    def get_profile(self, user_id: str) -> Optional[Profile]:
        """Return the profile for an identity, or None if absent."""
        pass

    @abstractmethod
    def get_profiles(self, user_ids: Sequence[str]) -> list[Profile]:
        """
        Batch lookup constrained with an "in" filter.

        Args:
            user_ids: Distinct identity ids

        Returns:
            Matching profiles in no particular order
        """
        pass

    @abstractmethod
    def update_profile(self, user_id: str, changes: dict[str, Optional[str]]) -> None:
        pass


class RecipeRepository(ABC):
    """Access to the `recipes` table."""

    @abstractmethod
    def list_recent(self, limit: int = 20) -> list[Recipe]:
        """Most recent recipes, newest first."""
        pass

    @abstractmethod
    def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        pass

    @abstractmethod
    def get_recipes(self, recipe_ids: Sequence[str]) -> list[Recipe]:
        """Batch lookup; result order is not guaranteed."""
        pass

    @abstractmethod
    def count_by_author(self, user_id: str) -> int:
        pass

    @abstractmethod
    def insert_recipe(self, user_id: str, payload: RecipePayload) -> Recipe:
        pass

    @abstractmethod
    def update_recipe(self, recipe_id: str, payload: RecipePayload) -> Optional[Recipe]:
        """Returns the updated row when the backend echoes it back."""
        pass

    @abstractmethod
    def delete_recipe(self, recipe_id: str) -> None:
        pass


class LikeRepository(ABC):
    """Access to the `likes` relation, unique per (recipe, user)."""

    @abstractmethod
    def list_for_recipe(self, recipe_id: str) -> list[Like]:
        pass

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[Like]:
        """The user's likes, most recent first."""
        pass

    @abstractmethod
    def count_by_user(self, user_id: str) -> int:
        pass

    @abstractmethod
    def add_like(self, recipe_id: str, user_id: str) -> None:
        pass

    @abstractmethod
    def remove_like(self, recipe_id: str, user_id: str) -> None:
        pass


class CommentRepository(ABC):
    """Access to the `comments` table."""

    @abstractmethod
    def list_for_recipe(self, recipe_id: str) -> list[Comment]:
        """
        Comments on a recipe, newest first, each with its author profile
        resolved by the backend's embedded relation lookup.
        """
        pass

    @abstractmethod
    def get_comment(self, comment_id: str) -> Optional[Comment]:
        pass

    @abstractmethod
    def insert_comment(self, recipe_id: str, user_id: str, text: str) -> None:
        pass

    @abstractmethod
    def update_comment(self, comment_id: str, author_id: str, text: str, updated_at: str) -> None:
        pass

    @abstractmethod
    def delete_comment(self, comment_id: str, author_id: str) -> None:
        pass
