# recipeshare/app/services/like_service.py
"""
Like toggling.
Each toggle re-reads the authoritative like set instead of adjusting the
count locally.
"""
from __future__ import annotations

import logging
from typing import Optional

from recipeshare.app.domain.errors import BackendRequestError
from recipeshare.app.domain.models import LikeSummary
from recipeshare.app.domain.view_state import ViewAction, ViewStateStore
from recipeshare.app.infra.db.base import LikeRepository

logger = logging.getLogger(__name__)


def detail_view_key(recipe_id: str, user_id: str) -> str:
    return f"recipe:{recipe_id}:user:{user_id}"


class LikeService:

    def __init__(self, likes: LikeRepository, view_states: Optional[ViewStateStore] = None):
        self._likes = likes
        self._view_states = view_states or ViewStateStore()

    def fetch_summary(self, recipe_id: str, user_id: str) -> LikeSummary:
        """
        Raises:
            BackendRequestError: If the like set cannot be read
        """
        likes = self._likes.list_for_recipe(recipe_id)
        return LikeSummary(
            count=len(likes),
            liked=any(like.user_id == user_id for like in likes),
        )

    def summarize(self, recipe_id: str, user_id: str) -> LikeSummary:
        """Like count and membership; a failed read shows as zero likes."""
        try:
            return self.fetch_summary(recipe_id, user_id)
        except BackendRequestError as error:
            logger.warning("Could not load likes for recipe %s: %s", recipe_id, error)
            return LikeSummary()

    def toggle(self, recipe_id: str, user_id: str) -> LikeSummary:
        """
        Unlike if the user already likes the recipe, like it otherwise.

        Raises:
            ActionInFlightError: If a toggle for the same recipe and user is still running
            BackendRequestError: If the write or the re-read after it fails
        """
        with self._view_states.action(detail_view_key(recipe_id, user_id), ViewAction.TOGGLING_LIKE):
            current = self.fetch_summary(recipe_id, user_id)
            if current.liked:
                self._likes.remove_like(recipe_id, user_id)
                logger.info("Recipe unliked: recipe=%s, user=%s", recipe_id, user_id)
            else:
                self._likes.add_like(recipe_id, user_id)
                logger.info("Recipe liked: recipe=%s, user=%s", recipe_id, user_id)
            return self.fetch_summary(recipe_id, user_id)
