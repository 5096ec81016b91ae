from __future__ import annotations

import logging

from recipeshare.app.domain.joins import reorder_by_ids
from recipeshare.app.domain.models import Recipe
from recipeshare.app.infra.db.base import LikeRepository, ProfileRepository, RecipeRepository
from recipeshare.app.services.feed_service import attach_authors

logger = logging.getLogger(__name__)


class SavedService:
    """Recipes the current user has liked, most recently liked first."""

    def __init__(
        self,
        likes: LikeRepository,
        recipes: RecipeRepository,
        profiles: ProfileRepository,
    ):
        self._likes = likes
        self._recipes = recipes
        self._profiles = profiles

    def load_saved(self, user_id: str) -> list[Recipe]:
        likes = self._likes.list_for_user(user_id)
        if not likes:
            return []

        recipe_ids = [like.recipe_id for like in likes]
        fetched = self._recipes.get_recipes(recipe_ids)
        if not fetched:
            return []

        # the "in" fetch does not keep like order
        ordered = reorder_by_ids(fetched, recipe_ids, lambda r: r.id)
        if len(ordered) < len(recipe_ids):
            logger.info(
                "Saved list for %s skips %d liked recipes that are no longer visible",
                user_id, len(recipe_ids) - len(ordered),
            )
        return attach_authors(ordered, self._profiles)
