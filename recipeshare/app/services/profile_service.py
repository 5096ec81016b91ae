from __future__ import annotations

import logging
from typing import Callable, Optional

from recipeshare.app.domain.errors import BackendRequestError
from recipeshare.app.domain.models import Profile, ProfileStats
from recipeshare.app.domain.validation import validate_profile_changes
from recipeshare.app.domain.view_state import ViewAction, ViewStateStore
from recipeshare.app.infra.db.base import LikeRepository, ProfileRepository, RecipeRepository

logger = logging.getLogger(__name__)

PROFILE_LOAD_ERROR = "Error loading profile. Please try again."


def profile_view_key(user_id: str) -> str:
    return f"profile:user:{user_id}"


class ProfileService:
    """The signed-in user's own profile and activity counts."""

    def __init__(
        self,
        profiles: ProfileRepository,
        recipes: RecipeRepository,
        likes: LikeRepository,
        view_states: Optional[ViewStateStore] = None,
    ):
        self._profiles = profiles
        self._recipes = recipes
        self._likes = likes
        self._view_states = view_states or ViewStateStore()

    def _get_profile(self, user_id: str) -> Profile:
        try:
            profile = self._profiles.get_profile(user_id)
        except BackendRequestError as error:
            raise BackendRequestError("load profile", PROFILE_LOAD_ERROR) from error
        if profile is None:
            raise BackendRequestError("load profile", PROFILE_LOAD_ERROR)
        return profile

    def _safe_count(self, label: str, counter: Callable[[str], int], user_id: str) -> int:
        try:
            return counter(user_id)
        except BackendRequestError as error:
            logger.warning("Could not count %s for %s: %s", label, user_id, error)
            return 0

    def load_profile(self, user_id: str) -> ProfileStats:
        profile = self._get_profile(user_id)
        return ProfileStats(
            profile=profile,
            recipe_count=self._safe_count("recipes", self._recipes.count_by_author, user_id),
            saved_count=self._safe_count("likes", self._likes.count_by_user, user_id),
        )

    def update_profile(
        self,
        user_id: str,
        user_name: Optional[str],
        full_name: Optional[str] = None,
        bio: Optional[str] = None,
    ) -> ProfileStats:
        """
        Raises:
            RecipeValidationError: If the handle is blank
            ActionInFlightError: If an update of this profile is still running
            BackendRequestError: If the update fails (e.g. the handle is taken)
        """
        changes = validate_profile_changes(user_name, full_name, bio)
        with self._view_states.action(profile_view_key(user_id), ViewAction.SAVING):
            self._profiles.update_profile(user_id, changes)
        return self.load_profile(user_id)
