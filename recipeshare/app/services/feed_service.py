# recipeshare/app/services/feed_service.py
"""
Feed loading and search.
Fetches the most recent recipes, joins their author profiles in memory
and runs the search/facet filters over the full list.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Optional, Sequence

from recipeshare.app.domain.errors import BackendRequestError
from recipeshare.app.domain.filters import FacetOptions, describe_filters, facet_options, filter_recipes
from recipeshare.app.domain.joins import attach, distinct_keys, index_by
from recipeshare.app.domain.models import Recipe
from recipeshare.app.infra.db.base import ProfileRepository, RecipeRepository

logger = logging.getLogger(__name__)

DEFAULT_FEED_LIMIT = 20


@dataclass
class FeedResult:
    recipes: list[Recipe]
    total: int
    facets: FacetOptions = field(default_factory=FacetOptions)
    summary: Optional[str] = None


def attach_authors(recipes: Sequence[Recipe], profiles: ProfileRepository) -> list[Recipe]:
    """
    Join author profiles onto recipes with one batched lookup.

    A failed lookup is not fatal: recipes are still returned, with the
    author left as None.
    """
    if not recipes:
        return []

    author_ids = distinct_keys(recipes, lambda r: r.user_id)
    try:
        authors = profiles.get_profiles(author_ids)
    except BackendRequestError as error:
        logger.warning("Could not load author profiles, continuing without them: %s", error)
        authors = []

    by_id = index_by(authors, lambda p: p.id)
    return [replace(recipe, author=author) for recipe, author in attach(recipes, by_id, lambda r: r.user_id)]


class FeedService:
    """
    Service for the shared recipe feed.

    Responsibilities:
    - Load the most recent recipes with their authors
    - Apply free-text, difficulty and category filters
    - Derive facet options from the unfiltered list
    """

    def __init__(
        self,
        recipes: RecipeRepository,
        profiles: ProfileRepository,
        limit: int = DEFAULT_FEED_LIMIT,
    ):
        self._recipes = recipes
        self._profiles = profiles
        self.limit = limit

    def load_feed(self) -> list[Recipe]:
        """
        Fetch the newest recipes and their authors.

        Raises:
            BackendRequestError: If the recipe fetch itself fails
        """
        recipes = self._recipes.list_recent(limit=self.limit)
        if not recipes:
            return []
        return attach_authors(recipes, self._profiles)

    def search(
        self,
        query: str = "",
        difficulty: str = "",
        category: str = "",
    ) -> FeedResult:
        all_recipes = self.load_feed()
        matched = filter_recipes(all_recipes, query, difficulty, category)
        logger.debug(
            "Feed filtered: total=%d, matched=%d, q=%r, difficulty=%r, category=%r",
            len(all_recipes), len(matched), query, difficulty, category,
        )
        return FeedResult(
            recipes=matched,
            total=len(all_recipes),
            facets=facet_options(all_recipes),
            summary=describe_filters(len(matched), query, difficulty, category),
        )
