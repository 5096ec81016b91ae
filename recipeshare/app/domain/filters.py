# recipeshare/app/domain/filters.py
"""
Feed search and facet filtering.

Works on the full recipe list already fetched for the feed; no I/O and no
state, so the feed endpoint can re-run it on every request.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from recipeshare.app.domain.models import Recipe


@dataclass
class FacetOptions:
    difficulties: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)


def _searchable_fields(recipe: Recipe) -> Iterable[Optional[str]]:
    yield recipe.title
    yield recipe.description
    yield recipe.ingredients
    yield recipe.instructions
    yield recipe.category
    yield recipe.difficulty
    yield recipe.author_name


def matches_query(recipe: Recipe, query: str | None) -> bool:
    needle = (query or "").strip().casefold()
    if not needle:
        return True
    return any(value and needle in value.casefold() for value in _searchable_fields(recipe))


def filter_recipes(
    recipes: Sequence[Recipe],
    query: str | None = "",
    difficulty: str | None = "",
    category: str | None = "",
) -> list[Recipe]:
    filtered = list(recipes)

    if query and query.strip():
        filtered = [recipe for recipe in filtered if matches_query(recipe, query)]

    if difficulty:
        filtered = [recipe for recipe in filtered if recipe.difficulty == difficulty]

    if category:
        filtered = [recipe for recipe in filtered if recipe.category == category]

    return filtered


def facet_options(recipes: Sequence[Recipe]) -> FacetOptions:
    """Options come from the unfiltered list so one facet never hides the other's choices."""
    return FacetOptions(
        difficulties=sorted({r.difficulty for r in recipes if r.difficulty}),
        categories=sorted({r.category for r in recipes if r.category}),
    )


def has_active_filters(query: str | None, difficulty: str | None, category: str | None) -> bool:
    return bool(query or difficulty or category)


def describe_filters(
    count: int,
    query: str | None = "",
    difficulty: str | None = "",
    category: str | None = "",
) -> str | None:
    if not has_active_filters(query, difficulty, category):
        return None

    noun = "recipe" if count == 1 else "recipes"
    summary = f"Showing {count} {noun}"
    if query:
        summary += f' matching "{query}"'
    if difficulty:
        summary += f' with difficulty "{difficulty}"'
    if category:
        summary += f' in category "{category}"'
    return summary
