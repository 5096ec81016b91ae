"""
Unit tests for feed search, facets and the filter summary line.
"""
from __future__ import annotations

from recipeshare.app.domain.filters import (
    describe_filters,
    facet_options,
    filter_recipes,
    has_active_filters,
    matches_query,
)
from recipeshare.app.domain.models import Profile, Recipe


def sample_recipes() -> list[Recipe]:
    return [
        Recipe(
            id="1",
            user_id="u1",
            title="Tomato Soup",
            ingredients="tomatoes\nonion",
            instructions="Simmer",
            category="Lunch",
            difficulty="Easy",
            author=Profile(id="u1", user_name="ann", full_name="Ann Baker"),
        ),
        Recipe(
            id="2",
            user_id="u2",
            title="Beef Stew",
            ingredients="beef\ncarrots",
            instructions="Brown then stew",
            description="A hearty dinner",
            category="Dinner",
            difficulty="Hard",
            author=Profile(id="u2", user_name="bob"),
        ),
    ]


class TestFilterRecipes:
    def test_query_matches_title_case_insensitively(self) -> None:
        result = filter_recipes(sample_recipes(), query="soup")

        assert [r.title for r in result] == ["Tomato Soup"]

    def test_query_matches_ingredients(self) -> None:
        result = filter_recipes(sample_recipes(), query="CARROT")

        assert [r.title for r in result] == ["Beef Stew"]

    def test_query_matches_author_display_name(self) -> None:
        result = filter_recipes(sample_recipes(), query="baker")

        assert [r.title for r in result] == ["Tomato Soup"]

    def test_query_matches_author_handle_without_full_name(self) -> None:
        result = filter_recipes(sample_recipes(), query="bob")

        assert [r.title for r in result] == ["Beef Stew"]

    def test_difficulty_is_exact(self) -> None:
        result = filter_recipes(sample_recipes(), difficulty="Hard")

        assert [r.title for r in result] == ["Beef Stew"]

    def test_query_and_category_combine(self) -> None:
        assert filter_recipes(sample_recipes(), query="soup", category="Dinner") == []

    def test_no_filters_returns_everything(self) -> None:
        recipes = sample_recipes()

        assert filter_recipes(recipes) == recipes

    def test_whitespace_query_is_inactive(self) -> None:
        assert len(filter_recipes(sample_recipes(), query="   ")) == 2

    def test_missing_optional_fields_never_match(self) -> None:
        recipe = Recipe(id="3", user_id="u3", title="Toast", ingredients="bread", instructions="Toast it")

        assert matches_query(recipe, "dinner") is False
        assert matches_query(recipe, "") is True


class TestFacets:
    def test_options_are_sorted_and_distinct(self) -> None:
        recipes = sample_recipes() + [
            Recipe(id="3", user_id="u1", title="Pancakes", ingredients="x", instructions="y",
                   category="Breakfast", difficulty="Easy"),
            Recipe(id="4", user_id="u1", title="Water", ingredients="x", instructions="y"),
        ]

        facets = facet_options(recipes)

        assert facets.difficulties == ["Easy", "Hard"]
        assert facets.categories == ["Breakfast", "Dinner", "Lunch"]

    def test_empty_list(self) -> None:
        facets = facet_options([])

        assert facets.difficulties == []
        assert facets.categories == []


class TestDescribeFilters:
    def test_no_active_filters(self) -> None:
        assert has_active_filters("", "", "") is False
        assert describe_filters(5) is None

    def test_query_only(self) -> None:
        assert describe_filters(1, query="soup") == 'Showing 1 recipe matching "soup"'

    def test_all_filters(self) -> None:
        summary = describe_filters(0, query="stew", difficulty="Hard", category="Dinner")

        assert summary == 'Showing 0 recipes matching "stew" with difficulty "Hard" in category "Dinner"'
