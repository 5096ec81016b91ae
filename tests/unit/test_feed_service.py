"""
Unit tests for the feed and saved-recipes services.
"""
from __future__ import annotations

import pytest

from recipeshare.app.domain.errors import BackendRequestError
from recipeshare.app.services.feed_service import FeedService, attach_authors
from recipeshare.app.services.saved_service import SavedService


class TestFeedService:
    def test_recipes_carry_their_authors(self, recipes, profiles, make_recipe) -> None:
        profiles.add("u1", "ann", "Ann Baker")
        recipes.add(make_recipe("r1", user_id="u1", title="Tomato Soup"))
        recipes.add(make_recipe("r2", user_id="u1", title="Beef Stew"))

        feed = FeedService(recipes, profiles).load_feed()

        assert [r.title for r in feed] == ["Beef Stew", "Tomato Soup"]
        assert all(r.author_name == "Ann Baker" for r in feed)

    def test_authors_fetched_in_one_batch(self, recipes, profiles, make_recipe) -> None:
        profiles.add("u1", "ann")
        profiles.add("u2", "bob")
        for index, owner in enumerate(["u1", "u2", "u1", "u2"]):
            recipes.add(make_recipe(f"r{index}", user_id=owner))

        FeedService(recipes, profiles).load_feed()

        assert len(profiles.batch_calls) == 1
        assert sorted(profiles.batch_calls[0]) == ["u1", "u2"]

    def test_empty_feed_skips_profile_lookup(self, recipes, profiles) -> None:
        assert FeedService(recipes, profiles).load_feed() == []
        assert profiles.batch_calls == []

    def test_unknown_author_is_none(self, recipes, profiles, make_recipe) -> None:
        recipes.add(make_recipe("r1", user_id="ghost"))

        feed = FeedService(recipes, profiles).load_feed()

        assert feed[0].author is None

    def test_profile_failure_is_not_fatal(self, recipes, profiles, make_recipe) -> None:
        profiles.add("u1", "ann")
        recipes.add(make_recipe("r1", user_id="u1"))
        profiles.should_fail = True

        feed = FeedService(recipes, profiles).load_feed()

        assert len(feed) == 1
        assert feed[0].author is None

    def test_recipe_failure_is_raised(self, recipes, profiles) -> None:
        recipes.should_fail_list = True

        with pytest.raises(BackendRequestError):
            FeedService(recipes, profiles).load_feed()

    def test_limit_is_passed_through(self, recipes, profiles) -> None:
        FeedService(recipes, profiles, limit=7).load_feed()

        assert recipes.list_limits == [7]

    def test_search_filters_but_facets_use_everything(self, recipes, profiles, make_recipe) -> None:
        recipes.add(make_recipe("r1", title="Tomato Soup", category="Lunch", difficulty="Easy"))
        recipes.add(make_recipe("r2", title="Beef Stew", category="Dinner", difficulty="Hard"))

        result = FeedService(recipes, profiles).search(query="soup")

        assert [r.title for r in result.recipes] == ["Tomato Soup"]
        assert result.total == 2
        assert result.facets.categories == ["Dinner", "Lunch"]
        assert result.facets.difficulties == ["Easy", "Hard"]
        assert result.summary == 'Showing 1 recipe matching "soup"'

    def test_search_without_filters_has_no_summary(self, recipes, profiles, make_recipe) -> None:
        recipes.add(make_recipe("r1"))

        result = FeedService(recipes, profiles).search()

        assert result.summary is None
        assert len(result.recipes) == 1

    def test_attach_authors_empty(self, profiles) -> None:
        assert attach_authors([], profiles) == []


class TestSavedService:
    def test_most_recently_liked_first(self, recipes, profiles, likes, make_recipe) -> None:
        for recipe_id in ("A", "B", "C"):
            recipes.add(make_recipe(recipe_id))
        likes.add("A", "u9")
        likes.add("B", "u9")
        likes.add("C", "u9")

        saved = SavedService(likes, recipes, profiles).load_saved("u9")

        # the "in" lookup returns A, B, C; like order must win
        assert [r.id for r in saved] == ["C", "B", "A"]

    def test_only_the_users_likes(self, recipes, profiles, likes, make_recipe) -> None:
        recipes.add(make_recipe("A"))
        recipes.add(make_recipe("B"))
        likes.add("A", "u9")
        likes.add("B", "someone-else")

        saved = SavedService(likes, recipes, profiles).load_saved("u9")

        assert [r.id for r in saved] == ["A"]

    def test_no_likes_short_circuits(self, recipes, profiles, likes) -> None:
        assert SavedService(likes, recipes, profiles).load_saved("u9") == []
        assert profiles.batch_calls == []

    def test_deleted_recipes_are_skipped(self, recipes, profiles, likes, make_recipe) -> None:
        recipes.add(make_recipe("A"))
        likes.add("A", "u9")
        likes.add("gone", "u9")

        saved = SavedService(likes, recipes, profiles).load_saved("u9")

        assert [r.id for r in saved] == ["A"]

    def test_saved_recipes_have_authors(self, recipes, profiles, likes, make_recipe) -> None:
        profiles.add("u1", "ann")
        recipes.add(make_recipe("A", user_id="u1"))
        likes.add("A", "u9")

        saved = SavedService(likes, recipes, profiles).load_saved("u9")

        assert saved[0].author_name == "ann"
