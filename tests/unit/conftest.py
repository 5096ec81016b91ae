"""
In-memory repository stubs shared by the service and router tests.

Each stub keeps its rows in plain lists and records every write, so tests
can assert both on results and on what was (or was not) sent to the
backend.
"""
from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from itertools import count
from typing import Optional, Sequence

import pytest

from recipeshare.app.domain.errors import BackendRequestError
from recipeshare.app.domain.models import Comment, Like, Profile, Recipe, RecipePayload
from recipeshare.app.domain.view_state import ViewStateStore
from recipeshare.app.infra.auth.base import AuthGateway, AuthSession, AuthUser
from recipeshare.app.infra.db.base import (
    CommentRepository,
    LikeRepository,
    ProfileRepository,
    RecipeRepository,
)

_clock = count(1)
_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


def next_timestamp() -> str:
    """Strictly increasing ISO timestamps so ordering is deterministic."""
    return (_EPOCH + timedelta(seconds=next(_clock))).isoformat()


def build_recipe(
    recipe_id: str,
    user_id: str = "user-1",
    title: str = "Recipe",
    **overrides: object,
) -> Recipe:
    fields: dict[str, object] = {
        "ingredients": "1 cup flour\n2 eggs",
        "instructions": "Mix\nBake",
        "created_at": next_timestamp(),
    }
    fields.update(overrides)
    return Recipe(id=recipe_id, user_id=user_id, title=title, **fields)  # type: ignore[arg-type]


class ProfileRepositoryStub(ProfileRepository):
    def __init__(self) -> None:
        self.profiles: dict[str, Profile] = {}
        self.batch_calls: list[list[str]] = []
        self.updates: list[tuple[str, dict[str, Optional[str]]]] = []
        self.should_fail = False
        self.taken_handles: set[str] = set()

    def add(self, user_id: str, user_name: str, full_name: Optional[str] = None) -> Profile:
        profile = Profile(id=user_id, user_name=user_name, full_name=full_name, created_at=next_timestamp())
        self.profiles[user_id] = profile
        return profile

    def get_profile(self, user_id: str) -> Optional[Profile]:
        if self.should_fail:
            raise BackendRequestError("get profile", "Simulated profile failure")
        return self.profiles.get(user_id)

    def get_profiles(self, user_ids: Sequence[str]) -> list[Profile]:
        self.batch_calls.append(list(user_ids))
        if self.should_fail:
            raise BackendRequestError("get profiles", "Simulated profile failure")
        return [self.profiles[uid] for uid in user_ids if uid in self.profiles]

    def update_profile(self, user_id: str, changes: dict[str, Optional[str]]) -> None:
        if changes.get("user_name") in self.taken_handles:
            raise BackendRequestError(
                "update profile",
                'duplicate key value violates unique constraint "profiles_user_name_key"',
            )
        self.updates.append((user_id, changes))
        current = self.profiles[user_id]
        self.profiles[user_id] = replace(current, **changes)


class RecipeRepositoryStub(RecipeRepository):
    def __init__(self) -> None:
        self.recipes: list[Recipe] = []
        self.writes: list[tuple[str, str]] = []
        self.list_limits: list[int] = []
        self.should_fail_list = False
        self.should_fail_get = False
        self.should_fail_count = False
        self.echo_updates = True
        self._ids = count(1)

    def add(self, recipe: Recipe) -> Recipe:
        self.recipes.append(recipe)
        return recipe

    def list_recent(self, limit: int = 20) -> list[Recipe]:
        self.list_limits.append(limit)
        if self.should_fail_list:
            raise BackendRequestError("list recipes", "Simulated list failure")
        newest_first = sorted(self.recipes, key=lambda r: r.created_at or "", reverse=True)
        return newest_first[:limit]

    def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        if self.should_fail_get:
            raise BackendRequestError("get recipe", "Simulated get failure")
        return next((r for r in self.recipes if r.id == recipe_id), None)

    def get_recipes(self, recipe_ids: Sequence[str]) -> list[Recipe]:
        wanted = set(recipe_ids)
        # mimic the backend: "in" lookups come back in storage order
        return sorted((r for r in self.recipes if r.id in wanted), key=lambda r: r.id)

    def count_by_author(self, user_id: str) -> int:
        if self.should_fail_count:
            raise BackendRequestError("count recipes", "Simulated count failure")
        return sum(1 for r in self.recipes if r.user_id == user_id)

    def insert_recipe(self, user_id: str, payload: RecipePayload) -> Recipe:
        recipe = Recipe(id=f"new-{next(self._ids)}", user_id=user_id, created_at=next_timestamp(), **payload.to_row())
        self.recipes.append(recipe)
        self.writes.append(("insert", recipe.id))
        return recipe

    def update_recipe(self, recipe_id: str, payload: RecipePayload) -> Optional[Recipe]:
        self.writes.append(("update", recipe_id))
        for index, recipe in enumerate(self.recipes):
            if recipe.id == recipe_id:
                self.recipes[index] = replace(recipe, **payload.to_row())
                return self.recipes[index] if self.echo_updates else None
        return None

    def delete_recipe(self, recipe_id: str) -> None:
        self.writes.append(("delete", recipe_id))
        self.recipes = [r for r in self.recipes if r.id != recipe_id]


class LikeRepositoryStub(LikeRepository):
    def __init__(self) -> None:
        self.likes: list[Like] = []
        self.writes: list[tuple[str, str, str]] = []
        self.should_fail_read = False
        self.should_fail_write = False
        self.fail_reads_after_write = False

    def _after_write(self) -> None:
        if self.fail_reads_after_write:
            self.should_fail_read = True

    def add(self, recipe_id: str, user_id: str) -> Like:
        like = Like(recipe_id=recipe_id, user_id=user_id, created_at=next_timestamp())
        self.likes.append(like)
        return like

    def list_for_recipe(self, recipe_id: str) -> list[Like]:
        if self.should_fail_read:
            raise BackendRequestError("list likes", "Simulated like failure")
        return [like for like in self.likes if like.recipe_id == recipe_id]

    def list_for_user(self, user_id: str) -> list[Like]:
        mine = [like for like in self.likes if like.user_id == user_id]
        return sorted(mine, key=lambda like: like.created_at or "", reverse=True)

    def count_by_user(self, user_id: str) -> int:
        if self.should_fail_read:
            raise BackendRequestError("count likes", "Simulated like failure")
        return sum(1 for like in self.likes if like.user_id == user_id)

    def add_like(self, recipe_id: str, user_id: str) -> None:
        if self.should_fail_write:
            raise BackendRequestError("like recipe", "Simulated write failure")
        self.writes.append(("add", recipe_id, user_id))
        self.add(recipe_id, user_id)
        self._after_write()

    def remove_like(self, recipe_id: str, user_id: str) -> None:
        if self.should_fail_write:
            raise BackendRequestError("unlike recipe", "Simulated write failure")
        self.writes.append(("remove", recipe_id, user_id))
        self.likes = [
            like for like in self.likes
            if not (like.recipe_id == recipe_id and like.user_id == user_id)
        ]
        self._after_write()


class CommentRepositoryStub(CommentRepository):
    def __init__(self) -> None:
        self.comments: list[Comment] = []
        self.writes: list[tuple] = []
        self.should_fail_read = False
        self._ids = count(1)

    def add(self, recipe_id: str, user_id: str, text: str) -> Comment:
        comment = Comment(
            id=f"c-{next(self._ids)}",
            recipe_id=recipe_id,
            user_id=user_id,
            comment_text=text,
            created_at=next_timestamp(),
        )
        self.comments.append(comment)
        return comment

    def list_for_recipe(self, recipe_id: str) -> list[Comment]:
        if self.should_fail_read:
            raise BackendRequestError("list comments", "Simulated comment failure")
        mine = [c for c in self.comments if c.recipe_id == recipe_id]
        return sorted(mine, key=lambda c: c.created_at or "", reverse=True)

    def get_comment(self, comment_id: str) -> Optional[Comment]:
        return next((c for c in self.comments if c.id == comment_id), None)

    def insert_comment(self, recipe_id: str, user_id: str, text: str) -> None:
        self.writes.append(("insert", recipe_id, user_id, text))
        self.add(recipe_id, user_id, text)

    def update_comment(self, comment_id: str, author_id: str, text: str, updated_at: str) -> None:
        self.writes.append(("update", comment_id, author_id, text))
        self.comments = [
            replace(c, comment_text=text, updated_at=updated_at)
            if c.id == comment_id and c.user_id == author_id else c
            for c in self.comments
        ]

    def delete_comment(self, comment_id: str, author_id: str) -> None:
        self.writes.append(("delete", comment_id, author_id))
        self.comments = [c for c in self.comments if not (c.id == comment_id and c.user_id == author_id)]


class AuthGatewayStub(AuthGateway):
    def __init__(self) -> None:
        self.tokens: dict[str, AuthUser] = {}
        self.accounts: dict[str, tuple[str, str]] = {}
        self.signed_out: list[str] = []

    def add_session(self, token: str, user_id: str, email: str = "cook@example.com") -> None:
        self.tokens[token] = AuthUser(id=user_id, email=email)

    def get_user(self, access_token: str) -> Optional[AuthUser]:
        return self.tokens.get(access_token)

    def sign_in(self, email: str, password: str) -> AuthSession:
        account = self.accounts.get(email)
        if account is None or account[1] != password:
            raise BackendRequestError("sign in", "Invalid login credentials")
        user = AuthUser(id=account[0], email=email)
        token = f"token-{account[0]}"
        self.tokens[token] = user
        return AuthSession(user=user, access_token=token, refresh_token="refresh", expires_at=3600)

    def sign_up(self, email: str, password: str) -> AuthSession:
        if email in self.accounts:
            raise BackendRequestError("sign up", "User already registered")
        user_id = f"user-{len(self.accounts) + 1}"
        self.accounts[email] = (user_id, password)
        return self.sign_in(email, password)

    def sign_out(self, access_token: str) -> None:
        self.signed_out.append(access_token)
        self.tokens.pop(access_token, None)


@pytest.fixture
def profiles() -> ProfileRepositoryStub:
    return ProfileRepositoryStub()


@pytest.fixture
def recipes() -> RecipeRepositoryStub:
    return RecipeRepositoryStub()


@pytest.fixture
def likes() -> LikeRepositoryStub:
    return LikeRepositoryStub()


@pytest.fixture
def comments() -> CommentRepositoryStub:
    return CommentRepositoryStub()


@pytest.fixture
def auth_gateway() -> AuthGatewayStub:
    return AuthGatewayStub()


@pytest.fixture
def view_states() -> ViewStateStore:
    return ViewStateStore()


@pytest.fixture
def make_recipe():
    return build_recipe
