from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from postgrest.exceptions import APIError
from supabase import Client

from recipeshare.app.domain.errors import BackendRequestError
from recipeshare.app.domain.models import Comment, Like, Profile, Recipe, RecipePayload
from recipeshare.app.infra.db.base import (
    CommentRepository,
    LikeRepository,
    ProfileRepository,
    RecipeRepository,
)

logger = logging.getLogger(__name__)

Row = dict[str, Any]

PROFILE_COLUMNS = "id, user_name, full_name, bio, created_at"
COMMENT_WITH_AUTHOR = "*, profiles(user_name, full_name)"


def format_timestamp(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat()
    return str(value)


def _safe_str(value: object) -> str | None:
    return str(value) if value else None


def _safe_int(value: object) -> int | None:
    if value is None or value == "":
        return None
    return int(value)


def _row_to_profile(row: Row) -> Profile:
    return Profile(
        id=str(row["id"]),
        user_name=str(row.get("user_name") or ""),
        full_name=_safe_str(row.get("full_name")),
        bio=_safe_str(row.get("bio")),
        created_at=format_timestamp(row.get("created_at")),
    )


def _row_to_recipe(row: Row) -> Recipe:
    return Recipe(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        title=str(row.get("title") or ""),
        ingredients=str(row.get("ingredients") or ""),
        instructions=str(row.get("instructions") or ""),
        description=_safe_str(row.get("description")),
        cooking_time=_safe_int(row.get("cooking_time")),
        difficulty=_safe_str(row.get("difficulty")),
        category=_safe_str(row.get("category")),
        created_at=format_timestamp(row.get("created_at")),
    )


def _row_to_like(row: Row) -> Like:
    return Like(
        recipe_id=str(row["recipe_id"]),
        user_id=str(row["user_id"]),
        created_at=format_timestamp(row.get("created_at")),
    )


def _row_to_comment(row: Row) -> Comment:
    embedded = row.get("profiles")
    author = None
    if isinstance(embedded, dict):
        author = Profile(
            id=str(row["user_id"]),
            user_name=str(embedded.get("user_name") or ""),
            full_name=_safe_str(embedded.get("full_name")),
        )
    return Comment(
        id=str(row["id"]),
        recipe_id=str(row["recipe_id"]),
        user_id=str(row["user_id"]),
        comment_text=str(row.get("comment_text") or ""),
        created_at=format_timestamp(row.get("created_at")),
        updated_at=format_timestamp(row.get("updated_at")),
        author=author,
    )


def _execute(query: Any, operation: str) -> Any:
    """Run a query builder, translating backend failures into BackendRequestError."""
    try:
        return query.execute()
    except APIError as error:
        message = getattr(error, "message", None) or str(error)
        logger.error("Backend error during %s: %s", operation, message)
        raise BackendRequestError(operation, message) from error
    except (ConnectionError, TimeoutError) as error:
        logger.error("Network error during %s: %s", operation, error)
        raise BackendRequestError(operation, str(error)) from error


def _rows(result: Any) -> list[Row]:
    return list(getattr(result, "data", None) or [])


def _count(result: Any) -> int:
    return getattr(result, "count", 0) or 0


class SupabaseProfileRepository(ProfileRepository):
    TABLE_NAME = "profiles"

    def __init__(self, client: Client):
        self._client = client

    def get_profile(self, user_id: str) -> Optional[Profile]:
        result = _execute(
            self._client.table(self.TABLE_NAME).select(PROFILE_COLUMNS).eq("id", user_id).limit(1),
            "get profile",
        )
        rows = _rows(result)
        return _row_to_profile(rows[0]) if rows else None

    def get_profiles(self, user_ids: Sequence[str]) -> list[Profile]:
        ids = [str(uid) for uid in user_ids if uid]
        if not ids:
            return []
        result = _execute(
            self._client.table(self.TABLE_NAME).select("id, user_name, full_name").in_("id", ids),
            "get profiles",
        )
        return [_row_to_profile(row) for row in _rows(result)]

    def update_profile(self, user_id: str, changes: dict[str, Optional[str]]) -> None:
        _execute(
            self._client.table(self.TABLE_NAME).update(changes).eq("id", user_id),
            "update profile",
        )
        logger.info("Profile updated: id=%s", user_id)


class SupabaseRecipeRepository(RecipeRepository):
    TABLE_NAME = "recipes"

    def __init__(self, client: Client):
        self._client = client

    def list_recent(self, limit: int = 20) -> list[Recipe]:
        result = _execute(
            self._client.table(self.TABLE_NAME)
            .select("*")
            .order("created_at", desc=True)
            .limit(limit),
            "list recipes",
        )
        return [_row_to_recipe(row) for row in _rows(result)]

    def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        result = _execute(
            self._client.table(self.TABLE_NAME).select("*").eq("id", recipe_id).limit(1),
            "get recipe",
        )
        rows = _rows(result)
        return _row_to_recipe(rows[0]) if rows else None

    def get_recipes(self, recipe_ids: Sequence[str]) -> list[Recipe]:
        ids = [str(rid) for rid in recipe_ids if rid]
        if not ids:
            return []
        result = _execute(
            self._client.table(self.TABLE_NAME).select("*").in_("id", ids),
            "get recipes",
        )
        return [_row_to_recipe(row) for row in _rows(result)]

    def count_by_author(self, user_id: str) -> int:
        result = _execute(
            self._client.table(self.TABLE_NAME)
            .select("id", count="exact")
            .eq("user_id", user_id)
            .limit(1),
            "count recipes",
        )
        return _count(result)

    def insert_recipe(self, user_id: str, payload: RecipePayload) -> Recipe:
        row = {"user_id": user_id, **payload.to_row()}
        result = _execute(self._client.table(self.TABLE_NAME).insert(row), "create recipe")

        rows = _rows(result)
        if not rows:
            raise BackendRequestError("create recipe", "Recipe was not created.")

        recipe = _row_to_recipe(rows[0])
        logger.info("Created recipe: id=%s, user=%s", recipe.id, user_id)
        return recipe

    def update_recipe(self, recipe_id: str, payload: RecipePayload) -> Optional[Recipe]:
        result = _execute(
            self._client.table(self.TABLE_NAME).update(payload.to_row()).eq("id", recipe_id),
            "update recipe",
        )
        logger.info("Updated recipe: id=%s", recipe_id)
        rows = _rows(result)
        return _row_to_recipe(rows[0]) if rows else None

    def delete_recipe(self, recipe_id: str) -> None:
        _execute(self._client.table(self.TABLE_NAME).delete().eq("id", recipe_id), "delete recipe")
        logger.info("Deleted recipe: id=%s", recipe_id)


class SupabaseLikeRepository(LikeRepository):
    TABLE_NAME = "likes"

    def __init__(self, client: Client):
        self._client = client

    def list_for_recipe(self, recipe_id: str) -> list[Like]:
        result = _execute(
            self._client.table(self.TABLE_NAME).select("user_id, recipe_id").eq("recipe_id", recipe_id),
            "list likes",
        )
        return [_row_to_like(row) for row in _rows(result)]

    def list_for_user(self, user_id: str) -> list[Like]:
        result = _execute(
            self._client.table(self.TABLE_NAME)
            .select("recipe_id, user_id, created_at")
            .eq("user_id", user_id)
            .order("created_at", desc=True),
            "list saved",
        )
        return [_row_to_like(row) for row in _rows(result)]

    def count_by_user(self, user_id: str) -> int:
        result = _execute(
            self._client.table(self.TABLE_NAME)
            .select("recipe_id", count="exact")
            .eq("user_id", user_id)
            .limit(1),
            "count likes",
        )
        return _count(result)

    def add_like(self, recipe_id: str, user_id: str) -> None:
        _execute(
            self._client.table(self.TABLE_NAME).insert({"recipe_id": recipe_id, "user_id": user_id}),
            "like recipe",
        )

    def remove_like(self, recipe_id: str, user_id: str) -> None:
        _execute(
            self._client.table(self.TABLE_NAME)
            .delete()
            .eq("recipe_id", recipe_id)
            .eq("user_id", user_id),
            "unlike recipe",
        )


class SupabaseCommentRepository(CommentRepository):
    TABLE_NAME = "comments"

    def __init__(self, client: Client):
        self._client = client

    def list_for_recipe(self, recipe_id: str) -> list[Comment]:
        result = _execute(
            self._client.table(self.TABLE_NAME)
            .select(COMMENT_WITH_AUTHOR)
            .eq("recipe_id", recipe_id)
            .order("created_at", desc=True),
            "list comments",
        )
        return [_row_to_comment(row) for row in _rows(result)]

    def get_comment(self, comment_id: str) -> Optional[Comment]:
        result = _execute(
            self._client.table(self.TABLE_NAME).select("*").eq("id", comment_id).limit(1),
            "get comment",
        )
        rows = _rows(result)
        return _row_to_comment(rows[0]) if rows else None

    def insert_comment(self, recipe_id: str, user_id: str, text: str) -> None:
        _execute(
            self._client.table(self.TABLE_NAME).insert(
                {"recipe_id": recipe_id, "user_id": user_id, "comment_text": text}
            ),
            "post comment",
        )
        logger.info("Comment posted: recipe=%s, user=%s", recipe_id, user_id)

    def update_comment(self, comment_id: str, author_id: str, text: str, updated_at: str) -> None:
        _execute(
            self._client.table(self.TABLE_NAME)
            .update({"comment_text": text, "updated_at": updated_at})
            .eq("id", comment_id)
            .eq("user_id", author_id),
            "edit comment",
        )

    def delete_comment(self, comment_id: str, author_id: str) -> None:
        _execute(
            self._client.table(self.TABLE_NAME)
            .delete()
            .eq("id", comment_id)
            .eq("user_id", author_id),
            "delete comment",
        )
