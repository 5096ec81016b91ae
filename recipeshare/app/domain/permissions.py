from __future__ import annotations

from typing import Optional

from recipeshare.app.domain.models import Comment, CommentPermissions, Recipe


def is_recipe_owner(recipe: Recipe, user_id: Optional[str]) -> bool:
    return bool(user_id) and recipe.user_id == user_id


def comment_permissions(
    comment: Comment,
    recipe_owner_id: Optional[str],
    user_id: Optional[str],
) -> CommentPermissions:
    """Authors may edit and delete; the recipe owner may only delete."""
    if not user_id:
        return CommentPermissions()
    is_author = comment.user_id == user_id
    is_moderator = recipe_owner_id == user_id
    return CommentPermissions(can_edit=is_author, can_delete=is_author or is_moderator)
