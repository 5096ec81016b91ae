# recipeshare/app/domain/models.py
"""
Domain models for recipes, profiles, likes and comments.
These are pure data structures with no infrastructure dependencies.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Difficulty(str, Enum):
    """Difficulty levels a recipe can be tagged with."""
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


CATEGORIES: tuple[str, ...] = (
    "Breakfast",
    "Lunch",
    "Dinner",
    "Dessert",
    "Snack",
    "Appetizer",
    "Beverage",
    "Other",
)


def split_lines(text: str | None) -> list[str]:
    """Parse newline-joined text back into its non-blank lines."""
    if not text:
        return []
    return [line for line in text.split("\n") if line.strip()]


@dataclass
class Profile:
    """Public profile attached one-to-one to an auth identity."""
    id: str
    user_name: str
    full_name: Optional[str] = None
    bio: Optional[str] = None
    created_at: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.full_name or self.user_name


@dataclass
class Recipe:
    """
    A recipe owned by exactly one profile.

    Ingredients and instructions are stored as newline-joined text, the
    way the `recipes` table keeps them.
    """
    id: str
    user_id: str
    title: str
    ingredients: str
    instructions: str
    description: Optional[str] = None
    cooking_time: Optional[int] = None  # minutes
    difficulty: Optional[str] = None
    category: Optional[str] = None
    created_at: Optional[str] = None

    # Filled in by the fetchers after the in-memory join
    author: Optional[Profile] = None

    @property
    def ingredient_lines(self) -> list[str]:
        return split_lines(self.ingredients)

    @property
    def instruction_lines(self) -> list[str]:
        return split_lines(self.instructions)

    @property
    def author_name(self) -> Optional[str]:
        return self.author.display_name if self.author else None


@dataclass
class Like:
    recipe_id: str
    user_id: str
    created_at: Optional[str] = None


@dataclass
class Comment:
    id: str
    recipe_id: str
    user_id: str
    comment_text: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    author: Optional[Profile] = None

    @property
    def is_edited(self) -> bool:
        return self.updated_at is not None and self.updated_at != self.created_at


@dataclass
class LikeSummary:
    count: int = 0
    liked: bool = False


@dataclass
class CommentPermissions:
    can_edit: bool = False
    can_delete: bool = False


@dataclass
class CommentView:
    comment: Comment
    permissions: CommentPermissions


@dataclass
class RecipeDetail:
    """Everything the detail view renders for one recipe."""
    recipe: Recipe
    is_owner: bool
    likes: LikeSummary = field(default_factory=LikeSummary)
    comments: list[CommentView] = field(default_factory=list)


@dataclass
class ProfileStats:
    profile: Profile
    recipe_count: int = 0
    saved_count: int = 0


@dataclass
class RecipePayload:
    """Validated recipe fields, ready to be written to the `recipes` table."""
    title: str
    ingredients: str
    instructions: str
    description: Optional[str] = None
    cooking_time: Optional[int] = None
    difficulty: Optional[str] = None
    category: Optional[str] = None

    def to_row(self) -> dict[str, str | int | None]:
        return {
            "title": self.title,
            "description": self.description,
            "ingredients": self.ingredients,
            "instructions": self.instructions,
            "cooking_time": self.cooking_time,
            "difficulty": self.difficulty,
            "category": self.category,
        }
