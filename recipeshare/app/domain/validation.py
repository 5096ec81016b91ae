# recipeshare/app/domain/validation.py
"""
Input checks run before any write reaches the backend.

Each check raises RecipeValidationError with the message shown inline to
the user; nothing here talks to the network.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Literal, Optional, Union

from recipeshare.app.domain.errors import RecipeValidationError
from recipeshare.app.domain.models import CATEGORIES, Difficulty, Recipe, RecipePayload, split_lines

AuthMode = Literal["signin", "signup"]

DIFFICULTY_VALUES = tuple(level.value for level in Difficulty)


def normalize_lines(lines: Iterable[str] | None) -> list[str]:
    """Trim every line and drop the blank ones, keeping order."""
    if not lines:
        return []
    return [line.strip() for line in lines if line and line.strip()]


def join_lines(lines: Iterable[str]) -> str:
    return "\n".join(normalize_lines(lines))


def parse_lines(text: str | None) -> list[str]:
    return normalize_lines(split_lines(text))


def _optional_text(value: str | None) -> str | None:
    stripped = (value or "").strip()
    return stripped or None


def parse_cooking_time(raw: Union[str, int, None]) -> Optional[int]:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        minutes = raw
    else:
        text = raw.strip()
        if not text:
            return None
        try:
            minutes = int(text)
        except ValueError:
            raise RecipeValidationError("Cooking time must be a positive number.", field="cooking_time") from None
    if minutes < 1:
        raise RecipeValidationError("Cooking time must be a positive number.", field="cooking_time")
    return minutes


def validate_title(title: str | None) -> str:
    cleaned = (title or "").strip()
    if not cleaned:
        raise RecipeValidationError("Recipe title is required.", field="title")
    return cleaned


def validate_difficulty(value: str | None) -> str | None:
    if not value:
        return None
    if value not in DIFFICULTY_VALUES:
        raise RecipeValidationError(
            f"Difficulty must be one of: {', '.join(DIFFICULTY_VALUES)}.", field="difficulty"
        )
    return value


def validate_category(value: str | None) -> str | None:
    cleaned = _optional_text(value)
    if cleaned is None:
        return None
    if cleaned not in CATEGORIES:
        raise RecipeValidationError(
            f"Category must be one of: {', '.join(CATEGORIES)}.", field="category"
        )
    return cleaned


def validate_recipe(
    *,
    title: str | None,
    ingredients: Iterable[str] | None,
    instructions: Iterable[str] | None,
    description: str | None = None,
    cooking_time: Union[str, int, None] = None,
    difficulty: str | None = None,
    category: str | None = None,
) -> RecipePayload:
    """
    Validate the recipe form and build the row to store.

    Checks run in form order so the first problem is the one reported.
    """
    clean_title = validate_title(title)

    ingredient_lines = normalize_lines(ingredients)
    if not ingredient_lines:
        raise RecipeValidationError("At least one ingredient is required.", field="ingredients")

    instruction_lines = normalize_lines(instructions)
    if not instruction_lines:
        raise RecipeValidationError("At least one instruction step is required.", field="instructions")

    return RecipePayload(
        title=clean_title,
        description=_optional_text(description),
        ingredients=join_lines(ingredient_lines),
        instructions=join_lines(instruction_lines),
        cooking_time=parse_cooking_time(cooking_time),
        difficulty=validate_difficulty(difficulty),
        category=validate_category(category),
    )


@dataclass
class RecipeDraft:
    """Raw recipe form input, one entry per ingredient/instruction row."""
    title: str = ""
    ingredients: list[str] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)
    description: Optional[str] = None
    cooking_time: Union[str, int, None] = None
    difficulty: Optional[str] = None
    category: Optional[str] = None

    @classmethod
    def from_recipe(cls, recipe: Recipe) -> "RecipeDraft":
        return cls(
            title=recipe.title,
            ingredients=recipe.ingredient_lines,
            instructions=recipe.instruction_lines,
            description=recipe.description,
            cooking_time=recipe.cooking_time,
            difficulty=recipe.difficulty,
            category=recipe.category,
        )

    def validate(self) -> RecipePayload:
        return validate_recipe(
            title=self.title,
            ingredients=self.ingredients,
            instructions=self.instructions,
            description=self.description,
            cooking_time=self.cooking_time,
            difficulty=self.difficulty,
            category=self.category,
        )


def validate_handle(user_name: str | None) -> str:
    cleaned = (user_name or "").strip()
    if not cleaned:
        raise RecipeValidationError("Username is required.", field="user_name")
    return cleaned


def validate_profile_changes(
    user_name: str | None, full_name: str | None, bio: str | None
) -> dict[str, str | None]:
    return {
        "user_name": validate_handle(user_name),
        "full_name": _optional_text(full_name),
        "bio": _optional_text(bio),
    }


def validate_comment_text(text: str | None) -> str:
    cleaned = (text or "").strip()
    if not cleaned:
        raise RecipeValidationError("Comment cannot be empty.", field="comment_text")
    return cleaned


def validate_credentials(email: str | None, password: str | None) -> tuple[str, str]:
    if not email or not password:
        raise RecipeValidationError("Please enter both email and password.")
    return email, password


def parse_auth_mode(raw: str | None) -> AuthMode:
    return "signup" if raw == "signup" else "signin"
