from __future__ import annotations

import re

from .domain import Recipe
from .errors import ValidationError


RECIPE_ID_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


def validate_recipe_id(recipe_id: str) -> None:
    if not RECIPE_ID_RE.match(recipe_id) or ".." in recipe_id:
        raise ValidationError(f"{recipe_id!r}: recipe ids may only contain letters, digits, '_', '-' and '.'")


def validate_recipe(recipe: Recipe) -> None:
    label = recipe.id or recipe.name or "<unnamed>"
    if recipe.id:
        validate_recipe_id(recipe.id)
    if not recipe.name.strip():
        raise ValidationError(f"{label}: recipe name must not be empty")

    for position, step in enumerate(recipe.steps):
        if step.step_number != position + 1:
            raise ValidationError(
                f"{label}: step {position + 1} is numbered {step.step_number}; steps must be contiguous from 1"
            )

    if recipe.created_at and recipe.updated_at < recipe.created_at:
        raise ValidationError(f"{label}: updated_at must not precede created_at")

    if recipe.cooking_time < 0 or recipe.prep_time < 0:
        raise ValidationError(f"{label}: times must not be negative")
    if recipe.servings < 1:
        raise ValidationError(f"{label}: servings must be at least 1")


__all__ = ["validate_recipe", "validate_recipe_id"]
