from __future__ import annotations

import json
from typing import Any

from ..errors import MalformedRecordError
from .models import Difficulty, Ingredient, Recipe, RecipeCategory, RecipeStep


def recipe_to_dict(recipe: Recipe) -> dict[str, Any]:
    return {
        "id": recipe.id,
        "name": recipe.name,
        "description": recipe.description,
        "mainPhotoUri": recipe.main_photo,
        "ingredients": [
            {"name": ing.name, "quantity": ing.quantity, "notes": ing.notes}
            for ing in recipe.ingredients
        ],
        "steps": [
            {
                "stepNumber": step.step_number,
                "instruction": step.instruction,
                "durationMinutes": step.duration_minutes,
                "mediaUris": list(step.media),
                "tips": step.tips,
            }
            for step in recipe.steps
        ],
        "cookingTime": recipe.cooking_time,
        "prepTime": recipe.prep_time,
        "servings": recipe.servings,
        "difficulty": recipe.difficulty.value,
        "categories": sorted(category.value for category in recipe.categories),
        "tags": list(recipe.tags),
        "createdAt": recipe.created_at,
        "updatedAt": recipe.updated_at,
        "isCustom": recipe.is_custom,
    }


def recipe_from_dict(data: Any) -> Recipe:
    if not isinstance(data, dict):
        raise MalformedRecordError("recipe record must be a mapping")
    try:
        return Recipe(
            id=str(data.get("id") or ""),
            name=str(data["name"]),
            description=str(data.get("description") or ""),
            main_photo=_optional_str(data.get("mainPhotoUri")),
            ingredients=tuple(_ingredient_from_dict(item) for item in data.get("ingredients") or []),
            steps=tuple(_step_from_dict(item) for item in data.get("steps") or []),
            cooking_time=int(data.get("cookingTime") or 0),
            prep_time=int(data.get("prepTime") or 0),
            servings=1 if data.get("servings") is None else int(data["servings"]),
            difficulty=Difficulty(data.get("difficulty") or Difficulty.MEDIUM.value),
            categories=frozenset(RecipeCategory(value) for value in data.get("categories") or []),
            tags=tuple(str(tag) for tag in data.get("tags") or []),
            created_at=int(data.get("createdAt") or 0),
            updated_at=int(data.get("updatedAt") or 0),
            is_custom=bool(data.get("isCustom", False)),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise MalformedRecordError(f"invalid recipe record: {exc}") from exc


def dumps_recipe(recipe: Recipe) -> str:
    return json.dumps(recipe_to_dict(recipe), indent=2, ensure_ascii=False) + "\n"


def loads_recipe(text: str) -> Recipe:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedRecordError(f"invalid JSON: {exc}") from exc
    return recipe_from_dict(data)


def _ingredient_from_dict(data: Any) -> Ingredient:
    if not isinstance(data, dict):
        raise TypeError("ingredient must be a mapping")
    return Ingredient(
        name=str(data["name"]),
        quantity=str(data.get("quantity") or ""),
        notes=_optional_str(data.get("notes")),
    )


def _step_from_dict(data: Any) -> RecipeStep:
    if not isinstance(data, dict):
        raise TypeError("step must be a mapping")
    duration = data.get("durationMinutes")
    return RecipeStep(
        step_number=int(data["stepNumber"]),
        instruction=str(data["instruction"]),
        duration_minutes=None if duration is None else int(duration),
        media=tuple(str(uri) for uri in data.get("mediaUris") or []),
        tips=_optional_str(data.get("tips")),
    )


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)
