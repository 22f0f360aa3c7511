from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Difficulty(str, Enum):
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


class RecipeCategory(str, Enum):
    # meal type
    BREAKFAST = "BREAKFAST"
    LUNCH = "LUNCH"
    DINNER = "DINNER"
    DESSERT = "DESSERT"
    SNACK = "SNACK"
    APPETIZER = "APPETIZER"
    # dietary
    VEGETARIAN = "VEGETARIAN"
    VEGAN = "VEGAN"
    GLUTEN_FREE = "GLUTEN_FREE"
    DAIRY_FREE = "DAIRY_FREE"
    # cuisine
    ITALIAN = "ITALIAN"
    ASIAN = "ASIAN"
    MEXICAN = "MEXICAN"
    AMERICAN = "AMERICAN"
    GREEK = "GREEK"
    POLISH = "POLISH"
    # occasion
    QUICK_MEAL = "QUICK_MEAL"
    MEAL_PREP = "MEAL_PREP"
    PARTY = "PARTY"
    HOLIDAY = "HOLIDAY"


@dataclass(frozen=True)
class Ingredient:
    name: str
    quantity: str
    notes: str | None = None


@dataclass(frozen=True)
class RecipeStep:
    step_number: int
    instruction: str
    duration_minutes: int | None = None
    media: tuple[str, ...] = ()
    tips: str | None = None


@dataclass(frozen=True)
class Recipe:
    id: str
    name: str
    description: str = ""
    main_photo: str | None = None
    ingredients: tuple[Ingredient, ...] = ()
    steps: tuple[RecipeStep, ...] = ()
    cooking_time: int = 0
    prep_time: int = 0
    servings: int = 1
    difficulty: Difficulty = Difficulty.MEDIUM
    categories: frozenset[RecipeCategory] = field(default_factory=frozenset)
    tags: tuple[str, ...] = ()
    created_at: int = 0
    updated_at: int = 0
    is_custom: bool = False

    def matches(self, query: str) -> bool:
        needle = query.lower()
        if needle in self.name.lower() or needle in self.description.lower():
            return True
        return any(needle in ingredient.name.lower() for ingredient in self.ingredients)
