from .codec import dumps_recipe, loads_recipe, recipe_from_dict, recipe_to_dict
from .models import Difficulty, Ingredient, Recipe, RecipeCategory, RecipeStep

__all__ = [
    "Difficulty",
    "Ingredient",
    "Recipe",
    "RecipeCategory",
    "RecipeStep",
    "dumps_recipe",
    "loads_recipe",
    "recipe_from_dict",
    "recipe_to_dict",
]
