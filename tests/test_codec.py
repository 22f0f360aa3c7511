from __future__ import annotations

import json

import pytest

from cookassist.domain import (
    Difficulty,
    RecipeCategory,
    dumps_recipe,
    loads_recipe,
    recipe_from_dict,
    recipe_to_dict,
)
from cookassist.errors import MalformedRecordError
from tests.utils import make_recipe


def test_recipe_to_dict_uses_record_keys() -> None:
    recipe = make_recipe(name="Soup", recipe_id="s1", categories={RecipeCategory.LUNCH, RecipeCategory.ITALIAN})
    data = recipe_to_dict(recipe)
    assert data["id"] == "s1"
    assert data["mainPhotoUri"] is None
    assert data["categories"] == ["ITALIAN", "LUNCH"]
    assert data["steps"][0] == {
        "stepNumber": 1,
        "instruction": "Do step 1",
        "durationMinutes": 5,
        "mediaUris": [],
        "tips": None,
    }
    assert data["isCustom"] is False
    assert data["difficulty"] == "EASY"


def test_dumps_recipe_is_indented_json() -> None:
    text = dumps_recipe(make_recipe(name="Żurek"))
    assert text.endswith("\n")
    assert "Żurek" in text
    assert json.loads(text)["name"] == "Żurek"


def test_loads_recipe_round_trip() -> None:
    recipe = make_recipe(name="Soup", recipe_id="s1")
    assert loads_recipe(dumps_recipe(recipe)) == recipe


def test_recipe_from_dict_defaults() -> None:
    recipe = recipe_from_dict({"name": "Toast"})
    assert recipe.id == ""
    assert recipe.servings == 1
    assert recipe.difficulty is Difficulty.MEDIUM
    assert recipe.categories == frozenset()
    assert recipe.steps == ()


@pytest.mark.parametrize(
    "text",
    (
        "not json",
        "[]",
        '{"description": "no name"}',
        '{"name": "x", "difficulty": "IMPOSSIBLE"}',
        '{"name": "x", "categories": ["SPACE_FOOD"]}',
        '{"name": "x", "steps": ["just a string"]}',
        '{"name": "x", "servings": "several"}',
    ),
)
def test_loads_recipe_malformed(text: str) -> None:
    with pytest.raises(MalformedRecordError):
        loads_recipe(text)


def test_recipe_from_dict_keeps_explicit_servings() -> None:
    assert recipe_from_dict({"name": "Air", "servings": 0}).servings == 0
    assert recipe_from_dict({"name": "Air", "servings": None}).servings == 1
