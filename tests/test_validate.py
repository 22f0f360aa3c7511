from __future__ import annotations

from dataclasses import replace

import pytest

from cookassist.domain import RecipeStep
from cookassist.errors import ValidationError
from cookassist.validate import validate_recipe
from tests.utils import make_recipe


def test_validate_accepts_valid_recipe() -> None:
    validate_recipe(make_recipe())
    validate_recipe(replace(make_recipe(), steps=()))


@pytest.mark.parametrize(
    "changes",
    (
        {"name": "   "},
        {"steps": (RecipeStep(1, "a"), RecipeStep(3, "b"))},
        {"steps": (RecipeStep(0, "a"),)},
        {"created_at": 10, "updated_at": 5},
        {"cooking_time": -1},
        {"prep_time": -5},
        {"servings": 0},
    ),
)
def test_validate_rejects(changes: dict) -> None:
    with pytest.raises(ValidationError):
        validate_recipe(replace(make_recipe(), **changes))


@pytest.mark.parametrize("recipe_id", ("001", "mock_1700000000000", "3f2b9c1e-5d3a-4b8e-9c1f-1a2b3c4d5e6f", "test-001", "v1.2"))
def test_validate_accepts_safe_ids(recipe_id: str) -> None:
    validate_recipe(make_recipe(recipe_id=recipe_id))


@pytest.mark.parametrize("recipe_id", ("../escaped", "/abs", "a/b", "a\\b", "..", "a..b", ".hidden", "sp ace"))
def test_validate_rejects_unsafe_ids(recipe_id: str) -> None:
    with pytest.raises(ValidationError):
        validate_recipe(make_recipe(recipe_id=recipe_id))
