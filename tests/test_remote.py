from __future__ import annotations

import pytest

from cookassist.domain import RecipeCategory
from cookassist.errors import MalformedRecordError
from cookassist.remote import StaticRemoteSource
from cookassist.result import Success
from cookassist.samples import load_sample_recipes, parse_recipe_catalogue
from cookassist.validate import validate_recipe
from tests.utils import make_recipe


def test_load_sample_recipes() -> None:
    recipes = load_sample_recipes()
    assert [r.id for r in recipes] == ["001", "002", "003", "004"]
    assert recipes[0].name == "Spaghetti Carbonara"
    assert RecipeCategory.POLISH in recipes[3].categories
    for recipe in recipes:
        assert recipe.is_custom is False
        validate_recipe(recipe)


def test_parse_recipe_catalogue_errors() -> None:
    assert parse_recipe_catalogue("") == []
    with pytest.raises(MalformedRecordError):
        parse_recipe_catalogue("name: not a list\n")
    with pytest.raises(MalformedRecordError):
        parse_recipe_catalogue("- [unclosed\n")


def test_static_remote_queries() -> None:
    remote = StaticRemoteSource(
        [
            make_recipe(name="Pancakes", recipe_id="p", categories={RecipeCategory.BREAKFAST}),
            make_recipe(name="Stew", recipe_id="s"),
        ]
    )
    assert [r.id for r in remote.fetch_all().unwrap()] == ["p", "s"]
    assert remote.fetch_by_id("s").unwrap().name == "Stew"
    assert remote.fetch_by_id("missing") == Success(None)
    assert [r.id for r in remote.search("PAN").unwrap()] == ["p"]
    assert [r.id for r in remote.fetch_by_category(RecipeCategory.BREAKFAST).unwrap()] == ["p"]


def test_static_remote_writes_are_accepted() -> None:
    remote = StaticRemoteSource([])
    assert remote.upload(make_recipe(recipe_id="keep")).unwrap() == "keep"
    assert remote.upload(make_recipe()).unwrap().startswith("mock_")
    assert remote.update(make_recipe(recipe_id="x")) == Success(None)
    assert remote.delete("x") == Success(None)
    assert remote.fetch_all().unwrap() == []


def test_static_remote_simulates_latency(monkeypatch: pytest.MonkeyPatch) -> None:
    slept: list[float] = []
    monkeypatch.setattr("cookassist.remote.time.sleep", slept.append)
    StaticRemoteSource([], network_delay_ms=250).fetch_all()
    StaticRemoteSource([]).fetch_all()
    assert slept == [0.25]
