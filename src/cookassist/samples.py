from __future__ import annotations

from importlib import resources
from typing import Any

import yaml

from .domain import Recipe, recipe_from_dict
from .errors import MalformedRecordError


SAMPLE_RESOURCE = "sample_recipes.yaml"


def load_sample_recipes() -> list[Recipe]:
    text = resources.files("cookassist.data").joinpath(SAMPLE_RESOURCE).read_text(encoding="utf-8")
    return parse_recipe_catalogue(text)


def parse_recipe_catalogue(text: str) -> list[Recipe]:
    try:
        data: Any = yaml.safe_load(text) or []
    except yaml.YAMLError as exc:
        raise MalformedRecordError("invalid recipe catalogue YAML") from exc
    if not isinstance(data, list):
        raise MalformedRecordError("recipe catalogue must be a list of recipes")
    return [recipe_from_dict(item) for item in data]
