from __future__ import annotations

import time
from typing import Iterable, Protocol

from loguru import logger

from .domain import Recipe, RecipeCategory
from .result import Result, Success


class RemoteRecipeSource(Protocol):
    def fetch_all(self) -> Result[list[Recipe]]: ...

    def fetch_by_id(self, recipe_id: str) -> Result[Recipe | None]: ...

    def search(self, query: str) -> Result[list[Recipe]]: ...

    def fetch_by_category(self, category: RecipeCategory) -> Result[list[Recipe]]: ...

    def upload(self, recipe: Recipe) -> Result[str]: ...

    def update(self, recipe: Recipe) -> Result[None]: ...

    def delete(self, recipe_id: str) -> Result[None]: ...


class StaticRemoteSource:
    """In-process stand-in for the recipe API serving a fixed catalogue."""

    def __init__(self, recipes: Iterable[Recipe], network_delay_ms: int = 0) -> None:
        self._recipes = tuple(recipes)
        self._delay = network_delay_ms / 1000.0

    def fetch_all(self) -> Result[list[Recipe]]:
        self._simulate_latency()
        logger.debug("Remote served {} recipes", len(self._recipes))
        return Success(list(self._recipes))

    def fetch_by_id(self, recipe_id: str) -> Result[Recipe | None]:
        self._simulate_latency()
        found = next((recipe for recipe in self._recipes if recipe.id == recipe_id), None)
        logger.debug("Remote lookup for {}: {}", recipe_id, "found" if found else "not found")
        return Success(found)

    def search(self, query: str) -> Result[list[Recipe]]:
        self._simulate_latency()
        return Success([recipe for recipe in self._recipes if recipe.matches(query)])

    def fetch_by_category(self, category: RecipeCategory) -> Result[list[Recipe]]:
        self._simulate_latency()
        return Success([recipe for recipe in self._recipes if category in recipe.categories])

    def upload(self, recipe: Recipe) -> Result[str]:
        self._simulate_latency()
        recipe_id = recipe.id or f"mock_{int(time.time() * 1000)}"
        logger.info("Remote accepted upload of {!r} as {}", recipe.name, recipe_id)
        return Success(recipe_id)

    def update(self, recipe: Recipe) -> Result[None]:
        self._simulate_latency()
        logger.info("Remote accepted update of {}", recipe.id)
        return Success(None)

    def delete(self, recipe_id: str) -> Result[None]:
        self._simulate_latency()
        logger.info("Remote accepted delete of {}", recipe_id)
        return Success(None)

    def _simulate_latency(self) -> None:
        if self._delay > 0:
            time.sleep(self._delay)
