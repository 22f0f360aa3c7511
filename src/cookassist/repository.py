"""Cache-first recipe repository.

Ordinary reads and writes go to the local store only. The remote source
is consulted solely by :meth:`CachedRecipeRepository.refresh` and by
:meth:`CachedRecipeRepository.get_by_id_with_refresh` with
``force_refresh=True``.
"""

from __future__ import annotations

from loguru import logger

from .domain import Recipe, RecipeCategory
from .errors import RemoteError
from .remote import RemoteRecipeSource
from .result import Failure, Result, Success
from .storage import FileRecipeStore


class CachedRecipeRepository:
    def __init__(self, local: FileRecipeStore, remote: RemoteRecipeSource) -> None:
        self.local = local
        self.remote = remote

    def get_all(self) -> Result[list[Recipe]]:
        logger.debug("Getting all recipes from cache")
        return self.local.get_all()

    def get_by_id(self, recipe_id: str) -> Result[Recipe | None]:
        logger.debug("Getting recipe {} from cache", recipe_id)
        return self.local.get_by_id(recipe_id)

    def search(self, query: str) -> Result[list[Recipe]]:
        logger.debug("Searching cached recipes for {!r}", query)
        return self.local.search(query)

    def by_category(self, category: RecipeCategory) -> Result[list[Recipe]]:
        logger.debug("Getting cached recipes in category {}", category.value)
        return self.local.by_category(category)

    def save(self, recipe: Recipe) -> Result[str]:
        return self.local.save(recipe)

    def update(self, recipe: Recipe) -> Result[None]:
        return self.local.update(recipe)

    def delete(self, recipe_id: str) -> Result[None]:
        return self.local.delete(recipe_id)

    def refresh(self) -> Result[list[Recipe]]:
        current = self.local.get_all().value_or([])
        custom = [recipe for recipe in current if recipe.is_custom]
        logger.info("Refreshing recipes: {} cached, {} custom preserved", len(current), len(custom))

        fetched = _guard(self.remote.fetch_all, "fetch all recipes")
        if isinstance(fetched, Failure):
            logger.opt(exception=fetched.error).error("Refresh aborted, remote fetch failed")
            return fetched

        custom_ids = {recipe.id for recipe in custom}
        fresh = [recipe for recipe in fetched.value if not recipe.id or recipe.id not in custom_ids]

        saved = self.local.save_bundled(fresh)
        if isinstance(saved, Failure):
            logger.opt(exception=saved.error).error("Could not cache {} fresh recipes", len(fresh))
        else:
            logger.info("Cache updated with {} bundled recipes", len(fresh))

        return Success(fresh + custom)

    def get_by_id_with_refresh(self, recipe_id: str, force_refresh: bool = False) -> Result[Recipe | None]:
        if not force_refresh:
            return self.get_by_id(recipe_id)

        fetched = _guard(lambda: self.remote.fetch_by_id(recipe_id), f"fetch recipe {recipe_id}")
        if isinstance(fetched, Failure):
            logger.opt(exception=fetched.error).warning("Remote fetch of {} failed, using cache", recipe_id)
            return self.local.get_by_id(recipe_id)

        recipe = fetched.value
        if recipe is None:
            logger.info("Recipe {} not available remotely, using cache", recipe_id)
            return self.local.get_by_id(recipe_id)

        cached = self.local.cache_remote(recipe)
        if isinstance(cached, Failure):
            logger.warning("Recipe {} fetched but not cached: {}", recipe_id, cached.error)
        return Success(recipe)


def _guard(call, action: str) -> Result:
    try:
        result = call()
    except Exception as exc:
        return Failure(_remote_error(action, exc))
    if isinstance(result, Failure) and not isinstance(result.error, RemoteError):
        return Failure(_remote_error(action, result.error))
    return result


def _remote_error(action: str, cause: Exception) -> RemoteError:
    error = RemoteError(f"Remote source failed to {action}: {cause}")
    error.__cause__ = cause
    return error
