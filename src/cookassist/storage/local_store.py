"""File-backed recipe store.

Recipes live one JSON record per file in two partitions under a storage
root: ``bundled/`` for recipes seeded from the remote catalogue and
``custom/`` for recipes the user wrote. ``recipes_index.json`` enumerates
every stored recipe and where its record lives; listing, search and
category filtering all go through it rather than scanning directories.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
import shutil
import threading
import time
from typing import Callable, Iterable
import uuid

from loguru import logger

from ..domain import Recipe, RecipeCategory, dumps_recipe, loads_recipe
from ..errors import CookassistError, MalformedRecordError, RecipeNotFoundError, StorageError, ValidationError
from ..paths import StoragePaths, resolve_storage_paths
from ..result import Failure, Result, Success
from ..validate import validate_recipe
from .index import IndexEntry, RecipeIndex, dumps_index, empty_index, loads_index


Clock = Callable[[], int]


def _now_ms() -> int:
    return int(time.time() * 1000)


class FileRecipeStore:
    def __init__(self, root: str | Path, *, clock: Clock | None = None) -> None:
        self.paths: StoragePaths = resolve_storage_paths(root)
        self._clock = clock or _now_ms
        self._lock = threading.RLock()
        self._index: RecipeIndex | None = None
        try:
            self.paths.ensure()
        except OSError as exc:
            raise StorageError(f"Cannot create storage root: {self.paths.root}") from exc

    # reads

    def get_all(self) -> Result[list[Recipe]]:
        with self._lock:
            index = self._load_index()
            recipes = [recipe for recipe in map(self._load_entry, index.entries) if recipe is not None]
        logger.debug("Loaded {} of {} indexed recipes", len(recipes), len(index.entries))
        return Success(recipes)

    def get_by_id(self, recipe_id: str) -> Result[Recipe | None]:
        with self._lock:
            entry = self._load_index().find(recipe_id)
            if entry is None:
                return Success(None)
            return Success(self._load_entry(entry))

    def search(self, query: str) -> Result[list[Recipe]]:
        recipes = self.get_all().unwrap()
        return Success([recipe for recipe in recipes if recipe.matches(query)])

    def by_category(self, category: RecipeCategory) -> Result[list[Recipe]]:
        recipes = self.get_all().unwrap()
        return Success([recipe for recipe in recipes if category in recipe.categories])

    def index_entries(self) -> Result[tuple[IndexEntry, ...]]:
        with self._lock:
            return Success(self._load_index().entries)

    # writes

    def save(self, recipe: Recipe) -> Result[str]:
        now = self._clock()
        stored = replace(
            recipe,
            id=recipe.id or str(uuid.uuid4()),
            created_at=recipe.created_at or now,
            updated_at=now,
            is_custom=True,
        )
        try:
            validate_recipe(stored)
            with self._lock:
                path = self.paths.record_path(stored.id, custom=True)
                _write_text(path, dumps_recipe(stored))
                self._upsert_entry(stored, path)
        except CookassistError as exc:
            return _failure(exc, "Failed to save recipe {!r}", recipe.name)
        logger.info("Saved custom recipe {} ({})", stored.id, stored.name)
        return Success(stored.id)

    def save_many(self, recipes: Iterable[Recipe]) -> Result[list[str]]:
        ids: list[str] = []
        for recipe in recipes:
            result = self.save(recipe)
            if isinstance(result, Failure):
                return result
            ids.append(result.value)
        return Success(ids)

    def update(self, recipe: Recipe) -> Result[None]:
        try:
            with self._lock:
                entry = self._load_index().find(recipe.id)
                if entry is None:
                    raise RecipeNotFoundError(recipe.id)
                path = self.paths.absolute(entry.file_path)
                created_at = recipe.created_at
                if not created_at:
                    previous = self._load_entry(entry)
                    created_at = previous.created_at if previous is not None else 0
                now = self._clock()
                stored = replace(
                    recipe,
                    created_at=created_at or now,
                    updated_at=now,
                    is_custom=entry.is_custom,
                )
                validate_recipe(stored)
                _write_text(path, dumps_recipe(stored))
                self._upsert_entry(stored, path)
        except CookassistError as exc:
            return _failure(exc, "Failed to update recipe {!r}", recipe.id)
        logger.info("Updated recipe {} ({})", stored.id, stored.name)
        return Success(None)

    def cache_remote(self, recipe: Recipe) -> Result[str]:
        """Store a single remote recipe in the bundled partition.

        A custom recipe with the same id is never overwritten.
        """
        if not recipe.id:
            return Failure(StorageError("Remote recipes must carry an id"))
        now = self._clock()
        stored = replace(recipe, created_at=recipe.created_at or now, updated_at=now, is_custom=False)
        try:
            validate_recipe(stored)
            with self._lock:
                existing = self._load_index().find(stored.id)
                if existing is not None and existing.is_custom:
                    raise StorageError(f"Recipe {stored.id!r} is a custom recipe and is kept as is")
                path = self.paths.record_path(stored.id, custom=False)
                _write_text(path, dumps_recipe(stored))
                self._upsert_entry(stored, path)
        except CookassistError as exc:
            return _failure(exc, "Failed to cache remote recipe {!r}", recipe.id)
        logger.info("Cached remote recipe {} ({})", stored.id, stored.name)
        return Success(stored.id)

    def delete(self, recipe_id: str) -> Result[None]:
        try:
            with self._lock:
                index = self._load_index()
                entry = index.find(recipe_id)
                if entry is None:
                    logger.debug("Delete of unknown recipe {} is a no-op", recipe_id)
                    return Success(None)
                _unlink(self.paths.absolute(entry.file_path))
                self._save_index(index.without(recipe_id, self._clock()))
        except CookassistError as exc:
            return _failure(exc, "Failed to delete recipe {!r}", recipe_id)
        logger.info("Deleted recipe {}", recipe_id)
        return Success(None)

    def save_bundled(self, recipes: Iterable[Recipe]) -> Result[None]:
        now = self._clock()
        bundled: list[Recipe] = []
        for position, recipe in enumerate(recipes):
            bundled.append(
                replace(
                    recipe,
                    id=recipe.id or f"{position + 1:03d}",
                    created_at=recipe.created_at or now,
                    updated_at=now,
                    is_custom=False,
                )
            )

        bundled = [recipe for recipe in bundled if _is_valid(recipe)]
        try:
            with self._lock:
                index = self._load_index()
                custom_entries = index.custom_entries()
                custom_ids = {entry.id for entry in custom_entries}
                logger.debug("Preserving {} custom index entries", len(custom_entries))

                if self.paths.bundled_dir.is_dir():
                    for path in sorted(self.paths.bundled_dir.glob("*.json")):
                        _unlink(path)

                entries: list[IndexEntry] = []
                seen: set[str] = set()
                for recipe in bundled:
                    if recipe.id in custom_ids or recipe.id in seen:
                        logger.warning("Skipping bundled recipe {}: id already taken", recipe.id)
                        continue
                    seen.add(recipe.id)
                    path = self.paths.record_path(recipe.id, custom=False)
                    _write_text(path, dumps_recipe(recipe))
                    entries.append(IndexEntry.for_recipe(recipe, self.paths.relative(path)))

                self._save_index(index.with_entries(entries + list(custom_entries), self._clock()))
        except CookassistError as exc:
            return _failure(exc, "Failed to save {} bundled recipes", len(bundled))
        logger.info("Replaced bundled partition with {} recipes", len(entries))
        return Success(None)

    def clear_all(self) -> Result[None]:
        try:
            with self._lock:
                for directory in self.paths.partitions():
                    _remove_tree(directory)
                try:
                    self.paths.ensure()
                except OSError as exc:
                    raise StorageError(f"Cannot recreate partitions under {self.paths.root}") from exc
                self._save_index(empty_index(self._clock()))
        except CookassistError as exc:
            return _failure(exc, "Failed to clear recipe storage")
        logger.info("Cleared all recipes under {}", self.paths.root)
        return Success(None)

    def rebuild_index(self) -> Result[int]:
        try:
            with self._lock:
                entries: list[IndexEntry] = []
                for directory, custom in ((self.paths.bundled_dir, False), (self.paths.custom_dir, True)):
                    if not directory.is_dir():
                        continue
                    for path in sorted(directory.glob("recipe_*.json")):
                        recipe = _read_record(path)
                        if recipe is None:
                            continue
                        recipe = replace(recipe, is_custom=custom)
                        entries.append(IndexEntry.for_recipe(recipe, self.paths.relative(path)))
                self._save_index(empty_index(self._clock()).with_entries(entries, self._clock()))
        except CookassistError as exc:
            return _failure(exc, "Failed to rebuild recipe index")
        logger.info("Rebuilt recipe index with {} entries", len(entries))
        return Success(len(entries))

    # index cache

    def _load_index(self) -> RecipeIndex:
        if self._index is not None:
            return self._index

        index_file = self.paths.index_file
        if not index_file.exists():
            logger.debug("No recipe index at {}, starting empty", index_file)
            return self._create_empty_index()
        try:
            index = loads_index(index_file.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, MalformedRecordError) as exc:
            logger.warning("Recipe index at {} is unreadable ({}), starting empty", index_file, exc)
            return self._create_empty_index()
        self._index = index
        return index

    def _create_empty_index(self) -> RecipeIndex:
        index = empty_index(self._clock())
        try:
            self._save_index(index)
        except StorageError as exc:
            logger.opt(exception=exc).error("Could not persist empty recipe index")
            self._index = index
        return index

    def _save_index(self, index: RecipeIndex) -> None:
        _write_text(self.paths.index_file, dumps_index(index))
        self._index = index

    def _upsert_entry(self, recipe: Recipe, path: Path) -> None:
        index = self._load_index()
        entry = IndexEntry.for_recipe(recipe, self.paths.relative(path))
        self._save_index(index.upsert(entry, self._clock()))

    def _load_entry(self, entry: IndexEntry) -> Recipe | None:
        return _read_record(self.paths.absolute(entry.file_path))


def _read_record(path: Path) -> Recipe | None:
    if not path.exists():
        logger.warning("Recipe record {} is missing, skipping", path)
        return None
    try:
        return loads_recipe(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, MalformedRecordError) as exc:
        logger.warning("Recipe record {} is unreadable ({}), skipping", path, exc)
        return None


def _is_valid(recipe: Recipe) -> bool:
    try:
        validate_recipe(recipe)
    except ValidationError as exc:
        logger.warning("Skipping bundled recipe {}: {}", recipe.id, exc)
        return False
    return True


def _write_text(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise StorageError(f"Failed to write {path}: {exc}") from exc


def _unlink(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        raise StorageError(f"Failed to delete {path}: {exc}") from exc


def _remove_tree(path: Path) -> None:
    if not path.exists():
        return
    try:
        shutil.rmtree(path)
    except OSError as exc:
        raise StorageError(f"Failed to remove {path}: {exc}") from exc


def _failure(exc: CookassistError, message: str, *args: object) -> Failure:
    if isinstance(exc, RecipeNotFoundError):
        logger.info(message + ": {}", *args, exc)
    else:
        logger.opt(exception=exc).error(message, *args)
    return Failure(exc)
