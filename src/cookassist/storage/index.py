from __future__ import annotations

from dataclasses import dataclass, field, replace
import json
from typing import Any, Iterable

from ..domain import Recipe, RecipeCategory
from ..errors import MalformedRecordError


INDEX_VERSION = 1


@dataclass(frozen=True)
class IndexEntry:
    id: str
    name: str
    file_path: str
    categories: tuple[RecipeCategory, ...]
    is_custom: bool
    thumbnail: str | None = None

    @classmethod
    def for_recipe(cls, recipe: Recipe, file_path: str) -> IndexEntry:
        return cls(
            id=recipe.id,
            name=recipe.name,
            file_path=file_path,
            categories=tuple(sorted(recipe.categories, key=lambda category: category.value)),
            is_custom=recipe.is_custom,
            thumbnail=recipe.main_photo,
        )


@dataclass(frozen=True)
class RecipeIndex:
    version: int = INDEX_VERSION
    last_updated: int = 0
    entries: tuple[IndexEntry, ...] = field(default_factory=tuple)

    def find(self, recipe_id: str) -> IndexEntry | None:
        for entry in self.entries:
            if entry.id == recipe_id:
                return entry
        return None

    def upsert(self, entry: IndexEntry, now: int) -> RecipeIndex:
        kept = tuple(existing for existing in self.entries if existing.id != entry.id)
        return replace(self, entries=kept + (entry,), last_updated=now)

    def without(self, recipe_id: str, now: int) -> RecipeIndex:
        kept = tuple(entry for entry in self.entries if entry.id != recipe_id)
        return replace(self, entries=kept, last_updated=now)

    def with_entries(self, entries: Iterable[IndexEntry], now: int) -> RecipeIndex:
        return replace(self, entries=tuple(entries), last_updated=now)

    def custom_entries(self) -> tuple[IndexEntry, ...]:
        return tuple(entry for entry in self.entries if entry.is_custom)


def empty_index(now: int) -> RecipeIndex:
    return RecipeIndex(version=INDEX_VERSION, last_updated=now, entries=())


def index_to_dict(index: RecipeIndex) -> dict[str, Any]:
    return {
        "version": index.version,
        "lastUpdated": index.last_updated,
        "recipes": [
            {
                "id": entry.id,
                "name": entry.name,
                "filePath": entry.file_path,
                "categories": [category.value for category in entry.categories],
                "isCustom": entry.is_custom,
                "thumbnail": entry.thumbnail,
            }
            for entry in index.entries
        ],
    }


def dumps_index(index: RecipeIndex) -> str:
    return json.dumps(index_to_dict(index), indent=2, ensure_ascii=False) + "\n"


def loads_index(text: str) -> RecipeIndex:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedRecordError(f"invalid index JSON: {exc}") from exc
    if not isinstance(data, dict) or not isinstance(data.get("recipes"), list):
        raise MalformedRecordError("index must be a mapping with a 'recipes' list")
    try:
        entries = tuple(_entry_from_dict(item) for item in data["recipes"])
        return RecipeIndex(
            version=int(data.get("version", INDEX_VERSION)),
            last_updated=int(data.get("lastUpdated", 0)),
            entries=entries,
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise MalformedRecordError(f"invalid index entry: {exc}") from exc


def _entry_from_dict(data: Any) -> IndexEntry:
    if not isinstance(data, dict):
        raise TypeError("index entry must be a mapping")
    thumbnail = data.get("thumbnail")
    return IndexEntry(
        id=str(data["id"]),
        name=str(data["name"]),
        file_path=str(data["filePath"]),
        categories=tuple(RecipeCategory(value) for value in data.get("categories") or []),
        is_custom=bool(data["isCustom"]),
        thumbnail=None if thumbnail is None else str(thumbnail),
    )
