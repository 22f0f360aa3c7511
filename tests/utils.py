from __future__ import annotations

from pathlib import Path

from cookassist.domain import Difficulty, Ingredient, Recipe, RecipeCategory, RecipeStep
from cookassist.result import Failure, Success


class TickingClock:
    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        self.now += 1
        return self.now


class FakeRemote:
    def __init__(self, recipes: list[Recipe] | None = None, error: Exception | None = None) -> None:
        self.recipes = list(recipes or [])
        self.error = error
        self.calls: list[str] = []

    def fetch_all(self):
        self.calls.append("fetch_all")
        if self.error is not None:
            return Failure(self.error)
        return Success(list(self.recipes))

    def fetch_by_id(self, recipe_id: str):
        self.calls.append("fetch_by_id")
        if self.error is not None:
            return Failure(self.error)
        return Success(next((r for r in self.recipes if r.id == recipe_id), None))

    def search(self, query: str):
        self.calls.append("search")
        return Success([])

    def fetch_by_category(self, category: RecipeCategory):
        self.calls.append("fetch_by_category")
        return Success([])

    def upload(self, recipe: Recipe):
        self.calls.append("upload")
        return Success(recipe.id)

    def update(self, recipe: Recipe):
        self.calls.append("update")
        return Success(None)

    def delete(self, recipe_id: str):
        self.calls.append("delete")
        return Success(None)


def make_recipe(
    name: str = "Test Recipe",
    recipe_id: str = "",
    description: str = "A test recipe",
    ingredients: list[str] | None = None,
    categories: set[RecipeCategory] | None = None,
    steps: int = 2,
) -> Recipe:
    return Recipe(
        id=recipe_id,
        name=name,
        description=description,
        ingredients=tuple(Ingredient(item, "1 cup") for item in (ingredients or ["flour"])),
        steps=tuple(RecipeStep(n, f"Do step {n}", duration_minutes=5) for n in range(1, steps + 1)),
        cooking_time=30,
        prep_time=10,
        servings=4,
        difficulty=Difficulty.EASY,
        categories=frozenset(categories or {RecipeCategory.DINNER}),
        tags=("test",),
    )


def write_global_config(home: Path, content: str) -> Path:
    cfg_dir = home / ".config" / "cookassist"
    cfg_dir.mkdir(parents=True, exist_ok=True)
    path = cfg_dir / "config.toml"
    path.write_text(content, encoding="utf-8")
    return path


def block_directory(path: Path) -> None:
    """Replace a directory with a plain file so writes beneath it fail."""
    for child in sorted(path.rglob("*"), reverse=True):
        if child.is_dir():
            child.rmdir()
        else:
            child.unlink()
    path.rmdir()
    path.write_text("", encoding="utf-8")
