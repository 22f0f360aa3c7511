from .index import IndexEntry, RecipeIndex
from .local_store import FileRecipeStore

__all__ = ["FileRecipeStore", "IndexEntry", "RecipeIndex"]
