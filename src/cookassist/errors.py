from __future__ import annotations


class CookassistError(Exception):
    pass


class ConfigError(CookassistError):
    pass


class ValidationError(CookassistError):
    pass


class RecipeNotFoundError(CookassistError):
    def __init__(self, recipe_id: str) -> None:
        super().__init__(f"Recipe with id {recipe_id!r} does not exist")
        self.recipe_id = recipe_id


class StorageError(CookassistError):
    pass


class MalformedRecordError(StorageError):
    pass


class RemoteError(CookassistError):
    pass


class PatternTableError(CookassistError):
    pass
