from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


INDEX_FILENAME = "recipes_index.json"
BUNDLED_DIRNAME = "bundled"
CUSTOM_DIRNAME = "custom"
MEDIA_DIRNAME = "media"


@dataclass(frozen=True)
class StoragePaths:
    root: Path
    bundled_dir: Path
    custom_dir: Path
    index_file: Path

    def partitions(self) -> tuple[Path, Path]:
        return (self.bundled_dir, self.custom_dir)

    def record_path(self, recipe_id: str, custom: bool) -> Path:
        directory = self.custom_dir if custom else self.bundled_dir
        return directory / record_filename(recipe_id)

    def relative(self, path: Path) -> str:
        return path.relative_to(self.root).as_posix()

    def absolute(self, relative_path: str) -> Path:
        return self.root / relative_path

    def ensure(self) -> None:
        for directory in self.partitions():
            (directory / MEDIA_DIRNAME).mkdir(parents=True, exist_ok=True)


def resolve_storage_paths(root: str | Path) -> StoragePaths:
    base = Path(root)
    return StoragePaths(
        root=base,
        bundled_dir=base / BUNDLED_DIRNAME,
        custom_dir=base / CUSTOM_DIRNAME,
        index_file=base / INDEX_FILENAME,
    )


def record_filename(recipe_id: str) -> str:
    return f"recipe_{recipe_id}.json"
