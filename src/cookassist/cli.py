from __future__ import annotations

import argparse
import json
from pathlib import Path
import sys
from collections.abc import Callable

from .config import EffectiveConfig, config_to_toml, resolve_config
from .domain import Recipe, RecipeCategory, loads_recipe, recipe_to_dict
from .errors import (
    ConfigError,
    CookassistError,
    RecipeNotFoundError,
    RemoteError,
    StorageError,
    ValidationError,
)
from .log import configure_logging
from .remote import StaticRemoteSource
from .repository import CachedRecipeRepository
from .result import Failure, Result
from .samples import load_sample_recipes
from .storage import FileRecipeStore
from .voice import VoiceCommandTranslator


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    handlers: dict[str, Callable[[argparse.Namespace], int]] = {
        "list": _cmd_list,
        "show": _cmd_show,
        "search": _cmd_search,
        "add": _cmd_add,
        "delete": _cmd_delete,
        "refresh": _cmd_refresh,
        "seed": _cmd_seed,
        "clear": _cmd_clear,
        "voice": _cmd_voice,
        "hints": _cmd_hints,
        "config": _cmd_config,
    }

    handler = handlers.get(args.command)
    if handler is None:  # pragma: no cover
        return 1  # pragma: no cover

    try:
        return handler(args)
    except CookassistError as exc:
        print(str(exc), file=sys.stderr)
        return _exit_code(exc)


def _common_parser(default: object) -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--root", dest="storage_root", default=default)
    common.add_argument("--project", default=default)
    common.add_argument("--language", default=default)
    common.add_argument("--log-level", dest="log_level", default=default)
    return common


def _build_parser() -> argparse.ArgumentParser:
    # Subcommand copies suppress their defaults so flags given before the
    # subcommand are not reset to None.
    common = _common_parser(argparse.SUPPRESS)

    parser = argparse.ArgumentParser(prog="cookassist", parents=[_common_parser(None)])
    sub = parser.add_subparsers(dest="command")

    listing = sub.add_parser("list", parents=[common])
    listing.add_argument("--category", type=_category)
    listing.add_argument("--json", action="store_true")

    show = sub.add_parser("show", parents=[common])
    show.add_argument("recipe_id")

    search = sub.add_parser("search", parents=[common])
    search.add_argument("query")
    search.add_argument("--json", action="store_true")

    add = sub.add_parser("add", parents=[common])
    add.add_argument("path")

    delete = sub.add_parser("delete", parents=[common])
    delete.add_argument("recipe_id")

    sub.add_parser("refresh", parents=[common])
    sub.add_parser("seed", parents=[common])
    sub.add_parser("clear", parents=[common])

    voice = sub.add_parser("voice", parents=[common])
    voice.add_argument("text", nargs="+")

    sub.add_parser("hints", parents=[common])
    sub.add_parser("config", parents=[common])

    return parser


def _cmd_list(args: argparse.Namespace) -> int:
    repo = _repository(_resolve_cfg(args))
    result = repo.get_all() if args.category is None else repo.by_category(args.category)
    _print_recipes(_unwrap(result), as_json=args.json)
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    repo = _repository(_resolve_cfg(args))
    recipe = _unwrap(repo.get_by_id(args.recipe_id))
    if recipe is None:
        raise RecipeNotFoundError(args.recipe_id)
    print(json.dumps(recipe_to_dict(recipe), indent=2, ensure_ascii=False))
    return 0


def _cmd_search(args: argparse.Namespace) -> int:
    repo = _repository(_resolve_cfg(args))
    _print_recipes(_unwrap(repo.search(args.query)), as_json=args.json)
    return 0


def _cmd_add(args: argparse.Namespace) -> int:
    repo = _repository(_resolve_cfg(args))
    try:
        text = Path(args.path).read_text(encoding="utf-8")
    except OSError as exc:
        raise StorageError(f"Cannot read recipe file: {args.path}") from exc
    recipe_id = _unwrap(repo.save(loads_recipe(text)))
    print(recipe_id)
    return 0


def _cmd_delete(args: argparse.Namespace) -> int:
    repo = _repository(_resolve_cfg(args))
    _unwrap(repo.delete(args.recipe_id))
    return 0


def _cmd_refresh(args: argparse.Namespace) -> int:
    repo = _repository(_resolve_cfg(args))
    recipes = _unwrap(repo.refresh())
    print(f"{len(recipes)} recipes")
    return 0


def _cmd_seed(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)
    store = FileRecipeStore(cfg.storage_root)
    recipes = load_sample_recipes()
    _unwrap(store.save_bundled(recipes))
    print(f"Seeded {len(recipes)} recipes")
    return 0


def _cmd_clear(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)
    _unwrap(FileRecipeStore(cfg.storage_root).clear_all())
    return 0


def _cmd_voice(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)
    translator = VoiceCommandTranslator.for_language(cfg.language)
    command = translator.translate(" ".join(args.text))
    if command is None:
        return 1
    print(command.name)
    return 0


def _cmd_hints(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)
    translator = VoiceCommandTranslator.for_language(cfg.language)
    for command, hint in translator.command_hints().items():
        print(f"{command.name}: {hint}")
    return 0


def _cmd_config(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)
    print(config_to_toml(cfg), end="")
    return 0


def _resolve_cfg(args: argparse.Namespace) -> EffectiveConfig:
    cfg = resolve_config(_cli_args_dict(args))
    configure_logging(cfg.log_level)
    return cfg


def _repository(cfg: EffectiveConfig) -> CachedRecipeRepository:
    remote = StaticRemoteSource(load_sample_recipes(), network_delay_ms=cfg.remote.network_delay_ms)
    return CachedRecipeRepository(FileRecipeStore(cfg.storage_root), remote)


def _print_recipes(recipes: list[Recipe], as_json: bool) -> None:
    if as_json:
        print(json.dumps([recipe_to_dict(recipe) for recipe in recipes], indent=2, ensure_ascii=False))
        return
    for recipe in recipes:
        marker = "*" if recipe.is_custom else " "
        print(f"{marker} {recipe.id}: {recipe.name}")


def _unwrap(result: Result):
    if isinstance(result, Failure):
        if isinstance(result.error, CookassistError):
            raise result.error
        raise StorageError(str(result.error)) from result.error
    return result.value


def _category(value: str) -> RecipeCategory:
    try:
        return RecipeCategory(value.strip().upper())
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"unknown category: {value}") from exc


def _cli_args_dict(args: argparse.Namespace) -> dict[str, object]:
    return vars(args).copy()


def _exit_code(exc: CookassistError) -> int:
    if isinstance(exc, ConfigError):
        return 2
    if isinstance(exc, RecipeNotFoundError):
        return 3
    if isinstance(exc, ValidationError):
        return 4
    if isinstance(exc, StorageError):
        return 5
    if isinstance(exc, RemoteError):
        return 6
    return 1
