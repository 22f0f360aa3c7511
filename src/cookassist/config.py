from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os
import tomllib
from typing import Any

from .errors import ConfigError
from .languages import resolve_language


LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class RemoteConfig:
    network_delay_ms: int = 0


@dataclass(frozen=True)
class EffectiveConfig:
    storage_root: str
    language: str
    log_level: str
    remote: RemoteConfig
    project_dir: str


def _config_root() -> Path:
    return Path(os.path.expanduser("~/.config/cookassist"))


def default_storage_root() -> str:
    return os.path.expanduser("~/.local/share/cookassist/recipes")


def load_global_config() -> dict[str, Any]:
    path = _config_root() / "config.toml"
    if not path.exists():
        return {}
    return _load_toml(path)


def load_project_config(project_dir: str) -> dict[str, Any]:
    path = Path(project_dir) / "cookassist.toml"
    if not path.exists():
        return {}
    return _load_toml(path)


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except OSError as exc:
        raise ConfigError(f"Failed to read config: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in config: {path}") from exc


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_config(cli: dict[str, Any], project: dict[str, Any], global_cfg: dict[str, Any]) -> dict[str, Any]:
    merged = _deep_merge(global_cfg, project)
    return _deep_merge(merged, cli)


def resolve_config(cli_args: dict[str, Any]) -> EffectiveConfig:
    global_cfg = load_global_config()
    project_dir = cli_args.get("project") or os.getcwd()
    project_cfg = load_project_config(project_dir)

    merged = merge_config(_cli_to_dict(cli_args), project_cfg, global_cfg)

    remote_cfg = merged.get("remote", {})
    if not isinstance(remote_cfg, dict):
        raise ConfigError("[remote] must be a table")

    return EffectiveConfig(
        storage_root=os.path.expanduser(str(merged.get("storage_root") or default_storage_root())),
        language=resolve_language(merged.get("language")),
        log_level=_normalize_log_level(merged.get("log_level", "WARNING")),
        remote=RemoteConfig(network_delay_ms=_non_negative_int(remote_cfg.get("network_delay_ms", 0))),
        project_dir=str(project_dir),
    )


def _cli_to_dict(cli_args: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key in ("storage_root", "language", "log_level"):
        if cli_args.get(key) is not None:
            out[key] = cli_args[key]

    if cli_args.get("network_delay_ms") is not None:
        out["remote"] = {"network_delay_ms": cli_args["network_delay_ms"]}
    return out


def config_to_toml(cfg: EffectiveConfig) -> str:
    lines = [
        f"storage_root = {cfg.storage_root!r}",
        f"language = {cfg.language!r}",
        f"log_level = {cfg.log_level!r}",
        "",
        "[remote]",
        f"network_delay_ms = {cfg.remote.network_delay_ms}",
    ]
    return "\n".join(lines) + "\n"


def _normalize_log_level(value: Any) -> str:
    text = str(value or "").strip().upper()
    if text in LOG_LEVELS:
        return text
    return "WARNING"


def _non_negative_int(value: Any) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Expected an integer, got {value!r}") from exc
    if number < 0:
        raise ConfigError(f"Expected a non-negative integer, got {number}")
    return number
