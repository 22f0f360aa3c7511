from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from typing import Any, Mapping

from loguru import logger
import yaml

from ..errors import PatternTableError
from ..languages import resolve_language
from .commands import VoiceCommand


PATTERN_SEPARATOR = "|"
LOCALE_PACKAGE = "cookassist.data.locales"


@dataclass(frozen=True)
class PatternTable:
    language: str
    entries: tuple[tuple[VoiceCommand, tuple[str, ...]], ...]

    @classmethod
    def from_strings(cls, raw: Mapping[Any, str], language: str = "custom") -> PatternTable:
        by_name = {_command_key(key): value for key, value in raw.items()}
        entries = []
        for command in VoiceCommand:
            value = by_name.get(command.value)
            entries.append((command, parse_patterns(value) if value is not None else ()))
        return cls(language=language, entries=tuple(entries))

    def patterns_for(self, command: VoiceCommand) -> tuple[str, ...]:
        for candidate, patterns in self.entries:
            if candidate is command:
                return patterns
        return ()


def parse_patterns(value: Any) -> tuple[str, ...]:
    if not isinstance(value, str):
        raise PatternTableError(f"Trigger list must be a string, got {type(value).__name__}")
    parts = (part.strip().lower() for part in value.split(PATTERN_SEPARATOR))
    return tuple(part for part in parts if part)


def load_pattern_table(language: str | None) -> PatternTable:
    code = resolve_language(language)
    resource = resources.files(LOCALE_PACKAGE).joinpath(f"{code}.yaml")
    try:
        text = resource.read_text(encoding="utf-8")
    except OSError as exc:
        raise PatternTableError(f"Missing voice patterns for language {code!r}") from exc
    table = parse_pattern_document(text, code)
    logger.debug("Loaded voice patterns for {!r}", code)
    return table


def parse_pattern_document(text: str, language: str) -> PatternTable:
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise PatternTableError(f"Invalid voice pattern YAML for {language!r}") from exc
    if not isinstance(data, dict):
        raise PatternTableError(f"Voice patterns for {language!r} must be a mapping")

    known = {command.value for command in VoiceCommand}
    unknown = sorted(str(key) for key in data if _command_key(key) not in known)
    if unknown:
        logger.warning("Ignoring unknown voice commands for {!r}: {}", language, ", ".join(unknown))
    missing = sorted(name for name in known if name not in {_command_key(key) for key in data})
    if missing:
        logger.warning("No voice patterns for {!r}: {}", language, ", ".join(missing))
    return PatternTable.from_strings(data, language=language)


def _command_key(key: Any) -> str:
    if isinstance(key, VoiceCommand):
        return key.value
    return str(key).strip().lower()
