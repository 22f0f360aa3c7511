from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from loguru import logger


@dataclass(frozen=True)
class Language:
    code: str
    display_name: str


SUPPORTED_LANGUAGES = (
    Language("en", "English"),
    Language("pl", "Polski"),
)
DEFAULT_LANGUAGE = "en"


def supported_codes() -> tuple[str, ...]:
    return tuple(lang.code for lang in SUPPORTED_LANGUAGES)


def resolve_language(code: Any) -> str:
    text = str(code or "").strip().lower().replace("_", "-")
    base = text.split("-", 1)[0]
    if base in supported_codes():
        return base
    if text:
        logger.warning("Unsupported language {!r}, falling back to {!r}", code, DEFAULT_LANGUAGE)
    return DEFAULT_LANGUAGE
