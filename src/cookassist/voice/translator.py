from __future__ import annotations

from loguru import logger

from .commands import VoiceCommand
from .patterns import PatternTable, load_pattern_table


class VoiceCommandTranslator:
    """Maps one line of recognized speech to at most one command.

    The pattern table is fixed for the lifetime of the translator; build a
    new translator when the selected language changes.
    """

    def __init__(self, table: PatternTable) -> None:
        self.table = table

    @classmethod
    def for_language(cls, language: str | None) -> VoiceCommandTranslator:
        return cls(load_pattern_table(language))

    @property
    def language(self) -> str:
        return self.table.language

    def translate(self, recognized_text: str) -> VoiceCommand | None:
        text = recognized_text.lower().strip()
        for command, patterns in self.table.entries:
            if any(pattern in text for pattern in patterns):
                return command
        logger.debug("No matching command for: {!r}", recognized_text)
        return None

    def command_hints(self) -> dict[VoiceCommand, str]:
        return {command: patterns[0] if patterns else "" for command, patterns in self.table.entries}

    def patterns_for(self, command: VoiceCommand) -> list[str]:
        return list(self.table.patterns_for(command))
