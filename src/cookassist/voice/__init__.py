from .commands import VoiceCommand
from .patterns import PatternTable, load_pattern_table, parse_patterns
from .translator import VoiceCommandTranslator

__all__ = [
    "PatternTable",
    "VoiceCommand",
    "VoiceCommandTranslator",
    "load_pattern_table",
    "parse_patterns",
]
