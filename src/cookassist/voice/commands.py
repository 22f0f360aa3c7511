from __future__ import annotations

from enum import Enum


class VoiceCommand(Enum):
    """Commands a spoken utterance can resolve to.

    Declaration order is significant: when an utterance contains triggers
    for several commands, the one declared first wins.
    """

    # navigation
    NEXT = "next"
    PREVIOUS = "previous"
    REPEAT = "repeat"
    START = "start"

    # step details
    INGREDIENTS = "ingredients"
    DESCRIPTION = "description"
    TIME = "time"
    TIPS = "tips"
    STEP_NUMBER = "step_number"

    # timer
    START_TIMER = "start_timer"
    PAUSE_TIMER = "pause_timer"
    RESUME_TIMER = "resume_timer"
    STOP_TIMER = "stop_timer"
    CHECK_TIMER = "check_timer"
