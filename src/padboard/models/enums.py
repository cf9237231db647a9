"""Enumerations for the pad board."""

from enum import Enum


class PadState(str, Enum):
    """Playback state of a single pad channel."""

    IDLE = "idle"        # Nothing playing, no pending reset
    PLAYING = "playing"  # Clip playing, reset timer pending


class RetriggerPolicy(str, Enum):
    """What a re-press does while the pad is already playing."""

    RESTART = "restart"  # Stop the current clip and play it again from the start
    IGNORE = "ignore"    # Leave the current playback untouched
