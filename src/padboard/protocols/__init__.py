"""Protocol definitions and notification types for the pad board."""

from .events import (
    DeactivationReason,
    PadActivated,
    PadDeactivated,
    PadEvent,
    PadNotification,
    PadTriggerFailed,
)
from .observers import AudioOutput, PadObserver, Scheduler, TimerHandle

__all__ = [
    # Events
    "DeactivationReason",
    "PadActivated",
    "PadDeactivated",
    "PadEvent",
    "PadNotification",
    "PadTriggerFailed",
    # Protocols
    "AudioOutput",
    "PadObserver",
    "Scheduler",
    "TimerHandle",
]
