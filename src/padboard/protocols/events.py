"""Pad notifications published by channels and re-published by the board.

Every notification is tagged with the pad it concerns. Notifications for
one pad are delivered in the order its transitions happened; there is no
ordering guarantee across pads.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Union

if TYPE_CHECKING:
    from padboard.exceptions import PlaybackError
    from padboard.models import Clip


class PadEvent(Enum):
    """Kinds of pad notification."""

    ACTIVATED = "activated"            # Clip started, pad is now active
    DEACTIVATED = "deactivated"        # Pad returned to idle
    TRIGGER_FAILED = "trigger_failed"  # Playback could not be started


class DeactivationReason(Enum):
    """Why a pad returned to idle."""

    FINISHED = "finished"  # Clip duration elapsed
    STOPPED = "stopped"    # Explicit stop (or a failed retrigger)


@dataclass(frozen=True, slots=True)
class PadActivated:
    """A pad started playing its clip."""

    kind: ClassVar[PadEvent] = PadEvent.ACTIVATED

    pad_id: int
    clip: "Clip"


@dataclass(frozen=True, slots=True)
class PadDeactivated:
    """A pad went back to idle."""

    kind: ClassVar[PadEvent] = PadEvent.DEACTIVATED

    pad_id: int
    reason: DeactivationReason = DeactivationReason.FINISHED


@dataclass(frozen=True, slots=True)
class PadTriggerFailed:
    """Starting playback for a pad failed; the pad stays idle."""

    kind: ClassVar[PadEvent] = PadEvent.TRIGGER_FAILED

    pad_id: int
    cause: "PlaybackError"


PadNotification = Union[PadActivated, PadDeactivated, PadTriggerFailed]
