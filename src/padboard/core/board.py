"""The pad board: a fixed set of independent pad channels."""

import logging

from padboard.exceptions import InvalidPadId
from padboard.models import RetriggerPolicy
from padboard.protocols import AudioOutput, PadNotification, PadObserver, Scheduler
from padboard.utils import ObserverManager

from .channel import PadChannel
from .clip_library import ClipLibrary

logger = logging.getLogger(__name__)


class PadBoard(PadObserver):
    """
    Owns N pad channels and routes triggers to them.

    This is the only entry point for the presentation layer:
    - trigger(pad_id) on a press
    - stop_all() on teardown
    - register_observer() to receive PadActivated / PadDeactivated /
      PadTriggerFailed notifications for every pad

    Channels share nothing but the read-only clip library. Notifications
    for one pad arrive in order; notifications for different pads may
    interleave.
    """

    def __init__(
        self,
        library: ClipLibrary,
        audio_output: AudioOutput,
        scheduler: Scheduler,
        retrigger_policy: RetriggerPolicy = RetriggerPolicy.RESTART,
    ):
        """
        Create one idle channel per clip in the library.

        Args:
            library: Loaded clip library (defines the number of pads)
            audio_output: Collaborator that plays clips
            scheduler: Event loop running transitions and timers
            retrigger_policy: Behaviour of a press on a playing pad
        """
        self._library = library
        self._observers = ObserverManager[PadObserver](observer_type_name="pad")
        self._channels: tuple[PadChannel, ...] = tuple(
            PadChannel(pad_id, audio_output, scheduler, retrigger_policy)
            for pad_id in range(library.num_pads)
        )
        for channel in self._channels:
            channel.register_observer(self)

        logger.info(f"PadBoard created with {len(self._channels)} pads ({retrigger_policy.value})")

    # =================================================================
    # Playback Control
    # =================================================================

    def trigger(self, pad_id: int) -> None:
        """
        Trigger a pad (from any source: UI click, keyboard, etc).

        Args:
            pad_id: Index of pad to trigger

        Raises:
            InvalidPadId: If pad_id is out of range; no channel is touched
        """
        clip = self._library.get(pad_id)
        self._channels[clip.pad_id].trigger(clip)

    def stop(self, pad_id: int) -> None:
        """
        Stop a single pad.

        Raises:
            InvalidPadId: If pad_id is out of range
        """
        self.channel(pad_id).stop()

    def stop_all(self) -> None:
        """Stop every pad."""
        for channel in self._channels:
            channel.stop()

    def shutdown(self) -> None:
        """Stop every pad and detach all observers."""
        self.stop_all()
        self._observers.clear()
        logger.info("PadBoard shut down")

    # =================================================================
    # Observers
    # =================================================================

    def register_observer(self, observer: PadObserver) -> None:
        """Register an observer for pad notifications of every pad."""
        self._observers.register(observer)

    def unregister_observer(self, observer: PadObserver) -> None:
        self._observers.unregister(observer)

    def on_pad_event(self, event: PadNotification) -> None:
        """Re-publish a channel notification to board observers."""
        self._observers.notify("on_pad_event", event)

    # =================================================================
    # Queries
    # =================================================================

    @property
    def num_pads(self) -> int:
        return len(self._channels)

    @property
    def library(self) -> ClipLibrary:
        return self._library

    @property
    def channels(self) -> tuple[PadChannel, ...]:
        return self._channels

    def channel(self, pad_id: int) -> PadChannel:
        """
        Get the channel for a pad.

        Raises:
            InvalidPadId: If pad_id is out of range
        """
        index = self._library.pad_index(pad_id)
        if index is None:
            raise InvalidPadId(pad_id, self.num_pads)
        return self._channels[index]

    def is_pad_playing(self, pad_id: int) -> bool:
        return self.channel(pad_id).is_playing

    def get_playing_pads(self) -> list[int]:
        """Indices of all pads currently playing."""
        return [channel.pad_id for channel in self._channels if channel.is_playing]

    # =================================================================
    # Context Manager
    # =================================================================

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()
