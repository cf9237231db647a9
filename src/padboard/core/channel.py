"""Playback state machine for a single pad."""

import logging
from threading import Lock
from typing import Any, Optional

from padboard.exceptions import PlaybackError
from padboard.models import Clip, PadState, RetriggerPolicy
from padboard.protocols import (
    AudioOutput,
    DeactivationReason,
    PadActivated,
    PadDeactivated,
    PadNotification,
    PadObserver,
    PadTriggerFailed,
    Scheduler,
    TimerHandle,
)
from padboard.utils import ObserverManager

logger = logging.getLogger(__name__)


class PadChannel:
    """
    Owns one pad's playback lifecycle.

    States:
    - IDLE: nothing playing, no pending reset
    - PLAYING: one playback handle and one reset timer are live

    trigger() and stop() only queue the transition on the scheduler and
    return immediately. Transitions run one at a time on the scheduler's
    loop thread, so a channel never has two transitions in flight. The lock
    only protects reads from other threads (e.g. is_playing from a UI).

    Every playback gets a new generation number. The reset timer carries the
    generation it was scheduled for, so a timer from a superseded playback
    can never reset a later one even if cancellation loses a race.
    """

    def __init__(
        self,
        pad_id: int,
        audio_output: AudioOutput,
        scheduler: Scheduler,
        retrigger_policy: RetriggerPolicy = RetriggerPolicy.RESTART,
    ):
        """
        Initialize an idle channel.

        Args:
            pad_id: Index of the pad this channel drives
            audio_output: Collaborator that starts/stops clip playback
            scheduler: Event loop running transitions and reset timers
            retrigger_policy: What a trigger does while already playing
        """
        self.pad_id = pad_id
        self._output = audio_output
        self._scheduler = scheduler
        self._retrigger_policy = retrigger_policy

        self._lock = Lock()
        self._state = PadState.IDLE
        self._active_playback: Optional[Any] = None
        self._pending_reset: Optional[TimerHandle] = None
        self._clip: Optional[Clip] = None
        self._generation = 0

        self._observers = ObserverManager[PadObserver](observer_type_name="pad")

    # =================================================================
    # Public API (any thread)
    # =================================================================

    def trigger(self, clip: Clip) -> None:
        """
        Queue a trigger: start the clip, restarting it if already playing.

        Args:
            clip: Clip to play (normally the clip bound to this pad)
        """
        self._scheduler.call_soon_threadsafe(self._apply_trigger, clip)

    def stop(self) -> None:
        """Queue a stop. A stop while idle does nothing."""
        self._scheduler.call_soon_threadsafe(self._apply_stop)

    def register_observer(self, observer: PadObserver) -> None:
        self._observers.register(observer)

    def unregister_observer(self, observer: PadObserver) -> None:
        self._observers.unregister(observer)

    @property
    def state(self) -> PadState:
        with self._lock:
            return self._state

    @property
    def is_playing(self) -> bool:
        with self._lock:
            return self._state is PadState.PLAYING

    @property
    def active_playback(self) -> Optional[Any]:
        """Playback handle of the current clip (None while idle)."""
        with self._lock:
            return self._active_playback

    @property
    def pending_reset(self) -> Optional[TimerHandle]:
        """Reset timer of the current clip (None while idle)."""
        with self._lock:
            return self._pending_reset

    @property
    def current_clip(self) -> Optional[Clip]:
        with self._lock:
            return self._clip

    # =================================================================
    # Transitions (loop thread)
    # =================================================================

    def _apply_trigger(self, clip: Clip) -> None:
        """IDLE -> PLAYING, or PLAYING -> PLAYING (restart)."""
        events: list[PadNotification] = []

        with self._lock:
            was_playing = self._state is PadState.PLAYING

            if was_playing and self._retrigger_policy is RetriggerPolicy.IGNORE:
                logger.debug(f"Pad {self.pad_id} already playing, ignoring retrigger")
                return

            # Old timer must be gone before a new one is scheduled
            self._release_playback()
            self._generation += 1
            generation = self._generation

            try:
                handle = self._output.start_playback(clip.resource)
            except Exception as e:
                cause = e if isinstance(e, PlaybackError) else PlaybackError(
                    f"Could not start clip for pad {self.pad_id}.", cause=e
                )
                logger.warning(f"Pad {self.pad_id} trigger failed: {cause.technical_message}")

                self._state = PadState.IDLE
                self._clip = None
                if was_playing:
                    events.append(PadDeactivated(self.pad_id, DeactivationReason.STOPPED))
                events.append(PadTriggerFailed(self.pad_id, cause))
            else:
                self._active_playback = handle
                self._clip = clip
                self._pending_reset = self._scheduler.call_later(
                    clip.duration_seconds, self._on_reset_timer, generation
                )
                self._state = PadState.PLAYING
                logger.debug(
                    f"Pad {self.pad_id} {'restarted' if was_playing else 'started'} "
                    f"({clip.duration_millis:.0f}ms, generation {generation})"
                )
                events.append(PadActivated(self.pad_id, clip))

        self._emit(events)

    def _apply_stop(self) -> None:
        """PLAYING -> IDLE on explicit stop."""
        with self._lock:
            if self._state is PadState.IDLE:
                return

            self._release_playback()
            self._generation += 1
            self._state = PadState.IDLE
            self._clip = None
            logger.debug(f"Pad {self.pad_id} stopped")

        self._emit([PadDeactivated(self.pad_id, DeactivationReason.STOPPED)])

    def _on_reset_timer(self, generation: int) -> None:
        """PLAYING -> IDLE when the clip's duration has elapsed."""
        with self._lock:
            if generation != self._generation or self._state is not PadState.PLAYING:
                logger.debug(f"Pad {self.pad_id} ignoring stale reset (generation {generation})")
                return

            # This timer is the one firing, nothing to cancel
            self._pending_reset = None
            self._release_playback()
            self._state = PadState.IDLE
            self._clip = None
            logger.debug(f"Pad {self.pad_id} finished")

        self._emit([PadDeactivated(self.pad_id, DeactivationReason.FINISHED)])

    def _release_playback(self) -> None:
        """Cancel the reset timer and stop the playback handle. Caller holds the lock."""
        if self._pending_reset is not None:
            self._pending_reset.cancel()
            self._pending_reset = None

        if self._active_playback is not None:
            handle, self._active_playback = self._active_playback, None
            try:
                self._output.stop_playback(handle)
            except Exception as e:
                logger.error(f"Pad {self.pad_id}: error stopping playback: {e}", exc_info=True)

    def _emit(self, events: list[PadNotification]) -> None:
        """Notify observers after the lock is released."""
        for event in events:
            self._observers.notify("on_pad_event", event)

    def __repr__(self) -> str:
        return f"PadChannel(pad_id={self.pad_id}, state={self._state.value})"
