"""Protocols for the collaborators around the pad board.

- PadObserver: presentation side, receives pad notifications
- AudioOutput: starts and stops clip playback
- Scheduler / TimerHandle: the event loop that runs transitions and timers
"""

from typing import Any, Callable, Protocol, runtime_checkable

from .events import PadNotification


@runtime_checkable
class PadObserver(Protocol):
    """
    Observer that receives pad state notifications.

    Implemented by the board (to fan out channel notifications) and by
    presentation adapters.
    """

    def on_pad_event(self, event: PadNotification) -> None:
        """
        Handle a pad notification.

        Args:
            event: PadActivated, PadDeactivated or PadTriggerFailed

        Threading:
            Called on the scheduler's loop thread. With the Textual UI this is
            the UI thread, so widgets can be updated directly.
        """
        ...


@runtime_checkable
class AudioOutput(Protocol):
    """Starts and stops playback of decoded clips."""

    def start_playback(self, resource: Any) -> Any:
        """
        Start playing a clip resource from its beginning.

        Must not block on the audio hardware.

        Returns:
            Opaque playback handle for stop_playback()

        Raises:
            PlaybackError: If playback cannot be started
        """
        ...

    def stop_playback(self, handle: Any) -> None:
        """Stop a playback instance. Idempotent and never raises."""
        ...


@runtime_checkable
class TimerHandle(Protocol):
    """A scheduled callback that can be cancelled before it runs."""

    def cancel(self) -> None:
        ...


@runtime_checkable
class Scheduler(Protocol):
    """
    Cooperative event loop driving pad transitions.

    asyncio.AbstractEventLoop satisfies this protocol.
    """

    def call_soon_threadsafe(self, callback: Callable[..., Any], *args: Any) -> Any:
        """Queue a callback to run on the loop, from any thread."""
        ...

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle:
        """Run a callback on the loop after `delay` seconds (loop thread only)."""
        ...
