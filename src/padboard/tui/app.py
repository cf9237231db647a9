"""Textual TUI: a clickable grid of pads."""

import asyncio
import logging
from typing import Optional

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from padboard.core import ClipLibrary, PadBoard
from padboard.models import BoardConfig
from padboard.protocols import (
    AudioOutput,
    PadActivated,
    PadDeactivated,
    PadNotification,
    PadTriggerFailed,
)

from .widgets import PadGrid, StatusBar

logger = logging.getLogger(__name__)


class PadboardApp(App):
    """
    Presentation adapter for the pad board.

    Translates clicks and key presses into PadBoard.trigger() and pad
    notifications into widget styling. Owns no playback state itself.

    Implements PadObserver via structural subtyping (no explicit inheritance
    to avoid metaclass conflicts between App and Protocol).

    The board is created on mount, so its scheduler is Textual's own asyncio
    loop and notifications arrive on the UI thread.
    """

    TITLE = "padboard"

    BINDINGS = [
        Binding("escape", "stop_all", "Stop All", show=True),
        Binding("ctrl+q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        library: ClipLibrary,
        audio_output: AudioOutput,
        config: Optional[BoardConfig] = None,
    ):
        """
        Initialize the TUI.

        Args:
            library: Loaded clip library
            audio_output: Started audio output
            config: Board configuration (defaults derived from the library)
        """
        super().__init__()
        self.library = library
        self.audio_output = audio_output
        self.board_config = config or BoardConfig(num_pads=library.num_pads)
        self.board: Optional[PadBoard] = None
        logger.info("PadboardApp created")

    def compose(self) -> ComposeResult:
        yield Header()
        yield PadGrid(self.library, columns=self.board_config.grid_columns)
        yield StatusBar()
        yield Footer()

    def on_mount(self) -> None:
        self.board = PadBoard(
            self.library,
            self.audio_output,
            asyncio.get_running_loop(),
            self.board_config.retrigger_policy,
        )
        self.board.register_observer(self)
        self._refresh_status()

    def on_unmount(self) -> None:
        if self.board is not None:
            self.board.shutdown()

    # =================================================================
    # Input
    # =================================================================

    def on_pad_grid_pad_pressed(self, message: PadGrid.PadPressed) -> None:
        self._trigger(message.pad_id)

    def on_key(self, event: events.Key) -> None:
        pad_id = PadGrid.pad_for_key(event.key)
        if pad_id is not None and pad_id < self.library.num_pads:
            event.stop()
            self._trigger(pad_id)

    def action_stop_all(self) -> None:
        """Panic: stop every pad."""
        if self.board is not None:
            self.board.stop_all()

    def _trigger(self, pad_id: int) -> None:
        if self.board is not None:
            self.board.trigger(pad_id)

    # =================================================================
    # PadObserver Protocol
    # =================================================================

    def on_pad_event(self, event: PadNotification) -> None:
        """Reflect a pad notification in the grid."""
        grid = self.query_one(PadGrid)

        if isinstance(event, PadActivated):
            grid.set_pad_active(event.pad_id, True)
        elif isinstance(event, PadDeactivated):
            grid.set_pad_active(event.pad_id, False)
        elif isinstance(event, PadTriggerFailed):
            grid.set_pad_active(event.pad_id, False)
            self.notify(
                event.cause.user_message,
                title=f"Pad {event.pad_id}",
                severity="error",
            )

        self._refresh_status()

    def _refresh_status(self) -> None:
        if self.board is None:
            return
        self.query_one(StatusBar).update_state(
            active=len(self.board.get_playing_pads()),
            num_pads=self.board.num_pads,
            audio_device=getattr(self.audio_output, "device_name", "Audio"),
        )
