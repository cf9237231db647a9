"""Status bar widget showing active pads and the audio device."""

from textual.widgets import Static


class StatusBar(Static):
    """Single-line status: active pad count and audio device."""

    DEFAULT_CSS = """
    StatusBar {
        height: 1;
        background: $panel;
        color: $text;
        padding: 0 1;
    }

    StatusBar.playing {
        background: $success;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self._active_count = 0
        self._num_pads = 0
        self._audio_device = "No Audio"

    def update_state(self, active: int, num_pads: int, audio_device: str) -> None:
        """
        Update all status information.

        Args:
            active: Number of pads currently playing
            num_pads: Number of pads on the board
            audio_device: Name of the audio device
        """
        self._active_count = active
        self._num_pads = num_pads
        self._audio_device = audio_device
        self.set_class(active > 0, "playing")
        self.update(
            f"▶ {self._active_count}/{self._num_pads} active  |  🔊 {self._audio_device}"
        )
