"""Widget representing a single pad in the grid."""

import colorsys

from textual.message import Message
from textual.widgets import Static

IDLE_ICON = "▶"
ACTIVE_ICON = "⏸"


def pad_color(pad_id: int, num_pads: int) -> str:
    """Hue spread across the board, one colour per pad, as a hex string."""
    r, g, b = colorsys.hsv_to_rgb(pad_id / num_pads, 1.0, 0.8)
    return f"#{int(r * 255):02x}{int(g * 255):02x}{int(b * 255):02x}"


class PadWidget(Static):
    """
    Widget representing a single pad (presentation only).

    Shows the pad index and clip name, switches to the "active" style while
    its clip plays, and posts a Pressed message when clicked.
    """

    DEFAULT_CSS = """
    PadWidget {
        width: 100%;
        height: 100%;
        border: round $primary;
        background: $surface;
        content-align: center middle;
        text-align: center;
    }

    PadWidget.active {
        background: $success 60%;
        text-style: bold;
    }
    """

    class Pressed(Message):
        """Message posted when the pad is clicked."""

        def __init__(self, pad_id: int):
            super().__init__()
            self.pad_id = pad_id

    def __init__(self, pad_id: int, label: str, color: str, key: str | None = None) -> None:
        """
        Initialize pad widget.

        Args:
            pad_id: Index of this pad
            label: Clip name to display
            color: Border colour (hex)
            key: Keyboard shortcut for this pad, if any
        """
        super().__init__(id=f"pad-{pad_id}")
        self.pad_id = pad_id
        self._clip_name = label
        self._border_color = color
        self._key = key
        self._is_active = False

    def on_mount(self) -> None:
        self.styles.border = ("round", self._border_color)
        self.update_display()

    def update_display(self) -> None:
        """Render current pad state."""
        icon = ACTIVE_ICON if self._is_active else IDLE_ICON
        key_hint = f" [dim]({self._key})[/dim]" if self._key else ""
        self.update(f"[b]{icon} {self.pad_id}[/b]{key_hint}\n{self._clip_name}")

    def set_active(self, is_active: bool) -> None:
        """Switch between idle and active styling."""
        if is_active == self._is_active:
            return
        self._is_active = is_active
        self.set_class(is_active, "active")
        self.update_display()

    @property
    def is_active(self) -> bool:
        return self._is_active

    def on_click(self) -> None:
        self.post_message(self.Pressed(self.pad_id))
