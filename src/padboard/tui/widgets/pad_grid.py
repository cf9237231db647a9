"""Grid widget containing one pad widget per clip."""

from textual.app import ComposeResult
from textual.containers import Container
from textual.message import Message

from padboard.core import ClipLibrary

from .pad_widget import PadWidget, pad_color

KEY_LAYOUT = "1234qwerasdfzxcv"


class PadGrid(Container):
    """
    Grid of pad widgets, laid out row by row from the top left.

    Stateless apart from the widgets themselves: the board tells it which
    pads are active.
    """

    DEFAULT_CSS = """
    PadGrid {
        layout: grid;
        grid-gutter: 1;
        padding: 1;
        height: 1fr;
    }
    """

    class PadPressed(Message):
        """Message posted when any pad is pressed."""

        def __init__(self, pad_id: int):
            super().__init__()
            self.pad_id = pad_id

    def __init__(self, library: ClipLibrary, columns: int = 4) -> None:
        """
        Initialize the grid.

        Args:
            library: Clip library (one pad per clip)
            columns: Pads per row
        """
        super().__init__()
        self._library = library
        self._columns = columns
        self.pad_widgets: dict[int, PadWidget] = {}

    def compose(self) -> ComposeResult:
        num_pads = self._library.num_pads
        for clip in self._library:
            key = KEY_LAYOUT[clip.pad_id] if clip.pad_id < len(KEY_LAYOUT) else None
            widget = PadWidget(clip.pad_id, clip.name, pad_color(clip.pad_id, num_pads), key)
            self.pad_widgets[clip.pad_id] = widget
            yield widget

    def on_mount(self) -> None:
        rows = -(-self._library.num_pads // self._columns)
        self.styles.grid_size_columns = self._columns
        self.styles.grid_size_rows = rows

    def set_pad_active(self, pad_id: int, is_active: bool) -> None:
        if pad_id in self.pad_widgets:
            self.pad_widgets[pad_id].set_active(is_active)

    def on_pad_widget_pressed(self, message: PadWidget.Pressed) -> None:
        """Forward a pad click to the parent."""
        message.stop()
        self.post_message(self.PadPressed(message.pad_id))

    @staticmethod
    def pad_for_key(key: str) -> int | None:
        """Pad index bound to a keyboard key, if any."""
        index = KEY_LAYOUT.find(key) if len(key) == 1 else -1
        return index if index >= 0 else None
