"""Widgets for the pad board TUI."""

from .pad_grid import PadGrid
from .pad_widget import PadWidget
from .status_bar import StatusBar

__all__ = ["PadGrid", "PadWidget", "StatusBar"]
