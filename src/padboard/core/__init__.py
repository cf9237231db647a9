"""Core pad logic - UI-agnostic.

- ClipLibrary: pad id -> decoded clip
- PadChannel: one pad's playback state machine with timed auto-reset
- PadBoard: the fixed set of channels, trigger routing and notification fan-out
"""

from .board import PadBoard
from .channel import PadChannel
from .clip_library import AssetSource, ClipLibrary

__all__ = ["AssetSource", "ClipLibrary", "PadBoard", "PadChannel"]
