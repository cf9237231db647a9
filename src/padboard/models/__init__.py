"""Data models for the pad board."""

from .clip import Clip
from .config import BoardConfig
from .enums import PadState, RetriggerPolicy

__all__ = [
    "BoardConfig",
    "Clip",
    # Enums
    "PadState",
    "RetriggerPolicy",
]
