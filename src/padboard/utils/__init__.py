"""Generic utilities for padboard.

- observer: thread-safe observer list management
- persistence: Pydantic model JSON load/save
- formatting: byte and duration formatting
"""

from .formatting import format_bytes, format_millis
from .observer import ObserverManager

__all__ = ["ObserverManager", "format_bytes", "format_millis"]
