"""Textual presentation adapter for the pad board."""

from .app import PadboardApp

__all__ = ["PadboardApp"]
