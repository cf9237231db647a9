"""CLI commands for padboard."""

from .audio import audio_group
from .check import check
from .run import run

__all__ = ["audio_group", "check", "run"]
