"""Clip value type."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from padboard.audio.data import AudioData


@dataclass(frozen=True, slots=True)
class Clip:
    """
    A decoded audio clip bound to one pad.

    Immutable; owned by the ClipLibrary and shared by reference with the
    pad channel that plays it. Not a Pydantic model because it carries a
    NumPy buffer.
    """

    pad_id: int
    duration_millis: float
    resource: AudioData           # Playable handle passed to the audio output
    path: Optional[Path] = None   # Source file, if loaded from disk

    @classmethod
    def from_audio(cls, pad_id: int, audio: AudioData, path: Optional[Path] = None) -> "Clip":
        """Build a clip whose duration is derived from the decoded audio."""
        return cls(
            pad_id=pad_id,
            duration_millis=audio.duration * 1000.0,
            resource=audio,
            path=path,
        )

    @property
    def duration_seconds(self) -> float:
        return self.duration_millis / 1000.0

    @property
    def name(self) -> str:
        """Display name (file stem, or the pad index)."""
        return self.path.stem if self.path is not None else str(self.pad_id)
