"""Audio data structures using dataclasses for performance.

These dataclasses store decoded audio (NumPy arrays) and the runtime state
of a single rendering of it. They are not Pydantic models: they carry
non-serializable buffers and are touched from the audio callback thread.
"""

from dataclasses import dataclass, field
from itertools import count
from typing import Optional

import numpy as np
import numpy.typing as npt

from padboard.utils import format_bytes

_voice_ids = count(1)


@dataclass(slots=True)
class AudioData:
    """
    Decoded audio buffer.

    Shared read-only between every voice rendering it.
    """

    data: npt.NDArray[np.float32]   # Audio samples as float32
    sample_rate: int                # Sample rate in Hz
    num_channels: int               # Number of channels (1=mono, 2=stereo)
    num_frames: int                 # Number of frames (samples per channel)
    format: Optional[str] = None    # File format (e.g., 'WAV', 'FLAC')
    subtype: Optional[str] = None   # File subtype (e.g., 'PCM_16', 'FLOAT')

    @classmethod
    def from_array(
        cls,
        data: npt.NDArray[np.float32],
        sample_rate: int
    ) -> "AudioData":
        """
        Create AudioData from a NumPy array.

        Args:
            data: Audio data, shape (num_frames,) for mono or
                  (num_frames, num_channels) for multi-channel
            sample_rate: Sample rate in Hz

        Returns:
            AudioData instance
        """
        if data.ndim == 1:
            num_channels = 1
            num_frames = len(data)
        elif data.ndim == 2:
            num_frames, num_channels = data.shape
        else:
            raise ValueError(f"Audio data must be 1D or 2D, got {data.ndim}D")

        if data.dtype != np.float32:
            data = data.astype(np.float32)

        return cls(
            data=data,
            sample_rate=sample_rate,
            num_channels=num_channels,
            num_frames=num_frames
        )

    @property
    def duration(self) -> float:
        """Duration in seconds."""
        return self.num_frames / self.sample_rate

    def get_info(self) -> dict:
        """Summary of the decoded audio for display."""
        size_bytes = self.data.nbytes
        info = {
            'duration': self.duration,
            'sample_rate': self.sample_rate,
            'num_channels': self.num_channels,
            'num_frames': self.num_frames,
            'size_bytes': size_bytes,
            'size_str': format_bytes(size_bytes),
        }
        if self.format:
            info['format'] = self.format
        if self.subtype:
            info['subtype'] = self.subtype
        return info


@dataclass(slots=True, eq=False)
class Voice:
    """
    One in-flight rendering of a clip.

    This is the playback handle handed back to pad channels. A voice only
    moves forward: it starts at frame 0, plays once, and is either stopped
    or runs off the end of its buffer.
    """

    audio_data: AudioData
    position: int = 0
    is_playing: bool = True
    voice_id: int = field(default_factory=lambda: next(_voice_ids))

    def stop(self) -> None:
        """Stop rendering. Safe to call more than once."""
        self.is_playing = False

    def get_frames(self, num_frames: int) -> Optional[npt.NDArray[np.float32]]:
        """
        Get the next block of frames, truncated at the end of the buffer.

        Returns:
            Audio frames, or None if the voice has nothing left to play
        """
        if not self.is_playing or self.position >= self.audio_data.num_frames:
            return None

        end_pos = min(self.position + num_frames, self.audio_data.num_frames)
        return self.audio_data.data[self.position:end_pos]

    def advance(self, num_frames: int) -> None:
        """Advance the playback position, stopping at the end of the buffer."""
        if not self.is_playing:
            return

        self.position += num_frames
        if self.position >= self.audio_data.num_frames:
            self.stop()

    @property
    def progress(self) -> float:
        """Playback progress as a fraction (0.0 to 1.0)."""
        if self.audio_data.num_frames == 0:
            return 1.0
        return min(self.position / self.audio_data.num_frames, 1.0)
