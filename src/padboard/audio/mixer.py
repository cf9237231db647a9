"""Audio mixer for summing active voices."""

from typing import Iterable

import numpy as np
import numpy.typing as npt

from .data import Voice


class AudioMixer:
    """Mix multiple voices into a single output block."""

    def __init__(self, num_channels: int = 2):
        """
        Initialize audio mixer.

        Args:
            num_channels: Number of output channels (1=mono, 2=stereo)
        """
        self.num_channels = num_channels

    def mix(self, voices: Iterable[Voice], num_frames: int) -> npt.NDArray[np.float32]:
        """
        Mix voices into a single buffer and advance each of them.

        Args:
            voices: Voices to render
            num_frames: Number of frames to generate

        Returns:
            Mixed audio buffer (num_frames, num_channels) or (num_frames,) for mono
        """
        if self.num_channels == 1:
            output = np.zeros(num_frames, dtype=np.float32)
        else:
            output = np.zeros((num_frames, self.num_channels), dtype=np.float32)

        for voice in voices:
            frames = voice.get_frames(num_frames)
            if frames is None:
                continue

            frames = self._match_channels(frames, voice.audio_data.num_channels)
            add_length = min(len(frames), num_frames)
            output[:add_length] += frames[:add_length]

            voice.advance(add_length)

        return output

    def _match_channels(
        self,
        frames: npt.NDArray[np.float32],
        source_channels: int
    ) -> npt.NDArray[np.float32]:
        """Convert audio frames to match the output channel count."""
        if source_channels == self.num_channels:
            return frames

        if source_channels == 1:
            return np.column_stack([frames] * self.num_channels)

        if self.num_channels == 1:
            return np.mean(frames, axis=1, dtype=np.float32)

        # Multi-channel source to stereo: take the first channels
        return frames[:, :self.num_channels]

    @staticmethod
    def apply_master_volume(buffer: npt.NDArray[np.float32], volume: float) -> None:
        """Apply master volume to buffer in-place."""
        if volume != 1.0:
            buffer *= volume

    @staticmethod
    def soft_clip(buffer: npt.NDArray[np.float32]) -> None:
        """Apply soft clipping (tanh) in-place to prevent harsh distortion."""
        np.tanh(buffer, out=buffer)
