"""Sample loader for decoding audio files."""

from pathlib import Path
from typing import Optional

import numpy as np
import soundfile as sf

from .data import AudioData


class SampleLoader:
    """
    Load audio files into AudioData structures.

    Handles WAV, FLAC, OGG, and other formats supported by soundfile.
    """

    def __init__(self, target_sample_rate: Optional[int] = None):
        """
        Initialize sample loader.

        Args:
            target_sample_rate: If set, resample all audio to this rate.
                               If None, use original sample rate.
        """
        self.target_sample_rate = target_sample_rate

    def load(self, path: Path) -> AudioData:
        """
        Load audio file.

        Args:
            path: Path to audio file

        Returns:
            AudioData containing the loaded audio

        Raises:
            FileNotFoundError: If file doesn't exist
            RuntimeError: If file cannot be decoded or is empty
        """
        if not path.exists():
            raise FileNotFoundError(f"Audio file not found: {path}")

        try:
            data, sample_rate = sf.read(str(path), dtype='float32')
            info = sf.info(str(path))
        except Exception as e:
            raise RuntimeError(f"Failed to load audio file {path}: {e}") from e

        if len(data) == 0:
            raise RuntimeError(f"Audio file is empty: {path}")

        if self.target_sample_rate and sample_rate != self.target_sample_rate:
            data = self._resample(data, sample_rate, self.target_sample_rate)
            sample_rate = self.target_sample_rate

        audio = AudioData.from_array(data, sample_rate)
        audio.format = info.format
        audio.subtype = info.subtype
        return audio

    def _resample(
        self,
        data: np.ndarray,
        orig_sr: int,
        target_sr: int
    ) -> np.ndarray:
        """
        Simple linear resampling.

        Args:
            data: Audio data
            orig_sr: Original sample rate
            target_sr: Target sample rate

        Returns:
            Resampled audio data
        """
        new_length = int(len(data) * target_sr / orig_sr)
        x_old = np.linspace(0, 1, len(data))
        x_new = np.linspace(0, 1, new_length)

        if data.ndim == 1:
            return np.interp(x_new, x_old, data).astype(np.float32)

        resampled = np.zeros((new_length, data.shape[1]), dtype=np.float32)
        for ch in range(data.shape[1]):
            resampled[:, ch] = np.interp(x_new, x_old, data[:, ch])
        return resampled
