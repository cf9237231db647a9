"""Audio output collaborator for pad channels.

DeviceAudioOutput turns "start this clip" into a Voice registered with the
mixer. The audio callback renders and retires voices; nothing here blocks
on the hardware.
"""

import logging
from threading import Lock
from typing import TYPE_CHECKING

import numpy as np

from padboard.exceptions import PlaybackError

from .data import AudioData, Voice
from .mixer import AudioMixer

if TYPE_CHECKING:
    from .device import AudioDevice

logger = logging.getLogger(__name__)


class DeviceAudioOutput:
    """
    Plays clip resources on an AudioDevice.

    Implements the AudioOutput protocol. Voices are independent, so two
    pads playing at once simply mix.
    """

    def __init__(self, device: "AudioDevice", master_volume: float = 1.0):
        """
        Initialize the output.

        Args:
            device: Configured (not yet started) AudioDevice
            master_volume: Output gain (0.0-1.0)
        """
        self._device = device
        self._mixer = AudioMixer(num_channels=device.num_channels)
        self._master_volume = master_volume

        # Voices are added from the loop thread and rendered on the audio thread
        self._lock = Lock()
        self._voices: list[Voice] = []

        self._device.set_callback(self._audio_callback)

    def start(self) -> None:
        """Start the underlying audio stream."""
        self._device.start()

    def stop(self) -> None:
        """Silence all voices and stop the audio stream."""
        with self._lock:
            for voice in self._voices:
                voice.stop()
            self._voices.clear()
        self._device.stop()

    def start_playback(self, resource: AudioData) -> Voice:
        """
        Start a new voice for a clip resource.

        Raises:
            PlaybackError: If the stream is not running or the resource is unusable
        """
        if not self._device.is_running:
            raise PlaybackError("Audio output is not running.")
        if not isinstance(resource, AudioData) or resource.num_frames == 0:
            raise PlaybackError(f"Cannot play resource {resource!r}.")

        voice = Voice(audio_data=resource)
        with self._lock:
            self._voices.append(voice)
        logger.debug(f"Started voice {voice.voice_id} ({resource.duration:.3f}s)")
        return voice

    def stop_playback(self, handle: Voice) -> None:
        """Stop a voice. Unknown or finished voices are ignored."""
        handle.stop()
        with self._lock:
            if handle in self._voices:
                self._voices.remove(handle)

    def set_master_volume(self, volume: float) -> None:
        """Set master output gain (clamped to 0.0-1.0)."""
        self._master_volume = max(0.0, min(1.0, volume))

    @property
    def active_voices(self) -> int:
        """Number of voices currently rendering."""
        with self._lock:
            return len(self._voices)

    @property
    def is_running(self) -> bool:
        return self._device.is_running

    @property
    def device_name(self) -> str:
        return self._device.device_name

    def _audio_callback(self, outdata: np.ndarray, frames: int) -> None:
        """Mix all live voices into the output block (audio thread)."""
        try:
            with self._lock:
                self._voices = [voice for voice in self._voices if voice.is_playing]
                voices = list(self._voices)

            mixed = self._mixer.mix(voices, frames)
            self._mixer.apply_master_volume(mixed, self._master_volume)
            self._mixer.soft_clip(mixed)

            if mixed.ndim == 1:
                outdata[:, 0] = mixed
            else:
                outdata[:] = mixed

        except Exception as e:
            # Output silence rather than letting the stream die
            logger.exception(f"Error in audio callback: {e}")
            outdata.fill(0.0)
