"""Audio output device and stream management."""

import logging
import sys
from typing import Callable, Optional

import numpy as np
import sounddevice as sd

from padboard.exceptions import wrap_audio_device_error

logger = logging.getLogger(__name__)


class AudioDevice:
    """
    Low-latency audio output device and stream lifecycle.

    Knows nothing about pads: it opens a sounddevice OutputStream and asks
    its callback to fill each block.
    """

    def __init__(
        self,
        buffer_size: int = 512,
        num_channels: int = 2,
        device: Optional[int] = None,
        low_latency: bool = False
    ):
        """
        Initialize audio device.

        Args:
            buffer_size: Audio buffer size in frames (lower = less latency)
            num_channels: Number of output channels (1=mono, 2=stereo)
            device: Output device ID (None for default)
            low_latency: Only accept devices on a low-latency host API

        Raises:
            ValueError: If low_latency is set and the device doesn't qualify
        """
        self.buffer_size = buffer_size
        self.num_channels = num_channels
        self.low_latency = low_latency
        self.device = device

        if device is not None and low_latency:
            self._validate_low_latency_device(device)

        self._stream: Optional[sd.OutputStream] = None
        self._is_running = False
        self._callback: Optional[Callable[[np.ndarray, int], None]] = None

    @staticmethod
    def _get_platform_apis() -> tuple[list[str], str]:
        """
        Get platform-specific low-latency APIs.

        Returns:
            Tuple of (api_list, api_names_string)
        """
        if sys.platform == 'win32':
            return ['ASIO', 'WASAPI'], "ASIO/WASAPI"
        elif sys.platform == 'darwin':
            return ['Core Audio'], "Core Audio"
        else:
            return ['ALSA', 'JACK'], "ALSA/JACK"

    def _validate_low_latency_device(self, device_id: int) -> None:
        """Ensure the selected device uses a low-latency host API."""
        try:
            device_info = sd.query_devices(device_id)
            hostapi_name = sd.query_hostapis(device_info['hostapi'])['name']
        except Exception as e:
            raise ValueError(
                f"Invalid device ID: {device_id}. "
                f"Run 'padboard audio list' to list available devices."
            ) from e

        low_latency_apis, api_names = self._get_platform_apis()
        if not any(api in hostapi_name for api in low_latency_apis):
            raise ValueError(
                f"Device '{device_info['name']}' uses Host API '{hostapi_name}'. "
                f"Only {api_names} devices are supported for low-latency playback."
            )
        logger.info(f"Validated device: {device_info['name']} ({hostapi_name})")

    def set_callback(self, callback: Callable[[np.ndarray, int], None]) -> None:
        """
        Set audio callback function.

        Args:
            callback: Function(outdata: np.ndarray, frames: int) -> None
        """
        self._callback = callback

    def start(self) -> None:
        """
        Open and start the output stream.

        Raises:
            RuntimeError: If no callback was set
            AudioDeviceError: If the stream cannot be opened
        """
        if self._is_running:
            return

        if self._callback is None:
            raise RuntimeError("No audio callback set. Call set_callback() first.")

        try:
            self._stream = sd.OutputStream(
                samplerate=self.sample_rate,
                blocksize=self.buffer_size,
                channels=self.num_channels,
                device=self.device,
                dtype=np.float32,
                latency='low' if self.low_latency else 'high',
                callback=self._audio_callback,
            )
            self._stream.start()
        except sd.PortAudioError as e:
            self._stream = None
            raise wrap_audio_device_error(e, self.device) from e

        self._is_running = True
        logger.info(f"Audio stream started on {self.device_name}")
        logger.info(f"  Buffer size: {self.buffer_size} frames")
        logger.info(f"  Total latency: {self._stream.latency * 1000:.1f}ms")

    def stop(self) -> None:
        """Stop and close the output stream."""
        if not self._is_running:
            return

        if self._stream:
            self._stream.stop()
            self._stream.close()
            self._stream = None

        self._is_running = False
        logger.info("Audio stream stopped")

    def _audio_callback(self, outdata: np.ndarray, frames: int, time_info, status) -> None:
        """Internal callback called by sounddevice; delegates to the user callback."""
        if status:
            logger.warning(f"Audio callback status: {status}")

        if self._callback:
            self._callback(outdata, frames)
        else:
            outdata.fill(0)

    @property
    def is_running(self) -> bool:
        """Check if audio stream is running."""
        return self._is_running

    @property
    def sample_rate(self) -> int:
        """Default sample rate of the selected output device."""
        device_id = self.device if self.device is not None else sd.default.device[1]
        return int(sd.query_devices(device_id)['default_samplerate'])

    @property
    def device_name(self) -> str:
        """Get the name of the current audio device."""
        try:
            if self.device is not None:
                return sd.query_devices(self.device)['name']
            default_device = sd.default.device[1]
            if default_device is not None and default_device >= 0:
                return f"{sd.query_devices(default_device)['name']} (default)"
            return "Default Device"
        except Exception:
            return "Unknown Device"

    @staticmethod
    def list_output_devices(low_latency_only: bool = False):
        """
        List audio output devices.

        Args:
            low_latency_only: Only include devices on a low-latency host API

        Returns:
            Tuple of (devices, api_names) where devices is a list of
            (device_id, device_name, host_api_name) tuples
        """
        devices = sd.query_devices()
        hostapis = sd.query_hostapis()
        low_latency_apis, api_names = AudioDevice._get_platform_apis()

        available = []
        for i, device in enumerate(devices):
            if device['max_output_channels'] <= 0:
                continue
            hostapi_name = hostapis[device['hostapi']]['name']
            if low_latency_only and not any(api in hostapi_name for api in low_latency_apis):
                continue
            available.append((i, device['name'], hostapi_name))

        return available, api_names

    @staticmethod
    def get_default_device() -> int:
        """Get default output device ID."""
        return sd.default.device[1]

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
