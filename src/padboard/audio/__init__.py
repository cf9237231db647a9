"""Audio primitives: decoded data, loading, mixing and output.

AudioDevice lives in `padboard.audio.device` and is imported on demand,
since it needs the PortAudio system library.
"""

from .data import AudioData, Voice
from .loader import SampleLoader
from .mixer import AudioMixer
from .output import DeviceAudioOutput

__all__ = [
    "AudioData",
    "AudioMixer",
    "DeviceAudioOutput",
    "SampleLoader",
    "Voice",
]
