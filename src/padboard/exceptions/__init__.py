"""
Custom exception hierarchy for padboard.

## Exception Hierarchy

```
PadboardError (base)
├── InvalidPadId
├── AssetError
│   ├── AssetMissing
│   └── AssetUnreadable
├── PlaybackError
├── AudioDeviceError
│   ├── AudioDeviceInUseError
│   └── AudioDeviceNotFoundError
└── ConfigurationError
    ├── ConfigFileInvalidError
    └── ConfigValidationError
```

All custom exceptions carry a `user_message`, a `technical_message` for
logs, a `recoverable` flag and an optional `recovery_hint`.

Asset errors abort board construction. Playback errors never leave the
pad channel: they are reported through a `PadTriggerFailed` notification.
"""

from .assets import AssetError, AssetMissing, AssetUnreadable
from .audio import AudioDeviceError, AudioDeviceInUseError, AudioDeviceNotFoundError, PlaybackError
from .base import InvalidPadId, PadboardError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .handlers import (
    ErrorContext,
    format_error_for_display,
    wrap_audio_device_error,
    wrap_pydantic_error,
)

__all__ = [
    # Assets
    "AssetError",
    "AssetMissing",
    "AssetUnreadable",
    # Audio
    "AudioDeviceError",
    "AudioDeviceInUseError",
    "AudioDeviceNotFoundError",
    "PlaybackError",
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    # Base
    "InvalidPadId",
    "PadboardError",
    # Handlers
    "ErrorContext",
    "format_error_for_display",
    "wrap_audio_device_error",
    "wrap_pydantic_error",
]
