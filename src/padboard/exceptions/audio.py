"""Audio-related exceptions.

- PlaybackError: starting a clip failed (per trigger, recoverable)
- AudioDeviceError: opening or running the output device failed
- AudioDeviceInUseError: device is already in use
- AudioDeviceNotFoundError: device was not found
"""

from .base import PadboardError


class PlaybackError(PadboardError):
    """Starting playback of a clip failed."""

    def __init__(self, user_message: str, cause: Exception | None = None):
        """
        Initialize playback error.

        Args:
            user_message: User-friendly error message
            cause: Original error raised by the audio output (if any)
        """
        technical = user_message
        if cause is not None:
            technical += f"\nOriginal error: {cause!r}"
        super().__init__(
            user_message=user_message,
            technical_message=technical,
            recoverable=True,
        )
        self.cause = cause


class AudioDeviceError(PadboardError):
    """Audio device initialization or operation failed."""

    def __init__(self, user_message: str, device_id: int | None = None, **kwargs):
        """
        Initialize audio device error.

        Args:
            user_message: User-friendly error message
            device_id: The device ID that failed (if applicable)
        """
        super().__init__(user_message, **kwargs)
        self.device_id = device_id


class AudioDeviceInUseError(AudioDeviceError):
    """Audio device is already in use by another application."""

    def __init__(self, device_id: int | None = None, original_error: str | None = None):
        user_msg = "Audio device is already in use by another application."
        tech_msg = user_msg
        if original_error:
            tech_msg += f"\nOriginal error: {original_error}"

        super().__init__(
            user_message=user_msg,
            technical_message=tech_msg,
            device_id=device_id,
            recoverable=True,
            recovery_hint=(
                "Close other audio applications. "
                "Run 'padboard audio list' to see available devices."
            ),
        )


class AudioDeviceNotFoundError(AudioDeviceError):
    """Requested audio device was not found."""

    def __init__(self, device_id: int):
        super().__init__(
            user_message=f"Audio device {device_id} not found.",
            device_id=device_id,
            recoverable=True,
            recovery_hint="Run 'padboard audio list' to see available devices.",
        )
