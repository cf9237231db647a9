"""Error handling utilities.

Each layer translates errors to be more useful at the next level up:

- Low level (sounddevice, soundfile, pydantic) raises library exceptions
- Services catch them and convert to PadboardError with context and hints
- The CLI formats `user_message` and `recovery_hint` for display
"""

import logging
from typing import Optional

from .audio import AudioDeviceError, AudioDeviceInUseError, AudioDeviceNotFoundError
from .base import PadboardError
from .config import ConfigFileInvalidError, ConfigValidationError

logger = logging.getLogger(__name__)


class ErrorContext:
    """
    Context manager for error handling with automatic logging.

    Example:
        ```python
        with ErrorContext("open audio device", logger_instance=logger):
            output.start()
        ```
    """

    def __init__(
        self,
        operation: str,
        logger_instance: Optional[logging.Logger] = None,
        re_raise: bool = True
    ):
        """
        Initialize error context.

        Args:
            operation: Description of the operation
            logger_instance: Logger to use (defaults to module logger)
            re_raise: Whether to re-raise exceptions
        """
        self.operation = operation
        self.logger = logger_instance or logger
        self.re_raise = re_raise
        self.error: Optional[BaseException] = None

    def __enter__(self):
        self.logger.debug(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.logger.debug(f"Completed: {self.operation}")
            return False

        self.error = exc_val

        if isinstance(exc_val, PadboardError):
            self.logger.error(f"Failed to {self.operation}: {exc_val.technical_message}")
        else:
            self.logger.error(f"Failed to {self.operation}: {exc_val}", exc_info=True)

        # True suppresses the exception
        return not self.re_raise


def wrap_pydantic_error(error: Exception, file_path: str) -> PadboardError:
    """
    Convert Pydantic validation errors to padboard exceptions.

    Args:
        error: The Pydantic ValidationError
        file_path: Path to the config file that failed validation

    Returns:
        A ConfigurationError with appropriate type and message
    """
    from pydantic import ValidationError

    error_msg = str(error)

    # Pydantic reports JSON syntax errors as a json_invalid validation error
    if "Invalid JSON" in error_msg or "json_invalid" in error_msg:
        if "Invalid JSON:" in error_msg:
            parse_error = error_msg.split("Invalid JSON:")[1].split("[type=")[0].strip()
        else:
            parse_error = error_msg
        return ConfigFileInvalidError(file_path, parse_error)

    if isinstance(error, ValidationError):
        errors = error.errors()
        if len(errors) == 1:
            first_error = errors[0]
            field = ".".join(str(loc) for loc in first_error.get('loc', ('unknown',)))
            return ConfigValidationError(
                field=field,
                value=first_error.get('input'),
                error_msg=first_error.get('msg', 'validation failed'),
                file_path=file_path
            )
        if errors:
            error_lines = []
            for err in errors:
                field = ".".join(str(loc) for loc in err.get('loc', ('unknown',)))
                error_lines.append(f"  - {field}: {err.get('msg', 'validation failed')}")
            return ConfigValidationError(
                field="multiple fields",
                value=None,
                error_msg=f"{len(errors)} validation errors:\n" + "\n".join(error_lines),
                file_path=file_path
            )

    return ConfigValidationError(field="unknown", value=None, error_msg=error_msg, file_path=file_path)


def wrap_audio_device_error(error: Exception, device_id: Optional[int] = None) -> PadboardError:
    """
    Convert low-level audio errors to padboard exceptions.

    Maps error codes from PortAudio/sounddevice to our exception types.

    Args:
        error: The original exception from the audio library
        device_id: The device ID involved in the error

    Returns:
        A PadboardError with appropriate type and message
    """
    error_msg = str(error)

    if "PaErrorCode -9996" in error_msg or "Invalid device" in error_msg:
        return AudioDeviceInUseError(device_id=device_id, original_error=error_msg)

    if "device" in error_msg.lower() and "not found" in error_msg.lower():
        if device_id is not None:
            return AudioDeviceNotFoundError(device_id)

    return AudioDeviceError(
        user_message=f"Audio device error: {error_msg}",
        technical_message=f"Audio device {device_id} error: {error_msg}",
        device_id=device_id
    )


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Format an exception for user display.

    Args:
        error: The exception to format

    Returns:
        Tuple of (user_message, recovery_hint or None)
    """
    if isinstance(error, PadboardError):
        return error.user_message, error.recovery_hint

    error_type = type(error).__name__
    return f"{error_type}: {error}", None
