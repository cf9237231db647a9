"""Base exception class for padboard.

All custom exceptions inherit from PadboardError to allow catching
all app-specific errors in one place. The base class provides:

- `user_message`: Human-friendly message for display to users
- `technical_message`: Detailed message for logging
- `recoverable`: Whether the error can be recovered from
- `recovery_hint`: Optional suggestion for how to fix the issue
"""

from typing import Optional


class PadboardError(Exception):
    """
    Base exception for all padboard errors.

    Attributes:
        user_message: Human-friendly message for display
        technical_message: Detailed message for logging
        recoverable: Whether the error can be recovered from
        recovery_hint: Optional hint for how to fix the issue
    """

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        recoverable: bool = False,
        recovery_hint: Optional[str] = None,
    ):
        """
        Initialize a padboard error.

        Args:
            user_message: Message to show to users
            technical_message: Detailed message for logs (defaults to user_message)
            recoverable: True if operation can be retried/recovered
            recovery_hint: Suggestion for how to fix the issue
        """
        super().__init__(user_message)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        """Return user-friendly message."""
        return self.user_message

    def get_full_message(self) -> str:
        """Get complete error message with recovery hint."""
        msg = self.user_message
        if self.recovery_hint:
            msg += f"\n\nSuggestion: {self.recovery_hint}"
        return msg


class InvalidPadId(PadboardError):
    """A pad id outside the board's declared range was used."""

    def __init__(self, pad_id: int, num_pads: int):
        """
        Initialize invalid pad id error.

        Args:
            pad_id: The offending pad id
            num_pads: Number of pads on the board
        """
        super().__init__(
            user_message=f"Invalid pad id: {pad_id} (valid: 0-{num_pads - 1})",
            recoverable=True,
        )
        self.pad_id = pad_id
        self.num_pads = num_pads
