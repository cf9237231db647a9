"""Asset-related exceptions.

Raised while building the clip library at startup. Both are fatal for
board construction:
- AssetMissing: the clip file for a pad does not exist
- AssetUnreadable: the clip file exists but cannot be decoded
"""

from pathlib import Path

from .base import PadboardError


class AssetError(PadboardError):
    """A clip asset could not be loaded."""

    def __init__(self, user_message: str, pad_id: int, **kwargs):
        super().__init__(user_message, **kwargs)
        self.pad_id = pad_id


class AssetMissing(AssetError):
    """Clip file for a pad does not exist."""

    def __init__(self, pad_id: int, path: Path):
        """
        Initialize asset-missing error.

        Args:
            pad_id: Pad whose clip is missing
            path: Where the clip was expected
        """
        super().__init__(
            user_message=f"No clip found for pad {pad_id}.",
            technical_message=f"Clip for pad {pad_id} not found at {path}",
            pad_id=pad_id,
            recovery_hint=f"Add an audio file named '{path.name}' to {path.parent}",
        )
        self.path = path


class AssetUnreadable(AssetError):
    """Clip file exists but cannot be decoded."""

    def __init__(self, pad_id: int, cause: Exception):
        """
        Initialize asset-unreadable error.

        Args:
            pad_id: Pad whose clip failed to decode
            cause: The underlying decoding error
        """
        super().__init__(
            user_message=f"Clip for pad {pad_id} could not be read.",
            technical_message=f"Failed to decode clip for pad {pad_id}: {cause}",
            pad_id=pad_id,
            recovery_hint="Check that the file is a valid, non-empty audio file (WAV, FLAC, OGG)",
        )
        self.cause = cause
