"""Board configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field, field_serializer

from padboard.utils.persistence import PydanticPersistence

from .enums import RetriggerPolicy

DEFAULT_CONFIG_PATH = Path.home() / ".padboard" / "config.json"


class BoardConfig(BaseModel):
    """Board and audio settings. Fixed for the lifetime of a board."""

    # Pads and assets
    num_pads: int = Field(default=16, ge=1, description="Number of pads on the board")
    assets_dir: Path | None = Field(
        default=None,
        description="Directory holding one clip per pad, named '<pad index>.<extension>'",
    )
    file_extension: str = Field(default="wav", min_length=1, description="Clip file extension")
    retrigger_policy: RetriggerPolicy = Field(
        default=RetriggerPolicy.RESTART,
        description="Behaviour when a playing pad is pressed again",
    )

    # Audio
    audio_device: int | None = Field(
        default=None, description="Audio output device ID (None = system default)"
    )
    buffer_size: int = Field(default=512, gt=0, description="Audio buffer size in frames")
    master_volume: float = Field(default=1.0, ge=0.0, le=1.0, description="Output gain")

    # Presentation
    grid_columns: int = Field(default=4, ge=1, description="Pads per row in the grid view")

    @field_serializer("assets_dir")
    def serialize_path(self, path: Path | None) -> str | None:
        """Serialize Path to string."""
        return str(path) if path is not None else None

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "BoardConfig":
        """
        Load config from file or return defaults if the file doesn't exist.

        Args:
            path: Path to config file. If None, uses ~/.padboard/config.json.

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        return PydanticPersistence.load_json_or_default(path or DEFAULT_CONFIG_PATH, cls)

    def save(self, path: Path | None = None) -> None:
        """Save config to file."""
        PydanticPersistence.save_json(self, path or DEFAULT_CONFIG_PATH)
