"""Clip library: pad id -> decoded clip, loaded once at startup."""

import logging
import operator
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Sequence

from padboard.audio import SampleLoader
from padboard.exceptions import AssetMissing, AssetUnreadable, InvalidPadId
from padboard.models import Clip

logger = logging.getLogger(__name__)

DEFAULT_NUM_PADS = 16


@dataclass(frozen=True, slots=True)
class AssetSource:
    """
    Where clips come from: a directory with one file per pad.

    Pad `i` maps to `<directory>/<i>.<extension>`.
    """

    directory: Path
    extension: str = "wav"

    def path_for(self, pad_id: int) -> Path:
        """Resolve the clip file for a pad."""
        return self.directory / f"{pad_id}.{self.extension.lstrip('.')}"


class ClipLibrary:
    """
    Read-only mapping from pad id to Clip.

    Built all-or-nothing: either every pad has a clip or construction
    fails. Safe to share between threads once built.
    """

    def __init__(self, clips: Sequence[Clip]):
        """
        Build a library from clips ordered by pad id.

        Args:
            clips: One clip per pad; clip i must have pad_id == i

        Raises:
            ValueError: If clips is empty or not indexed 0..N-1
        """
        if not clips:
            raise ValueError("A clip library needs at least one clip")
        for index, clip in enumerate(clips):
            if clip.pad_id != index:
                raise ValueError(f"Clip at position {index} is bound to pad {clip.pad_id}")
        self._clips: tuple[Clip, ...] = tuple(clips)

    @classmethod
    def load(
        cls,
        asset_source: AssetSource,
        num_pads: int = DEFAULT_NUM_PADS,
        loader: Optional[SampleLoader] = None,
    ) -> "ClipLibrary":
        """
        Decode one clip per pad from an asset source.

        Args:
            asset_source: Directory and extension of the clip files
            num_pads: Number of pads to load (0..num_pads-1)
            loader: Sample loader (defaults to one keeping the file sample rate)

        Returns:
            Fully loaded library

        Raises:
            AssetMissing: If a pad's clip file doesn't exist
            AssetUnreadable: If a pad's clip file can't be decoded
        """
        loader = loader or SampleLoader()
        clips = []

        for pad_id in range(num_pads):
            path = asset_source.path_for(pad_id)
            if not path.is_file():
                raise AssetMissing(pad_id, path)

            try:
                audio = loader.load(path)
            except Exception as e:
                raise AssetUnreadable(pad_id, e) from e

            clip = Clip.from_audio(pad_id, audio, path)
            logger.debug(f"Loaded clip for pad {pad_id}: {path.name} ({clip.duration_millis:.0f}ms)")
            clips.append(clip)

        library = cls(clips)
        logger.info(f"Loaded {num_pads} clips from {asset_source.directory}")
        return library

    def get(self, pad_id: int) -> Clip:
        """
        Look up the clip for a pad.

        Integer-like ids (e.g. numpy integers) are accepted; bools are not.

        Raises:
            InvalidPadId: If pad_id is outside [0, num_pads)
        """
        index = self.pad_index(pad_id)
        if index is None:
            raise InvalidPadId(pad_id, len(self._clips))
        return self._clips[index]

    def contains(self, pad_id: int) -> bool:
        """Check if pad_id is a valid pad index for this library."""
        return self.pad_index(pad_id) is not None

    def pad_index(self, pad_id: int) -> Optional[int]:
        """Normalise pad_id to a plain int, or None if it isn't a valid pad."""
        if isinstance(pad_id, bool):
            return None
        try:
            index = operator.index(pad_id)
        except TypeError:
            return None
        return index if 0 <= index < len(self._clips) else None

    @property
    def num_pads(self) -> int:
        return len(self._clips)

    @property
    def total_duration_millis(self) -> float:
        return sum(clip.duration_millis for clip in self._clips)

    def __len__(self) -> int:
        return len(self._clips)

    def __iter__(self) -> Iterator[Clip]:
        return iter(self._clips)
