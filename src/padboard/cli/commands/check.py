"""Check command - validate an assets directory without opening audio."""

import logging
import sys
from pathlib import Path

import click

from padboard.core import AssetSource, ClipLibrary
from padboard.exceptions import PadboardError
from padboard.utils import format_bytes, format_millis

from ..output import echo_error

logger = logging.getLogger(__name__)


@click.command()
@click.argument(
    'assets_dir',
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option('--pads', '-n', type=click.IntRange(min=1), default=16, show_default=True,
              help='Number of pads to load')
@click.option('--extension', '-e', default='wav', show_default=True, help='Clip file extension')
def check(assets_dir: Path, pads: int, extension: str):
    """
    Load every clip in ASSETS_DIR and print its duration.

    Pad N is bound to the file 'N.<extension>'. Exits with status 1 if any
    clip is missing or unreadable.

    \b
    Examples:
      padboard check ./sounds
      padboard check ./sounds --pads 8 --extension flac
    """
    try:
        library = ClipLibrary.load(AssetSource(assets_dir, extension), num_pads=pads)
    except PadboardError as e:
        logger.error(f"Clip library check failed: {e.technical_message}")
        echo_error(e)
        sys.exit(1)

    for clip in library:
        info = clip.resource.get_info()
        click.echo(
            f"[{clip.pad_id:2d}] {clip.name:<20} {format_millis(clip.duration_millis):>9}  "
            f"{info['sample_rate']} Hz  {info['num_channels']}ch  {info['size_str']}"
        )

    total_bytes = sum(clip.resource.data.nbytes for clip in library)
    click.echo(
        f"\n{len(library)} clips OK, total {format_millis(library.total_duration_millis)}, "
        f"{format_bytes(total_bytes)} in memory"
    )
