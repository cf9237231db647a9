"""Run command - load clips, open audio and launch the pad grid."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from padboard.models import BoardConfig, RetriggerPolicy

from ..output import echo_error

logger = logging.getLogger(__name__)


def build_config(
    config_path: Optional[Path],
    assets_dir: Path,
    pads: Optional[int],
    extension: Optional[str],
    device: Optional[int],
    buffer_size: Optional[int],
    retrigger: Optional[str],
) -> BoardConfig:
    """Load the config file and apply command line overrides."""
    config = BoardConfig.load_or_default(config_path)

    overrides = {"assets_dir": assets_dir}
    if pads is not None:
        overrides["num_pads"] = pads
    if extension is not None:
        overrides["file_extension"] = extension
    if device is not None:
        overrides["audio_device"] = device
    if buffer_size is not None:
        overrides["buffer_size"] = buffer_size
    if retrigger is not None:
        overrides["retrigger_policy"] = RetriggerPolicy(retrigger)

    return config.model_copy(update=overrides)


@click.command()
@click.argument(
    'assets_dir',
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option('--pads', '-n', type=click.IntRange(min=1), default=None,
              help='Number of pads (default: 16)')
@click.option('--extension', '-e', default=None, help='Clip file extension (default: wav)')
@click.option('--device', type=int, default=None, help='Audio output device ID')
@click.option('--buffer-size', type=click.IntRange(min=16), default=None,
              help='Audio buffer size in frames')
@click.option(
    '--retrigger',
    type=click.Choice([p.value for p in RetriggerPolicy], case_sensitive=False),
    default=None,
    help='What pressing a playing pad does (default: restart)'
)
@click.option('--config', 'config_path', type=click.Path(dir_okay=False, path_type=Path),
              default=None, help='Config file (default: ~/.padboard/config.json)')
def run(
    assets_dir: Path,
    pads: Optional[int],
    extension: Optional[str],
    device: Optional[int],
    buffer_size: Optional[int],
    retrigger: Optional[str],
    config_path: Optional[Path],
):
    """
    Launch the pad grid with the clips in ASSETS_DIR.

    Pad N plays 'N.wav'. Click a pad or press its key (1234 / qwer / asdf /
    zxcv) to play it; Escape stops everything.

    \b
    Examples:
      padboard run ./sounds
      padboard run ./sounds --retrigger ignore
      padboard run ./sounds --device 3 --buffer-size 256
    """
    # Lazy imports to keep `padboard --help` free of audio dependencies
    from padboard.audio import DeviceAudioOutput, SampleLoader
    from padboard.audio.device import AudioDevice
    from padboard.core import AssetSource, ClipLibrary
    from padboard.exceptions import ErrorContext
    from padboard.tui import PadboardApp

    output = None
    try:
        config = build_config(config_path, assets_dir, pads, extension, device, buffer_size, retrigger)

        audio_device = AudioDevice(device=config.audio_device, buffer_size=config.buffer_size)

        with ErrorContext("load clip library", logger_instance=logger):
            library = ClipLibrary.load(
                AssetSource(assets_dir, config.file_extension),
                num_pads=config.num_pads,
                loader=SampleLoader(target_sample_rate=audio_device.sample_rate),
            )

        output = DeviceAudioOutput(audio_device, master_volume=config.master_volume)
        with ErrorContext("open audio device", logger_instance=logger):
            output.start()

        PadboardApp(library, output, config).run()

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        click.echo("\nShutting down...", err=True)
    except Exception as e:
        logger.exception("Error running padboard")
        echo_error(e)
        click.echo("\nFor details, check the log file (see: padboard --help)", err=True)
        sys.exit(1)
    finally:
        if output is not None:
            output.stop()
