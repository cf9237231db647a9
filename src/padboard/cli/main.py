"""Main CLI entry point."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import click

from padboard import __version__

from .commands import audio_group, check, run

logger = logging.getLogger(__name__)

DEFAULT_LOG_DIR = Path.home() / ".padboard" / "logs"


def resolve_log_path(debug: bool, log_file: Optional[Path]) -> Path:
    """Where log output goes for the given flags."""
    if log_file:
        return log_file
    if debug:
        return Path.cwd() / "padboard-debug.log"
    return DEFAULT_LOG_DIR / "padboard.log"


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> Path:
    """
    Configure logging for the application.

    The TUI owns stdout, so everything goes to a rotating log file.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, log at DEBUG level to ./padboard-debug.log
        log_file: Custom log file path (optional)
        log_level: Log level used together with --log-file

    Returns:
        Path of the log file
    """
    if debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    if log_file:
        level = getattr(logging, log_level.upper())

    log_path = resolve_log_path(debug, log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Keeps the last 5 files, max 10MB each
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")
    return log_path


@click.group()
@click.version_option(version=__version__, prog_name="padboard")
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./padboard-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for --log-file (default: INFO)'
)
def cli(verbose: int, debug: bool, log_file: Optional[Path], log_level: str):
    """
    padboard - a grid of pads that play short audio clips.

    Each pad plays one clip. Pressing a pad lights it up until its clip
    ends; pressing it again restarts the clip.

    \b
    Examples:
      # Play the 16 clips 0.wav .. 15.wav in ./sounds
      padboard run ./sounds

      # Verify a clip folder without opening audio
      padboard check ./sounds

      # List audio devices
      padboard audio list

      # Debug logging to ./padboard-debug.log
      padboard --debug run ./sounds

    \b
    Logs are written to ~/.padboard/logs/padboard.log by default.
    """
    setup_logging(verbose, debug, log_file, log_level)


cli.add_command(run)
cli.add_command(check)
cli.add_command(audio_group)

if __name__ == "__main__":
    cli()
