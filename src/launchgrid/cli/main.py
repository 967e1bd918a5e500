"""Main CLI entry point."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import click

from launchgrid import __version__
from launchgrid.models.config import DEFAULT_CONFIG_DIR

from .commands import (
    clear_leds,
    fill_grid,
    list_devices,
    list_ports,
    monitor,
    scroll_text,
    send_clock,
    set_mode,
    stop_text,
)
from .context import cli_errors, get_config

logger = logging.getLogger(__name__)


def resolve_log_path(debug: bool, log_file: Optional[Path], log_dir: Optional[Path] = None) -> Path:
    """Pick the log file: explicit path, ./launchgrid-debug.log in debug mode, else the log dir."""
    if log_file:
        return log_file
    if debug:
        return Path.cwd() / "launchgrid-debug.log"
    return (log_dir or DEFAULT_CONFIG_DIR / "logs") / "launchgrid.log"


def setup_logging(
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str,
    log_dir: Optional[Path] = None,
) -> Path:
    """
    Configure logging for the application.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable debug mode with file logging in the current directory
        log_file: Custom log file path (optional)
        log_level: Log level for file logging (DEBUG/INFO/WARNING/ERROR)
        log_dir: Directory for the default log file (~/.launchgrid/logs)

    Returns:
        Path of the log file
    """
    if debug:
        level = logging.DEBUG
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Override with explicit log level if provided
    if log_file:
        level = getattr(logging, log_level.upper())

    log_path = resolve_log_path(debug, log_file, log_dir)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Rotating file handler (keeps last 5 files, max 10MB each)
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,  # 10MB
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
@click.pass_context
@click.version_option(version=__version__, prog_name="launchgrid")
@click.option(
    '--config',
    'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Config file (default: ~/.launchgrid/config.json)'
)
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./launchgrid-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for file logging (default: INFO)'
)
@cli_errors
def cli(
    ctx,
    config_path: Optional[Path],
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str
):
    """
    launchgrid - drive a Novation Launchpad over MIDI.

    \b
    Examples:
      # List raw MIDI ports and detected Launchpads
      launchgrid ports
      launchgrid devices

      # Scroll text on the first Launchpad
      launchgrid text "hello" --loop

      # Light the whole grid, then clear it
      launchgrid fill 21
      launchgrid clear

      # Print key presses
      launchgrid monitor

      # Enable debug logging
      launchgrid --debug monitor
    """
    obj = ctx.ensure_object(dict)
    obj.setdefault("backend", None)
    obj["config_path"] = config_path

    config = get_config(ctx)
    obj["log_path"] = setup_logging(verbose, debug, log_file, log_level, config.log_dir)


cli.add_command(list_ports)
cli.add_command(list_devices)
cli.add_command(set_mode)
cli.add_command(scroll_text)
cli.add_command(stop_text)
cli.add_command(send_clock)
cli.add_command(clear_leds)
cli.add_command(fill_grid)
cli.add_command(monitor)

if __name__ == "__main__":
    cli()
