"""Main CLI entry point."""

import logging
import logging.handlers
import signal
import sys
from pathlib import Path
from typing import Optional

import click

from ambiway import __version__

from .commands import cams_group, config_group, controller_group, regions

logger = logging.getLogger(__name__)

LOG_DIR = Path.home() / ".ambiway" / "logs"


def resolve_log_path(debug: bool, log_file: Optional[Path]) -> Path:
    """Where the rotating log file goes."""
    if log_file:
        return log_file
    if debug:
        return Path.cwd() / "ambiway-debug.log"
    return LOG_DIR / "ambiway.log"


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> Path:
    """
    Configure logging for the application.

    Args:
        verbose: Verbosity count for the console (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, log everything at DEBUG to ./ambiway-debug.log
        log_file: Custom log file path (optional)
        log_level: Log level for file logging (DEBUG/INFO/WARNING/ERROR)

    Returns:
        Path of the log file
    """
    if debug or verbose >= 2:
        console_level = logging.DEBUG
    elif verbose == 1:
        console_level = logging.INFO
    else:
        console_level = logging.WARNING

    file_level = logging.DEBUG if debug else getattr(logging, log_level.upper())

    log_path = resolve_log_path(debug, log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Rotating file handler (keeps last 5 files, max 10MB each)
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))

    root_logger = logging.getLogger()
    root_logger.setLevel(min(file_level, console_level))
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logger.info(
        f"Logging configured: console={logging.getLevelName(console_level)}, "
        f"file={logging.getLevelName(file_level)} ({log_path})"
    )
    return log_path


def report_error(error: Exception, log_path: Optional[Path] = None) -> None:
    """Print a user-facing error block to stderr."""
    from ambiway.exceptions import format_error_for_display

    user_message, recovery_hint = format_error_for_display(error)

    click.echo("\n" + "=" * 70, err=True)
    click.echo(f"ERROR: {user_message}", err=True)
    click.echo("=" * 70, err=True)

    if recovery_hint:
        click.echo(f"\n{recovery_hint}", err=True)

    if log_path:
        click.echo(f"\nFor details, check the log file: {log_path}", err=True)


@click.group(invoke_without_command=True)
@click.pass_context
@click.version_option(version=__version__, prog_name="ambiway")
@click.option(
    '--config',
    '-c',
    'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Config file (default: ~/.ambiway/config.toml)'
)
@click.option(
    '--dry-run',
    is_flag=True,
    help='Capture and process frames but only log the colors'
)
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase console verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./ambiway-debug.log)'
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
def cli(
    ctx,
    config_path: Optional[Path],
    dry_run: bool,
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str
):
    """
    Ambilight for OpenRGB - drive LED strips from your monitors' edge colors.

    Each monitor's picture is read from a capture device (e.g. an HDMI
    capture dongle), the configured edge regions are averaged into one color
    per LED, and the colors are sent to an OpenRGB zone several times a second.

    \b
    Examples:
      # Run with ~/.ambiway/config.toml
      ambiway

      # Run with a specific config, printing progress
      ambiway -c ./living-room.toml -v

      # Check geometry without touching the LEDs
      ambiway --dry-run -vv

      # Write a starter config
      ambiway config init

      # Preview sampling regions for a 1920x1080 capture
      ambiway regions --width 1920 --height 1080
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    # If a subcommand was invoked, don't run the app
    if ctx.invoked_subcommand is not None:
        return

    from ambiway.app import AmbiwayApp
    from ambiway.models import AppConfig

    log_path = setup_logging(verbose, debug, log_file, log_level)
    logger.info("Starting ambiway")

    app = None
    try:
        config_obj = AppConfig.load(config_path)
        logger.info(
            f"Loaded config: size={config_obj.settings.region_size}, "
            f"brightness={config_obj.settings.brightness}, monitors={config_obj.monitor_count}"
        )

        app = AmbiwayApp(config_obj, dry_run=dry_run)

        def _on_signal(signum, frame):
            logger.info(f"Received signal {signum}, stopping")
            app.request_stop()

        signal.signal(signal.SIGTERM, _on_signal)

        app.run()

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        click.echo("\nShutting down...", err=True)
    except click.Abort:
        raise
    except Exception as e:
        logger.exception("Error running ambiway")
        report_error(e, log_path)
        sys.exit(1)
    finally:
        if app is not None:
            app.shutdown()


cli.add_command(config_group)
cli.add_command(regions)
cli.add_command(cams_group)
cli.add_command(controller_group)

if __name__ == "__main__":
    cli()
