"""Config command implementations."""

import json
import sys
from pathlib import Path
from typing import Optional

import click

from ambiway.exceptions import AmbiwayError, ConfigurationError, format_error_for_display
from ambiway.models import AppConfig, default_config_path
from ambiway.utils import PydanticPersistence


def _config_path(ctx: click.Context) -> Path:
    path: Optional[Path] = (ctx.obj or {}).get("config_path")
    return path or default_config_path()


def _fail(error: Exception) -> None:
    user_message, recovery_hint = format_error_for_display(error)
    click.echo(f"Error: {user_message}", err=True)
    if recovery_hint:
        click.echo(recovery_hint, err=True)
    sys.exit(1)


@click.group(name="config")
def config_group():
    """Inspect and create the configuration file."""
    pass


@config_group.command(name="path")
@click.pass_context
def config_path(ctx):
    """Print the config file location."""
    click.echo(str(_config_path(ctx)))


@config_group.command(name="show")
@click.pass_context
def show_config(ctx):
    """Display the validated configuration (with defaults filled in)."""
    try:
        app_config = AppConfig.load(_config_path(ctx))
    except AmbiwayError as e:
        _fail(e)
        return

    data = app_config.model_dump(mode="json", by_alias=True)
    click.echo(json.dumps(data, indent=2))


@config_group.command(name="validate")
@click.pass_context
def validate_config(ctx):
    """Check the config file for syntax and value errors."""
    path = _config_path(ctx)
    is_valid, message = PydanticPersistence.validate_file(path, AppConfig)

    if not is_valid:
        click.echo(f"Invalid: {message}", err=True)
        sys.exit(1)

    app_config = AppConfig.load(path)
    click.echo(f"Valid: {path}")
    for i, layout in enumerate(app_config.monitor_layouts()):
        click.echo(
            f"  Monitor {i}: camera {app_config.settings.camera_ids[i]} -> "
            f"zone {app_config.settings.zone_ids[i]}, {layout.led_count} LEDs"
        )


@config_group.command(name="init")
@click.option("--force", is_flag=True, help="Overwrite an existing config (keeps a .bak copy)")
@click.pass_context
def init_config(ctx, force: bool):
    """Write a starter config for a single monitor."""
    path = _config_path(ctx)
    if path.exists() and not force:
        click.echo(f"Config already exists: {path} (use --force to overwrite)", err=True)
        sys.exit(1)

    try:
        PydanticPersistence.write_text(path, AppConfig.default_template(), backup=True)
    except OSError as e:
        _fail(ConfigurationError(
            user_message=f"Could not write {path}: {e.strerror or e}",
            technical_message=f"Writing starter config to {path} failed: {e}",
            recovery_hint="Choose a writable location with --config",
        ))
        return

    click.echo(f"Wrote {path}")
    click.echo("Edit the LED counts, cams and zone_id_list to match your setup.")
