"""Lighting controller commands."""

import sys
from pathlib import Path

import click

from ambiway.controller import OpenRGBLightingClient
from ambiway.exceptions import AmbiwayError, format_error_for_display
from ambiway.models import ControllerSettings


@click.group(name="controller")
def controller_group():
    """OpenRGB controller commands."""
    pass


@controller_group.command(name="list")
@click.option("--host", default=None, help="OpenRGB server address (default: from config)")
@click.option("--port", type=int, default=None, help="OpenRGB server port (default: from config)")
@click.pass_context
def list_controller(ctx, host, port):
    """List OpenRGB devices and their zones."""
    settings = _controller_settings(ctx.obj or {})
    if host is not None:
        settings = settings.model_copy(update={"host": host})
    if port is not None:
        settings = settings.model_copy(update={"port": port})

    try:
        with OpenRGBLightingClient(settings) as client:
            devices = client.list_devices()
    except AmbiwayError as e:
        user_message, recovery_hint = format_error_for_display(e)
        click.echo(f"Error: {user_message}", err=True)
        if recovery_hint:
            click.echo(recovery_hint, err=True)
        sys.exit(1)

    click.echo(f"OpenRGB devices at {settings.host}:{settings.port}:\n")
    if not devices:
        click.echo("  No devices found.")
        return

    for device_id, name, zones in devices:
        click.echo(f"  [{device_id}] {name}")
        for zone_id, zone_name, leds in zones:
            click.echo(f"      zone {zone_id}: {zone_name} ({leds} LEDs)")


def _controller_settings(obj: dict) -> ControllerSettings:
    """Controller settings from the config file, or defaults if it can't be read."""
    from ambiway.models import AppConfig

    path: Path | None = obj.get("config_path")
    try:
        return AppConfig.load(path).settings.controller
    except AmbiwayError:
        return ControllerSettings()
