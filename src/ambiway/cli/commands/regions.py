"""Preview sampling regions without opening any device."""

import sys
from pathlib import Path
from typing import Optional

import click

from ambiway.core import compute_regions, describe_regions
from ambiway.exceptions import AmbiwayError, format_error_for_display
from ambiway.models import AppConfig, default_config_path


@click.command(name="regions")
@click.option("--width", "-W", type=int, default=None, help="Frame width (default: configured frame size)")
@click.option("--height", "-H", type=int, default=None, help="Frame height (default: configured frame size)")
@click.option("--monitor", "-m", type=int, default=None, help="Only show this monitor index")
@click.pass_context
def regions(ctx, width: Optional[int], height: Optional[int], monitor: Optional[int]):
    """
    Print the sampling rectangle of every LED.

    \b
    Examples:
      ambiway regions --width 1920 --height 1080
      ambiway regions -W 1280 -H 720 --monitor 1
    """
    path: Path = (ctx.obj or {}).get("config_path") or default_config_path()

    try:
        app_config = AppConfig.load(path)
        settings = app_config.settings

        indices = range(app_config.monitor_count)
        if monitor is not None:
            if monitor not in indices:
                raise click.BadParameter(
                    f"monitor must be between 0 and {app_config.monitor_count - 1}",
                    param_hint="--monitor",
                )
            indices = [monitor]

        for i in indices:
            frame_width, frame_height = width, height
            if frame_width is None or frame_height is None:
                if not settings.frame_sizes:
                    raise click.UsageError(
                        "No frame size configured; pass --width and --height"
                    )
                frame_width = frame_width or settings.frame_sizes[i][0]
                frame_height = frame_height or settings.frame_sizes[i][1]

            monitor_regions = compute_regions(
                app_config.monitor_layout(i),
                frame_width,
                frame_height,
                settings.region_size,
                settings.edge_order,
                monitor_index=i,
            )
            click.echo(
                f"Monitor {i} (camera {settings.camera_ids[i]}, {frame_width}x{frame_height}, "
                f"{len(monitor_regions)} LEDs):"
            )
            for line in describe_regions(monitor_regions):
                click.echo(f"  {line}")
            click.echo()

    except AmbiwayError as e:
        user_message, recovery_hint = format_error_for_display(e)
        click.echo(f"Error: {user_message}", err=True)
        if recovery_hint:
            click.echo(recovery_hint, err=True)
        sys.exit(1)
