"""Capture device commands."""

import click

from ambiway.capture import list_cameras


@click.group(name="cams")
def cams_group():
    """Capture device commands."""
    pass


@cams_group.command(name="list")
@click.option("--max-index", type=int, default=10, show_default=True, help="Highest device index to probe")
def list_cams(max_index: int):
    """List capture devices that can be opened."""
    cameras = list_cameras(max_index=max_index)

    click.echo("Capture devices:\n")
    if not cameras:
        click.echo("  No capture devices found.")
        return

    for camera_id, width, height in cameras:
        click.echo(f"  [{camera_id}] {width}x{height}")
