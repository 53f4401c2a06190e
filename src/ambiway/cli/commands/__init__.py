"""CLI commands for ambiway."""

from .cams import cams_group
from .config import config_group
from .controller import controller_group
from .regions import regions

__all__ = ["cams_group", "config_group", "controller_group", "regions"]
