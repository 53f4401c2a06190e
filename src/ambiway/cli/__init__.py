"""Command line interface for ambiway."""

from .main import cli

__all__ = ["cli"]
