"""Ambiway: ambient monitor lighting for OpenRGB devices."""

__version__ = "0.1.0"

# Orchestrator
from .app import AmbiwayApp

# Configuration
from .models import AppConfig

__all__ = [
    "AmbiwayApp",
    "AppConfig",
]
