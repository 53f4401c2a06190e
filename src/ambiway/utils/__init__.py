"""Generic utility modules for ambiway."""

from .latest import LatestValue
from .persistence import PydanticPersistence

__all__ = ["LatestValue", "PydanticPersistence"]
