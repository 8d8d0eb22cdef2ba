"""Public maze package interface."""

from .cells import Block, Position
from .config import ConfigError, MapConfig
from .generator import MazeGenerator, generate
from .rng import RandomSource
from .tiles import EMPTY, GHOST_HOUSE, TELEPORTER, WALL  # noqa: F401

__all__ = [
    "Block",
    "Position",
    "ConfigError",
    "MapConfig",
    "MazeGenerator",
    "generate",
    "RandomSource",
    "EMPTY",
    "GHOST_HOUSE",
    "TELEPORTER",
    "WALL",
]
