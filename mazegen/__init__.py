"""
project: mazegen
module: __init__.py

Symmetric arcade maze generator.

Builds a left half-grid with random-walk carvers, cleans it up (middle aisle,
orphan pruning, teleporters, connectivity repair), mirrors it into the full
map and retries until the configured constraints are met.

Usage:
    from mazegen import MapConfig, generate
    grid = generate(MapConfig(width=28, height=31, seed=42))
"""

from .maze import (
    EMPTY,
    GHOST_HOUSE,
    TELEPORTER,
    WALL,
    Block,
    ConfigError,
    MapConfig,
    MazeGenerator,
    Position,
    RandomSource,
    generate,
)  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "EMPTY",
    "GHOST_HOUSE",
    "TELEPORTER",
    "WALL",
    "Block",
    "ConfigError",
    "MapConfig",
    "MazeGenerator",
    "Position",
    "RandomSource",
    "generate",
]
