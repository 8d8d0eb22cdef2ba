from __future__ import annotations

from typing import List, Set

from .builder import CarveLimits, PathBuilder
from .cells import DOWN, LEFT, RIGHT, UP, Position
from .rng import RandomSource

MIN_BUILDERS = 2
MAX_BUILDERS = 4


def origin_exclusions(origin: Position, limits: CarveLimits) -> Set[Position]:
    """Directions that would point straight off the grid from an origin near an edge."""
    ignore: Set[Position] = set()
    if origin.x <= 2:
        ignore.add(LEFT)
    elif origin.x >= limits.width - 2:
        ignore.add(RIGHT)
    if origin.y <= 2:
        ignore.add(UP)
    elif origin.y >= limits.height - 2:
        ignore.add(DOWN)
    return ignore


class BuilderPool:
    """2-4 builders spawned from one origin, each heading a different way."""

    def __init__(self, origin: Position, rng: RandomSource, limits: CarveLimits):
        self.origin = Position(*origin)
        self.builders: List[PathBuilder] = []
        count = rng.randint(MIN_BUILDERS, MAX_BUILDERS)
        ignore = origin_exclusions(self.origin, limits)
        for _ in range(count):
            direction = rng.direction(ignore)
            if direction is None:
                break
            ignore.add(direction)
            self.builders.append(PathBuilder(self.origin, direction, rng, limits))
        self.done = not self.builders

    def step(self, grid) -> List[Position]:
        """Advance every live builder once; return the positions to carve."""
        positions = [builder.advance(grid) for builder in self.builders]
        self.builders = [b for b in self.builders if not b.done]
        self.done = not self.builders
        return positions


__all__ = ["BuilderPool", "origin_exclusions", "MIN_BUILDERS", "MAX_BUILDERS"]
