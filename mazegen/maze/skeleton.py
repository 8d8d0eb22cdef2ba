"""Skeleton phase: fixed regions plus lockstep corridor carving on the half-grid."""
from __future__ import annotations

from typing import List, NamedTuple

from .builder import CarveLimits
from .cells import Grid, Position, new_grid
from .config import MapConfig
from .pool import BuilderPool
from .rng import RandomSource
from .tiles import EMPTY, GHOST_HOUSE, WALL
from ..logging_utils import get_logger

_log = get_logger("maze.skeleton")


class Rect(NamedTuple):
    x: int; y: int; w: int; h: int

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.w and self.y <= y < self.y + self.h


class StartAreas(NamedTuple):
    ghost_house: Rect
    outline: Rect
    start_row: Rect
    start: Position


def start_areas(config: MapConfig) -> StartAreas:
    """Fixed regions around the grid centre.

    The ghost house is 2x3 with its right edge on the seam column, so the
    mirror doubles it to 4x3. The start row sits below the outline with the
    start cell on odd coordinates.
    """
    w, h = config.width, config.height
    ghost = Rect(w // 2 - 2, (h - 1) // 2 - 3, 2, 3)
    outline = Rect(ghost.x - 1, ghost.y - 1, ghost.w + 2, ghost.h + 2)
    sx = ghost.x
    sy = (h - 1) // 2 + 1
    if sx % 2 == 0:
        sx += 1
    if sy % 2 == 0:
        sy += 1
    start_row = Rect(sx - 2, sy, ghost.w + 3, 1)
    return StartAreas(ghost, outline, start_row, Position(sx, sy))


def init_half_grid(config: MapConfig, areas: StartAreas) -> Grid:
    grid = new_grid(config.half_width, config.height, WALL)
    for row in grid:
        for cell in row:
            x, y = cell.position
            if areas.ghost_house.contains(x, y):
                cell.block_type = GHOST_HOUSE
            elif areas.outline.contains(x, y) or areas.start_row.contains(x, y):
                cell.block_type = EMPTY
    return grid


def spawn_pools(grid: Grid, config: MapConfig, areas: StartAreas, rng: RandomSource) -> List[BuilderPool]:
    half, height = config.half_width, config.height
    limits = CarveLimits(half, height, config.turn_min, config.turn_max)
    count = rng.randint(config.manager_min, config.manager_max)
    pools: List[BuilderPool] = []
    for i in range(count):
        if i == 0:
            origin = Position(areas.start.x - 2, areas.start.y)
        else:
            # Rejection-sample odd coordinates until a wall is found
            origin = Position(rng.randint(2, half - 2, odd=True), rng.randint(2, height - 2, odd=True))
            while grid[origin.y][origin.x].block_type != WALL:
                origin = Position(rng.randint(2, half - 2, odd=True), rng.randint(2, height - 2, odd=True))
        pools.append(BuilderPool(origin, rng, limits))
    return pools


def carve(grid: Grid, pools: List[BuilderPool]) -> int:
    """Run all pools in lockstep until every one is done. Returns steps taken."""
    live = [p for p in pools if not p.done]
    steps = 0
    while live:
        for pool in live:
            for x, y in pool.step(grid):
                grid[y][x].block_type = EMPTY
        live = [p for p in live if not p.done]
        steps += 1
    return steps


def build_skeleton(config: MapConfig, rng: RandomSource, areas: StartAreas | None = None) -> Grid:
    areas = areas or start_areas(config)
    grid = init_half_grid(config, areas)
    pools = spawn_pools(grid, config, areas, rng)
    builders = sum(len(p.builders) for p in pools)
    steps = carve(grid, pools)
    _log.trace(config.debug, event="skeleton_built", pools=len(pools), builders=builders, steps=steps)
    return grid


__all__ = ["Rect", "StartAreas", "start_areas", "init_half_grid", "spawn_pools", "carve", "build_skeleton"]
