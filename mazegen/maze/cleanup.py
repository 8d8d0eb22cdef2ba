"""Cleanup passes run on the carved half-grid, in order:

1. middle aisle  - seam cells stay open only when their left neighbour is open
2. orphans       - single-cell dead ends are walled off (see pruning.py)
3. teleporters   - tunnel exits on the outer column
4. connectivity  - bridge every region into one (see connectivity.py)
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from .cells import Grid, type_at
from .config import MapConfig
from .connectivity import repair_connectivity
from .pruning import prune_orphans
from .rng import RandomSource
from .tiles import EMPTY, TELEPORTER, WALL
from ..logging_utils import get_logger

_log = get_logger("maze.cleanup")


def enforce_middle_aisle(grid: Grid) -> int:
    """Wall seam cells whose left neighbour is not EMPTY.

    Once mirrored, such a cell would otherwise open a two-wide aisle down the
    centre. Returns the number of cells walled.
    """
    if not grid:
        return 0
    aisle_x = len(grid[0]) - 1
    walled = 0
    for y, row in enumerate(grid):
        cell = row[aisle_x]
        if cell.block_type != EMPTY:
            continue
        if type_at(grid, aisle_x - 1, y) == EMPTY:
            continue
        cell.block_type = WALL
        walled += 1
    return walled


def place_teleporters(grid: Grid, config: MapConfig, rng: RandomSource) -> List[int]:
    """Turn column 0 of K distinct odd rows into teleporters; returns the rows."""
    count = rng.randint(config.teleporter_min, config.teleporter_max)
    height = config.height
    rows: List[int] = []
    for _ in range(count):
        y = rng.randint(1, height - 2, odd=True)
        while y in rows:
            y = rng.randint(1, height - 2, odd=True)
        grid[y][0].block_type = TELEPORTER
        rows.append(y)
    return rows


def run_cleanup(
    grid: Grid,
    config: MapConfig,
    rng: RandomSource,
    metrics: Optional[Dict[str, Any]] = None,
    orphan_strategy: str = "worklist",
) -> Optional[Grid]:
    """Run every cleanup pass in order. Returns None when repair fails."""
    walled = enforce_middle_aisle(grid)
    pruned = prune_orphans(grid, orphan_strategy)
    rows = place_teleporters(grid, config, rng)
    _log.trace(config.debug, event="cleanup", aisle_walled=walled, orphans_pruned=pruned, teleporter_rows=rows)
    if metrics is not None:
        metrics["aisle_cells_walled"] += walled
        metrics["orphans_pruned"] += pruned
        metrics["teleporters_placed"] += len(rows)
    if not repair_connectivity(grid, metrics):
        _log.trace(config.debug, event="repair_failed", teleporter_rows=rows)
        if metrics is not None:
            metrics["failed_repairs"] += 1
        return None
    return grid


def teleporter_rows(grid) -> List[int]:
    return [y for y, row in enumerate(grid) if row and row[0] is not None and row[0].block_type == TELEPORTER]


__all__ = ["enforce_middle_aisle", "place_teleporters", "run_cleanup", "teleporter_rows"]
