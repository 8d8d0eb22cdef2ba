"""Pruning passes.

* Orphan pruning runs on the half-grid during cleanup: single-cell dead ends
  are walled off repeatedly until none remain.
* Wall pruning runs last on the full grid: interior walls that touch no
  walkable or ghost-house cell (including diagonals) are dropped from the
  output, leaving ``None`` in their place.
"""
from __future__ import annotations

from typing import Set, Tuple

from .cells import DIAGONAL, ORTHOGONAL, Grid, PrunedGrid, cell_at, orthogonal_count
from .tiles import EMPTY, WALKABLE, WALL

ORPHAN_STRATEGIES = ("worklist", "rescan")


def _is_orphan(grid: Grid, x: int, y: int, seam_x: int) -> bool:
    # The seam cell gets its second neighbour from the mirror
    neighbors = orthogonal_count(grid, x, y, WALKABLE)
    return neighbors == 0 if x == seam_x else neighbors <= 1


def prune_orphans(grid: Grid, strategy: str = "worklist") -> int:
    """Wall off EMPTY cells with too few walkable neighbours until stable.

    Returns the number of cells converted. Both strategies reach the same
    fixed point: removal only ever lowers neighbour counts, so the order in
    which orphans are found does not change the result.
    """
    if strategy == "worklist":
        return _prune_orphans_worklist(grid)
    if strategy == "rescan":
        return _prune_orphans_rescan(grid)
    raise ValueError(f"unknown orphan pruning strategy {strategy!r}")


def _prune_orphans_rescan(grid: Grid) -> int:
    seam_x = len(grid[0]) - 1 if grid else 0
    pruned = 0
    changed = True
    while changed:
        changed = False
        for row in grid:
            for cell in row:
                if cell.block_type != EMPTY:
                    continue
                x, y = cell.position
                if _is_orphan(grid, x, y, seam_x):
                    cell.block_type = WALL
                    pruned += 1
                    changed = True
    return pruned


def _prune_orphans_worklist(grid: Grid) -> int:
    seam_x = len(grid[0]) - 1 if grid else 0
    pending: Set[Tuple[int, int]] = {cell.position for row in grid for cell in row if cell.block_type == EMPTY}
    pruned = 0
    while pending:
        next_pending: Set[Tuple[int, int]] = set()
        # Sorted for a stable visiting order (row-major)
        for x, y in sorted(pending, key=lambda p: (p[1], p[0])):
            cell = cell_at(grid, x, y)
            if cell is None or cell.block_type != EMPTY:
                continue
            if not _is_orphan(grid, x, y, seam_x):
                continue
            cell.block_type = WALL
            pruned += 1
            for dx, dy in ORTHOGONAL:
                n = cell_at(grid, x + dx, y + dy)
                if n is not None and n.block_type == EMPTY:
                    next_pending.add((x + dx, y + dy))
        pending = next_pending
    return pruned


def prune_walls(grid: Grid) -> PrunedGrid:
    """Drop walls whose eight neighbours are all walls or off-grid."""
    out: PrunedGrid = []
    for y, row in enumerate(grid):
        new_row = []
        for x, cell in enumerate(row):
            if cell is None or cell.block_type != WALL:
                new_row.append(cell)
                continue
            keep = False
            for dx, dy in ORTHOGONAL + DIAGONAL:
                n = cell_at(grid, x + dx, y + dy)
                if n is not None and n.block_type != WALL:
                    keep = True
                    break
            new_row.append(cell if keep else None)
        out.append(new_row)
    return out


def count_pruned(grid: PrunedGrid) -> int:
    return sum(1 for row in grid for cell in row if cell is None)


__all__ = ["ORPHAN_STRATEGIES", "prune_orphans", "prune_walls", "count_pruned"]
