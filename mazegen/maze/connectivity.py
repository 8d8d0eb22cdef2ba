"""Connectivity flood fill and repair for the half-grid.

Repair strategy: flood from the first EMPTY cell, then for each unreached
walkable cell (row-major) cast straight rays left, right, up and down. The
first ray that reaches a flooded cell without leaving the interior or
crossing the ghost house is carved open, and the flood restarts. A sweep in
which no ray succeeds means the half-grid cannot be repaired this way; the
attempt is abandoned.

Reachability is tracked in a visited set rebuilt on every pass; cells carry
no connectivity state of their own.
"""
from __future__ import annotations

from collections import deque
from typing import Dict, List, Optional, Set

from .cells import DOWN, LEFT, ORTHOGONAL, RIGHT, UP, Grid, Position, cell_at
from .tiles import EMPTY, GHOST_HOUSE, WALKABLE, WALL

# Ray order when bridging
RAY_DIRECTIONS = (LEFT, RIGHT, UP, DOWN)


def first_empty(grid: Grid) -> Optional[Position]:
    for row in grid:
        for cell in row:
            if cell is not None and cell.block_type == EMPTY:
                return cell.position
    return None


def walkable_cells(grid) -> List[Position]:
    return [cell.position for row in grid for cell in row if cell is not None and cell.block_type in WALKABLE]


def flood_connected(grid, start: Optional[Position] = None) -> Set[Position]:
    """BFS over walkable cells from ``start`` (default: first EMPTY cell, row-major)."""
    if start is None:
        start = first_empty(grid)
    if start is None:
        return set()
    s = cell_at(grid, start.x, start.y)
    if s is None or s.block_type not in WALKABLE:
        return set()
    q = deque([Position(*start)])
    visited = {Position(*start)}
    while q:
        cx, cy = q.popleft()
        for dx, dy in ORTHOGONAL:
            nxt = Position(cx + dx, cy + dy)
            if nxt in visited:
                continue
            n = cell_at(grid, nxt.x, nxt.y)
            if n is not None and n.block_type in WALKABLE:
                visited.add(nxt)
                q.append(nxt)
    return visited


def find_bridge(grid: Grid, origin: Position, connected: Set[Position]) -> Optional[List[Position]]:
    """Cells of the first ray from ``origin`` that ends on a connected cell."""
    height = len(grid)
    width = len(grid[0]) if grid else 0
    for direction in RAY_DIRECTIONS:
        ray: List[Position] = []
        x, y = origin.x + direction.x, origin.y + direction.y
        while 0 < x < width and 0 < y < height - 1:
            cell = grid[y][x]
            if cell.block_type == GHOST_HOUSE:
                break
            pos = Position(x, y)
            if pos in connected:
                return ray
            ray.append(pos)
            x += direction.x
            y += direction.y
    return None


def repair_connectivity(grid: Grid, metrics: Optional[Dict] = None) -> bool:
    """Bridge disconnected regions in place. Returns False when unrepairable."""
    bridges = 0
    repaired = True
    while True:
        connected = flood_connected(grid)
        pending = [p for p in walkable_cells(grid) if p not in connected]
        if not pending:
            break
        ray = None
        for origin in pending:
            ray = find_bridge(grid, origin, connected)
            if ray is not None:
                break
        if ray is None:
            repaired = False
            break
        for x, y in ray:
            if grid[y][x].block_type == WALL:
                grid[y][x].block_type = EMPTY
        bridges += 1
    if metrics is not None and bridges:
        metrics["bridges_carved"] += bridges
    return repaired


def is_connected(grid) -> bool:
    """True when every walkable cell is reachable from every other one."""
    cells = walkable_cells(grid)
    if not cells:
        return True
    return len(flood_connected(grid, cells[0])) == len(cells)


__all__ = [
    "RAY_DIRECTIONS",
    "first_empty",
    "walkable_cells",
    "flood_connected",
    "find_bridge",
    "repair_connectivity",
    "is_connected",
]
