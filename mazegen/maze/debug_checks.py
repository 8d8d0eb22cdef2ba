"""Structural diagnostics for a generated full grid.

``analyze`` never mutates the grid; it lists the cells that break one of the
output guarantees so tests and ``scripts/diagnose_seeds.py`` can report them.
Works on pruned grids too (absent cells count as non-walkable).
"""
from __future__ import annotations

from typing import Dict, List

from .cells import Position, iter_cells, orthogonal_count
from .connectivity import flood_connected, walkable_cells
from .tiles import EMPTY, WALKABLE


def asymmetric_cells(grid) -> List[Position]:
    out: List[Position] = []
    for y, row in enumerate(grid):
        w = len(row)
        for x in range(w // 2):
            a, b = row[x], row[w - 1 - x]
            ta = a.block_type if a is not None else None
            tb = b.block_type if b is not None else None
            if ta != tb:
                out.append(Position(x, y))
    return out


def unreachable_cells(grid) -> List[Position]:
    cells = walkable_cells(grid)
    if not cells:
        return []
    reached = flood_connected(grid, cells[0])
    return [p for p in cells if p not in reached]


def dead_ends(grid) -> List[Position]:
    return [
        cell.position
        for cell in iter_cells(grid)
        if cell.block_type == EMPTY and orthogonal_count(grid, cell.position.x, cell.position.y, WALKABLE) < 2
    ]


def analyze(grid) -> Dict[str, List[Position]]:
    return {
        "asymmetric_cells": asymmetric_cells(grid),
        "unreachable_cells": unreachable_cells(grid),
        "dead_ends": dead_ends(grid),
    }
