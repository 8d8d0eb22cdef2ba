"""Mirror the carved half-grid into the full symmetric map."""
from __future__ import annotations

from .cells import Block, Grid, Position


def mirror_grid(grid: Grid, width: int) -> Grid:
    """Return a new grid: left ``width // 2`` cells of each row plus their reflection.

    The reflected cell at ``x`` lands on ``width - 1 - x`` with the same type.
    Cells are copied so the result shares no Blocks with the input, which also
    makes mirroring an already symmetric full grid a no-op.
    """
    half = width // 2
    out: Grid = []
    for y, row in enumerate(grid):
        left = [Block(cell.block_type, Position(x, y)) for x, cell in enumerate(row[:half])]
        right = [Block(cell.block_type, Position(width - 1 - x, y)) for x, cell in reversed(list(enumerate(row[:half])))]
        out.append(left + right)
    return out
