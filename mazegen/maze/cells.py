from __future__ import annotations

from typing import Iterator, List, NamedTuple, Optional

from .tiles import WALL


class Position(NamedTuple):
    x: int
    y: int


# Direction vectors share the Position shape. Order matters: random direction
# picks index into DIRECTIONS.
UP = Position(0, -1)
RIGHT = Position(1, 0)
DOWN = Position(0, 1)
LEFT = Position(-1, 0)
DIRECTIONS = (UP, RIGHT, DOWN, LEFT)

ORTHOGONAL = ((0, -1), (0, 1), (-1, 0), (1, 0))
DIAGONAL = ((-1, -1), (1, -1), (-1, 1), (1, 1))


def reverse(direction: Position) -> Position:
    return Position(-direction.x, -direction.y)


class Block:
    """Lightweight container for a maze grid cell."""
    __slots__ = ("block_type", "position")

    def __init__(self, block_type: str, position: Position):
        self.block_type = block_type
        self.position = position

    def to_dict(self):
        return {"type": self.block_type, "position": {"x": self.position.x, "y": self.position.y}}

    def __repr__(self):
        return f"Block({self.block_type!r}, ({self.position.x}, {self.position.y}))"


# Row-major: grid[y][x]
Grid = List[List[Block]]
PrunedGrid = List[List[Optional[Block]]]


def new_grid(width: int, height: int, fill: str = WALL) -> Grid:
    return [[Block(fill, Position(x, y)) for x in range(width)] for y in range(height)]


def cell_at(grid, x: int, y: int) -> Optional[Block]:
    """Bounds-checked lookup; ``None`` outside the grid (negative indexes never wrap)."""
    if y < 0 or y >= len(grid):
        return None
    row = grid[y]
    if x < 0 or x >= len(row):
        return None
    return row[x]


def type_at(grid, x: int, y: int) -> Optional[str]:
    cell = cell_at(grid, x, y)
    return cell.block_type if cell is not None else None


def iter_cells(grid) -> Iterator[Block]:
    """Row-major iteration, skipping absent (pruned) cells."""
    for row in grid:
        for cell in row:
            if cell is not None:
                yield cell


def count_types(grid, *types: str) -> int:
    wanted = set(types)
    return sum(1 for cell in iter_cells(grid) if cell.block_type in wanted)


def orthogonal_count(grid, x: int, y: int, types) -> int:
    """Number of orthogonal neighbours of (x, y) whose type is in ``types``."""
    n = 0
    for dx, dy in ORTHOGONAL:
        t = type_at(grid, x + dx, y + dy)
        if t is not None and t in types:
            n += 1
    return n


__all__ = [
    "Position",
    "UP",
    "RIGHT",
    "DOWN",
    "LEFT",
    "DIRECTIONS",
    "ORTHOGONAL",
    "DIAGONAL",
    "reverse",
    "Block",
    "Grid",
    "PrunedGrid",
    "new_grid",
    "cell_at",
    "type_at",
    "iter_cells",
    "count_types",
    "orthogonal_count",
]
