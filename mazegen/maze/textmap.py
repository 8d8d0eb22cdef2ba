"""Plain-text dump of a grid for debug logs and the CLI."""
from typing import List

from .tiles import EMPTY, GHOST_HOUSE, TELEPORTER, WALL

CHARS = {WALL: '#', EMPTY: '.', GHOST_HOUSE: 'G', TELEPORTER: 'T'}


def render_rows(grid) -> List[str]:
    return [''.join(' ' if cell is None else CHARS.get(cell.block_type, '?') for cell in row) for row in grid]


def render(grid) -> str:
    return '\n'.join(render_rows(grid))
