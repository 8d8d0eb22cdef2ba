from typing import Dict, NamedTuple

from .cells import count_types
from .tiles import EMPTY, TELEPORTER


def init_metrics() -> Dict[str, int | float | bool | dict]:
    return {
        'attempts': 0,
        'failed_repairs': 0,
        'invalid_attempts': 0,
        'bridges_carved': 0,
        'orphans_pruned': 0,
        'aisle_cells_walled': 0,
        'teleporters_placed': 0,
        'walls_removed': 0,
        'best_path_blocks': 0,
        'budget_exhausted': False,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }


class MapStats(NamedTuple):
    path_blocks: int
    teleporter_pairs: int


def map_stats(grid) -> MapStats:
    """Path block count and teleporter pairs of a full (mirrored) grid.

    Each teleporter appears on both outer columns, so pairs are half the
    teleporter cells.
    """
    return MapStats(count_types(grid, EMPTY), count_types(grid, TELEPORTER) // 2)
