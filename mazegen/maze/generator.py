"""Generation orchestrator.

Each attempt builds a fresh half-grid and runs it through the phases below;
only this module loops.

    skeleton -> cleanup -> mirror -> validate

A validating attempt is returned at once (after wall pruning). Failed attempts
compete for "best candidate" by EMPTY count and, when an attempt or time
budget is configured and spent, the best candidate (or the last attempt if
none was ever recorded) is returned instead. Without a budget the loop runs
until an attempt validates, so impossible path bounds never terminate.
"""
from __future__ import annotations

import time
from typing import Any, Dict, Optional

from .cells import Grid, PrunedGrid, count_types, type_at
from .cleanup import run_cleanup
from .config import MapConfig
from .metrics import init_metrics
from .mirror import mirror_grid
from .pruning import count_pruned, prune_walls
from .rng import RandomSource
from .skeleton import StartAreas, build_skeleton, start_areas
from .textmap import render_rows
from .tiles import EMPTY
from ..logging_utils import get_logger

_log = get_logger("maze.generator")


def validate_map(grid: Grid, config: MapConfig, areas: StartAreas) -> Optional[str]:
    """Reason the full grid fails validation, or None when it passes."""
    if not grid:
        return "empty_grid"
    if type_at(grid, areas.start.x, areas.start.y) != EMPTY:
        return "start_blocked"
    blocks = count_types(grid, EMPTY)
    if config.path_min is not None and blocks < config.path_min:
        return "too_few_path_blocks"
    if config.path_max is not None and blocks > config.path_max:
        return "too_many_path_blocks"
    return None


class MazeGenerator:
    def __init__(self, config: MapConfig, rng: Optional[RandomSource] = None):
        self.config = config.validate()
        self.rng = rng if rng is not None else RandomSource(config.seed)
        self.areas = start_areas(config)
        self.metrics: Dict[str, Any] = init_metrics()
        self.grid: Optional[PrunedGrid] = None
        self.attempts = 0
        self.valid = False

    def _budget_exhausted(self, started: float) -> bool:
        cfg = self.config
        if not cfg.has_budget:
            return False
        if cfg.max_attempts and self.attempts >= cfg.max_attempts:
            return True
        if cfg.max_time_ms and (time.perf_counter() - started) * 1000 >= cfg.max_time_ms:
            return True
        return False

    def run(self) -> PrunedGrid:
        cfg, rng, metrics = self.config, self.rng, self.metrics
        started = time.perf_counter()
        phase_times: Dict[str, int] = {}

        def _phase(label, fn, *a, **k):
            ps = time.perf_counter(); r = fn(*a, **k); pe = time.perf_counter()
            phase_times[label] = phase_times.get(label, 0) + int((pe - ps) * 1000)
            return r

        _log.trace(
            cfg.debug,
            event="generation_start",
            seed=rng.seed,
            width=cfg.width,
            height=cfg.height,
            path_min=cfg.path_min,
            path_max=cfg.path_max,
            teleporters=f"{cfg.teleporter_min}-{cfg.teleporter_max}",
            managers=f"{cfg.manager_min}-{cfg.manager_max}",
            turn_distance=f"{cfg.turn_min}-{cfg.turn_max}",
            max_attempts=cfg.max_attempts,
            max_time_ms=cfg.max_time_ms,
        )

        best: Optional[Grid] = None
        best_blocks = 0
        while True:
            self.attempts += 1
            metrics['attempts'] = self.attempts
            _log.trace(cfg.debug, event="attempt_start", attempt=self.attempts)
            half = _phase('skeleton', build_skeleton, cfg, rng, self.areas)
            cleaned = _phase('cleanup', run_cleanup, half, cfg, rng, metrics)
            full: Grid = _phase('mirror', mirror_grid, cleaned, cfg.width) if cleaned is not None else []
            reason = _phase('validate', validate_map, full, cfg, self.areas)
            if reason is None:
                self.valid = True
                result = full
                break
            metrics['invalid_attempts'] += 1
            blocks = count_types(full, EMPTY)
            _log.trace(cfg.debug, event="attempt_invalid", attempt=self.attempts, reason=reason, path_blocks=blocks)
            if blocks > best_blocks:
                best, best_blocks = full, blocks
                _log.trace(cfg.debug, event="new_best", attempt=self.attempts, path_blocks=blocks)
            if self._budget_exhausted(started):
                result = best if best is not None else full
                metrics['budget_exhausted'] = True
                _log.warn(
                    event="generation_budget_exhausted",
                    attempts=self.attempts,
                    best_path_blocks=best_blocks,
                    max_attempts=cfg.max_attempts,
                    max_time_ms=cfg.max_time_ms,
                )
                break

        if cfg.debug and result:
            for y, row in enumerate(render_rows(result)):
                _log.info(event="map_row", y=y, row=row)
        pruned = _phase('prune_walls', prune_walls, result)
        self.grid = pruned
        metrics['walls_removed'] = count_pruned(pruned)
        metrics['best_path_blocks'] = count_types(result, EMPTY)
        metrics['runtime_ms'] = int((time.perf_counter() - started) * 1000)
        metrics['phase_ms'] = phase_times
        _log.trace(
            cfg.debug,
            event="generation_complete",
            attempts=self.attempts,
            valid=self.valid,
            path_blocks=metrics['best_path_blocks'],
            runtime_ms=metrics['runtime_ms'],
        )
        return pruned


def generate(config: Optional[MapConfig] = None, rng: Optional[RandomSource] = None) -> PrunedGrid:
    """Generate one map; raises ConfigError for an invalid configuration."""
    return MazeGenerator(config if config is not None else MapConfig(), rng).run()


__all__ = ["MazeGenerator", "generate", "validate_map"]
