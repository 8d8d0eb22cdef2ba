"""Random-walk corridor carver.

A builder walks the half-grid one cell per step, turning at random distances
and at the boundary, until it runs back into an existing path or has nowhere
left to go. Its state is an immutable ``BuilderState``; ``advance`` computes the
next state and the position to carve. Builders only read the grid (to detect
reconnection); the caller writes the carved cells.
"""

from __future__ import annotations

from typing import List, NamedTuple, Tuple

from .cells import DOWN, LEFT, RIGHT, UP, Position, reverse, type_at
from .rng import RandomSource
from .tiles import EMPTY


class CarveLimits(NamedTuple):
    width: int  # half-grid width
    height: int
    turn_min: int
    turn_max: int

    # Builders stay inside 1..width-1 horizontally (the seam column included)
    # and 1..height-2 vertically.
    @property
    def min_x(self) -> int:
        return 1

    @property
    def max_x(self) -> int:
        return self.width - 1

    @property
    def min_y(self) -> int:
        return 1

    @property
    def max_y(self) -> int:
        return self.height - 2


class BuilderState(NamedTuple):
    position: Position
    direction: Position
    steps: int
    turn_at: int
    done: bool = False


def draw_turn_distance(rng: RandomSource, limits: CarveLimits) -> int:
    # Even distances keep turns on the odd lattice shared with the origins
    return rng.randint(limits.turn_min, limits.turn_max, odd=False)


def new_builder(origin: Position, direction: Position, rng: RandomSource, limits: CarveLimits) -> BuilderState:
    return BuilderState(Position(*origin), direction, 0, draw_turn_distance(rng, limits))


def blocked_directions(position: Position, direction: Position, limits: CarveLimits) -> List[Position]:
    """Reverse of the current heading plus every direction that would leave the interior."""
    blocked = [reverse(direction)]
    if position.x <= limits.min_x:
        blocked.append(LEFT)
    if position.x >= limits.max_x:
        blocked.append(RIGHT)
    if position.y <= limits.min_y:
        blocked.append(UP)
    if position.y >= limits.max_y:
        blocked.append(DOWN)
    return blocked


def at_boundary(position: Position, direction: Position, limits: CarveLimits) -> bool:
    return (
        (position.x <= limits.min_x and direction.x < 0)
        or (position.x >= limits.max_x and direction.x > 0)
        or (position.y <= limits.min_y and direction.y < 0)
        or (position.y >= limits.max_y and direction.y > 0)
    )


def advance(state: BuilderState, grid, rng: RandomSource, limits: CarveLimits) -> Tuple[BuilderState, Position]:
    """Move one step and return ``(next_state, position_to_carve)``."""
    if state.done:
        return state, state.position
    pos = Position(state.position.x + state.direction.x, state.position.y + state.direction.y)
    steps = state.steps + 1

    if type_at(grid, pos.x, pos.y) == EMPTY:
        # Reconnected with an existing path
        return state._replace(position=pos, steps=steps, done=True), pos

    if at_boundary(pos, state.direction, limits):
        new_dir = rng.direction(blocked_directions(pos, state.direction, limits))
    elif steps >= state.turn_at:
        ignore = [state.direction] + blocked_directions(pos, state.direction, limits)
        new_dir = rng.direction(ignore)
    else:
        return state._replace(position=pos, steps=steps), pos

    if new_dir is None:
        return state._replace(position=pos, steps=steps, done=True), pos
    turned = BuilderState(pos, new_dir, 0, draw_turn_distance(rng, limits))
    return turned, pos


class PathBuilder:
    """Mutable holder around a BuilderState, stepped by a BuilderPool."""

    def __init__(self, origin: Position, direction: Position, rng: RandomSource, limits: CarveLimits):
        self.rng = rng
        self.limits = limits
        self.state = new_builder(origin, direction, rng, limits)

    @property
    def done(self) -> bool:
        return self.state.done

    @property
    def position(self) -> Position:
        return self.state.position

    def advance(self, grid) -> Position:
        self.state, pos = advance(self.state, grid, self.rng, self.limits)
        return pos


__all__ = [
    "CarveLimits",
    "BuilderState",
    "PathBuilder",
    "advance",
    "new_builder",
    "blocked_directions",
    "at_boundary",
    "draw_turn_distance",
]
