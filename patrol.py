"""
Guard patrol simulation with cycle detection.

The guard repeatedly tries to step forward. If the cell ahead is an
obstacle it turns right in place; if the step would leave the map the
patrol ends. A patrol that returns to a (position, heading) it has already
occupied will repeat forever, and is reported as looping.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from grid import Grid, GridOverlay
from grid_types import Direction, Guard, GuardNotFound, MapElement, Obstacle, Position

logger = logging.getLogger(__name__)


class WalkOutcome(Enum):
    """How a patrol ended. Both are normal results."""

    EXITED = "exited"  # Stepped off the edge of the map
    LOOPING = "looping"  # Revisited a (position, heading) state


class ProbeStrategy(Enum):
    """How a hypothetical extra obstacle is applied to the map."""

    OVERLAY = "overlay"  # Single-cell override consulted at lookup time
    CLONE = "clone"  # Copy the whole grid and put() the obstacle


@dataclass(frozen=True)
class PatrolRules:
    """Rules governing obstruction probing."""

    probe_strategy: ProbeStrategy = ProbeStrategy.OVERLAY


@dataclass(frozen=True)
class PatrolState:
    """Where the guard is and which way it faces."""

    row: int
    col: int
    direction: Direction

    @property
    def position(self) -> Position:
        return (self.row, self.col)


class PatrolLoopError(RuntimeError):
    """The guard's unobstructed patrol never leaves the map."""


PatrolMap = Grid[MapElement] | GridOverlay[MapElement]


class PatrolResult:
    """
    Iterator wrapper for patrol() that records how the walk ended.

    Usage:
        result = patrol(grid, start)
        for state in result:
            print(state)
        print(result.outcome)  # WalkOutcome once exhausted
    """

    def __init__(self, generator: Iterator[PatrolState]) -> None:
        self._iterator = generator
        self.outcome: WalkOutcome | None = None

    def __iter__(self) -> Iterator[PatrolState]:
        return self

    def __next__(self) -> PatrolState:
        return next(self._iterator)


def find_guard(grid: PatrolMap) -> PatrolState:
    """
    Find the guard's starting position and heading.

    Raises:
        GuardNotFound: If no cell holds a Guard
    """
    if isinstance(grid, GridOverlay):
        grid = grid.base
    found = grid.locate(lambda element: isinstance(element, Guard))
    if found is None:
        raise GuardNotFound("Could not find the guard: no '^', 'v', '<' or '>' on the map")
    row, col, guard = found
    return PatrolState(row, col, guard.direction)


def patrol(grid: PatrolMap, start: PatrolState) -> PatrolResult:
    """
    Walk the guard from start, yielding every state it occupies.

    The walk always terminates: there are at most rows * cols * 4 distinct
    states, and revisiting one ends the walk as LOOPING.

    Args:
        grid: The map (never modified)
        start: Starting position and heading

    Returns:
        PatrolResult iterator; its outcome is set once it is exhausted
    """
    result = PatrolResult.__new__(PatrolResult)
    result.outcome = None
    result._iterator = _patrol_generator(grid, start, result)
    return result


def _patrol_generator(
    grid: PatrolMap, start: PatrolState, result: PatrolResult
) -> Iterator[PatrolState]:
    """Internal generator for patrol(). Do not call directly."""
    seen: set[PatrolState] = set()
    state = start

    while True:
        if state in seen:
            result.outcome = WalkOutcome.LOOPING
            return
        seen.add(state)
        yield state

        ahead = grid.walk(state.row, state.col, state.direction)
        match ahead:
            case None:
                result.outcome = WalkOutcome.EXITED
                return
            case (_, _, Obstacle()):
                state = PatrolState(state.row, state.col, state.direction.turn_right())
            case (next_row, next_col, _):
                state = PatrolState(next_row, next_col, state.direction)


def run_patrol(grid: PatrolMap, start: PatrolState) -> tuple[list[PatrolState], WalkOutcome]:
    """Run a patrol to the end, returning every state and the outcome."""
    result = patrol(grid, start)
    states = list(result)
    assert result.outcome is not None
    return states, result.outcome


def visited_positions(grid: Grid[MapElement]) -> list[Position]:
    """
    Distinct positions on the guard's unobstructed patrol, in first-visit order.

    Raises:
        GuardNotFound: If the map has no guard
        PatrolLoopError: If the patrol never leaves the map
    """
    start = find_guard(grid)
    states, outcome = run_patrol(grid, start)
    if outcome is WalkOutcome.LOOPING:
        raise PatrolLoopError(
            f"Guard starting at ({start.row}, {start.col}) facing "
            f"{start.direction.name} never leaves the map"
        )
    return list(dict.fromkeys(state.position for state in states))


def count_visited(grid: Grid[MapElement]) -> int:
    """Number of distinct cells the guard occupies before leaving the map."""
    count = len(visited_positions(grid))
    logger.info("count_visited: %d distinct positions", count)
    return count


def creates_loop(
    grid: Grid[MapElement],
    start: PatrolState,
    obstruction: Position,
    rules: PatrolRules = PatrolRules(),
) -> bool:
    """Whether one extra obstacle at obstruction makes the patrol from start loop."""
    row, col = obstruction
    probe: PatrolMap
    if rules.probe_strategy is ProbeStrategy.CLONE:
        probe = grid.copy()
        probe.put(row, col, Obstacle())
    else:
        probe = GridOverlay(grid, row, col, Obstacle())

    _, outcome = run_patrol(probe, start)
    logger.debug("probe (%d, %d): %s", row, col, outcome.value)
    return outcome is WalkOutcome.LOOPING


def find_loop_obstructions(
    grid: Grid[MapElement], rules: PatrolRules = PatrolRules()
) -> list[Position]:
    """
    Cells where a single extra obstacle would trap the guard in a loop.

    Only cells on the guard's unobstructed path are candidates, and the
    guard's own starting cell is never one. Each candidate is probed once on
    a private view of the map; the map itself is left untouched.

    Returns:
        Looping positions in the order the guard first reaches them
    """
    start = find_guard(grid)
    candidates = [pos for pos in visited_positions(grid) if pos != start.position]

    loops = [pos for pos in candidates if creates_loop(grid, start, pos, rules)]
    logger.info(
        "find_loop_obstructions: %d of %d candidates loop (strategy=%s)",
        len(loops),
        len(candidates),
        rules.probe_strategy.value,
    )
    return loops


def count_loop_obstructions(
    grid: Grid[MapElement], rules: PatrolRules = PatrolRules()
) -> int:
    return len(find_loop_obstructions(grid, rules))
