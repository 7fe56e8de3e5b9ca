"""
ASCII rendering for grids and guard patrols.

Provides two rendering approaches:
1. Plain rendering - one line per row, each element printed as its symbol
2. Patrol rendering - the map overlaid with the guard's walked path
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

import simple_chalk as chalk  # type: ignore[import-untyped]

from grid import Grid
from grid_types import Direction, MapElement, Obstacle, Position
from patrol import PatrolState

logger = logging.getLogger(__name__)

__all__ = ["render_grid", "render_patrol", "path_marks"]


def render_grid(grid: Grid[object]) -> str:
    """Render a grid exactly as it would be written in puzzle input."""
    return str(grid)


def path_marks(states: Iterable[PatrolState]) -> dict[Position, str]:
    """
    Work out which path character to draw at each walked cell.

    '|' for cells only crossed vertically, '-' for cells only crossed
    horizontally, '+' where the guard turned or crossed its own path.
    """
    marks: dict[Position, str] = {}
    for state in states:
        char = "|" if state.direction in (Direction.UP, Direction.DOWN) else "-"
        existing = marks.get(state.position)
        if existing is not None and existing != char:
            char = "+"
        marks[state.position] = char
    return marks


def render_patrol(
    grid: Grid[MapElement],
    states: Iterable[PatrolState],
    obstructions: Iterable[Position] = (),
    highlight: PatrolState | None = None,
) -> str:
    """
    Render a patrol map with the guard's path drawn over it.

    Args:
        grid: The patrol map
        states: States the guard has occupied, in order
        obstructions: Cells to mark 'O' (e.g. loop-inducing obstacle spots)
        highlight: Current guard state, drawn as an arrow with inverted colours

    Returns:
        Rendered string, one line per row, with ANSI colour codes
    """
    marks = path_marks(states)
    obstruction_set = set(obstructions)
    arrows = {
        Direction.UP: "^",
        Direction.DOWN: "v",
        Direction.LEFT: "<",
        Direction.RIGHT: ">",
    }

    lines: list[str] = []
    for r_idx, row in enumerate(grid):
        line_parts: list[str] = []
        for c_idx, cell in enumerate(row):
            pos = (r_idx, c_idx)
            colorize: Callable[[str], str]

            if highlight is not None and highlight.position == pos:
                line_parts.append(chalk.bgWhite.black(arrows[highlight.direction]))
                continue

            if pos in obstruction_set:
                char, colorize = "O", chalk.redBright
            elif isinstance(cell, Obstacle):
                char, colorize = "#", chalk.white
            elif pos in marks:
                char, colorize = marks[pos], chalk.yellow
            else:
                char, colorize = str(cell), chalk.blue

            line_parts.append(colorize(char))
        lines.append("".join(line_parts))

    logger.debug(
        "render_patrol: %d path cells, %d obstructions", len(marks), len(obstruction_set)
    )
    return "\n".join(lines)
