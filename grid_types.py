"""
Shared type definitions for the patrol map and its grid.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    """Cardinal direction for stepping through a grid."""

    UP = "U"  # decreasing row
    DOWN = "D"  # increasing row
    LEFT = "L"  # decreasing col
    RIGHT = "R"  # increasing col

    @property
    def delta(self) -> tuple[int, int]:
        """(row_delta, col_delta) for a single step."""
        return _DELTAS[self]

    def turn_right(self) -> Direction:
        return _RIGHT_TURNS[self]


_DELTAS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}

_RIGHT_TURNS = {
    Direction.UP: Direction.RIGHT,
    Direction.RIGHT: Direction.DOWN,
    Direction.DOWN: Direction.LEFT,
    Direction.LEFT: Direction.UP,
}


# =============================================================================
# Map Elements
# =============================================================================


@dataclass(frozen=True)
class Empty:
    """Open floor."""

    def __str__(self) -> str:
        return "."


@dataclass(frozen=True)
class Obstacle:
    """A blocked cell; the guard turns right when facing one."""

    def __str__(self) -> str:
        return "#"


@dataclass(frozen=True)
class Guard:
    """The guard's starting cell, with the heading it starts in."""

    direction: Direction

    def __str__(self) -> str:
        return GUARD_SYMBOLS[self.direction]


MapElement = Guard | Obstacle | Empty

GUARD_SYMBOLS = {
    Direction.UP: "^",
    Direction.DOWN: "v",
    Direction.LEFT: "<",
    Direction.RIGHT: ">",
}

Position = tuple[int, int]


# =============================================================================
# Errors
# =============================================================================


class GridParseError(ValueError):
    """A character in grid text could not be parsed into a cell."""

    def __init__(self, char: str, row: int, col: int, line: str, valid: str) -> None:
        self.char = char
        self.row = row
        self.col = col
        super().__init__(
            f"Invalid character '{char}'\n"
            f"  Row {row}: \"{line}\"\n"
            f"  Position: column {col}\n"
            f"  Valid characters: {valid}"
        )


class GuardNotFound(LookupError):
    """The map has no Guard cell, so a patrol cannot start."""
