"""
Grid parsing utilities.

Grids are written one row per line and one cell per character:

    ....#.....
    .#..^.....

Each character is parsed independently by a cell parser, so the same
reader serves patrol maps, word searches and antenna maps.
"""

from __future__ import annotations

from typing import Callable, TypeVar

from grid import Grid
from grid_types import Direction, Empty, Guard, GridParseError, MapElement, Obstacle

__all__ = ["parse_grid", "parse_map_element", "parse_patrol_map", "parse_char_grid"]

T = TypeVar("T")

MAP_SYMBOLS: dict[str, MapElement] = {
    "^": Guard(Direction.UP),
    "v": Guard(Direction.DOWN),
    "<": Guard(Direction.LEFT),
    ">": Guard(Direction.RIGHT),
    "#": Obstacle(),
    ".": Empty(),
}


def parse_grid(text: str, parse_cell: Callable[[str], T], valid: str = "") -> Grid[T]:
    """
    Parse a block of text into a grid.

    Args:
        text: One row per line, one cell per character
        parse_cell: Converts a single character into a cell; raises
                    ValueError for characters it does not accept
        valid: Description of accepted characters, for error messages

    Returns:
        Grid of parsed cells (empty grid for empty text)

    Raises:
        GridParseError: If any character is rejected by parse_cell
        ValueError: If rows have different lengths
    """
    rows: list[list[T]] = []

    for row_idx, line in enumerate(text.splitlines()):
        cells: list[T] = []
        for col_idx, char in enumerate(line):
            try:
                cells.append(parse_cell(char))
            except ValueError as e:
                raise GridParseError(char, row_idx, col_idx, line, valid or str(e)) from e
        rows.append(cells)

    return Grid(rows)


def parse_map_element(char: str) -> MapElement:
    """Parse a single patrol-map character."""
    try:
        return MAP_SYMBOLS[char]
    except KeyError:
        raise ValueError(f"Unknown map symbol '{char}'") from None


def parse_patrol_map(text: str) -> Grid[MapElement]:
    """
    Parse a guard-patrol map.

    Symbols:
    - '^', 'v', '<', '>': Guard facing up, down, left, right
    - '#': Obstacle
    - '.': Empty floor
    """
    return parse_grid(text, parse_map_element, valid="'^', 'v', '<', '>', '#', '.'")


def parse_char_grid(text: str) -> Grid[str]:
    """Parse text into a grid of single characters (any character accepted)."""
    return parse_grid(text, str)
