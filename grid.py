"""
Generic rectangular 2-D grid with bounds-safe access, directional stepping
and predicate search.

All lookups return None instead of raising when a coordinate falls outside
the grid, so callers can treat "off the edge" as an ordinary outcome.
"""

from __future__ import annotations

from typing import Callable, Generic, Iterator, TypeVar

from grid_types import Direction

T = TypeVar("T")

# (row, col, element) triple returned by searches and steps
Located = tuple[int, int, T]


class Grid(Generic[T]):
    """A row-major 2-D grid of elements, addressed by zero-based (row, col)."""

    def __init__(self, rows: list[list[T]]) -> None:
        if rows:
            cols = len(rows[0])
            mismatched = [(i, len(row)) for i, row in enumerate(rows) if len(row) != cols]
            if mismatched:
                error_msg = (
                    f"Inconsistent row lengths\n"
                    f"  Expected: {cols} columns (from row 0)\n"
                    f"  Mismatched rows:\n"
                )
                for row_idx, actual_cols in mismatched:
                    error_msg += f"    Row {row_idx}: {actual_cols} columns\n"
                error_msg += "  All rows must have the same number of cells"
                raise ValueError(error_msg)
        self._rows = rows

    def __repr__(self) -> str:
        rows, cols = self.dimensions()
        return f"Grid({rows}x{cols})"

    def __str__(self) -> str:
        return "".join("".join(str(element) for element in row) + "\n" for row in self._rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._rows == other._rows

    def __iter__(self) -> Iterator[list[T]]:
        return iter(self._rows)

    def copy(self) -> Grid[T]:
        """Independent copy; writes to it never reach this grid."""
        return Grid([list(row) for row in self._rows])

    def in_bounds(self, row: int, col: int) -> bool:
        rows, cols = self.dimensions()
        return 0 <= row < rows and 0 <= col < cols

    def get(self, row: int, col: int) -> T | None:
        if not self.in_bounds(row, col):
            return None
        return self._rows[row][col]

    def put(self, row: int, col: int, value: T) -> bool:
        """Replace the element at (row, col). Returns False if out of bounds."""
        if not self.in_bounds(row, col):
            return False
        self._rows[row][col] = value
        return True

    def dimensions(self) -> tuple[int, int]:
        # Rectangular by construction; cope with an empty grid
        return (len(self._rows), len(self._rows[0]) if self._rows else 0)

    def row(self, index: int) -> list[T] | None:
        if not 0 <= index < len(self._rows):
            return None
        return list(self._rows[index])

    def column(self, index: int) -> list[T] | None:
        if not self._rows or not 0 <= index < len(self._rows[0]):
            return None
        return [row[index] for row in self._rows]

    def cells(self) -> Iterator[Located[T]]:
        """Yield every (row, col, element) in row-major order."""
        for r, row in enumerate(self._rows):
            for c, element in enumerate(row):
                yield (r, c, element)

    def locate(self, predicate: Callable[[T], bool]) -> Located[T] | None:
        """
        Find the first element (top-to-bottom, then left-to-right) that
        satisfies predicate, with its position.
        """
        return next((found for found in self.cells() if predicate(found[2])), None)

    def locate_all(self, predicate: Callable[[T], bool]) -> list[Located[T]]:
        """All elements satisfying predicate, in the same order as locate()."""
        return [found for found in self.cells() if predicate(found[2])]

    def walk(self, row: int, col: int, direction: Direction) -> Located[T] | None:
        """
        Step once from (row, col) in direction.

        Returns the neighbour's position and contents, or None if the step
        leaves the grid.
        """
        return step(self, row, col, direction)


class GridOverlay(Generic[T]):
    """
    Read-only view of a grid with a single cell replaced.

    Lookups consult the override before falling through to the base grid,
    which avoids copying the whole grid for a one-cell "what if".
    """

    def __init__(self, base: Grid[T], row: int, col: int, value: T) -> None:
        self.base = base
        self.override = (row, col)
        self.value = value

    def dimensions(self) -> tuple[int, int]:
        return self.base.dimensions()

    def in_bounds(self, row: int, col: int) -> bool:
        return self.base.in_bounds(row, col)

    def get(self, row: int, col: int) -> T | None:
        if (row, col) == self.override and self.base.in_bounds(row, col):
            return self.value
        return self.base.get(row, col)

    def walk(self, row: int, col: int, direction: Direction) -> Located[T] | None:
        return step(self, row, col, direction)


def step(
    grid: Grid[T] | GridOverlay[T], row: int, col: int, direction: Direction
) -> Located[T] | None:
    """Shared single-step logic for Grid and GridOverlay."""
    dr, dc = direction.delta
    next_row = row + dr
    next_col = col + dc

    # Would underflow an unsigned index: off the top or left edge
    if next_row < 0 or next_col < 0:
        return None

    if not grid.in_bounds(next_row, next_col):
        return None
    return (next_row, next_col, grid.get(next_row, next_col))
