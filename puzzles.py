"""
Daily puzzle solvers built on the grid.

Each day parses its puzzle text once and answers two independent parts.
Blank input answers ("0", "0") without parsing.
"""

from __future__ import annotations

import logging
from itertools import combinations
from math import gcd
from typing import Any, ClassVar

from grid import Grid
from grid_parser import parse_char_grid, parse_patrol_map
from grid_types import MapElement, Position
from patrol import PatrolRules, count_loop_obstructions, count_visited

logger = logging.getLogger(__name__)

__all__ = ["Solution", "Day04", "Day06", "Day08", "DAYS", "get_day"]


class Solution:
    """
    Base for a day's solver.

    Subclasses override parse_input, part_one and part_two. The parsed
    input is shared by both parts and must not be mutated by either.
    """

    day: ClassVar[int] = 0

    @classmethod
    def parse_input(cls, text: str) -> Any:
        raise NotImplementedError

    @classmethod
    def part_one(cls, parsed: Any) -> int:
        raise NotImplementedError

    @classmethod
    def part_two(cls, parsed: Any) -> int:
        raise NotImplementedError

    @classmethod
    def solve(cls, text: str) -> tuple[str, str]:
        """Parse once and answer both parts."""
        if not text.strip():
            logger.info("Day %02d: blank input", cls.day)
            return ("0", "0")
        parsed = cls.parse_input(text)
        return (str(cls.part_one(parsed)), str(cls.part_two(parsed)))

    @classmethod
    def solve_part_one(cls, text: str) -> str:
        if not text.strip():
            return "0"
        return str(cls.part_one(cls.parse_input(text)))

    @classmethod
    def solve_part_two(cls, text: str) -> str:
        if not text.strip():
            return "0"
        return str(cls.part_two(cls.parse_input(text)))


# =============================================================================
# Day 4: Word Search
# =============================================================================

# All eight compass steps, as (row_delta, col_delta)
_EIGHT_WAY = [(dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)]


def _spells(grid: Grid[str], row: int, col: int, dr: int, dc: int, word: str) -> bool:
    """Whether word appears starting one step beyond (row, col) along (dr, dc)."""
    for k, expected in enumerate(word, start=1):
        if grid.get(row + k * dr, col + k * dc) != expected:
            return False
    return True


class Day04(Solution):
    """Count XMAS words, then X-shaped MAS crosses."""

    day = 4

    @classmethod
    def parse_input(cls, text: str) -> Grid[str]:
        return parse_char_grid(text)

    @classmethod
    def part_one(cls, parsed: Grid[str]) -> int:
        return sum(
            1
            for row, col, _ in parsed.locate_all(lambda ch: ch == "X")
            for dr, dc in _EIGHT_WAY
            if _spells(parsed, row, col, dr, dc, "MAS")
        )

    @classmethod
    def part_two(cls, parsed: Grid[str]) -> int:
        crosses = {("M", "M", "S", "S"), ("M", "S", "M", "S"), ("S", "M", "S", "M"), ("S", "S", "M", "M")}
        count = 0
        for row, col, _ in parsed.locate_all(lambda ch: ch == "A"):
            corners = (
                parsed.get(row - 1, col - 1),
                parsed.get(row - 1, col + 1),
                parsed.get(row + 1, col - 1),
                parsed.get(row + 1, col + 1),
            )
            if corners in crosses:
                count += 1
        return count


# =============================================================================
# Day 6: Guard Patrol
# =============================================================================


class Day06(Solution):
    """Cells the guard visits, then obstacle spots that trap it in a loop."""

    day = 6
    rules: ClassVar[PatrolRules] = PatrolRules()

    @classmethod
    def parse_input(cls, text: str) -> Grid[MapElement]:
        return parse_patrol_map(text)

    @classmethod
    def part_one(cls, parsed: Grid[MapElement]) -> int:
        return count_visited(parsed)

    @classmethod
    def part_two(cls, parsed: Grid[MapElement]) -> int:
        return count_loop_obstructions(parsed, cls.rules)


# =============================================================================
# Day 8: Antennas
# =============================================================================


def _antennas(grid: Grid[str]) -> dict[str, list[Position]]:
    """Antenna positions grouped by frequency, in row-major order."""
    by_frequency: dict[str, list[Position]] = {}
    for row, col, ch in grid.locate_all(lambda ch: ch != "."):
        by_frequency.setdefault(ch, []).append((row, col))
    return by_frequency


class Day08(Solution):
    """Antinodes from pairs of same-frequency antennas."""

    day = 8

    @classmethod
    def parse_input(cls, text: str) -> Grid[str]:
        return parse_char_grid(text)

    @classmethod
    def part_one(cls, parsed: Grid[str]) -> int:
        antinodes: set[Position] = set()
        for positions in _antennas(parsed).values():
            for (ar, ac), (br, bc) in combinations(positions, 2):
                dr, dc = br - ar, bc - ac
                for node in ((ar - dr, ac - dc), (br + dr, bc + dc)):
                    if parsed.in_bounds(*node):
                        antinodes.add(node)
        return len(antinodes)

    @classmethod
    def part_two(cls, parsed: Grid[str]) -> int:
        antinodes: set[Position] = set()
        for positions in _antennas(parsed).values():
            for (ar, ac), (br, bc) in combinations(positions, 2):
                dr, dc = br - ar, bc - ac
                # Smallest lattice step along the line through both antennas
                g = gcd(dr, dc)
                dr, dc = dr // g, dc // g
                for sign in (1, -1):
                    r, c = ar, ac
                    while parsed.in_bounds(r, c):
                        antinodes.add((r, c))
                        r, c = r + sign * dr, c + sign * dc
        return len(antinodes)


DAYS: dict[int, type[Solution]] = {cls.day: cls for cls in (Day04, Day06, Day08)}


def get_day(number: int) -> type[Solution]:
    """Look up a day's solver by number."""
    try:
        return DAYS[number]
    except KeyError:
        available = ", ".join(str(d) for d in sorted(DAYS))
        raise KeyError(f"No solver for day {number}; available days: {available}") from None
