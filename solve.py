#!/usr/bin/env python3
"""
Run a day's solver against a puzzle input file.

Usage:
    python solve.py <day> <input-file> [-v]
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from puzzles import get_day

logger = logging.getLogger(__name__)


def run(day: int, input_path: Path, console: Console | None = None) -> tuple[str, str]:
    """Solve both parts of a day and print them as a table."""
    console = console or Console()
    solution = get_day(day)
    text = input_path.read_text()
    logger.info("Day %02d: read %d bytes from %s", day, len(text), input_path)

    part_one, part_two = solution.solve(text)

    table = Table(title=f"Day {day:02d}")
    table.add_column("Part", style="bold cyan")
    table.add_column("Answer", style="green")
    table.add_row("One", part_one)
    table.add_row("Two", part_two)
    console.print(table)
    return part_one, part_two


def main(argv: list[str]) -> int:
    args = [a for a in argv if a != "-v"]
    logging.basicConfig(
        level=logging.INFO if "-v" in argv else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    if len(args) != 2:
        print(__doc__.strip())
        return 2

    run(int(args[0]), Path(args[1]))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
