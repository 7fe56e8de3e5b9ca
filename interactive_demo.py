"""
Interactive demo for the guard patrol.
Display a patrol map and step the guard through it with keyboard commands.
"""

import logging
import sys
from pathlib import Path

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render_patrol
from grid import Grid
from grid_parser import parse_patrol_map
from grid_types import GuardNotFound, MapElement, Position
from patrol import (
    PatrolResult,
    PatrolState,
    WalkOutcome,
    find_guard,
    find_loop_obstructions,
    patrol,
)

SAMPLE_MAP = """\
....#.....
.........#
..........
..#.......
.......#..
..........
.#..^.....
........#.
#.........
......#...
"""


class InteractiveDemo:
    """Interactive step-through of a guard patrol."""

    def __init__(self, grid: Grid[MapElement]) -> None:
        self.grid = grid
        self.console = Console()
        self.status_message = "Ready"
        self.obstructions: list[Position] = []
        self.reset()

    def reset(self) -> None:
        """Put the guard back at its starting cell."""
        self.start = find_guard(self.grid)
        self.walk: PatrolResult = patrol(self.grid, self.start)
        self.history: list[PatrolState] = [next(self.walk)]
        self.status_message = "Patrol reset to starting position"

    @property
    def finished(self) -> bool:
        return self.walk.outcome is not None

    def step(self) -> None:
        """Advance the guard by one state."""
        if self.finished:
            self.status_message = f"Patrol already over ({self.walk.outcome.value})"
            return
        state = next(self.walk, None)
        if state is None:
            self.status_message = f"Patrol over: {self.walk.outcome.value}"
        else:
            self.history.append(state)
            self.status_message = (
                f"Guard at [{state.row}, {state.col}] facing {state.direction.name}"
            )

    def finish(self) -> None:
        """Run the patrol to the end."""
        self.history.extend(self.walk)
        visited = len({state.position for state in self.history})
        self.status_message = f"Patrol over: {self.walk.outcome.value}, {visited} cells visited"

    def show_obstructions(self) -> None:
        self.obstructions = find_loop_obstructions(self.grid)
        self.status_message = f"{len(self.obstructions)} obstacle spots would trap the guard"

    def generate_display(self) -> Panel:
        """Generate the current display with map and status."""
        current = self.history[-1]
        grid_text = render_patrol(
            self.grid,
            self.history,
            obstructions=self.obstructions,
            highlight=None if self.walk.outcome is WalkOutcome.EXITED else current,
        )

        status = Text()
        status.append("Guard: ", style="bold")
        status.append(f"[{current.row}, {current.col}] facing {current.direction.name}\n")
        status.append("Steps: ", style="bold")
        status.append(f"{len(self.history) - 1}\n\n")

        status.append(Text.from_ansi(grid_text))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  N - Next step\n")
        status.append("  F - Finish patrol\n")
        status.append("  O - Show loop-inducing obstacle spots\n")
        status.append("  R - Reset guard\n")
        status.append("  Q - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="Guard Patrol Demo", border_style="green", width=80)

    def run(self) -> None:
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())
                    key = readchar.readkey().lower()

                    if key == "q":
                        self.status_message = "Quitting..."
                        live.update(self.generate_display())
                        break
                    elif key == "n":
                        self.step()
                    elif key == "f":
                        self.finish()
                    elif key == "o":
                        self.show_obstructions()
                    elif key == "r":
                        self.reset()
                    else:
                        self.status_message = f"Unknown key: {repr(key)}"

            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    text = Path(sys.argv[1]).read_text() if len(sys.argv) > 1 else SAMPLE_MAP
    try:
        demo = InteractiveDemo(parse_patrol_map(text))
    except GuardNotFound as e:
        print(f"ERROR: {e}")
        sys.exit(1)
    demo.run()
