"""Tests for the guard patrol simulation."""

import pytest

from grid import GridOverlay
from grid_parser import parse_patrol_map
from grid_types import Direction, GuardNotFound, Obstacle
from patrol import (
    PatrolLoopError,
    PatrolRules,
    PatrolState,
    ProbeStrategy,
    WalkOutcome,
    count_loop_obstructions,
    count_visited,
    creates_loop,
    find_guard,
    find_loop_obstructions,
    patrol,
    run_patrol,
    visited_positions,
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

BOXED_IN = """\
.#.
#^#
.#.
"""


class TestFindGuard:
    """Tests for locating the guard."""

    def test_sample_guard(self) -> None:
        grid = parse_patrol_map(SAMPLE_MAP)
        assert find_guard(grid) == PatrolState(6, 4, Direction.UP)

    def test_guard_heading(self) -> None:
        grid = parse_patrol_map("...\n..<\n...")
        assert find_guard(grid) == PatrolState(1, 2, Direction.LEFT)

    def test_no_guard(self) -> None:
        """A map without a guard fails before walking."""
        grid = parse_patrol_map("...\n.#.\n...")
        with pytest.raises(GuardNotFound):
            find_guard(grid)

    def test_no_guard_fails_every_query(self) -> None:
        grid = parse_patrol_map("...\n.#.\n...")
        with pytest.raises(GuardNotFound):
            count_visited(grid)
        with pytest.raises(GuardNotFound):
            count_loop_obstructions(grid)


class TestPatrolWalk:
    """Tests for the step/turn state machine."""

    def test_walks_straight_out(self) -> None:
        grid = parse_patrol_map("...\n...\n.^.")
        states, outcome = run_patrol(grid, find_guard(grid))
        assert outcome is WalkOutcome.EXITED
        assert [s.position for s in states] == [(2, 1), (1, 1), (0, 1)]

    def test_turns_right_in_place(self) -> None:
        """Facing an obstacle turns the guard without moving it."""
        grid = parse_patrol_map(".#.\n.^.\n...")
        states, outcome = run_patrol(grid, find_guard(grid))
        assert outcome is WalkOutcome.EXITED
        assert states == [
            PatrolState(1, 1, Direction.UP),
            PatrolState(1, 1, Direction.RIGHT),
            PatrolState(1, 2, Direction.RIGHT),
        ]

    def test_outcome_unset_until_exhausted(self) -> None:
        grid = parse_patrol_map("...\n.^.")
        result = patrol(grid, find_guard(grid))
        assert result.outcome is None
        next(result)
        assert result.outcome is None
        list(result)
        assert result.outcome is WalkOutcome.EXITED

    def test_boxed_in_guard_loops(self) -> None:
        """A guard surrounded by obstacles spins forever."""
        grid = parse_patrol_map(BOXED_IN)
        states, outcome = run_patrol(grid, find_guard(grid))
        assert outcome is WalkOutcome.LOOPING
        assert len(states) == 4
        assert {s.position for s in states} == {(1, 1)}

    def test_sample_loops_with_extra_obstacle(self) -> None:
        grid = parse_patrol_map(SAMPLE_MAP)
        _, outcome = run_patrol(GridOverlay(grid, 6, 3, Obstacle()), find_guard(grid))
        assert outcome is WalkOutcome.LOOPING

    def test_walk_never_mutates_grid(self) -> None:
        grid = parse_patrol_map(SAMPLE_MAP)
        run_patrol(grid, find_guard(grid))
        assert str(grid) == SAMPLE_MAP


class TestCountVisited:
    """Tests for counting distinct visited cells."""

    def test_sample(self) -> None:
        assert count_visited(parse_patrol_map(SAMPLE_MAP)) == 41

    def test_idempotent(self) -> None:
        """Counting twice gives the same answer and leaves the grid alone."""
        grid = parse_patrol_map(SAMPLE_MAP)
        before = grid.copy()
        assert count_visited(grid) == count_visited(grid)
        assert grid == before

    @pytest.mark.parametrize(
        "text",
        [
            "^..\n...\n...",
            "<..\n...\n...",
            "..>\n...\n...",
            "...\n...\n..v",
        ],
    )
    def test_corner_facing_out(self, text: str) -> None:
        """A guard in a corner facing outward leaves immediately."""
        assert count_visited(parse_patrol_map(text)) == 1

    def test_visited_positions_first_visit_order(self) -> None:
        grid = parse_patrol_map("#..\n...\n^..")
        assert visited_positions(grid) == [(2, 0), (1, 0), (1, 1), (1, 2)]

    def test_looping_map_is_rejected(self) -> None:
        with pytest.raises(PatrolLoopError, match="never leaves the map"):
            count_visited(parse_patrol_map(BOXED_IN))


class TestLoopObstructions:
    """Tests for probing single extra obstacles."""

    def test_sample_count(self) -> None:
        assert count_loop_obstructions(parse_patrol_map(SAMPLE_MAP)) == 6

    def test_sample_positions(self) -> None:
        grid = parse_patrol_map(SAMPLE_MAP)
        assert sorted(find_loop_obstructions(grid)) == [
            (6, 3),
            (7, 6),
            (7, 7),
            (8, 1),
            (8, 3),
            (9, 7),
        ]

    def test_clone_strategy_agrees(self) -> None:
        grid = parse_patrol_map(SAMPLE_MAP)
        overlay = find_loop_obstructions(grid, PatrolRules(ProbeStrategy.OVERLAY))
        clone = find_loop_obstructions(grid, PatrolRules(ProbeStrategy.CLONE))
        assert overlay == clone

    def test_probing_never_mutates_grid(self) -> None:
        grid = parse_patrol_map(SAMPLE_MAP)
        find_loop_obstructions(grid, PatrolRules(ProbeStrategy.CLONE))
        find_loop_obstructions(grid, PatrolRules(ProbeStrategy.OVERLAY))
        assert str(grid) == SAMPLE_MAP

    def test_start_cell_never_a_candidate(self) -> None:
        grid = parse_patrol_map(SAMPLE_MAP)
        assert (6, 4) not in find_loop_obstructions(grid)

    def test_creates_loop(self) -> None:
        grid = parse_patrol_map(SAMPLE_MAP)
        start = find_guard(grid)
        assert creates_loop(grid, start, (6, 3)) is True
        assert creates_loop(grid, start, (1, 4)) is False

    def test_straight_exit_has_no_obstructions(self) -> None:
        """Blocking a straight corridor only turns the guard away."""
        assert count_loop_obstructions(parse_patrol_map("...\n...\n.^.")) == 0
