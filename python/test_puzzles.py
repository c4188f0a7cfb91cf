"""
Tests for the puzzle variants and the command line runner.
"""

import pytest

import samples
from grid_parser import corrupted_grid, parse_coordinates, parse_height_map
from grid_types import Position
from puzzles import (
    DAYS,
    PUZZLES,
    UNREACHABLE,
    first_blocking_byte,
    lookup,
    memory_maze,
    reindeer_maze,
    run,
    shortest_escape,
    solve_hill_climb,
    trailhead_costs,
)
from run_puzzle import main


@pytest.mark.parametrize(
    "puzzle, sample, part, expected",
    [(puzzle, sample, part, answer) for (puzzle, sample, part), answer in samples.ANSWERS.items()],
)
def test_published_sample_answers(puzzle: str, sample: str, part: int, expected: int) -> None:
    assert run(puzzle, part, getattr(samples, sample)) == expected


class TestMemoryMaze:
    """The memory sample uses a smaller grid than the real input."""

    def test_part1(self) -> None:
        answer = memory_maze(samples.MEMORY, 1, size=samples.MEMORY_SIZE, fallen=samples.MEMORY_FALLEN)
        assert answer == 22

    def test_part2(self) -> None:
        answer = memory_maze(samples.MEMORY, 2, size=samples.MEMORY_SIZE, fallen=samples.MEMORY_FALLEN)
        assert answer == "6,1"

    def test_no_blocking_byte(self) -> None:
        coordinates = parse_coordinates(samples.MEMORY)[: samples.MEMORY_FALLEN]
        assert first_blocking_byte(coordinates, samples.MEMORY_SIZE) is None
        assert first_blocking_byte([], samples.MEMORY_SIZE) is None

    def test_blocking_byte_matches_linear_scan(self) -> None:
        coordinates = parse_coordinates(samples.MEMORY)
        first_cut = next(
            count
            for count in range(len(coordinates) + 1)
            if not shortest_escape(corrupted_grid(coordinates, samples.MEMORY_SIZE, count)).reachable
        )
        assert first_blocking_byte(coordinates, samples.MEMORY_SIZE) == coordinates[first_cut - 1]

    def test_blocked_exit(self) -> None:
        """The exit itself is the first byte to fall."""
        answer = memory_maze("2,2\n", 2, size=3)
        assert answer == "2,2"

    def test_byte_on_start_cuts_off_exit(self) -> None:
        grid = corrupted_grid([Position(0, 0)], size=3, count=1)
        assert not shortest_escape(grid).reachable
        assert memory_maze("0,0\n", 1, size=3, fallen=1) == UNREACHABLE

    def test_byte_on_single_cell_grid(self) -> None:
        """Start and exit share the one cell, so its byte blocks both."""
        assert first_blocking_byte([Position(0, 0)], 1) == Position(0, 0)


class TestHillClimb:
    """Single and multi-start climbing."""

    def test_multi_start_matches_best_trailhead(self) -> None:
        grid = parse_height_map(samples.HILL)
        costs = trailhead_costs(grid, workers=2)
        best = min(cost for cost in costs.values() if cost is not None)
        assert best == 29
        assert solve_hill_climb(grid, from_anywhere_low=True).minimum_cost == best

    def test_trailheads_include_start(self) -> None:
        grid = parse_height_map(samples.HILL)
        costs = trailhead_costs(grid)
        assert grid.start is not None
        assert costs[grid.start] == 31

    def test_too_steep(self) -> None:
        assert run("hill-climb", 1, "Sc\nbE") == UNREACHABLE


class TestReindeerMaze:
    """Edge cases beyond the published samples."""

    def test_walled_off_goal(self) -> None:
        assert reindeer_maze("S#E", 1) == UNREACHABLE
        assert reindeer_maze("S#E", 2) == UNREACHABLE

    def test_straight_run(self) -> None:
        maze = "#####\n#S.E#\n#####"
        assert reindeer_maze(maze, 1) == 2
        assert reindeer_maze(maze, 2) == 3


class TestRegistry:
    """Puzzle lookup by name and by day."""

    def test_every_day_maps_to_a_puzzle(self) -> None:
        assert set(DAYS.values()) == set(PUZZLES)

    def test_lookup_by_day(self) -> None:
        assert lookup("2023-17") is PUZZLES["crucible"]
        assert run("2024-16", 1, samples.REINDEER_MAZE) == 7036

    def test_unknown_puzzle(self) -> None:
        with pytest.raises(KeyError, match="Unknown puzzle 'maze'"):
            lookup("maze")

    def test_invalid_part(self) -> None:
        with pytest.raises(ValueError, match="Invalid part: 3"):
            run("crucible", 3, samples.CRUCIBLE)


class TestRunPuzzle:
    """Tests for the command line entry point."""

    def test_prints_answer(self, tmp_path, capsys) -> None:
        path = tmp_path / "input.txt"
        path.write_text(samples.CRUCIBLE)
        assert main(["run_puzzle.py", "2023-17", "1", str(path)]) == 0
        assert capsys.readouterr().out == "102\n"

    def test_usage(self, capsys) -> None:
        assert main(["run_puzzle.py", "crucible"]) == 1
        assert "Usage" in capsys.readouterr().err

    def test_unknown_puzzle(self, tmp_path, capsys) -> None:
        path = tmp_path / "input.txt"
        path.write_text("S.E")
        assert main(["run_puzzle.py", "nope", "1", str(path)]) == 1
        assert "Unknown puzzle 'nope'" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys) -> None:
        assert main(["run_puzzle.py", "crucible", "1", str(tmp_path / "missing.txt")]) == 1
        assert capsys.readouterr().out == ""

    def test_bad_part(self, tmp_path, capsys) -> None:
        path = tmp_path / "input.txt"
        path.write_text(samples.CRUCIBLE)
        assert main(["run_puzzle.py", "crucible", "two", str(path)]) == 1
        assert main(["run_puzzle.py", "crucible", "3", str(path)]) == 1
        assert "Invalid part: 3" in capsys.readouterr().err

    def test_malformed_input(self, tmp_path, capsys) -> None:
        path = tmp_path / "input.txt"
        path.write_text("S.x\n..E")
        assert main(["run_puzzle.py", "reindeer-maze", "1", str(path)]) == 1
        assert "Invalid character 'x'" in capsys.readouterr().err

    def test_unreachable_prints_marker(self, tmp_path, capsys) -> None:
        path = tmp_path / "input.txt"
        path.write_text("S#E")
        assert main(["run_puzzle.py", "reindeer-maze", "1", str(path), "--verbose"]) == 0
        assert capsys.readouterr().out == f"{UNREACHABLE}\n"

