"""
Puzzle variants built on the turnpath engine.

Each variant parses its input, picks a transition topology, start states and
goal predicate, and answers part 1 or part 2 of its puzzle:

- reindeer-maze (2024 day 16): rotate in place for 1000, step for 1. Part 1 is
  the lowest score, part 2 the number of cells on any lowest-score path.
- crucible (2023 day 17): every step moves; runs of 1 to 3 (part 1) or 4 to 10
  (part 2) blocks in one direction, paying each entered block's heat loss.
- memory-maze (2024 day 18): plain shortest path through a grid corrupted by
  falling bytes (part 1), and the first byte that cuts the exit off (part 2).
- hill-climb (2022 day 12): climb at most one height per step, from 'S' (part 1)
  or from any lowest cell (part 2).
"""

from __future__ import annotations

import logging
from typing import Callable

from grid_parser import (
    corrupted_grid,
    parse_coordinates,
    parse_cost_grid,
    parse_height_map,
    parse_maze,
)
from grid_types import Direction, Grid, Position
from turnpath import (
    SearchResult,
    Topology,
    TransitionConfig,
    goal_at,
    solve,
    solve_each,
    start_states,
)

logger = logging.getLogger(__name__)

# Answer printed when no path exists
UNREACHABLE = "<NONE>"

Answer = int | str
PuzzleFn = Callable[[str, int], Answer]


def _check_part(part: int) -> None:
    if part not in (1, 2):
        raise ValueError(f"Invalid part: {part} (expected 1 or 2)")


def _cost_or_none(result: SearchResult) -> Answer:
    return result.minimum_cost if result.minimum_cost is not None else UNREACHABLE


def _require_markers(grid: Grid) -> tuple[Position, Position]:
    assert grid.start is not None and grid.goal is not None, "parser sets start and goal"
    return grid.start, grid.goal


# =============================================================================
# Reindeer Maze
# =============================================================================


REINDEER_MOVES = TransitionConfig(Topology.ROTATE_THEN_MOVE, turn_cost=1000, move_cost=1)


def solve_reindeer_maze(grid: Grid) -> SearchResult:
    """Lowest score from the start, facing east, to the goal in any facing."""
    start, goal = _require_markers(grid)
    return solve(grid, start_states(start, Direction.E), goal_at(goal), REINDEER_MOVES)


def reindeer_maze(text: str, part: int) -> Answer:
    _check_part(part)
    result = solve_reindeer_maze(parse_maze(text))
    if not result.reachable:
        return UNREACHABLE
    return result.minimum_cost if part == 1 else result.path_cell_count


# =============================================================================
# Crucible
# =============================================================================


# (min_run, max_run) per part
CRUCIBLE_RUNS = {1: (1, 3), 2: (4, 10)}


def crucible_moves(min_run: int, max_run: int) -> TransitionConfig:
    return TransitionConfig(Topology.TURN_AND_MOVE, min_run=min_run, max_run=max_run)


def solve_crucible(grid: Grid, min_run: int, max_run: int) -> SearchResult:
    """Least heat loss from the top-left to the bottom-right block."""
    start, goal = _require_markers(grid)
    return solve(
        grid,
        start_states(start),
        goal_at(goal, min_run),
        crucible_moves(min_run, max_run),
    )


def crucible(text: str, part: int) -> Answer:
    _check_part(part)
    min_run, max_run = CRUCIBLE_RUNS[part]
    return _cost_or_none(solve_crucible(parse_cost_grid(text), min_run, max_run))


# =============================================================================
# Memory Maze
# =============================================================================


MEMORY_SIZE = 71
MEMORY_FALLEN = 1024

STEP_MOVES = TransitionConfig(Topology.FREE, move_cost=1)


def shortest_escape(grid: Grid) -> SearchResult:
    start, goal = _require_markers(grid)
    return solve(grid, start_states(start), goal_at(goal), STEP_MOVES)


def first_blocking_byte(coordinates: list[Position], size: int) -> Position | None:
    """
    The first falling byte after which the exit can't be reached.

    Reachability only ever gets worse as bytes fall, so the byte count is found
    by bisection. None if the exit stays reachable after every byte.
    """

    def reachable(count: int) -> bool:
        return shortest_escape(corrupted_grid(coordinates, size, count)).reachable

    if not coordinates or reachable(len(coordinates)):
        return None

    # Invariant: reachable after `lo` bytes, not after `hi`
    lo, hi = 0, len(coordinates)
    while hi - lo > 1:
        mid = (lo + hi) // 2
        if reachable(mid):
            lo = mid
        else:
            hi = mid

    logger.debug("first_blocking_byte: exit cut off after %d bytes", hi)
    return coordinates[hi - 1]


def memory_maze(
    text: str, part: int, size: int = MEMORY_SIZE, fallen: int = MEMORY_FALLEN
) -> Answer:
    _check_part(part)
    coordinates = parse_coordinates(text)
    if part == 1:
        return _cost_or_none(shortest_escape(corrupted_grid(coordinates, size, fallen)))

    blocker = first_blocking_byte(coordinates, size)
    if blocker is None:
        return UNREACHABLE
    return f"{blocker.col},{blocker.row}"


# =============================================================================
# Hill Climb
# =============================================================================


def climb_cost(grid: Grid, source: Position, destination: Position) -> int | None:
    """One step, allowed when it climbs at most one unit of height."""
    from_height = grid.at(source)
    to_height = grid.at(destination)
    assert isinstance(from_height, int) and isinstance(to_height, int)
    return 1 if to_height - from_height <= 1 else None


CLIMB_MOVES = TransitionConfig(Topology.FREE, move_cost=climb_cost)


def lowest_cells(grid: Grid) -> list[Position]:
    return list(grid.find(0))


def solve_hill_climb(grid: Grid, from_anywhere_low: bool = False) -> SearchResult:
    """
    Fewest steps up to the goal.

    With from_anywhere_low, every lowest cell is seeded at once, which gives the
    best trailhead in a single search.
    """
    start, goal = _require_markers(grid)
    starts = lowest_cells(grid) if from_anywhere_low else [start]
    return solve(grid, start_states(starts), goal_at(goal), CLIMB_MOVES)


def trailhead_costs(grid: Grid, workers: int | None = None) -> dict[Position, int | None]:
    """Steps to the goal from each lowest cell, searched independently."""
    _, goal = _require_markers(grid)
    results = solve_each(
        grid, start_states(lowest_cells(grid)), goal_at(goal), CLIMB_MOVES, workers=workers
    )
    return {state.position: result.minimum_cost for state, result in results.items()}


def hill_climb(text: str, part: int) -> Answer:
    _check_part(part)
    grid = parse_height_map(text)
    return _cost_or_none(solve_hill_climb(grid, from_anywhere_low=part == 2))


# =============================================================================
# Registry
# =============================================================================


PUZZLES: dict[str, PuzzleFn] = {
    "reindeer-maze": reindeer_maze,
    "crucible": crucible,
    "memory-maze": memory_maze,
    "hill-climb": hill_climb,
}

# "year-day" aliases
DAYS: dict[str, str] = {
    "2024-16": "reindeer-maze",
    "2023-17": "crucible",
    "2024-18": "memory-maze",
    "2022-12": "hill-climb",
}


def lookup(name: str) -> PuzzleFn:
    """Find a puzzle by name or "year-day" alias."""
    key = DAYS.get(name, name)
    if key not in PUZZLES:
        known = ", ".join(sorted([*PUZZLES, *DAYS]))
        raise KeyError(f"Unknown puzzle '{name}' (known: {known})")
    return PUZZLES[key]


def run(name: str, part: int, text: str) -> Answer:
    return lookup(name)(text, part)
