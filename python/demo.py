"""
Demonstration scripts for the turnpath search engine.
"""

import logging
import sys

import samples
from ascii_render import height_char, render_result
from grid_parser import corrupted_grid, parse_coordinates, parse_cost_grid, parse_height_map, parse_maze
from puzzles import (
    CRUCIBLE_RUNS,
    first_blocking_byte,
    shortest_escape,
    solve_crucible,
    solve_hill_climb,
    solve_reindeer_maze,
    trailhead_costs,
)


def heading(title: str) -> None:
    print(title)
    print("-" * 40)


def demo_reindeer_maze() -> None:
    """Rotate-then-move: every lowest-score path through the maze."""
    heading("Reindeer maze (turn 1000, step 1)")
    grid = parse_maze(samples.REINDEER_MAZE)
    print(render_result(grid, solve_reindeer_maze(grid)))
    print()


def demo_crucible() -> None:
    """Turn-and-move with run-length limits, both crucible sizes."""
    grid = parse_cost_grid(samples.CRUCIBLE)
    for part, (min_run, max_run) in CRUCIBLE_RUNS.items():
        heading(f"Crucible part {part} (runs {min_run}..{max_run})")
        print(render_result(grid, solve_crucible(grid, min_run, max_run)))
        print()


def demo_memory_maze() -> None:
    """Plain shortest path, then the byte that cuts the exit off."""
    heading("Memory maze")
    coordinates = parse_coordinates(samples.MEMORY)
    grid = corrupted_grid(coordinates, samples.MEMORY_SIZE, samples.MEMORY_FALLEN)
    print(render_result(grid, shortest_escape(grid)))
    blocker = first_blocking_byte(coordinates, samples.MEMORY_SIZE)
    print(f"First blocking byte: {'none' if blocker is None else f'{blocker.col},{blocker.row}'}")
    print()


def demo_hill_climb() -> None:
    """Single start versus every lowest cell."""
    heading("Hill climb")
    grid = parse_height_map(samples.HILL)
    print(render_result(grid, solve_hill_climb(grid), cell_char=height_char))
    print()
    heading("Hill climb from any lowest cell")
    print(render_result(grid, solve_hill_climb(grid, from_anywhere_low=True), cell_char=height_char))
    costs = trailhead_costs(grid)
    reachable = {pos: cost for pos, cost in costs.items() if cost is not None}
    print(f"{len(reachable)} of {len(costs)} trailheads reach the goal")
    print()


def demo() -> None:
    demo_reindeer_maze()
    demo_crucible()
    demo_memory_maze()
    demo_hill_climb()


if __name__ == "__main__":
    if "--verbose" in sys.argv:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    demo()
