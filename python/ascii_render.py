"""
ASCII rendering for turnpath grids and search results.

Walls, open floor and cost digits are drawn one character per cell. Cells on
an optimal path are highlighted, and start and goal are marked 'S' and 'E'.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from simple_chalk import chalk  # type: ignore[import-untyped]

from grid_types import Cell, Grid, Position, Terrain
from turnpath import SearchResult

logger = logging.getLogger(__name__)

# Drawn for highlighted cells in plain output
PATH_CHAR = "O"


def default_cell_char(cell: Cell) -> str:
    """'#' for walls, '.' for open floor, the last digit of a cost."""
    if cell is Terrain.WALL:
        return "#"
    if cell is Terrain.OPEN:
        return "."
    return str(cell)[-1]


def height_char(cell: Cell) -> str:
    """Heights 0-25 as 'a'-'z'."""
    if isinstance(cell, int) and 0 <= cell < 26:
        return chr(ord("a") + cell)
    return default_cell_char(cell)


def render_grid(
    grid: Grid,
    highlight: Iterable[Position] = (),
    plain: bool = False,
    cell_char: Callable[[Cell], str] = default_cell_char,
) -> str:
    """
    Render a grid to a string, one line per row.

    Args:
        grid: The grid to draw
        highlight: Positions to highlight (typically optimal path cells)
        plain: Without colors; highlighted cells are then drawn as PATH_CHAR
        cell_char: Maps a cell payload to its character

    Returns:
        Rendered string, with ANSI color codes unless plain
    """
    highlighted = frozenset(highlight)

    def draw(pos: Position) -> str:
        cell = grid.at(pos)
        assert cell is not None
        if pos == grid.start:
            return "S" if plain else chalk.yellowBright("S")
        if pos == grid.goal:
            return "E" if plain else chalk.yellowBright("E")
        char = cell_char(cell)
        if pos in highlighted:
            return PATH_CHAR if plain else chalk.greenBright(char)
        if plain:
            return char
        if cell is Terrain.WALL:
            return chalk.blue(char)
        return chalk.white(char)

    lines = [
        "".join(draw(Position(row, col)) for col in range(grid.width))
        for row in range(grid.height)
    ]

    logger.info(
        "render_grid: %dx%d, highlighted=%d, plain=%s",
        grid.height,
        grid.width,
        len(highlighted),
        plain,
    )
    return "\n".join(lines)


def describe_result(result: SearchResult) -> str:
    """One-line summary of a search result."""
    if not result.reachable:
        return f"unreachable (expanded {result.expanded} states)"
    return (
        f"cost {result.minimum_cost}, {result.path_cell_count} cells on optimal paths, "
        f"{len(result.goal_states)} goal state(s), expanded {result.expanded} states"
    )


def render_result(
    grid: Grid,
    result: SearchResult,
    plain: bool = False,
    cell_char: Callable[[Cell], str] = default_cell_char,
) -> str:
    """Grid with the optimal path cells highlighted, followed by a summary line."""
    return render_grid(grid, result.optimal_cells, plain, cell_char) + "\n" + describe_result(result)
