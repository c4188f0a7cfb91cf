"""
Grid parsing utilities for turnpath.

Provides one parser per puzzle input format:
1. Mazes drawn with walls, open floor and start/goal markers
2. Digit grids where each digit is the cost of entering the cell
3. Height maps with letters for heights
4. Coordinate lists that corrupt an otherwise open grid
"""

from __future__ import annotations

from grid_types import Cell, Grid, MalformedGrid, Position, Terrain

__all__ = [
    "parse_maze",
    "parse_cost_grid",
    "parse_height_map",
    "parse_coordinates",
    "corrupted_grid",
]


def _lines(text: str) -> list[str]:
    """
    Grid lines with surrounding whitespace removed.

    Leading and trailing blank lines are dropped. A blank line inside the grid
    is kept as an empty row, which the Grid rejects as a ragged row.
    """
    lines = [line.strip() for line in text.strip().splitlines()]
    if not lines:
        raise MalformedGrid("Empty input: no grid lines found")
    return lines


def _single_marker(
    found: list[Position], marker: str, required: bool = True
) -> Position | None:
    if len(found) > 1:
        where = ", ".join(f"({p.row}, {p.col})" for p in found)
        raise MalformedGrid(
            f"Multiple '{marker}' markers\n"
            f"  Found at: {where}\n"
            f"  Exactly one '{marker}' is allowed"
        )
    if not found:
        if required:
            raise MalformedGrid(f"No '{marker}' marker found")
        return None
    return found[0]


def _invalid_character(char: str, row_idx: int, col_idx: int, line: str, valid: str) -> MalformedGrid:
    return MalformedGrid(
        f"Invalid character '{char}'\n"
        f"  Row {row_idx}: \"{line}\"\n"
        f"  Position: column {col_idx}\n"
        f"  Valid characters: {valid}"
    )


def parse_maze(text: str) -> Grid:
    """
    Parse a maze drawn with single characters.

    Format:
    - '#': Wall
    - '.': Open floor
    - 'S': Start (open floor, exactly one)
    - 'E': Goal (open floor, exactly one)

    Example:
        \"\"\"
        #####
        #S.E#
        #####
        \"\"\"
        Creates a 3x5 grid with start (1, 1) and goal (1, 3).

    Raises:
        MalformedGrid: On unknown characters, missing or repeated markers,
            or rows of differing lengths
    """
    rows: list[tuple[Cell, ...]] = []
    starts: list[Position] = []
    goals: list[Position] = []

    for row_idx, line in enumerate(_lines(text)):
        cells: list[Cell] = []
        for col_idx, char in enumerate(line):
            if char == "#":
                cells.append(Terrain.WALL)
            elif char == ".":
                cells.append(Terrain.OPEN)
            elif char == "S":
                starts.append(Position(row_idx, col_idx))
                cells.append(Terrain.OPEN)
            elif char == "E":
                goals.append(Position(row_idx, col_idx))
                cells.append(Terrain.OPEN)
            else:
                raise _invalid_character(char, row_idx, col_idx, line, "'#', '.', 'S', 'E'")
        rows.append(tuple(cells))

    return Grid(tuple(rows), _single_marker(starts, "S"), _single_marker(goals, "E"))


def parse_cost_grid(text: str) -> Grid:
    """
    Parse a grid of single-digit entry costs.

    The start is the top-left cell and the goal the bottom-right cell.

    Example:
        \"\"\"
        241
        321
        \"\"\"
        Creates a 2x3 grid, start (0, 0), goal (1, 2).
    """
    rows: list[tuple[Cell, ...]] = []
    for row_idx, line in enumerate(_lines(text)):
        cells: list[Cell] = []
        for col_idx, char in enumerate(line):
            if not char.isdigit():
                raise _invalid_character(char, row_idx, col_idx, line, "digits (0-9)")
            cells.append(int(char))
        rows.append(tuple(cells))

    height = len(rows)
    width = len(rows[0])
    return Grid(tuple(rows), Position(0, 0), Position(height - 1, width - 1))


def parse_height_map(text: str) -> Grid:
    """
    Parse a height map where 'a' to 'z' are heights 0 to 25.

    'S' marks the start at height 0 and 'E' the goal at height 25.
    """
    rows: list[tuple[Cell, ...]] = []
    starts: list[Position] = []
    goals: list[Position] = []

    for row_idx, line in enumerate(_lines(text)):
        cells: list[Cell] = []
        for col_idx, char in enumerate(line):
            if char == "S":
                starts.append(Position(row_idx, col_idx))
                cells.append(0)
            elif char == "E":
                goals.append(Position(row_idx, col_idx))
                cells.append(25)
            elif "a" <= char <= "z":
                cells.append(ord(char) - ord("a"))
            else:
                raise _invalid_character(char, row_idx, col_idx, line, "'a'-'z', 'S', 'E'")
        rows.append(tuple(cells))

    return Grid(tuple(rows), _single_marker(starts, "S"), _single_marker(goals, "E"))


def parse_coordinates(text: str) -> list[Position]:
    """Parse lines of "x,y" into positions (x is the column, y the row)."""
    positions: list[Position] = []
    for line_idx, line in enumerate(text.strip().splitlines()):
        line = line.strip()
        if not line:
            continue
        parts = line.split(",")
        if len(parts) != 2:
            raise MalformedGrid(
                f"Invalid coordinate on line {line_idx + 1}: '{line}'\n"
                f"  Expected format: 'x,y'"
            )
        try:
            col, row = (int(part) for part in parts)
        except ValueError:
            raise MalformedGrid(
                f"Invalid coordinate on line {line_idx + 1}: '{line}'\n"
                f"  Both x and y must be integers"
            ) from None
        positions.append(Position(row, col))
    return positions


def corrupted_grid(coordinates: list[Position], size: int, count: int) -> Grid:
    """
    An open size x size grid with the first `count` coordinates walled off.

    The start is the top-left cell and the goal the bottom-right cell.
    Coordinates outside the grid are ignored.
    """
    if size <= 0:
        raise MalformedGrid(f"Grid size must be positive, got {size}")

    walls = {pos for pos in coordinates[:count] if 0 <= pos.row < size and 0 <= pos.col < size}
    rows = tuple(
        tuple(
            Terrain.WALL if Position(row, col) in walls else Terrain.OPEN
            for col in range(size)
        )
        for row in range(size)
    )
    return Grid(rows, Position(0, 0), Position(size - 1, size - 1))
