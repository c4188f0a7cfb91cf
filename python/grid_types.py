"""
Shared type definitions for the turnpath system.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator


class Direction(Enum):
    """Cardinal direction for movement."""

    N = "N"  # Up (decreasing row)
    E = "E"  # Right (increasing col)
    S = "S"  # Down (increasing row)
    W = "W"  # Left (decreasing col)

    @property
    def delta(self) -> tuple[int, int]:
        """(row, col) offset of one step in this direction."""
        return _DELTAS[self]

    def turn_left(self) -> Direction:
        return _CLOCKWISE[(_CLOCKWISE.index(self) - 1) % 4]

    def turn_right(self) -> Direction:
        return _CLOCKWISE[(_CLOCKWISE.index(self) + 1) % 4]


_CLOCKWISE = (Direction.N, Direction.E, Direction.S, Direction.W)

_DELTAS = {
    Direction.N: (-1, 0),
    Direction.S: (1, 0),
    Direction.E: (0, 1),
    Direction.W: (0, -1),
}


class MalformedGrid(ValueError):
    """Grid input is empty, non-rectangular or contains unknown cells."""


# =============================================================================
# Grid Definition Types
# =============================================================================


class Terrain(Enum):
    """Non-numeric cell payload."""

    OPEN = "."
    WALL = "#"


# An int is a traversal cost (or a payload read by a custom cost function)
Cell = int | Terrain


@dataclass(frozen=True, order=True)
class Position:
    """A (row, col) coordinate. Not necessarily inside any grid."""

    row: int
    col: int

    def moved(self, direction: Direction, steps: int = 1) -> Position:
        dr, dc = direction.delta
        return Position(self.row + dr * steps, self.col + dc * steps)


@dataclass(frozen=True)
class Grid:
    """An immutable rectangular grid of cells with optional start and goal."""

    cells: tuple[tuple[Cell, ...], ...]
    start: Position | None = None
    goal: Position | None = None

    def __post_init__(self) -> None:
        if not self.cells or not self.cells[0]:
            raise MalformedGrid("Grid must have at least one row and one column")

        width = len(self.cells[0])
        mismatched = [(i, len(row)) for i, row in enumerate(self.cells) if len(row) != width]
        if mismatched:
            error_msg = (
                f"Inconsistent row lengths\n"
                f"  Expected: {width} columns (from row 0)\n"
                f"  Mismatched rows:\n"
            )
            for row_idx, actual_cols in mismatched:
                error_msg += f"    Row {row_idx}: {actual_cols} columns\n"
            error_msg += "  All rows must have the same number of cells"
            raise MalformedGrid(error_msg)

        for label, pos in (("start", self.start), ("goal", self.goal)):
            if pos is not None and not self.in_bounds(pos):
                raise MalformedGrid(
                    f"The {label} position ({pos.row}, {pos.col}) is outside "
                    f"the {self.height}x{self.width} grid"
                )

    @property
    def height(self) -> int:
        return len(self.cells)

    @property
    def width(self) -> int:
        return len(self.cells[0])

    def in_bounds(self, position: Position) -> bool:
        return 0 <= position.row < self.height and 0 <= position.col < self.width

    def at(self, position: Position) -> Cell | None:
        """Cell payload, or None when the position is off the grid."""
        if not self.in_bounds(position):
            return None
        return self.cells[position.row][position.col]

    def cost(self, position: Position) -> int | None:
        """Cost of entering a cell, or None when it is off the grid or a wall."""
        cell = self.at(position)
        if cell is None or cell is Terrain.WALL:
            return None
        if cell is Terrain.OPEN:
            return 1
        return cell

    def positions(self) -> Iterator[Position]:
        """All positions in row-major order."""
        for row in range(self.height):
            for col in range(self.width):
                yield Position(row, col)

    def find(self, cell: Cell) -> Iterator[Position]:
        """Positions holding the given payload, in row-major order."""
        for pos in self.positions():
            if self.at(pos) == cell:
                yield pos
