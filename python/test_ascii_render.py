"""Tests for ascii_render module."""

from ascii_render import (
    PATH_CHAR,
    default_cell_char,
    describe_result,
    height_char,
    render_grid,
    render_result,
)
from grid_parser import parse_cost_grid, parse_height_map, parse_maze
from grid_types import Direction, Position, Terrain
from puzzles import shortest_escape
from turnpath import SearchResult, SearchState


def test_cell_chars() -> None:
    assert default_cell_char(Terrain.WALL) == "#"
    assert default_cell_char(Terrain.OPEN) == "."
    assert default_cell_char(7) == "7"
    assert default_cell_char(12) == "2"


def test_height_chars() -> None:
    assert height_char(0) == "a"
    assert height_char(25) == "z"
    assert height_char(Terrain.WALL) == "#"


def test_render_plain_maze() -> None:
    grid = parse_maze("#####\n#S.E#\n#####")
    assert render_grid(grid, plain=True) == "#####\n#S.E#\n#####"


def test_render_plain_highlight() -> None:
    grid = parse_maze("#####\n#S.E#\n#####")
    highlight = {Position(1, 1), Position(1, 2), Position(1, 3)}
    assert render_grid(grid, highlight, plain=True) == f"#####\n#S{PATH_CHAR}E#\n#####"


def test_render_cost_grid() -> None:
    grid = parse_cost_grid("19\n23")
    assert render_grid(grid, plain=True) == "S9\n2E"


def test_render_height_map() -> None:
    grid = parse_height_map("Sbc\nzyE")
    assert render_grid(grid, plain=True, cell_char=height_char) == "Sbc\nzyE"


def test_render_colored_keeps_layout() -> None:
    grid = parse_maze("S.\n.E")
    rendered = render_grid(grid, {Position(0, 1)})
    assert len(rendered.splitlines()) == 2
    assert "S" in rendered and "E" in rendered


def test_describe_unreachable() -> None:
    assert describe_result(SearchResult(None, expanded=3)) == "unreachable (expanded 3 states)"


def test_describe_reachable() -> None:
    result = SearchResult(
        4,
        frozenset({Position(0, 0), Position(0, 1), Position(1, 1)}),
        (SearchState(Position(1, 1), Direction.S, 1),),
        5,
    )
    assert describe_result(result) == (
        "cost 4, 3 cells on optimal paths, 1 goal state(s), expanded 5 states"
    )


def test_render_result() -> None:
    grid = parse_maze("#####\n#S.E#\n#####")
    lines = render_result(grid, shortest_escape(grid), plain=True).splitlines()
    assert lines[:3] == ["#####", "#SOE#", "#####"]
    assert lines[3].startswith("cost 2, 3 cells on optimal paths")
