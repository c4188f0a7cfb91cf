"""
Interactive demo for turnpath.
Display a sample grid with its optimal paths and re-solve as the movement
rules change.
"""

from dataclasses import dataclass, replace
import logging

import readchar, sys
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

import samples
from ascii_render import describe_result, render_grid
from grid_parser import parse_cost_grid, parse_maze
from grid_types import Direction, Grid
from puzzles import REINDEER_MOVES, crucible_moves
from turnpath import (
    InvalidConfiguration,
    SearchResult,
    TransitionConfig,
    goal_at,
    solve,
    start_states,
)


@dataclass(frozen=True)
class Layout:
    """A sample grid with the rules it starts out with."""

    grid: Grid
    config: TransitionConfig
    facing: Direction | None = None


LAYOUTS = dict(
    maze=Layout(parse_maze(samples.REINDEER_MAZE), REINDEER_MOVES, Direction.E),
    crucible=Layout(parse_cost_grid(samples.CRUCIBLE), crucible_moves(1, 3)),
    ultra=Layout(parse_cost_grid(samples.CRUCIBLE_ULTRA), crucible_moves(4, 10)),
)


class InteractiveDemo:
    """Interactive demo for changing movement rules."""

    def __init__(self, layout: Layout) -> None:
        self.layout = layout
        self.config = layout.config
        self.show_paths = True
        self.console = Console()
        self.status_message = "Ready"
        self.result = self.search()

    def search(self) -> SearchResult:
        grid = self.layout.grid
        assert grid.start is not None and grid.goal is not None
        return solve(
            grid,
            start_states(grid.start, self.layout.facing),
            goal_at(grid.goal, self.config.min_run),
            self.config,
        )

    def generate_display(self) -> Panel:
        """Generate the current display with grid and status."""
        highlight = self.result.optimal_cells if self.show_paths else frozenset()
        grid_text = render_grid(self.layout.grid, highlight)

        status = Text()
        status.append("Rules: ", style="bold")
        status.append(
            f"{self.config.topology.value}, runs {self.config.min_run}.."
            f"{'∞' if self.config.max_run is None else self.config.max_run}, "
            f"turn cost {self.config.turn_cost}\n"
        )
        status.append("Result: ", style="bold")
        status.append(f"{describe_result(self.result)}\n\n")

        # Chalk output is ANSI-coded
        status.append(Text.from_ansi(grid_text))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  [ / ] - Min run down / up\n")
        status.append("  - / = - Max run down / up\n")
        status.append("  , / . - Turn cost down / up (by 100)\n")
        status.append("  P - Toggle optimal path overlay\n")
        status.append("  R - Reset rules\n")
        status.append("  Q - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="turnpath Interactive Demo", border_style="green", width=80)

    def change_rules(self, **changes: int | None) -> None:
        """Re-solve with changed rules, keeping the old ones if they're invalid."""
        candidate = replace(self.config, **changes)
        try:
            candidate.validate()
        except InvalidConfiguration as error:
            self.status_message = f"✗ {str(error).splitlines()[-1].strip(' -')}"
            return

        self.config = candidate
        self.result = self.search()
        self.status_message = f"✓ Re-solved: {describe_result(self.result)}"

    def adjust_max_run(self, delta: int) -> None:
        current = self.config.max_run
        if current is None:
            self.status_message = "✗ Max run is unbounded for these rules"
            return
        self.change_rules(max_run=current + delta)

    def reset_rules(self) -> None:
        self.config = self.layout.config
        self.result = self.search()
        self.status_message = "Rules reset"

    def run(self) -> None:
        """Run the interactive demo."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())

                    key = readchar.readkey()

                    if key.lower() == 'q':
                        self.status_message = "Quitting..."
                        live.update(self.generate_display())
                        break
                    elif key.lower() == 'r':
                        self.reset_rules()
                    elif key.lower() == 'p':
                        self.show_paths = not self.show_paths
                    elif key == '[':
                        self.change_rules(min_run=self.config.min_run - 1)
                    elif key == ']':
                        self.change_rules(min_run=self.config.min_run + 1)
                    elif key == '-':
                        self.adjust_max_run(-1)
                    elif key == '=':
                        self.adjust_max_run(1)
                    elif key == ',':
                        self.change_rules(turn_cost=self.config.turn_cost - 100)
                    elif key == '.':
                        self.change_rules(turn_cost=self.config.turn_cost + 100)
                    else:
                        self.status_message = f"Unknown key: {repr(key)}"

            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == 'sublime':
        # Running from IDE - just render the initial state
        logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')

        print('Running from IDE - rendering initial state')
        print()

        demo = InteractiveDemo(LAYOUTS[sys.argv[2] if len(sys.argv) > 2 else 'maze'])
        print(render_grid(demo.layout.grid, demo.result.optimal_cells))
        print(describe_result(demo.result))
    else:
        InteractiveDemo(LAYOUTS[sys.argv[1] if len(sys.argv) > 1 else 'crucible']).run()
