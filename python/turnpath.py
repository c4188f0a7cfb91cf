"""
Shortest-path search over grids with facing and run-length constraints.

A search vertex is a SearchState: a grid position, the direction being faced and
the number of consecutive moves already made in that direction. A pluggable
transition function yields the legal (next state, edge cost) pairs and a goal
predicate decides when a popped state counts as arrived.

The search is Dijkstra with lazy deletion. Every predecessor that ties the best
cost into a state is recorded, so the result carries not just the minimum cost
but every cell lying on any cost-optimal path.
"""

from __future__ import annotations

import heapq
import logging
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from itertools import count
from typing import Callable, Iterable, Iterator

from grid_types import Direction, Grid, Position

logger = logging.getLogger(__name__)


class Topology(Enum):
    """How turning relates to moving."""

    ROTATE_THEN_MOVE = "rotate_then_move"  # Turning is its own step, in place
    TURN_AND_MOVE = "turn_and_move"  # Every step moves; a turn changes where it goes
    FREE = "free"  # Undirected four-way movement, no facing at all


class Relaxation(Enum):
    """Outcome of offering a candidate cost for a state."""

    IMPROVED = "improved"  # New best cost, predecessors replaced
    TIED = "tied"  # Equal to best cost, predecessor added
    WORSE = "worse"  # Discarded


class InvalidConfiguration(ValueError):
    """Transition configuration can't describe a sensible search."""


# =============================================================================
# State Model
# =============================================================================


@dataclass(frozen=True)
class SearchState:
    """A search vertex: position plus facing and run-length."""

    position: Position
    facing: Direction | None = None  # None = undirected
    run_length: int = 0  # Consecutive moves already made in `facing`


# Yields the legal (next_state, edge_cost) pairs from a state
Transitions = Callable[[Grid, SearchState], Iterable[tuple[SearchState, int]]]

# Decides whether a popped state counts as arrived
GoalFn = Callable[[SearchState], bool]

# Cost of moving between adjacent positions, None when the move is illegal
MoveCostFn = Callable[[Grid, Position, Position], int | None]


def cell_cost(grid: Grid, source: Position, destination: Position) -> int | None:
    """Default move cost: the traversal cost of the destination cell."""
    return grid.cost(destination)


@dataclass(frozen=True)
class TransitionConfig:
    """
    Built-in transition function, configured per puzzle variant.

    Straight moves are legal while run_length < max_run. Turns are legal when
    run_length is 0 (a fresh start or just rotated) or at least min_run. Moves
    never leave the grid or enter a wall, whatever move_cost says.

    Run-lengths are stored clamped to max_run, or to min_run when max_run is
    None, since beyond that bound they no longer change which moves are legal.
    """

    topology: Topology = Topology.ROTATE_THEN_MOVE
    min_run: int = 0
    max_run: int | None = None
    turn_cost: int = 0
    move_cost: int | MoveCostFn = cell_cost

    def validate(self) -> None:
        """Raise InvalidConfiguration if these settings can't drive a search."""
        problems: list[str] = []
        if self.min_run < 0:
            problems.append(f"min_run must be non-negative, got {self.min_run}")
        if self.max_run is not None:
            if self.max_run < 0:
                problems.append(f"max_run must be non-negative, got {self.max_run}")
            elif self.min_run > self.max_run:
                problems.append(
                    f"min_run ({self.min_run}) is greater than max_run ({self.max_run})"
                )
            elif self.max_run == 0 and self.topology is not Topology.FREE:
                problems.append("max_run of 0 leaves no legal moves in a directed topology")
        if self.turn_cost < 0:
            problems.append(f"turn_cost must be non-negative, got {self.turn_cost}")
        if isinstance(self.move_cost, int) and self.move_cost < 0:
            problems.append(f"move_cost must be non-negative, got {self.move_cost}")
        if self.topology is Topology.FREE and (
            self.min_run or self.max_run is not None or self.turn_cost
        ):
            problems.append("FREE topology has no facing, so run limits and turn_cost don't apply")

        if problems:
            error_msg = "Invalid transition configuration\n"
            for problem in problems:
                error_msg += f"  - {problem}\n"
            raise InvalidConfiguration(error_msg.rstrip("\n"))

    @property
    def run_bound(self) -> int:
        """Largest run_length ever stored in a state."""
        return self.max_run if self.max_run is not None else self.min_run

    def can_continue(self, state: SearchState) -> bool:
        return self.max_run is None or state.run_length < self.max_run

    def can_turn(self, state: SearchState) -> bool:
        return state.run_length == 0 or state.run_length >= self.min_run

    def step_cost(self, grid: Grid, source: Position, destination: Position) -> int | None:
        """Cost of one move, or None if it isn't allowed."""
        if grid.cost(destination) is None:
            return None
        if isinstance(self.move_cost, int):
            return self.move_cost
        return self.move_cost(grid, source, destination)

    def _move(
        self,
        grid: Grid,
        state: SearchState,
        facing: Direction | None,
        direction: Direction,
        run_length: int,
    ) -> tuple[SearchState, int] | None:
        destination = state.position.moved(direction)
        cost = self.step_cost(grid, state.position, destination)
        if cost is None:
            return None
        return SearchState(destination, facing, min(run_length, self.run_bound)), cost

    def __call__(self, grid: Grid, state: SearchState) -> Iterator[tuple[SearchState, int]]:
        if self.topology is Topology.FREE:
            for direction in Direction:
                step = self._move(grid, state, None, direction, 0)
                if step is not None:
                    yield step
            return

        if state.facing is None:
            # Undirected start: any facing, no turn cost
            for direction in Direction:
                if self.topology is Topology.ROTATE_THEN_MOVE:
                    yield SearchState(state.position, direction, 0), 0
                else:
                    step = self._move(grid, state, direction, direction, 1)
                    if step is not None:
                        yield step
            return

        if self.can_continue(state):
            step = self._move(grid, state, state.facing, state.facing, state.run_length + 1)
            if step is not None:
                yield step

        if not self.can_turn(state):
            return

        for facing in (state.facing.turn_left(), state.facing.turn_right()):
            if self.topology is Topology.ROTATE_THEN_MOVE:
                yield SearchState(state.position, facing, 0), self.turn_cost
            else:
                step = self._move(grid, state, facing, facing, 1)
                if step is not None:
                    next_state, move_cost = step
                    yield next_state, move_cost + self.turn_cost


def start_states(
    positions: Position | Iterable[Position], facing: Direction | None = None
) -> list[SearchState]:
    """Fresh search states (run_length 0) at each position."""
    if isinstance(positions, Position):
        positions = [positions]
    return [SearchState(pos, facing, 0) for pos in positions]


def goal_at(goals: Position | Iterable[Position], min_run: int = 0) -> GoalFn:
    """
    Goal predicate: at one of the goal positions, able to stop there.

    A state can stop where it could legally turn, i.e. its run_length is 0 or at
    least min_run. This exempts start states the same way the turn rule does.
    """
    targets = frozenset([goals] if isinstance(goals, Position) else goals)

    def is_goal(state: SearchState) -> bool:
        return state.position in targets and (
            state.run_length == 0 or state.run_length >= min_run
        )

    return is_goal


# =============================================================================
# Frontier & Record Tables
# =============================================================================


class Frontier:
    """
    Min-heap of (cost, seq, state).

    There is no decrease-key: a cheaper path is pushed as a new entry and the
    old one goes stale. The sequence number keeps equal costs FIFO and stops
    the heap from ever comparing states.
    """

    def __init__(self) -> None:
        self._heap: list[tuple[int, int, SearchState]] = []
        self._seq = count()

    def push(self, cost: int, state: SearchState) -> None:
        heapq.heappush(self._heap, (cost, next(self._seq), state))

    def pop(self) -> tuple[int, SearchState]:
        cost, _, state = heapq.heappop(self._heap)
        return cost, state

    def __len__(self) -> int:
        return len(self._heap)


class CostRecord:
    """
    Best known cost per state, with every predecessor achieving it.

    Best costs only ever go down. On a strict improvement the predecessor set
    is replaced by the one new predecessor; on a tie the predecessor is added.
    Keeping all tied predecessors is what lets every optimal path be recovered.
    """

    def __init__(self) -> None:
        self._best: dict[SearchState, int] = {}
        self._predecessors: dict[SearchState, set[SearchState]] = {}

    def seed(self, state: SearchState) -> bool:
        """Record a start state at cost 0. False if it was already recorded."""
        if self._best.get(state) == 0:
            return False
        self._best[state] = 0
        self._predecessors[state] = set()
        return True

    def relax(self, state: SearchState, cost: int, predecessor: SearchState) -> Relaxation:
        best = self._best.get(state)
        if best is None or cost < best:
            self._best[state] = cost
            self._predecessors[state] = {predecessor}
            return Relaxation.IMPROVED
        if cost == best:
            self._predecessors[state].add(predecessor)
            return Relaxation.TIED
        return Relaxation.WORSE

    def best_cost(self, state: SearchState) -> int | None:
        return self._best.get(state)

    def predecessors(self, state: SearchState) -> frozenset[SearchState]:
        return frozenset(self._predecessors.get(state, ()))

    def states_on_paths_to(self, states: Iterable[SearchState]) -> set[SearchState]:
        """Every state reachable backwards from `states` through predecessor sets."""
        seen = set(states)
        queue = deque(seen)
        while queue:
            state = queue.popleft()
            for predecessor in self._predecessors.get(state, ()):
                if predecessor not in seen:
                    seen.add(predecessor)
                    queue.append(predecessor)
        return seen

    def __contains__(self, state: object) -> bool:
        return state in self._best

    def __len__(self) -> int:
        return len(self._best)


def is_stale(cost: int, state: SearchState, records: CostRecord) -> bool:
    """True if a cheaper path to `state` was recorded after this entry was pushed."""
    best = records.best_cost(state)
    assert best is not None and cost >= best, (
        f"Popped {state} at cost {cost} but its record is {best}"
    )
    return cost > best


# =============================================================================
# Result Extraction
# =============================================================================


@dataclass(frozen=True)
class SearchResult:
    """Outcome of one search. minimum_cost is None when the goal is unreachable."""

    minimum_cost: int | None
    optimal_cells: frozenset[Position] = frozenset()
    goal_states: tuple[SearchState, ...] = ()
    expanded: int = 0  # States popped and expanded

    @property
    def reachable(self) -> bool:
        return self.minimum_cost is not None

    @property
    def path_cell_count(self) -> int:
        return len(self.optimal_cells)


def extract_result(
    records: CostRecord, goal_states: Iterable[SearchState], expanded: int = 0
) -> SearchResult:
    """
    Build the result from the goal states reached.

    Keeps the goal states at the minimal cost, walks predecessor sets back from
    them and projects every state visited onto its grid position.
    """
    reached = list(goal_states)
    if not reached:
        return SearchResult(None, expanded=expanded)

    costs = {state: records.best_cost(state) for state in reached}
    minimum = min(c for c in costs.values() if c is not None)
    finals = tuple(state for state in reached if costs[state] == minimum)
    on_paths = records.states_on_paths_to(finals)
    return SearchResult(
        minimum,
        frozenset(state.position for state in on_paths),
        finals,
        expanded,
    )


# =============================================================================
# Search Driver
# =============================================================================


def solve(
    grid: Grid,
    starts: SearchState | Iterable[SearchState],
    goal: GoalFn,
    transitions: Transitions,
    records: CostRecord | None = None,
) -> SearchResult:
    """
    Find the minimum cost from any start state to a goal state.

    All start states on passable cells are seeded at cost 0. A start on a wall
    goes nowhere, not even to a goal under it. Goal states are recorded rather
    than expanded, and the frontier is drained until its costs exceed the first
    goal cost so that every tied goal state and every tied predecessor is
    captured.

    Args:
        grid: The grid to search; not modified
        starts: One or more start states
        goal: Predicate deciding when a popped state has arrived
        transitions: Yields (next_state, edge_cost) pairs; edge costs must be
            non-negative. A TransitionConfig is validated first.
        records: Optional table to fill, for callers that want to inspect it

    Returns:
        SearchResult with the minimum cost (None if unreachable) and the cells
        on every optimal path
    """
    if isinstance(transitions, TransitionConfig):
        transitions.validate()
    if isinstance(starts, SearchState):
        starts = [starts]
    if records is None:
        records = CostRecord()

    frontier = Frontier()
    for start in starts:
        if not grid.in_bounds(start.position):
            raise ValueError(
                f"Start position ({start.position.row}, {start.position.col}) is outside "
                f"the {grid.height}x{grid.width} grid"
            )
        if grid.cost(start.position) is None:
            logger.debug("solve: start %s is impassable, not seeded", start)
            continue
        if records.seed(start):
            frontier.push(0, start)

    goal_states: list[SearchState] = []
    goal_cost: int | None = None
    expanded = 0

    while frontier:
        cost, state = frontier.pop()
        if goal_cost is not None and cost > goal_cost:
            break
        if is_stale(cost, state, records):
            continue

        if goal(state):
            logger.debug("solve: reached %s at cost %d", state, cost)
            goal_cost = cost
            goal_states.append(state)
            continue

        expanded += 1
        for next_state, edge_cost in transitions(grid, state):
            assert edge_cost >= 0, f"Negative edge cost {edge_cost} from {state}"
            candidate = cost + edge_cost
            if records.relax(next_state, candidate, state) is Relaxation.IMPROVED:
                frontier.push(candidate, next_state)

    result = extract_result(records, goal_states, expanded)
    logger.info(
        "solve: cost=%s, goal_states=%d, cells=%d, expanded=%d, recorded=%d",
        result.minimum_cost,
        len(result.goal_states),
        result.path_cell_count,
        expanded,
        len(records),
    )
    return result


def solve_each(
    grid: Grid,
    starts: Iterable[SearchState],
    goal: GoalFn,
    transitions: Transitions,
    workers: int | None = None,
) -> dict[SearchState, SearchResult]:
    """
    Run an independent search from each start state.

    The grid is immutable and every search owns its own tables, so the runs
    share nothing and are spread over a thread pool.
    """
    starts = list(starts)
    if isinstance(transitions, TransitionConfig):
        transitions.validate()

    def run_one(start: SearchState) -> SearchResult:
        return solve(grid, [start], goal, transitions)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        return dict(zip(starts, pool.map(run_one, starts)))
