import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional

from grid_search.core.grid import Grid, Cell
from grid_search.algo.base import Traversal
from grid_search.algo.bfs import LayeredBFS
from grid_search.algo.dfs import RandomizedDFS
from grid_search.algo.solvers import ShortestPath

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    DFS = "dfs"
    BFS = "bfs"


class RunStatus(str, Enum):
    RUNNING = "running"
    FOUND = "found"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class CellView:
    """Read-only snapshot of one cell for the renderer."""
    x: int
    y: int
    obstacle: bool
    is_start: bool
    is_target: bool
    is_current: bool
    visited: bool
    backtrack: bool
    on_final_path: bool
    visited_mark: bool
    backtrack_mark: bool
    path_mark: bool


class TraversalEngine:
    """
    Owns the active search mode and the traversal head.

    Every state-affecting command (mode switch, obstacle toggle, reset) starts a
    new run via init_search(). Footprints of the previous run are folded into the
    grid's persistent marks unless the command is a full reset.
    """

    def __init__(self, grid: Grid, mode: Mode = Mode.DFS, seed: int = None,
                 rng: random.Random = None, target: Optional[Cell] = None):
        self.grid = grid
        self.rng = rng if rng is not None else random.Random(seed)
        self.mode = Mode(mode)
        self.current: Cell = grid.start
        self.found = False
        self.final_path: Optional[List[Cell]] = None
        self.strategy: Optional[Traversal] = None
        self.steps = 0
        self.run_count = 0

        if target is None:
            target = grid.pick_random_free_cell(self.rng, excluding={grid.start})
        elif (not grid.in_bounds(*target) or target == grid.start
              or grid.is_obstacle(*target)):
            raise ValueError(f"Invalid target {target}")
        grid.set_target(*target)

        self.init_search(self.mode, continue_from_current=False)

    @property
    def start(self) -> Cell:
        return self.grid.start

    @property
    def target(self) -> Cell:
        return self.grid.target

    @property
    def status(self) -> RunStatus:
        if self.found:
            return RunStatus.FOUND
        if self.strategy.exhausted:
            return RunStatus.EXHAUSTED
        return RunStatus.RUNNING

    def make_strategy(self, mode: Mode) -> Traversal:
        if mode == Mode.BFS:
            return LayeredBFS(self.grid)
        return RandomizedDFS(self.grid, rng=self.rng)

    def init_search(self, mode: Mode, continue_from_current: bool):
        self.grid.fold_transient()

        self.mode = Mode(mode)
        self.strategy = self.make_strategy(self.mode)
        self.found = False
        self.final_path = None
        self.steps = 0

        if not continue_from_current:
            self.current = self.grid.start
        self.grid.set_flag(*self.current, Grid.VISITED)
        self.strategy.seed(self.current)

        self.run_count += 1
        logger.debug(f"Run {self.run_count}: {self.mode.name} from {self.current} to {self.target}")

    def advance_one_step(self) -> RunStatus:
        if self.found or self.strategy.exhausted:
            return self.status

        nxt = self.strategy.step(self.current)
        if nxt is None:
            logger.debug(f"{self.mode.name} exhausted after {self.steps} steps")
            return self.status

        self.current = nxt
        self.steps += 1

        if self.current == self.target:
            self.found = True
            logger.info(f"Target found ({self.mode.name})!")
            self.compute_final_path()

        return self.status

    def run_to_completion(self, max_steps: int = 100_000) -> RunStatus:
        for _ in range(max_steps):
            if self.advance_one_step() != RunStatus.RUNNING:
                break
        return self.status

    def compute_final_path(self) -> Optional[List[Cell]]:
        solver = ShortestPath(self.grid)
        path = solver.run(self.grid.start, self.target)
        logger.debug(f"Path search expanded {solver.visited_count} cells")
        if path is None:
            logger.warning("No path from start to target (blocked by walls).")
            self.final_path = None
            return None

        for x, y in path:
            self.grid.set_flag(x, y, Grid.PATH | Grid.PATH_MARK)
        self.final_path = path
        return path

    # Commands

    def set_mode(self, mode: Mode):
        logger.debug(f"Switching to {Mode(mode).name}")
        self.init_search(mode, continue_from_current=True)

    def toggle_obstacle_at(self, x: int, y: int) -> bool:
        if not self.grid.toggle_obstacle(x, y, protected=(self.current,)):
            return False
        logger.debug(f"Toggled obstacle at ({x}, {y})")
        self.init_search(self.mode, continue_from_current=True)
        return True

    def reset(self):
        self.grid.clear_marks()
        self.grid.clear_flag(*self.target, Grid.TARGET)
        self.grid.target = None

        target = self.grid.pick_random_free_cell(self.rng, excluding={self.grid.start})
        self.grid.set_target(*target)

        self.found = False
        self.current = self.grid.start
        logger.debug(f"Reset: new target {target}")
        self.init_search(self.mode, continue_from_current=False)

    # Queries

    def cell_view(self, x: int, y: int) -> CellView:
        val = self.grid.cells[self.grid.get_index(x, y)]
        return CellView(
            x=x,
            y=y,
            obstacle=bool(val & Grid.OBSTACLE),
            is_start=bool(val & Grid.START),
            is_target=bool(val & Grid.TARGET),
            is_current=(x, y) == self.current,
            visited=bool(val & Grid.VISITED),
            backtrack=bool(val & Grid.BACKTRACK),
            on_final_path=bool(val & Grid.PATH),
            visited_mark=bool(val & Grid.VISITED_MARK),
            backtrack_mark=bool(val & Grid.BACKTRACK_MARK),
            path_mark=bool(val & Grid.PATH_MARK),
        )

    def iter_cells(self) -> Iterator[CellView]:
        for y in range(self.grid.height):
            for x in range(self.grid.width):
                yield self.cell_view(x, y)
