import random
from typing import List, Optional
from grid_search.core.grid import Grid, Cell
from grid_search.algo.base import Traversal

class RandomizedDFS(Traversal):
    """Backtracking DFS. Ties between open neighbors are broken by 'rng'."""

    def __init__(self, grid: Grid, rng: random.Random = None):
        super().__init__(grid)
        self.rng = rng if rng is not None else random.Random()
        self.stack: List[Cell] = []

    def seed(self, origin: Cell):
        # Stack fills lazily as step() advances
        self.stack = []
        self.exhausted = False

    def step(self, current: Cell) -> Optional[Cell]:
        if self.exhausted:
            return None

        neighbors = self.candidates(*current)
        if neighbors:
            nxt = self.rng.choice(neighbors)
            self.grid.set_flag(*nxt, Grid.VISITED)
            self.stack.append(current)
            return nxt

        if self.stack:
            self.grid.set_flag(*current, Grid.BACKTRACK)
            return self.stack.pop()

        self.exhausted = True
        return None
