from abc import ABC, abstractmethod
from typing import List, Optional
from grid_search.core.grid import Grid, Cell

class Traversal(ABC):
    """
    One incremental search over a Grid.
    The frontier lives here; visit/backtrack flags are written in-place on self.grid.
    """

    def __init__(self, grid: Grid):
        self.grid = grid
        self.exhausted = False

    @abstractmethod
    def seed(self, origin: Cell):
        """Prepares the frontier for a run that begins at 'origin' (already marked visited)."""
        pass

    @abstractmethod
    def step(self, current: Cell) -> Optional[Cell]:
        """
        Advances one step from 'current' and returns the new head.
        Returns None once the frontier is empty (sets self.exhausted).
        """
        pass

    def candidates(self, x: int, y: int) -> List[Cell]:
        return [
            (nx, ny) for nx, ny in self.grid.neighbors_of(x, y)
            if not self.grid.has_flag(nx, ny, Grid.VISITED | Grid.OBSTACLE)
        ]
