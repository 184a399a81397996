from collections import deque
from typing import Deque, Dict, Optional
from grid_search.core.grid import Grid, Cell
from grid_search.algo.base import Traversal

class LayeredBFS(Traversal):
    """FIFO search. Neighbors are enqueued in the grid's fixed order (up, right, down, left)."""

    def __init__(self, grid: Grid):
        super().__init__(grid)
        self.queue: Deque[Cell] = deque()
        self.parents: Dict[Cell, Optional[Cell]] = {}

    def seed(self, origin: Cell):
        self.queue = deque([origin])
        self.parents = {origin: None}
        self.exhausted = False

    def step(self, current: Cell) -> Optional[Cell]:
        if not self.queue:
            self.exhausted = True
            return None

        head = self.queue.popleft()
        for nb in self.candidates(*head):
            self.grid.set_flag(*nb, Grid.VISITED)
            self.parents[nb] = head
            self.queue.append(nb)
        return head
