from collections import deque
from typing import Dict, List, Optional
from grid_search.core.grid import Grid, Cell

class ShortestPath:
    """
    Unweighted BFS from start to end over the obstacle layout only.
    Visit flags from any in-progress traversal are ignored, so the result is a
    true shortest path whichever mode found the target.
    """
    def __init__(self, grid: Grid):
        self.grid = grid
        self.path: List[Cell] = []
        self.visited_count = 0

    def run(self, start: Cell, end: Cell) -> Optional[List[Cell]]:
        queue = deque([start])
        parents: Dict[Cell, Optional[Cell]] = {start: None}
        self.path = []
        self.visited_count = 1

        reached = False
        while queue:
            current = queue.popleft()
            if current == end:
                reached = True
                break

            for nb in self.grid.open_neighbors(*current):
                if nb not in parents:
                    parents[nb] = current
                    self.visited_count += 1
                    queue.append(nb)

        if not reached:
            return None

        self.reconstruct_path(parents, end)
        return self.path

    def reconstruct_path(self, parents: Dict[Cell, Optional[Cell]], end: Cell):
        curr = end
        while curr is not None:
            self.path.append(curr)
            curr = parents[curr]
        self.path.reverse()

def shortest_distance(grid: Grid, start: Cell, end: Cell) -> Optional[int]:
    """Step count of the shortest route, or None if 'end' cannot be reached."""
    path = ShortestPath(grid).run(start, end)
    if path is None:
        return None
    return len(path) - 1
