import random
from array import array
from typing import Iterable, Iterator, List, Optional, Tuple

Cell = Tuple[int, int]

class Grid:
    # Role / terrain bits
    OBSTACLE = 0b000000001
    START    = 0b000000010
    TARGET   = 0b000000100

    # Transient flags (current run only)
    VISITED   = 0b000001000
    BACKTRACK = 0b000010000
    PATH      = 0b000100000

    # Persistent marks (accumulated across runs)
    VISITED_MARK   = 0b001000000
    BACKTRACK_MARK = 0b010000000
    PATH_MARK      = 0b100000000

    TRANSIENT = VISITED | BACKTRACK | PATH
    MARKS = VISITED_MARK | BACKTRACK_MARK | PATH_MARK

    # Transient bit -> persistent bit
    MARK_OF = {VISITED: VISITED_MARK, BACKTRACK: BACKTRACK_MARK, PATH: PATH_MARK}

    # Fixed neighbor order: up, right, down, left
    OFFSETS = ((0, -1), (1, 0), (0, 1), (-1, 0))

    __slots__ = ('width', 'height', 'cells', 'start', 'target')

    def __init__(self, width: int, height: int):
        if width < 1 or height < 1 or width * height < 2:
            raise ValueError(f"Grid needs at least 2 cells, got {width}x{height}")
        self.width = width
        self.height = height
        # 'H' (unsigned short): 9 flag bits per cell
        self.cells = array('H', [0] * (width * height))
        self.start: Optional[Cell] = None
        self.target: Optional[Cell] = None
        self.set_start(0, 0)

    @classmethod
    def from_canvas(cls, canvas_width: int, canvas_height: int, cell_size: int) -> "Grid":
        if cell_size < 1:
            raise ValueError(f"Cell size must be positive, got {cell_size}")
        return cls(canvas_width // cell_size, canvas_height // cell_size)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_index(self, x: int, y: int) -> int:
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def find_index(self, x: int, y: int) -> Optional[int]:
        """Like get_index, but returns None for coordinates off the grid."""
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        return None

    def coords(self, idx: int) -> Cell:
        return (idx % self.width, idx // self.width)

    def has_flag(self, x: int, y: int, flag: int) -> bool:
        return (self.cells[y * self.width + x] & flag) != 0

    def set_flag(self, x: int, y: int, flag: int):
        self.cells[y * self.width + x] |= flag

    def clear_flag(self, x: int, y: int, flag: int):
        self.cells[y * self.width + x] &= ~flag

    def is_obstacle(self, x: int, y: int) -> bool:
        return (self.cells[y * self.width + x] & self.OBSTACLE) != 0

    def is_visited(self, x: int, y: int) -> bool:
        return (self.cells[y * self.width + x] & self.VISITED) != 0

    def cells_with(self, flag: int) -> Iterator[Cell]:
        for idx, val in enumerate(self.cells):
            if val & flag:
                yield self.coords(idx)

    def count(self, flag: int) -> int:
        return sum(1 for val in self.cells if val & flag)

    def neighbors_of(self, x: int, y: int) -> List[Cell]:
        """
        Returns in-bounds orthogonal neighbors in the order up, right, down, left.
        Does NOT check obstacles.
        """
        result = []
        for dx, dy in self.OFFSETS:
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.width and 0 <= ny < self.height:
                result.append((nx, ny))
        return result

    def open_neighbors(self, x: int, y: int) -> List[Cell]:
        return [(nx, ny) for nx, ny in self.neighbors_of(x, y) if not self.is_obstacle(nx, ny)]

    def set_start(self, x: int, y: int):
        if self.start is not None:
            self.clear_flag(*self.start, self.START)
        self.start = (x, y)
        self.set_flag(x, y, self.START)

    def set_target(self, x: int, y: int):
        if self.target is not None:
            self.clear_flag(*self.target, self.TARGET)
        self.target = (x, y)
        self.set_flag(x, y, self.TARGET)

    def toggle_obstacle(self, x: int, y: int, protected: Iterable[Cell] = ()) -> bool:
        """
        Flips the obstacle bit. Start, target and any 'protected' cell are left
        untouched, as are coordinates off the grid. Returns True if the cell changed.
        """
        idx = self.find_index(x, y)
        if idx is None:
            return False
        cell = (x, y)
        if cell == self.start or cell == self.target or cell in protected:
            return False
        self.cells[idx] ^= self.OBSTACLE
        return True

    def pick_random_free_cell(self, rng: random.Random, excluding: Iterable[Cell] = ()) -> Cell:
        excluded = set(excluding)
        candidates = [
            self.coords(idx)
            for idx, val in enumerate(self.cells)
            if not (val & self.OBSTACLE) and self.coords(idx) not in excluded
        ]
        if not candidates:
            raise ValueError("No free cell available")
        return rng.choice(candidates)

    def fold_transient(self):
        """ORs every transient flag into its persistent mark, then clears the transient flags."""
        for idx in range(len(self.cells)):
            val = self.cells[idx]
            if not (val & self.TRANSIENT):
                continue
            for flag, mark in self.MARK_OF.items():
                if val & flag:
                    val |= mark
            self.cells[idx] = val & ~self.TRANSIENT

    def clear_marks(self):
        # Obstacles and roles survive
        keep = ~(self.TRANSIENT | self.MARKS)
        for idx in range(len(self.cells)):
            self.cells[idx] &= keep
