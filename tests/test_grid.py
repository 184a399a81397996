import unittest
import random
import sys
import os

# Add project root to path so we can import grid_search
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from grid_search.core.grid import Grid

class TestGrid(unittest.TestCase):
    def test_initialization(self):
        w, h = 10, 8
        grid = Grid(w, h)
        self.assertEqual(len(grid.cells), w * h)
        self.assertEqual(grid.start, (0, 0))
        self.assertTrue(grid.has_flag(0, 0, Grid.START))
        self.assertIsNone(grid.target)
        # Only the start bit is set
        self.assertEqual(sum(1 for v in grid.cells if v), 1)

    def test_from_canvas(self):
        grid = Grid.from_canvas(1000, 1000, 40)
        self.assertEqual((grid.width, grid.height), (25, 25))

    def test_from_canvas_rejects_bad_cell_size(self):
        with self.assertRaises(ValueError):
            Grid.from_canvas(100, 100, 0)
        with self.assertRaises(ValueError):
            Grid.from_canvas(100, 100, -4)

    def test_too_small(self):
        with self.assertRaises(ValueError):
            Grid(1, 1)
        with self.assertRaises(ValueError):
            Grid(0, 5)

    def test_coordinates(self):
        grid = Grid(5, 5)
        self.assertEqual(grid.get_index(2, 3), 17) # 3 * 5 + 2
        self.assertEqual(grid.coords(17), (2, 3))

        with self.assertRaises(IndexError):
            grid.get_index(-1, 0)
        with self.assertRaises(IndexError):
            grid.get_index(0, 5)

        self.assertIsNone(grid.find_index(5, 0))
        self.assertIsNone(grid.find_index(0, -1))
        self.assertEqual(grid.find_index(4, 4), 24)

    def test_neighbor_order(self):
        grid = Grid(3, 3)
        # up, right, down, left
        self.assertEqual(grid.neighbors_of(1, 1), [(1, 0), (2, 1), (1, 2), (0, 1)])
        # Corner keeps the relative order
        self.assertEqual(grid.neighbors_of(0, 0), [(1, 0), (0, 1)])
        self.assertEqual(grid.neighbors_of(2, 2), [(2, 1), (1, 2)])

    def test_open_neighbors_skip_obstacles(self):
        grid = Grid(3, 3)
        grid.toggle_obstacle(2, 1)
        self.assertEqual(grid.open_neighbors(1, 1), [(1, 0), (1, 2), (0, 1)])

    def test_toggle_obstacle(self):
        grid = Grid(4, 4)
        self.assertTrue(grid.toggle_obstacle(2, 2))
        self.assertTrue(grid.is_obstacle(2, 2))
        self.assertTrue(grid.toggle_obstacle(2, 2))
        self.assertFalse(grid.is_obstacle(2, 2))

    def test_toggle_protected_cells(self):
        grid = Grid(4, 4)
        grid.set_target(3, 3)

        self.assertFalse(grid.toggle_obstacle(0, 0)) # start
        self.assertFalse(grid.toggle_obstacle(3, 3)) # target
        self.assertFalse(grid.toggle_obstacle(1, 2, protected=[(1, 2)]))
        self.assertFalse(grid.toggle_obstacle(9, 9)) # off grid
        self.assertFalse(grid.toggle_obstacle(-1, 0))
        self.assertEqual(grid.count(Grid.OBSTACLE), 0)

    def test_set_start_moves_flag(self):
        grid = Grid(4, 4)
        grid.set_start(2, 1)
        self.assertEqual(grid.start, (2, 1))
        self.assertEqual(list(grid.cells_with(Grid.START)), [(2, 1)])
        self.assertFalse(grid.has_flag(0, 0, Grid.START))
        # New start is protected, old one is not
        self.assertFalse(grid.toggle_obstacle(2, 1))
        self.assertTrue(grid.toggle_obstacle(0, 0))

    def test_set_target_moves_flag(self):
        grid = Grid(4, 4)
        grid.set_target(1, 1)
        grid.set_target(2, 3)
        self.assertEqual(grid.target, (2, 3))
        self.assertEqual(list(grid.cells_with(Grid.TARGET)), [(2, 3)])

    def test_pick_random_free_cell(self):
        grid = Grid(3, 3)
        for x, y in [(1, 0), (2, 0), (0, 1), (1, 1), (2, 1), (0, 2), (1, 2)]:
            grid.toggle_obstacle(x, y)

        rng = random.Random(7)
        for _ in range(20):
            self.assertEqual(grid.pick_random_free_cell(rng, excluding={grid.start}), (2, 2))

    def test_pick_random_free_cell_none_left(self):
        grid = Grid(2, 1)
        grid.toggle_obstacle(1, 0)
        with self.assertRaises(ValueError):
            grid.pick_random_free_cell(random.Random(1), excluding={grid.start})

    def test_fold_transient(self):
        grid = Grid(3, 3)
        grid.set_flag(1, 1, Grid.VISITED)
        grid.set_flag(2, 2, Grid.VISITED | Grid.BACKTRACK)
        grid.set_flag(0, 2, Grid.PATH)
        grid.set_flag(2, 0, Grid.VISITED_MARK)

        grid.fold_transient()

        self.assertEqual(grid.count(Grid.TRANSIENT), 0)
        self.assertTrue(grid.has_flag(1, 1, Grid.VISITED_MARK))
        self.assertTrue(grid.has_flag(2, 2, Grid.VISITED_MARK))
        self.assertTrue(grid.has_flag(2, 2, Grid.BACKTRACK_MARK))
        self.assertTrue(grid.has_flag(0, 2, Grid.PATH_MARK))
        # Existing marks are never cleared by a fold
        self.assertTrue(grid.has_flag(2, 0, Grid.VISITED_MARK))

    def test_clear_marks_keeps_obstacles(self):
        grid = Grid(3, 3)
        grid.set_target(2, 2)
        grid.toggle_obstacle(1, 1)
        grid.set_flag(1, 0, Grid.VISITED | Grid.PATH_MARK)

        grid.clear_marks()

        self.assertEqual(grid.count(Grid.TRANSIENT | Grid.MARKS), 0)
        self.assertTrue(grid.is_obstacle(1, 1))
        self.assertTrue(grid.has_flag(0, 0, Grid.START))
        self.assertTrue(grid.has_flag(2, 2, Grid.TARGET))

if __name__ == '__main__':
    unittest.main()
