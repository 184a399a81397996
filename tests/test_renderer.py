import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from grid_search.core.grid import Grid
from grid_search.core.engine import TraversalEngine, Mode
from grid_search.viz.renderer import Renderer

class TestRendererInput(unittest.TestCase):
    """Hit-testing and command routing; no window is opened."""

    def setUp(self):
        self.grid = Grid(25, 25)
        self.engine = TraversalEngine(self.grid, mode=Mode.DFS, seed=5, target=(24, 24))
        self.renderer = Renderer(self.engine, cell_size=40)

    def test_layout(self):
        self.assertEqual(self.renderer.canvas_width, 1000)
        self.assertEqual(self.renderer.canvas_height, 1000)
        self.assertEqual(self.renderer.screen_height, self.renderer.canvas_top + 1000)
        for rect in self.renderer.buttons.values():
            self.assertEqual(rect.size, (160, 56))
            self.assertLessEqual(rect.bottom, self.renderer.bar_height)

    def test_cell_at_pixel(self):
        r = self.renderer
        top, left = r.canvas_top, r.canvas_left
        self.assertEqual(r.cell_at_pixel(left + 5, top + 5), (0, 0))
        self.assertEqual(r.cell_at_pixel(left + 85, top + 41), (2, 1))
        self.assertEqual(r.cell_at_pixel(left + 999, top + 999), (24, 24))
        self.assertIsNone(r.cell_at_pixel(left + 1000, top + 10))
        self.assertIsNone(r.cell_at_pixel(left + 10, top - 1))

    def test_click_toggles_obstacle(self):
        r = self.renderer
        r.click(r.canvas_left + 3 * 40 + 1, r.canvas_top + 4 * 40 + 1)
        self.assertTrue(self.grid.is_obstacle(3, 4))

        # Start is protected
        r.click(r.canvas_left + 1, r.canvas_top + 1)
        self.assertFalse(self.grid.is_obstacle(0, 0))

    def test_buttons(self):
        r = self.renderer
        self.assertEqual(r.button_at(*r.buttons["BFS"].center), "BFS")
        self.assertIsNone(r.button_at(0, r.canvas_top + 10))

        r.click(*r.buttons["BFS"].center)
        self.assertEqual(self.engine.mode, Mode.BFS)
        r.click(*r.buttons["DFS"].center)
        self.assertEqual(self.engine.mode, Mode.DFS)

        for _ in range(5):
            self.engine.advance_one_step()
        r.click(*r.buttons["Reset"].center)
        self.assertEqual(self.engine.current, (0, 0))
        self.assertEqual(self.grid.count(Grid.MARKS), 0)

    def test_hud_text(self):
        text = self.renderer.hud_text()
        self.assertIn("Mode: DFS", text)
        self.assertIn("Status: running", text)

if __name__ == '__main__':
    unittest.main()
