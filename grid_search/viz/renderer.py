import pygame
from typing import Dict, Optional
from grid_search.core.grid import Cell
from grid_search.core.engine import TraversalEngine, Mode, RunStatus, CellView

class Renderer:
    COLOR_BG = (51, 51, 51)
    COLOR_GRID = (70, 70, 70)
    COLOR_BAR = (30, 30, 30)
    COLOR_BUTTON = (244, 244, 244)
    COLOR_BUTTON_ACTIVE = (200, 225, 255)
    COLOR_BUTTON_BORDER = (119, 119, 119)
    COLOR_TEXT = (20, 20, 20)
    COLOR_HUD = (255, 255, 255)
    COLOR_START = (0, 200, 0)
    COLOR_WALL = (150, 60, 40)
    COLOR_MORTAR = (90, 40, 30)
    COLOR_HEART = (220, 30, 60)
    COLOR_CURSOR = (255, 170, 40)

    # RGBA layers, faint persistent marks under solid current-run flags
    LAYER_VISITED_MARK = (0, 128, 128, 160)
    LAYER_BACKTRACK_MARK = (255, 255, 255, 90)
    LAYER_PATH_MARK = (255, 255, 255, 180)
    LAYER_VISITED = (0, 128, 128, 255)
    LAYER_BACKTRACK = (255, 255, 255, 120)
    LAYER_PATH = (255, 255, 255, 230)

    BUTTON_W = 160
    BUTTON_H = 56
    BUTTON_GAP = 12
    BAR_PADDING = 12
    HUD_HEIGHT = 24

    def __init__(self, engine: TraversalEngine, cell_size: int = 40, fps: int = 20, record: bool = False):
        self.engine = engine
        self.grid = engine.grid
        self.cell_size = cell_size
        self.fps = fps

        self.canvas_width = self.grid.width * cell_size
        self.canvas_height = self.grid.height * cell_size
        self.bar_height = self.BUTTON_H + self.BAR_PADDING * 2
        self.canvas_top = self.bar_height + self.HUD_HEIGHT

        # Window is at least as wide as the button row
        row_width = 3 * self.BUTTON_W + 2 * self.BUTTON_GAP
        self.screen_width = max(self.canvas_width, row_width + self.BAR_PADDING * 2)
        self.screen_height = self.canvas_top + self.canvas_height
        self.canvas_left = (self.screen_width - self.canvas_width) // 2

        left = (self.screen_width - row_width) // 2
        self.buttons: Dict[str, pygame.Rect] = {}
        for i, label in enumerate(("DFS", "BFS", "Reset")):
            x = left + i * (self.BUTTON_W + self.BUTTON_GAP)
            self.buttons[label] = pygame.Rect(x, self.BAR_PADDING, self.BUTTON_W, self.BUTTON_H)

        from grid_search.viz.recorder import VideoRecorder
        self.recorder = VideoRecorder(active=record, fps=fps, prefix=f"grid_search_{engine.mode.value}")

        self.running = True
        self.surface = None
        self.clock = None
        self.font = None
        self.button_font = None
        self.layers: Dict[tuple, pygame.Surface] = {}

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"Grid Search - {self.grid.width}x{self.grid.height}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.button_font = pygame.font.SysFont("Arial", 20)

        for rgba in (self.LAYER_VISITED_MARK, self.LAYER_BACKTRACK_MARK, self.LAYER_PATH_MARK,
                     self.LAYER_VISITED, self.LAYER_BACKTRACK, self.LAYER_PATH):
            layer = pygame.Surface((self.cell_size, self.cell_size), pygame.SRCALPHA)
            layer.fill(rgba)
            self.layers[rgba] = layer

    def cell_at_pixel(self, px: int, py: int) -> Optional[Cell]:
        """Maps a window pixel to a grid cell, or None outside the canvas."""
        cx = px - self.canvas_left
        cy = py - self.canvas_top
        if cx < 0 or cy < 0:
            return None
        x, y = cx // self.cell_size, cy // self.cell_size
        if self.grid.find_index(x, y) is None:
            return None
        return (x, y)

    def button_at(self, px: int, py: int) -> Optional[str]:
        for label, rect in self.buttons.items():
            if rect.collidepoint(px, py):
                return label
        return None

    def press(self, label: str):
        if label == "DFS":
            self.engine.set_mode(Mode.DFS)
        elif label == "BFS":
            self.engine.set_mode(Mode.BFS)
        elif label == "Reset":
            self.engine.reset()

    def click(self, px: int, py: int):
        label = self.button_at(px, py)
        if label:
            self.press(label)
            return
        cell = self.cell_at_pixel(px, py)
        if cell is not None:
            self.engine.toggle_obstacle_at(*cell)

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.click(*event.pos)

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_d:
                    self.press("DFS")
                elif event.key == pygame.K_b:
                    self.press("BFS")
                elif event.key == pygame.K_r:
                    self.press("Reset")

    def draw_cell(self, cell: CellView):
        px = self.canvas_left + cell.x * self.cell_size
        py = self.canvas_top + cell.y * self.cell_size
        size = self.cell_size
        rect = pygame.Rect(px, py, size, size)

        if cell.obstacle:
            # Wall occludes everything else in the cell
            pygame.draw.rect(self.surface, self.COLOR_WALL, rect)
            half = size // 2
            pygame.draw.line(self.surface, self.COLOR_MORTAR, (px, py + half), (px + size, py + half), 2)
            pygame.draw.line(self.surface, self.COLOR_MORTAR, (px + half, py), (px + half, py + half), 2)
            pygame.draw.line(self.surface, self.COLOR_MORTAR, (px + size // 4, py + half), (px + size // 4, py + size), 2)
            return

        pygame.draw.rect(self.surface, self.COLOR_GRID, rect, 1)

        layers = (
            (cell.visited_mark, self.LAYER_VISITED_MARK),
            (cell.backtrack_mark, self.LAYER_BACKTRACK_MARK),
            (cell.path_mark, self.LAYER_PATH_MARK),
            (cell.visited, self.LAYER_VISITED),
            (cell.backtrack, self.LAYER_BACKTRACK),
            (cell.on_final_path, self.LAYER_PATH),
        )
        for active, rgba in layers:
            if active:
                self.surface.blit(self.layers[rgba], (px, py))

        if cell.is_target:
            self.draw_heart(rect)

    def draw_heart(self, rect: pygame.Rect):
        r = max(2, rect.width // 5)
        cx, cy = rect.centerx, rect.centery
        pygame.draw.circle(self.surface, self.COLOR_HEART, (cx - r, cy - r // 2), r)
        pygame.draw.circle(self.surface, self.COLOR_HEART, (cx + r, cy - r // 2), r)
        pygame.draw.polygon(self.surface, self.COLOR_HEART, [
            (cx - 2 * r, cy - r // 3),
            (cx + 2 * r, cy - r // 3),
            (cx, cy + 2 * r),
        ])

    def draw_grid(self):
        self.surface.fill(self.COLOR_BG)
        for cell in self.engine.iter_cells():
            self.draw_cell(cell)

        size = self.cell_size
        sx, sy = self.grid.start
        pygame.draw.rect(self.surface, self.COLOR_START,
                         (self.canvas_left + sx * size, self.canvas_top + sy * size, size, size))

        if not self.engine.found:
            cx, cy = self.engine.current
            center = (self.canvas_left + cx * size + size // 2, self.canvas_top + cy * size + size // 2)
            pygame.draw.circle(self.surface, self.COLOR_CURSOR, center, int(size * 0.45))

    def draw_buttons(self):
        pygame.draw.rect(self.surface, self.COLOR_BAR, (0, 0, self.screen_width, self.bar_height))
        active = self.engine.mode.name
        for label, rect in self.buttons.items():
            fill = self.COLOR_BUTTON_ACTIVE if label == active else self.COLOR_BUTTON
            pygame.draw.rect(self.surface, fill, rect, border_radius=8)
            pygame.draw.rect(self.surface, self.COLOR_BUTTON_BORDER, rect, 1, border_radius=8)
            lbl = self.button_font.render(label, True, self.COLOR_TEXT)
            self.surface.blit(lbl, lbl.get_rect(center=rect.center))

    def hud_text(self) -> str:
        status = self.engine.status
        text = (f"Mode: {self.engine.mode.name} | Status: {status.value} | "
                f"Steps: {self.engine.steps} | Run: {self.engine.run_count}")
        if status == RunStatus.FOUND and self.engine.final_path is None:
            text += " | No path from start"
        if self.clock:
            text += f" | FPS: {int(self.clock.get_fps())}"
        if self.recorder.active:
            text += " | REC"
        return text

    def draw_hud(self):
        lbl = self.font.render(self.hud_text(), True, self.COLOR_HUD)
        self.surface.blit(lbl, (self.BAR_PADDING, self.bar_height + 4))

    def run_loop(self):
        while self.running:
            self.handle_input()

            self.draw_grid()
            self.draw_buttons()
            self.draw_hud()
            pygame.display.flip()

            if self.recorder.active:
                self.recorder.capture_frame(self.surface)

            # One traversal step per frame
            self.engine.advance_one_step()

            self.clock.tick(self.fps)

        self.recorder.stop()
        pygame.quit()
