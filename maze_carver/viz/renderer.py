import logging
from typing import Optional

import pygame

from maze_carver.algo.dfs import BacktrackingGenerator, CellState
from maze_carver.algo.solvers import AStarSolver
from maze_carver.core.geometry import Direction, Point
from maze_carver.viz import palette
from maze_carver.viz.clock import StepClock

logger = logging.getLogger(__name__)

DEFAULT_DELAY = 0.001


class Renderer:
    """
    Pygame front end: animates the generator, then an A* solver over the
    finished maze. R restarts, SPACE pauses, ESC quits.
    """
    def __init__(self, generator: BacktrackingGenerator, solve: bool = True, width=1200, height=600, delay=DEFAULT_DELAY):
        self.generator = generator
        self.solve = solve
        self.solver: Optional[AStarSolver] = None
        self.screen_width = width
        self.screen_height = height

        self.step_clock = StepClock(delay)
        self.cell_size = 20.0
        self.offset_x = 0.0
        self.offset_y = 0.0

        self.running = True
        self.paused = False
        self.clock = None
        self.surface = None
        self.font = None

    def fit_to_screen(self):
        """Auto-adjust cell size and offset to fit the entire grid on screen with padding."""
        padding = 20
        grid = self.generator.grid
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - (padding * 2)

        self.cell_size = max(1.0, min(available_w / grid.width, available_h / grid.height))

        self.offset_x = (self.screen_width - grid.width * self.cell_size) / 2
        self.offset_y = (self.screen_height - grid.height * self.cell_size) / 2

    def init_window(self):
        pygame.init()
        grid = self.generator.grid
        pygame.display.set_caption(f"Maze Carver - {grid.width}x{grid.height}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.fit_to_screen()

    def restart(self):
        logger.info("Restarting")
        self.generator.restart()
        self.solver = None
        self.step_clock.reset()

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h
                self.fit_to_screen()

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_r:
                    self.restart()
                elif event.key == pygame.K_SPACE:
                    self.paused = not self.paused

    def update(self, dt: float):
        if self.paused:
            return

        for _ in range(self.step_clock.advance(dt)):
            if not self.generator.is_done():
                self.generator.step()
                continue

            if not self.solve:
                break

            if self.solver is None:
                self.solver = AStarSolver(self.generator.finished_grid())
                logger.info("Generation done, solving")

            if self.solver.is_done():
                break
            self.solver.step()
            if self.solver.is_done():
                if self.solver.path:
                    logger.info(f"Path length: {len(self.solver.path) - 1} moves")
                else:
                    logger.info("No path")

    def cell_rect(self, x: int, y: int):
        px = int(x * self.cell_size + self.offset_x)
        py = int(y * self.cell_size + self.offset_y)
        size = int(self.cell_size) + 1
        return px, py, size

    def draw_cells(self):
        grid = self.generator.grid

        if self.solver is not None:
            heat = palette.cost_heatmap(self.solver.current_cost_map(), grid.width, grid.height)
            for p in grid.points():
                px, py, size = self.cell_rect(p.x, p.y)
                pygame.draw.rect(self.surface, tuple(int(c) for c in heat[p.x, p.y]), (px, py, size, size))
            for p in self.solver.path or ():
                px, py, size = self.cell_rect(p.x, p.y)
                pygame.draw.rect(self.surface, palette.COLOR_SOLUTION, (px, py, size, size))
        else:
            for p in grid.points():
                state = self.generator.cell_generation_state(p)
                if state is CellState.UNVISITED:
                    continue
                px, py, size = self.cell_rect(p.x, p.y)
                pygame.draw.rect(self.surface, palette.generation_color(state), (px, py, size, size))

        for p, color in ((grid.start, palette.COLOR_START), (grid.end, palette.COLOR_END)):
            px, py, size = self.cell_rect(p.x, p.y)
            pygame.draw.rect(self.surface, color, (px, py, size, size))

    def draw_walls(self):
        grid = self.generator.grid
        thickness = max(1, int(self.cell_size / 10))

        for y in range(grid.height):
            for x in range(grid.width):
                px, py, size = self.cell_rect(x, y)
                walls = grid.walls(Point(x, y))

                if Direction.SOUTH in walls:
                    pygame.draw.line(self.surface, palette.COLOR_WALL, (px, py + size), (px + size, py + size), thickness)
                if Direction.EAST in walls:
                    pygame.draw.line(self.surface, palette.COLOR_WALL, (px + size, py), (px + size, py + size), thickness)
                if y == 0 and Direction.NORTH in walls:
                    pygame.draw.line(self.surface, palette.COLOR_WALL, (px, py), (px + size, py), thickness)
                if x == 0 and Direction.WEST in walls:
                    pygame.draw.line(self.surface, palette.COLOR_WALL, (px, py), (px, py + size), thickness)

    def draw_hud(self):
        if self.solver is not None:
            status = f"Solving ({self.solver.explored_count} explored)"
            if self.solver.is_done():
                status = f"Solved: {len(self.solver.path) - 1} moves" if self.solver.path else "No path"
        elif self.generator.is_done():
            status = "Generated"
        else:
            status = f"Carving (stack {self.generator.stack_depth})"
        if self.paused:
            status += " [paused]"

        lbl = self.font.render(status, True, (20, 20, 20))
        self.surface.blit(lbl, (10, 2))

    def run_loop(self):
        while self.running:
            self.handle_input()
            dt = self.clock.tick(60) / 1000.0
            self.update(dt)

            self.surface.fill(palette.COLOR_BG)
            self.draw_cells()
            self.draw_walls()
            self.draw_hud()
            pygame.display.flip()

        pygame.quit()
