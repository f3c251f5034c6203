import logging

import pygame

from maze_lab.engine.scheduler import FrameClock
from maze_lab.engine.session import MODE_GENERATE, MODE_SOLVE, MazeSession
from maze_lab.viz.renderer import PygameRenderer

logger = logging.getLogger(__name__)


class MazeApp:
    """
    Window, keyboard and HUD around a MazeSession.

    Keys: G generate, R replay, S solve, C clear path, Space pause,
    N step, F fast-forward, [ ] gen speed, - = solve speed.
    """
    COLOR_HUD = (255, 255, 255)
    COLOR_LABEL = (255, 199, 0)
    HUD_HEIGHT = 48
    HOST_FPS = 240  # raw loop rate; the session's cap decides which frames draw

    def __init__(self, session: MazeSession):
        self.session = session
        self.frame_clock = FrameClock(session.config.frame_rate_cap)
        self.running = True
        self.surface = None
        self.clock = None
        self.font = None
        self.renderer = None
        self.hover = None

    def init_window(self):
        pygame.init()
        grid = self.session.grid
        cell = self.session.config.cell_size
        pygame.display.set_caption(f"Maze Lab - {grid.width}x{grid.height}")
        self.surface = pygame.display.set_mode((grid.width * cell, grid.height * cell + self.HUD_HEIGHT))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 14)
        self.renderer = PygameRenderer(self.surface)

    def handle_input(self):
        s = self.session
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.KEYDOWN:
                key = event.key
                if key == pygame.K_g:
                    s.start(MODE_GENERATE)
                elif key == pygame.K_r:
                    s.replay_last()
                elif key == pygame.K_s:
                    s.start(MODE_SOLVE)
                elif key == pygame.K_c:
                    s.clear_overlays()
                elif key == pygame.K_SPACE:
                    s.toggle_pause()
                elif key == pygame.K_n:
                    s.step_once()
                elif key == pygame.K_f:
                    s.toggle_fast_forward()
                elif key == pygame.K_LEFTBRACKET:
                    s.set_gen_rate(s.config.gen_rate - 1)
                elif key == pygame.K_RIGHTBRACKET:
                    s.set_gen_rate(s.config.gen_rate + 1)
                elif key == pygame.K_MINUS:
                    s.set_solve_rate(s.config.solve_rate - 1)
                elif key == pygame.K_EQUALS:
                    s.set_solve_rate(s.config.solve_rate + 1)
                elif key == pygame.K_ESCAPE:
                    self.running = False

            elif event.type == pygame.MOUSEMOTION:
                cell = s.config.cell_size
                mx, my = event.pos
                self.hover = s.describe_cell(mx // cell, my // cell)

    def draw_hud(self):
        s = self.session
        top = s.grid.height * s.config.cell_size
        self.surface.fill((0, 0, 0), (0, top, self.surface.get_width(), self.HUD_HEIGHT))

        readout = (f"gen: {s.config.gen_rate} ev/s | solve: {s.config.solve_rate} ev/s | "
                   f"fps: {int(self.clock.get_fps())}/{s.config.frame_rate_cap} | {s.status}")
        self.surface.blit(self.font.render(readout, True, self.COLOR_HUD), (6, top + 4))

        label = s.step_label
        if self.hover:
            label = f"{label}   {self.hover}" if label else self.hover
        if label:
            color = self.COLOR_LABEL
            if s.solve_result is not None and not s.solve_result.found:
                color = s.palette["no_path"]
            self.surface.blit(self.font.render(label, True, color), (6, top + 24))

    def run_loop(self):
        while self.running:
            self.handle_input()

            raw_dt = self.clock.tick(self.HOST_FPS)
            dt = self.frame_clock.advance(raw_dt)
            if dt is None:
                continue

            self.surface.fill(self.session.palette["bg"])
            self.session.tick(dt)
            self.session.draw(self.renderer)
            self.draw_hud()
            pygame.display.flip()

        pygame.quit()
        logger.info("Window closed")
