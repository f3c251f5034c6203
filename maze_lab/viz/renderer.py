from abc import ABC, abstractmethod
from typing import Dict, Sequence, Tuple

import numpy as np
import pygame

from maze_lab.core.grid import Grid

Color = Tuple[int, int, int]


class Renderer(ABC):
    """
    Draw target the session pushes batched shapes to each frame.
    Coordinates are plain grid cells; implementations scale by cell_size.
    """

    @abstractmethod
    def draw_base_grid(self, grid: Grid, cell_size: int, palette: Dict[str, Color], show_grid_lines: bool):
        pass

    @abstractmethod
    def draw_overlay_cells(self, cells: Sequence[Tuple[int, int]], cell_size: int, color: Color):
        pass

    @abstractmethod
    def draw_path_glow(self, path_cells: Sequence[Tuple[int, int]], cell_size: int,
                       outer_color: Color, inner_color: Color):
        pass


class PygameRenderer(Renderer):
    GRID_LINE_ALPHA = 16
    GLOW_ALPHA = 110

    def __init__(self, surface: pygame.Surface):
        self.surface = surface

    def draw_base_grid(self, grid, cell_size, palette, show_grid_lines):
        # One pixel per cell, then a single scale blit instead of w*h rects
        lut = np.array([palette["pass"], palette["wall"]], dtype=np.uint8)
        cells = np.frombuffer(grid.cells.tobytes(), dtype=np.uint8).reshape(grid.height, grid.width)
        rgb = lut[cells]

        # surfarray wants (width, height, 3)
        small = pygame.surfarray.make_surface(np.ascontiguousarray(np.transpose(rgb, (1, 0, 2))))
        full = pygame.transform.scale(small, (grid.width * cell_size, grid.height * cell_size))
        self.surface.blit(full, (0, 0))

        sx, sy = grid.start
        gx, gy = grid.goal
        self.surface.fill(palette["start"], (sx * cell_size, sy * cell_size, cell_size, cell_size))
        self.surface.fill(palette["goal"], (gx * cell_size, gy * cell_size, cell_size, cell_size))

        if show_grid_lines:
            w_px, h_px = grid.width * cell_size, grid.height * cell_size
            lines = pygame.Surface((w_px + 1, h_px + 1), pygame.SRCALPHA)
            color = tuple(palette["grid"]) + (self.GRID_LINE_ALPHA,)
            for x in range(grid.width + 1):
                pygame.draw.line(lines, color, (x * cell_size, 0), (x * cell_size, h_px))
            for y in range(grid.height + 1):
                pygame.draw.line(lines, color, (0, y * cell_size), (w_px, y * cell_size))
            self.surface.blit(lines, (0, 0))

    def draw_overlay_cells(self, cells, cell_size, color):
        for x, y in cells:
            self.surface.fill(color, (x * cell_size, y * cell_size, cell_size, cell_size))

    def draw_path_glow(self, path_cells, cell_size, outer_color, inner_color):
        # Two passes: translucent halo a bit larger than the cell, then a bright core
        pad = max(1, int(cell_size * 0.25))
        halo = pygame.Surface((cell_size + pad * 2, cell_size + pad * 2), pygame.SRCALPHA)
        halo.fill(tuple(outer_color) + (self.GLOW_ALPHA,))
        for x, y in path_cells:
            self.surface.blit(halo, (x * cell_size - pad, y * cell_size - pad))

        inset = cell_size * 0.15
        inner = max(1, int(cell_size * 0.7))
        for x, y in path_cells:
            self.surface.fill(inner_color, (int(x * cell_size + inset), int(y * cell_size + inset), inner, inner))
