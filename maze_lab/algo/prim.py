from typing import List, Tuple

from maze_lab.algo.base import Generator
from maze_lab.core.events import Carve, Init
from maze_lab.core.grid import Grid


class PrimsAlgorithm(Generator):
    """
    Randomized Prim.
    The frontier holds candidate edges (room, far room). Each step removes one
    at a random index; order in the list is irrelevant, it is neither a queue
    nor a stack. Edges whose far room is already open are dropped without an
    event.
    """

    def _begin(self):
        sx, sy = self._random_room()
        self.grid.set_passage(sx, sy)

        # Frontier: List of (x, y, far_x, far_y)
        self.frontier: List[Tuple[int, int, int, int]] = []
        self._add_edges(sx, sy)
        self._emit(Init((sx, sy)))

    def _add_edges(self, x: int, y: int):
        for dx, dy in Grid.DIRS:
            nx, ny = x + dx * 2, y + dy * 2
            if self._is_interior(nx, ny):
                self.frontier.append((x, y, nx, ny))

    def _has_work(self) -> bool:
        return bool(self.frontier)

    def _step(self):
        idx = self.rng.next_int(0, len(self.frontier) - 1)
        cx, cy, nx, ny = self.frontier.pop(idx)

        if self.grid.get(nx, ny) == Grid.WALL:
            self._carve(cx, cy, nx, ny)
            self._add_edges(nx, ny)
            self._emit(Carve((cx, cy), (nx, ny)))
