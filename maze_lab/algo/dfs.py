from typing import List, Tuple

from maze_lab.algo.base import Generator
from maze_lab.core.events import Backtrack, Carve, Init
from maze_lab.core.grid import Grid


class RecursiveBacktracker(Generator):
    """Randomized depth-first backtracker. Long winding corridors."""

    def _begin(self):
        sx, sy = self._random_room()
        self.grid.set_passage(sx, sy)
        # Stack of (x, y)
        self.stack: List[Tuple[int, int]] = [(sx, sy)]
        self._emit(Init((sx, sy)))

    def _has_work(self) -> bool:
        return bool(self.stack)

    def _step(self):
        cx, cy = self.stack[-1]

        # Rooms two cells away that are still solid
        candidates = []
        for dx, dy in Grid.DIRS:
            nx, ny = cx + dx * 2, cy + dy * 2
            if self._is_interior(nx, ny) and self.grid.get(nx, ny) == Grid.WALL:
                candidates.append((nx, ny))

        if candidates:
            self.rng.shuffle(candidates)
            nx, ny = candidates[0]
            self._carve(cx, cy, nx, ny)
            self.stack.append((nx, ny))
            self._emit(Carve((cx, cy), (nx, ny)))
        else:
            # Backtrack
            popped = self.stack.pop()
            if self.stack:
                self._emit(Backtrack(popped, self.stack[-1]))
