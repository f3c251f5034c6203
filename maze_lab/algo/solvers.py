import heapq
import itertools
from abc import abstractmethod
from array import array
from collections import deque
from typing import List, Tuple

from maze_lab.algo.base import EventSource
from maze_lab.core.events import Path, SolveDone, Visit
from maze_lab.core.grid import Grid

NO_PARENT = -1


class Solver(EventSource):
    """
    Base for path solvers.
    Runs in three phases: search (Visit events), path reveal (one Path event
    per cell, start to goal) and a final SolveDone. Never touches the
    wall/passage state of the grid.
    """

    def __init__(self, grid: Grid):
        super().__init__()
        self.grid = grid
        self.start = grid.start
        self.goal = grid.goal
        self.path: List[Tuple[int, int]] = []
        self.visited_count = 0

        # Memory Opt: Dense parent array, index of the parent cell
        self.parents = array('i', [NO_PARENT] * (grid.width * grid.height))

        self._started = False
        self._searching = True
        self._path_cursor = 0

    def index(self, cell: Tuple[int, int]) -> int:
        return cell[1] * self.grid.width + cell[0]

    def cell_at(self, idx: int) -> Tuple[int, int]:
        return idx % self.grid.width, idx // self.grid.width

    def _visit(self, cell: Tuple[int, int], parent=None):
        if parent is not None:
            self.parents[self.index(cell)] = self.index(parent)
        self.visited_count += 1
        self._emit(Visit(cell))

    def _advance(self):
        if not self._started:
            self._started = True
            self._begin()
        elif self._searching:
            if not self._expand():
                self._searching = False
                self.path = self.reconstruct_path()
        elif self._path_cursor < len(self.path):
            self._emit(Path(self.path[self._path_cursor]))
            self._path_cursor += 1
        else:
            self._emit(SolveDone(found=bool(self.path), cost=max(0, len(self.path) - 1)))
            self.finished = True

    def reconstruct_path(self) -> List[Tuple[int, int]]:
        """Walks parent pointers from goal back to start. Empty if goal was never reached."""
        if not self.reached(self.index(self.goal)):
            return []

        path = []
        idx = self.index(self.goal)
        while idx != NO_PARENT:
            path.append(self.cell_at(idx))
            idx = self.parents[idx]
        path.reverse()
        return path

    @property
    def found(self) -> bool:
        return bool(self.path)

    @property
    def cost(self) -> int:
        return max(0, len(self.path) - 1)

    @abstractmethod
    def _begin(self):
        pass

    @abstractmethod
    def _expand(self) -> bool:
        """Expands one cell. Returns False once the search is over."""

    @abstractmethod
    def reached(self, idx: int) -> bool:
        pass


class BFS(Solver):
    """Breadth-first. Shortest path by edge count."""

    def _begin(self):
        self.queue = deque([self.start])
        # came-from keys; start maps to no parent
        self.came_from = bytearray(self.grid.width * self.grid.height)
        self.came_from[self.index(self.start)] = 1
        self._visit(self.start)

    def reached(self, idx: int) -> bool:
        return bool(self.came_from[idx])

    def _expand(self) -> bool:
        if not self.queue:
            return False

        current = self.queue.popleft()
        if current == self.goal:
            return False

        for nx, ny in self.grid.open_neighbors(*current):
            idx = ny * self.grid.width + nx
            if not self.came_from[idx]:
                self.came_from[idx] = 1
                self.queue.append((nx, ny))
                self._visit((nx, ny), parent=current)
        return True


class DFS(Solver):
    """
    Depth-first, LIFO stack.
    Finds *a* path, not necessarily the shortest one.
    """

    def _begin(self):
        self.stack = [self.start]
        self.seen = bytearray(self.grid.width * self.grid.height)
        self.seen[self.index(self.start)] = 1
        self._visit(self.start)

    def reached(self, idx: int) -> bool:
        return bool(self.seen[idx])

    def _expand(self) -> bool:
        if not self.stack:
            return False

        current = self.stack.pop()
        if current == self.goal:
            return False

        for nx, ny in self.grid.open_neighbors(*current):
            idx = ny * self.grid.width + nx
            if not self.seen[idx]:
                self.seen[idx] = 1
                self.stack.append((nx, ny))
                self._visit((nx, ny), parent=current)
        return True


class AStar(Solver):
    """
    A* with a Manhattan heuristic and uniform edge cost.
    Improvements push a fresh heap entry instead of decreasing a key; stale
    entries are skipped when popped. Ties on f pop in insertion order.
    """

    def _begin(self):
        # g_score initialized with -1 (infinity)
        self.g_score = array('i', [-1] * (self.grid.width * self.grid.height))
        self.g_score[self.index(self.start)] = 0

        self._counter = itertools.count()
        # Priority Queue: (f_score, seq, g, x, y)
        self.open_set = []
        heapq.heappush(self.open_set,
                       (self.heuristic(self.start, self.goal), next(self._counter), 0) + self.start)
        self._visit(self.start)

    def reached(self, idx: int) -> bool:
        return self.g_score[idx] != -1

    def _expand(self) -> bool:
        if not self.open_set:
            return False

        _, _, g, cx, cy = heapq.heappop(self.open_set)
        current = (cx, cy)
        if g > self.g_score[self.index(current)]:
            return True  # stale

        if current == self.goal:
            return False

        new_g = g + 1
        for nx, ny in self.grid.open_neighbors(cx, cy):
            idx = ny * self.grid.width + nx
            old_g = self.g_score[idx]
            if old_g == -1 or new_g < old_g:
                self.g_score[idx] = new_g
                f = new_g + self.heuristic((nx, ny), self.goal)
                heapq.heappush(self.open_set, (f, next(self._counter), new_g, nx, ny))
                self._visit((nx, ny), parent=current)
        return True

    def heuristic(self, a, b):
        return abs(a[0] - b[0]) + abs(a[1] - b[1])


SOLVERS = {
    "bfs": BFS,
    "dfs": DFS,
    "astar": AStar,
}
