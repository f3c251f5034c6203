from abc import ABC, abstractmethod
from collections import deque
from typing import Iterator, List, Optional

from maze_lab.core.events import Done, Event
from maze_lab.core.grid import Grid
from maze_lab.core.rng import RandomSource


class EventSource(ABC):
    """
    Resumable state machine that hands out one event per produce_next() call.

    Subclasses keep their working state (stack, queue, frontier...) as fields
    and implement _advance(), which performs one unit of work and queues
    zero or more events via _emit(). Suspension only ever happens between
    events, never in the middle of one.
    """

    def __init__(self):
        self.finished = False
        self._pending = deque()

    def produce_next(self) -> Optional[Event]:
        """Returns the next event, or None once the run is exhausted."""
        while not self._pending:
            if self.finished:
                return None
            self._advance()
        return self._pending.popleft()

    @property
    def exhausted(self) -> bool:
        return self.finished and not self._pending

    def _emit(self, event: Event):
        self._pending.append(event)

    @abstractmethod
    def _advance(self):
        pass

    def __iter__(self) -> Iterator[Event]:
        while True:
            ev = self.produce_next()
            if ev is None:
                return
            yield ev

    def run_all(self) -> List[Event]:
        """Helper to run the algorithm to completion."""
        return list(self)


class Generator(EventSource):
    """
    Base for maze carvers.
    Rooms live on odd coordinates, two cells apart; the even cell between two
    rooms is the wall that gets knocked out. The grid is mutated in place.
    """

    def __init__(self, grid: Grid, seed: int = 42):
        super().__init__()
        self.grid = grid
        self.seed = seed
        self.rng = RandomSource(seed)
        self._started = False

    def _advance(self):
        if not self._started:
            self._started = True
            self.grid.fill_all(Grid.WALL)
            self._begin()
        elif self._has_work():
            self._step()
        else:
            self._finalize()

    def _random_room(self):
        w, h = self.grid.width, self.grid.height
        x = self.rng.next_int(1, w - 2) | 1
        y = self.rng.next_int(1, h - 2) | 1
        return x, y

    def _is_interior(self, x: int, y: int) -> bool:
        return 0 < x < self.grid.width - 1 and 0 < y < self.grid.height - 1

    def _carve(self, cx: int, cy: int, nx: int, ny: int):
        # Knock out the wall between the rooms, then open the far room
        self.grid.set_passage((cx + nx) // 2, (cy + ny) // 2)
        self.grid.set_passage(nx, ny)

    def _finalize(self):
        w, h = self.grid.width, self.grid.height
        self.grid.set_passage(1, 1)
        self.grid.set_passage(w - 2, h - 2)
        self.grid.start = (1, 1)
        self.grid.goal = (w - 2, h - 2)
        self._emit(Done())
        self.finished = True

    @abstractmethod
    def _begin(self):
        """Place the first room and emit Init."""

    @abstractmethod
    def _has_work(self) -> bool:
        pass

    @abstractmethod
    def _step(self):
        pass
