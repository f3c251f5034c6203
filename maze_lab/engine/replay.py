from typing import Optional

from maze_lab.core.events import Carve, Done, Event, EventLog, Init
from maze_lab.core.grid import Grid


def apply_event(grid: Grid, event: Event):
    """Replays the grid mutation a carver performed when it emitted `event`."""
    if isinstance(event, Init):
        grid.set_passage(*event.cell)

    elif isinstance(event, Carve):
        (fx, fy), (tx, ty) = event.from_cell, event.to_cell
        grid.set_passage((fx + tx) // 2, (fy + ty) // 2)
        grid.set_passage(tx, ty)

    elif isinstance(event, Done):
        w, h = grid.width, grid.height
        grid.set_passage(1, 1)
        grid.set_passage(w - 2, h - 2)
        grid.start = (1, 1)
        grid.goal = (w - 2, h - 2)


class ReplaySource:
    """
    Adapts a recorded EventLog to look like a live Generator for the scheduler.
    Applies changes to the Grid as it iterates, so the grid passed in should
    be freshly built (all walls) with the log's dimensions.
    """

    def __init__(self, grid: Grid, log: EventLog):
        self.grid = grid
        self.log = log
        self._cursor = 0

    @property
    def exhausted(self) -> bool:
        return self._cursor >= len(self.log.events)

    def produce_next(self) -> Optional[Event]:
        if self.exhausted:
            return None
        event = self.log.events[self._cursor]
        self._cursor += 1
        apply_event(self.grid, event)
        return event
