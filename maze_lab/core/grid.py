from array import array
from typing import Iterator, List, Tuple

Cell = Tuple[int, int]


def to_odd(n: int) -> int:
    """Rounds an even dimension up so rooms sit on an odd lattice."""
    n = int(n)
    return n if n % 2 == 1 else n + 1


class Grid:
    # Cell states
    PASSAGE = 0
    WALL = 1

    # 4-neighbourhood: up, down, left, right
    DIRS = ((0, -1), (0, 1), (-1, 0), (1, 0))

    __slots__ = ('width', 'height', 'cells', 'start', 'goal')

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        # using 'B' (unsigned char) -> 1 byte per cell, all walls
        self.cells = array('B', [self.WALL] * (width * height))
        self.start: Cell = (1, 1)
        self.goal: Cell = (width - 2, height - 2)

    def get_index(self, x: int, y: int) -> int:
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> int:
        return self.cells[self.get_index(x, y)]

    def is_passage(self, x: int, y: int) -> bool:
        """False for walls and for anything outside the grid."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return False
        return self.cells[y * self.width + x] == self.PASSAGE

    def set_wall(self, x: int, y: int):
        self.cells[self.get_index(x, y)] = self.WALL

    def set_passage(self, x: int, y: int):
        self.cells[self.get_index(x, y)] = self.PASSAGE

    def fill_all(self, state: int):
        self.cells = array('B', [state] * (self.width * self.height))

    def clone(self) -> 'Grid':
        g = Grid(self.width, self.height)
        g.cells = array('B', self.cells)
        g.start = self.start
        g.goal = self.goal
        return g

    def open_neighbors(self, x: int, y: int) -> Iterator[Cell]:
        """
        Yields (nx, ny) for the 4 neighbours that are passages.
        Order is fixed (up, down, left, right) so solvers are deterministic.
        """
        for dx, dy in self.DIRS:
            if self.is_passage(x + dx, y + dy):
                yield (x + dx, y + dy)

    def passage_count(self) -> int:
        return self.cells.count(self.PASSAGE)

    def to_bitmap(self) -> List[str]:
        """Rows of '#' (wall) and '.' (passage)."""
        rows = []
        for y in range(self.height):
            row = self.cells[y * self.width:(y + 1) * self.width]
            rows.append(''.join('#' if v == self.WALL else '.' for v in row))
        return rows

    @classmethod
    def from_bitmap(cls, rows: List[str]) -> 'Grid':
        rows = [r.rstrip('\n') for r in rows if r.strip()]
        grid = cls(len(rows[0]), len(rows))
        for y, row in enumerate(rows):
            if len(row) != grid.width:
                raise ValueError(f"Row {y} has length {len(row)}, expected {grid.width}")
            for x, ch in enumerate(row):
                grid.cells[y * grid.width + x] = cls.WALL if ch == '#' else cls.PASSAGE
        return grid

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.width == other.width and self.height == other.height
                and self.cells == other.cells
                and self.start == other.start and self.goal == other.goal)
