from dataclasses import dataclass, asdict, replace
from typing import Any, Dict

from maze_lab.core.grid import to_odd

CARVERS = ("dfs", "prim")
SOLVERS = ("bfs", "dfs", "astar")

MIN_DIMENSION = 5
MIN_FPS, MAX_FPS = 15, 120


class ConfigError(ValueError):
    pass


@dataclass
class MazeConfig:
    carver: str = "dfs"
    solver: str = "bfs"
    width: int = 41
    height: int = 31
    seed: int = 42
    gen_rate: int = 6       # events per second
    solve_rate: int = 12    # events per second
    frame_rate_cap: int = 60
    cell_size: int = 20
    show_grid_lines: bool = False

    def normalized(self) -> 'MazeConfig':
        """
        Returns a copy the core can use as-is: odd dimensions, rates >= 1,
        frame cap within 15-120, seed folded into 32 bits.
        Raises ConfigError for values that can't be coerced.
        """
        if self.carver not in CARVERS:
            raise ConfigError(f"Unknown carver '{self.carver}', expected one of {CARVERS}")
        if self.solver not in SOLVERS:
            raise ConfigError(f"Unknown solver '{self.solver}', expected one of {SOLVERS}")

        try:
            width, height = int(self.width), int(self.height)
            seed = int(self.seed)
            gen_rate, solve_rate = int(self.gen_rate), int(self.solve_rate)
            fps = int(self.frame_rate_cap)
            cell_size = int(self.cell_size)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid numeric option: {e}") from e

        if width < MIN_DIMENSION or height < MIN_DIMENSION:
            raise ConfigError(f"Maze must be at least {MIN_DIMENSION}x{MIN_DIMENSION}, got {width}x{height}")

        return replace(
            self,
            width=to_odd(width),
            height=to_odd(height),
            seed=seed & 0xFFFFFFFF,
            gen_rate=max(1, gen_rate),
            solve_rate=max(1, solve_rate),
            frame_rate_cap=max(MIN_FPS, min(MAX_FPS, fps)),
            cell_size=max(1, cell_size),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
