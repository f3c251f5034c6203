import logging
from typing import Dict, List, Optional, Tuple

from maze_lab.algo.dfs import RecursiveBacktracker
from maze_lab.algo.prim import PrimsAlgorithm
from maze_lab.algo.solvers import SOLVERS
from maze_lab.config import MazeConfig
from maze_lab.core.events import CARVE_EVENTS, EventLog, Path, SolveDone, Visit, describe_event
from maze_lab.core.grid import Grid
from maze_lab.engine.replay import ReplaySource
from maze_lab.engine.scheduler import StepScheduler
from maze_lab.viz.palette import DEFAULT_PALETTE

logger = logging.getLogger(__name__)

GENERATORS = {
    "dfs": RecursiveBacktracker,
    "prim": PrimsAlgorithm,
}

MODE_GENERATE = "generate"
MODE_SOLVE = "solve"


class MazeSession:
    """
    One interactive maze: the grid, the recorded generation log, the overlay
    buffers and two independent schedulers (generation and solving).

    All animation state lives here, so several sessions can coexist.
    """

    def __init__(self, config: Optional[MazeConfig] = None, palette: Optional[Dict] = None):
        self.config = (config or MazeConfig()).normalized()
        self.palette = palette or DEFAULT_PALETTE

        self.grid = Grid(self.config.width, self.config.height)
        self.event_log: Optional[EventLog] = None

        self.gen = StepScheduler(self.config.gen_rate, name="gen")
        self.solve = StepScheduler(self.config.solve_rate, name="solve")
        self.gen.on_finished = self._on_gen_finished
        self.solve.on_finished = self._on_solve_finished

        # Overlay buffers
        self.visited: List[Tuple[int, int]] = []
        self.path: List[Tuple[int, int]] = []
        self.solve_result: Optional[SolveDone] = None

        self.paused = False
        self.fast_forward = False
        self.status = ""
        self.step_label = ""
        self.last_event = None

    # Setup --------------------------------------------------------------

    def build_grid(self) -> Grid:
        self.grid = Grid(self.config.width, self.config.height)
        return self.grid

    def set_status(self, msg: str):
        self.status = msg or ""
        logger.info(self.status)

    def _reset_buffers(self):
        self.visited = []
        self.path = []
        self.solve_result = None
        self.last_event = None
        self.step_label = ""

    def _reset_controls(self):
        self.paused = False
        self.fast_forward = False

    def _carve_handlers(self, log: EventLog):
        return {cls: log.record for cls in CARVE_EVENTS}

    def _solve_handlers(self):
        return {
            Visit: lambda ev: self.visited.append(ev.cell),
            Path: lambda ev: self.path.append(ev.cell),
            SolveDone: self._on_solve_done,
        }

    # Control surface ----------------------------------------------------

    def start(self, mode: str = MODE_GENERATE, prerecord: bool = False) -> bool:
        if mode == MODE_GENERATE:
            return self._start_generate(prerecord)
        if mode == MODE_SOLVE:
            return self._start_solve()
        raise ValueError(f"Unknown mode '{mode}'")

    def _start_generate(self, prerecord: bool) -> bool:
        self.solve.clear()
        self._reset_buffers()
        self._reset_controls()

        cfg = self.config
        grid = self.build_grid()
        log = EventLog(cfg.width, cfg.height)
        carver = GENERATORS[cfg.carver](grid, seed=cfg.seed)

        if prerecord:
            # Resolve the whole run up front, then animate the recording
            for ev in carver:
                log.record(ev)
            self.event_log = log
            self.gen.start(ReplaySource(self.build_grid(), log))
        else:
            self.event_log = log
            self.gen.start(carver, self._carve_handlers(log))

        logger.debug(f"Generating {cfg.width}x{cfg.height} with {cfg.carver.upper()} (seed={cfg.seed})")
        self.set_status("Running")
        return True

    def _start_solve(self) -> bool:
        self._complete_generation()
        if self.grid.passage_count() == 0:
            self.set_status("Nothing to solve yet. Generate first.")
            return False

        self.visited = []
        self.path = []
        self.solve_result = None
        self._reset_controls()

        solver = SOLVERS[self.config.solver](self.grid)
        self.solve.start(solver, self._solve_handlers())
        logger.debug(f"Solving with {self.config.solver.upper()} from {self.grid.start} to {self.grid.goal}")
        self.set_status("Running")
        return True

    def _complete_generation(self):
        """Runs an unfinished carve to its end so the grid and the log both hold a whole maze."""
        if not self.gen.active:
            return
        logger.info("Finishing generation instantly")
        self.gen.run_to_completion()

    def replay_last(self) -> bool:
        self._complete_generation()
        if not self.event_log:
            self.set_status("Nothing to replay yet. Generate first.")
            return False

        log = self.event_log
        self.solve.clear()
        self._reset_buffers()
        self._reset_controls()
        self.grid = Grid(log.width, log.height)
        self.gen.start(ReplaySource(self.grid, log))
        logger.debug(f"Replaying {len(log)} recorded events")
        self.set_status("Replaying")
        return True

    def _active_schedulers(self) -> List[StepScheduler]:
        return [s for s in (self.gen, self.solve) if s.active]

    def pause(self):
        if not self._active_schedulers():
            return
        self.paused = True
        for s in self._active_schedulers():
            s.pause()
        self.set_status("Paused")

    def resume(self):
        if not self._active_schedulers():
            return
        self.paused = False
        for s in self._active_schedulers():
            s.resume()
        self.set_status("Fast-Forward" if self.fast_forward else "Running")

    def toggle_pause(self):
        if self.paused:
            self.resume()
        else:
            self.pause()

    def step_once(self):
        """Pauses if running, then lets exactly one event through on the next frame."""
        active = self._active_schedulers()
        if not active:
            return
        if not self.paused:
            self.pause()
        # Solving runs on top of a finished maze; it owns the step when active
        target = self.solve if self.solve.active else self.gen
        target.request_step()

    def toggle_fast_forward(self):
        if not self._active_schedulers():
            return
        self.fast_forward = not self.fast_forward
        for s in self._active_schedulers():
            s.set_fast_forward(self.fast_forward)
        self.set_status("Fast-Forward" if self.fast_forward else "Running")

    def clear_overlays(self):
        self.solve.clear()
        self.visited = []
        self.path = []
        self.solve_result = None
        self.last_event = None
        self.step_label = ""

    def set_gen_rate(self, rate: int):
        self.config.gen_rate = max(1, int(rate))
        self.gen.set_rate(self.config.gen_rate)

    def set_solve_rate(self, rate: int):
        self.config.solve_rate = max(1, int(rate))
        self.solve.set_rate(self.config.solve_rate)

    # Frame --------------------------------------------------------------

    def tick(self, dt_ms: float):
        """Advances both schedulers by one frame. Returns the events consumed."""
        consumed = []
        for sched in (self.gen, self.solve):
            ev = sched.tick(dt_ms)
            if ev is not None:
                consumed.append(ev)
                self.annotate(ev)
        return consumed

    def annotate(self, event):
        self.last_event = event
        self.step_label = describe_event(event)

    def draw(self, renderer):
        cell = self.config.cell_size
        renderer.draw_base_grid(self.grid, cell, self.palette, self.config.show_grid_lines)
        if self.visited:
            renderer.draw_overlay_cells(self.visited, cell, self.palette["visited"])
        if self.path:
            renderer.draw_path_glow(self.path, cell, self.palette["glow_outer"], self.palette["glow_inner"])

    def describe_cell(self, x: int, y: int) -> Optional[str]:
        if not self.grid.in_bounds(x, y):
            return None
        return f"({x}, {y}) " + ("· passage" if self.grid.is_passage(x, y) else "# wall")

    @property
    def running(self) -> bool:
        return bool(self._active_schedulers())

    # Callbacks ----------------------------------------------------------

    def _on_solve_done(self, ev: SolveDone):
        self.solve_result = ev
        self.set_status(f"Solved, cost={ev.cost}" if ev.found else "No path")

    def _on_gen_finished(self, sched: StepScheduler):
        self.set_status("Generation done")

    def _on_solve_finished(self, sched: StepScheduler):
        if self.solve_result is None:
            self.set_status("Solve stopped")
