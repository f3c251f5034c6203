import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from maze_lab.core.events import Event, describe_event

logger = logging.getLogger(__name__)

# Terminal / run status
STATUS_IDLE = "idle"
STATUS_RUNNING = "running"
STATUS_PAUSED = "paused"
STATUS_FINISHED = "finished"

Handlers = Dict[type, Callable[[Event], Any]]


def pump_one_event(source, handlers: Optional[Handlers] = None) -> Optional[Event]:
    """
    Advances the source exactly one event and runs the side-effect callback
    registered for its type. Returns None when the source is exhausted.
    """
    event = source.produce_next()
    if event is None:
        return None
    if handlers:
        callback = handlers.get(type(event))
        if callback:
            callback(event)
    return event


@dataclass
class ScheduleState:
    """Everything the scheduler tracks for one active run."""
    source: Any
    accumulator: float = 0.0
    paused: bool = False
    fast_forward: bool = False
    step_pending: bool = False
    finished: bool = False
    consumed: int = 0


class StepScheduler:
    """
    Drives an event source at `rate` events per second from a frame clock.

    tick() is called once per rendered frame and consumes at most one event:
      - paused: nothing, unless a single step was requested
      - single step pending: one event, accumulator reset to zero
      - fast-forward: one event, whatever the accumulator says
      - otherwise: one event each time the accumulator reaches one period;
        the period is subtracted (not zeroed) so jitter averages out
    """

    def __init__(self, rate: float = 6, name: str = "scheduler"):
        self.name = name
        self.rate = max(1, rate)
        self.state: Optional[ScheduleState] = None
        self.handlers: Handlers = {}
        self.on_finished: Optional[Callable[['StepScheduler'], Any]] = None
        self.last_event: Optional[Event] = None
        self.status = STATUS_IDLE

    @property
    def period_ms(self) -> float:
        return 1000.0 / self.rate

    @property
    def active(self) -> bool:
        return self.state is not None and not self.state.finished

    @property
    def paused(self) -> bool:
        return self.state is not None and self.state.paused

    @property
    def fast_forward(self) -> bool:
        return self.state is not None and self.state.fast_forward

    def set_rate(self, rate: float):
        self.rate = max(1, rate)

    def start(self, source, handlers: Optional[Handlers] = None):
        """Replaces whatever was running. Replacing is the only cancellation."""
        if self.active:
            logger.debug(f"[{self.name}] abandoning run after {self.state.consumed} events")
        self.state = ScheduleState(source=source)
        self.handlers = handlers or {}
        self.last_event = None
        self.status = STATUS_RUNNING
        logger.debug(f"[{self.name}] started {type(source).__name__} at {self.rate} ev/s")

    def clear(self):
        self.state = None
        self.last_event = None
        self.status = STATUS_IDLE

    # Controls -----------------------------------------------------------

    def pause(self):
        if self.active:
            self.state.paused = True
            self.status = STATUS_PAUSED

    def resume(self):
        if self.active:
            self.state.paused = False
            self.status = STATUS_RUNNING

    def request_step(self):
        if self.active:
            self.state.step_pending = True

    def set_fast_forward(self, enabled: bool):
        if self.active:
            self.state.fast_forward = enabled

    # Execution ----------------------------------------------------------

    def pump(self) -> Optional[Event]:
        """Consumes one event regardless of pacing. None when nothing is left."""
        if not self.active:
            return None

        event = pump_one_event(self.state.source, self.handlers)
        if event is None:
            self._finish()
            return None

        self.state.consumed += 1
        self.last_event = event
        if getattr(self.state.source, "exhausted", False):
            self._finish()
        return event

    def tick(self, dt_ms: float) -> Optional[Event]:
        """Called once per frame. Returns the event consumed this frame, if any."""
        if not self.active:
            return None
        st = self.state

        if st.step_pending:
            st.step_pending = False
            st.accumulator = 0.0
            return self.pump()

        if st.paused:
            return None

        st.accumulator += dt_ms
        period = self.period_ms

        if st.fast_forward:
            st.accumulator = max(0.0, st.accumulator - period)
            return self.pump()

        if st.accumulator >= period:
            # Carry at most one period so a slower rate later starts without a backlog
            st.accumulator = min(st.accumulator - period, period)
            return self.pump()
        return None

    def run_to_completion(self):
        while self.pump() is not None:
            pass

    def _finish(self):
        st = self.state
        st.finished = True
        st.source = None  # release
        self.status = STATUS_FINISHED
        logger.debug(f"[{self.name}] finished after {st.consumed} events "
                     f"(last: {describe_event(self.last_event) or 'none'})")
        if self.on_finished:
            self.on_finished(self)


class FrameClock:
    """
    Frame-rate cap. Raw host deltas are accumulated and only released as a
    frame once at least 1000/fps_cap ms have gone by.
    """

    def __init__(self, fps_cap: int = 60):
        self.fps_cap = fps_cap
        self._acc = 0.0

    @property
    def min_frame_ms(self) -> float:
        return 1000.0 / self.fps_cap

    def advance(self, raw_dt_ms: float) -> Optional[float]:
        """Returns the elapsed time for this frame, or None to skip drawing it."""
        self._acc += raw_dt_ms
        if self._acc < self.min_frame_ms:
            return None
        dt, self._acc = self._acc, 0.0
        return dt
