"""
runner.py — Run Controller
===========================
The RunController is the ONLY object the UI interacts with during a
run.  It owns the grid for the duration of the run, sequences
reset → search → path reconstruction as one unit of work, buffers
every Event it has emitted, and exposes start / next / cancel.

State machine:
    IDLE ─┐
          ├─ start() → RUNNING ─┬→ COMPLETED   (path emitted)
    any   │                     ├→ NO_PATH     (frontier exhausted)
  terminal┘                     └→ CANCELLED   (cancel() / configure())
    any terminal → reset() → IDLE

start() from a terminal state is allowed and implicitly resets the grid.
start() while RUNNING raises AlreadyRunningError and touches nothing.

Concurrency:
  Exactly one logical run at a time.  Events are produced on whatever
  thread pulls them; the only cross-thread call is cancel(), which sets
  a flag checked at every step boundary.  Steps run under a lock, so a
  cancel issued mid-step waits for that step to finish and the grid is
  always left as of the last emitted event.
"""

import logging
import threading
import time
from enum import Enum
from typing import Callable, Generator, Iterator, List, Optional, Union

from config import SPEED_PRESETS, DEFAULT_SPEED, PATH_DELAY_FACTOR
from errors import AlreadyRunningError
from grid import Grid, Coord
from algorithms import Algorithm, AlgoInfo, get_algorithm
from algorithms.events import Event, EventKind, Outcome, done
from algorithms.path import reconstruct_path


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class RunState(Enum):
    IDLE      = "idle"
    RUNNING   = "running"
    COMPLETED = "completed"
    NO_PATH   = "no_path"
    CANCELLED = "cancelled"


_TERMINAL = {
    Outcome.COMPLETED: RunState.COMPLETED,
    Outcome.NO_PATH:   RunState.NO_PATH,
    Outcome.CANCELLED: RunState.CANCELLED,
}


# ---------------------------------------------------------------------------
# RunController
# ---------------------------------------------------------------------------
class RunController:
    """
    Attributes:
        grid      : The Grid this controller runs on (shared, single-writer).
        state     : Current RunState.
        algorithm : AlgoInfo of the current / last run.
        events    : Every Event emitted by the current / last run.
        speed     : Seconds between visited steps when paced.
        on_event  : Optional callback(Event) fired for every emitted event.
    """

    def __init__(
        self,
        grid: Optional[Grid] = None,
        on_event: Optional[Callable[[Event], None]] = None,
        speed: str = DEFAULT_SPEED,
    ):
        self.grid:      Grid                = grid if grid is not None else Grid()
        self.state:     RunState            = RunState.IDLE
        self.algorithm: Optional[AlgoInfo]  = None
        self.events:    List[Event]         = []
        self.speed:     float               = 0.0
        self.on_event:  Optional[Callable[[Event], None]] = on_event

        self._generator: Optional[Generator[Event, None, None]] = None
        self._pending:   List[Event]     = []
        self._cancel:    threading.Event = threading.Event()
        self._lock:      threading.RLock = threading.RLock()
        self._last_tick: float           = 0.0

        self.set_speed(speed)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, algorithm: Union[Algorithm, str]) -> Iterator[Event]:
        """
        Reset the grid and begin a run.  Returns the run's event stream:
        lazy, finite, and not restartable.
        """
        with self._lock:
            if self.state is RunState.RUNNING:
                logger.warning("Rejected start(%s): a %s run is in flight", algorithm, self.algorithm.label)
                raise AlreadyRunningError()

            info = get_algorithm(algorithm)

            self.grid.reset(keep_obstacles=True)
            self.grid.locked = True
            self.algorithm   = info
            self.events      = []
            self._pending    = []
            self._cancel.clear()
            self._generator  = self._produce(info)
            self.state       = RunState.RUNNING
            self._last_tick  = time.monotonic()

        logger.info(
            "Starting %s on %dx%d grid (%d obstacles)",
            info.label, self.grid.rows, self.grid.cols, len(self.grid.obstacles()),
        )
        return self.stream()

    def stream(self) -> Iterator[Event]:
        while True:
            event = self.next_event()
            if event is None:
                return
            yield event

    def cancel(self) -> bool:
        """
        Request cancellation.  Safe from any thread.  Returns False if no
        run is active.  The next pull from the stream yields DONE(CANCELLED).
        """
        if self.state is not RunState.RUNNING:
            return False
        self._cancel.set()
        with self._lock:
            if self.state is RunState.RUNNING:
                self._finish_cancelled()
        return True

    def reset(self, keep_obstacles: bool = True) -> None:
        """Clear run state from the grid and go back to IDLE."""
        with self._lock:
            if self.state is RunState.RUNNING:
                raise AlreadyRunningError("Cannot reset the grid while a run is in progress")
            self.grid.reset(keep_obstacles=keep_obstacles)
            self.events = []
            self.state  = RunState.IDLE

    def configure(self, rows: int, cols: int) -> None:
        """Rebuild the grid.  An in-flight run is cancelled first."""
        with self._lock:
            if self.state is RunState.RUNNING:
                logger.warning("Grid reconfigured during %s run; cancelling", self.algorithm.label)
                self.cancel()
            self.grid.configure(rows, cols)
            self.events   = []
            self._pending = []
            self.state    = RunState.IDLE
        logger.info("Grid configured to %dx%d", rows, cols)

    def toggle_obstacle(self, row: int, col: int) -> bool:
        return self.grid.toggle_obstacle(row, col)

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------
    def next_event(self) -> Optional[Event]:
        """Advance one step.  Returns None once the stream has ended."""
        with self._lock:
            if self._pending:
                return self._pending.pop(0)
            if self._generator is None:
                return None
            if self._cancel.is_set():
                self._finish_cancelled()
                return self._pending.pop(0)
            try:
                event = next(self._generator)
            except StopIteration:
                self._generator = None
                return None
            return self._emit(event)

    def run_to_completion(self, paced: bool = False) -> RunState:
        """
        Drain the stream.  With `paced`, sleep between events (the
        cooperative yield points the animation uses); otherwise consume
        everything synchronously.
        """
        for event in self.stream():
            if paced and event.kind is not EventKind.DONE:
                time.sleep(self.delay_for(event))
        return self.state

    def tick(self) -> bool:
        """
        Call periodically from a UI timer.  If running and the delay owed
        to the last emitted event has elapsed (see delay_for), advances
        one step.  Returns True if a step was taken.
        """
        if self.state is not RunState.RUNNING:
            return False
        now = time.monotonic()
        owed = self.delay_for(self.events[-1]) if self.events else 0.0
        if now - self._last_tick >= owed:
            self._last_tick = now
            return self.next_event() is not None
        return False

    def delay_for(self, event: Event) -> float:
        if event.kind is EventKind.PATH_STEP:
            return self.speed * PATH_DELAY_FACTOR
        return self.speed

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        if preset not in SPEED_PRESETS:
            raise ValueError(f"Unknown speed preset {preset!r}; expected one of {sorted(SPEED_PRESETS)}")
        self.speed = SPEED_PRESETS[preset]

    def set_speed_value(self, seconds: float) -> None:
        self.speed = max(0.0, seconds)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def is_running(self) -> bool:
        return self.state is RunState.RUNNING

    @property
    def is_idle(self) -> bool:
        return self.state is not RunState.RUNNING

    @property
    def outcome(self) -> Optional[Outcome]:
        if self.events and self.events[-1].kind is EventKind.DONE:
            return self.events[-1].outcome
        return None

    @property
    def path(self) -> List[Coord]:
        return [e.coord for e in self.events if e.kind is EventKind.PATH_STEP]

    @property
    def visited_count(self) -> int:
        return sum(1 for e in self.events if e.kind is EventKind.VISITED)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _produce(self, info: AlgoInfo) -> Generator[Event, None, None]:
        """search → reconstruction → done, as one event sequence."""
        found = yield from info.fn(self.grid)
        if found and (yield from reconstruct_path(self.grid)):
            yield done(Outcome.COMPLETED, explanation=f"{info.label} reached the end.")
        else:
            yield done(Outcome.NO_PATH, explanation=f"{info.label} exhausted its frontier: no path exists.")

    def _emit(self, event: Event) -> Event:
        event = event.numbered(len(self.events))
        self.events.append(event)
        logger.debug("step %d: %s %s", event.step_number, event.kind.value, event.coord or event.outcome)

        if event.kind is EventKind.DONE:
            self._generator  = None
            self.grid.locked = False
            self.state       = _TERMINAL[event.outcome]
            logger.info(
                "%s finished: %s (%d visited, %d path steps)",
                self.algorithm.label, event.outcome.value, self.visited_count, len(self.path),
            )

        if self.on_event:
            self.on_event(event)
        return event

    def _finish_cancelled(self) -> None:
        if self._generator is not None:
            self._generator.close()
        self._generator = None
        self._pending.append(self._emit(done(Outcome.CANCELLED, explanation="Run cancelled.")))
        logger.warning("%s run cancelled after %d events", self.algorithm.label, len(self.events) - 1)
