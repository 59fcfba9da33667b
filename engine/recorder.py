"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete run (all Events) in batch mode, then computes the
metrics the UI needs for the Analytics panel and Comparison Mode.

Usage:
    rec = Recorder(grid)
    metrics = rec.run("astar")       # drives a RunController to the end
    rec.export()                     # serialisable snapshot for save/replay

Comparison Mode:
    Record two algorithms on the SAME grid (each run resets it first),
    then compare(rec1, rec2) → ComparisonResult.
"""

import time
from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict, Any, Union

from grid import Grid
from algorithms import Algorithm
from algorithms.events import Event, Outcome
from engine.runner import RunController


# ---------------------------------------------------------------------------
# Metrics dataclass: what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:      str   = ""
    algo_label:    str   = ""
    rows:          int   = 0
    cols:          int   = 0
    obstacles:     int   = 0
    nodes_visited: int   = 0
    path_length:   int   = 0          # number of steps on the path (cells - 1)
    total_events:  int   = 0
    wall_time_ms:  float = 0.0
    outcome:       str   = ""
    path_found:    bool  = False


# ---------------------------------------------------------------------------
# ComparisonResult: side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_nodes: str = ""   # which algo visited fewer cells
    winner_path:  str = ""   # which algo found the shorter path


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        grid       : Grid the runs execute on.
        events     : Full list of Events from the last run.
        metrics    : RunMetrics of the last run (None before run()).
        controller : The RunController used for the run.
    """

    def __init__(self, grid: Grid, controller: Optional[RunController] = None):
        self.grid:       Grid                 = grid
        self.controller: RunController        = controller or RunController(grid, speed="instant")
        self.events:     List[Event]          = []
        self.metrics:    Optional[RunMetrics] = None

    def run(self, algorithm: Union[Algorithm, str]) -> RunMetrics:
        """Run `algorithm` to completion with no pacing and record it."""
        start = time.monotonic()
        self.controller.start(algorithm)
        self.controller.run_to_completion(paced=False)
        wall_ms = (time.monotonic() - start) * 1000

        self.events  = list(self.controller.events)
        self.metrics = self._compute_metrics(wall_ms)
        return self.metrics

    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self.metrics.algo_key if self.metrics else "",
            "grid":     self.grid.snapshot(),
            "metrics":  asdict(self.metrics) if self.metrics else {},
            "events":   [e.to_dict() for e in self.events],
        }

    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        ctl  = self.controller
        info = ctl.algorithm
        path = ctl.path
        outcome = ctl.outcome

        return RunMetrics(
            algo_key=info.key,
            algo_label=info.label,
            rows=self.grid.rows,
            cols=self.grid.cols,
            obstacles=len(self.grid.obstacles()),
            nodes_visited=ctl.visited_count,
            path_length=max(len(path) - 1, 0),
            total_events=len(self.events),
            wall_time_ms=round(wall_ms, 2),
            outcome=outcome.value if outcome else "",
            path_found=outcome is Outcome.COMPLETED,
        )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val):
        if l_val == r_val:
            return "tie"
        return l.algo_label if l_val < r_val else r.algo_label

    # a run without a path never wins on path length
    if l.path_found and r.path_found:
        winner_path = winner(l.path_length, r.path_length)
    elif l.path_found or r.path_found:
        winner_path = l.algo_label if l.path_found else r.algo_label
    else:
        winner_path = "tie"

    return ComparisonResult(
        left=l,
        right=r,
        winner_nodes=winner(l.nodes_visited, r.nodes_visited),
        winner_path=winner_path,
    )
