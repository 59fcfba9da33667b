"""
events.py — Run Events
=======================
Every search algorithm is a generator that yields Event objects, and
the path reconstructor yields one more Event per path cell.  An Event
is the unit the animation (and the test-suite) observes:

    • VISITED    – a node was finalised by the search
    • PATH_STEP  – a node was confirmed on the reconstructed path
    • DONE       – the run ended (Completed / NoPath / Cancelled)

Design decisions:
  - Event is a frozen dataclass.  It is a DELTA, not a snapshot: the
    renderer paints the initial grid snapshot once, then applies events
    in order.  The algorithm generator is the only writer of grid state;
    consumers are pure readers.
  - Algorithms do not number their own events; the run controller
    stamps `step_number` as it forwards them, so the sequence numbers
    stay contiguous across search → reconstruction → done.
  - `explanation` is the plain-English "why" text shown beside each step.
"""

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Dict, Any, Tuple

from grid import Node


class EventKind(Enum):
    VISITED   = "visited"
    PATH_STEP = "path_step"
    DONE      = "done"


class Outcome(Enum):
    COMPLETED = "completed"    # path found and fully emitted
    NO_PATH   = "no_path"      # frontier exhausted, end unreachable
    CANCELLED = "cancelled"    # caller stopped the run


@dataclass(frozen=True)
class Event:
    """
    Attributes:
        kind            : EventKind.
        row, col        : Cell coordinates (None for DONE).
        outcome         : Terminal Outcome (DONE only).
        step_number     : 0-based position in the run's event stream.
        distance        : Node distance at emission time (None if unreached / DONE).
        pseudocode_line : 0-based index into the emitting algorithm's PSEUDOCODE.
        explanation     : Human-readable text for the step.
    """

    kind:            EventKind
    row:             Optional[int]     = None
    col:             Optional[int]     = None
    outcome:         Optional[Outcome] = None
    step_number:     int               = 0
    distance:        Optional[float]   = None
    pseudocode_line: int               = 0
    explanation:     str               = ""

    @property
    def coord(self) -> Optional[Tuple[int, int]]:
        if self.row is None:
            return None
        return (self.row, self.col)

    def numbered(self, step_number: int) -> "Event":
        return replace(self, step_number=step_number)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind":            self.kind.value,
            "row":             self.row,
            "col":             self.col,
            "outcome":         self.outcome.value if self.outcome else None,
            "step_number":     self.step_number,
            "distance":        self.distance,
            "pseudocode_line": self.pseudocode_line,
            "explanation":     self.explanation,
        }


# ---------------------------------------------------------------------------
# Factories so algorithms don't have to spell out every kwarg
# ---------------------------------------------------------------------------
def visited(node: Node, pseudocode_line: int = 0, explanation: str = "") -> Event:
    return Event(
        kind=EventKind.VISITED,
        row=node.row,
        col=node.col,
        distance=_finite(node.distance),
        pseudocode_line=pseudocode_line,
        explanation=explanation,
    )


def path_step(node: Node, explanation: str = "") -> Event:
    return Event(
        kind=EventKind.PATH_STEP,
        row=node.row,
        col=node.col,
        distance=_finite(node.distance),
        explanation=explanation,
    )


def done(outcome: Outcome, explanation: str = "") -> Event:
    return Event(kind=EventKind.DONE, outcome=outcome, explanation=explanation)


def _finite(value: float) -> Optional[float]:
    return None if math.isinf(value) else value
