"""
engine/
-------
Run control & recording layer.

    from engine import RunController, Recorder, compare
"""

from engine.runner   import RunController, RunState
from engine.recorder import Recorder, RunMetrics, ComparisonResult, compare

__all__ = [
    "RunController",
    "RunState",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
]
