"""
errors.py — Exception Taxonomy
===============================
Every error the engine raises on purpose lives here.

    from errors import InvalidSizeError, UnknownAlgorithmError

Each class also inherits from the closest builtin so callers that only
know about ValueError / RuntimeError / IndexError still catch them.

"No path" is NOT an error: it is a normal run outcome
(see algorithms.events.Outcome.NO_PATH).
"""


class PathfinderError(Exception):
    """Base class for all engine errors."""


class InvalidSizeError(PathfinderError, ValueError):
    """Grid dimensions are malformed (each side must be an int >= 2)."""

    def __init__(self, rows, cols):
        self.rows = rows
        self.cols = cols
        super().__init__(
            f"Invalid grid size {rows}x{cols}: rows and cols must be integers >= 2 "
            f"so that start and end are distinct cells."
        )


class UnknownAlgorithmError(PathfinderError, ValueError):
    """Algorithm selector does not name a registered algorithm."""

    def __init__(self, selector):
        self.selector = selector
        super().__init__(f"Unknown algorithm: {selector!r}")


class AlreadyRunningError(PathfinderError, RuntimeError):
    """A run was requested while another one is still in flight."""

    def __init__(self, message: str = "A run is already in progress"):
        super().__init__(message)


class EmptyQueueError(PathfinderError, IndexError):
    """extract_min() on an empty priority queue."""

    def __init__(self):
        super().__init__("extract_min() from an empty priority queue")


__all__ = [
    "PathfinderError",
    "InvalidSizeError",
    "UnknownAlgorithmError",
    "AlreadyRunningError",
    "EmptyQueueError",
]
