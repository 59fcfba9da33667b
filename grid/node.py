import math
from enum import Enum
from typing import Optional, Tuple, Dict, Any


Coord = Tuple[int, int]


# ---------------------------------------------------------------------------
# Node State Enum: maps 1-to-1 with the visual encoding palette
# ---------------------------------------------------------------------------
class NodeState(Enum):
    EMPTY      = "empty"       # default slate
    VISITED    = "visited"     # blue: "finalised by the search"
    PATH       = "path"        # yellow: on the reconstructed path
    OBSTACLE   = "obstacle"    # dark grey: user-placed wall
    START      = "start"       # green: source cell
    END        = "end"         # red: goal cell


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
class Node:
    """
    Immutable identity (row, col), mutable traversal state.

    Attributes:
        row, col    : Grid coordinates, fixed at creation.
        is_obstacle : Blocks traversal.  Never true for start / end.
        is_visited  : Finalised (or stacked, for DFS) in the current run.
        is_path     : Confirmed part of the reconstructed path.
        distance    : Cost from the source; math.inf means "unreached".
        previous    : (row, col) of the predecessor on the best-known path.
                      A coordinate rather than a Node reference, so the
                      grid stays the single owner of every Node.
    """

    __slots__ = ("_row", "_col", "is_obstacle", "is_visited", "is_path", "distance", "previous")

    def __init__(self, row: int, col: int, is_obstacle: bool = False):
        self._row: int                 = row
        self._col: int                 = col
        self.is_obstacle: bool         = is_obstacle
        self.is_visited: bool          = False
        self.is_path: bool             = False
        self.distance: float           = math.inf
        self.previous: Optional[Coord] = None

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------
    @property
    def row(self) -> int:
        return self._row

    @property
    def col(self) -> int:
        return self._col

    @property
    def coord(self) -> Coord:
        return (self._row, self._col)

    # ------------------------------------------------------------------
    # State helpers
    # ------------------------------------------------------------------
    def reset(self, keep_obstacles: bool = True) -> None:
        """Wipe run state back to defaults; called between runs."""
        self.is_visited = False
        self.is_path    = False
        self.distance   = math.inf
        self.previous   = None
        if not keep_obstacles:
            self.is_obstacle = False

    def toggle_obstacle(self) -> None:
        self.is_obstacle = not self.is_obstacle

    def manhattan(self, other: "Node") -> int:
        return abs(self._row - other.row) + abs(self._col - other.col)

    def display_state(self, is_start: bool = False, is_end: bool = False) -> NodeState:
        """Colouring precedence: start > end > path > obstacle > visited > empty."""
        if is_start:
            return NodeState.START
        if is_end:
            return NodeState.END
        if self.is_path:
            return NodeState.PATH
        if self.is_obstacle:
            return NodeState.OBSTACLE
        if self.is_visited:
            return NodeState.VISITED
        return NodeState.EMPTY

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "row":        self._row,
            "col":        self._col,
            "obstacle":   self.is_obstacle,
            "visited":    self.is_visited,
            "path":       self.is_path,
            "distance":   None if math.isinf(self.distance) else self.distance,
            "previous":   list(self.previous) if self.previous is not None else None,
        }

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        flags = "".join((
            "#" if self.is_obstacle else "",
            "v" if self.is_visited else "",
            "p" if self.is_path else "",
        ))
        return f"Node({self._row},{self._col}{' ' + flags if flags else ''}, dist={self.distance})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.coord == other.coord

    def __hash__(self) -> int:
        return hash(self.coord)
